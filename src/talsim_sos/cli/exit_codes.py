"""Process exit codes of the talsim-sos CLI."""

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIG_ERROR = 2
    DOCUMENT_ERROR = 3
    SUBMISSION_ERROR = 4
    USER_INTERRUPT = 130

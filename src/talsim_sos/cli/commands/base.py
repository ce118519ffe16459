"""
Base command class for talsim-sos CLI commands.

Provides configuration loading shared by all handlers and the
:func:`cli_exception_handler` decorator that maps errors to exit codes.
"""

import functools
import logging
import os
from argparse import Namespace
from pathlib import Path
from typing import Any, Callable, ClassVar, Dict, Optional

from talsim_sos.core.exceptions import ConfigurationError, TalsimSosError
from talsim_sos.sos.config import TalsimSosConfig
from talsim_sos.sos.exceptions import (
    InsertFailure,
    MalformedDocumentError,
    MalformedTimestampError,
    NotFoundError,
    TransportError,
)

from ..console import Console, console as global_console
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.environ.get('TALSIM_SOS_DEFAULT_CONFIG', './talsim_sos.yaml')

_EXIT_CODES = (
    (ConfigurationError, ExitCode.CONFIG_ERROR),
    ((NotFoundError, MalformedDocumentError, MalformedTimestampError), ExitCode.DOCUMENT_ERROR),
    ((InsertFailure, TransportError), ExitCode.SUBMISSION_ERROR),
)


def exit_code_for(exc: BaseException) -> ExitCode:
    for error_types, code in _EXIT_CODES:
        if isinstance(exc, error_types):
            return code
    return ExitCode.GENERAL_ERROR


def cli_exception_handler(func: Callable[[Namespace], int]) -> Callable[[Namespace], int]:
    """Report talsim-sos errors on the console and return the matching exit code."""

    @functools.wraps(func)
    def wrapper(args: Namespace) -> int:
        try:
            return func(args)
        except KeyboardInterrupt:
            BaseCommand._console.warning("Interrupted by user")
            return ExitCode.USER_INTERRUPT
        except TalsimSosError as exc:
            logger.debug("Command %s failed", func.__name__, exc_info=True)
            BaseCommand._console.error(str(exc))
            return exit_code_for(exc)

    return wrapper


class BaseCommand:
    """
    Base class for all CLI command handlers.

    Attributes:
        _console: Shared console instance for all commands
    """

    _console: ClassVar[Console] = global_console

    @classmethod
    def set_console(cls, console: Console) -> None:
        """Set the console shared by every command and the error handler."""
        BaseCommand._console = console

    @staticmethod
    def get_config_path(args: Namespace) -> Optional[str]:
        """Return ``--config`` if given, else the default path when that file exists."""
        if getattr(args, 'config', None):
            return args.config
        if Path(DEFAULT_CONFIG_PATH).is_file():
            return DEFAULT_CONFIG_PATH
        return None

    @staticmethod
    def load_config(args: Namespace, overrides: Optional[Dict[str, Any]] = None) -> TalsimSosConfig:
        """Load the converter configuration for a command.

        Raises:
            ConfigurationError: If an explicit config file is missing or invalid
        """
        config_path = BaseCommand.get_config_path(args)
        if config_path is not None:
            logger.debug("Loading configuration from %s", config_path)
        return TalsimSosConfig.from_file(
            Path(config_path) if config_path else None,
            overrides=overrides,
        )

"""CLI command handlers."""

from .base import BaseCommand, cli_exception_handler
from .sos_commands import SOSCommands

__all__ = ["BaseCommand", "SOSCommands", "cli_exception_handler"]

"""
Validation utilities for talsim-sos CLI arguments.

All validators return Result[T] for consistent error handling.
"""

from pathlib import Path
from urllib.parse import urlparse

from talsim_sos.core.result import Result, ValidationError


def validate_input_file(file_path: str) -> Result[Path]:
    """
    Validate that the TALSIM result file exists.

    Returns:
        Result containing Path if valid, or ValidationError if not found.
    """
    path = Path(file_path)
    if not path.exists():
        return Result.err(ValidationError(
            field="input",
            message=f"Input file not found: {file_path}",
            value=file_path,
        ))
    if not path.is_file():
        return Result.err(ValidationError(
            field="input",
            message=f"Input path is not a file: {file_path}",
            value=file_path,
        ))
    return Result.ok(path)


def validate_sos_url(url: str) -> Result[str]:
    """
    Validate that the SOS endpoint is an absolute http(s) URL.

    Example:
        >>> validate_sos_url("http://localhost:8080/52n-sos/service").is_ok
        True
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return Result.err(ValidationError(
            field="sos_url",
            message="SOS URL must be an absolute http(s) URL",
            value=url,
            suggestion="Use a URL like http://localhost:8080/52n-sos/service",
        ))
    return Result.ok(url)

"""
Authorization token lookup for the transactional SOS.

Resolution order:
1. ``SOS_AUTH_TOKEN`` (config file, ``TALSIM_SOS_SOS_AUTH_TOKEN`` or CLI override)
2. ``SOS_TOKEN_FILE``: YAML file with a ``token`` key, kept outside the
   project configuration so that it can live in a protected location
"""

import logging
from pathlib import Path

from talsim_sos.core.config import read_yaml_mapping
from talsim_sos.core.exceptions import ConfigurationError

from .config import TalsimSosConfig

logger = logging.getLogger(__name__)


def read_token_file(path: Path) -> str:
    """Return the ``token`` entry of a YAML token file."""
    data = read_yaml_mapping(Path(path))
    token = data.get("token")
    if token is None or not str(token).strip():
        raise ConfigurationError(f"Token file {path} has no 'token' entry")
    return str(token).strip()


def resolve_auth_token(config: TalsimSosConfig) -> str:
    """Return the authorization token configured for this run.

    Raises:
        ConfigurationError: If no token is configured or the token file is unusable
    """
    if config.auth_token:
        logger.debug("Using authorization token from configuration")
        return config.auth_token.strip()
    if config.token_file:
        logger.debug("Reading authorization token from %s", config.token_file)
        return read_token_file(Path(config.token_file))
    raise ConfigurationError(
        "No SOS authorization token configured; set SOS_AUTH_TOKEN or SOS_TOKEN_FILE"
    )

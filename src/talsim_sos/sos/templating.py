"""
Request template rendering and loading.

A template is an immutable string containing ``%NAME%`` placeholders;
rendering is a pure literal substitution. Templates come from a configured
file or from the defaults packaged under ``talsim_sos/sos/templates``.
"""

import logging
import re
from functools import lru_cache
from importlib.resources import files
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from talsim_sos.core.exceptions import ConfigurationError

from .exceptions import PlaceholderCollisionError

logger = logging.getLogger(__name__)

ParameterMap = Dict[str, str]

INSERT_SENSOR = "insert_sensor"
INSERT_OBSERVATION = "insert_observation"

PACKAGED_TEMPLATES = {
    INSERT_SENSOR: "InsertSensor_template.xml",
    INSERT_OBSERVATION: "InsertObservation_template.xml",
}

_PLACEHOLDER_RE = re.compile(r"%[A-Z0-9_]+%")


@lru_cache(maxsize=32)
def _check_keys(keys: Tuple[str, ...]) -> None:
    for key in keys:
        for other in keys:
            if key != other and key in other:
                raise PlaceholderCollisionError(
                    f"Placeholder {key!r} is a substring of {other!r}; "
                    "substitution order would corrupt the rendered request"
                )


def check_placeholder_vocabulary(keys: Iterable[str]) -> None:
    """Raise PlaceholderCollisionError if any key is a proper substring of another."""
    _check_keys(tuple(sorted(set(keys))))


def render(template: str, parameters: Mapping[str, str]) -> str:
    """Replace every literal occurrence of each placeholder with its value.

    Placeholders absent from ``parameters`` are left untouched. Values are
    inserted as-is; no escaping is applied.
    """
    check_placeholder_vocabulary(parameters.keys())
    rendered = template
    for placeholder, value in parameters.items():
        rendered = rendered.replace(placeholder, value)
    return rendered


def find_placeholders(text: str) -> List[str]:
    """Return the ``%NAME%`` tokens still present in ``text``, in order of appearance."""
    return _PLACEHOLDER_RE.findall(text)


def load_template(kind: str, path: Optional[str] = None) -> str:
    """Load a request template.

    Args:
        kind: ``"insert_sensor"`` or ``"insert_observation"``
        path: Optional template file; the packaged default is used when None

    Raises:
        ConfigurationError: If the kind is unknown or the file cannot be read
    """
    if kind not in PACKAGED_TEMPLATES:
        raise ConfigurationError(
            f"Unknown template kind {kind!r}; expected one of {sorted(PACKAGED_TEMPLATES)}"
        )

    try:
        if path:
            text = Path(path).read_text(encoding="utf-8")
            logger.debug("Loaded %s template from %s", kind, path)
        else:
            resource = files("talsim_sos.sos") / "templates" / PACKAGED_TEMPLATES[kind]
            text = resource.read_text(encoding="utf-8")
            logger.debug("Loaded packaged %s template", kind)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read {kind} template: {exc}") from exc

    if not text.strip():
        raise ConfigurationError(f"The {kind} template is empty")
    return text

"""
Observable property catalog.

Maps the five TALSIM parameter codes to the observable property published in
the SOS and to the InsertSensor placeholders reserved for that property.

Unknown codes resolve to the inflow (``1ZU``) entry. Existing SOS deployments
depend on that default, so :func:`lookup` keeps it and reports the fallback to
the caller instead of rejecting the code.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from .placeholders import SensorPlaceholders


class ParameterCode(str, Enum):
    """TALSIM ``parameterId`` values with a dedicated observable property."""
    INFLOW = "1ZU"
    VOLUME = "VOL"
    WATER_LEVEL = "WSP"
    RELEASE = "QA1"
    SPILLWAY = "QH1"


@dataclass(frozen=True)
class ObservableProperty:
    """Observable property of one parameter code.

    ``name`` and ``value`` are both rendered into the sensor description;
    ``value`` is also the observable property of each observation.
    """
    code: ParameterCode
    name: str
    value: str
    meaning: str

    @property
    def placeholders(self) -> Tuple[str, str, str]:
        """(name, value, unit) tokens in the InsertSensor template."""
        return SensorPlaceholders.output_property(self.code.value)


CATALOG: Dict[ParameterCode, ObservableProperty] = {
    ParameterCode.INFLOW: ObservableProperty(ParameterCode.INFLOW, "Zufluss", "Zufluss", "inflow"),
    ParameterCode.VOLUME: ObservableProperty(ParameterCode.VOLUME, "Volumen", "Volumen", "storage volume"),
    ParameterCode.WATER_LEVEL: ObservableProperty(
        ParameterCode.WATER_LEVEL, "Wasserstand", "Wasserstand", "water level"
    ),
    ParameterCode.RELEASE: ObservableProperty(ParameterCode.RELEASE, "Abgabe", "Abgabe", "release"),
    ParameterCode.SPILLWAY: ObservableProperty(
        ParameterCode.SPILLWAY, "Hochwasserentlastung", "Hochwasserentlastung", "flood spillway overflow"
    ),
}

DEFAULT_CODE = ParameterCode.INFLOW


def resolve_code(parameter_id: str) -> Optional[ParameterCode]:
    """Return the ParameterCode for a raw ``parameterId``, or None if unknown."""
    try:
        return ParameterCode(parameter_id)
    except ValueError:
        return None


def lookup(parameter_id: str) -> Tuple[ObservableProperty, bool]:
    """Resolve a ``parameterId`` to its observable property.

    Returns:
        ``(property, fell_back)`` where ``fell_back`` is True when the code was
        unknown and the ``1ZU`` entry was returned instead.
    """
    code = resolve_code(parameter_id)
    if code is None:
        return CATALOG[DEFAULT_CODE], True
    return CATALOG[code], False

"""
Placeholder vocabulary of the SOS request templates.

Every token is delimited by ``%`` on both sides, so no token can be a proper
substring of another; :func:`talsim_sos.sos.templating.check_placeholder_vocabulary`
enforces this for every map that gets rendered.
"""

from typing import Tuple


def _token(name: str) -> str:
    return f"%{name}%"


class SensorPlaceholders:
    """Tokens of the InsertSensor template."""

    STATION_IDENTIFIER = _token("STATION_IDENTIFIER")
    OFFERING_IDENTIFIER_NAME = _token("OFFERING_IDENTIFIER_NAME")
    OFFERING_IDENTIFIER_VALUE = _token("OFFERING_IDENTIFIER_VALUE")
    POSITION_LON_IN_DEG = _token("POSITION_LON_IN_DEG")
    POSITION_LAT_IN_DEG = _token("POSITION_LAT_IN_DEG")
    POSITION_ALT_IN_METERS = _token("POSITION_ALT_IN_METERS")
    OBSERVABLE_PROPERTY_INPUT_NAME = _token("OBSERVABLE_PROPERTY_INPUT_NAME")
    OBSERVABLE_PROPERTY_INPUT_VALUE = _token("OBSERVABLE_PROPERTY_INPUT_VALUE")
    FEATURE_OF_INTEREST_IDENTIFIER = _token("FEATURE_OF_INTEREST_IDENTIFIER")

    @staticmethod
    def output_property(code: str) -> Tuple[str, str, str]:
        """Return the (name, value, unit) tokens for a parameter code."""
        return (
            _token(f"OBSERVABLE_PROPERTY_OUTPUT_NAME_{code}"),
            _token(f"OBSERVABLE_PROPERTY_OUTPUT_VALUE_{code}"),
            _token(f"UOM_DEFINITION_{code}"),
        )


class ObservationPlaceholders:
    """Tokens of the InsertObservation template."""

    OFFERING_IDENTIFIER = _token("OFFERING_IDENTIFIER")
    OBSERVATION_IDENTIFIER = _token("OBSERVATION_IDENTIFIER")
    PHENOMENON_TIME = _token("PHENOMENON_TIME")
    PROCEDURE_IDENTIFIER = _token("PROCEDURE_IDENTIFIER")
    OBSERVABLE_PROPERTY = _token("OBSERVABLE_PROPERTY")
    FEATURE_OF_INTEREST_SAMPLING = _token("FEATURE_OF_INTEREST_IDENTIFIER_SAMPLING_FEATURE")
    FEATURE_OF_INTEREST_SAMPLED = _token("FEATURE_OF_INTEREST_IDENTIFIER_SAMPLED_FEATURE")
    SAMPLING_FEATURE_LON_IN_DEG = _token("SAMPLING_FEATURE_LON_IN_DEG")
    SAMPLING_FEATURE_LAT_IN_DEG = _token("SAMPLING_FEATURE_LAT_IN_DEG")
    UOM_NAME = _token("UOM_NAME")
    RESULT_VALUE = _token("RESULT_VALUE")

"""
SOS response classification.

A response counts as successful when its body contains the operation's
response element name. The body is not parsed or validated against a schema.
"""

from talsim_sos.core.result import Result, ValidationError

INSERT_SENSOR_MARKER = "InsertSensorResponse"
INSERT_OBSERVATION_MARKER = "InsertObservationResponse"


def _check_marker(body: str, marker: str, operation: str) -> Result[str]:
    if body and marker in body:
        return Result.ok(body)
    return Result.err(ValidationError(
        field=operation,
        message=f"Response does not contain {marker}",
        value=body,
    ))


def check_sensor_response(body: str) -> Result[str]:
    return _check_marker(body, INSERT_SENSOR_MARKER, "InsertSensor")


def check_observation_response(body: str) -> Result[str]:
    return _check_marker(body, INSERT_OBSERVATION_MARKER, "InsertObservation")

"""
Parameter extraction for SOS request templates.

One :class:`ParameterExtractor` builds the placeholder map for both request
kinds, selected by the context it is given:

- :class:`DocumentContext`: the whole document, for InsertSensor
- :class:`EventContext`: one header/event pair, for InsertObservation

Maps are plain dicts built fresh for every request.
"""

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Union

from talsim_sos.core.exceptions import require

from .catalog import ObservableProperty, lookup
from .config import SOSConstants
from .document import Event, Header, SimulationDocument, read_header
from .exceptions import MalformedDocumentError, MalformedTimestampError
from .placeholders import ObservationPlaceholders as OP
from .placeholders import SensorPlaceholders as SP
from .templating import ParameterMap

logger = logging.getLogger(__name__)

MAX_TIME_ZONE_OFFSET_HOURS = 24.0
_DIGITS = re.compile(r"\d+", re.ASCII)


@dataclass(frozen=True)
class DocumentContext:
    document: SimulationDocument


@dataclass(frozen=True)
class EventContext:
    header: Header
    event: Event
    time_zone: str


ExtractionContext = Union[DocumentContext, EventContext]


# ---------------------------------------------------------------------------
# Timestamps and identifiers
# ---------------------------------------------------------------------------

def _split_ints(text: str, separator: str, label: str) -> List[int]:
    parts = text.strip().split(separator)
    if len(parts) != 3:
        raise MalformedTimestampError(
            f"Event {label} {text!r} must have three '{separator}'-separated components"
        )
    if not all(_DIGITS.fullmatch(part) for part in parts):
        raise MalformedTimestampError(f"Event {label} {text!r} has a non-integer component")
    return [int(part) for part in parts]


def parse_time_zone_offset(time_zone: str) -> float:
    """Parse a PI ``timeZone`` value (hours east of UTC, e.g. ``"1.0"``)."""
    try:
        offset = float(time_zone)
    except (TypeError, ValueError) as exc:
        raise MalformedTimestampError(f"Unparseable time zone offset {time_zone!r}") from exc
    if not math.isfinite(offset) or abs(offset) > MAX_TIME_ZONE_OFFSET_HOURS:
        raise MalformedTimestampError(f"Time zone offset {time_zone!r} is outside +/-24 hours")
    return offset


def compose_phenomenon_time(
    date: str,
    time: str,
    time_zone: str = "0.0",
    apply_offset: bool = False,
) -> str:
    """Combine an event date and time into an ISO-8601 UTC instant.

    With ``apply_offset=False`` the wall-clock value is labelled UTC whatever
    ``time_zone`` says, which is what downstream SOS consumers currently
    expect. With ``apply_offset=True`` the document offset is subtracted first.

    Example:
        >>> compose_phenomenon_time("2014-02-10", "00:15:00", "1.0")
        '2014-02-10T00:15:00.000Z'
    """
    year, month, day = _split_ints(date, "-", "date")
    hour, minute, second = _split_ints(time, ":", "time")
    try:
        instant = datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    except ValueError as exc:
        raise MalformedTimestampError(f"Invalid event timestamp {date} {time}: {exc}") from exc

    if apply_offset:
        offset = parse_time_zone_offset(time_zone)
        try:
            instant -= timedelta(hours=offset)
        except OverflowError as exc:
            raise MalformedTimestampError(
                f"Event timestamp {date} {time} shifted by {offset} hours is out of range"
            ) from exc

    return (
        f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d}"
        f"T{instant.hour:02d}:{instant.minute:02d}:{instant.second:02d}.000Z"
    )


def generate_observation_identifier(station: str, observable_property: str, phenomenon_time: str) -> str:
    """``<station>_<observableProperty>_<phenomenonTime>``"""
    return f"{station}_{observable_property}_{phenomenon_time}"


# ---------------------------------------------------------------------------
# Extractor
# ---------------------------------------------------------------------------

class ParameterExtractor:
    """Builds placeholder maps from a document or an event context."""

    def __init__(self, constants: Optional[SOSConstants] = None, apply_time_zone_offset: bool = False):
        self.constants = constants or SOSConstants()
        self.apply_time_zone_offset = apply_time_zone_offset

    def build(self, context: ExtractionContext) -> ParameterMap:
        if isinstance(context, DocumentContext):
            return self.sensor_parameters(context.document)
        if isinstance(context, EventContext):
            return self.observation_parameters(context.header, context.event, context.time_zone)
        raise TypeError(f"Unsupported extraction context: {type(context).__name__}")

    def resolve_property(self, header: Header) -> ObservableProperty:
        prop, fell_back = lookup(header.parameter_id)
        if fell_back:
            # Unknown codes are published as inflow; keep it visible in the logs.
            logger.warning(
                "Unknown parameterId %r for station %r, publishing it as %s (%s)",
                header.parameter_id, header.station_name, prop.value, prop.code.value,
            )
        return prop

    def sensor_parameters(self, document: SimulationDocument) -> ParameterMap:
        """Placeholder map for the InsertSensor request."""
        series_nodes = document.series()
        require(bool(series_nodes), "Document contains no <series> elements", MalformedDocumentError)

        headers = [read_header(series) for series in series_nodes]
        params: ParameterMap = {}

        for header in headers:
            prop = self.resolve_property(header)
            name_key, value_key, uom_key = prop.placeholders
            params[name_key] = prop.name
            params[value_key] = prop.value
            params[uom_key] = header.units

        station = headers[0].station_name
        other_stations = sorted({h.station_name for h in headers} - {station})
        if other_stations:
            logger.warning(
                "Document has series for several stations; registering %r only (also found: %s)",
                station, ", ".join(other_stations),
            )

        position = self.constants.station_position
        params[SP.OBSERVABLE_PROPERTY_INPUT_NAME] = self.constants.input_property_name
        params[SP.OBSERVABLE_PROPERTY_INPUT_VALUE] = self.constants.input_property_value
        params[SP.STATION_IDENTIFIER] = station
        params[SP.POSITION_LON_IN_DEG] = position.longitude
        params[SP.POSITION_LAT_IN_DEG] = position.latitude
        params[SP.POSITION_ALT_IN_METERS] = position.altitude
        params[SP.FEATURE_OF_INTEREST_IDENTIFIER] = self.constants.feature_of_interest_sampling
        params[SP.OFFERING_IDENTIFIER_NAME] = self.constants.offering_name
        params[SP.OFFERING_IDENTIFIER_VALUE] = self.constants.offering_value

        logger.debug("Sensor parameters: %s", params)
        return params

    def observation_parameters(self, header: Header, event: Event, time_zone: str) -> ParameterMap:
        """Placeholder map for the InsertObservation request of one event."""
        prop = self.resolve_property(header)
        phenomenon_time = compose_phenomenon_time(
            event.date, event.time, time_zone, apply_offset=self.apply_time_zone_offset
        )
        position = self.constants.station_position

        return {
            OP.PROCEDURE_IDENTIFIER: header.station_name,
            OP.PHENOMENON_TIME: phenomenon_time,
            OP.UOM_NAME: header.units,
            OP.OBSERVABLE_PROPERTY: prop.value,
            OP.SAMPLING_FEATURE_LON_IN_DEG: position.longitude,
            OP.SAMPLING_FEATURE_LAT_IN_DEG: position.latitude,
            OP.FEATURE_OF_INTEREST_SAMPLING: self.constants.feature_of_interest_sampling,
            OP.FEATURE_OF_INTEREST_SAMPLED: self.constants.feature_of_interest_sampled,
            OP.OFFERING_IDENTIFIER: self.constants.offering_name,
            OP.OBSERVATION_IDENTIFIER: generate_observation_identifier(
                header.station_name, prop.value, phenomenon_time
            ),
            OP.RESULT_VALUE: event.value,
        }


def extract_sensor_parameters(
    document: SimulationDocument,
    constants: Optional[SOSConstants] = None,
) -> ParameterMap:
    return ParameterExtractor(constants).build(DocumentContext(document))


def extract_observation_parameters(
    header: Header,
    event: Event,
    time_zone: str,
    constants: Optional[SOSConstants] = None,
    apply_time_zone_offset: bool = False,
) -> ParameterMap:
    extractor = ParameterExtractor(constants, apply_time_zone_offset=apply_time_zone_offset)
    return extractor.build(EventContext(header, event, time_zone))

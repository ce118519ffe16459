"""
Builds rendered SOS requests from a TALSIM document.
"""

import logging
import xml.etree.ElementTree as ET  # nosec B405 - element type only
from typing import Iterator, List, Optional

from .document import SimulationDocument, all_event_nodes, read_event, read_header
from .parameters import DocumentContext, EventContext, ParameterExtractor
from .templating import render

logger = logging.getLogger(__name__)


def build_sensor_request(
    document: SimulationDocument,
    template: str,
    extractor: Optional[ParameterExtractor] = None,
) -> str:
    """Render the single InsertSensor request for ``document``."""
    extractor = extractor or ParameterExtractor()
    return render(template, extractor.build(DocumentContext(document)))


def iter_observation_requests_for_series(
    document: SimulationDocument,
    series: ET.Element,
    template: str,
    extractor: Optional[ParameterExtractor] = None,
) -> Iterator[str]:
    """Yield one rendered InsertObservation request per event, in document order.

    The header and the document time zone are read once, before the first
    request; each event is only read when its request is requested.
    """
    extractor = extractor or ParameterExtractor()
    header = read_header(series)
    time_zone = document.time_zone()
    for event_node in all_event_nodes(series):
        event = read_event(event_node)
        yield render(template, extractor.build(EventContext(header, event, time_zone)))


def build_observation_requests_for_series(
    document: SimulationDocument,
    series: ET.Element,
    template: str,
    extractor: Optional[ParameterExtractor] = None,
) -> List[str]:
    """All InsertObservation requests of one series (one per event)."""
    requests = list(iter_observation_requests_for_series(document, series, template, extractor))
    logger.debug("Built %d observation requests", len(requests))
    return requests

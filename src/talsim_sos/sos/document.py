"""
TALSIM result document reader.

TALSIM writes its simulation results in the Delft-FEWS PI-XML timeseries
layout::

    <TimeSeries xmlns="http://www.wldelft.nl/fews/PI">
        <timeZone>1.0</timeZone>
        <series>
            <header>
                <parameterId>VOL</parameterId>
                <locationId>TB01</locationId>
                <stationName>Talbecken</stationName>
                <units>hm3</units>
                <missVal>-999.0</missVal>
            </header>
            <event date="2014-02-10" time="00:15:00" value="12.5"/>
        </series>
    </TimeSeries>

The accessors below match tags by local name so that documents with and
without the PI default namespace are handled the same way. Every lookup that
can miss raises :class:`NotFoundError`; none returns None.
"""

import logging
import xml.etree.ElementTree as ET  # nosec B405 - parsing trusted TALSIM result files
from dataclasses import dataclass
from pathlib import Path
from typing import IO, List, Optional, Union

from .exceptions import MalformedDocumentError, NotFoundError

logger = logging.getLogger(__name__)

SERIES_TAG = "series"
HEADER_TAG = "header"
EVENT_TAG = "event"
TIME_ZONE_TAG = "timeZone"

DocumentSource = Union[str, Path, bytes, IO]


def _strip_ns(tag: str) -> str:
    """Remove namespace prefix from tag."""
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------

def find_child_by_tag(node: ET.Element, tag: str) -> ET.Element:
    """Return the first direct child of ``node`` named ``tag``."""
    for child in node:
        if _strip_ns(child.tag) == tag:
            return child
    raise NotFoundError(f"<{_strip_ns(node.tag)}> has no <{tag}> child")


def find_attribute(node: ET.Element, name: str) -> str:
    """Return attribute ``name`` of ``node``."""
    value = node.get(name)
    if value is None:
        raise NotFoundError(f"<{_strip_ns(node.tag)}> has no '{name}' attribute")
    return value


def child_text(node: ET.Element, tag: str) -> str:
    """Return the stripped text of the required child ``tag``."""
    return (find_child_by_tag(node, tag).text or "").strip()


def _root_of(doc: Union['SimulationDocument', ET.Element]) -> ET.Element:
    return doc.root if isinstance(doc, SimulationDocument) else doc


def find_first_by_tag(doc: Union['SimulationDocument', ET.Element], tag: str) -> ET.Element:
    """Return the first element named ``tag`` anywhere in the document, root included."""
    for element in _root_of(doc).iter():
        if _strip_ns(element.tag) == tag:
            return element
    raise NotFoundError(f"Document contains no <{tag}> element")


def all_series_nodes(doc: Union['SimulationDocument', ET.Element]) -> List[ET.Element]:
    """Return every ``series`` element in document order."""
    return [el for el in _root_of(doc).iter() if _strip_ns(el.tag) == SERIES_TAG]


def all_event_nodes(series: ET.Element) -> List[ET.Element]:
    """Return the ``event`` children of one series in document order."""
    return [child for child in series if _strip_ns(child.tag) == EVENT_TAG]


# ---------------------------------------------------------------------------
# Typed records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Header:
    """Metadata of one series."""
    parameter_id: str
    station_name: str
    units: str
    location_id: Optional[str] = None
    missing_value: Optional[str] = None


@dataclass(frozen=True)
class Event:
    """One timestamped value; ``value`` is kept verbatim."""
    date: str
    time: str
    value: str


def _optional_text(node: ET.Element, tag: str) -> Optional[str]:
    try:
        return child_text(node, tag)
    except NotFoundError:
        return None


def read_header(series: ET.Element) -> Header:
    """Read the ``header`` of a series.

    Raises:
        MalformedDocumentError: If the header or one of ``parameterId``,
            ``stationName``, ``units`` is missing
    """
    try:
        header = find_child_by_tag(series, HEADER_TAG)
        return Header(
            parameter_id=child_text(header, "parameterId"),
            station_name=child_text(header, "stationName"),
            units=child_text(header, "units"),
            location_id=_optional_text(header, "locationId"),
            missing_value=_optional_text(header, "missVal"),
        )
    except NotFoundError as exc:
        raise MalformedDocumentError(f"Incomplete series header: {exc.message}") from exc


def read_event(event: ET.Element) -> Event:
    """Read the ``date``, ``time`` and ``value`` attributes of an event."""
    return Event(
        date=find_attribute(event, "date"),
        time=find_attribute(event, "time"),
        value=find_attribute(event, "value"),
    )


class SimulationDocument:
    """Parsed TALSIM result document (read-only after parsing)."""

    def __init__(self, root: ET.Element, source: Optional[str] = None) -> None:
        self.root = root
        self.source = source

    def series(self) -> List[ET.Element]:
        return all_series_nodes(self)

    def time_zone(self) -> str:
        """Document-wide ``timeZone`` text (first occurrence)."""
        return (find_first_by_tag(self, TIME_ZONE_TAG).text or "").strip()

    def __repr__(self) -> str:
        return f"SimulationDocument(source={self.source!r}, series={len(self.series())})"


def parse_talsim_document(source: DocumentSource) -> SimulationDocument:
    """Parse a TALSIM result document.

    Args:
        source: File path, open file object, or the XML content as bytes

    Raises:
        MalformedDocumentError: If the content is not well-formed XML
        NotFoundError: If ``source`` is a path that does not exist
    """
    label = None
    try:
        if isinstance(source, bytes):
            root = ET.fromstring(source)  # nosec B314
        elif isinstance(source, (str, Path)):
            path = Path(source)
            label = str(path)
            if not path.is_file():
                raise NotFoundError(f"TALSIM result file not found: {path}")
            root = ET.parse(str(path)).getroot()  # nosec B314
        else:
            label = getattr(source, "name", None)
            root = ET.parse(source).getroot()  # nosec B314
    except ET.ParseError as exc:
        raise MalformedDocumentError(f"Malformed TALSIM XML in {label or '<input>'}: {exc}") from exc

    document = SimulationDocument(root, source=label)
    logger.debug("Parsed %s", document)
    return document

"""
Fixtures and fakes for SOS converter tests.

Provides:
- Sample TALSIM result documents (PI-XML layout) written to ``tmp_path``
- Minimal request templates using the full placeholder vocabulary
- RecordingTransport: in-memory transport that records every POST
- MockSessionFactory: ``requests.Session`` mocks for transport tests
- mock_console: MagicMock console for CLI handler tests
"""

import textwrap
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
import requests

from talsim_sos.cli.commands.base import BaseCommand
from talsim_sos.sos.document import parse_talsim_document
from talsim_sos.sos.transport import TransportResponse

SENSOR_OK_BODY = (
    '<swes:InsertSensorResponse xmlns:swes="http://www.opengis.net/swes/2.0">'
    '<swes:assignedProcedure>Talbecken</swes:assignedProcedure>'
    '</swes:InsertSensorResponse>'
)
OBSERVATION_OK_BODY = (
    '<sos:InsertObservationResponse xmlns:sos="http://www.opengis.net/sos/2.0"/>'
)
EXCEPTION_REPORT_BODY = (
    '<ows:ExceptionReport xmlns:ows="http://www.opengis.net/ows/1.1" version="2.0.0">'
    '<ows:Exception exceptionCode="InvalidParameterValue"/>'
    '</ows:ExceptionReport>'
)

TWO_SERIES_XML = textwrap.dedent("""\
    <?xml version="1.0" encoding="UTF-8"?>
    <TimeSeries xmlns="http://www.wldelft.nl/fews/PI" version="1.2">
        <timeZone>1.0</timeZone>
        <series>
            <header>
                <type>instantaneous</type>
                <locationId>TB01</locationId>
                <parameterId>VOL</parameterId>
                <startDate date="2014-02-10" time="00:15:00"/>
                <endDate date="2014-02-10" time="00:45:00"/>
                <missVal>-999.0</missVal>
                <stationName>Talbecken</stationName>
                <units>hm3</units>
            </header>
            <event date="2014-02-10" time="00:15:00" value="12.5"/>
            <event date="2014-02-10" time="00:30:00" value="12.75"/>
            <event date="2014-02-10" time="00:45:00" value="13.0"/>
        </series>
        <series>
            <header>
                <type>instantaneous</type>
                <locationId>TB01</locationId>
                <parameterId>WSP</parameterId>
                <startDate date="2014-02-10" time="00:15:00"/>
                <endDate date="2014-02-10" time="00:45:00"/>
                <missVal>-999.0</missVal>
                <stationName>Talbecken</stationName>
                <units>m+NN</units>
            </header>
            <event date="2014-02-10" time="00:15:00" value="301.20"/>
            <event date="2014-02-10" time="00:30:00" value="301.25"/>
            <event date="2014-02-10" time="00:45:00" value="-999.0"/>
        </series>
    </TimeSeries>
""")

UNKNOWN_CODE_XML = textwrap.dedent("""\
    <?xml version="1.0" encoding="UTF-8"?>
    <TimeSeries>
        <timeZone>0.0</timeZone>
        <series>
            <header>
                <parameterId>XYZ</parameterId>
                <stationName>Talbecken</stationName>
                <units>m3/s</units>
            </header>
            <event date="2014-02-10" time="00:15:00" value="4.2"/>
        </series>
    </TimeSeries>
""")

NO_SERIES_XML = textwrap.dedent("""\
    <?xml version="1.0" encoding="UTF-8"?>
    <TimeSeries xmlns="http://www.wldelft.nl/fews/PI">
        <timeZone>0.0</timeZone>
    </TimeSeries>
""")

SENSOR_TEMPLATE = textwrap.dedent("""\
    <InsertSensor station="%STATION_IDENTIFIER%">
      <offering name="%OFFERING_IDENTIFIER_NAME%">%OFFERING_IDENTIFIER_VALUE%</offering>
      <position lon="%POSITION_LON_IN_DEG%" lat="%POSITION_LAT_IN_DEG%" alt="%POSITION_ALT_IN_METERS%"/>
      <input name="%OBSERVABLE_PROPERTY_INPUT_NAME%" value="%OBSERVABLE_PROPERTY_INPUT_VALUE%"/>
      <foi>%FEATURE_OF_INTEREST_IDENTIFIER%</foi>
      <output name="%OBSERVABLE_PROPERTY_OUTPUT_NAME_VOL%" value="%OBSERVABLE_PROPERTY_OUTPUT_VALUE_VOL%" uom="%UOM_DEFINITION_VOL%"/>
      <output name="%OBSERVABLE_PROPERTY_OUTPUT_NAME_WSP%" value="%OBSERVABLE_PROPERTY_OUTPUT_VALUE_WSP%" uom="%UOM_DEFINITION_WSP%"/>
    </InsertSensor>
""")

OBSERVATION_TEMPLATE = textwrap.dedent("""\
    <InsertObservation offering="%OFFERING_IDENTIFIER%">
      <id>%OBSERVATION_IDENTIFIER%</id>
      <time>%PHENOMENON_TIME%</time>
      <procedure>%PROCEDURE_IDENTIFIER%</procedure>
      <property>%OBSERVABLE_PROPERTY%</property>
      <foi sampling="%FEATURE_OF_INTEREST_IDENTIFIER_SAMPLING_FEATURE%" sampled="%FEATURE_OF_INTEREST_IDENTIFIER_SAMPLED_FEATURE%"/>
      <point lon="%SAMPLING_FEATURE_LON_IN_DEG%" lat="%SAMPLING_FEATURE_LAT_IN_DEG%"/>
      <result uom="%UOM_NAME%">%RESULT_VALUE%</result>
    </InsertObservation>
""")


# =============================================================================
# Transport fakes
# =============================================================================

def marker_responder(body: str) -> TransportResponse:
    """Answer like a healthy SOS: sensor and observation markers by request kind."""
    if "<InsertSensor" in body or "swes:InsertSensor" in body:
        return TransportResponse(200, SENSOR_OK_BODY)
    return TransportResponse(200, OBSERVATION_OK_BODY)


@dataclass
class RecordingTransport:
    """Transport that records POSTs and answers through ``responder``."""

    responder: Callable[[str], TransportResponse] = marker_responder
    posts: List[Dict] = field(default_factory=list)

    def post(self, url: str, body: str, headers: Dict[str, str]) -> TransportResponse:
        self.posts.append({"url": url, "body": body, "headers": dict(headers)})
        return self.responder(body)

    @property
    def bodies(self) -> List[str]:
        return [p["body"] for p in self.posts]


def failing_on_post(n: int, body: str = EXCEPTION_REPORT_BODY, status_code: int = 400):
    """Responder answering the ``n``-th POST (1-based) with an error body."""
    calls = {"count": 0}

    def responder(request: str) -> TransportResponse:
        calls["count"] += 1
        if calls["count"] == n:
            return TransportResponse(status_code, body)
        return marker_responder(request)

    return responder


class MockSessionFactory:
    """Create mock ``requests.Session`` objects."""

    @staticmethod
    def create(status_code: int = 200, text: str = OBSERVATION_OK_BODY,
               side_effect: Optional[Exception] = None) -> MagicMock:
        session = MagicMock(spec=requests.Session)
        if side_effect is not None:
            session.post.side_effect = side_effect
        else:
            response = MagicMock()
            response.status_code = status_code
            response.text = text
            response.encoding = "utf-8"
            session.post.return_value = response
        return session


# =============================================================================
# Document fixtures
# =============================================================================

@pytest.fixture
def two_series_xml_path(tmp_path):
    """Write the two-series sample document and return its path."""
    path = tmp_path / "talsim_result.xml"
    path.write_text(TWO_SERIES_XML, encoding="utf-8")
    return path


@pytest.fixture
def two_series_document(two_series_xml_path):
    return parse_talsim_document(two_series_xml_path)


@pytest.fixture
def unknown_code_document():
    return parse_talsim_document(UNKNOWN_CODE_XML.encode("utf-8"))


@pytest.fixture
def sensor_template():
    return SENSOR_TEMPLATE


@pytest.fixture
def observation_template():
    return OBSERVATION_TEMPLATE


@pytest.fixture
def recording_transport():
    return RecordingTransport()


@pytest.fixture
def token_file(tmp_path):
    """Write a YAML token file and return its path."""
    path = tmp_path / "sos_token.yaml"
    path.write_text("token: secret-token-123\n", encoding="utf-8")
    return path


# =============================================================================
# CLI fixtures
# =============================================================================

@pytest.fixture
def mock_console():
    """Swap the shared CLI console for a MagicMock and restore it afterwards."""
    original = BaseCommand._console
    console = MagicMock()
    BaseCommand.set_console(console)
    yield console
    BaseCommand.set_console(original)


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory so no ./talsim_sos.yaml is picked up."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir

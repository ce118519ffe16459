"""
SOS submission orchestrator.

Drives one submission run over a parsed TALSIM document:
  1. Register the sensor (one InsertSensor request)
  2. For each series, for each event: insert one observation
  3. Stop at the first failure

Requests are sent strictly one after another; observation requests are
rendered lazily, so nothing after a failing event is built or sent.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from talsim_sos.core.result import Result

from .diagnostics import DiagnosticsCollector
from .document import SimulationDocument
from .exceptions import InsertFailure, SOSConversionError
from .parameters import ParameterExtractor
from .request_builder import build_sensor_request, iter_observation_requests_for_series
from .response import check_observation_response, check_sensor_response
from .transport import DEFAULT_ACCEPT_LANGUAGE, Transport, build_request_headers

logger = logging.getLogger(__name__)


class SubmissionState(str, Enum):
    START = "start"
    REGISTER_SENSOR = "register_sensor"
    ITERATE_SERIES = "iterate_series"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SubmissionReport:
    """Outcome of a successful run."""
    series_count: int
    observations_inserted: int
    sensor_response: str


class SubmissionOrchestrator:
    """Sequential register-then-insert state machine.

    Args:
        transport: Object with ``post(url, body, headers)``
        sos_url: Transactional SOS endpoint
        token: Authorization header value
        sensor_template: InsertSensor template text
        observation_template: InsertObservation template text
        extractor: Parameter extractor (default constants when None)
        accept_language: Accept-Language header value
        diagnostics: Optional collector receiving progress messages
    """

    def __init__(
        self,
        transport: Transport,
        sos_url: str,
        token: str,
        sensor_template: str,
        observation_template: str,
        extractor: Optional[ParameterExtractor] = None,
        accept_language: str = DEFAULT_ACCEPT_LANGUAGE,
        diagnostics: Optional[DiagnosticsCollector] = None,
    ):
        self.transport = transport
        self.sos_url = sos_url
        self.sensor_template = sensor_template
        self.observation_template = observation_template
        self.extractor = extractor or ParameterExtractor()
        self.diagnostics = diagnostics
        self._headers: Dict[str, str] = build_request_headers(token, accept_language)
        self.state = SubmissionState.START

    def _note(self, text: str) -> None:
        if self.diagnostics is not None:
            self.diagnostics.info(text)

    def _submit(self, operation: str, request: str, check: Callable[[str], Result[str]]) -> str:
        response = self.transport.post(self.sos_url, request, self._headers)
        if not response.ok:
            logger.warning("%s returned HTTP %s", operation, response.status_code)

        result = check(response.body)
        if result.is_err:
            logger.error("%s rejected: %s", operation, result.first_error().message)
            raise InsertFailure(
                f"{operation} failed, response: {response.body}",
                response_body=response.body,
                status_code=response.status_code,
            )
        return response.body

    def run(self, document: SimulationDocument) -> SubmissionReport:
        """Register the sensor, then insert every observation in document order.

        Raises:
            InsertFailure: A response lacked its success marker
            TransportError: A POST could not complete
            SOSConversionError: The document could not be converted
        """
        series_index = event_index = None
        request = None
        inserted = 0
        try:
            self.state = SubmissionState.REGISTER_SENSOR
            request = build_sensor_request(document, self.sensor_template, self.extractor)
            logger.info("Registering sensor at %s", self.sos_url)
            sensor_response = self._submit("InsertSensor", request, check_sensor_response)
            request = None
            self._note("Sensor registered")

            self.state = SubmissionState.ITERATE_SERIES
            series_nodes = document.series()
            for series_index, series in enumerate(series_nodes):
                # index of the event being built or sent
                event_index = 0
                for request in iter_observation_requests_for_series(
                    document, series, self.observation_template, self.extractor
                ):
                    self._submit("InsertObservation", request, check_observation_response)
                    request = None
                    event_index += 1
                count = event_index
                inserted += count
                logger.info(
                    "Series %d/%d: %d observations inserted",
                    series_index + 1, len(series_nodes), count,
                )
                self._note(f"Series {series_index + 1}/{len(series_nodes)}: {count} observations inserted")

        except SOSConversionError as exc:
            self.state = SubmissionState.FAILED
            exc.add_context(
                operation="InsertSensor" if series_index is None else "InsertObservation",
                series_index=series_index,
                event_index=event_index,
                request=request,
            )
            if self.diagnostics is not None:
                self.diagnostics.fatal(str(exc))
            raise
        except Exception:
            self.state = SubmissionState.FAILED
            raise

        self.state = SubmissionState.SUCCEEDED
        logger.info("Submission finished: %d series, %d observations", len(series_nodes), inserted)
        return SubmissionReport(
            series_count=len(series_nodes),
            observations_inserted=inserted,
            sensor_response=sensor_response,
        )

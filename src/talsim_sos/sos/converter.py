# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
TALSIM to SOS converter.

Wires configuration, templates, credentials and transport around the
submission orchestrator for one run:
  1. Parse the TALSIM result document
  2. Load both request templates and the authorization token
  3. Register the sensor and insert all observations
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from talsim_sos.core.exceptions import ConfigurationError, require_not_none

from .config import TalsimSosConfig
from .credentials import resolve_auth_token
from .diagnostics import DiagnosticsCollector
from .document import DocumentSource, SimulationDocument, parse_talsim_document
from .orchestrator import SubmissionOrchestrator, SubmissionReport
from .parameters import ParameterExtractor
from .request_builder import build_observation_requests_for_series, build_sensor_request
from .templating import INSERT_OBSERVATION, INSERT_SENSOR, load_template
from .transport import SOSTransport, Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedRequests:
    """All requests of a document, rendered but not sent."""
    sensor: str
    observations: List[List[str]]

    @property
    def observation_count(self) -> int:
        return sum(len(series) for series in self.observations)


class TalsimSosConverter:
    """Converts TALSIM result documents and submits them to an SOS.

    Args:
        config: Converter configuration; defaults when None
        transport: Optional transport (a ``SOSTransport`` is opened per run when None)
    """

    def __init__(self, config: Optional[TalsimSosConfig] = None, transport: Optional[Transport] = None):
        self.config = config or TalsimSosConfig()
        self._transport = transport
        self.extractor = ParameterExtractor(
            self.config.constants,
            apply_time_zone_offset=self.config.apply_time_zone_offset,
        )

    def _templates(self):
        return (
            load_template(INSERT_SENSOR, self.config.insert_sensor_template),
            load_template(INSERT_OBSERVATION, self.config.insert_observation_template),
        )

    @staticmethod
    def _document(source) -> SimulationDocument:
        if isinstance(source, SimulationDocument):
            return source
        return parse_talsim_document(source)

    def render_requests(self, source: DocumentSource) -> RenderedRequests:
        """Build every request for ``source`` without sending anything."""
        document = self._document(source)
        sensor_template, observation_template = self._templates()
        sensor = build_sensor_request(document, sensor_template, self.extractor)
        observations = [
            build_observation_requests_for_series(document, series, observation_template, self.extractor)
            for series in document.series()
        ]
        return RenderedRequests(sensor=sensor, observations=observations)

    def submit(
        self,
        source: DocumentSource,
        sos_url: Optional[str] = None,
        diagnostics: Optional[DiagnosticsCollector] = None,
    ) -> SubmissionReport:
        """Run a full submission and return its report.

        Configuration problems (missing URL, token or template) are raised
        before the document is read or any request is sent.
        """
        sos_url = require_not_none(sos_url or self.config.sos_url, "SOS_URL", ConfigurationError)
        token = resolve_auth_token(self.config)
        sensor_template, observation_template = self._templates()

        document = self._document(source)
        logger.info("Submitting %d series from %s", len(document.series()), document.source or "<input>")

        transport = self._transport or SOSTransport(timeout=self.config.timeout)
        try:
            orchestrator = SubmissionOrchestrator(
                transport,
                sos_url,
                token,
                sensor_template,
                observation_template,
                extractor=self.extractor,
                accept_language=self.config.accept_language,
                diagnostics=diagnostics,
            )
            return orchestrator.run(document)
        finally:
            if self._transport is None:
                transport.close()

    def insert_output_to_sos(self, source: DocumentSource, sos_url: Optional[str] = None) -> bool:
        """Submit ``source``; returns True on success and raises otherwise."""
        self.submit(source, sos_url)
        return True

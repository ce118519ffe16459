"""
TALSIM result to Sensor Observation Service (SOS) converter.

Reads TALSIM simulation results (PI-XML timeseries layout), renders one
InsertSensor request plus one InsertObservation request per event, and posts
them to a transactional SOS.
"""

from .config import SOSConstants, StationPosition, TalsimSosConfig
from .converter import RenderedRequests, TalsimSosConverter
from .exceptions import (
    InsertFailure,
    MalformedDocumentError,
    MalformedTimestampError,
    NotFoundError,
    PlaceholderCollisionError,
    SOSConversionError,
    TransportError,
)
from .orchestrator import SubmissionOrchestrator, SubmissionReport, SubmissionState

__all__ = [
    "SOSConstants",
    "StationPosition",
    "TalsimSosConfig",
    "TalsimSosConverter",
    "RenderedRequests",
    "SubmissionOrchestrator",
    "SubmissionReport",
    "SubmissionState",
    "SOSConversionError",
    "NotFoundError",
    "MalformedDocumentError",
    "MalformedTimestampError",
    "PlaceholderCollisionError",
    "InsertFailure",
    "TransportError",
]

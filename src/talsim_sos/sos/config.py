# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Converter configuration models.

Defines the Pydantic models for the SOS converter settings:
- StationPosition: Placeholder sensor position (longitude, latitude, altitude)
- SOSConstants: Offering, feature-of-interest identifiers and the static input
  observable property shared by every request of a run
- TalsimSosConfig: Top-level configuration (endpoint, credentials, templates)

Constant values are strings because they are substituted verbatim into the
request templates.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from talsim_sos.core.config import FROZEN_CONFIG, from_file_factory


class StationPosition(BaseModel):
    """Sensor position rendered into the InsertSensor and InsertObservation requests."""
    model_config = FROZEN_CONFIG

    longitude: str = Field(default='7.369676', alias='LON', description='Longitude in degrees')
    latitude: str = Field(default='51.14431', alias='LAT', description='Latitude in degrees')
    altitude: str = Field(default='0.0', alias='ALT', description='Altitude in meters')


class SOSConstants(BaseModel):
    """Static identifiers shared by all requests of a run."""
    model_config = FROZEN_CONFIG

    station_position: StationPosition = Field(
        default_factory=StationPosition,
        alias='STATION_POSITION',
    )
    offering_name: str = Field(default='TalsimResult', alias='OFFERING_NAME')
    offering_value: str = Field(default='TalsimResult', alias='OFFERING_VALUE')
    feature_of_interest_sampling: str = Field(
        default='foi/test/sampling',
        alias='FEATURE_OF_INTEREST_SAMPLING',
        description='Sampling feature identifier (also the sensor feature of interest)'
    )
    feature_of_interest_sampled: str = Field(
        default='foi/test/sampled',
        alias='FEATURE_OF_INTEREST_SAMPLED',
        description='Sampled feature identifier'
    )
    input_property_name: str = Field(default='Volumen', alias='INPUT_PROPERTY_NAME')
    input_property_value: str = Field(default='Volumen', alias='INPUT_PROPERTY_VALUE')


class TalsimSosConfig(BaseModel):
    """Top-level converter configuration (flat upper-case keys in YAML)."""
    model_config = FROZEN_CONFIG

    sos_url: Optional[str] = Field(
        default=None,
        alias='SOS_URL',
        description='Transactional SOS endpoint receiving the POST requests'
    )
    auth_token: Optional[str] = Field(
        default=None,
        alias='SOS_AUTH_TOKEN',
        description='Authorization header value; takes precedence over SOS_TOKEN_FILE'
    )
    token_file: Optional[str] = Field(
        default=None,
        alias='SOS_TOKEN_FILE',
        description='YAML file holding the authorization token under the "token" key'
    )
    accept_language: str = Field(default='en-US,en;q=0.5', alias='SOS_ACCEPT_LANGUAGE')
    timeout: float = Field(
        default=60.0,
        alias='SOS_TIMEOUT',
        gt=0,
        description='Per-request timeout in seconds'
    )
    insert_sensor_template: Optional[str] = Field(
        default=None,
        alias='INSERT_SENSOR_TEMPLATE',
        description='Path to an InsertSensor template; packaged default when unset'
    )
    insert_observation_template: Optional[str] = Field(
        default=None,
        alias='INSERT_OBSERVATION_TEMPLATE',
        description='Path to an InsertObservation template; packaged default when unset'
    )
    apply_time_zone_offset: bool = Field(
        default=False,
        alias='APPLY_TIME_ZONE_OFFSET',
        description='Convert event times to UTC using the document timeZone offset'
    )
    constants: SOSConstants = Field(default_factory=SOSConstants, alias='SOS_CONSTANTS')

    @classmethod
    def from_file(
        cls,
        path: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
        use_env: bool = True,
    ) -> 'TalsimSosConfig':
        """Load from an optional YAML file, ``TALSIM_SOS_*`` variables and overrides."""
        return from_file_factory(cls, path, overrides, use_env=use_env)

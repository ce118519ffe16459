"""Tests for the observable property catalog."""

import pytest

from talsim_sos.sos.catalog import CATALOG, ParameterCode, lookup, resolve_code

pytestmark = [pytest.mark.unit, pytest.mark.sos, pytest.mark.quick]


@pytest.mark.parametrize("code, expected", [
    ("1ZU", "Zufluss"),
    ("VOL", "Volumen"),
    ("WSP", "Wasserstand"),
    ("QA1", "Abgabe"),
    ("QH1", "Hochwasserentlastung"),
])
def test_known_codes(code, expected):
    prop, fell_back = lookup(code)
    assert fell_back is False
    assert prop.name == expected
    assert prop.value == expected
    assert prop.code.value == code


def test_unknown_code_falls_back_to_inflow():
    prop, fell_back = lookup("XYZ")
    assert fell_back is True
    assert prop is CATALOG[ParameterCode.INFLOW]
    assert prop.value == "Zufluss"


def test_lookup_is_exact_match():
    assert resolve_code(" VOL ") is None
    assert resolve_code("vol") is None
    assert resolve_code("VOL") is ParameterCode.VOLUME


def test_placeholders_per_code():
    prop = CATALOG[ParameterCode.SPILLWAY]
    assert prop.placeholders == (
        "%OBSERVABLE_PROPERTY_OUTPUT_NAME_QH1%",
        "%OBSERVABLE_PROPERTY_OUTPUT_VALUE_QH1%",
        "%UOM_DEFINITION_QH1%",
    )


def test_catalog_covers_every_code():
    assert set(CATALOG) == set(ParameterCode)

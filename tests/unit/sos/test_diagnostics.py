"""Tests for run diagnostics."""

import xml.etree.ElementTree as ET

import pytest

from talsim_sos.sos.diagnostics import DiagLevel, DiagnosticsCollector

pytestmark = [pytest.mark.unit, pytest.mark.sos, pytest.mark.quick]


class TestDiagnosticsCollector:
    def test_all_levels(self):
        diag = DiagnosticsCollector()
        diag.debug("debug msg")
        diag.info("info msg")
        diag.warning("warn msg")
        diag.error("error msg")
        diag.fatal("fatal msg")
        assert [m.level for m in diag.messages] == list(DiagLevel)

    def test_has_fatal_and_errors(self):
        diag = DiagnosticsCollector()
        diag.warning("careful")
        assert diag.has_errors is False
        diag.error("err")
        assert diag.has_errors is True
        assert diag.has_fatal is False
        diag.fatal("boom")
        assert diag.has_fatal is True

    def test_write_pi_diag(self, tmp_path):
        diag = DiagnosticsCollector(tmp_path / "out" / "diag.xml")
        diag.info("Sensor registered")
        diag.fatal("InsertObservation failed")
        assert diag.write() is True

        root = ET.parse(str(tmp_path / "out" / "diag.xml")).getroot()
        assert root.tag == "{http://www.wldelft.nl/fews/PI}Diag"
        lines = root.findall("{http://www.wldelft.nl/fews/PI}line")
        assert [line.get("level") for line in lines] == ["1", "4"]
        assert lines[1].get("description").endswith("InsertObservation failed")

    def test_write_path_argument(self, tmp_path):
        diag = DiagnosticsCollector()
        diag.info("x")
        assert diag.write(tmp_path / "diag.xml") is True
        assert (tmp_path / "diag.xml").is_file()

    def test_write_without_path(self):
        assert DiagnosticsCollector().write() is False

    def test_write_never_raises(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        diag = DiagnosticsCollector(blocker / "diag.xml")
        diag.info("x")
        assert diag.write() is False

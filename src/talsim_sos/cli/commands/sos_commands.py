"""
SOS CLI command handlers.

Provides ``talsim-sos sos insert|render|inspect`` subcommands.
"""

import logging
from argparse import Namespace
from pathlib import Path

from talsim_sos.core.exceptions import FileOperationError, talsim_sos_error_handler
from talsim_sos.sos.catalog import lookup
from talsim_sos.sos.converter import TalsimSosConverter
from talsim_sos.sos.diagnostics import DiagnosticsCollector
from talsim_sos.sos.document import all_event_nodes, parse_talsim_document, read_header

from ..exit_codes import ExitCode
from ..validators import validate_input_file, validate_sos_url
from .base import BaseCommand, cli_exception_handler

logger = logging.getLogger(__name__)


def _input_path(args: Namespace) -> Path:
    result = validate_input_file(args.input)
    if result.is_err:
        raise FileOperationError(result.format_errors())
    return result.unwrap()


class SOSCommands(BaseCommand):
    """Command handlers for the ``talsim-sos sos`` category."""

    @staticmethod
    @cli_exception_handler
    def insert(args: Namespace) -> int:
        """Register the sensor and insert every observation of a TALSIM result file."""
        input_path = _input_path(args)
        overrides = {
            'SOS_URL': getattr(args, 'sos_url', None),
            'SOS_TOKEN_FILE': getattr(args, 'token_file', None),
        }
        config = SOSCommands.load_config(args, overrides=overrides)

        if config.sos_url:
            url_check = validate_sos_url(config.sos_url)
            if url_check.is_err:
                SOSCommands._console.error(url_check.format_errors())
                return ExitCode.CONFIG_ERROR

        diag_file = getattr(args, 'diag_file', None)
        diag = DiagnosticsCollector(Path(diag_file) if diag_file else None)
        try:
            diag.info(f"Submitting {input_path}")
            report = TalsimSosConverter(config).submit(input_path, diagnostics=diag)
            diag.info("Submission completed")
        except Exception as exc:
            if not diag.has_fatal:
                diag.fatal(str(exc))
            raise
        finally:
            if diag_file:
                diag.write()

        SOSCommands._console.success(
            f"Inserted {report.observations_inserted} observations "
            f"from {report.series_count} series into {config.sos_url}"
        )
        return ExitCode.SUCCESS

    @staticmethod
    @cli_exception_handler
    def render(args: Namespace) -> int:
        """Write all requests of a TALSIM result file to a directory without sending them."""
        input_path = _input_path(args)
        config = SOSCommands.load_config(args)
        output_dir = Path(args.output_dir)

        rendered = TalsimSosConverter(config).render_requests(input_path)

        with talsim_sos_error_handler(f"writing requests to {output_dir}", logger, error_type=FileOperationError):
            output_dir.mkdir(parents=True, exist_ok=True)
            (output_dir / "InsertSensor.xml").write_text(rendered.sensor, encoding="utf-8")
            for series_index, requests in enumerate(rendered.observations):
                for event_index, request in enumerate(requests):
                    name = f"InsertObservation_{series_index}_{event_index}.xml"
                    (output_dir / name).write_text(request, encoding="utf-8")

        SOSCommands._console.success(
            f"Wrote 1 sensor and {rendered.observation_count} observation requests to {output_dir}"
        )
        return ExitCode.SUCCESS

    @staticmethod
    @cli_exception_handler
    def inspect(args: Namespace) -> int:
        """Summarise the series of a TALSIM result file."""
        document = parse_talsim_document(_input_path(args))
        rows = []
        fallbacks = 0
        for index, series in enumerate(document.series()):
            header = read_header(series)
            prop, fell_back = lookup(header.parameter_id)
            fallbacks += int(fell_back)
            published = f"{prop.value} (fallback)" if fell_back else prop.value
            rows.append([
                str(index), header.parameter_id, published, header.station_name,
                header.units, str(len(all_event_nodes(series))),
            ])

        if not rows:
            SOSCommands._console.warning("Document contains no series")
            return ExitCode.DOCUMENT_ERROR

        SOSCommands._console.table(
            columns=["#", "parameterId", "Observable property", "Station", "Units", "Events"],
            rows=rows,
            title=f"TALSIM series in {args.input}",
        )
        if fallbacks:
            SOSCommands._console.warning(
                f"{fallbacks} series use an unknown parameterId and would be published as inflow"
            )
        return ExitCode.SUCCESS

"""
talsim-sos CLI Argument Parser.

Provides the command-line parser with a category-action structure
(e.g. 'sos insert', 'sos render').

Categories:
    - sos: Convert TALSIM results and submit them to a Sensor Observation Service
"""

import argparse
from typing import List, Optional

from talsim_sos.talsim_sos_version import __version__


class CLIParser:
    """
    Main CLI parser with hierarchical subcommand architecture.

    Attributes:
        common_parser: Parent parser with global options (--config, --debug)
        parser: Main argument parser with all subcommands registered
    """

    def __init__(self):
        """Initialize the CLI parser with common options and all subcommands."""
        self.common_parser = self._create_common_parser()
        self.parser = self._create_parser()

    def _create_common_parser(self) -> argparse.ArgumentParser:
        """Create a parent parser with common arguments."""
        # Use SUPPRESS to avoid overwriting global flags with subcommand defaults
        parser = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)

        parser.add_argument('--config', type=str,
                            help='Path to configuration file (default: ./talsim_sos.yaml if present)')
        parser.add_argument('--debug', action='store_true',
                            help='Enable debug output')
        return parser

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the main parser with global options and subparsers."""
        parser = argparse.ArgumentParser(
            prog='talsim-sos',
            description='talsim-sos - publish TALSIM simulation results to a Sensor Observation Service',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            parents=[self.common_parser],
            epilog="""
Examples:
  talsim-sos sos inspect --input talsim_result.xml
  talsim-sos sos render --input talsim_result.xml --output-dir requests/
  talsim-sos sos insert --input talsim_result.xml --sos-url http://localhost:8080/52n-sos/service

For more help on a specific command:
  talsim-sos <category> --help
  talsim-sos <category> <action> --help
"""
        )

        parser.add_argument('--version', action='version',
                            version=f'talsim-sos {__version__}')

        subparsers = parser.add_subparsers(
            dest='category',
            required=True,
            help='Command category',
            metavar='<category>'
        )

        self._register_sos_commands(subparsers)

        return parser

    def _register_sos_commands(self, subparsers):
        """Register SOS conversion commands."""
        from .commands import SOSCommands

        sos_parser = subparsers.add_parser(
            'sos',
            help='Sensor Observation Service operations',
            description='Convert TALSIM result files into SOS requests and submit them'
        )
        sos_subparsers = sos_parser.add_subparsers(
            dest='action',
            required=True,
            help='SOS action',
            metavar='<action>'
        )

        # sos insert
        insert_parser = sos_subparsers.add_parser(
            'insert',
            help='Register the sensor and insert all observations',
            parents=[self.common_parser]
        )
        insert_parser.add_argument('--input', '-i', type=str, required=True,
                                   help='Path to the TALSIM result XML file')
        insert_parser.add_argument('--sos-url', dest='sos_url', type=str, default=None,
                                   help='Transactional SOS endpoint (overrides SOS_URL)')
        insert_parser.add_argument('--token-file', dest='token_file', type=str, default=None,
                                   help='YAML file with the authorization token (overrides SOS_TOKEN_FILE)')
        insert_parser.add_argument('--diag-file', dest='diag_file', type=str, default=None,
                                   help='Write run diagnostics (PI Diag XML) to this file')
        insert_parser.set_defaults(func=SOSCommands.insert)

        # sos render
        render_parser = sos_subparsers.add_parser(
            'render',
            help='Write all requests to a directory without sending them',
            parents=[self.common_parser]
        )
        render_parser.add_argument('--input', '-i', type=str, required=True,
                                   help='Path to the TALSIM result XML file')
        render_parser.add_argument('--output-dir', '-o', dest='output_dir', type=str, required=True,
                                   help='Directory receiving the rendered request files')
        render_parser.set_defaults(func=SOSCommands.render)

        # sos inspect
        inspect_parser = sos_subparsers.add_parser(
            'inspect',
            help='Summarise the series of a TALSIM result file',
            parents=[self.common_parser]
        )
        inspect_parser.add_argument('--input', '-i', type=str, required=True,
                                    help='Path to the TALSIM result XML file')
        inspect_parser.set_defaults(func=SOSCommands.inspect)

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments.

        Args:
            args: List of argument strings (for testing). If None, uses sys.argv.

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

"""
talsim-sos Command-Line Interface entry point.

Provides the main() function called by the ``talsim-sos`` console script:
- Creating the CLI argument parser
- Configuring logging (``--debug`` switches to DEBUG)
- Dispatching to the command handler
- Handling interrupts and exceptions gracefully
"""

import logging
import sys
from typing import List, Optional

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s'


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the talsim-sos CLI.

    Args:
        argv: Argument list (for testing). If None, uses sys.argv.
    """
    from talsim_sos.cli.argument_parser import CLIParser
    from talsim_sos.core.exceptions import TalsimSosError

    try:
        parser = CLIParser()
        args = parser.parse_args(argv)
        configure_logging(getattr(args, 'debug', False))

        if hasattr(args, 'func'):
            return int(args.func(args))
        parser.parser.print_help()
        return 1

    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user", file=sys.stderr)
        return 130
    except (TalsimSosError, FileNotFoundError, ValueError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:  # noqa: BLE001 - top-level fallback
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

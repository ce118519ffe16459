"""
Run diagnostics for SOS submissions.

Collects leveled progress and error messages during a submission run and
writes them as a PI ``<Diag>`` file, the format TALSIM/FEWS operators already
read. Diagnostics are informational only; nothing in the run depends on them.
"""

import logging
import xml.etree.ElementTree as ET  # nosec B405 - writing local diagnostics XML
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

PI_NAMESPACE = "http://www.wldelft.nl/fews/PI"


class DiagLevel(IntEnum):
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4


@dataclass
class DiagMessage:
    level: DiagLevel
    text: str
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class DiagnosticsCollector:
    """Buffers run messages; ``write()`` never raises.

    Usage::

        diag = DiagnosticsCollector(Path("diag.xml"))
        try:
            orchestrator.run(document)
        except TalsimSosError as exc:
            diag.fatal(str(exc))
            raise
        finally:
            diag.write()
    """

    def __init__(self, output_path: Optional[Path] = None) -> None:
        self.output_path = Path(output_path) if output_path else None
        self._messages: List[DiagMessage] = []

    def record(self, level: DiagLevel, text: str) -> None:
        self._messages.append(DiagMessage(level=DiagLevel(level), text=text))

    def debug(self, text: str) -> None:
        self.record(DiagLevel.DEBUG, text)

    def info(self, text: str) -> None:
        self.record(DiagLevel.INFO, text)

    def warning(self, text: str) -> None:
        self.record(DiagLevel.WARNING, text)

    def error(self, text: str) -> None:
        self.record(DiagLevel.ERROR, text)

    def fatal(self, text: str) -> None:
        self.record(DiagLevel.FATAL, text)

    @property
    def messages(self) -> List[DiagMessage]:
        return list(self._messages)

    @property
    def has_fatal(self) -> bool:
        return any(m.level == DiagLevel.FATAL for m in self._messages)

    @property
    def has_errors(self) -> bool:
        return any(m.level >= DiagLevel.ERROR for m in self._messages)

    def to_element(self) -> ET.Element:
        root = ET.Element("Diag", {"xmlns": PI_NAMESPACE})
        for msg in self._messages:
            ET.SubElement(root, "line", {
                "level": str(int(msg.level)),
                "description": f"{msg.timestamp} {msg.text}",
            })
        return root

    def write(self, output_path: Optional[Path] = None) -> bool:
        """Write the diagnostics file; returns False (and logs) on failure."""
        path = Path(output_path) if output_path else self.output_path
        if path is None:
            logger.debug("No diagnostics file configured; %d messages discarded", len(self._messages))
            return False
        try:
            tree = ET.ElementTree(self.to_element())
            ET.indent(tree, space="  ")
            path.parent.mkdir(parents=True, exist_ok=True)
            tree.write(str(path), xml_declaration=True, encoding="UTF-8")
            return True
        except Exception:
            logger.exception("Failed to write run diagnostics to %s", path)
            return False

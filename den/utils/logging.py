"""Session logging utilities."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional


class SessionLogger:
    """Records what happened during a Den session (enabled by --debug)."""

    def __init__(self, cache_dir: Path, run_id: Optional[str] = None):
        """Initialize session logger.

        Args:
            cache_dir: Den cache directory
            run_id: Optional run ID (generated if not provided)
        """
        self.run_id = run_id or datetime.now().strftime("%Y%m%d_%H%M%S")

        # Create logs directory
        self.log_dir = cache_dir / "runs" / self.run_id
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.events_path = self.log_dir / "events.ndjson"
        self.debug_log_path = self.log_dir / "debug.log"

    def attach(self, level: int = logging.DEBUG) -> logging.Handler:
        """Route the den.* loggers into debug.log.

        Returns:
            The installed handler
        """
        handler = logging.FileHandler(self.debug_log_path)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        den_logger = logging.getLogger("den")
        den_logger.addHandler(handler)
        den_logger.setLevel(level)
        return handler

    def log_event(self, kind: str, **fields: Any) -> None:
        """Append one entry to the event transcript.

        Args:
            kind: Entry type (key, command, scan, status, ...)
            fields: Extra JSON-serializable data
        """
        entry = {
            "ts": datetime.now().isoformat(),
            "kind": kind,
            **fields,
        }

        with open(self.events_path, "a") as f:
            f.write(json.dumps(entry, default=str) + "\n")

    def get_log_path(self) -> str:
        """Get the path to the log directory.

        Returns:
            Absolute path to log directory
        """
        return str(self.log_dir.absolute())


class NullSessionLogger:
    """Stand-in used when --debug is off."""

    def log_event(self, kind: str, **fields: Any) -> None:
        pass

    def get_log_path(self) -> Optional[str]:
        return None

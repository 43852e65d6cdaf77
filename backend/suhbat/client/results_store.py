"""
Transient results storage.

Holds the single `{profession, evaluation}` record handed from the chat to the
results view. It lives in the temp directory under a per-session key, written
once, read by the renderer, and cleared by the navigation actions.
"""

import json
import logging
import os
import tempfile
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ResultsStore:
    """Session-scoped storage for the latest interview results."""

    def __init__(self, session_key: Optional[str] = None, directory: Optional[Path] = None):
        self.session_key = session_key or uuid.uuid4().hex
        self.directory = Path(directory or tempfile.gettempdir()) / "suhbat"
        self.path = self.directory / f"interview-results-{self.session_key}.json"

    def save(self, profession: str, evaluation: Dict[str, Any]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps({"profession": profession, "evaluation": evaluation}), encoding="utf-8")
        os.replace(tmp_path, self.path)
        logger.debug(f"Saved interview results to {self.path}")

    def load(self) -> Optional[Dict[str, Any]]:
        """Return the stored record, or None when nothing usable is stored."""
        if not self.path.exists():
            return None
        try:
            record = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable results file {self.path}: {e}")
            return None
        return record if isinstance(record, dict) else None

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

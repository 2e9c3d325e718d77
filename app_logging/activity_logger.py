from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import structlog

from config.settings import get_settings


class ActivityLogger:
    """
    Structured activity logger. Emits every event through structlog and,
    when ACTIVITY_LOG_PATH is set, also appends it as a JSON line to that file.

    Each log record schema:
    {
        "timestamp": "2025-01-01T00:00:00+00:00",
        "level":     "info",
        "event":     "issue_keys_collected",
        "component": "issue_linker",
        "pr_number": 42,          (optional)
        "issue_key": "PROJ-123",  (optional)
        ...extra_fields
    }
    """

    _lock = threading.Lock()

    def __init__(self, component: str) -> None:
        self.component = component
        self._log = structlog.get_logger(component).bind(component=component)

    @property
    def _log_path(self) -> Optional[Path]:
        path = get_settings().activity_log_path
        return Path(path) if path else None

    def _write(self, level: str, event: str, **kwargs: Any) -> None:
        getattr(self._log, level)(event, **kwargs)

        log_path = self._log_path
        if log_path is None:
            return

        record: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "event": event,
            "component": self.component,
        }
        record.update(kwargs)
        line = json.dumps(record, default=str)

        with self._lock:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(log_path, "a", encoding="utf-8") as f:
                f.write(line + "\n")

    # ── Public interface ──────────────────────────────────────────────────────

    def info(self, event: str, **kwargs: Any) -> None:
        self._write("info", event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._write("warning", event, **kwargs)

    def error(
        self,
        event: str,
        exc: Optional[BaseException] = None,
        **kwargs: Any,
    ) -> None:
        if exc:
            kwargs.setdefault("error_type", type(exc).__name__)
            kwargs.setdefault("error_message", str(exc))
        self._write("error", event, **kwargs)

    def debug(self, event: str, **kwargs: Any) -> None:
        self._write("debug", event, **kwargs)

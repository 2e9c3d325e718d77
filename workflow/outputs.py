from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO

from app_logging.activity_logger import ActivityLogger
from schemas.outputs import ActionOutputs

logger = ActivityLogger("action_outputs")


def write_outputs(outputs: ActionOutputs, output_path: Optional[str]) -> dict[str, str]:
    """Append step outputs to the $GITHUB_OUTPUT file. Returns what was written."""
    values = outputs.as_dict()
    if not output_path:
        logger.info("action_outputs_not_written", reason="GITHUB_OUTPUT not set", outputs=values)
        return values

    with open(Path(output_path), "a", encoding="utf-8") as f:
        for name, value in values.items():
            f.write(f"{name}={value}\n")

    logger.info("action_outputs_written", outputs=values)
    return values


def _escape_annotation(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def emit_error_annotation(message: str, stream: Optional[TextIO] = None) -> None:
    """Print an ::error:: workflow command so the failure shows up on the run summary."""
    stream = stream or sys.stdout
    print(f"::error::{_escape_annotation(message)}", file=stream, flush=True)

"""
Metallindex — Target List Loading

Reads the JSON array of targets once before the run. Any problem with
the file is fatal: the run aborts before a single page is loaded.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import TypeAdapter, ValidationError

from metallindex.models import Target

logger = structlog.get_logger(__name__)

_TARGET_LIST = TypeAdapter(list[Target])


class TargetConfigError(ValueError):
    """The target list is missing or malformed."""


def load_targets(path: str | Path) -> list[Target]:
    """
    Load and validate the target list.

    Args:
        path: JSON file holding an array of target objects.

    Returns:
        Targets in file order.

    Raises:
        TargetConfigError: If the file is unreadable, not JSON, not an
            array, or any entry fails validation.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TargetConfigError(f"cannot read target file {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise TargetConfigError(f"target file {path} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise TargetConfigError(f"target file {path} must contain a JSON array, got {type(data).__name__}")

    try:
        targets = _TARGET_LIST.validate_python(data)
    except ValidationError as e:
        raise TargetConfigError(f"invalid target in {path}: {e}") from e

    logger.info("targets_loaded", path=str(path), count=len(targets), source="targets")
    return targets

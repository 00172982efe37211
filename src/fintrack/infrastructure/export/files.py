"""Saving downloaded exports to disk."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

EXTENSIONS = {"csv": ".csv", "pdf": ".pdf", "xlsx": ".xlsx"}


def export_filename(
    prefix: str,
    kind: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> str:
    """Build a default file name such as ``report_2024-01-01_2024-01-31.csv``."""
    try:
        extension = EXTENSIONS[kind]
    except KeyError:
        msg = f"Unsupported export type: {kind}"
        raise ValueError(msg) from None

    parts = [prefix]
    if start is not None:
        parts.append(start.isoformat())
    if end is not None:
        parts.append(end.isoformat())
    return "_".join(parts) + extension


def save_export(
    content: bytes,
    path: Union[str, Path],
    overwrite: bool = False,
) -> Path:
    """Write ``content`` to ``path``, creating parent directories."""
    target = Path(path)
    if target.exists() and not overwrite:
        msg = f"File already exists: {target}"
        raise FileExistsError(msg)

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content)
    logger.info("Saved export to %s (%d bytes)", target, len(content))
    return target

# -*- coding: utf-8 -*-
"""
I/O utilities for pipeline artifacts

JSON helpers with consistent UTF-8 encoding and logging, used for the law
index (written after discovery, re-read by content-only runs), the per-law
seed documents and the run summary.

Examples:
    from src.utils.io import load_json, save_json
    save_json([e.to_dict() for e in entries], "data/source/law-index.json")
    entries = load_json("data/source/law-index.json")

"""
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)


def load_json(path: Union[str, Path]) -> Any:
    """
    Load JSON file.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON content
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    logger.debug(f"Loaded {path} ({_size_str(path)})")
    return data


def save_json(
    data: Any,
    path: Union[str, Path],
    indent: int = 2,
) -> str:
    """
    Save data to JSON file, creating parent directories.

    Args:
        data: Data to save (must be JSON-serializable)
        path: Output path
        indent: Indentation level (default 2)

    Returns:
        Path string
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=False, default=_serialize)

    logger.debug(f"Saved {path} ({_size_str(path)})")
    return str(path)


def _serialize(obj: Any) -> Any:
    """Fallback serializer for enums and dataclasses with to_dict()."""
    if isinstance(obj, Enum):
        return obj.value
    if hasattr(obj, 'to_dict'):
        return obj.to_dict()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _size_str(path: Path) -> str:
    size = path.stat().st_size
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"

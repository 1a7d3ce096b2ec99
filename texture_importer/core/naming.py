from __future__ import annotations

import re
from typing import Iterable, List, Tuple

from .models import AssetRecord

DEFAULT_IMAGE_EXTENSIONS: Tuple[str, ...] = ("bmp", "png", "jpg", "jpeg", "tga")
UNNAMED_TEXTURE = "Texture2D"

_INVALID_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

__all__ = [
    "DEFAULT_IMAGE_EXTENSIONS",
    "expected_base_name",
    "expected_file_name",
    "normalise_extensions",
    "sanitise_file_name",
]


def sanitise_file_name(name: str) -> str:
    """Replace characters that cannot appear in a file name with underscores."""
    return _INVALID_CHARS.sub("_", name)


def expected_base_name(record: AssetRecord) -> str:
    """Return the export name for *record*: ``<name>-<container file>-<path id>``."""
    name = record.name or UNNAMED_TEXTURE
    return sanitise_file_name(f"{name}-{record.file_name}-{record.path_id}")


def expected_file_name(record: AssetRecord, ext: str) -> str:
    return f"{expected_base_name(record)}.{ext.lstrip('.')}"


def normalise_extensions(extensions: Iterable[str]) -> List[str]:
    """Lowercase, strip leading dots and drop duplicates while keeping order."""
    seen: List[str] = []
    for ext in extensions:
        cleaned = str(ext).strip().lstrip(".").lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen

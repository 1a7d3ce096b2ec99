from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .logger import get_logger
from .models import AssetRecord, ImportTask, MatchResult
from .naming import DEFAULT_IMAGE_EXTENSIONS, expected_base_name, normalise_extensions

log = get_logger(__name__)


def _index_directory(directory: Path) -> Dict[str, Path]:
    """Map lowercased file names in *directory* to their paths.

    Entries are visited in sorted order so that, when two names differ only
    by case, the same one wins on every run.
    """
    index: Dict[str, Path] = {}
    if not directory.is_dir():
        return index
    for path in sorted(directory.iterdir()):
        if not path.is_file():
            continue
        index.setdefault(path.name.lower(), path)
    return index


def find_import_file(
    record: AssetRecord,
    index: Dict[str, Path],
    extensions: Sequence[str],
) -> Optional[Path]:
    """Return the first file matching *record* in extension priority order."""
    base = expected_base_name(record).lower()
    for ext in extensions:
        path = index.get(f"{base}.{ext}")
        if path is not None:
            return path
    return None


def match_files(
    directory: Path,
    records: Iterable[AssetRecord],
    extensions: Optional[Sequence[str]] = None,
) -> MatchResult:
    """Pair each record with an image file in *directory*.

    Records without a file are collected in ``unmatched``; they are not
    failures. Task order follows record order.
    """
    exts = normalise_extensions(extensions or DEFAULT_IMAGE_EXTENSIONS)
    index = _index_directory(Path(directory))

    tasks: List[ImportTask] = []
    unmatched: List[AssetRecord] = []
    for record in records:
        path = find_import_file(record, index, exts)
        if path is None:
            unmatched.append(record)
            continue
        log.debug(f"[MATCH] {record.display_name} -> {path.name}")
        tasks.append(ImportTask(record, path))

    result = MatchResult(tasks, unmatched)
    log.info(
        f"[MATCH] {len(tasks)} file(s) matched in {directory}, "
        f"{result.unmatched_count} record(s) without a file"
    )
    return result

from __future__ import annotations

import gc
import os
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import UnityPy

from .codec import UnityTextureCodec
from .exceptions import WorkspaceError
from .logger import get_logger
from .models import TEXTURE2D_CLASS_ID, AssetRecord

log = get_logger(__name__)

RecordKey = Tuple[str, int]


class AssetWorkspace:
    """Owns the UnityPy environment of one asset container.

    Reads and commits Texture2D type trees for :class:`AssetRecord` entries.
    Commits only touch the in-memory environment; :meth:`save_modified`
    writes the container back to disk.
    """

    def __init__(
        self,
        bundle_path: Path,
        *,
        loader: Optional[Callable[[str], Any]] = None,
        auto_backup: bool = False,
    ) -> None:
        self.bundle_path = Path(bundle_path)
        self._loader = loader or UnityPy.load
        self.auto_backup = auto_backup
        self._env: Optional[Any] = None
        self._objects: Dict[RecordKey, Any] = {}
        self._records: Optional[List[AssetRecord]] = None
        self._dirty = False

    def __enter__(self) -> "AssetWorkspace":
        self.load()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def load(self) -> None:
        if self._env is not None:
            return
        if not self.bundle_path.exists():
            raise WorkspaceError(f"Asset file not found: {self.bundle_path}")
        if self.auto_backup:
            self._ensure_backup()

        bundle_str = str(self.bundle_path)
        if os.name == "nt":
            # fsspec expects forward slashes on Windows
            bundle_str = bundle_str.replace("\\", "/")

        log.info(f"Loading asset file: {self.bundle_path}")
        try:
            self._env = self._loader(bundle_str)
        except Exception as e:
            raise WorkspaceError(f"Failed to load {self.bundle_path}: {e}") from e
        self._index_objects()

    @property
    def env(self) -> Any:
        if self._env is None:
            self.load()
        return self._env

    def _owning_file_name(self, obj: Any) -> str:
        assets_file = getattr(obj, "assets_file", None)
        name = getattr(assets_file, "name", None)
        return Path(name).name if name else self.bundle_path.name

    def _index_objects(self) -> None:
        self._objects = {}
        self._records = None
        for obj in getattr(self._env, "objects", []):
            key = (self._owning_file_name(obj), int(obj.path_id))
            self._objects[key] = obj

    def _record_for(self, key: RecordKey, obj: Any) -> AssetRecord:
        obj_type = getattr(obj, "type", None)
        type_id = getattr(obj_type, "value", None)
        if not isinstance(type_id, int):
            type_id = TEXTURE2D_CLASS_ID if getattr(obj_type, "name", None) == "Texture2D" else -1
        name = None
        if type_id == TEXTURE2D_CLASS_ID:
            try:
                name = obj.peek_name() or None
            except Exception as e:
                log.debug(f"Failed to peek name of {key[0]}/{key[1]}: {e}")
        return AssetRecord(Path(key[0]), key[1], type_id, name)

    def records(self) -> List[AssetRecord]:
        self.load()
        if self._records is None:
            self._records = [self._record_for(key, obj) for key, obj in self._objects.items()]
        return list(self._records)

    def texture_records(self) -> List[AssetRecord]:
        return [record for record in self.records() if record.is_texture]

    def find_records(self, path_ids: List[int]) -> List[AssetRecord]:
        wanted = set(path_ids)
        return [record for record in self.records() if record.path_id in wanted]

    def _lookup(self, record: AssetRecord) -> Optional[Any]:
        self.load()
        return self._objects.get((record.file_name, int(record.path_id)))

    def read_fields(self, record: AssetRecord) -> Optional[Dict[str, Any]]:
        obj = self._lookup(record)
        if obj is None:
            log.debug(f"No object for {record.display_name}")
            return None
        try:
            return obj.read_typetree()
        except Exception as e:
            log.debug(f"Failed to read type tree of {record.display_name}: {e}")
            return None

    def commit(self, record: AssetRecord, tree: Dict[str, Any]) -> None:
        obj = self._lookup(record)
        if obj is None:
            raise WorkspaceError(f"No object for {record.display_name}")
        obj.save_typetree(tree)
        self.mark_dirty()

    def codec(self) -> UnityTextureCodec:
        platform = 0
        for obj in self._objects.values():
            value = getattr(obj, "platform", None)
            if value is not None:
                platform = int(getattr(value, "value", value))
                break
        return UnityTextureCodec(platform=platform)

    def mark_dirty(self) -> None:
        self._dirty = True

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def backup_path(self) -> Path:
        return self.bundle_path.with_name(self.bundle_path.name + ".bak")

    def save_modified(self, out_dir: Path, *, suffix: str = "") -> Optional[Path]:
        """Write the container to *out_dir* if any record was committed."""
        if not self._dirty:
            log.debug(f"No committed textures in {self.bundle_path.name}, nothing to save")
            return None
        try:
            data = self.env.file.save()
        except Exception as e:
            raise WorkspaceError(f"Failed to serialize {self.bundle_path.name}: {e}") from e
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = out_dir / f"{self.bundle_path.stem}{suffix}{self.bundle_path.suffix}"
        out_path.write_bytes(data)
        log.info(f"Saved modified asset file -> {out_path}")
        return out_path

    def dispose(self) -> None:
        if self._env is None:
            return
        self._objects = {}
        self._records = None
        self._env = None
        # UnityPy keeps file handles open until the environment is collected
        gc.collect()

    def _ensure_backup(self) -> None:
        backup = self.backup_path
        if backup.exists():
            log.debug(f"Keeping existing backup {backup.name}")
            return
        try:
            shutil.copy2(self.bundle_path, backup)
        except OSError as e:
            log.warning(f"Backup of {self.bundle_path} failed: {e}")
            return
        log.info(f"Backed up {self.bundle_path.name} -> {backup.name}")

"""Capabilities the import pipeline consumes from its host."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Protocol, Sequence

from .models import AssetRecord, ImportTask, TextureDescriptor

FieldTree = Any

MODE_REPLACE = "Replace"
MODE_IMPORT = "Import"
MODE_CANCEL = "Cancel"


class AssetRecordAccessor(Protocol):
    def read_fields(self, record: AssetRecord) -> Optional[FieldTree]:
        ...

    def commit(self, record: AssetRecord, tree: FieldTree) -> None:
        ...


class TextureCodec(Protocol):
    def parse(self, tree: FieldTree) -> TextureDescriptor:
        ...

    def encode_from_image_file(self, descriptor: TextureDescriptor, file_path: Path) -> None:
        ...

    def serialize(self, descriptor: TextureDescriptor, tree: FieldTree) -> FieldTree:
        ...


class ImportPrompts(Protocol):
    """Interactive surface; every method may decline by returning None."""

    def choose_mode(self) -> Optional[str]:
        ...

    def choose_directory(self) -> Optional[Path]:
        ...

    def choose_file(self, extensions: Sequence[str]) -> Optional[Path]:
        ...

    def review_batch(self, tasks: List[ImportTask]) -> Optional[List[ImportTask]]:
        ...

    def show_message(self, title: str, text: str) -> None:
        ...

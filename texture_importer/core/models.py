from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional

# Unity ClassID for Texture2D
TEXTURE2D_CLASS_ID = 28


@dataclass(frozen=True)
class AssetRecord:
    """Identity of one asset inside a serialized container file."""

    file_path: Path
    path_id: int
    type_id: int = TEXTURE2D_CLASS_ID
    name: Optional[str] = None

    @property
    def file_name(self) -> str:
        return Path(self.file_path).name

    @property
    def display_name(self) -> str:
        return f"{self.file_name}/{self.path_id}"

    @property
    def is_texture(self) -> bool:
        return self.type_id == TEXTURE2D_CLASS_ID


@dataclass
class TextureDescriptor:
    """Texture metadata and pixel payload parsed from a field tree."""

    name: str
    width: int
    height: int
    texture_format: int
    mip_count: int = 1
    mip_map: bool = False
    image_data: bytes = b""
    platform_blob: List[int] = field(default_factory=list)
    stream_data: Optional[Dict[str, Any]] = None

    @property
    def is_streamed(self) -> bool:
        return bool(self.stream_data and self.stream_data.get("size"))

    def disable_mips(self) -> None:
        self.mip_count = 1
        self.mip_map = False


class ImportTask(NamedTuple):
    record: AssetRecord
    file_path: Optional[Path]


class OutcomeKind(str, Enum):
    OK = "ok"
    READ_FAILED = "read_failed"
    MISSING_FILE = "missing_file"
    ENCODE_FAILED = "encode_failed"


class ImportOutcome(NamedTuple):
    task: ImportTask
    kind: OutcomeKind
    message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.kind is OutcomeKind.OK


class MatchResult(NamedTuple):
    tasks: List[ImportTask]
    unmatched: List[AssetRecord]

    @property
    def unmatched_count(self) -> int:
        return len(self.unmatched)


@dataclass
class ImportRun:
    """Result of one orchestrated import invocation."""

    success: bool
    outcomes: List[ImportOutcome] = field(default_factory=list)
    report: str = ""

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .logger import get_logger
from .naming import DEFAULT_IMAGE_EXTENSIONS, normalise_extensions
from .report import DEFAULT_MAX_REPORT_LINES

log = get_logger(__name__)


class ImportConfigModel(BaseModel):
    # Matching priority follows list order
    extensions: List[str] = Field(default_factory=lambda: list(DEFAULT_IMAGE_EXTENSIONS))
    max_report_lines: int = Field(DEFAULT_MAX_REPORT_LINES, ge=1)
    output_suffix: str = ""
    backup: bool = False

    @field_validator("extensions")
    @classmethod
    def _clean_extensions(cls, value: List[str]) -> List[str]:
        cleaned = normalise_extensions(value)
        if not cleaned:
            raise ValueError("at least one image extension is required")
        return cleaned


class ImportConfig:
    def __init__(self, path: Optional[Path] = None):
        self.path = path
        self.model: Optional[ImportConfigModel] = None

    def load(self) -> ImportConfigModel:
        if self.path is None or not self.path.exists():
            if self.path is not None:
                log.warning(f"Config not found, using defaults: {self.path}")
            self.model = ImportConfigModel()
            return self.model
        data = json.loads(self.path.read_text(encoding="utf-8"))
        self.model = ImportConfigModel.model_validate(data)
        log.debug(f"Loaded import config from {self.path}")
        return self.model

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .exceptions import NoMatchingFilesError, UnsupportedSelectionError
from .interfaces import (
    MODE_IMPORT,
    MODE_REPLACE,
    AssetRecordAccessor,
    ImportPrompts,
    TextureCodec,
)
from .logger import get_logger
from .matcher import match_files
from .models import AssetRecord, ImportOutcome, ImportRun, ImportTask
from .mutation import apply_import
from .naming import DEFAULT_IMAGE_EXTENSIONS
from .report import DEFAULT_MAX_REPORT_LINES, ErrorAggregator

log = get_logger(__name__)

ERROR_TITLE = "Error"

Mutator = Callable[[ImportTask, AssetRecordAccessor, TextureCodec], ImportOutcome]


@dataclass
class TextureImportOptions:
    extensions: Sequence[str] = field(default_factory=lambda: list(DEFAULT_IMAGE_EXTENSIONS))
    max_report_lines: int = DEFAULT_MAX_REPORT_LINES


class TextureImporter:
    """Runs single, batch and replace-many texture imports.

    Tasks are executed one after another. A failing task is recorded in the
    report and never stops the remaining tasks.
    """

    def __init__(
        self,
        accessor: AssetRecordAccessor,
        codec: TextureCodec,
        options: Optional[TextureImportOptions] = None,
        *,
        mutator: Optional[Mutator] = None,
    ) -> None:
        self.accessor = accessor
        self.codec = codec
        self.options = options or TextureImportOptions()
        self._mutate = mutator or apply_import

    @staticmethod
    def supports_selection(selection: Sequence[AssetRecord]) -> bool:
        return bool(selection) and all(record.is_texture for record in selection)

    def require_supported(self, selection: Sequence[AssetRecord]) -> None:
        if not self.supports_selection(selection):
            others = sorted({r.type_id for r in selection if not r.is_texture})
            raise UnsupportedSelectionError(
                f"Only Texture2D assets can be imported into (selection has class ids {others})"
            )

    def run_tasks(self, tasks: Sequence[ImportTask]) -> List[ImportOutcome]:
        outcomes: List[ImportOutcome] = []
        for task in tasks:
            outcomes.append(self._mutate(task, self.accessor, self.codec))
        return outcomes

    def _finish(self, success: bool, outcomes: List[ImportOutcome]) -> ImportRun:
        errors = ErrorAggregator(max_lines=self.options.max_report_lines)
        errors.extend(outcomes)
        run = ImportRun(success=success, outcomes=outcomes)
        if errors.has_errors:
            run.report = errors.render()
        log.info(
            f"[IMPORT] {run.succeeded}/{run.attempted} texture(s) imported, {run.failed} failed"
        )
        return run

    def single_import(self, record: AssetRecord, file_path: Optional[Path]) -> ImportRun:
        outcomes = self.run_tasks([ImportTask(record, file_path)])
        return self._finish(outcomes[0].success, outcomes)

    def match(self, records: Sequence[AssetRecord], directory: Path) -> List[ImportTask]:
        result = match_files(directory, records, self.options.extensions)
        if not result.tasks:
            raise NoMatchingFilesError(directory)
        return result.tasks

    def batch_import(self, tasks: Sequence[ImportTask]) -> ImportRun:
        """Run matched tasks. Success means the batch ran, whatever failed inside it."""
        outcomes = self.run_tasks(tasks)
        return self._finish(True, outcomes)

    def replace_many(self, records: Sequence[AssetRecord], file_path: Optional[Path]) -> ImportRun:
        """Apply one image to every record; succeeds if at least one record was replaced."""
        outcomes = self.run_tasks([ImportTask(record, file_path) for record in records])
        return self._finish(any(outcome.success for outcome in outcomes), outcomes)

    def execute(self, selection: Sequence[AssetRecord], prompts: ImportPrompts) -> bool:
        """Pick an import mode for *selection* through *prompts* and run it."""
        if not selection:
            return False

        if len(selection) > 1:
            mode = prompts.choose_mode()
            if mode == MODE_IMPORT:
                run = self._prompted_batch(selection, prompts)
            elif mode == MODE_REPLACE:
                run = self._prompted_replace(selection, prompts)
            else:
                log.info("[IMPORT] Import cancelled")
                return False
        else:
            file_path = prompts.choose_file(self.options.extensions)
            run = None if file_path is None else self.single_import(selection[0], file_path)

        return self._surface(run, prompts)

    def execute_batch(self, selection: Sequence[AssetRecord], prompts: ImportPrompts) -> bool:
        """Batch-import *selection* from a prompted directory, whatever its size."""
        return self._surface(self._prompted_batch(selection, prompts), prompts)

    def _surface(self, run: Optional[ImportRun], prompts: ImportPrompts) -> bool:
        if run is None:
            return False
        if run.report:
            prompts.show_message(ERROR_TITLE, run.report)
        return run.success

    def _prompted_batch(
        self, selection: Sequence[AssetRecord], prompts: ImportPrompts
    ) -> Optional[ImportRun]:
        directory = prompts.choose_directory()
        if directory is None:
            return None
        try:
            tasks = self.match(selection, directory)
        except NoMatchingFilesError as e:
            log.error(f"[IMPORT] {e}")
            prompts.show_message(ERROR_TITLE, str(e))
            return None
        reviewed = prompts.review_batch(tasks)
        if reviewed is None:
            return None
        return self.batch_import(reviewed)

    def _prompted_replace(
        self, selection: Sequence[AssetRecord], prompts: ImportPrompts
    ) -> Optional[ImportRun]:
        file_path = prompts.choose_file(self.options.extensions)
        if file_path is None:
            return None
        return self.replace_many(selection, file_path)

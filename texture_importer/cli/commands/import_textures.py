"""Import image files into Texture2D assets of a Unity asset file."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from ...core.config import ImportConfig
from ...core.exceptions import TextureImportError
from ...core.importer import TextureImporter, TextureImportOptions
from ...core.interfaces import MODE_CANCEL, MODE_IMPORT, MODE_REPLACE
from ...core.logger import get_logger
from ...core.models import ImportTask
from ...core.workspace import AssetWorkspace

log = get_logger(__name__)


class ArgsPrompts:
    """Answers the importer's prompts from command-line arguments."""

    def __init__(self, args) -> None:
        self.args = args
        self.messages: List[str] = []

    def choose_mode(self) -> Optional[str]:
        if self.args.dir:
            return MODE_IMPORT
        if self.args.replace_many:
            return MODE_REPLACE
        log.error("Several textures selected: pass --dir to batch import or --replace-many to reuse --file")
        return MODE_CANCEL

    def choose_directory(self) -> Optional[Path]:
        return Path(self.args.dir) if self.args.dir else None

    def choose_file(self, extensions: Sequence[str]) -> Optional[Path]:
        if not self.args.file:
            return None
        path = Path(self.args.file)
        if path.suffix.lstrip(".").lower() not in extensions:
            log.warning(f"{path.name} is not one of: {', '.join(extensions)}")
        return path

    def review_batch(self, tasks: List[ImportTask]) -> Optional[List[ImportTask]]:
        for task in tasks:
            log.info(f"  {task.record.display_name} <- {task.file_path.name}")
        if self.args.dry_run:
            log.info(f"[DRY-RUN] Would import {len(tasks)} texture(s)")
            return None
        return tasks

    def show_message(self, title: str, text: str) -> None:
        self.messages.append(text)
        log.error(f"{title}:\n{text}")


def run(args) -> int:
    bundle_path = Path(args.bundle).resolve()
    out_dir = Path(args.out)

    if bool(args.file) == bool(args.dir):
        log.error("Pass exactly one of --file or --dir")
        return 2
    if args.dir and args.replace_many:
        log.error("--replace-many applies --file to every texture and cannot be used with --dir")
        return 2

    cfg = ImportConfig(Path(args.config) if args.config else None).load()
    options = TextureImportOptions(
        extensions=cfg.extensions, max_report_lines=cfg.max_report_lines
    )
    prompts = ArgsPrompts(args)

    try:
        with AssetWorkspace(bundle_path, auto_backup=args.backup or cfg.backup) as workspace:
            if args.path_id:
                selection = workspace.find_records(args.path_id)
            else:
                selection = workspace.texture_records()
            if not selection:
                log.error(f"No matching assets in {bundle_path.name}")
                return 1

            importer = TextureImporter(workspace, workspace.codec(), options)
            importer.require_supported(selection)

            if args.dir:
                ok = importer.execute_batch(selection, prompts)
            else:
                ok = importer.execute(selection, prompts)

            saved = workspace.save_modified(out_dir, suffix=cfg.output_suffix)
    except TextureImportError as e:
        log.error(str(e))
        return 1

    if saved is not None:
        log.info(f"Bundle saved: {saved}")
    elif ok:
        log.warning("Nothing was modified")
    return 0 if ok or args.dry_run else 1

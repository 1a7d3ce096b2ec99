"""List Texture2D assets and the file names batch import expects for them."""

from __future__ import annotations

from pathlib import Path

from ...core.codec import format_name
from ...core.exceptions import WorkspaceError
from ...core.logger import get_logger
from ...core.naming import expected_file_name
from ...core.workspace import AssetWorkspace

log = get_logger(__name__)


def run(args) -> int:
    bundle_path = Path(args.bundle).resolve()
    ext = args.ext.lstrip(".").lower()

    try:
        with AssetWorkspace(bundle_path) as workspace:
            records = workspace.texture_records()
            if not records:
                log.warning(f"No Texture2D assets in {bundle_path.name}")
                return 0
            for record in records:
                tree = workspace.read_fields(record) or {}
                size = f"{tree.get('m_Width', '?')}x{tree.get('m_Height', '?')}"
                fmt = tree.get("m_TextureFormat")
                fmt_name = format_name(fmt) if isinstance(fmt, int) else "?"
                print(f"{record.path_id}\t{record.name or '-'}\t{size}\t{fmt_name}\t{expected_file_name(record, ext)}")
    except WorkspaceError as e:
        log.error(str(e))
        return 1

    log.info(f"{len(records)} Texture2D asset(s) in {bundle_path.name}")
    return 0

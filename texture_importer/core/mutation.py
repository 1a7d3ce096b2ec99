from __future__ import annotations

from pathlib import Path

from .interfaces import AssetRecordAccessor, TextureCodec
from .logger import get_logger
from .models import ImportOutcome, ImportTask, OutcomeKind

log = get_logger(__name__)


def _describe(e: Exception) -> str:
    return str(e) or type(e).__name__


def apply_import(
    task: ImportTask,
    accessor: AssetRecordAccessor,
    codec: TextureCodec,
) -> ImportOutcome:
    """Replace the pixels of one Texture2D record with an image file.

    Steps: read the field tree, parse the texture, check the source file
    still exists, force a single mip level, encode the image, write the
    texture back into the tree and commit it. Nothing is committed unless
    every earlier step succeeded. Failures are returned as outcomes and
    never raised.
    """
    record = task.record

    tree = accessor.read_fields(record)
    if tree is None:
        log.warning(f"[IMPORT] {record.display_name}: failed to read")
        return ImportOutcome(task, OutcomeKind.READ_FAILED, "failed to read")

    try:
        descriptor = codec.parse(tree)
    except Exception as e:
        log.warning(f"[IMPORT] {record.display_name}: failed to parse texture: {_describe(e)}")
        return ImportOutcome(task, OutcomeKind.READ_FAILED, f"failed to read: {_describe(e)}")

    file_path = task.file_path
    if file_path is None or not Path(file_path).is_file():
        shown = "[null]" if file_path is None else str(file_path)
        log.warning(f"[IMPORT] {record.display_name}: {shown} does not exist")
        return ImportOutcome(
            task,
            OutcomeKind.MISSING_FILE,
            f"failed to import because {shown} does not exist.",
        )

    try:
        # mips are not generated; the imported image is the only level
        descriptor.disable_mips()
        codec.encode_from_image_file(descriptor, Path(file_path))
        tree = codec.serialize(descriptor, tree)
        accessor.commit(record, tree)
    except Exception as e:
        log.warning(f"[IMPORT] {record.display_name}: failed to import {file_path}: {_describe(e)}")
        return ImportOutcome(task, OutcomeKind.ENCODE_FAILED, f"failed to import: {_describe(e)}")

    log.info(
        f"[IMPORT] Replaced {record.display_name} with {Path(file_path).name} "
        f"({descriptor.width}x{descriptor.height}, format {descriptor.texture_format})"
    )
    return ImportOutcome(task, OutcomeKind.OK)

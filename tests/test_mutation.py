from pathlib import Path

from texture_importer.core.models import ImportTask, OutcomeKind
from texture_importer.core.mutation import apply_import


def test_successful_import_forces_single_mip_and_commits(tmp_path: Path, records, accessor, codec):
    img = tmp_path / "logo.png"
    img.write_bytes(b"PNGDATA")

    outcome = apply_import(ImportTask(records[0], img), accessor, codec)

    assert outcome.success
    assert outcome.message is None
    assert accessor.commits == [1]
    tree = accessor.trees[1]
    assert tree["m_MipCount"] == 1
    assert tree["m_MipMap"] is False
    assert tree["data"] == b"PNGDATA"
    # mips were already forced before the encoder ran
    assert codec.encoded == [(1, False)]


def test_unreadable_record_is_reported_and_not_committed(tmp_path: Path, records, codec, make_accessor):
    accessor = make_accessor({})
    img = tmp_path / "logo.png"
    img.write_bytes(b"x")

    outcome = apply_import(ImportTask(records[0], img), accessor, codec)

    assert outcome.kind is OutcomeKind.READ_FAILED
    assert outcome.message == "failed to read"
    assert accessor.commits == []


def test_missing_file_is_reported(tmp_path: Path, records, accessor, codec):
    missing = tmp_path / "gone.png"

    outcome = apply_import(ImportTask(records[0], missing), accessor, codec)

    assert outcome.kind is OutcomeKind.MISSING_FILE
    assert outcome.message == f"failed to import because {missing} does not exist."
    assert accessor.commits == []
    assert codec.encoded == []


def test_null_file_is_reported(records, accessor, codec):
    outcome = apply_import(ImportTask(records[0], None), accessor, codec)

    assert outcome.kind is OutcomeKind.MISSING_FILE
    assert outcome.message == "failed to import because [null] does not exist."


def test_encode_failure_skips_commit(tmp_path: Path, records, accessor, make_codec):
    img = tmp_path / "broken.png"
    img.write_bytes(b"not an image")
    codec = make_codec(corrupt={"broken.png"})

    outcome = apply_import(ImportTask(records[0], img), accessor, codec)

    assert outcome.kind is OutcomeKind.ENCODE_FAILED
    assert outcome.message == "failed to import: cannot identify image file broken.png"
    assert accessor.commits == []
    assert accessor.trees[1]["m_MipCount"] == 11


def test_commit_failure_is_returned_not_raised(tmp_path: Path, records, codec, make_accessor):
    accessor = make_accessor({1: {"m_Name": "Logo", "m_Width": 4, "m_Height": 4,
                                  "m_TextureFormat": 4, "m_MipCount": 3, "m_MipMap": True}},
                             reject_commits=True)
    img = tmp_path / "logo.png"
    img.write_bytes(b"x")

    outcome = apply_import(ImportTask(records[0], img), accessor, codec)

    assert outcome.kind is OutcomeKind.ENCODE_FAILED
    assert "container is read-only" in outcome.message


def test_parse_failure_is_a_read_failure(tmp_path: Path, records, codec, make_accessor):
    accessor = make_accessor({1: {"m_Name": "Logo"}})
    img = tmp_path / "logo.png"
    img.write_bytes(b"x")

    outcome = apply_import(ImportTask(records[0], img), accessor, codec)

    assert outcome.kind is OutcomeKind.READ_FAILED
    assert outcome.message.startswith("failed to read")


def test_exception_without_message_reports_its_type(tmp_path: Path, records, accessor, codec):
    img = tmp_path / "logo.png"
    img.write_bytes(b"x")

    def encode(descriptor, file_path):
        raise ValueError()

    codec.encode_from_image_file = encode

    outcome = apply_import(ImportTask(records[0], img), accessor, codec)

    assert outcome.kind is OutcomeKind.ENCODE_FAILED
    assert outcome.message == "failed to import: ValueError"
    assert accessor.commits == []

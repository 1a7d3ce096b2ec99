from pathlib import Path

import pytest

from texture_importer.core.models import AssetRecord, TextureDescriptor


class FakeAccessor:
    """In-memory record store keyed by path id."""

    def __init__(self, trees, reject_commits=False):
        self.trees = trees
        self.reject_commits = reject_commits
        self.reads = []
        self.commits = []

    def read_fields(self, record):
        self.reads.append(record.path_id)
        tree = self.trees.get(record.path_id)
        return dict(tree) if tree is not None else None

    def commit(self, record, tree):
        if self.reject_commits:
            raise PermissionError("container is read-only")
        self.trees[record.path_id] = tree
        self.commits.append(record.path_id)


class FakeCodec:
    def __init__(self, corrupt=()):
        self.corrupt = set(corrupt)
        self.encoded = []

    def parse(self, tree):
        return TextureDescriptor(
            name=tree["m_Name"],
            width=tree["m_Width"],
            height=tree["m_Height"],
            texture_format=tree["m_TextureFormat"],
            mip_count=tree["m_MipCount"],
            mip_map=tree["m_MipMap"],
        )

    def encode_from_image_file(self, descriptor, file_path):
        if file_path.name in self.corrupt:
            raise ValueError(f"cannot identify image file {file_path.name}")
        self.encoded.append((descriptor.mip_count, descriptor.mip_map))
        descriptor.image_data = file_path.read_bytes()
        descriptor.width, descriptor.height = 2, 2

    def serialize(self, descriptor, tree):
        tree.update(
            m_Width=descriptor.width,
            m_Height=descriptor.height,
            m_MipCount=descriptor.mip_count,
            m_MipMap=descriptor.mip_map,
            data=descriptor.image_data,
        )
        return tree


def _tree(name, mips=11):
    return {
        "m_Name": name,
        "m_Width": 1024,
        "m_Height": 1024,
        "m_TextureFormat": 12,
        "m_MipCount": mips,
        "m_MipMap": True,
    }


@pytest.fixture
def records():
    return [
        AssetRecord(Path("/game/level0"), path_id, name=name)
        for path_id, name in ((1, "Logo"), (2, "Banner"), (3, "Badge"))
    ]


@pytest.fixture
def accessor(records):
    return FakeAccessor({r.path_id: _tree(r.name) for r in records})


@pytest.fixture
def codec():
    return FakeCodec()


@pytest.fixture
def make_accessor():
    return FakeAccessor


@pytest.fixture
def make_codec():
    return FakeCodec


@pytest.fixture
def make_tree():
    return _tree

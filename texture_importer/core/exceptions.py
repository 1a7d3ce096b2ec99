from __future__ import annotations


class TextureImportError(Exception):
    """Base error for texture import failures surfaced to callers."""


class NoMatchingFilesError(TextureImportError):
    def __init__(self, directory) -> None:
        self.directory = directory
        super().__init__(
            "No matching files found in the directory. "
            "Make sure the file names are in UABEA's format."
        )


class UnsupportedSelectionError(TextureImportError):
    """Raised when a selection contains records that are not Texture2D assets."""


class WorkspaceError(TextureImportError):
    """Raised when an asset container cannot be loaded or saved."""

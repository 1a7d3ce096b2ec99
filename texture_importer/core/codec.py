from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from PIL import Image
from UnityPy.enums import TextureFormat
from UnityPy.export.Texture2DConverter import image_to_texture2d

from .logger import get_logger
from .models import TextureDescriptor

log = get_logger(__name__)

Encoder = Callable[..., Tuple[bytes, Any]]

IMAGE_DATA_KEY = "image data"

# Texture formats whose encoder expects an image without an alpha channel
_RGB_ONLY_FORMATS = {TextureFormat.RGB24, TextureFormat.RGB565}


class UnityTextureCodec:
    """Reads and writes Texture2D type trees (UnityPy ``read_typetree`` dicts)."""

    def __init__(self, platform: int = 0, *, encoder: Optional[Encoder] = None) -> None:
        self.platform = platform
        self._encoder = encoder or image_to_texture2d

    def parse(self, tree: Dict[str, Any]) -> TextureDescriptor:
        if not isinstance(tree, dict):
            raise TypeError(f"expected a Texture2D type tree, got {type(tree).__name__}")
        mip_count = int(tree.get("m_MipCount", 1) or 1)
        stream = tree.get("m_StreamData")
        platform_blob = tree.get("m_PlatformBlob") or []
        return TextureDescriptor(
            name=str(tree.get("m_Name", "")),
            width=int(tree["m_Width"]),
            height=int(tree["m_Height"]),
            texture_format=int(tree["m_TextureFormat"]),
            mip_count=mip_count,
            mip_map=bool(tree.get("m_MipMap", mip_count > 1)),
            image_data=bytes(tree.get(IMAGE_DATA_KEY) or b""),
            platform_blob=list(platform_blob),
            stream_data=dict(stream) if isinstance(stream, dict) else None,
        )

    def _prepare_image(self, img: Image.Image, texture_format: int) -> Image.Image:
        try:
            target = TextureFormat(texture_format)
        except ValueError:
            target = None
        if target in _RGB_ONLY_FORMATS:
            return img.convert("RGB")
        return img.convert("RGBA")

    def encode_from_image_file(self, descriptor: TextureDescriptor, file_path: Path) -> None:
        """Encode *file_path* into the descriptor's texture format.

        Width, height, format and image data are replaced. UnityPy encodes
        formats it has no encoder for as RGBA32, so the resulting format may
        differ from the original one.
        """
        with Image.open(file_path) as img:
            img.load()
            image = self._prepare_image(img, descriptor.texture_format)

        encoded, new_format = self._encoder(
            image,
            TextureFormat(descriptor.texture_format),
            platform=self.platform,
            platform_blob=descriptor.platform_blob or None,
        )
        new_format = int(new_format)
        if new_format != descriptor.texture_format:
            log.warning(
                f"[CODEC] '{descriptor.name}' encoded as format {new_format} "
                f"instead of {descriptor.texture_format}"
            )

        descriptor.width, descriptor.height = image.size
        descriptor.texture_format = new_format
        descriptor.image_data = bytes(encoded)
        if descriptor.is_streamed:
            log.debug(f"[CODEC] '{descriptor.name}' no longer reads from {descriptor.stream_data.get('path')}")
        # pixels now live inline in the asset
        descriptor.stream_data = None

    def serialize(self, descriptor: TextureDescriptor, tree: Dict[str, Any]) -> Dict[str, Any]:
        tree["m_Width"] = descriptor.width
        tree["m_Height"] = descriptor.height
        tree["m_TextureFormat"] = descriptor.texture_format
        # older Unity versions only carry m_MipMap, newer ones only m_MipCount
        if "m_MipCount" in tree:
            tree["m_MipCount"] = descriptor.mip_count
        if "m_MipMap" in tree:
            tree["m_MipMap"] = descriptor.mip_map
        tree["m_CompleteImageSize"] = len(descriptor.image_data)
        tree[IMAGE_DATA_KEY] = descriptor.image_data
        if "m_StreamData" in tree:
            tree["m_StreamData"] = dict(descriptor.stream_data or {"offset": 0, "size": 0, "path": ""})
        return tree


def format_name(value: int) -> str:
    try:
        return TextureFormat(value).name
    except ValueError:
        return str(value)

"""
Image intake.

Accepts one uploaded photo and turns it into the two shapes the app needs:
a data URL for the preview and a bare base64 body plus MIME type for the
analysis request. Files that are not images are ignored.
"""

import base64
import binascii
import io
import re
from dataclasses import dataclass
from typing import Optional

from PIL import Image

from core.logging import get_logger

logger = get_logger(__name__)

_DATA_URL = re.compile(r"^data:(?P<mime>[^;,]+)(?:;[^,]*)?;base64,(?P<data>.*)$", re.DOTALL)


def is_image_mime(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and mime_type.strip().lower().startswith("image/")


@dataclass(frozen=True)
class ImagePayload:
    """An accepted photo: MIME type plus base64 body without the data-URL prefix."""

    mime_type: str
    data: str

    @property
    def data_url(self) -> str:
        """Preview form, e.g. data:image/jpeg;base64,...."""
        return f"data:{self.mime_type};base64,{self.data}"

    @property
    def raw_bytes(self) -> bytes:
        return base64.b64decode(self.data)

    @classmethod
    def from_bytes(cls, content: bytes, mime_type: str) -> "ImagePayload":
        return cls(
            mime_type=mime_type.strip().lower(),
            data=base64.b64encode(content).decode("ascii"),
        )

    @classmethod
    def from_data_url(cls, url: str) -> "ImagePayload":
        """
        Parse a data URL, stripping the ``data:<mime>;base64,`` prefix.

        Raises:
            ValueError: not a base64 data URL, or not an image
        """
        match = _DATA_URL.match(url.strip())
        if match is None:
            raise ValueError("Not a base64 data URL")
        mime_type = match.group("mime").strip().lower()
        if not is_image_mime(mime_type):
            raise ValueError(f"Not an image: {mime_type}")
        data = match.group("data").strip()
        try:
            base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid base64 image data: {e}") from e
        return cls(mime_type=mime_type, data=data)

    @classmethod
    def from_pil(cls, image: Image.Image, fmt: str = "JPEG", quality: int = 90) -> "ImagePayload":
        """Encode a Pillow image (e.g. from a Gradio upload)."""
        if fmt.upper() == "JPEG" and image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        buf = io.BytesIO()
        image.save(buf, format=fmt, quality=quality)
        return cls.from_bytes(buf.getvalue(), f"image/{fmt.lower()}")


def accept_image(content: bytes, mime_type: Optional[str]) -> Optional[ImagePayload]:
    """
    Take an uploaded file if it is an image.

    Returns None (and nothing else happens) when the MIME type does not start
    with ``image/`` or the file is empty.
    """
    if not is_image_mime(mime_type):
        logger.debug("Ignoring non-image upload", mime_type=mime_type)
        return None
    if not content:
        logger.debug("Ignoring empty upload", mime_type=mime_type)
        return None
    return ImagePayload.from_bytes(content, mime_type)

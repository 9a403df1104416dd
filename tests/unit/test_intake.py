"""
Tests for image intake.
"""

import base64

import pytest
from PIL import Image

from analysis.intake import ImagePayload, accept_image, is_image_mime


class TestAcceptImage:
    """Tests for filtering uploads."""

    def test_image_is_accepted(self):
        payload = accept_image(b"\x89PNG-bytes", "image/png")

        assert payload is not None
        assert payload.mime_type == "image/png"
        assert payload.raw_bytes == b"\x89PNG-bytes"

    def test_non_image_is_ignored(self):
        assert accept_image(b"%PDF-1.7", "application/pdf") is None

    def test_missing_type_is_ignored(self):
        assert accept_image(b"data", None) is None

    def test_empty_file_is_ignored(self):
        assert accept_image(b"", "image/jpeg") is None

    @pytest.mark.parametrize("mime", ["image/jpeg", "IMAGE/PNG", "image/webp"])
    def test_image_mime_types(self, mime):
        assert is_image_mime(mime) is True


class TestImagePayload:
    """Tests for the preview and request forms of a photo."""

    def test_data_url_and_bare_base64(self):
        payload = ImagePayload.from_bytes(b"abc", "image/jpeg")

        assert payload.data == base64.b64encode(b"abc").decode("ascii")
        assert payload.data_url == f"data:image/jpeg;base64,{payload.data}"
        assert not payload.data.startswith("data:")

    def test_from_data_url_strips_prefix(self):
        body = base64.b64encode(b"png-bytes").decode("ascii")

        payload = ImagePayload.from_data_url(f"data:image/png;base64,{body}")

        assert payload.mime_type == "image/png"
        assert payload.data == body

    def test_from_data_url_rejects_non_image(self):
        body = base64.b64encode(b"text").decode("ascii")

        with pytest.raises(ValueError):
            ImagePayload.from_data_url(f"data:text/plain;base64,{body}")

    def test_from_data_url_rejects_garbage(self):
        with pytest.raises(ValueError):
            ImagePayload.from_data_url("not a data url")

    def test_from_pil_converts_to_jpeg(self):
        image = Image.new("RGBA", (4, 4), (255, 0, 0, 128))

        payload = ImagePayload.from_pil(image)

        assert payload.mime_type == "image/jpeg"
        assert payload.raw_bytes[:2] == b"\xff\xd8"

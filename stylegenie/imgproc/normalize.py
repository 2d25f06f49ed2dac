"""Image normalisation helpers."""

from __future__ import annotations

import base64
import binascii
from io import BytesIO

from PIL import Image, UnidentifiedImageError


class InvalidImageError(ValueError):
    """Raised when an uploaded payload is not a decodable image."""


class ImageNormalizer:
    """Validates uploads and re-encodes them as data URLs for the vision model."""

    def decode(self, image: bytes | str) -> bytes:
        """Return raw image bytes from bytes, base64 text or a ``data:`` URL."""

        if isinstance(image, bytes):
            return image
        if not isinstance(image, str) or not image.strip():
            raise InvalidImageError("No image provided.")

        encoded = image.strip()
        if encoded.startswith("data:"):
            if "," not in encoded:
                raise InvalidImageError("Malformed data URL.")
            _, encoded = encoded.split(",", 1)
        try:
            return base64.b64decode(encoded, validate=True)
        except (ValueError, binascii.Error) as exc:
            raise InvalidImageError("Image payload is not valid base64.") from exc

    def to_data_url(self, image: bytes | str) -> str:
        """Verify the image with Pillow and return a ``data:image/...`` URL."""

        raw = self.decode(image)
        try:
            with Image.open(BytesIO(raw)) as img:
                img.verify()
                image_format = (img.format or "PNG").lower()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
            raise InvalidImageError("Uploaded file is not a supported image.") from exc

        mime = "jpeg" if image_format == "jpg" else image_format
        return f"data:image/{mime};base64,{base64.b64encode(raw).decode('ascii')}"

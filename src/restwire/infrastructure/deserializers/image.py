# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Image deserializer.

The decoding backend is an injected callable (``bytes -> image``). The default
uses Pillow; other backends can be swapped in without touching the pipeline.
"""

from __future__ import annotations

import io
from typing import Any, Final

from PIL import Image

from restwire.domain.exceptions.networking import DeserializationError
from restwire.domain.interfaces.deserializer import ImageDecoder


def decode_with_pillow(data: bytes) -> Image.Image:
    """Decode ``data`` into a fully loaded ``PIL.Image.Image``.

    Raises:
        PIL.UnidentifiedImageError: If the bytes are not a recognized image.
        OSError: If the image is truncated or otherwise unreadable.
    """
    image = Image.open(io.BytesIO(data))
    # Force decoding now so corrupt payloads fail here and not on first use.
    image.load()
    return image


class ImageDeserializer:
    """Decode an image body.

    Args:
        decoder: Image decoding capability; defaults to :func:`decode_with_pillow`.
    """

    accept_header: Final[str] = "image/*"

    def __init__(self, decoder: ImageDecoder[Any] | None = None) -> None:
        self._decoder: ImageDecoder[Any] = decoder or decode_with_pillow

    def deserialize(self, data: bytes) -> Any:
        """Decode ``data``.

        Raises:
            DeserializationError: If the decoder rejects the bytes.
        """
        try:
            return self._decoder(data)
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise DeserializationError("Response is not a valid image.", data, exc) from exc

    def __repr__(self) -> str:
        return "ImageDeserializer()"

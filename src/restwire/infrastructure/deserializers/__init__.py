# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Built-in deserializers.

Purpose:
    Group the stock implementations of the ``Deserializer`` port:

    * json_deserializer: ``JSONValue`` trees and pydantic-decoded types.
    * raw: bytes, text and empty bodies.
    * image: Pillow-backed image decoding.
"""

from __future__ import annotations

from restwire.infrastructure.deserializers.image import ImageDeserializer, decode_with_pillow
from restwire.infrastructure.deserializers.json_deserializer import (
    DecodableDeserializer,
    JSONDeserializer,
)
from restwire.infrastructure.deserializers.raw import (
    DataDeserializer,
    TextDeserializer,
    VoidDeserializer,
)

__all__ = [
    "DataDeserializer",
    "DecodableDeserializer",
    "ImageDeserializer",
    "JSONDeserializer",
    "TextDeserializer",
    "VoidDeserializer",
    "decode_with_pillow",
]

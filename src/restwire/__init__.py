# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""restwire: async REST calls against a fixed base URL.

Typical usage::

    from restwire import JSONValue, RequestOptions, RestController

    rest = RestController.make("https://httpbin.org")
    body = JSONValue.from_dict(key1="value1", key2=2)
    json, response = await rest.post(body, path="post", options=RequestOptions.expect(200))
    json["json"]["key1"].as_string()  # "value1"
"""

from __future__ import annotations

from restwire._version import __version__
from restwire.domain.exceptions import (
    BadResponse,
    DeserializationError,
    JSONEncodeError,
    JSONParseError,
    JSONShapeError,
    JSONValueError,
    MalformedResponse,
    NetworkingError,
    RestwireError,
    TransportError,
    TransportTimeout,
    UnexpectedStatusCode,
)
from restwire.domain.interfaces import Deserializer, ImageDecoder
from restwire.domain.json_value import JSONKind, JSONValue
from restwire.domain.response import ResponseMetadata, RestResult
from restwire.infrastructure.deserializers import (
    DataDeserializer,
    DecodableDeserializer,
    ImageDeserializer,
    JSONDeserializer,
    TextDeserializer,
    VoidDeserializer,
)
from restwire.infrastructure.http import (
    HeaderGenerator,
    RequestOptions,
    RestController,
    TrustPolicy,
)

__all__ = [
    "BadResponse",
    "DataDeserializer",
    "DecodableDeserializer",
    "DeserializationError",
    "Deserializer",
    "HeaderGenerator",
    "ImageDecoder",
    "ImageDeserializer",
    "JSONDeserializer",
    "JSONEncodeError",
    "JSONKind",
    "JSONParseError",
    "JSONShapeError",
    "JSONValue",
    "JSONValueError",
    "MalformedResponse",
    "NetworkingError",
    "RequestOptions",
    "ResponseMetadata",
    "RestController",
    "RestResult",
    "RestwireError",
    "TextDeserializer",
    "TransportError",
    "TransportTimeout",
    "TrustPolicy",
    "UnexpectedStatusCode",
    "VoidDeserializer",
    "__version__",
]

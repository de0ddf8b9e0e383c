"""Encode and decode Open Financial Exchange (OFX) documents."""

from __future__ import annotations

from importlib import metadata as _metadata

from ofxcodec.constants import MessageType, OfxVersion
from ofxcodec.document import Request, Response, decode_response, parse_request, parse_response
from ofxcodec.errors import (
    HeaderFormatError,
    OfxError,
    ScalarFormatError,
    StructuralParseError,
    TransportError,
    ValidityError,
)

__all__ = [
    'HeaderFormatError',
    'MessageType',
    'OfxError',
    'OfxVersion',
    'Request',
    'Response',
    'ScalarFormatError',
    'StructuralParseError',
    'TransportError',
    'ValidityError',
    'decode_response',
    'parse_request',
    'parse_response',
]


def __getattr__(name: str) -> str:
    """Provide dynamic attributes such as ``__version__`` from package metadata."""

    if name == '__version__':
        return _metadata.version('ofxcodec')
    raise AttributeError(name)

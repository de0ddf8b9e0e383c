"""Exception hierarchy shared by the codec and the transport client."""

from __future__ import annotations


class OfxError(Exception):
    """Base class for every error raised by ofxcodec."""


class HeaderFormatError(OfxError):
    """Raised when a document header is malformed or names an unsupported version."""


class StructuralParseError(OfxError):
    """Raised when the token stream does not have the expected shape."""


class ScalarFormatError(OfxError, ValueError):
    """Raised when leaf text does not match the grammar of its wire type."""


class ValidityError(OfxError):
    """Raised when a decoded or to-be-encoded message fails its semantic checks."""


class TransportError(OfxError):
    """Raised by the client when an HTTP round trip fails."""

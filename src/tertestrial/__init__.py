"""Tertestrial trigger decoding.

Turns newline-delimited JSON commands sent by editor clients into typed
`Trigger` values, or into a `DecodeError` that blames the client.
"""

__version__ = "0.1.0"

from tertestrial.errors import DecodeError
from tertestrial.trigger import DecodeResult, Trigger, decode, encode

__all__ = ["__version__", "DecodeError", "DecodeResult", "Trigger", "decode", "encode"]

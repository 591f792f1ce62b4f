"""
Base64 helpers for the text-safe message framing.
Decoding is strict: characters outside the standard alphabet are rejected.
"""

import base64
import binascii


def b64e(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode('ascii')


def b64d(text) -> bytes:
    """
    Decode standard base64 text.

    Whitespace (line wrapping) is ignored; anything else outside the
    alphabet, or bad padding, raises ValueError.
    """
    try:
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode('ascii')
        compact = ''.join(text.split())
        return base64.b64decode(compact.encode('ascii'), validate=True)
    except (binascii.Error, UnicodeError) as e:
        raise ValueError(f"Invalid base64 data: {e}")

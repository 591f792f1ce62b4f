"""Signed-and-encrypted text messages between identities and peers."""

from .cipher import DecryptedMessage, EncryptedMessage, decrypt, encrypt

__all__ = [
    'EncryptedMessage',
    'DecryptedMessage',
    'encrypt',
    'decrypt',
]

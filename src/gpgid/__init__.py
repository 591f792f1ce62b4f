"""
gpgid - local OpenPGP identity with one-way admin trust

Generates a self-signed OpenPGP identity, imports an admin public key,
and exchanges signed-and-encrypted text messages framed as base64.

Main exports:
- IdentityEngine: Main engine class
- IdentityDraft / Identity: identity lifecycle
- TrustedPeer: imported peer public key
- encrypt / decrypt: message cipher
"""

from .engine import IdentityEngine, default_registry
from .identity import (
    Identity,
    IdentityDraft,
    TrustedPeer,
    create_identity,
    import_peer,
    load_peer,
    self_sign,
)
from .message import DecryptedMessage, EncryptedMessage, decrypt, encrypt
from .policy import DEFAULT_PREFERENCES, PreferencePolicy
from .registry import TypeRegistry
from .errors import *

__version__ = "0.1.0"

__all__ = [
    'IdentityEngine',
    'default_registry',
    'Identity',
    'IdentityDraft',
    'TrustedPeer',
    'create_identity',
    'import_peer',
    'load_peer',
    'self_sign',
    'EncryptedMessage',
    'DecryptedMessage',
    'encrypt',
    'decrypt',
    'PreferencePolicy',
    'DEFAULT_PREFERENCES',
    'TypeRegistry',
]

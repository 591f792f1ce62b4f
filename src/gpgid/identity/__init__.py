"""Identity lifecycle: draft, self-signing, frozen identity and trusted peers."""

from .draft import IdentityDraft, create_identity
from .identity import Identity
from .peer import TrustedPeer, import_peer, load_peer
from .signer import self_sign

__all__ = [
    'IdentityDraft',
    'create_identity',
    'Identity',
    'TrustedPeer',
    'import_peer',
    'load_peer',
    'self_sign',
]

"""
Signed, immutable identities.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from pgpy import PGPKey, PGPMessage

from ..config import DEFAULT_HASH
from ..errors import IdentityError, InvariantViolationError
from ..policy import PreferencePolicy
from ..utils.time import format_timestamp, now


@dataclass(frozen=True, eq=False)
class Identity:
    """
    A fully self-signed local identity.

    Instances are only produced by the self-signer and are never mutated.
    The private key is held in ``_key`` and never handed out; callers get
    read-only views, exports, and the sign and decrypt operations below.
    """
    name: str
    comment: str
    email: str
    _key: PGPKey = field(repr=False)
    signed_at: datetime = field(default_factory=now)

    @property
    def fingerprint(self) -> str:
        return str(self._key.fingerprint).replace(' ', '')

    @property
    def key_id(self) -> str:
        return self._key.fingerprint.keyid

    @property
    def userids(self) -> List[str]:
        """User id strings in 'name (comment) <email>' form."""
        return [uid.userid for uid in self._key.userids]

    @property
    def subkey_ids(self) -> List[str]:
        return list(self._key.subkeys)

    def key_ids(self) -> set:
        """Key ids of the primary key and all subkeys."""
        return {self.key_id} | set(self._key.subkeys)

    @property
    def public_key(self) -> PGPKey:
        """Public half of the key, with signed user ids and subkeys."""
        return self._key.pubkey

    def sign_message(self, message: PGPMessage):
        """
        Sign ``message`` with the primary key.

        Returns:
            PGPSignature to attach to the message
        """
        return self._key.sign(message, hash=DEFAULT_HASH)

    def decrypt_pgp_message(self, message: PGPMessage) -> PGPMessage:
        """Decrypt ``message`` with this identity's private keys."""
        return self._key.decrypt(message)

    def export_public_key(self) -> bytes:
        """
        Export the public key in binary OpenPGP packet encoding.

        Returns:
            Primary key, signed user ids and signed subkeys as bytes
        """
        return bytes(self._key.pubkey)

    def export_public_key_armored(self) -> str:
        """Export the public key as ASCII armor."""
        return str(self._key.pubkey)

    def export_private_key_armored(self) -> str:
        """
        Export the private key as ASCII armor.
        WARNING: Handle with extreme care.
        """
        return str(self._key)

    def preferences(self) -> PreferencePolicy:
        """
        Read the advertised preferences from the primary user id.

        Raises:
            IdentityError: If the self-signature carries no preferences
        """
        uid = next(iter(self._key.userids))
        try:
            return PreferencePolicy.from_signature(uid.selfsig)
        except InvariantViolationError as e:
            raise IdentityError(f"Self-signature has no usable preferences: {e}") from e

    def as_peer(self):
        """
        Re-import this identity's exported public key as a TrustedPeer.

        Returns:
            TrustedPeer holding only public material
        """
        from .peer import import_peer

        return import_peer(self.export_public_key())

    def to_dict(self) -> Dict[str, Any]:
        """Convert identity metadata to a dictionary (no key material)."""
        return {
            'name': self.name,
            'comment': self.comment,
            'email': self.email,
            'fingerprint': self.fingerprint,
            'userids': self.userids,
            'signed_at': format_timestamp(self.signed_at),
        }

    @classmethod
    def from_private_key(cls, armored: str) -> 'Identity':
        """
        Load a previously exported, fully self-signed private key.

        Args:
            armored: ASCII-armored private key

        Returns:
            Identity

        Raises:
            IdentityError: If the key is public, malformed, or not self-signed
        """
        from ..invariants import validate_identity_signed

        try:
            key, _ = PGPKey.from_blob(armored)
        except Exception as e:
            raise IdentityError(f"Invalid private key data: {e}") from e

        if key.fingerprint is None or key.is_public:
            raise IdentityError("Data does not contain a private key")

        try:
            validate_identity_signed(key)
        except InvariantViolationError as e:
            raise IdentityError(f"Private key is not a signed identity: {e}") from e

        uid = next(iter(key.userids))
        return cls(
            name=uid.name,
            comment=uid.comment or "",
            email=uid.email or "",
            _key=key,
            signed_at=uid.selfsig.created,
        )

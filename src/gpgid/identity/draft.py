"""
Unsigned identity drafts.
A draft owns freshly generated key material and unsigned user ids. It turns
into a usable Identity only through self-signing.
"""

import logging
from typing import List, Optional

from pgpy import PGPKey, PGPUID

from ..config import KEY_ALGORITHM, KEY_SIZE_BITS
from ..errors import KeyGenerationError

logger = logging.getLogger(__name__)


class IdentityDraft:
    """
    Mutable builder for an Identity.
    """

    def __init__(self, primary: PGPKey, subkeys: Optional[List[PGPKey]] = None):
        """
        Initialize draft from generated key material.

        Args:
            primary: Private primary key, without user ids or subkeys
            subkeys: Private keys to bind as subkeys when signing
        """
        if primary.is_public:
            raise KeyGenerationError("Draft primary key must be a private key")

        self._primary = primary
        self._subkeys = list(subkeys or [])
        self._userids: List[PGPUID] = []
        self._signed = False

    @classmethod
    def create(
        cls,
        name: str,
        comment: str = "",
        email: str = "",
        key_size: int = KEY_SIZE_BITS,
    ) -> 'IdentityDraft':
        """
        Generate a primary key, one encryption subkey and one user id.

        Args:
            name: Display name
            comment: Free-form comment, may be empty
            email: Email address
            key_size: RSA modulus size in bits

        Returns:
            New unsigned IdentityDraft

        Raises:
            KeyGenerationError: If the name is empty or key generation fails
        """
        if not name or not name.strip():
            raise KeyGenerationError("Identity name must not be empty")

        logger.info("Generating %d-bit keypair for %s", key_size, name)
        try:
            primary = PGPKey.new(KEY_ALGORITHM, key_size)
            subkey = PGPKey.new(KEY_ALGORITHM, key_size)
        except Exception as e:
            logger.error("Key generation failed for %s: %s", name, e)
            raise KeyGenerationError(f"Cannot generate keypair: {e}") from e

        draft = cls(primary, subkeys=[subkey])
        draft.add_userid(name, comment, email)
        return draft

    def add_userid(self, name: str, comment: str = "", email: str = "") -> PGPUID:
        """
        Add an unsigned user id binding.

        Raises:
            KeyGenerationError: If the draft is already signed or the user id is invalid
        """
        if self._signed:
            raise KeyGenerationError("Cannot add a user id to a signed identity")

        if not name or not name.strip():
            raise KeyGenerationError("User id name must not be empty")

        try:
            uid = PGPUID.new(name, comment=comment or "", email=email or "")
        except Exception as e:
            raise KeyGenerationError(f"Invalid user id: {e}") from e

        self._userids.append(uid)
        return uid

    def self_sign(self, policy=None, created=None):
        """Self-sign this draft. See :func:`gpgid.identity.signer.self_sign`."""
        from .signer import self_sign

        return self_sign(self, policy=policy, created=created)

    def mark_signed(self):
        """Consume the draft; it cannot be signed or extended afterwards."""
        self._signed = True

    @property
    def is_signed(self) -> bool:
        return self._signed

    @property
    def primary(self) -> PGPKey:
        return self._primary

    @property
    def subkeys(self) -> List[PGPKey]:
        return list(self._subkeys)

    @property
    def userids(self) -> List[PGPUID]:
        return list(self._userids)

    @property
    def name(self) -> str:
        return self._userids[0].name if self._userids else ""

    @property
    def comment(self) -> str:
        return (self._userids[0].comment or "") if self._userids else ""

    @property
    def email(self) -> str:
        return (self._userids[0].email or "") if self._userids else ""


def create_identity(name: str, comment: str = "", email: str = "", **kwargs):
    """
    Create and self-sign an identity in one step.

    Keyword arguments ``key_size``, ``policy`` and ``created`` are forwarded.

    Raises:
        KeyGenerationError: If key generation fails
        SigningError: If self-signing fails
    """
    key_size = kwargs.pop('key_size', KEY_SIZE_BITS)
    draft = IdentityDraft.create(name, comment, email, key_size=key_size)
    return draft.self_sign(**kwargs)

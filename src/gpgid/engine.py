"""
gpgid public API.

IdentityEngine owns one self-signed identity and, optionally, the admin
peer it reports to. It is also the composition root for the type registry.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .config import IDENTITY_TYPE_TAG, KEY_SIZE_BITS, PEER_TYPE_TAG
from .errors import KeyImportError, NoTrustedPeerError
from .identity import Identity, IdentityDraft, TrustedPeer, import_peer, load_peer
from .message import DecryptedMessage, EncryptedMessage, decrypt, encrypt
from .policy import PreferencePolicy
from .registry import TypeRegistry
from .storage import write_admin_message, write_public_key

logger = logging.getLogger(__name__)


def default_registry() -> TypeRegistry:
    """
    Build a registry that knows identities and trusted peers.

    Identities are stored as armored private keys; peers as armored public keys.
    """
    registry = TypeRegistry()
    registry.register(
        IDENTITY_TYPE_TAG,
        Identity,
        lambda identity: {'private_key': identity.export_private_key_armored()},
        lambda value: Identity.from_private_key(value['private_key']),
    )
    registry.register(
        PEER_TYPE_TAG,
        TrustedPeer,
        lambda peer: {'public_key': peer.export_public_key_armored()},
        lambda value: import_peer(value['public_key']),
    )
    return registry


class IdentityEngine:
    """
    Main entry point: one local identity plus an optional admin peer.

    This is the primary interface for:
    - Creating and self-signing the local identity
    - Importing the admin public key
    - Exporting the public key
    - Encrypting to peers and decrypting messages addressed to us
    """

    def __init__(
        self,
        name: str,
        email: str,
        admin_key_path: Optional[Union[str, Path]] = None,
        comment: str = "",
        strict: bool = False,
        key_size: int = KEY_SIZE_BITS,
        policy: Optional[PreferencePolicy] = None,
        registry: Optional[TypeRegistry] = None,
    ):
        """
        Create the identity and import the admin key.

        Args:
            name: Display name of the local identity
            email: Email address of the local identity
            admin_key_path: Path to the admin's public key file, if any
            comment: User id comment
            strict: Raise on admin import failure instead of running without admin
            key_size: RSA key size in bits
            policy: Preferences to advertise in self-signatures
            registry: Type registry for serialize(); a fresh default_registry() if omitted

        Raises:
            KeyGenerationError: If the keypair cannot be generated
            SigningError: If self-signing fails
            KeyImportError: If ``strict`` and the admin key cannot be imported
        """
        logger.info("Initializing identity for %s <%s>", name, email)
        draft = IdentityDraft.create(name, comment, email, key_size=key_size)
        self.identity: Identity = draft.self_sign(policy=policy)
        self.registry = registry if registry is not None else default_registry()

        self.admin: Optional[TrustedPeer] = None
        self.admin_error: Optional[KeyImportError] = None
        if admin_key_path is not None:
            self.load_admin(admin_key_path, strict=strict)

    @classmethod
    def from_identity(
        cls,
        identity: Identity,
        admin: Optional[TrustedPeer] = None,
        registry: Optional[TypeRegistry] = None,
    ) -> 'IdentityEngine':
        """Wrap an existing identity without generating new keys."""
        engine = cls.__new__(cls)
        engine.identity = identity
        engine.registry = registry if registry is not None else default_registry()
        engine.admin = admin
        engine.admin_error = None
        return engine

    # ==================== Admin Trust ====================

    def load_admin(self, path: Union[str, Path], strict: bool = False) -> Optional[TrustedPeer]:
        """
        Import the admin public key from a file.

        With ``strict`` false a failure is logged, ``admin`` is cleared and the
        error is kept on ``admin_error``.

        Raises:
            KeyImportError: If ``strict`` and the key cannot be imported
        """
        try:
            self.admin = load_peer(path)
            self.admin_error = None
        except KeyImportError as e:
            self.admin = None
            self.admin_error = e
            if strict:
                raise
            logger.error("Admin key not imported, continuing without admin: %s", e)
        return self.admin

    @property
    def has_admin(self) -> bool:
        return self.admin is not None

    # ==================== Export ====================

    def export_public_key(self, prefix: Union[str, Path]) -> Path:
        """
        Write the public key to ``<prefix>/PubGPG1.gpg``.

        Raises:
            PersistenceError: If the file cannot be written
        """
        return write_public_key(self.identity, prefix)

    # ==================== Messages ====================

    def encrypt_message(self, peer, plaintext: str) -> EncryptedMessage:
        """
        Sign and encrypt ``plaintext`` to ``peer``.

        Raises:
            EncryptionError: If encryption fails
        """
        return encrypt(self.identity, peer, plaintext)

    def encrypt_to(self, peer, plaintext: str) -> str:
        """
        Sign and encrypt ``plaintext`` to ``peer``.

        Returns:
            Base64 text of the encrypted message

        Raises:
            EncryptionError: If encryption fails
        """
        return self.encrypt_message(peer, plaintext).encoded

    def write_to_admin(self, plaintext: str, prefix: Union[str, Path]) -> Path:
        """
        Encrypt ``plaintext`` to the admin and write ``<prefix>/MessageForAdmin.gpg``.

        Raises:
            NoTrustedPeerError: If no admin key was imported
            EncryptionError: If encryption fails
            PersistenceError: If the file cannot be written
        """
        if self.admin is None:
            raise NoTrustedPeerError("No admin public key has been imported")

        logger.info("Writing message to admin %s", self.admin.key_id)
        message = self.encrypt_message(self.admin, plaintext)
        return write_admin_message(message, prefix)

    def decrypt_message(self, encoded) -> DecryptedMessage:
        """
        Decrypt a message addressed to the local identity.

        Raises:
            DecodingError: If the text is not valid base64
            DecryptionError: If the message cannot be decrypted
        """
        return decrypt(self.identity, encoded)

    def decrypt(self, encoded) -> str:
        """
        Decrypt a message addressed to the local identity.

        Returns:
            Plaintext; the sender signature is not checked

        Raises:
            DecodingError: If the text is not valid base64
            DecryptionError: If the message cannot be decrypted
        """
        return self.decrypt_message(encoded).plaintext

    # ==================== Serialization ====================

    def serialize(self) -> bytes:
        """Serialize the local identity through the type registry."""
        return self.registry.dumps(self.identity)

    def to_dict(self):
        return {
            'identity': self.identity.to_dict(),
            'admin': self.admin.to_dict() if self.admin is not None else None,
        }

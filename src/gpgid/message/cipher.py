"""
Message cipher.

Messages are OpenPGP literal data, signed by the sending identity,
compressed, encrypted to the recipient's encryption key and framed as
standard base64 text. Decryption only ever tries the local identity's
own keys.
"""

import logging
import warnings
from dataclasses import dataclass, field
from typing import FrozenSet

from pgpy import PGPMessage
from pgpy.constants import CompressionAlgorithm

from ..config import TEXT_ENCODING
from ..errors import (
    DecodingError,
    DecryptionError,
    EncryptionError,
    SignatureVerificationError,
    UnsignedIdentityError,
)
from ..identity.identity import Identity
from ..identity.peer import TrustedPeer
from ..invariants import validate_can_encrypt
from ..utils.encoding import b64d, b64e

logger = logging.getLogger(__name__)

SUPPORTED_COMPRESSION = (
    CompressionAlgorithm.ZLIB,
    CompressionAlgorithm.ZIP,
    CompressionAlgorithm.Uncompressed,
)


@dataclass(frozen=True)
class EncryptedMessage:
    """
    Base64-framed, signed-and-encrypted OpenPGP message.
    """
    encoded: str
    sender_key_id: str
    recipient_key_id: str

    def to_bytes(self) -> bytes:
        """Binary OpenPGP message."""
        return b64d(self.encoded)

    def __str__(self):
        return self.encoded


@dataclass(frozen=True)
class DecryptedMessage:
    """
    Plaintext plus the signer key ids the message claims.

    The claimed signers are not checked against any key during decryption;
    use :meth:`verify_sender` or :meth:`require_sender` for that.
    """
    plaintext: str
    signer_key_ids: FrozenSet[str]
    message: PGPMessage = field(repr=False, compare=False)

    @property
    def is_signed(self) -> bool:
        return bool(self.signer_key_ids)

    def verify_sender(self, sender) -> bool:
        """
        Check that the message carries a valid signature by ``sender``.

        Args:
            sender: TrustedPeer or Identity expected to have signed

        Returns:
            True if a signature by one of the sender's keys verifies
        """
        key = _public_key_of(sender)
        if not self.signer_key_ids & ({key.fingerprint.keyid} | set(key.subkeys)):
            return False

        with warnings.catch_warnings():
            warnings.simplefilter('ignore')
            try:
                return bool(key.verify(self.message))
            except Exception as e:
                logger.warning("Sender verification against %s failed: %s",
                               key.fingerprint.keyid, e)
                return False

    def require_sender(self, sender):
        """
        Raises:
            SignatureVerificationError: If ``sender`` did not sign the message
        """
        if not self.verify_sender(sender):
            raise SignatureVerificationError(
                f"Message is not signed by {_public_key_of(sender).fingerprint.keyid}"
            )

    def __str__(self):
        return self.plaintext


def encrypt(sender: Identity, recipient, plaintext: str) -> EncryptedMessage:
    """
    Sign ``plaintext`` with the sender and encrypt it to the recipient.

    Args:
        sender: Signed local Identity
        recipient: TrustedPeer or Identity
        plaintext: Text to protect

    Returns:
        EncryptedMessage

    Raises:
        UnsignedIdentityError: If the sender is not a signed Identity
        EncryptionError: If the recipient cannot receive or any step fails
    """
    if not isinstance(sender, Identity):
        raise UnsignedIdentityError("Only a self-signed Identity can send messages")

    if not isinstance(plaintext, str):
        raise EncryptionError(f"Plaintext must be str, got {type(plaintext).__name__}")

    try:
        recipient_key = _public_key_of(recipient)
        validate_can_encrypt(recipient_key)
    except Exception as e:
        raise EncryptionError(f"Invalid recipient: {e}") from e

    try:
        with warnings.catch_warnings():
            warnings.simplefilter('ignore')
            message = PGPMessage.new(plaintext, compression=_pick_compression(recipient_key))
            message |= sender.sign_message(message)
            encrypted = recipient_key.encrypt(message)
        blob = bytes(encrypted)
    except Exception as e:
        logger.error("Encryption to %s failed: %s", recipient_key.fingerprint.keyid, e)
        raise EncryptionError(f"Cannot encrypt message: {e}") from e

    if not blob:
        raise EncryptionError("Encryption produced no output")

    logger.info("Encrypted %d-byte message from %s to %s",
                len(blob), sender.key_id, recipient_key.fingerprint.keyid)
    return EncryptedMessage(
        encoded=b64e(blob),
        sender_key_id=sender.key_id,
        recipient_key_id=recipient_key.fingerprint.keyid,
    )


def decrypt(identity: Identity, encoded) -> DecryptedMessage:
    """
    Decode and decrypt a message addressed to ``identity``.

    Args:
        identity: Signed local Identity, the intended recipient
        encoded: Base64 text (or an EncryptedMessage)

    Returns:
        DecryptedMessage

    Raises:
        UnsignedIdentityError: If ``identity`` is not a signed Identity
        DecodingError: If the text is not valid base64
        DecryptionError: If the data is not a message for this identity or is corrupt
    """
    if not isinstance(identity, Identity):
        raise UnsignedIdentityError("Only a self-signed Identity can decrypt messages")

    if isinstance(encoded, EncryptedMessage):
        encoded = encoded.encoded

    try:
        blob = b64d(encoded)
    except (ValueError, TypeError, AttributeError) as e:
        raise DecodingError(f"Message is not valid base64: {e}") from e

    if not blob:
        raise DecryptionError("Message is empty")

    try:
        with warnings.catch_warnings():
            warnings.simplefilter('ignore')
            message = PGPMessage.from_blob(blob)
    except Exception as e:
        raise DecryptionError(f"Not an OpenPGP message: {e}") from e

    if not message.is_encrypted:
        raise DecryptionError("Message is not encrypted")

    own_ids = identity.key_ids()
    if not message.encrypters & own_ids:
        raise DecryptionError(f"Message is not addressed to {identity.key_id}")

    try:
        with warnings.catch_warnings():
            warnings.simplefilter('ignore')
            decrypted = identity.decrypt_pgp_message(message)
            content = decrypted.message
    except Exception as e:
        logger.error("Decryption for %s failed: %s", identity.key_id, e)
        raise DecryptionError(f"Cannot decrypt message: {e}") from e

    if isinstance(content, (bytes, bytearray)):
        try:
            content = bytes(content).decode(TEXT_ENCODING)
        except UnicodeDecodeError as e:
            raise DecryptionError(f"Plaintext is not {TEXT_ENCODING} text: {e}") from e

    if not isinstance(content, str):
        raise DecryptionError("Decrypted message carries no literal data")

    signers = frozenset(decrypted.signers)
    logger.info("Decrypted message for %s (claimed signers: %s)",
                identity.key_id, ", ".join(sorted(signers)) or "none")
    return DecryptedMessage(plaintext=content, signer_key_ids=signers, message=decrypted)


def _public_key_of(party):
    if isinstance(party, Identity):
        return party.public_key
    if isinstance(party, TrustedPeer):
        return party.key
    raise TypeError(f"Expected Identity or TrustedPeer, got {type(party).__name__}")


def _pick_compression(key) -> CompressionAlgorithm:
    uid = next(iter(key.userids), None)
    prefs = uid.selfsig.compprefs if uid is not None and uid.selfsig is not None else []
    return next((c for c in prefs if c in SUPPORTED_COMPRESSION), CompressionAlgorithm.ZIP)

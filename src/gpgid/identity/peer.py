"""
Trusted peers imported from serialized public keys.

The caller vouches for the key material (for example an admin-controlled
file). Self-signatures must be intact and verify, which rejects truncated
or corrupted keys, but no fingerprint or web-of-trust check is made.
"""

import logging
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from pgpy import PGPKey

from ..errors import InvariantViolationError, KeyImportError, PersistenceError
from ..invariants import validate_can_encrypt, validate_identity_signed, validate_public_only
from ..storage.files import read_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TrustedPeer:
    """
    Public-key-only counterpart, such as the admin key.
    """
    key: PGPKey = field(repr=False)

    def __post_init__(self):
        try:
            validate_public_only(self.key)
        except InvariantViolationError as e:
            raise KeyImportError(str(e))

    @property
    def fingerprint(self) -> str:
        return str(self.key.fingerprint).replace(' ', '')

    @property
    def key_id(self) -> str:
        return self.key.fingerprint.keyid

    @property
    def userids(self) -> List[str]:
        return [uid.userid for uid in self.key.userids]

    @property
    def name(self) -> str:
        uid = next(iter(self.key.userids), None)
        return uid.name if uid is not None else ""

    @property
    def email(self) -> str:
        uid = next(iter(self.key.userids), None)
        return (uid.email or "") if uid is not None else ""

    @property
    def public_key(self) -> PGPKey:
        return self.key

    def key_ids(self) -> set:
        """Key ids of the primary key and all subkeys."""
        return {self.key_id} | set(self.key.subkeys)

    def export_public_key(self) -> bytes:
        return bytes(self.key)

    def export_public_key_armored(self) -> str:
        return str(self.key)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'fingerprint': self.fingerprint,
            'userids': self.userids,
        }

    def __repr__(self):
        return f"TrustedPeer({self.key_id}, {self.userids!r})"


def import_peer(data: Union[bytes, bytearray, str]) -> TrustedPeer:
    """
    Parse one OpenPGP public key entity.

    The key must parse completely: every user id and subkey signature has
    to be present and verify under the peer's primary key, and the key
    must be able to receive encrypted messages.

    Args:
        data: Binary packets or ASCII-armored key

    Returns:
        TrustedPeer

    Raises:
        KeyImportError: If the source is empty, malformed, truncated or unusable
    """
    if not data:
        raise KeyImportError("Public key source is empty")

    if isinstance(data, (bytes, bytearray)):
        data = bytes(data)

    try:
        # PGPy warns on orphaned or unrecognised packets; the checks below reject those keys
        with warnings.catch_warnings():
            warnings.simplefilter('ignore')
            key, _ = PGPKey.from_blob(data)
    except Exception as e:
        logger.error("Cannot parse public key: %s", e)
        raise KeyImportError(f"Malformed public key: {e}") from e

    try:
        if key is None or key.fingerprint is None:
            raise KeyImportError("Source does not contain a public key")

        if not key.is_primary:
            raise KeyImportError("Source does not start with a primary key")

        if not key.is_public:
            logger.warning("Peer key %s contains private material; keeping public half only",
                           key.fingerprint.keyid)
            key = key.pubkey

        validate_identity_signed(key)
        validate_can_encrypt(key)
        peer = TrustedPeer(key)

    except KeyImportError:
        raise
    except Exception as e:
        logger.error("Rejected public key: %s", e)
        raise KeyImportError(f"Incomplete or invalid public key: {e}") from e

    logger.info("Imported peer %s %s", peer.key_id, peer.userids)
    return peer


def load_peer(path: Union[str, Path]) -> TrustedPeer:
    """
    Read and import a public key file.

    Raises:
        KeyImportError: If the file cannot be read or parsed
    """
    logger.info("Loading peer public key from %s", path)
    try:
        data = read_file(path)
    except PersistenceError as e:
        logger.error("Cannot read public key file %s: %s", path, e)
        raise KeyImportError(f"Cannot read public key file {path}: {e}") from e

    return import_peer(data)

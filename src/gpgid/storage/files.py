"""
File persistence for exported public keys and admin messages.
Writes are atomic: a temporary file in the target directory is renamed
into place, so a failed write never leaves a partial file behind.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from ..config import ADMIN_MESSAGE_FILENAME, PUBLIC_KEY_FILENAME
from ..errors import PersistenceError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def atomic_write(path: PathLike, data: bytes) -> Path:
    """
    Write bytes to ``path`` atomically.

    Args:
        path: Destination file; its directory must exist
        data: Bytes to write

    Returns:
        Destination path

    Raises:
        PersistenceError: If the file cannot be written
    """
    target = Path(path)
    directory = target.parent
    if not directory.is_dir():
        raise PersistenceError(f"Directory does not exist: {directory}")

    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(directory))
        with os.fdopen(fd, 'wb') as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, target)
        tmp_path = None
    except OSError as e:
        logger.error("Cannot write %s: %s", target, e)
        raise PersistenceError(f"Cannot write file {target}: {e}") from e
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)

    return target


def read_file(path: PathLike) -> bytes:
    """
    Read a whole file.

    Raises:
        PersistenceError: If the file cannot be read
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise PersistenceError(f"Cannot read file {path}: {e}") from e


def write_public_key(identity, prefix: PathLike) -> Path:
    """
    Write an identity's public key as binary packets to ``<prefix>/PubGPG1.gpg``.

    Returns:
        Path of the written file

    Raises:
        PersistenceError: If the file cannot be written
    """
    path = Path(prefix) / PUBLIC_KEY_FILENAME
    atomic_write(path, identity.export_public_key())
    logger.info("Saved public key %s to %s", identity.key_id, path)
    return path


def write_admin_message(message, prefix: PathLike) -> Path:
    """
    Write a base64-framed message to ``<prefix>/MessageForAdmin.gpg``.

    Args:
        message: EncryptedMessage or its base64 text
        prefix: Target directory

    Returns:
        Path of the written file

    Raises:
        PersistenceError: If the file cannot be written
    """
    encoded = getattr(message, 'encoded', message)
    path = Path(prefix) / ADMIN_MESSAGE_FILENAME
    atomic_write(path, encoded.encode('ascii'))
    logger.info("Saved admin message to %s", path)
    return path

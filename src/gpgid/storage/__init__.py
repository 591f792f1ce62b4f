"""File persistence for exported keys and messages."""

from .files import read_file, write_admin_message, write_public_key

__all__ = [
    'read_file',
    'write_public_key',
    'write_admin_message',
]

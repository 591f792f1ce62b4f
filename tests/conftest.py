"""
Shared identities for the test suite.
RSA generation is slow, so identities are created once per session.
Identities are immutable once signed, so sharing them is safe.
"""

import pytest
from pgpy import PGPKey

from gpgid import create_identity
from gpgid.config import KEY_ALGORITHM, KEY_SIZE_BITS


@pytest.fixture(scope="session")
def alice():
    return create_identity("Alice", email="alice@example.com")


@pytest.fixture(scope="session")
def bob():
    return create_identity("Bob", comment="peer", email="bob@example.com")


@pytest.fixture(scope="session")
def admin():
    return create_identity("Admin", email="admin@example.com")


@pytest.fixture
def bare_key():
    """A freshly generated private key with no user ids or subkeys."""
    return PGPKey.new(KEY_ALGORITHM, KEY_SIZE_BITS)

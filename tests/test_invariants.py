"""
Tests for security invariant validation.
These tests attempt to violate core identity invariants.
"""

import pytest
from pgpy import PGPKey, PGPUID
from pgpy.constants import HashAlgorithm, KeyFlags

from gpgid.errors import InvariantViolationError
from gpgid.invariants import (
    validate_can_encrypt,
    validate_identity_signed,
    validate_public_only,
)


class TestIdentitySigned:
    """Test the fully-signed identity invariant."""

    def test_signed_identity_passes(self, alice):
        private, _ = PGPKey.from_blob(alice.export_private_key_armored())

        validate_identity_signed(private)
        validate_identity_signed(alice.public_key)

    def test_key_without_userid_rejected(self, bare_key):
        """Test that a key with no user ids is not an identity."""
        with pytest.raises(InvariantViolationError):
            validate_identity_signed(bare_key)

    def test_corrupted_binding_rejected(self, bob):
        """Test that a subkey binding with a damaged signature value is rejected."""
        data = bytearray(bob.export_public_key())
        data[-3] ^= 0xFF
        key, _ = PGPKey.from_blob(bytes(data))

        with pytest.raises(InvariantViolationError):
            validate_identity_signed(key)


class TestPublicOnly:
    """Test that peers never hold private material."""

    def test_public_key_passes(self, alice):
        validate_public_only(alice.public_key)

    def test_private_key_rejected(self, bare_key):
        with pytest.raises(InvariantViolationError):
            validate_public_only(bare_key)


class TestCanEncrypt:
    """Test the encryption capability invariant."""

    def test_identity_can_encrypt(self, alice):
        validate_can_encrypt(alice.public_key)

    def test_sign_only_key_rejected(self, bare_key):
        """Test that a key flagged for signing only cannot receive messages."""
        bare_key.add_uid(
            PGPUID.new("Signer"),
            usage={KeyFlags.Sign},
            hash=HashAlgorithm.SHA256,
        )

        with pytest.raises(InvariantViolationError):
            validate_can_encrypt(bare_key.pubkey)

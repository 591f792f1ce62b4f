"""
Tests for the algorithm preference policy.
"""

from dataclasses import FrozenInstanceError

import pytest
from pgpy.constants import CompressionAlgorithm, HashAlgorithm, SymmetricKeyAlgorithm

from gpgid.errors import InvariantViolationError
from gpgid.policy import DEFAULT_PREFERENCES, PreferencePolicy


class TestDefaultPreferences:
    """Test the advertised default lists."""

    def test_cipher_order(self):
        """Test that ciphers are listed strongest first."""
        assert DEFAULT_PREFERENCES.ciphers == (
            SymmetricKeyAlgorithm.AES256,
            SymmetricKeyAlgorithm.AES192,
            SymmetricKeyAlgorithm.AES128,
            SymmetricKeyAlgorithm.CAST5,
            SymmetricKeyAlgorithm.TripleDES,
        )

    def test_hash_order(self):
        """Test that SHA256 leads the hash list."""
        assert DEFAULT_PREFERENCES.hashes == (
            HashAlgorithm.SHA256,
            HashAlgorithm.SHA1,
            HashAlgorithm.SHA384,
            HashAlgorithm.SHA512,
            HashAlgorithm.SHA224,
        )

    def test_compression_order(self):
        assert DEFAULT_PREFERENCES.compression == (
            CompressionAlgorithm.ZLIB,
            CompressionAlgorithm.ZIP,
        )

    def test_signature_prefs(self):
        """Test keyword arguments handed to the signer."""
        prefs = DEFAULT_PREFERENCES.as_signature_prefs()

        assert set(prefs) == {'ciphers', 'hashes', 'compression'}
        assert prefs['ciphers'][0] == SymmetricKeyAlgorithm.AES256
        assert prefs['hashes'][0] == HashAlgorithm.SHA256
        assert prefs['compression'] == [CompressionAlgorithm.ZLIB, CompressionAlgorithm.ZIP]

    def test_policy_is_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_PREFERENCES.ciphers = ()


class TestPolicyValidation:
    """Test policy construction and validation."""

    def test_dict_round_trip(self):
        """Test conversion through algorithm names."""
        data = DEFAULT_PREFERENCES.to_dict()

        assert data['ciphers'] == ['AES256', 'AES192', 'AES128', 'CAST5', 'TripleDES']
        assert PreferencePolicy.from_dict(data) == DEFAULT_PREFERENCES

    def test_empty_list_rejected(self):
        """Test that every preference list must be non-empty."""
        with pytest.raises(InvariantViolationError):
            PreferencePolicy(
                ciphers=[],
                hashes=[HashAlgorithm.SHA256],
                compression=[CompressionAlgorithm.ZLIB],
            )

    def test_duplicates_rejected(self):
        """Test that a preference list cannot repeat an algorithm."""
        with pytest.raises(InvariantViolationError):
            PreferencePolicy(
                ciphers=[SymmetricKeyAlgorithm.AES256],
                hashes=[HashAlgorithm.SHA256, HashAlgorithm.SHA256],
                compression=[CompressionAlgorithm.ZLIB],
            )

    def test_unknown_name_rejected(self):
        """Test that unknown algorithm names are rejected."""
        with pytest.raises(InvariantViolationError):
            PreferencePolicy.from_dict({
                'ciphers': ['ROT13'],
                'hashes': ['SHA256'],
                'compression': ['ZLIB'],
            })

    def test_missing_field_rejected(self):
        with pytest.raises(InvariantViolationError):
            PreferencePolicy.from_dict({'ciphers': ['AES256']})

    def test_lists_become_tuples(self):
        """Test that list input is stored as tuples."""
        policy = PreferencePolicy(
            ciphers=[SymmetricKeyAlgorithm.AES128],
            hashes=[HashAlgorithm.SHA512],
            compression=[CompressionAlgorithm.ZIP],
        )

        assert policy.ciphers == (SymmetricKeyAlgorithm.AES128,)
        assert hash(policy) == hash(PreferencePolicy.from_dict(policy.to_dict()))

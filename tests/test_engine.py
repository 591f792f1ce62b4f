"""
Tests for the engine facade.
"""

import os
import tempfile

import pytest

from gpgid import IdentityEngine
from gpgid.config import ADMIN_MESSAGE_FILENAME
from gpgid.errors import KeyImportError, NoTrustedPeerError
from gpgid.message import decrypt
from gpgid.storage import read_file


class TestEngineFlow:
    """Test the full create, trust, write and read flow."""

    def test_message_for_admin(self, admin):
        """Test that the admin can read a message written by a new engine."""
        with tempfile.TemporaryDirectory() as tmpdir:
            admin_path = os.path.join(tmpdir, "admin.gpg")
            with open(admin_path, "wb") as fh:
                fh.write(admin.export_public_key())

            engine = IdentityEngine("Alice", "alice@example.com", admin_key_path=admin_path)

            assert engine.has_admin
            assert engine.admin.fingerprint == admin.fingerprint
            assert engine.identity.userids == ["Alice <alice@example.com>"]

            pub_path = engine.export_public_key(tmpdir)
            msg_path = engine.write_to_admin("hello", tmpdir)

            assert os.path.basename(msg_path) == ADMIN_MESSAGE_FILENAME
            assert read_file(pub_path) == engine.identity.export_public_key()

            result = decrypt(admin, read_file(msg_path).decode("ascii"))
            assert result.plaintext == "hello"
            assert result.verify_sender(engine.identity)


class TestAdminImport:
    """Test admin key import modes."""

    def test_missing_admin_non_strict(self, alice):
        """Test that a missing admin key leaves the engine usable."""
        engine = IdentityEngine.from_identity(alice)

        with tempfile.TemporaryDirectory() as tmpdir:
            result = engine.load_admin(os.path.join(tmpdir, "missing.gpg"))

        assert result is None
        assert not engine.has_admin
        assert isinstance(engine.admin_error, KeyImportError)

    def test_missing_admin_strict(self, alice):
        engine = IdentityEngine.from_identity(alice)

        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(KeyImportError):
                engine.load_admin(os.path.join(tmpdir, "missing.gpg"), strict=True)

    def test_write_without_admin(self, alice):
        """Test that writing to the admin requires an imported admin key."""
        engine = IdentityEngine.from_identity(alice)

        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(NoTrustedPeerError):
                engine.write_to_admin("hello", tmpdir)

            assert os.listdir(tmpdir) == []

    def test_truncated_admin_non_strict(self, admin):
        """Test that a damaged admin key file is logged and the engine still builds."""
        data = admin.export_public_key()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "admin.gpg")
            with open(path, "wb") as fh:
                fh.write(data[:len(data) - 20])

            engine = IdentityEngine("Alice", "alice@example.com", admin_key_path=path)

            assert engine.admin is None
            assert isinstance(engine.admin_error, KeyImportError)
            with pytest.raises(NoTrustedPeerError):
                engine.write_to_admin("hello", tmpdir)

    @pytest.mark.parametrize("contents", [b"", b"not a key", b"\x99\x01\x0d"])
    def test_malformed_admin_non_strict(self, alice, contents):
        engine = IdentityEngine.from_identity(alice)

        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "admin.gpg")
            with open(path, "wb") as fh:
                fh.write(contents)

            assert engine.load_admin(path) is None

        assert not engine.has_admin
        assert isinstance(engine.admin_error, KeyImportError)

    def test_truncated_admin_strict(self, alice, admin):
        """Test that strict mode raises on a damaged admin key file."""
        engine = IdentityEngine.from_identity(alice)
        data = admin.export_public_key()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "admin.gpg")
            with open(path, "wb") as fh:
                fh.write(data[:306])

            with pytest.raises(KeyImportError):
                engine.load_admin(path, strict=True)

        assert engine.admin is None
        assert isinstance(engine.admin_error, KeyImportError)

    def test_reload_clears_error(self, alice, admin):
        engine = IdentityEngine.from_identity(alice)

        with tempfile.TemporaryDirectory() as tmpdir:
            engine.load_admin(os.path.join(tmpdir, "missing.gpg"))
            path = os.path.join(tmpdir, "admin.gpg")
            with open(path, "wb") as fh:
                fh.write(admin.export_public_key())

            engine.load_admin(path)

        assert engine.has_admin
        assert engine.admin_error is None


class TestEngineMessages:
    """Test encrypting and decrypting through the engine."""

    def test_encrypt_to_peer(self, alice, bob):
        sender = IdentityEngine.from_identity(alice)
        receiver = IdentityEngine.from_identity(bob)

        encoded = sender.encrypt_to(bob.as_peer(), "via engine")

        assert isinstance(encoded, str)
        assert receiver.decrypt(encoded) == "via engine"
        assert receiver.decrypt_message(encoded).verify_sender(alice)

    def test_registries_are_per_engine(self, alice, bob):
        """Test that registering a type on one engine does not affect another."""
        first = IdentityEngine.from_identity(alice)
        second = IdentityEngine.from_identity(bob)

        first.registry.register("test.int", int, lambda v: {'v': v}, lambda d: d['v'])

        assert "test.int" in first.registry
        assert "test.int" not in second.registry
        assert first.registry is not second.registry

    def test_to_dict(self, alice, admin):
        engine = IdentityEngine.from_identity(alice, admin=admin.as_peer())
        data = engine.to_dict()

        assert data['identity']['fingerprint'] == alice.fingerprint
        assert data['admin']['fingerprint'] == admin.fingerprint

"""
Domain-specific exceptions for gpgid.
All exceptions are explicit and carry meaningful context.
"""


class GpgIdError(Exception):
    """Base exception for all gpgid errors."""
    pass


class IdentityError(GpgIdError):
    """Base exception for identity lifecycle errors."""
    pass


class KeyGenerationError(IdentityError):
    """Raised when a keypair or user id cannot be generated."""
    pass


class SigningError(IdentityError):
    """Raised when self-signing an identity fails."""
    pass


class UnsignedIdentityError(IdentityError):
    """Raised when an unsigned draft is used where a signed identity is required."""
    pass


class KeyImportError(GpgIdError):
    """Raised when a peer public key cannot be read or parsed."""
    pass


class NoTrustedPeerError(GpgIdError):
    """Raised when an operation needs the admin peer and none was imported."""
    pass


class MessageError(GpgIdError):
    """Base exception for message cipher errors."""
    pass


class EncryptionError(MessageError):
    """Raised when a message cannot be signed and encrypted."""
    pass


class DecodingError(MessageError):
    """Raised when an encoded message is not valid base64."""
    pass


class DecryptionError(MessageError):
    """Raised when a message cannot be decrypted with the local key."""
    pass


class SignatureVerificationError(MessageError):
    """Raised when a decrypted message is not signed by the expected sender."""
    pass


class PersistenceError(GpgIdError, OSError):
    """Raised when a key or message file cannot be read or written."""
    pass


class SerializationError(GpgIdError):
    """Raised when a value cannot be serialized through the type registry."""
    pass


class InvariantViolationError(GpgIdError):
    """Raised when a core security invariant is violated."""
    pass

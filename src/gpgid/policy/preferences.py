"""
Preference policy model.
Ordered lists of symmetric ciphers, hashes and compression algorithms that
every self-signature advertises. Peers pick the first entry they support.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from pgpy.constants import CompressionAlgorithm, HashAlgorithm, SymmetricKeyAlgorithm

from ..errors import InvariantViolationError


@dataclass(frozen=True)
class PreferencePolicy:
    """
    Immutable, ordered algorithm preferences.
    """
    ciphers: Tuple[SymmetricKeyAlgorithm, ...]
    hashes: Tuple[HashAlgorithm, ...]
    compression: Tuple[CompressionAlgorithm, ...]

    def __post_init__(self):
        from ..invariants import validate_preferences

        # Accept any iterable, store tuples
        object.__setattr__(self, 'ciphers', tuple(self.ciphers))
        object.__setattr__(self, 'hashes', tuple(self.hashes))
        object.__setattr__(self, 'compression', tuple(self.compression))
        validate_preferences(self)

    def as_signature_prefs(self) -> Dict[str, Any]:
        """
        Keyword arguments for a PGPy self-certification.

        Returns:
            Dictionary with ``ciphers``, ``hashes`` and ``compression`` lists
        """
        return {
            'ciphers': list(self.ciphers),
            'hashes': list(self.hashes),
            'compression': list(self.compression),
        }

    @classmethod
    def from_signature(cls, signature) -> 'PreferencePolicy':
        """
        Read the preferences back out of a self-signature.

        Args:
            signature: PGPSignature carrying preference subpackets

        Returns:
            PreferencePolicy

        Raises:
            InvariantViolationError: If the signature advertises no preferences
        """
        return cls(
            ciphers=signature.cipherprefs,
            hashes=signature.hashprefs,
            compression=signature.compprefs,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PreferencePolicy':
        """
        Create a policy from algorithm names.

        Raises:
            InvariantViolationError: If a field is missing or a name is unknown
        """
        try:
            return cls(
                ciphers=[SymmetricKeyAlgorithm[n] for n in data['ciphers']],
                hashes=[HashAlgorithm[n] for n in data['hashes']],
                compression=[CompressionAlgorithm[n] for n in data['compression']],
            )
        except KeyError as e:
            raise InvariantViolationError(f"Unknown or missing preference: {e}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert policy to a dictionary of algorithm names."""
        return {
            'ciphers': [c.name for c in self.ciphers],
            'hashes': [h.name for h in self.hashes],
            'compression': [c.name for c in self.compression],
        }


# Strongest cipher first. SHA256 leads the hash list, ahead of SHA384 and
# SHA512.
DEFAULT_PREFERENCES = PreferencePolicy(
    ciphers=(
        SymmetricKeyAlgorithm.AES256,
        SymmetricKeyAlgorithm.AES192,
        SymmetricKeyAlgorithm.AES128,
        SymmetricKeyAlgorithm.CAST5,
        SymmetricKeyAlgorithm.TripleDES,
    ),
    hashes=(
        HashAlgorithm.SHA256,
        HashAlgorithm.SHA1,
        HashAlgorithm.SHA384,
        HashAlgorithm.SHA512,
        HashAlgorithm.SHA224,
    ),
    compression=(
        CompressionAlgorithm.ZLIB,
        CompressionAlgorithm.ZIP,
    ),
)

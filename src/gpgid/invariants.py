"""
Runtime security invariant validation.
These checks ensure an identity is fully formed before it is used.
"""

import warnings

from pgpy.constants import KeyFlags, SignatureType

from .errors import InvariantViolationError

ENCRYPTION_FLAGS = frozenset([KeyFlags.EncryptCommunications, KeyFlags.EncryptStorage])


def validate_preferences(policy):
    """
    Validate that every preference list is present and duplicate-free.

    Args:
        policy: PreferencePolicy

    Raises:
        InvariantViolationError: If a list is empty or repeats an entry
    """
    for field in ('ciphers', 'hashes', 'compression'):
        values = getattr(policy, field)
        if not values:
            raise InvariantViolationError(f"Preference list '{field}' must not be empty")
        if len(set(values)) != len(values):
            raise InvariantViolationError(f"Preference list '{field}' contains duplicates")


def validate_identity_signed(key):
    """
    Validate that a key is completely self-signed.

    Every user id must carry a self-signature and every subkey a binding
    signature from the primary key, and each of them must verify under
    the primary public key. Malformed or truncated signature packets
    count as violations.

    Args:
        key: PGPKey (private or public)

    Raises:
        InvariantViolationError: If a binding is unsigned, malformed or does not verify
    """
    try:
        public = key.pubkey
        primary_id = public.fingerprint.keyid

        userids = list(public.userids)
        if not userids:
            raise InvariantViolationError("Identity has no user ids")

        bindings = []
        for uid in userids:
            if uid.selfsig is None:
                raise InvariantViolationError(f"User id '{uid.userid}' has no self-signature")
            bindings.append((f"user id '{uid.userid}'", uid, uid.selfsig))

        for keyid, subkey in public.subkeys.items():
            sigs = [sig for sig in subkey.__sig__
                    if sig.type == SignatureType.Subkey_Binding and sig.signer == primary_id]
            if not sigs:
                raise InvariantViolationError(f"Subkey {keyid} has no binding signature")
            bindings.extend((f"subkey {keyid}", subkey, sig) for sig in sigs)

        # PGPy warns about unimplemented revocation checks on every verify
        with warnings.catch_warnings():
            warnings.simplefilter('ignore')
            for label, subject, sig in bindings:
                if not public.verify(subject, sig):
                    raise InvariantViolationError(f"Signature on {label} does not verify")

    except InvariantViolationError:
        raise
    except Exception as e:
        raise InvariantViolationError(f"Malformed self-signature: {e}") from e


def validate_public_only(key):
    """
    Validate that a key holds no private material.

    Raises:
        InvariantViolationError: If the key is private
    """
    if not key.is_public:
        raise InvariantViolationError("Trusted peer must hold a public key only")


def validate_can_encrypt(key):
    """
    Validate that a key, or one of its subkeys, may be used for encryption.

    Raises:
        InvariantViolationError: If no encryption-capable key is present
    """
    if ENCRYPTION_FLAGS & _key_flags(key):
        return

    for subkey in key.subkeys.values():
        if ENCRYPTION_FLAGS & _key_flags(subkey):
            return

    raise InvariantViolationError(f"Key {key.fingerprint.keyid} has no encryption-capable key")


def _key_flags(key) -> set:
    if key.is_primary:
        sigs = [uid.selfsig for uid in key.userids if uid.selfsig is not None]
    else:
        sigs = list(key.__sig__)

    flags = set()
    for sig in sigs:
        flags |= set(sig.key_flags)

    # Keys without a usage subpacket may be used for anything their algorithm allows
    if not flags and key.key_algorithm.can_encrypt:
        flags |= ENCRYPTION_FLAGS
    return flags

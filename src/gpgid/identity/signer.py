"""
Self-signing of identity drafts.

Every user id gets a positive self-certification carrying the key usage
flags and the preference policy. Every pending subkey then gets a binding
signature from the primary key, with an embedded cross signature only when
the subkey usage includes signing. The result is checked before an Identity
is handed out; a draft that fails here is consumed and must be discarded.
"""

import logging
from datetime import datetime
from typing import Optional

from pgpy.constants import KeyFlags

from ..config import DEFAULT_HASH, PRIMARY_KEY_USAGE, SUBKEY_USAGE
from ..errors import InvariantViolationError, SigningError
from ..invariants import validate_identity_signed
from ..policy import DEFAULT_PREFERENCES, PreferencePolicy
from ..utils.time import now
from .identity import Identity

logger = logging.getLogger(__name__)


def self_sign(
    draft,
    policy: Optional[PreferencePolicy] = None,
    created: Optional[datetime] = None,
) -> Identity:
    """
    Sign all user ids and subkeys of a draft with its primary key.

    Args:
        draft: IdentityDraft to sign; consumed by this call
        policy: Preferences to advertise (defaults to DEFAULT_PREFERENCES)
        created: Signature creation time (defaults to now)

    Returns:
        Frozen Identity

    Raises:
        SigningError: If the draft was already signed, has no user id,
                      or any signature cannot be made or verified
    """
    if draft.is_signed:
        raise SigningError("Identity has already been self-signed")

    userids = draft.userids
    if not userids:
        raise SigningError("Identity has no user id to sign")

    # No retry: a half-signed draft is never reused
    draft.mark_signed()

    policy = policy or DEFAULT_PREFERENCES
    signed_at = created or now()
    key = draft.primary

    logger.info("Self-signing identity %s (%s)", draft.name, key.fingerprint.keyid)
    try:
        for index, uid in enumerate(userids):
            key.add_uid(
                uid,
                selfsign=True,
                usage=set(PRIMARY_KEY_USAGE),
                hash=DEFAULT_HASH,
                created=signed_at,
                primary=True if index == 0 else None,
                **policy.as_signature_prefs()
            )

        for subkey in draft.subkeys:
            key.add_subkey(
                subkey,
                usage=set(SUBKEY_USAGE),
                hash=DEFAULT_HASH,
                created=signed_at,
                crosssign=KeyFlags.Sign in SUBKEY_USAGE,
            )

        validate_identity_signed(key)

    except InvariantViolationError as e:
        logger.error("Self-signature check failed for %s: %s", draft.name, e)
        raise SigningError(f"Self-signature check failed: {e}") from e
    except Exception as e:
        logger.error("Self-signing failed for %s: %s", draft.name, e)
        raise SigningError(f"Cannot self-sign identity: {e}") from e

    return Identity(
        name=draft.name,
        comment=draft.comment,
        email=draft.email,
        _key=key,
        signed_at=signed_at,
    )

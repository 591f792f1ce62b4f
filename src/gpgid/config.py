"""
Configuration constants for gpgid.
These are immutable system constants, not runtime configuration.
"""

from pgpy.constants import HashAlgorithm, KeyFlags, PubKeyAlgorithm

# Key generation
KEY_ALGORITHM = PubKeyAlgorithm.RSAEncryptOrSign
KEY_SIZE_BITS = 2048
DEFAULT_HASH = HashAlgorithm.SHA256

# Key usage advertised in self-signatures
PRIMARY_KEY_USAGE = frozenset([KeyFlags.Sign, KeyFlags.Certify])
SUBKEY_USAGE = frozenset([KeyFlags.EncryptCommunications, KeyFlags.EncryptStorage])

# Export file names, relative to a caller-supplied directory prefix
PUBLIC_KEY_FILENAME = "PubGPG1.gpg"
ADMIN_MESSAGE_FILENAME = "MessageForAdmin.gpg"

# Plaintext encoding
TEXT_ENCODING = "utf-8"

# Serialization registry tags
IDENTITY_TYPE_TAG = "gpgid.identity"
PEER_TYPE_TAG = "gpgid.peer"

# Canonical JSON settings
JSON_SEPARATORS = (',', ':')  # No whitespace
JSON_SORT_KEYS = True
JSON_ENSURE_ASCII = False

# Time constants
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

# Logging
LOGGER_NAME = "gpgid"
ENV_LOG_LEVEL = "GPGID_LOG_LEVEL"

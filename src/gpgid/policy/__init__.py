"""Algorithm preference policy advertised in self-signatures."""

from .preferences import PreferencePolicy, DEFAULT_PREFERENCES

__all__ = [
    'PreferencePolicy',
    'DEFAULT_PREFERENCES',
]

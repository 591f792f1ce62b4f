"""
Explicit type registry for tagged serialization.

Values are written as canonical JSON envelopes ``{"type": tag, "value": {...}}``.
Nothing registers itself on import; the composition root decides which
types a registry knows about.
"""

from typing import Any, Callable, Dict, Tuple, Type

from .errors import SerializationError
from .utils.canonical_json import canonicalize_bytes, parse

Encoder = Callable[[Any], Dict[str, Any]]
Decoder = Callable[[Dict[str, Any]], Any]


class TypeRegistry:
    """
    Maps type tags to (class, encoder, decoder) triples.
    """

    def __init__(self):
        self._by_tag: Dict[str, Tuple[Type, Encoder, Decoder]] = {}
        self._by_type: Dict[Type, str] = {}

    def register(self, tag: str, cls: Type, encode: Encoder, decode: Decoder):
        """
        Register a type under a tag.

        Raises:
            SerializationError: If the tag or type is already registered
        """
        if tag in self._by_tag:
            raise SerializationError(f"Tag already registered: {tag}")
        if cls in self._by_type:
            raise SerializationError(f"Type already registered: {cls.__name__}")

        self._by_tag[tag] = (cls, encode, decode)
        self._by_type[cls] = tag

    def tag_for(self, obj: Any) -> str:
        try:
            return self._by_type[type(obj)]
        except KeyError:
            raise SerializationError(f"Type not registered: {type(obj).__name__}")

    def __contains__(self, tag: str) -> bool:
        return tag in self._by_tag

    def tags(self) -> list:
        return sorted(self._by_tag)

    def dumps(self, obj: Any) -> bytes:
        """
        Serialize a registered value to canonical JSON bytes.

        Raises:
            SerializationError: If the type is unknown or encoding fails
        """
        tag = self.tag_for(obj)
        _, encode, _ = self._by_tag[tag]
        try:
            return canonicalize_bytes({'type': tag, 'value': encode(obj)})
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot serialize {tag}: {e}")

    def loads(self, data) -> Any:
        """
        Deserialize a value produced by :meth:`dumps`.

        Raises:
            SerializationError: If the envelope is malformed or the tag unknown
        """
        try:
            envelope = parse(data)
        except ValueError as e:
            raise SerializationError(str(e))

        if not isinstance(envelope, dict) or 'type' not in envelope or 'value' not in envelope:
            raise SerializationError("Malformed envelope: expected 'type' and 'value'")

        tag = envelope['type']
        if tag not in self._by_tag:
            raise SerializationError(f"Unknown type tag: {tag}")

        _, _, decode = self._by_tag[tag]
        try:
            return decode(envelope['value'])
        except SerializationError:
            raise
        except Exception as e:
            raise SerializationError(f"Cannot deserialize {tag}: {e}") from e

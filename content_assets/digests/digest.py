"""Digest value type and its encodings.

@public

A Digest is an algorithm-tagged, fixed-length value identifying content.
It has two encodings:

Human-readable:
    "<kind name>:<unpadded base32 payload>", e.g. "blake2b:MZXW6..."

Structured (binary):
    the kind id followed by the raw payload, either as a sequence of
    integers (to_sequence) or as a 2-byte little-endian id prefix
    (to_binary). Both are self-describing through the id.
"""

import struct
import sys
from base64 import b32decode, b32encode
from collections.abc import Iterable
from dataclasses import dataclass
from functools import total_ordering
from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from content_assets.digests._kind import HashKind
from content_assets.exceptions import (
    InvalidLengthError,
    MalformedValueError,
    MissingDelimiterError,
    UnknownKindError,
)

_KIND_ID = struct.Struct("<H")


def identity_hash(payload: bytes) -> int:
    """Hash a digest payload by reading its first 8 bytes as an integer.

    Payloads are already uniformly distributed, so re-hashing them is wasted work.
    """
    return int.from_bytes(payload[:8], sys.byteorder)


def encode_base32(payload: bytes) -> str:
    """Encode bytes as upper-case base32 without padding."""
    return b32encode(payload).decode("ascii").rstrip("=")


def decode_base32(value: str, length: int) -> bytes:
    """Decode unpadded base32 that must yield exactly `length` bytes.

    Raises:
        MalformedValueError: On padding, bad characters, or wrong length.
    """
    if "=" in value:
        raise MalformedValueError(f"malformed hash value: padding is not allowed in {value!r}")
    expected = (length * 8 + 4) // 5
    if len(value) != expected:
        raise MalformedValueError(f"malformed hash value: expected {expected} base32 characters, got {len(value)}")
    try:
        payload = b32decode(value + "=" * (-len(value) % 8))
    except ValueError as e:
        raise MalformedValueError(f"malformed hash value: {e}") from e
    # Non-zero trailing bits decode fine but would not round-trip.
    if len(payload) != length or encode_base32(payload) != value:
        raise MalformedValueError(f"malformed hash value: {value!r} is not canonical base32")
    return payload


@total_ordering
@dataclass(frozen=True, slots=True, repr=False)
class Digest:
    """A digest uniquely identifying some data.

    @public

    Digests are immutable values. Equality compares kind and payload;
    ordering compares kind id first, then payload bytes. Hashing uses the
    payload directly (see identity_hash).

    Example:
        >>> d = Digest.from_bytes(HashKind.BLAKE2B, bytes(25))
        >>> str(d)
        'blake2b:AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA'
        >>> Digest.parse(str(d)) == d
        True
    """

    kind: HashKind
    payload: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.kind, HashKind):
            raise TypeError(f"kind must be a HashKind, got {type(self.kind).__name__}")
        object.__setattr__(self, "payload", bytes(self.payload))
        if len(self.payload) != self.kind.length:
            raise InvalidLengthError(
                f"invalid hash length for {self.kind}: expected {self.kind.length} bytes, got {len(self.payload)}"
            )

    @classmethod
    def from_bytes(cls, kind: HashKind, data: bytes | bytearray | memoryview) -> "Digest":
        """Construct a digest computed with `kind` that produced `data`.

        Raises:
            InvalidLengthError: If len(data) doesn't match kind.length.
        """
        return cls(kind, bytes(data))

    @classmethod
    def parse(cls, text: str) -> "Digest":
        """Parse the human-readable "<kind>:<base32>" form.

        Raises:
            MissingDelimiterError: If there is no ':'.
            UnknownKindError: If the prefix is not a known kind name.
            MalformedValueError: If the value is not valid base32 of the right length.
        """
        name, sep, value = text.partition(":")
        if not sep:
            raise MissingDelimiterError()
        kind = HashKind.from_name(name)
        return cls(kind, decode_base32(value, kind.length))

    @classmethod
    def from_sequence(cls, items: Iterable[int]) -> "Digest":
        """Decode the tagged sequence produced by to_sequence.

        Raises:
            InvalidLengthError: If the sequence is empty or the payload length is wrong.
            UnknownKindError: If the leading id is not a known kind.
        """
        values = list(items)
        if not values:
            raise InvalidLengthError("invalid hash length: missing hash kind")
        kind = HashKind.from_id(values[0])
        if kind is None:
            raise UnknownKindError(str(values[0]))
        return cls(kind, bytes(values[1:]))

    @classmethod
    def from_binary(cls, data: bytes | bytearray | memoryview) -> "Digest":
        """Decode the 2-byte little-endian id prefix form produced by to_binary."""
        view = memoryview(data)
        if len(view) < _KIND_ID.size:
            raise InvalidLengthError("invalid hash length: missing hash kind")
        (kind_id,) = _KIND_ID.unpack_from(view)
        kind = HashKind.from_id(kind_id)
        if kind is None:
            raise UnknownKindError(str(kind_id))
        return cls(kind, view[_KIND_ID.size :].tobytes())

    def to_sequence(self) -> list[int]:
        """Kind id followed by each payload byte."""
        return [self.kind.id, *self.payload]

    def to_binary(self) -> bytes:
        """2-byte little-endian kind id followed by the payload."""
        return _KIND_ID.pack(self.kind.id) + self.payload

    def __str__(self) -> str:
        return f"{self.kind}:{encode_base32(self.payload)}"

    def __repr__(self) -> str:
        return f"Digest({str(self)!r})"

    def __bytes__(self) -> bytes:
        return self.payload

    def __hash__(self) -> int:
        return identity_hash(self.payload)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Digest):
            return NotImplemented
        return (self.kind.id, self.payload) < (other.kind.id, other.payload)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(cls._serialize, info_arg=True),
        )

    @staticmethod
    def _serialize(value: "Digest", info: core_schema.SerializationInfo) -> "Digest | str":
        """Human-readable string in JSON mode; the instance itself in python mode."""
        return str(value) if info.mode_is_json() else value

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler) -> JsonSchemaValue:
        return {"type": "string", "pattern": r"^[a-z0-9]+:[A-Z2-7]+$"}

    @classmethod
    def _coerce(cls, value: Any) -> "Digest":
        """Accept a Digest, its human-readable string, or either structured encoding."""
        if isinstance(value, Digest):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls.from_binary(value)
        if isinstance(value, (list, tuple)):
            return cls.from_sequence(value)
        raise ValueError(f"cannot build a Digest from {type(value).__name__}")

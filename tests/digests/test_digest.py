"""Tests for Digest encodings and validation."""

import sys

import pytest
from pydantic import BaseModel, ValidationError

from content_assets.digests import BLAKE2B_LEN, Digest, HashKind, identity_hash
from content_assets.exceptions import (
    HashParseError,
    InvalidLengthError,
    MalformedValueError,
    MissingDelimiterError,
    UnknownKindError,
)

SAMPLE = Digest(HashKind.BLAKE2B, bytes([0xAB]) * BLAKE2B_LEN)


class TestConstruction:
    def test_from_bytes(self):
        d = Digest.from_bytes(HashKind.BLAKE2B, bytearray(range(25)))
        assert d.kind is HashKind.BLAKE2B
        assert d.payload == bytes(range(25))
        assert isinstance(d.payload, bytes)

    @pytest.mark.parametrize("length", [0, 1, 24, 26, 32])
    def test_from_bytes_rejects_wrong_length(self, length: int):
        with pytest.raises(InvalidLengthError):
            Digest.from_bytes(HashKind.BLAKE2B, bytes(length))

    def test_invalid_length_is_value_error(self):
        with pytest.raises(ValueError):
            Digest(HashKind.BLAKE2B, b"short")

    def test_kind_must_be_hash_kind(self):
        with pytest.raises(TypeError):
            Digest("blake2b", bytes(25))  # type: ignore[arg-type]

    def test_immutable(self):
        with pytest.raises(AttributeError):
            SAMPLE.payload = bytes(25)  # type: ignore[misc]

    def test_bytes_returns_payload(self):
        assert bytes(SAMPLE) == SAMPLE.payload


class TestHumanReadable:
    def test_round_trip(self):
        assert Digest.parse(str(SAMPLE)) == SAMPLE

    def test_round_trip_many(self):
        for fill in (0x00, 0x01, 0x7F, 0xFF):
            d = Digest(HashKind.BLAKE2B, bytes([fill]) * 25)
            assert Digest.parse(str(d)) == d

    def test_format(self):
        text = str(Digest(HashKind.BLAKE2B, bytes(25)))
        assert text == "blake2b:" + "A" * 40

    def test_no_padding(self):
        assert "=" not in str(SAMPLE)
        assert len(str(SAMPLE).split(":")[1]) == 40

    def test_repr(self):
        assert repr(SAMPLE) == f"Digest('{SAMPLE}')"

    def test_missing_delimiter(self):
        with pytest.raises(MissingDelimiterError):
            Digest.parse("blake2b" + "A" * 40)

    def test_unknown_kind(self):
        with pytest.raises(UnknownKindError) as exc_info:
            Digest.parse("notarealhash:42")
        assert exc_info.value.name == "notarealhash"

    def test_kind_is_case_sensitive(self):
        with pytest.raises(UnknownKindError):
            Digest.parse("BLAKE2B:" + "A" * 40)

    def test_truncated_value(self):
        with pytest.raises(MalformedValueError):
            Digest.parse(str(SAMPLE)[:-1])

    def test_short_value(self):
        with pytest.raises(MalformedValueError):
            Digest.parse("blake2b:00000")

    def test_invalid_characters(self):
        with pytest.raises(MalformedValueError):
            Digest.parse("blake2b:" + "1" * 40)

    def test_lowercase_value_rejected(self):
        with pytest.raises(MalformedValueError):
            Digest.parse(str(SAMPLE).lower())

    def test_padding_rejected(self):
        with pytest.raises(MalformedValueError):
            Digest.parse(str(SAMPLE)[:-1] + "=")

    def test_parse_errors_share_base(self):
        for text in ("nodelimiter", "nope:AAAA", "blake2b:AAAA"):
            with pytest.raises(HashParseError):
                Digest.parse(text)


class TestStructured:
    def test_sequence_layout(self):
        seq = SAMPLE.to_sequence()
        assert seq[0] == HashKind.BLAKE2B.id
        assert bytes(seq[1:]) == SAMPLE.payload

    def test_sequence_round_trip(self):
        assert Digest.from_sequence(SAMPLE.to_sequence()) == SAMPLE

    def test_sequence_short(self):
        with pytest.raises(InvalidLengthError):
            Digest.from_sequence([0] + [1] * 24)

    def test_sequence_empty(self):
        with pytest.raises(InvalidLengthError):
            Digest.from_sequence([])

    def test_sequence_unknown_id(self):
        with pytest.raises(UnknownKindError):
            Digest.from_sequence([999] + [0] * 25)

    def test_binary_layout(self):
        assert SAMPLE.to_binary() == b"\x00\x00" + SAMPLE.payload

    def test_binary_round_trip(self):
        assert Digest.from_binary(SAMPLE.to_binary()) == SAMPLE

    def test_binary_too_short(self):
        with pytest.raises(InvalidLengthError):
            Digest.from_binary(b"\x00")

    def test_binary_truncated_payload(self):
        with pytest.raises(InvalidLengthError):
            Digest.from_binary(SAMPLE.to_binary()[:-1])

    def test_binary_unknown_id(self):
        with pytest.raises(UnknownKindError):
            Digest.from_binary(b"\x05\x00" + bytes(25))


class TestOrderingAndHashing:
    def test_ordering_by_payload(self):
        low = Digest(HashKind.BLAKE2B, bytes(25))
        high = Digest(HashKind.BLAKE2B, b"\x01" + bytes(24))
        assert low < high
        assert high > low
        assert low <= low
        assert sorted([high, low]) == [low, high]

    def test_equality(self):
        assert SAMPLE == Digest(HashKind.BLAKE2B, bytes([0xAB]) * 25)
        assert SAMPLE != Digest(HashKind.BLAKE2B, bytes(25))
        assert SAMPLE != str(SAMPLE)

    def test_identity_hash(self):
        expected = int.from_bytes(SAMPLE.payload[:8], sys.byteorder)
        assert hash(SAMPLE) == hash(expected)
        assert identity_hash(SAMPLE.payload) == expected

    def test_usable_as_dict_key(self):
        table = {SAMPLE: "x"}
        assert table[Digest.parse(str(SAMPLE))] == "x"


class _Record(BaseModel):
    digest: Digest


class TestPydantic:
    def test_validate_from_string(self):
        assert _Record(digest=str(SAMPLE)).digest == SAMPLE

    def test_validate_from_instance(self):
        assert _Record(digest=SAMPLE).digest is SAMPLE

    def test_validate_from_sequence(self):
        assert _Record(digest=SAMPLE.to_sequence()).digest == SAMPLE

    def test_validate_from_binary(self):
        assert _Record(digest=SAMPLE.to_binary()).digest == SAMPLE

    def test_json_emits_string(self):
        record = _Record(digest=SAMPLE)
        assert record.model_dump(mode="json") == {"digest": str(SAMPLE)}
        assert _Record.model_validate_json(record.model_dump_json()) == record

    def test_python_dump_keeps_digest(self):
        assert _Record(digest=SAMPLE).model_dump()["digest"] is SAMPLE

    def test_python_dump_of_container_field(self):
        class _Many(BaseModel):
            digests: list[Digest]

        dumped = _Many(digests=[SAMPLE]).model_dump()
        assert dumped == {"digests": [SAMPLE]}
        assert _Many(digests=[SAMPLE]).model_dump(mode="json") == {"digests": [str(SAMPLE)]}

    def test_python_dump_round_trips(self):
        record = _Record(digest=SAMPLE)
        assert _Record.model_validate(record.model_dump()) == record

    @pytest.mark.parametrize("value", ["no-delimiter", "sha1:AAAA", "blake2b:AAAA", 42])
    def test_invalid_values(self, value):
        with pytest.raises(ValidationError):
            _Record(digest=value)

    def test_json_schema(self):
        schema = _Record.model_json_schema()
        assert schema["properties"]["digest"]["type"] == "string"

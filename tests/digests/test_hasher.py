"""Tests for Hasher."""

import hashlib
import io
import shutil

import pytest

from content_assets.digests import Digest, Hasher, HashKind
from content_assets.exceptions import HasherFinalizedError


def _reference(data: bytes) -> Digest:
    return Digest(HashKind.BLAKE2B, hashlib.blake2b(data, digest_size=25).digest())


class TestHasher:
    def test_default_kind(self):
        assert Hasher().kind is HashKind.BLAKE2B

    def test_matches_blake2b_200(self):
        assert Hasher.digest_of(b"hello") == _reference(b"hello")

    def test_empty_input(self):
        assert Hasher().result() == _reference(b"")

    def test_incremental_equals_one_shot(self):
        h = Hasher()
        h.process(b"hel")
        h.update(b"lo")
        assert h.result() == Hasher.digest_of(b"hello")

    def test_order_sensitive(self):
        a = Hasher()
        a.process(b"ab")
        a.process(b"cd")
        b = Hasher()
        b.process(b"cd")
        b.process(b"ab")
        assert a.result() != b.result()

    def test_result_is_one_shot(self):
        h = Hasher()
        h.process(b"data")
        h.result()
        assert h.finalized
        with pytest.raises(HasherFinalizedError):
            h.result()
        with pytest.raises(HasherFinalizedError):
            h.process(b"more")

    def test_copy_is_independent(self):
        h = Hasher()
        h.process(b"hello")
        clone = h.copy()
        clone.process(b" world")
        assert h.result() == Hasher.digest_of(b"hello")
        assert clone.result() == Hasher.digest_of(b"hello world")

    def test_write_sink(self):
        h = Hasher()
        assert h.write(b"abc") == 3
        h.flush()
        assert h.result() == Hasher.digest_of(b"abc")

    def test_copyfileobj(self):
        data = bytes(range(256)) * 1000
        h = Hasher()
        shutil.copyfileobj(io.BytesIO(data), h, 4096)
        assert h.result() == _reference(data)

    def test_accepts_memoryview(self):
        data = bytearray(b"view me")
        h = Hasher()
        h.process(memoryview(data)[:4])
        assert h.result() == Hasher.digest_of(b"view")

    def test_repr(self):
        assert "blake2b" in repr(Hasher())

# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for token masking helpers and the constant-time comparator."""

from __future__ import annotations

import base64
from collections.abc import Iterator, Sequence

import pytest

from csrfkit.security.csrf.masking import (
    constant_time_compare,
    decode_token,
    mask_token,
    unmask_token,
    xor_bytes,
)

SECRET = bytes(range(32))
KEY = bytes(range(100, 132))


class CountingBytes(Sequence[int]):
    """Byte sequence that records how many bytes were read by iteration."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self.reads = 0

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index):  # type: ignore[override]
        return self._data[index]

    def __iter__(self) -> Iterator[int]:
        for byte in self._data:
            self.reads += 1
            yield byte


# ---------------------------------------------------------------------------
# Masking
# ---------------------------------------------------------------------------


class TestXorBytes:
    def test_xor_is_self_inverse(self) -> None:
        assert xor_bytes(KEY, xor_bytes(KEY, SECRET)) == SECRET

    def test_xor_with_zero_is_identity(self) -> None:
        assert xor_bytes(KEY, bytes(32)) == KEY

    def test_length_mismatch_raises(self) -> None:
        with pytest.raises(ValueError):
            xor_bytes(b"abc", b"ab")


class TestMaskToken:
    def test_wire_format_is_key_then_masked_secret(self) -> None:
        decoded = base64.b64decode(mask_token(SECRET, KEY))
        assert len(decoded) == 64
        assert decoded[:32] == KEY
        assert decoded[32:] == xor_bytes(KEY, SECRET)

    def test_unmask_recovers_secret(self) -> None:
        assert unmask_token(mask_token(SECRET, KEY), 32) == SECRET

    def test_zero_secret_masks_to_key_twice(self) -> None:
        token = mask_token(bytes(32), KEY)
        assert token == base64.b64encode(KEY + KEY).decode("ascii")
        assert unmask_token(token, 32) == bytes(32)

    def test_different_keys_give_different_text(self) -> None:
        other_key = bytes(reversed(KEY))
        assert mask_token(SECRET, KEY) != mask_token(SECRET, other_key)


class TestUnmaskToken:
    def test_rejects_non_base64(self) -> None:
        assert unmask_token("not base64 at all!!", 32) is None

    def test_rejects_non_string(self) -> None:
        assert unmask_token(None, 32) is None
        assert unmask_token(12345, 32) is None
        assert unmask_token(b"bytes", 32) is None

    def test_rejects_non_ascii(self) -> None:
        assert unmask_token("tökén", 32) is None

    def test_rejects_short_token(self) -> None:
        token = base64.b64encode(bytes(63)).decode("ascii")
        assert unmask_token(token, 32) is None

    def test_rejects_long_token(self) -> None:
        token = base64.b64encode(bytes(65)).decode("ascii")
        assert unmask_token(token, 32) is None

    def test_empty_string(self) -> None:
        assert decode_token("") == b""
        assert unmask_token("", 32) is None


# ---------------------------------------------------------------------------
# Constant-time comparison
# ---------------------------------------------------------------------------


class TestConstantTimeCompare:
    def test_equal_sequences(self) -> None:
        assert constant_time_compare(SECRET, bytes(SECRET)) is True

    @pytest.mark.parametrize("position", [0, 15, 31])
    def test_single_differing_byte(self, position: int) -> None:
        tampered = bytearray(SECRET)
        tampered[position] ^= 0x01
        assert constant_time_compare(SECRET, bytes(tampered)) is False

    def test_length_mismatch(self) -> None:
        assert constant_time_compare(SECRET, SECRET[:-1]) is False

    def test_empty_sequences_are_equal(self) -> None:
        assert constant_time_compare(b"", b"") is True

    @pytest.mark.parametrize("position", [0, 15, 31, None])
    def test_reads_every_byte_regardless_of_difference(self, position: int | None) -> None:
        tampered = bytearray(SECRET)
        if position is not None:
            tampered[position] ^= 0xFF
        a = CountingBytes(SECRET)
        b = CountingBytes(bytes(tampered))

        constant_time_compare(a, b)

        assert a.reads == 32
        assert b.reads == 32

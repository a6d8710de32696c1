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
"""Token masking and constant-time comparison.

A masked token is ``base64(key || key XOR secret)`` where ``key`` is a
fresh random string of the same length as the secret. Every emission uses
a new key, so the transmitted text differs on each page render while the
secret it carries stays the same (BREACH mitigation).
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Sequence


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """Byte-wise XOR of two equal-length byte strings."""
    if len(a) != len(b):
        raise ValueError(f"Cannot XOR byte strings of different length ({len(a)} != {len(b)})")
    return bytes(x ^ y for x, y in zip(a, b))


def mask_token(secret: bytes, key: bytes) -> str:
    """Mask *secret* with *key* and return the base64 wire form."""
    return base64.b64encode(key + xor_bytes(key, secret)).decode("ascii")


def decode_token(token: object) -> bytes | None:
    """Strictly decode base64 *token*; anything malformed yields ``None``."""
    if not isinstance(token, str):
        return None
    try:
        return base64.b64decode(token.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError):
        return None


def unmask_token(token: object, length: int) -> bytes | None:
    """Recover the secret carried by a masked *token*.

    Returns ``None`` unless *token* decodes to exactly ``2 * length`` bytes.
    """
    decoded = decode_token(token)
    if decoded is None or len(decoded) != length * 2:
        return None
    return xor_bytes(decoded[:length], decoded[length:])


def constant_time_compare(a: Sequence[int], b: Sequence[int]) -> bool:
    """Compare two byte sequences without data-dependent early exit.

    The length check is not constant-time; lengths are not secret here.
    """
    if len(a) != len(b):
        return False

    result = 0
    for x, y in zip(a, b):
        result |= x ^ y
    return result == 0

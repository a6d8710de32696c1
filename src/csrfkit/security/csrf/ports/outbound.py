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
"""Outbound ports for the CSRF token handler.

The handler never touches cookies, sessions, request bodies or the
entropy source directly; it goes through these three narrow protocols.
Every storage and source call receives the request context explicitly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from csrfkit.security.csrf.context import CsrfRequestContext


@runtime_checkable
class RandomSource(Protocol):
    """Cryptographically secure byte generator."""

    def get_bytes(self, length: int) -> bytes: ...


@runtime_checkable
class TokenStorage(Protocol):
    """Persists the secret token for the lifetime of the client session.

    Implementations must report a missing or corrupted entry as ``None``
    instead of raising.
    """

    def get_stored_token(self, context: CsrfRequestContext) -> bytes | None: ...

    def store_token(self, context: CsrfRequestContext, token: bytes) -> None: ...


@runtime_checkable
class TokenSource(Protocol):
    """Extracts the raw, still-masked token string from an inbound request.

    Returns ``None`` when the request does not carry a token.
    """

    def get_request_token(self, context: CsrfRequestContext) -> str | None: ...

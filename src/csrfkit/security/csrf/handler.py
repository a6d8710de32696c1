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
"""CsrfTokenHandler — issues and validates masked anti-forgery tokens.

One handler instance serves exactly one request. It owns the secret token
for that request (loaded lazily from a :class:`TokenStorage`), hands out a
freshly masked copy of it on every :meth:`~CsrfTokenHandler.get_token` call,
and validates the token a client sends back through one of its
:class:`TokenSource` collaborators.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

import structlog

from csrfkit.kernel.exceptions import InvalidCsrfTokenException
from csrfkit.security.csrf.context import CsrfRequestContext
from csrfkit.security.csrf.masking import constant_time_compare, mask_token, unmask_token
from csrfkit.security.csrf.ports.outbound import RandomSource, TokenSource, TokenStorage
from csrfkit.security.csrf.random import SecureRandomSource

logger = structlog.get_logger("csrfkit.security.csrf")

DEFAULT_TOKEN_LENGTH: int = 32
"""Number of random bytes in the secret token."""

DEFAULT_VALIDATED_METHODS: frozenset[str] = frozenset({"POST", "PUT", "DELETE"})
"""HTTP methods whose requests must carry a valid token."""


class HandlerState(Enum):
    """Lifecycle of the secret token inside a single handler."""

    UNINITIALIZED = "UNINITIALIZED"
    LOADED = "LOADED"
    REGENERATED = "REGENERATED"


class CsrfTokenHandler:
    """Request-scoped CSRF token generator and validator.

    Args:
        context: The request/response handle for the current request.
        storage: Where the secret token persists between requests.
        sources: Where to look for the submitted token, in priority order.
        random_source: Secure byte generator; defaults to
            :class:`SecureRandomSource`.
        token_length: Secret length in bytes.
        validated_methods: Methods subject to validation in
            :meth:`validate_request`.
    """

    def __init__(
        self,
        context: CsrfRequestContext,
        storage: TokenStorage,
        sources: Iterable[TokenSource] = (),
        *,
        random_source: RandomSource | None = None,
        token_length: int = DEFAULT_TOKEN_LENGTH,
        validated_methods: Iterable[str] = DEFAULT_VALIDATED_METHODS,
    ) -> None:
        if token_length <= 0:
            raise ValueError(f"token_length must be positive, got {token_length}")

        self._context = context
        self._storage = storage
        self._sources: list[TokenSource] = []
        self.sources = sources
        self._random: RandomSource = random_source or SecureRandomSource()
        self._token_length = token_length
        self._validated_methods = frozenset(m.upper() for m in validated_methods)
        self._token: bytes | None = None
        self._state = HandlerState.UNINITIALIZED

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    @property
    def context(self) -> CsrfRequestContext:
        return self._context

    @property
    def storage(self) -> TokenStorage:
        return self._storage

    @storage.setter
    def storage(self, storage: TokenStorage) -> None:
        self._storage = storage

    @property
    def random_source(self) -> RandomSource:
        return self._random

    @random_source.setter
    def random_source(self, random_source: RandomSource) -> None:
        self._random = random_source

    @property
    def sources(self) -> list[TokenSource]:
        """Token sources in the order they are consulted."""
        return list(self._sources)

    @sources.setter
    def sources(self, sources: Iterable[TokenSource]) -> None:
        checked: list[TokenSource] = []
        for source in sources:
            if not isinstance(source, TokenSource):
                raise TypeError(f"{type(source).__name__} does not implement TokenSource")
            checked.append(source)
        self._sources = checked

    @property
    def token_length(self) -> int:
        return self._token_length

    @property
    def validated_methods(self) -> frozenset[str]:
        return self._validated_methods

    @property
    def state(self) -> HandlerState:
        return self._state

    # ------------------------------------------------------------------
    # Token operations
    # ------------------------------------------------------------------

    def get_true_token(self) -> bytes:
        """Return the secret token, creating and storing one if needed.

        The stored value is read once per handler. A missing value, or one
        whose length is not ``token_length``, is replaced by fresh random
        bytes which are written back to storage.
        """
        if self._state is HandlerState.UNINITIALIZED:
            self._token = self._storage.get_stored_token(self._context)
            self._state = HandlerState.LOADED

        if self._token is None or len(self._token) != self._token_length:
            self._token = self._random.get_bytes(self._token_length)
            self._storage.store_token(self._context, self._token)
            self._state = HandlerState.LOADED
            logger.debug("csrf_secret_created", path=self._context.path)

        return self._token

    def get_token(self) -> str:
        """Return a newly masked, base64 encoded token for embedding in a page.

        Every call returns a different string; all of them validate against
        the same secret.
        """
        key = self._random.get_bytes(self._token_length)
        return mask_token(self.get_true_token(), key)

    def validate_token(self, token: object) -> bool:
        """Return ``True`` if *token* is a masked form of the current secret.

        Malformed input of any kind returns ``False``.
        """
        candidate = unmask_token(token, self._token_length)
        if candidate is None:
            return False
        return constant_time_compare(candidate, self.get_true_token())

    def regenerate_token(self) -> CsrfTokenHandler:
        """Replace the secret, invalidating every previously issued token.

        Call this after privilege changes such as login.
        """
        self._token = None
        self._state = HandlerState.REGENERATED
        logger.debug("csrf_secret_regenerated", path=self._context.path)
        self.get_true_token()
        return self

    def get_request_token(self) -> str | None:
        """Return the first token any source finds in the request."""
        for source in self._sources:
            token = source.get_request_token(self._context)
            if token is not None:
                return token
        return None

    def validate_request(self, raise_on_failure: bool = False) -> bool:
        """Validate the token sent with the current request.

        The secret is always loaded first so that storage side effects
        happen for every request. Methods outside ``validated_methods`` are
        accepted without looking for a token.

        Returns:
            ``True`` when the request is accepted, ``False`` when it is
            rejected and ``raise_on_failure`` is off. The caller is
            responsible for answering a rejected request with HTTP 400.

        Raises:
            InvalidCsrfTokenException: If the request is rejected and
                ``raise_on_failure`` is set.
        """
        self.get_true_token()

        if self._context.method.upper() not in self._validated_methods:
            return True

        token = self.get_request_token()
        if token is not None and self.validate_token(token):
            return True

        reason = "missing" if token is None else "invalid"
        logger.warning(
            "csrf_request_rejected",
            method=self._context.method,
            path=self._context.path,
            reason=reason,
        )
        if raise_on_failure:
            raise InvalidCsrfTokenException(
                "Request token was invalid",
                context={"method": self._context.method, "path": self._context.path, "reason": reason},
            )
        return False

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
"""CsrfHandlerFactory — builds request-scoped handlers from configuration."""

from __future__ import annotations

from csrfkit.config.properties.csrf import CsrfProperties
from csrfkit.security.csrf.adapters.cookie import CookieTokenStorage
from csrfkit.security.csrf.adapters.session import SessionTokenStorage
from csrfkit.security.csrf.adapters.sources import FormFieldTokenSource, HeaderTokenSource
from csrfkit.security.csrf.context import CsrfRequestContext
from csrfkit.security.csrf.handler import CsrfTokenHandler
from csrfkit.security.csrf.ports.outbound import RandomSource, TokenSource, TokenStorage
from csrfkit.security.csrf.random import SecureRandomSource


class CsrfHandlerFactory:
    """Holds the shared, stateless collaborators and creates one handler per request.

    Storage is cookie-backed when ``properties.use_cookies`` is set and
    session-backed otherwise. Sources default to the form field followed
    by the header.
    """

    def __init__(
        self,
        properties: CsrfProperties | None = None,
        *,
        random_source: RandomSource | None = None,
        storage: TokenStorage | None = None,
        sources: list[TokenSource] | None = None,
    ) -> None:
        self._properties = properties or CsrfProperties()
        self._random: RandomSource = random_source or SecureRandomSource()
        self._storage = storage or self._default_storage()
        self._sources = sources if sources is not None else self._default_sources()

    @property
    def properties(self) -> CsrfProperties:
        return self._properties

    @property
    def storage(self) -> TokenStorage:
        return self._storage

    @property
    def sources(self) -> list[TokenSource]:
        return list(self._sources)

    def create(self, context: CsrfRequestContext) -> CsrfTokenHandler:
        """Return a fresh handler bound to *context*."""
        return CsrfTokenHandler(
            context,
            self._storage,
            self._sources,
            random_source=self._random,
            token_length=self._properties.token_length,
            validated_methods=self._properties.validated_methods,
        )

    def _default_storage(self) -> TokenStorage:
        props = self._properties
        if props.use_cookies:
            return CookieTokenStorage(
                props.cookie_name,
                max_age=props.cookie_max_age,
                path=props.cookie_path,
                domain=props.cookie_domain,
                secure=props.cookie_secure,
                samesite=props.cookie_samesite,
            )
        return SessionTokenStorage(props.session_key)

    def _default_sources(self) -> list[TokenSource]:
        return [
            FormFieldTokenSource(self._properties.field_name),
            HeaderTokenSource(self._properties.header_name),
        ]

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
"""Tests for CsrfHandlerFactory and CsrfProperties."""

from __future__ import annotations

import pytest

from csrfkit.config.properties.csrf import CsrfProperties
from csrfkit.security.csrf.adapters import (
    CookieTokenStorage,
    FormFieldTokenSource,
    HeaderTokenSource,
    SessionTokenStorage,
)
from csrfkit.security.csrf.context import CsrfRequestContext
from csrfkit.security.csrf.factory import CsrfHandlerFactory


class TestCsrfProperties:
    def test_defaults(self) -> None:
        props = CsrfProperties()
        assert props.token_length == 32
        assert props.validated_methods == ["POST", "PUT", "DELETE"]
        assert props.use_cookies is True

    def test_methods_are_upper_cased(self) -> None:
        assert CsrfProperties(validated_methods=["post", "Patch"]).validated_methods == ["POST", "PATCH"]

    def test_rejects_non_positive_length(self) -> None:
        with pytest.raises(ValueError):
            CsrfProperties(token_length=0)


class TestCsrfHandlerFactory:
    def test_cookie_storage_by_default(self) -> None:
        factory = CsrfHandlerFactory()
        assert isinstance(factory.storage, CookieTokenStorage)
        assert factory.storage.cookie_name == "csrf_token"

    def test_session_storage_when_cookies_disabled(self) -> None:
        factory = CsrfHandlerFactory(CsrfProperties(use_cookies=False, session_key="_csrf"))
        assert isinstance(factory.storage, SessionTokenStorage)
        assert factory.storage.session_key == "_csrf"

    def test_default_sources_form_then_header(self) -> None:
        factory = CsrfHandlerFactory(CsrfProperties(field_name="_token", header_name="X-Token"))
        form, header = factory.sources
        assert isinstance(form, FormFieldTokenSource)
        assert form.field_name == "_token"
        assert isinstance(header, HeaderTokenSource)
        assert header.header_name == "X-Token"

    def test_explicit_sources_override_defaults(self) -> None:
        header = HeaderTokenSource()
        factory = CsrfHandlerFactory(sources=[header])
        assert factory.sources == [header]

    def test_create_builds_independent_handlers(self) -> None:
        factory = CsrfHandlerFactory(CsrfProperties(token_length=16, validated_methods=["PATCH"]))
        first = factory.create(CsrfRequestContext(method="GET"))
        second = factory.create(CsrfRequestContext(method="GET"))

        assert first is not second
        assert first.token_length == 16
        assert first.validated_methods == frozenset({"PATCH"})

    def test_handlers_share_stored_secret_through_context(self) -> None:
        factory = CsrfHandlerFactory(CsrfProperties(use_cookies=False))
        session: dict[str, object] = {}

        issuing = factory.create(CsrfRequestContext(method="GET", session=session))
        token = issuing.get_token()

        receiving = factory.create(
            CsrfRequestContext(method="POST", form={"csrf_token": token}, session=session)
        )
        assert receiving.validate_request() is True

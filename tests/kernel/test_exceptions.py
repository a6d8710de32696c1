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
"""Tests for the csrfkit exception hierarchy and ErrorResponse."""

from __future__ import annotations

from csrfkit.kernel import (
    ConfigurationException,
    CsrfConfigurationException,
    CsrfKitException,
    ErrorCategory,
    ErrorResponse,
    InvalidCsrfTokenException,
    SecurityException,
)


class TestCsrfKitException:
    def test_basic_creation(self):
        exc = CsrfKitException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_context_defaults_to_empty_dict(self):
        exc = CsrfKitException("test")
        exc.context["key"] = "value"
        assert CsrfKitException("test2").context == {}


class TestExceptionHierarchy:
    def test_invalid_token_is_security(self):
        assert issubclass(InvalidCsrfTokenException, SecurityException)
        assert issubclass(SecurityException, CsrfKitException)

    def test_configuration_branch(self):
        assert issubclass(CsrfConfigurationException, ConfigurationException)
        assert issubclass(ConfigurationException, CsrfKitException)

    def test_invalid_token_defaults(self):
        exc = InvalidCsrfTokenException()
        assert str(exc) == "Request token was invalid"
        assert exc.code == "CSRF_TOKEN_INVALID"


class TestErrorResponse:
    def test_to_dict_omits_missing_transaction_id(self):
        error = ErrorResponse(
            timestamp="2026-01-01T00:00:00+00:00",
            status=400,
            error="Bad Request",
            message="Request token was invalid",
            code="CSRF_TOKEN_INVALID",
            path="/submit",
            category=ErrorCategory.SECURITY,
        )
        data = error.to_dict()
        assert data["status"] == 400
        assert data["category"] == "SECURITY"
        assert "transaction_id" not in data

    def test_to_dict_includes_transaction_id(self):
        error = ErrorResponse("t", 400, "Bad Request", "m", "c", "/", transaction_id="tx-1")
        assert error.to_dict()["transaction_id"] == "tx-1"

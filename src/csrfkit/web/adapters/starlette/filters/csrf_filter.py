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
"""CsrfFilter — masked-token CSRF protection for Starlette applications.

For every request the filter:

* builds a :class:`CsrfRequestContext` and a request-scoped
  :class:`CsrfTokenHandler` from the configured factory,
* loads (or creates) the secret token, so the storage cookie or session
  entry exists before any page renders a form,
* for validated methods (POST, PUT, DELETE by default) checks the token
  from the form field or header and answers HTTP 400 if it is missing
  or invalid,
* exposes the handler on ``request.state.csrf`` so route code can call
  ``get_token()`` or ``regenerate_token()``,
* applies the cookies the storage queued to the outbound response.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import structlog
from starlette.responses import JSONResponse

from csrfkit.kernel.exceptions import CsrfConfigurationException
from csrfkit.kernel.types import ErrorCategory, ErrorResponse, ErrorSeverity
from csrfkit.security.csrf.factory import CsrfHandlerFactory
from csrfkit.security.csrf.handler import CsrfTokenHandler
from csrfkit.web.adapters.starlette.context import (
    apply_response_cookies,
    buffer_request,
    build_csrf_context,
    has_form_body,
)
from csrfkit.web.filters import OncePerRequestFilter
from csrfkit.web.ports.filter import CallNext

logger = structlog.get_logger("csrfkit.web")


def _rejection(request: Any) -> JSONResponse:
    error = ErrorResponse(
        timestamp=datetime.now(UTC).isoformat(),
        status=400,
        error="Bad Request",
        message="Request token was invalid",
        code="CSRF_TOKEN_INVALID",
        path=request.url.path,
        category=ErrorCategory.SECURITY,
        severity=ErrorSeverity.MEDIUM,
    )
    return JSONResponse(error.to_dict(), status_code=400)


class CsrfFilter(OncePerRequestFilter):
    """Validates anti-forgery tokens and manages the secret token per request.

    Args:
        factory: Creates the request-scoped handlers.
        raise_on_failure: When ``True`` a rejected request raises
            :class:`~csrfkit.kernel.exceptions.InvalidCsrfTokenException`
            for the host's exception handlers instead of producing the
            400 response here. Defaults to the factory's properties.
    """

    def __init__(
        self,
        factory: CsrfHandlerFactory | None = None,
        *,
        raise_on_failure: bool | None = None,
        exclude_patterns: list[str] | None = None,
    ) -> None:
        self._factory = factory or CsrfHandlerFactory()
        self._raise_on_failure = (
            self._factory.properties.raise_on_failure if raise_on_failure is None else raise_on_failure
        )
        if exclude_patterns is not None:
            self.exclude_patterns = list(exclude_patterns)

    @property
    def factory(self) -> CsrfHandlerFactory:
        return self._factory

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        read_form = (
            request.method.upper() in self._factory.properties.validated_methods and has_form_body(request)
        )
        # The form is parsed from the buffered body; the route reads it again downstream.
        downstream = await buffer_request(request) if read_form else request

        context = await build_csrf_context(request, read_form=read_form)
        handler = self._factory.create(context)

        if not handler.validate_request(raise_on_failure=self._raise_on_failure):
            response = _rejection(request)
            apply_response_cookies(context, response)
            return response

        downstream.state.csrf = handler
        response = await call_next(downstream)
        apply_response_cookies(context, response)
        return response


def get_csrf_handler(request: Any) -> CsrfTokenHandler:
    """Return the handler :class:`CsrfFilter` attached to *request*."""
    handler = getattr(request.state, "csrf", None)
    if handler is None:
        logger.error("csrf_filter_not_installed", path=request.url.path)
        raise CsrfConfigurationException(
            "No CSRF handler on request; is CsrfFilter installed?",
            code="CSRF_FILTER_MISSING",
        )
    return handler

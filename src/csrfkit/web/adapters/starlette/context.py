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
"""Translate between Starlette requests/responses and :class:`CsrfRequestContext`."""

from __future__ import annotations

from typing import Any

from starlette.requests import Request
from starlette.types import Message, Receive

from csrfkit.security.csrf.context import CsrfRequestContext

FORM_CONTENT_TYPES: tuple[str, ...] = ("application/x-www-form-urlencoded", "multipart/form-data")
"""Content types whose body is parsed for a form-field token."""


def has_form_body(request: Any) -> bool:
    """Return ``True`` if the request body is form-encoded."""
    content_type: str = request.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower() in FORM_CONTENT_TYPES


async def build_csrf_context(request: Any, *, read_form: bool = False) -> CsrfRequestContext:
    """Snapshot the parts of *request* the CSRF handler needs.

    The form is parsed only when *read_form* is set; the session is taken
    from ``scope["session"]`` when session middleware populated it.
    """
    form: dict[str, Any] = {}
    if read_form:
        form = dict((await request.form()).items())

    scope = getattr(request, "scope", {})
    return CsrfRequestContext(
        method=request.method,
        path=request.url.path,
        headers=request.headers,
        form=form,
        cookies=request.cookies,
        session=scope.get("session"),
    )


def replay_body(body: bytes, receive: Receive) -> Receive:
    """Wrap *receive* so the already-consumed *body* is delivered once more."""
    sent = False

    async def _receive() -> Message:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return _receive


async def buffer_request(request: Request) -> Request:
    """Read the body of *request* and return a request that can read it again."""
    body = await request.body()
    return Request(request.scope, replay_body(body, request.receive))


def apply_response_cookies(context: CsrfRequestContext, response: Any) -> None:
    """Set every cookie queued on *context* on the outbound *response*."""
    for cookie in context.response_cookies:
        response.set_cookie(
            key=cookie.key,
            value=cookie.value,
            max_age=cookie.max_age,
            path=cookie.path,
            domain=cookie.domain,
            secure=cookie.secure,
            httponly=cookie.httponly,
            samesite=cookie.samesite,
        )

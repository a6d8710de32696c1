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
"""Explicit per-request context handed to the CSRF handler and its collaborators."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ResponseCookie:
    """A ``Set-Cookie`` instruction queued for the outbound response."""

    key: str
    value: str
    max_age: int | None = None
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: str = "lax"


@dataclass
class CsrfRequestContext:
    """Inbound request data plus the outbound cookie queue for one request.

    Attributes:
        method: HTTP method of the request.
        path: URL path, used for error reporting only.
        headers: Request headers. Lookups through :meth:`get_header` are
            case-insensitive regardless of the mapping passed in.
        form: Submitted form fields (empty for non-form requests).
        cookies: Request cookies.
        session: Server-side session data, or ``None`` when the host has
            no session support.
        response_cookies: Cookies that storage backends want set on the
            response; the host applies them after the handler has run.
    """

    method: str
    path: str = "/"
    headers: Mapping[str, str] = field(default_factory=dict)
    form: Mapping[str, Any] = field(default_factory=dict)
    cookies: Mapping[str, str] = field(default_factory=dict)
    session: MutableMapping[str, Any] | None = None
    response_cookies: list[ResponseCookie] = field(default_factory=list)

    def get_header(self, name: str) -> str | None:
        """Return the header value for *name*, ignoring case."""
        value = self.headers.get(name)
        if value is not None:
            return value
        lowered = name.lower()
        for key, candidate in self.headers.items():
            if key.lower() == lowered:
                return candidate
        return None

    def get_cookie(self, name: str) -> str | None:
        """Return the cookie value, preferring one queued during this request."""
        for cookie in reversed(self.response_cookies):
            if cookie.key == name:
                return cookie.value
        return self.cookies.get(name)

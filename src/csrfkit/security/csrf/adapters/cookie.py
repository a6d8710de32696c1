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
"""Cookie-backed secret token storage."""

from __future__ import annotations

import base64

from csrfkit.security.csrf.context import CsrfRequestContext, ResponseCookie
from csrfkit.security.csrf.masking import decode_token


class CookieTokenStorage:
    """Keeps the secret token, base64 encoded, in a client-side cookie.

    Writes are queued on ``context.response_cookies``; the host applies
    them to the outbound response.
    """

    def __init__(
        self,
        cookie_name: str = "csrf_token",
        *,
        max_age: int | None = None,
        path: str = "/",
        domain: str | None = None,
        secure: bool = False,
        httponly: bool = True,
        samesite: str = "lax",
    ) -> None:
        self._cookie_name = cookie_name
        self._max_age = max_age
        self._path = path
        self._domain = domain
        self._secure = secure
        self._httponly = httponly
        self._samesite = samesite

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    def get_stored_token(self, context: CsrfRequestContext) -> bytes | None:
        value = context.get_cookie(self._cookie_name)
        if not value:
            return None
        return decode_token(value)

    def store_token(self, context: CsrfRequestContext, token: bytes) -> None:
        context.response_cookies.append(
            ResponseCookie(
                key=self._cookie_name,
                value=base64.b64encode(token).decode("ascii"),
                max_age=self._max_age,
                path=self._path,
                domain=self._domain,
                secure=self._secure,
                httponly=self._httponly,
                samesite=self._samesite,
            )
        )

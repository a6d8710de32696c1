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
"""Session-backed secret token storage."""

from __future__ import annotations

import base64

from csrfkit.kernel.exceptions import CsrfConfigurationException
from csrfkit.security.csrf.context import CsrfRequestContext
from csrfkit.security.csrf.masking import decode_token


class SessionTokenStorage:
    """Keeps the secret token in server-side session data.

    The token is stored base64 encoded so that JSON-serialising session
    backends can persist it.
    """

    def __init__(self, session_key: str = "csrf_token") -> None:
        self._session_key = session_key

    @property
    def session_key(self) -> str:
        return self._session_key

    def get_stored_token(self, context: CsrfRequestContext) -> bytes | None:
        if context.session is None:
            return None
        return decode_token(context.session.get(self._session_key))

    def store_token(self, context: CsrfRequestContext, token: bytes) -> None:
        if context.session is None:
            raise CsrfConfigurationException(
                "Session-backed CSRF storage requires session support for the request",
                code="CSRF_SESSION_MISSING",
                context={"path": context.path},
            )
        context.session[self._session_key] = base64.b64encode(token).decode("ascii")

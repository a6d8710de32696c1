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
"""Token sources reading the submitted token from form data or headers."""

from __future__ import annotations

from csrfkit.security.csrf.context import CsrfRequestContext


class FormFieldTokenSource:
    """Reads the token from a named field of the submitted form."""

    def __init__(self, field_name: str = "csrf_token") -> None:
        self._field_name = field_name

    @property
    def field_name(self) -> str:
        return self._field_name

    def get_request_token(self, context: CsrfRequestContext) -> str | None:
        value = context.form.get(self._field_name)
        # Uploaded files and other non-text parts never carry a token.
        return value if isinstance(value, str) else None


class HeaderTokenSource:
    """Reads the token from a named HTTP request header."""

    def __init__(self, header_name: str = "X-CSRF-Token") -> None:
        self._header_name = header_name

    @property
    def header_name(self) -> str:
        return self._header_name

    def get_request_token(self, context: CsrfRequestContext) -> str | None:
        return context.get_header(self._header_name)

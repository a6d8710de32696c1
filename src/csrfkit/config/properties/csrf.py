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
"""CSRF subsystem configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field

from csrfkit.core.config import config_properties


@config_properties(prefix="csrfkit.csrf")
@dataclass
class CsrfProperties:
    """Configuration for the CSRF token handler (csrfkit.csrf.*).

    ``use_cookies`` selects where the secret token is persisted: a
    client-side cookie when ``True``, the server-side session otherwise.
    """

    token_length: int = 32
    validated_methods: list[str] = field(default_factory=lambda: ["POST", "PUT", "DELETE"])
    use_cookies: bool = True
    raise_on_failure: bool = False

    cookie_name: str = "csrf_token"
    cookie_max_age: int | None = None
    cookie_path: str = "/"
    cookie_domain: str | None = None
    cookie_secure: bool = False
    cookie_samesite: str = "lax"

    session_key: str = "csrf_token"
    field_name: str = "csrf_token"
    header_name: str = "X-CSRF-Token"

    def __post_init__(self) -> None:
        if self.token_length <= 0:
            raise ValueError(f"token_length must be positive, got {self.token_length}")
        self.validated_methods = [m.upper() for m in self.validated_methods]

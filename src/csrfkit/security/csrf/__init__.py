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
"""Masked anti-forgery tokens with pluggable storage and sources.

Typical use::

    factory = CsrfHandlerFactory(config.bind(CsrfProperties))
    handler = factory.create(context)
    if not handler.validate_request():
        ...  # answer with HTTP 400
    form_token = handler.get_token()
"""

from csrfkit.security.csrf.adapters import (
    CookieTokenStorage,
    FormFieldTokenSource,
    HeaderTokenSource,
    SessionTokenStorage,
)
from csrfkit.security.csrf.context import CsrfRequestContext, ResponseCookie
from csrfkit.security.csrf.factory import CsrfHandlerFactory
from csrfkit.security.csrf.handler import CsrfTokenHandler, HandlerState
from csrfkit.security.csrf.masking import constant_time_compare, mask_token, unmask_token
from csrfkit.security.csrf.ports.outbound import RandomSource, TokenSource, TokenStorage
from csrfkit.security.csrf.random import SecureRandomSource

__all__ = [
    "CookieTokenStorage",
    "CsrfHandlerFactory",
    "CsrfRequestContext",
    "CsrfTokenHandler",
    "FormFieldTokenSource",
    "HandlerState",
    "HeaderTokenSource",
    "RandomSource",
    "ResponseCookie",
    "SecureRandomSource",
    "SessionTokenStorage",
    "TokenSource",
    "TokenStorage",
    "constant_time_compare",
    "mask_token",
    "unmask_token",
]

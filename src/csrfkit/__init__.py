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
"""csrfkit — masked anti-forgery tokens for stateful web requests."""

from csrfkit.config.properties.csrf import CsrfProperties
from csrfkit.kernel.exceptions import InvalidCsrfTokenException
from csrfkit.security.csrf import (
    CookieTokenStorage,
    CsrfHandlerFactory,
    CsrfRequestContext,
    CsrfTokenHandler,
    FormFieldTokenSource,
    HeaderTokenSource,
    SessionTokenStorage,
)

__version__ = "1.0.0"

__all__ = [
    "CookieTokenStorage",
    "CsrfHandlerFactory",
    "CsrfProperties",
    "CsrfRequestContext",
    "CsrfTokenHandler",
    "FormFieldTokenSource",
    "HeaderTokenSource",
    "InvalidCsrfTokenException",
    "SessionTokenStorage",
]

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
"""Error enums and RFC 7807-inspired ErrorResponse model.

All types use only the Python standard library.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Classifies an error by its origin or domain."""

    VALIDATION = "VALIDATION"
    SECURITY = "SECURITY"
    TECHNICAL = "TECHNICAL"


class ErrorSeverity(Enum):
    """Indicates the severity level of an error."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass
class ErrorResponse:
    """RFC 7807-inspired structured error response.

    Core fields are always present. ``transaction_id`` is excluded from
    ``to_dict()`` output when it is ``None``.
    """

    timestamp: str
    status: int
    error: str
    message: str
    code: str
    path: str

    transaction_id: str | None = None

    category: ErrorCategory = ErrorCategory.TECHNICAL
    severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dict suitable for JSON responses."""
        result: dict[str, Any] = {
            "timestamp": self.timestamp,
            "status": self.status,
            "error": self.error,
            "message": self.message,
            "code": self.code,
            "path": self.path,
            "category": self.category.value,
            "severity": self.severity.value,
        }
        if self.transaction_id is not None:
            result["transaction_id"] = self.transaction_id
        return result

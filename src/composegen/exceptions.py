# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
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

"""
Exceptions raised by composegen operations.

Every error is raised before any file is written. The CLI layer turns them
into messages, JSON records and exit codes.
"""
from typing import Any, Dict, List


class ComposegenError(Exception):
    """Base exception for all composegen errors."""

    exit_code = 1

    def to_dict(self) -> Dict[str, Any]:
        """Machine-readable form of the error."""
        return {"error": str(self)}


class UnknownStackError(ComposegenError):
    """Raised when a stack id is not in the catalog."""

    def __init__(self, stack_id: str, available: List[str]):
        self.stack_id = stack_id
        self.available = list(available)
        super().__init__(f"Unknown stack: {stack_id}")

    def to_dict(self) -> Dict[str, Any]:
        return {"error": str(self), "available": self.available}


class UnknownServiceError(ComposegenError):
    """Raised when a service id is not in the catalog."""

    def __init__(self, service_id: str, available: List[str]):
        self.service_id = service_id
        self.available = list(available)
        super().__init__(f"Unknown service: {service_id}")

    def to_dict(self) -> Dict[str, Any]:
        return {"error": str(self), "available": self.available}


class ComposeFileNotFoundError(ComposegenError, FileNotFoundError):
    """Raised when a compose file to read does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")

    def __str__(self) -> str:
        return f"File not found: {self.path}"

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": False, "error": "File not found", "file": self.path}


class MalformedComposeError(ComposegenError):
    """Raised when existing compose text cannot be parsed into a document."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed compose file: {reason}")

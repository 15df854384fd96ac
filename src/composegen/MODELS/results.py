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
Result values returned by composegen operations.

Each result exposes ``succeeded`` for choosing the process exit status and
``to_dict`` for JSON output.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class StackSummary(BaseModel):
    """
    Short description of a catalog stack.
    """
    id: str
    name: str
    description: str


class CatalogListing(BaseModel):
    """
    Everything the catalog offers.
    """
    stacks: List[StackSummary] = []
    services: List[str] = []

    @property
    def succeeded(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class StackResult(BaseModel):
    """
    Outcome of writing a stack template or a custom build to a file.
    """
    stack: Optional[str] = None
    name: str
    file: str
    services: List[str] = []

    @property
    def succeeded(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"stack": self.stack, "file": self.file, "services": self.services}


class AddResult(BaseModel):
    """
    Outcome of adding a single service to a compose file.

    ``mode`` is ``created`` for a new file, ``appended`` for a textual
    append and ``rewritten`` for a structural rewrite.
    """
    added: str
    file: str
    service: Dict[str, Any] = {}
    volumes: List[str] = []
    mode: str = "created"

    @property
    def succeeded(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"added": self.added, "file": self.file, "service": self.service}


class ValidationReport(BaseModel):
    """
    Issues found in a compose file. An empty issue list means valid.
    """
    file: str
    issues: List[str] = []
    lines: int = 0

    @property
    def valid(self) -> bool:
        return not self.issues

    @property
    def succeeded(self) -> bool:
        # Issues are a normal result, not a failure
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "file": self.file, "issues": self.issues, "lines": self.lines}

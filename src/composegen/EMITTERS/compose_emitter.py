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
Emitter for compose YAML text.

Produces a small, deterministic subset of YAML: two-space indentation,
dash-prefixed sequence items, ``key: value`` pairs and nested blocks.
Strings are quoted only when they would otherwise break the output.
"""
import logging
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel

from ..MODELS.compose_document import Document

logger = logging.getLogger(__name__)

INDENT = "  "

# A bare string containing one of these would be read back as a mapping or comment
QUOTE_TRIGGERS = (":", "#", "'")
QUOTE_PREFIXES = ("{", "[")


class ComposeEmitter:
    """
    Serializer for compose documents and plain nested values.
    """
    @staticmethod
    def quote(text: str) -> str:
        """
        Quotes a string scalar if it contains characters significant to YAML.

        :param text: The string to emit.
        :return: The string unchanged, or wrapped in double quotes with inner quotes escaped.
        """
        if any(ch in text for ch in QUOTE_TRIGGERS) or text.startswith(QUOTE_PREFIXES):
            escaped = text.replace('"', '\\"')
            return f'"{escaped}"'
        return text

    @staticmethod
    def _normalize(value: Any) -> Any:
        if isinstance(value, BaseModel):
            if hasattr(value, "to_mapping"):
                return value.to_mapping()
            return value.model_dump(mode="json", exclude_none=True)
        if isinstance(value, Enum):
            return value.value
        return value

    @staticmethod
    def emit(value: Any, indent_level: int = 0) -> str:
        """
        Emits a value as YAML text.

        Supported shapes are None, booleans, numbers, strings, lists/tuples and
        mappings (pydantic models and enums are converted first).

        :param value: The value to emit.
        :param indent_level: Nesting depth; each level indents by two spaces.
        :return: The emitted text, without a trailing newline.
        :raises TypeError: If the value has an unsupported type.
        """
        value = ComposeEmitter._normalize(value)
        pad = INDENT * indent_level

        if value is None:
            return "null"

        # bool before int, bool is an int subclass
        if isinstance(value, bool):
            return "true" if value else "false"

        if isinstance(value, (int, float)):
            return str(value)

        if isinstance(value, str):
            return ComposeEmitter.quote(value)

        if isinstance(value, (list, tuple)):
            if not value:
                return "[]"
            return "\n".join(
                f"{pad}- {ComposeEmitter.emit(item, indent_level + 1).lstrip()}"
                for item in value
            )

        if isinstance(value, Mapping):
            if not value:
                return "{}"
            lines = []
            for key, val in value.items():
                val = ComposeEmitter._normalize(val)
                if val is None:
                    lines.append(f"{pad}{key}:")
                elif isinstance(val, (Mapping, list, tuple)) and val:
                    lines.append(f"{pad}{key}:\n{ComposeEmitter.emit(val, indent_level + 1)}")
                else:
                    lines.append(f"{pad}{key}: {ComposeEmitter.emit(val, indent_level)}")
            return "\n".join(lines)

        raise TypeError(f"Cannot emit value of type {type(value).__name__}")

    @staticmethod
    def emit_document(document: Document) -> str:
        """
        Emits a complete compose document, terminated by a newline.
        """
        return ComposeEmitter.emit(document.to_mapping()) + "\n"

    @staticmethod
    def write_text(path: str, content: str):
        """
        Overwrites a file with the given text.

        :param path: Destination file path.
        :param content: Complete file content.
        """
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        logger.info("Wrote %d bytes to %s", len(content.encode('utf-8')), path)

    @staticmethod
    def write(document: Document, path: str) -> str:
        """
        Emits a document and writes it to a file.

        :param document: The document to write.
        :param path: Destination file path.
        :return: The emitted text.
        """
        content = ComposeEmitter.emit_document(document)
        ComposeEmitter.write_text(path, content)
        return content

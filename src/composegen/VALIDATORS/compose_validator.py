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
Structural checks on raw compose file text.
"""
import logging
import os
from typing import Any, Dict, List

from ..MODELS.compose_document import is_named_volume
from ..MODELS.results import ValidationReport
from ..PARSERS.compose_parser import ComposeParser
from ..exceptions import ComposeFileNotFoundError, MalformedComposeError

logger = logging.getLogger(__name__)


class ComposeValidator:
    """
    Validator for compose files.

    The default checks are shallow text checks that run on any content,
    parseable or not. Strict mode additionally parses the YAML and checks
    service and volume references.
    """
    @staticmethod
    def validate_file(compose_path: str, strict: bool = False) -> ValidationReport:
        """
        Validates a compose file on disk.

        :param compose_path: Path to the compose file.
        :param strict: Also run the reference checks.
        :return: The validation report.
        :raises ComposeFileNotFoundError: If the file does not exist.
        """
        if not os.path.exists(compose_path):
            raise ComposeFileNotFoundError(compose_path)

        with open(compose_path, 'r', encoding='utf-8') as f:
            content = f.read()

        issues = ComposeValidator.validate(content, strict=strict)
        logger.info("Validated %s: %d issue(s)", compose_path, len(issues))
        return ValidationReport(file=compose_path, issues=issues, lines=len(content.split("\n")))

    @staticmethod
    def validate(content: str, strict: bool = False) -> List[str]:
        """
        Validates compose text. Every check runs, in order.

        :param content: Raw compose file content.
        :param strict: Also run the reference checks.
        :return: Issue messages; empty if none were found.
        """
        issues = []

        if "services" not in content:
            issues.append("Missing 'services' key")

        for line_num, line in enumerate(content.split("\n"), start=1):
            if "\t" in line:
                issues.append(f"Line {line_num}: Tab character found (use spaces)")

        if "version" not in content:
            issues.append("Missing 'version' key (recommended)")

        if strict:
            issues.extend(ComposeValidator.reference_issues(content))

        return issues

    @staticmethod
    def reference_issues(content: str) -> List[str]:
        """
        Parses compose text and reports dangling ``depends_on`` entries and
        named volumes that are not declared at the top level.

        :param content: Raw compose file content.
        :return: Issue messages.
        """
        try:
            data = ComposeParser.load(content)
        except MalformedComposeError as e:
            return [f"YAML parse error: {e.reason}"]

        services = data.get("services")
        if services is None:
            return []
        if not isinstance(services, dict):
            return ["'services' is not a mapping"]

        declared: Dict[str, Any] = data.get("volumes") or {}
        if not isinstance(declared, dict):
            return ["'volumes' is not a mapping"]

        issues = []
        reported = set()
        for name, spec in services.items():
            if not isinstance(spec, dict):
                issues.append(f"Service '{name}' is not a mapping")
                continue

            for dep in ComposeParser.dependency_names(spec):
                if dep not in services:
                    issues.append(f"Service '{name}' depends on undefined service '{dep}'")

            volumes = spec.get("volumes") or []
            if not isinstance(volumes, list):
                continue
            for volume in volumes:
                if not isinstance(volume, str) or not is_named_volume(volume):
                    continue
                volume_name = volume.split(":", 1)[0]
                if volume_name not in declared and volume_name not in reported:
                    reported.add(volume_name)
                    issues.append(f"Volume '{volume_name}' used by service '{name}' is not declared")

        return issues

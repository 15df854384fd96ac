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
Parsers for Docker Compose YAML files.
"""
import logging
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from ..MODELS.compose_document import Document, ServiceEntry
from ..exceptions import ComposeFileNotFoundError, MalformedComposeError

logger = logging.getLogger(__name__)

SUPPORTED_FIELDS = set(ServiceEntry.model_fields)


class ComposeParser:
    """
    Parser for docker-compose.yml files into the supported field subset.
    """
    def __init__(self, default_version: str = "3.8"):
        """
        :param default_version: Version used when the file declares none.
        """
        self.default_version = default_version

    def parse(self, compose_path: str) -> Document:
        """
        Parses a compose file from a path.

        :param compose_path: Path to the compose file.
        :return: Parsed document.
        :raises ComposeFileNotFoundError: If the file does not exist.
        """
        try:
            with open(compose_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ComposeFileNotFoundError(compose_path) from None
        return self.parse_from_string(content)

    def parse_from_string(self, content: str) -> Document:
        """
        Parses a compose document from a string.

        Fields outside the supported subset are dropped with a warning.

        :param content: YAML content of the compose file.
        :return: Parsed document.
        :raises MalformedComposeError: If the content is not a valid compose document.
        """
        data = self.load(content)

        services_spec = data.get('services') or {}
        if not isinstance(services_spec, dict):
            raise MalformedComposeError("'services' must be a mapping")

        try:
            services = {
                str(name): self.parse_service(str(name), spec or {})
                for name, spec in services_spec.items()
            }
            return Document(
                version=data.get('version') or self.default_version,
                services=services,
                volumes=self._parse_volumes(data.get('volumes')),
            )
        except ValidationError as e:
            raise MalformedComposeError(str(e)) from e

    @staticmethod
    def load(content: str) -> Dict[str, Any]:
        """
        Loads YAML content that must be a mapping at the top level.

        :param content: YAML text.
        :return: The top-level mapping (empty for empty content).
        :raises MalformedComposeError: On YAML syntax errors or a non-mapping root.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise MalformedComposeError(str(e)) from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise MalformedComposeError("top level must be a mapping")
        return data

    def parse_service(self, name: str, spec: Dict[str, Any]) -> ServiceEntry:
        """
        Parses a single service definition.

        :param name: The name of the service.
        :param spec: The raw service mapping.
        :return: A ServiceEntry instance.
        """
        if not isinstance(spec, dict):
            raise MalformedComposeError(f"service '{name}' must be a mapping")

        dropped = sorted(set(spec) - SUPPORTED_FIELDS)
        if dropped:
            logger.warning("Dropping unsupported field(s) %s from service %s", ", ".join(dropped), name)

        image = self._scalar_text(spec.get('image'))
        if not image:
            raise MalformedComposeError(f"service '{name}' has no image")

        # Ports
        ports = None
        if 'ports' in spec:
            ports = []
            for p in self._to_list(spec['ports']):
                if isinstance(p, dict):
                    published = p.get('published')
                    target = p.get('target', '')
                    ports.append(f"{published}:{target}" if published else str(target))
                else:
                    ports.append(str(p))

        # Environment
        environment = None
        env_spec = spec.get('environment')
        if isinstance(env_spec, list):
            environment = {}
            for e in map(str, env_spec):
                if '=' in e:
                    k, v = e.split('=', 1)
                    environment[k] = v
                else:
                    environment[e] = ''
        elif isinstance(env_spec, dict):
            environment = {str(k): self._scalar_text(v) for k, v in env_spec.items()}

        # Volumes
        volumes = None
        if 'volumes' in spec:
            volumes = []
            for v in self._to_list(spec['volumes']):
                if isinstance(v, dict):
                    entry = f"{v.get('source', '')}:{v.get('target', '')}"
                    if v.get('read_only'):
                        entry += ":ro"
                    volumes.append(entry)
                else:
                    volumes.append(str(v))

        depends_on = self.dependency_names(spec) if 'depends_on' in spec else None

        command = spec.get('command')
        if isinstance(command, list):
            command = " ".join(str(c) for c in command)

        restart = spec.get('restart')
        if restart is False:
            restart = "no"
        elif restart is not None:
            restart = self._scalar_text(restart)

        return ServiceEntry(
            image=image,
            ports=ports,
            environment=environment,
            volumes=volumes,
            depends_on=depends_on,
            restart=restart,
            command=command,
        )

    @staticmethod
    def dependency_names(spec: Dict[str, Any]) -> List[str]:
        """
        Returns the service names a raw service spec depends on, in either
        the list or the long mapping syntax.
        """
        depends_on = spec.get('depends_on') or []
        if isinstance(depends_on, dict):
            return [str(k) for k in depends_on]
        if isinstance(depends_on, list):
            return [str(d) for d in depends_on]
        return [str(depends_on)]

    @staticmethod
    def _parse_volumes(spec: Any) -> Optional[Dict[str, Optional[Dict[str, Any]]]]:
        if spec is None:
            return None
        if isinstance(spec, list):
            return {str(name): None for name in spec}
        if not isinstance(spec, dict):
            raise MalformedComposeError("'volumes' must be a mapping")
        return {str(name): (opts or None) for name, opts in spec.items()}

    @staticmethod
    def _scalar_text(val: Any) -> str:
        """
        Converts a YAML scalar back to the text it was written as.
        """
        if val is None:
            return ''
        if isinstance(val, bool):
            # YAML 1.1 reads a bare "no" as false
            return "true" if val else "false"
        return str(val)

    def _to_list(self, val: Any) -> List[Any]:
        """
        Helper to ensure a value is a list.

        :param val: The value to convert.
        :return: A list.
        """
        if val is None:
            return []
        if isinstance(val, (list, tuple)):
            return list(val)
        return [val]

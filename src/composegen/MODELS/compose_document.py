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
Models for compose documents and the services they define.
"""
import os
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RestartPolicy(str, Enum):
    """
    Conditions under which a service should be restarted.
    """
    NO = "no"
    ALWAYS = "always"
    ON_FAILURE = "on-failure"
    UNLESS_STOPPED = "unless-stopped"


def is_named_volume(volume: str) -> bool:
    """
    Checks whether a ``source:target[:mode]`` volume entry mounts a named volume
    rather than a host path.

    :param volume: The volume entry as written in a service definition.
    :return: True if the source is a bare volume name.
    """
    if ':' not in volume:
        return False
    source = volume.split(':', 1)[0]
    if not source or os.path.isabs(source):
        return False
    return not source.startswith(('.', '~', '/', '$'))


def find_dangling_dependencies(services: Mapping[str, "ServiceEntry"]) -> List[Tuple[str, str]]:
    """
    Finds ``depends_on`` entries that name a service missing from ``services``.

    :param services: Service entries keyed by service name.
    :return: (service, missing dependency) pairs in document order.
    """
    dangling = []
    for name, svc in services.items():
        for dep in svc.depends_on or []:
            if dep not in services:
                dangling.append((name, dep))
    return dangling


def find_undeclared_volumes(services: Mapping[str, "ServiceEntry"],
                            declared: Iterable[str]) -> List[str]:
    """
    Finds named volumes used by services but absent from the declared volume names.

    :param services: Service entries keyed by service name.
    :param declared: Names of the top-level volume declarations.
    :return: Undeclared volume names, each reported once.
    """
    declared = set(declared)
    missing = []
    for svc in services.values():
        for name in svc.named_volumes():
            if name not in declared and name not in missing:
                missing.append(name)
    return missing


class ServiceEntry(BaseModel):
    """
    One deployable service. Field order is the order used when emitting.
    """
    model_config = ConfigDict(use_enum_values=True)

    image: str = Field(min_length=1)
    ports: Optional[List[str]] = None
    environment: Optional[Dict[str, str]] = None
    volumes: Optional[List[str]] = None
    depends_on: Optional[List[str]] = None
    restart: Optional[RestartPolicy] = None
    command: Optional[str] = None

    def named_volumes(self) -> List[str]:
        """
        Returns the names of the named volumes this service mounts.
        """
        return [v.split(':', 1)[0] for v in self.volumes or [] if is_named_volume(v)]

    def to_mapping(self) -> Dict[str, Any]:
        """
        Converts the service to a plain mapping keyed by compose field names,
        leaving out unset fields.
        """
        return self.model_dump(mode="json", exclude_none=True)


class Document(BaseModel):
    """
    A complete compose document: format version, services and named volumes.
    """
    version: str = "3.8"
    services: Dict[str, ServiceEntry] = {}
    volumes: Optional[Dict[str, Optional[Dict[str, Any]]]] = None

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_string(cls, value: Any) -> Any:
        # YAML loads an unquoted 3.8 as a float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def _check_dependencies(self) -> "Document":
        dangling = find_dangling_dependencies(self.services)
        if dangling:
            name, dep = dangling[0]
            raise ValueError(f"Service '{name}' depends on undefined service '{dep}'")
        return self

    def add_service(self, name: str, service: ServiceEntry, volume_names: Iterable[str] = ()):
        """
        Adds or replaces a service and declares the given volume names.

        :param name: The service key.
        :param service: The service definition.
        :param volume_names: Named volumes to declare with no options.
        """
        self.services[name] = service
        for vol in volume_names:
            if self.volumes is None:
                self.volumes = {}
            self.volumes.setdefault(vol, None)

    def undeclared_volumes(self) -> List[str]:
        """
        Lists named volumes referenced by services but not declared in ``volumes``.
        """
        return find_undeclared_volumes(self.services, (self.volumes or {}).keys())

    def to_mapping(self) -> Dict[str, Any]:
        """
        Converts the document to the plain nested mapping that gets emitted.
        """
        data: Dict[str, Any] = {
            "version": self.version,
            "services": {name: svc.to_mapping() for name, svc in self.services.items()},
        }
        if self.volumes is not None:
            data["volumes"] = dict(self.volumes)
        return data

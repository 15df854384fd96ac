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
Registry of predefined stacks and single services.

The catalog never hands out its own objects: every lookup returns a deep copy
that callers are free to mutate.
"""
import logging
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel

from ..MODELS.compose_document import Document, ServiceEntry
from ..MODELS.results import CatalogListing, StackSummary
from ..exceptions import UnknownServiceError, UnknownStackError
from .definitions import SERVICE_DEFINITIONS, STACK_DEFINITIONS

logger = logging.getLogger(__name__)


class CatalogStackEntry(BaseModel):
    """
    A named stack template bundling several cooperating services.
    """
    id: str
    name: str
    description: str
    document: Document


class CatalogServiceEntry(BaseModel):
    """
    A single service together with the named volumes it needs declared.
    """
    id: str
    service: ServiceEntry
    volumes: List[str] = []


class Catalog:
    """
    Immutable registry of stack templates and services, keyed by id.
    """
    def __init__(self,
                 stacks: Optional[Mapping[str, Mapping[str, Any]]] = None,
                 services: Optional[Mapping[str, Mapping[str, Any]]] = None):
        """
        Builds the registries from raw definitions.

        :param stacks: Stack definitions keyed by id. Defaults to the bundled stacks.
        :param services: Service definitions keyed by id. Defaults to the bundled services.
        """
        stacks = STACK_DEFINITIONS if stacks is None else stacks
        services = SERVICE_DEFINITIONS if services is None else services

        self._stacks: Dict[str, CatalogStackEntry] = {}
        for stack_id, spec in stacks.items():
            self._stacks[stack_id] = CatalogStackEntry(
                id=stack_id,
                name=spec["name"],
                description=spec["description"],
                document=Document.model_validate(spec["compose"]),
            )

        self._services: Dict[str, CatalogServiceEntry] = {}
        for service_id, spec in services.items():
            self._services[service_id.lower()] = CatalogServiceEntry(
                id=service_id.lower(),
                service=ServiceEntry.model_validate(spec["service"]),
                volumes=list(spec.get("volumes", [])),
            )

    def list_stacks(self) -> List[StackSummary]:
        """
        Lists the stacks in registration order.
        """
        return [
            StackSummary(id=entry.id, name=entry.name, description=entry.description)
            for entry in self._stacks.values()
        ]

    def stack_ids(self) -> List[str]:
        return list(self._stacks)

    def get_stack_entry(self, stack_id: str) -> CatalogStackEntry:
        """
        Looks up a stack by exact, case-sensitive id.

        :param stack_id: The stack id, e.g. ``mean``.
        :return: A deep copy of the catalog entry.
        :raises UnknownStackError: If no stack has that id.
        """
        entry = self._stacks.get(stack_id)
        if entry is None:
            logger.debug("Stack lookup failed for %r", stack_id)
            raise UnknownStackError(stack_id, self.stack_ids())
        return entry.model_copy(deep=True)

    def get_stack(self, stack_id: str) -> Document:
        """
        Returns a fresh copy of a stack's document.
        """
        return self.get_stack_entry(stack_id).document

    def list_services(self) -> List[str]:
        """
        Lists the service ids in registration order.
        """
        return list(self._services)

    def get_service(self, service_id: str) -> CatalogServiceEntry:
        """
        Looks up a service by id, ignoring case.

        :param service_id: The service id, e.g. ``redis`` or ``REDIS``.
        :return: A deep copy of the catalog entry.
        :raises UnknownServiceError: If no service has that id.
        """
        entry = self._services.get(service_id.lower())
        if entry is None:
            logger.debug("Service lookup failed for %r", service_id)
            raise UnknownServiceError(service_id, self.list_services())
        return entry.model_copy(deep=True)

    def listing(self) -> CatalogListing:
        return CatalogListing(stacks=self.list_stacks(), services=self.list_services())


@lru_cache(maxsize=None)
def default_catalog() -> Catalog:
    """
    The catalog of bundled stacks and services, built once per process.
    """
    return Catalog()

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
Merging of catalog services into new or existing compose files.
"""
import logging
import os
from typing import Optional

from ..CATALOG.catalog import Catalog, CatalogServiceEntry, default_catalog
from ..EMITTERS.compose_emitter import INDENT, ComposeEmitter
from ..MODELS.compose_document import Document
from ..MODELS.results import AddResult
from ..PARSERS.compose_parser import ComposeParser

logger = logging.getLogger(__name__)

VOLUMES_MARKER = "volumes:"


class ServiceMerger:
    """
    Adds a single catalog service, and the named volumes it needs, to a compose file.

    Existing files are augmented textually by default so their formatting and
    comments survive. The structural rewrite parses and re-emits the whole
    document instead, which never duplicates a volume declaration but drops
    comments and unsupported fields.
    """
    def __init__(self, catalog: Optional[Catalog] = None, format_version: str = "3.8"):
        """
        :param catalog: Catalog to take services from. Defaults to the bundled catalog.
        :param format_version: Version written into freshly created documents.
        """
        self.catalog = catalog or default_catalog()
        self.format_version = format_version

    def fresh_document(self, service_id: str) -> Document:
        """
        Builds a new document holding only the given service.

        :param service_id: Catalog service id, case-insensitive.
        :return: The new document.
        :raises UnknownServiceError: If the service is not in the catalog.
        """
        entry = self.catalog.get_service(service_id)
        return self._fresh_document(entry)

    def _fresh_document(self, entry: CatalogServiceEntry) -> Document:
        document = Document(version=self.format_version)
        document.add_service(entry.id, entry.service, entry.volumes)
        return document

    def augment(self, existing: str, service_id: str) -> str:
        """
        Appends a service to existing compose text without parsing it.

        The service block is appended at the end of the text, indented one
        level. Its volume names go under a new ``volumes:`` section when the
        text has none, otherwise they are appended after the service. Volume
        names already declared are not deduplicated.

        :param existing: Raw content of the existing file.
        :param service_id: Catalog service id, case-insensitive.
        :return: The augmented content.
        :raises UnknownServiceError: If the service is not in the catalog.
        """
        entry = self.catalog.get_service(service_id)
        return self._augment(existing, entry)

    def _augment(self, existing: str, entry: CatalogServiceEntry) -> str:
        service_yaml = ComposeEmitter.emit({entry.id: entry.service}, 1)
        volume_yaml = "\n".join(f"{INDENT}{name}:" for name in entry.volumes)

        updated = existing.rstrip() + "\n" + service_yaml + "\n"
        if volume_yaml and VOLUMES_MARKER not in existing:
            updated += f"\n{VOLUMES_MARKER}\n" + volume_yaml + "\n"
        elif volume_yaml:
            updated += volume_yaml + "\n"
        return updated

    def rewrite(self, existing: str, service_id: str) -> str:
        """
        Parses existing compose text, inserts the service and re-emits the document.

        Adding the same service twice leaves a single service and a single
        declaration of each of its volumes.

        :param existing: Raw content of the existing file.
        :param service_id: Catalog service id, case-insensitive.
        :return: The re-emitted document.
        :raises UnknownServiceError: If the service is not in the catalog.
        :raises MalformedComposeError: If the existing text cannot be parsed.
        """
        entry = self.catalog.get_service(service_id)
        return self._rewrite(existing, entry)

    def _rewrite(self, existing: str, entry: CatalogServiceEntry) -> str:
        document = ComposeParser(self.format_version).parse_from_string(existing)
        if entry.id in document.services:
            logger.info("Replacing existing service %s", entry.id)
        document.add_service(entry.id, entry.service, entry.volumes)
        return ComposeEmitter.emit_document(document)

    def add_to_file(self, service_id: str, compose_path: str, rewrite: bool = False) -> AddResult:
        """
        Adds a service to a compose file, creating the file if it does not exist.

        :param service_id: Catalog service id, case-insensitive.
        :param compose_path: Path of the compose file.
        :param rewrite: Re-emit an existing file structurally instead of appending.
        :return: What was added, and how.
        :raises UnknownServiceError: If the service is not in the catalog. Nothing is written.
        """
        entry = self.catalog.get_service(service_id)

        if os.path.exists(compose_path):
            with open(compose_path, 'r', encoding='utf-8') as f:
                existing = f.read()
            if rewrite:
                content = self._rewrite(existing, entry)
                mode = "rewritten"
            else:
                content = self._augment(existing, entry)
                mode = "appended"
        else:
            content = ComposeEmitter.emit_document(self._fresh_document(entry))
            mode = "created"

        logger.info("Adding service %s to %s (%s)", entry.id, compose_path, mode)
        ComposeEmitter.write_text(compose_path, content)

        return AddResult(
            added=entry.id,
            file=compose_path,
            service=entry.service.to_mapping(),
            volumes=entry.volumes,
            mode=mode,
        )

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
Generation of compose files from stack templates and custom service selections.
"""
import logging
from typing import Iterable, Optional

from ..CATALOG.catalog import Catalog, default_catalog
from ..EMITTERS.compose_emitter import ComposeEmitter
from ..MODELS.compose_document import Document
from ..MODELS.results import StackResult

logger = logging.getLogger(__name__)


class StackGenerator:
    """
    Writes catalog stacks, or documents assembled from catalog services, to files.
    """
    def __init__(self, catalog: Optional[Catalog] = None, format_version: str = "3.8"):
        """
        :param catalog: Catalog to take stacks and services from.
        :param format_version: Version written into custom documents.
        """
        self.catalog = catalog or default_catalog()
        self.format_version = format_version

    def generate(self, stack_id: str, output_path: str) -> StackResult:
        """
        Writes a stack template to a file.

        :param stack_id: Exact stack id, e.g. ``mean``.
        :param output_path: Destination file, overwritten if it exists.
        :return: The stack, file and service names written.
        :raises UnknownStackError: If the stack is not in the catalog. Nothing is written.
        """
        entry = self.catalog.get_stack_entry(stack_id)
        logger.info("Generating %s into %s", entry.name, output_path)
        ComposeEmitter.write(entry.document, output_path)
        return StackResult(
            stack=stack_id,
            name=entry.name,
            file=output_path,
            services=list(entry.document.services),
        )

    def build_custom(self, service_ids: Iterable[str]) -> Document:
        """
        Assembles a document from catalog services.

        Choosing a service twice keeps a single copy of it.

        :param service_ids: Catalog service ids, case-insensitive.
        :return: The assembled document. ``volumes`` stays unset if no service needs one.
        :raises UnknownServiceError: If any service is not in the catalog.
        """
        document = Document(version=self.format_version)
        for service_id in service_ids:
            entry = self.catalog.get_service(service_id)
            document.add_service(entry.id, entry.service, entry.volumes)
            logger.debug("Added %s to custom document", entry.id)
        return document

    def write(self, document: Document, output_path: str,
              name: str = "Custom", stack_id: Optional[str] = None) -> StackResult:
        """
        Writes an assembled document to a file.

        :param document: The document to write.
        :param output_path: Destination file, overwritten if it exists.
        :param name: Display name for the report.
        :param stack_id: Catalog stack the document came from, if any.
        """
        logger.info("Writing %s into %s", name, output_path)
        ComposeEmitter.write(document, output_path)
        return StackResult(stack=stack_id, name=name, file=output_path, services=list(document.services))

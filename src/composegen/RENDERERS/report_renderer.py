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
Terminal rendering of results and errors with jinja2 templates.
"""
from typing import Any, List

import click
from jinja2 import Environment

from ..MODELS.results import AddResult, CatalogListing, StackResult, ValidationReport
from ..exceptions import ComposegenError

BANNER_ART = r"""
   ____                                  ____
  / ___|___  _ __ ___  _ __   ___  ___  / ___| ___ _ __
 | |   / _ \| '_ ` _ \| '_ \ / _ \/ __|| |  _ / _ \ '_ \
 | |__| (_) | | | | | | |_) | (_) \__ \| |_| |  __/ | | |
  \____\___/|_| |_| |_| .__/ \___/|___/ \____|\___||_| |_|
                       |_|
"""

BANNER_TEMPLATE = """
{{ art | style(fg="magenta", bold=True) }}
{{ "  Generate docker-compose.yml from templates" | style(dim=True) }}
"""

LISTING_TEMPLATE = """
{{ "  Available Stacks:" | style(fg="yellow", bold=True) }}

{% for stack in listing.stacks %}
{{ ("    " ~ stack.id.ljust(16)) | style(fg="cyan", bold=True) }} {{ stack.description }}
{% endfor %}

{{ "  Available Services:" | style(fg="yellow", bold=True) }}

{{ ("    " ~ listing.services | join("  ")) | style(fg="cyan") }}
"""

CREATED_TEMPLATE = """
{{ " CREATED " | style(fg="white", bg="green", bold=True) }}{{ (" " ~ result.file) | style(fg="green") }}{{ detail | style(dim=True) }}
"""

ADDED_TEMPLATE = """
{{ " ADDED " | style(fg="white", bg="green", bold=True) }}{{ (" " ~ result.added ~ " to " ~ result.file) | style(fg="green") }}{{ (" (" ~ result.mode ~ ")") | style(dim=True) }}
"""

VALIDATION_TEMPLATE = """
{% if report.valid %}
{{ " VALID " | style(fg="white", bg="green", bold=True) }}{{ (" " ~ report.file ~ " looks good!") | style(fg="green") }}
{% else %}
{{ " ISSUES " | style(fg="white", bg="red", bold=True) }}{{ (" Found " ~ report.issues | length ~ " issue(s):") | style(fg="yellow") }}

{% for issue in report.issues %}
{{ ("  - " ~ issue) | style(fg="yellow") }}
{% endfor %}
{% endif %}
"""

ERROR_TEMPLATE = """
{{ "  ERROR: " | style(fg="red", bold=True) }}{{ message }}
{% if available %}
{{ ("  Available: " ~ available | join(", ")) | style(dim=True) }}
{% endif %}
"""

CHOICES_TEMPLATE = """
{{ ("  ? " ~ question) | style(fg="cyan", bold=True) }}
{% for choice in choices %}
{{ ("    " ~ loop.index ~ ") ") | style(dim=True) }}{{ choice }}
{% endfor %}
"""


class ReportRenderer:
    """
    Renders results and errors as human-readable terminal text.
    """
    def __init__(self, color: bool = True):
        """
        :param color: Emit ANSI styles. Disabled when NO_COLOR is set.
        """
        self.color = color
        self.env = Environment(trim_blocks=True, lstrip_blocks=True, autoescape=False)
        self.env.filters["style"] = self.style

    def style(self, text: Any, **styles) -> str:
        """
        Applies click styles to text when colors are enabled.
        """
        if not self.color:
            return str(text)
        return click.style(str(text), **styles)

    def _render(self, template: str, **context) -> str:
        return self.env.from_string(template).render(**context).strip("\n")

    def render_banner(self) -> str:
        return self._render(BANNER_TEMPLATE, art=BANNER_ART.strip("\n"))

    def render_listing(self, listing: CatalogListing) -> str:
        return self._render(LISTING_TEMPLATE, listing=listing)

    def render_stack_created(self, result: StackResult) -> str:
        count = f"{len(result.services)} services"
        detail = f" ({result.name} - {count})" if result.stack else f" ({count})"
        return self._render(CREATED_TEMPLATE, result=result, detail=detail)

    def render_service_added(self, result: AddResult) -> str:
        return self._render(ADDED_TEMPLATE, result=result)

    def render_validation(self, report: ValidationReport) -> str:
        return self._render(VALIDATION_TEMPLATE, report=report)

    def render_error(self, error: ComposegenError) -> str:
        """
        Renders an error, with the valid ids when the error carries them.
        """
        return self._render(ERROR_TEMPLATE, message=str(error), available=getattr(error, "available", None))

    def render_choices(self, question: str, choices: List[str]) -> str:
        return self._render(CHOICES_TEMPLATE, question=question, choices=choices)

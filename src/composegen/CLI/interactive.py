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
Interactive compose building: pick a stack template or assemble services one by one.
"""
from typing import List

import click

from ..CATALOG.catalog import Catalog
from ..GENERATORS.stack_generator import StackGenerator
from ..MODELS.results import StackResult
from ..RENDERERS.report_renderer import ReportRenderer
from ..UTILS.settings import Settings


def parse_choice(answer: str, count: int) -> int:
    """
    Converts a 1-based menu answer to an index. Anything unparseable or out
    of range selects the first choice.

    :param answer: The raw answer line.
    :param count: Number of choices offered.
    :return: A 0-based index.
    """
    try:
        idx = int(answer.strip()) - 1
    except ValueError:
        return 0
    return idx if 0 <= idx < count else 0


def ask_choice(renderer: ReportRenderer, question: str, choices: List[str], err: bool = False) -> int:
    click.echo(err=err)
    click.echo(renderer.render_choices(question, choices), err=err)
    answer = click.prompt(renderer.style("  >", fg="cyan"), default="", show_default=False,
                          prompt_suffix=" ", err=err)
    return parse_choice(answer, len(choices))


def run_interactive(catalog: Catalog, settings: Settings, renderer: ReportRenderer,
                    err: bool = False) -> StackResult:
    """
    Runs the prompt loop and writes the resulting compose file.

    :param catalog: Catalog to offer stacks and services from.
    :param settings: Settings providing the default output path and version.
    :param renderer: Renderer for prompts and messages.
    :param err: Send menus and prompts to stderr, keeping stdout for the result record.
    :return: What was written.
    """
    generator = StackGenerator(catalog, settings.format_version)
    click.echo(renderer.style("\n  Interactive Compose Generator", fg="magenta", bold=True), err=err)

    stacks = catalog.list_stacks()
    choices = [f"{s.name} - {s.description}" for s in stacks]
    choices.append("Custom - Build from scratch")

    choice = ask_choice(renderer, "Pick a stack template:", choices, err)

    if choice < len(stacks):
        entry = catalog.get_stack_entry(stacks[choice].id)
        document, name, stack_id = entry.document, entry.name, entry.id
        click.echo(renderer.style(f"\n  Using {entry.name} template", fg="green"), err=err)
    else:
        click.echo(renderer.style("\n  Building custom compose file", fg="green"), err=err)
        services = catalog.list_services()
        selected = []
        while True:
            svc_choice = ask_choice(renderer, "Add a service:", services + ["Done - finish building"], err)
            if svc_choice >= len(services):
                break
            selected.append(services[svc_choice])
            click.echo(renderer.style(f"  + Added {services[svc_choice]}", fg="green"), err=err)
        document = generator.build_custom(selected)
        name, stack_id = "Custom", None

    answer = click.prompt(
        renderer.style("  ? ", fg="cyan") + f"Output file (default: {settings.output}):",
        default="",
        show_default=False,
        err=err,
    )
    output_path = answer.strip() or settings.output

    return generator.write(document, output_path, name=name, stack_id=stack_id)

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
Command Line Interface for composegen.
"""
import json
import sys

import click

from .. import __version__
from ..CATALOG.catalog import default_catalog
from ..GENERATORS.stack_generator import StackGenerator
from ..MERGERS.service_merger import ServiceMerger
from ..RENDERERS.report_renderer import ReportRenderer
from ..UTILS.log_setup import setup_logging
from ..UTILS.settings import load_settings
from ..VALIDATORS.compose_validator import ComposeValidator
from ..exceptions import ComposegenError
from .interactive import run_interactive


def _report(ctx, result, text: str):
    """
    Prints a result as JSON or text and exits non-zero if it did not succeed.
    """
    if ctx.obj['json']:
        click.echo(json.dumps(result.to_dict()))
    else:
        click.echo(text)
        click.echo()
    if not result.succeeded:
        ctx.exit(1)


def _fail(ctx, error: ComposegenError):
    """
    Prints an error as JSON or text and exits with its exit code.
    """
    if ctx.obj['json']:
        click.echo(json.dumps(error.to_dict()))
    else:
        click.echo(ctx.obj['renderer'].render_error(error), err=True)
        click.echo(err=True)
    ctx.exit(error.exit_code)


@click.group(invoke_without_command=True)
@click.option('--json', 'json_output', is_flag=True, help='Output as JSON')
@click.option('--verbose', '-v', is_flag=True, help='Log what is being done')
@click.version_option(__version__, prog_name='composegen')
@click.pass_context
def cli(ctx, json_output, verbose):
    """
    composegen - Generate docker-compose.yml from templates.

    Run without a command for interactive mode.
    """
    settings = load_settings()
    setup_logging(verbose=verbose, debug=settings.debug)

    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings
    ctx.obj['json'] = json_output
    ctx.obj['catalog'] = default_catalog()
    ctx.obj['renderer'] = ReportRenderer(color=not settings.no_color)

    if ctx.invoked_subcommand is None:
        if not sys.stdin.isatty():
            click.echo(ctx.get_help())
            ctx.exit(1)
        ctx.invoke(interactive)


@cli.command('list')
@click.pass_context
def list_cmd(ctx):
    """List available stacks and services."""
    renderer = ctx.obj['renderer']
    listing = ctx.obj['catalog'].listing()
    if not ctx.obj['json']:
        click.echo(renderer.render_banner())
    _report(ctx, listing, renderer.render_listing(listing))


@cli.command()
@click.argument('name')
@click.option('--output', '-o', default=None, help='Output file (default: docker-compose.yml)')
@click.pass_context
def stack(ctx, name, output):
    """Generate a compose file from a stack template."""
    settings = ctx.obj['settings']
    renderer = ctx.obj['renderer']
    generator = StackGenerator(ctx.obj['catalog'], settings.format_version)
    try:
        result = generator.generate(name, output or settings.output)
    except ComposegenError as e:
        _fail(ctx, e)
        return
    if not ctx.obj['json']:
        click.echo(renderer.render_banner())
    _report(ctx, result, renderer.render_stack_created(result))


@cli.command()
@click.argument('service')
@click.option('--output', '-o', default=None, help='Compose file to add to (default: docker-compose.yml)')
@click.option('--rewrite', is_flag=True,
              help='Parse and re-emit an existing file instead of appending (drops comments)')
@click.pass_context
def add(ctx, service, output, rewrite):
    """Add a service to a new or existing compose file."""
    settings = ctx.obj['settings']
    merger = ServiceMerger(ctx.obj['catalog'], settings.format_version)
    try:
        result = merger.add_to_file(service, output or settings.output, rewrite=rewrite)
    except ComposegenError as e:
        _fail(ctx, e)
        return
    _report(ctx, result, ctx.obj['renderer'].render_service_added(result))


@cli.command()
@click.argument('file')
@click.option('--strict', is_flag=True, help='Also check service and volume references')
@click.pass_context
def validate(ctx, file, strict):
    """Validate an existing compose file."""
    try:
        report = ComposeValidator.validate_file(file, strict=strict)
    except ComposegenError as e:
        _fail(ctx, e)
        return
    _report(ctx, report, ctx.obj['renderer'].render_validation(report))


@cli.command()
@click.pass_context
def interactive(ctx):
    """Build a compose file step by step."""
    renderer = ctx.obj['renderer']
    if not ctx.obj['json']:
        click.echo(renderer.render_banner())
    try:
        result = run_interactive(ctx.obj['catalog'], ctx.obj['settings'], renderer, err=ctx.obj['json'])
    except ComposegenError as e:
        _fail(ctx, e)
        return
    _report(ctx, result, renderer.render_stack_created(result))


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()

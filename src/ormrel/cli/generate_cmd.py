from pathlib import Path

import click
from loguru import logger
from rich.table import Table

from ormrel.config import AppConfig
from ormrel.diagnostics import Diagnostics, Severity
from ormrel.exceptions import ModelParseError
from ormrel.generator import (
    SchemaGenerator,
    central_concept,
    concept_token,
    generate as generate_schemas,
)
from ormrel.orm import parse_orm_file
from ormrel.utils.console import console


def get_app_config(ctx) -> AppConfig:
    """Application configuration from the click context, or the defaults"""
    if ctx.obj and ctx.obj.get("app_config") is not None:
        return ctx.obj["app_config"]
    return AppConfig()


def print_diagnostics(diagnostics: Diagnostics) -> None:
    if not diagnostics:
        console.print("[green]✅ No diagnostics[/green]")
        return

    table = Table(title="Diagnostics")
    table.add_column("Severity")
    table.add_column("Code", style="cyan")
    table.add_column("Element", style="dim")
    table.add_column("Message")
    for diagnostic in diagnostics:
        style = "red" if diagnostic.severity is Severity.ERROR else "yellow"
        table.add_row(
            f"[{style}]{diagnostic.severity.value}[/{style}]",
            diagnostic.code,
            diagnostic.element_id or "",
            diagnostic.message,
        )
    console.print(table)


@click.command()
@click.argument(
    "model_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.argument(
    "output_dir", required=False, type=click.Path(file_okay=False, path_type=Path)
)
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    help="Print the generated Rel instead of writing files",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 1 when any warning or error was recorded",
)
@click.pass_context
def generate(ctx, model_file, output_dir, to_stdout, strict):
    """Generate Rel integrity constraints for every concept diagram.

    One file is written per diagram named "X:concept", where X is the entity
    type at the center of the diagram.

    Examples:

        # Write schemas to the configured output directory (rel/model)
        ormrel generate model.orm

        # Write schemas to a specific directory
        ormrel generate model.orm build/rel

        # Print the generated Rel and fail on any diagnostic
        ormrel generate model.orm --stdout --strict
    """
    app_config = get_app_config(ctx)

    try:
        if to_stdout:
            model = parse_orm_file(
                model_file, namespaces=app_config.namespaces.as_dict()
            )
            generator = SchemaGenerator(model, app_config.generator)
            for artifact in generator.generate_all():
                click.echo(f"// {artifact.filename}")
                click.echo(artifact.text, nl=False)
            diagnostics = generator.diagnostics
        else:
            result = generate_schemas(model_file, output_dir, app_config)
            diagnostics = result.diagnostics

            table = Table(title=f"Rel schemas from {model_file.name}")
            table.add_column("Concept", style="cyan")
            table.add_column("Diagram")
            table.add_column("File", style="green")
            for artifact, path in zip(result.artifacts, result.written):
                table.add_row(artifact.concept, artifact.diagram, str(path))
            console.print(table)
    except ModelParseError as e:
        console.print(f"❌ [bold red]{e}[/bold red]")
        raise click.Abort()

    print_diagnostics(diagnostics)

    if strict and diagnostics:
        logger.error(f"{len(diagnostics)} diagnostic(s) recorded in strict mode")
        ctx.exit(1)


@click.command()
@click.argument(
    "model_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.pass_context
def diagrams(ctx, model_file):
    """List the diagrams of a model and the concept each one resolves to."""
    app_config = get_app_config(ctx)

    try:
        model = parse_orm_file(model_file, namespaces=app_config.namespaces.as_dict())
    except ModelParseError as e:
        console.print(f"❌ [bold red]{e}[/bold red]")
        raise click.Abort()

    table = Table(title=f"Diagrams in {model_file.name}")
    table.add_column("Diagram", style="cyan")
    table.add_column("Concept")
    table.add_column("Fact types", justify="right")
    table.add_column("Output")

    for diagram in model.diagrams:
        fact_type_count = str(len(model.fact_types_in_diagram(diagram)))
        if concept_token(diagram.name) is None:
            table.add_row(diagram.name, "-", fact_type_count, "[dim]skipped[/dim]")
            continue
        concept = central_concept(diagram, model)
        if concept is None:
            table.add_row(
                diagram.name, "-", fact_type_count, "[red]unresolved[/red]"
            )
            continue
        table.add_row(
            diagram.name,
            concept.name,
            fact_type_count,
            app_config.generator.filename_for(concept.name),
        )

    console.print(table)

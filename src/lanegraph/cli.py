"""Command-line entry point for lanegraph."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .export import DiagramExporter
from .generator import DiagramGenerator
from .parser import ParseError


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--ascii", "-a", "use_ascii", is_flag=True, help="Use plain ASCII instead of Unicode")
@click.option(
    "--lanes",
    "lane_side",
    type=click.Choice(["below", "above"]),
    default="below",
    show_default=True,
    help="Side of the boxes that wrapping edges run along",
)
@click.option("--gap", "horizontal_gap", type=click.IntRange(min=2), default=4, show_default=True, help="Columns between boxes")
@click.option("--output", "-o", "output", type=str, default=None, help="Write to this file (.png for an image)")
@click.option("--verbose", "-v", is_flag=True, help="Log pipeline details to stderr")
def main(
    input: Optional[str],
    use_ascii: bool,
    lane_side: str,
    horizontal_gap: int,
    output: Optional[str],
    verbose: bool,
) -> None:
    """Draw the edge list in INPUT (or stdin) as an ASCII diagram."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if input:
        text = Path(input).read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()

    generator = DiagramGenerator(
        horizontal_gap=horizontal_gap,
        lane_side=lane_side,
        glyphs="ascii" if use_ascii else "unicode",
    )

    try:
        diagram = generator.generate(text)
    except ParseError as e:
        click.echo(f"error: line {e.line_number}: {e.line_text}", err=True)
        sys.exit(1)

    if output is None:
        if diagram:
            click.echo(diagram)
        return

    exporter = DiagramExporter()
    try:
        if output.lower().endswith(".png"):
            exporter.save_png(diagram, output)
        else:
            exporter.save_txt(diagram, output)
    except OSError as e:
        click.echo(f"error: cannot write '{output}': {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""inspectdocs CLI: render inspection reports and invoices as PDFs."""

from __future__ import annotations

import functools
import logging
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console

from . import __version__
from .config import RenderConfig
from .core.validation import validate_invoice
from .layout.themes import Theme, get_theme, list_themes
from .pipeline import Pipeline, load_inspection, load_invoice

console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _render_options(func):
    """Options shared by every command that writes PDFs."""

    @click.option("-o", "--output", "output_dir", type=click.Path(), default=None,
                  help="Output directory (default: ./output or $INSPECTDOCS_OUTPUT_DIR).")
    @click.option("-t", "--theme", "theme_name", default=None,
                  help="Theme name (see `inspectdocs themes`).")
    @click.option("--logo", default=None, envvar="INSPECTDOCS_LOGO",
                  help="Logo path or URL, drawn as a faint watermark.")
    @click.option("--font", "font_path", type=click.Path(), default=None, envvar="INSPECTDOCS_FONT_PATH",
                  help="TrueType font with Arabic glyphs.")
    @click.option("--bold-font", "bold_font_path", type=click.Path(), default=None,
                  envvar="INSPECTDOCS_BOLD_FONT_PATH", help="Bold companion of --font.")
    @click.option("--photo-limit", type=int, default=None, help="Show at most N photos.")
    @click.option("--no-watermark", is_flag=True, default=False, help="Skip the logo watermark.")
    @click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper


def _build_pipeline(
    output_dir: str | None,
    theme_name: str | None,
    logo: str | None,
    font_path: str | None,
    bold_font_path: str | None,
    photo_limit: int | None,
    no_watermark: bool,
    verbose: bool,
) -> Pipeline:
    _setup_logging(verbose)
    theme: Theme | None = None
    if theme_name:
        try:
            theme = get_theme(theme_name)
        except KeyError as exc:
            raise click.BadParameter(str(exc.args[0]), param_hint="--theme") from exc
    config = RenderConfig.from_env(
        output_dir=Path(output_dir) if output_dir else None,
        logo=logo,
        font_path=font_path,
        bold_font_path=bold_font_path,
        photo_limit=photo_limit,
        watermark=False if no_watermark else None,
    )
    return Pipeline(config, theme=theme)


def _load_record(loader, source: str):
    """Load a record for a read-only command, reporting bad input as a usage error."""
    try:
        return loader(source)
    except (OSError, ValueError, ValidationError) as exc:
        raise click.ClickException(f"Could not load {source}: {exc}") from exc


def _hex(rgb: tuple[int, int, int]) -> str:
    return "#{:02X}{:02X}{:02X}".format(*rgb)


def _swatch(rgb: tuple[int, int, int]) -> str:
    return f"[{_hex(rgb)}]██[/] {_hex(rgb)}"


def _exit_on_failure(result) -> None:
    if not result.results or result.failed:
        raise SystemExit(1)


@click.group()
@click.version_option(version=__version__, prog_name="inspectdocs")
def main():
    """inspectdocs: Bilingual property inspection reports and invoices as PDF."""
    pass


@main.command()
@click.argument("source", type=click.Path())
@_render_options
def report(source: str, **options):
    """Render the inspection report for the JSON record SOURCE."""
    pipeline = _build_pipeline(**options)
    _exit_on_failure(pipeline.run_report(source))


@main.command()
@click.argument("source", type=click.Path())
@click.option("--recompute", is_flag=True, default=False,
              help="Recompute subtotal, VAT and total from the billable lines.")
@click.option("--strict", is_flag=True, default=False, help="Refuse to render an invalid invoice.")
@_render_options
def invoice(source: str, recompute: bool, strict: bool, **options):
    """Render the invoice for the JSON record SOURCE."""
    pipeline = _build_pipeline(**options)
    _exit_on_failure(pipeline.run_invoice(source, recompute=recompute, strict=strict))


@main.command()
@_render_options
def demo(**options):
    """Render the demo inspection report and invoices."""
    pipeline = _build_pipeline(**options)
    _exit_on_failure(pipeline.run_demo())


@main.command()
@click.argument("source", type=click.Path(exists=True))
def validate(source: str):
    """Check the invoice record SOURCE before it is finalized."""
    inv = _load_record(load_invoice, source)
    errors = validate_invoice(inv)
    if not errors:
        console.print(f"[green]✓[/] Invoice {inv.invoice_number or '-'} is valid")
        return
    for err in errors:
        console.print(f"  [red]✗[/] [bold]{err.field}[/]: {err.message}")
    raise SystemExit(1)


@main.command()
@click.argument("source", type=click.Path(exists=True))
@click.option("-k", "--kind", type=click.Choice(["report", "invoice"], case_sensitive=False),
              default="report", help="Record type of SOURCE.")
def layout(source: str, kind: str):
    """Lay out SOURCE and display the pages and placed blocks."""
    from rich.tree import Tree

    from .generators.invoice_generator import InvoiceGenerator
    from .generators.report_generator import InspectionReportGenerator

    if kind.lower() == "invoice":
        pages = InvoiceGenerator().layout(_load_record(load_invoice, source))
    else:
        pages = InspectionReportGenerator().layout(_load_record(load_inspection, source))

    tree = Tree(f"[bold]{Path(source).name}[/bold] [dim]({len(pages)} pages)[/dim]")
    for page in pages:
        node = tree.add(f"[blue]Page {page.number}[/blue] [dim]({len(page.blocks)} blocks)[/dim]")
        for block in page.blocks:
            label = block.kind if block.row_index is None else f"{block.kind} #{block.row_index}"
            node.add(f"{label} [dim]y={block.y:.1f} h={block.height:.1f}[/dim]")
    console.print(tree)


@main.command()
def themes():
    """Show the registered themes and which document kind uses each by default."""
    from rich.table import Table as RichTable

    defaults = RenderConfig.from_env()
    usage = {defaults.theme: "report", defaults.invoice_theme: "invoice"}

    table = RichTable(title="Document Themes")
    table.add_column("Theme", style="bold cyan")
    table.add_column("Default for")
    table.add_column("Header band")
    table.add_column("Table header")
    table.add_column("Pass / Fail")
    table.add_column("About")

    for t in list_themes():
        c = t.colors
        table.add_row(
            f"{t.name}\n[dim]{t.display_name}[/]",
            usage.get(t.name, "-"),
            _swatch(c.primary),
            _swatch(c.table_header_bg),
            f"[{_hex(c.success)}]●[/] [{_hex(c.danger)}]●[/]",
            t.description,
        )

    console.print(table)


if __name__ == "__main__":
    main()

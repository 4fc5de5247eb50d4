"""Orchestration pipeline: load records, validate, render and write PDFs."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from .config import RenderConfig
from .core.demo import generate_demo_inspection, generate_demo_invoices
from .core.models import GenerationResult, PipelineResult
from .core.records import InspectionData, Invoice
from .core.validation import format_validation_errors, validate_invoice
from .generators.invoice_generator import InvoiceGenerator
from .generators.report_generator import InspectionReportGenerator
from .layout.themes import Theme

log = logging.getLogger(__name__)

console = Console()


def load_inspection(path: str | Path) -> InspectionData:
    """Read an inspection record exported by the app (camelCase JSON)."""
    return InspectionData.model_validate(_read_json(path))


def load_invoice(path: str | Path) -> Invoice:
    """Read an invoice record exported by the app (camelCase JSON)."""
    return Invoice.model_validate(_read_json(path))


def _read_json(path: str | Path) -> dict:
    source = Path(path).expanduser().resolve()
    if not source.exists():
        raise FileNotFoundError(f"Record not found: {source}")
    return json.loads(source.read_text(encoding="utf-8"))


class Pipeline:
    """End-to-end record → PDF pipeline.

    Usage::

        pipeline = Pipeline(RenderConfig.from_env())
        result = pipeline.run_report("inspection.json")
        print(result.succeeded[0].output_path)
    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        *,
        theme: Theme | None = None,
        today: date | None = None,
    ) -> None:
        self.config = config or RenderConfig()
        self.theme = theme
        self.today = today

    @property
    def output_dir(self) -> Path:
        return Path(self.config.output_dir).resolve()

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def run_report(self, source: str | Path) -> PipelineResult:
        """Render the inspection report for the record at ``source``."""
        result = PipelineResult(source=str(source))
        console.print(f"\n[bold blue]📥 Loading inspection from:[/] {source}")
        try:
            record = load_inspection(source)
        except (OSError, ValueError, ValidationError) as exc:
            console.print(f"[bold red]❌ Load failed:[/] {exc}")
            return result
        self._report(record, result)
        return result

    def run_invoice(self, source: str | Path, *, recompute: bool = False, strict: bool = False) -> PipelineResult:
        """Render the invoice at ``source``.

        ``recompute`` replaces the stored totals with ones computed from the
        billable lines. ``strict`` refuses to render an invoice that fails
        validation; otherwise problems are reported and rendering goes on.
        """
        result = PipelineResult(source=str(source))
        console.print(f"\n[bold blue]📥 Loading invoice from:[/] {source}")
        try:
            invoice = load_invoice(source)
        except (OSError, ValueError, ValidationError) as exc:
            console.print(f"[bold red]❌ Load failed:[/] {exc}")
            return result

        errors = validate_invoice(invoice)
        if errors:
            console.print(f"[yellow]⚠ {format_validation_errors(errors)}[/]")
            if strict:
                return result
        if recompute:
            invoice = invoice.with_computed_totals()
        self._invoice(invoice, result)
        return result

    def run_demo(self) -> PipelineResult:
        """Render the demo inspection report and the four demo invoices."""
        result = PipelineResult(source="demo")
        console.print("\n[bold blue]🧪 Rendering demo documents...[/]")
        self._report(generate_demo_inspection(self.today), result)
        for invoice in generate_demo_invoices(self.today):
            self._invoice(invoice, result)
        self._summarize(result)
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _report(self, record: InspectionData, result: PipelineResult) -> None:
        gen = InspectionReportGenerator(self.theme, self.config, today=self.today)
        self._record(gen.generate(record, self.output_dir, on=self.today), result)

    def _invoice(self, invoice: Invoice, result: PipelineResult) -> None:
        gen = InvoiceGenerator(self.theme, self.config, today=self.today)
        self._record(gen.generate(invoice, self.output_dir, on=self.today), result)

    @staticmethod
    def _record(gen_result: GenerationResult, result: PipelineResult) -> None:
        result.results.append(gen_result)
        if gen_result.success:
            console.print(
                f"  [green]✓[/] {gen_result.kind.value}: {gen_result.output_path} "
                f"[dim]({gen_result.page_count} page(s))[/]"
            )
        else:
            console.print(f"  [red]✗[/] {gen_result.kind.value}: {gen_result.error}")

    @staticmethod
    def _summarize(result: PipelineResult) -> None:
        ok, failed = len(result.succeeded), len(result.failed)
        style = "green" if not failed else "yellow"
        console.print(f"\n[bold {style}]Done:[/] {ok} written, {failed} failed")

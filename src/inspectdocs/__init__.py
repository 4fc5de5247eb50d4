"""inspectdocs: bilingual inspection reports and invoices as paginated PDFs."""

__version__ = "0.3.0"

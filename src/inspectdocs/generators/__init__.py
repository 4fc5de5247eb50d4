"""Record-specific document generators and the PDF renderer."""

from .base import BaseGenerator
from .invoice_generator import InvoiceGenerator
from .pdf_renderer import PdfRenderer
from .report_generator import InspectionReportGenerator

__all__ = [
    "BaseGenerator",
    "InspectionReportGenerator",
    "InvoiceGenerator",
    "PdfRenderer",
]

"""Inspection and invoice records as exchanged with the web application.

Field names follow Python conventions; camelCase aliases let the JSON
exported by the app (``clientName``, ``invoiceDate`` ...) load directly.
"""

from __future__ import annotations

import zlib
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .formatting import round_money, sanitize_text


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        # The app sends null for untouched form fields; fall back to defaults.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------

class ItemStatus(str, Enum):
    PASS = "Pass"
    FAIL = "Fail"
    NOT_APPLICABLE = "N/A"


class InspectionPhoto(_Record):
    id: str = ""
    base64: Optional[str] = None
    caption: str = ""


class InspectionItem(_Record):
    id: str = ""
    category: str = ""
    point: str = ""
    status: ItemStatus = ItemStatus.NOT_APPLICABLE
    location: str = ""
    comments: str = ""
    photos: list[InspectionPhoto] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def _blank_status(cls, value):
        return value or ItemStatus.NOT_APPLICABLE

    def notes(self) -> str:
        """Comments, location and photo count joined for the findings table."""
        notes = sanitize_text(self.comments)
        if self.location:
            notes += (" | " if notes else "") + f"Location: {sanitize_text(self.location)}"
        if self.photos:
            notes += (" | " if notes else "") + f"Photos: {len(self.photos)}"
        return notes or "-"


class InspectionArea(_Record):
    id: str = ""
    name: str = ""
    items: list[InspectionItem] = Field(default_factory=list)


class InspectionSummary(BaseModel):
    total: int = 0
    passed: int = 0
    failed: int = 0
    not_applicable: int = 0
    pass_rate: int = 0


class InspectionData(_Record):
    id: str = ""
    client_name: str = ""
    property_location: str = ""
    property_type: str = ""
    inspector_name: str = ""
    inspection_date: str = ""
    areas: list[InspectionArea] = Field(default_factory=list)
    ai_summary: str = ""
    report_id: str = ""

    def items(self) -> list[tuple[InspectionArea, InspectionItem]]:
        return [(area, item) for area in self.areas for item in area.items]

    def summary(self) -> InspectionSummary:
        passed = failed = na = 0
        for _, item in self.items():
            if item.status == ItemStatus.PASS:
                passed += 1
            elif item.status == ItemStatus.FAIL:
                failed += 1
            else:
                na += 1
        decided = passed + failed
        rate = round(passed / decided * 100) if decided else 0
        return InspectionSummary(
            total=passed + failed + na,
            passed=passed,
            failed=failed,
            not_applicable=na,
            pass_rate=rate,
        )

    def resolved_report_id(self) -> str:
        """The stored report id, or a stable ``WASLA-<year>-<NNNN>`` one."""
        if self.report_id:
            return self.report_id
        year = self.inspection_date[:4] if self.inspection_date[:4].isdigit() else str(date.today().year)
        seed = f"{self.id}|{self.client_name}|{self.inspection_date}".encode("utf-8")
        return f"WASLA-{year}-{zlib.crc32(seed) % 10000:04d}"


# ---------------------------------------------------------------------------
# Invoice
# ---------------------------------------------------------------------------

class InvoiceStatus(str, Enum):
    PAID = "Paid"
    UNPAID = "Unpaid"
    PARTIAL = "Partial"
    DRAFT = "Draft"


class PropertyType(str, Enum):
    RESIDENTIAL = "Residential"
    COMMERCIAL = "Commercial"


class InvoiceConfig(_Record):
    currency: str = "OMR"
    vat_rate: float = 5.0
    residential_rate: float = 1.5
    commercial_rate: float = 2.0

    def rate_for(self, property_type: PropertyType | None) -> float:
        if property_type == PropertyType.RESIDENTIAL:
            return self.residential_rate
        return self.commercial_rate


DEFAULT_INVOICE_CONFIG = InvoiceConfig()


class InvoiceServiceItem(_Record):
    id: str = ""
    description: str = ""
    quantity: float = 1
    unit_price: float = 0
    total: float = 0


class InvoiceTotals(BaseModel):
    subtotal: Decimal
    tax: Decimal
    total: Decimal


def compute_totals(lines: list[InvoiceServiceItem], vat_rate: float) -> InvoiceTotals:
    """Subtotal of the line totals, VAT on top, each rounded to cents."""
    subtotal = round_money(sum((Decimal(str(line.total)) for line in lines), Decimal(0)))
    tax = round_money(subtotal * Decimal(str(vat_rate)) / 100)
    return InvoiceTotals(subtotal=subtotal, tax=tax, total=round_money(subtotal + tax))


class Invoice(_Record):
    id: str = ""
    invoice_number: str = ""
    invoice_date: str = ""
    due_date: str = ""
    client_id: str = ""
    client_name: str = ""
    client_address: str = ""
    client_email: str = ""
    property_location: str = ""
    property_type: Optional[PropertyType] = None
    property_area: Optional[float] = None
    services: list[InvoiceServiceItem] = Field(default_factory=list)
    subtotal: float = 0
    tax: float = 0
    total_amount: float = 0
    amount_paid: float = 0
    status: InvoiceStatus = InvoiceStatus.DRAFT
    notes: str = ""
    config: Optional[InvoiceConfig] = None

    @field_validator("property_type", mode="before")
    @classmethod
    def _blank_property_type(cls, value):
        return value or None

    @property
    def effective_config(self) -> InvoiceConfig:
        return self.config or DEFAULT_INVOICE_CONFIG

    @property
    def balance_due(self) -> Decimal:
        return round_money(max(Decimal(str(self.total_amount)) - Decimal(str(self.amount_paid)), Decimal(0)))

    def property_service(self) -> InvoiceServiceItem | None:
        """The area-based inspection line, when type and area are known."""
        if not self.property_type or not self.property_area:
            return None
        rate = self.effective_config.rate_for(self.property_type)
        area = self.property_area
        area_text = f"{area:g}"
        return InvoiceServiceItem(
            id="property_service",
            description=f"{self.property_type.value} Property Inspection ({area_text} m²)",
            quantity=area,
            unit_price=rate,
            total=float(round_money(area * rate)),
        )

    def billable_lines(self) -> list[InvoiceServiceItem]:
        """Services plus the property line unless it is already listed."""
        lines = list(self.services)
        prop = self.property_service()
        if prop is not None and all(s.description != prop.description for s in lines):
            lines.append(prop)
        return lines

    def computed_totals(self) -> InvoiceTotals:
        return compute_totals(self.billable_lines(), self.effective_config.vat_rate)

    def with_computed_totals(self) -> Invoice:
        """A copy whose stored amounts match the billable lines."""
        totals = self.computed_totals()
        return self.model_copy(update={
            "subtotal": float(totals.subtotal),
            "tax": float(totals.tax),
            "total_amount": float(totals.total),
        })

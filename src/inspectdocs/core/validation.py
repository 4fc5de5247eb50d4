"""Invoice validation rules applied before an invoice is rendered or finalized."""

from __future__ import annotations

import re
from datetime import date

from pydantic import BaseModel

from .records import Invoice, InvoiceStatus

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class FieldError(BaseModel):
    """One failed rule, keyed by the (dotted) field it concerns."""
    field: str
    message: str


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def _parse(value: str) -> date | None:
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def validate_invoice(invoice: Invoice) -> list[FieldError]:  # noqa: C901
    """Return every rule the invoice breaks; an empty list means valid."""
    errors: list[FieldError] = []

    def add(field: str, message: str) -> None:
        errors.append(FieldError(field=field, message=message))

    # -- Required fields ---------------------------------------------------
    if not invoice.invoice_number.strip():
        add("invoiceNumber", "Invoice number is required")
    if not invoice.client_name.strip():
        add("clientName", "Client name is required")
    if not invoice.client_email.strip():
        add("clientEmail", "Client email is required")
    elif not is_valid_email(invoice.client_email):
        add("clientEmail", "Please enter a valid email address")
    if not invoice.client_address.strip():
        add("clientAddress", "Client address is required")
    if not invoice.property_location.strip():
        add("propertyLocation", "Property location is required")

    # -- Dates -------------------------------------------------------------
    if not invoice.invoice_date:
        add("invoiceDate", "Invoice date is required")
    if not invoice.due_date:
        add("dueDate", "Due date is required")
    else:
        due, issued = _parse(invoice.due_date), _parse(invoice.invoice_date)
        if due and issued and due < issued:
            add("dueDate", "Due date must be after invoice date")

    # -- Services ----------------------------------------------------------
    if not invoice.services and not (invoice.property_area and invoice.property_area > 0):
        add("services", "At least one service or property area is required")

    for index, service in enumerate(invoice.services):
        n = index + 1
        if not service.description.strip():
            add(f"services.{index}.description", f"Service {n} description is required")
        if service.quantity <= 0:
            add(f"services.{index}.quantity", f"Service {n} quantity must be greater than 0")
        if service.unit_price < 0:
            add(f"services.{index}.unitPrice", f"Service {n} unit price cannot be negative")

    if invoice.property_area is not None and invoice.property_area <= 0:
        add("propertyArea", "Property area must be greater than 0")

    # -- Amounts -----------------------------------------------------------
    if invoice.total_amount <= 0:
        add("totalAmount", "Total amount must be greater than 0")
    if invoice.amount_paid < 0:
        add("amountPaid", "Amount paid cannot be negative")
    if invoice.amount_paid > invoice.total_amount:
        add("amountPaid", "Amount paid cannot exceed total amount")

    # -- Configuration -----------------------------------------------------
    if invoice.config:
        cfg = invoice.config
        if not 0 <= cfg.vat_rate <= 100:
            add("config.vatRate", "VAT rate must be between 0 and 100")
        if cfg.residential_rate < 0:
            add("config.residentialRate", "Residential rate cannot be negative")
        if cfg.commercial_rate < 0:
            add("config.commercialRate", "Commercial rate cannot be negative")

    return errors


def format_validation_errors(errors: list[FieldError]) -> str:
    if not errors:
        return ""
    if len(errors) == 1:
        return errors[0].message
    bullets = "\n".join(f"• {e.message}" for e in errors)
    return f"Please fix the following issues:\n{bullets}"


def get_field_error(errors: list[FieldError], field: str) -> str | None:
    return next((e.message for e in errors if e.field == field), None)


def can_finalize_invoice(invoice: Invoice) -> bool:
    """Valid and no longer a draft."""
    return not validate_invoice(invoice) and invoice.status != InvoiceStatus.DRAFT


def suggest_invoice_status(invoice: Invoice) -> InvoiceStatus:
    """Status implied by the amount paid so far."""
    if invoice.amount_paid == 0:
        return InvoiceStatus.UNPAID
    if invoice.amount_paid >= invoice.total_amount:
        return InvoiceStatus.PAID
    return InvoiceStatus.PARTIAL

"""Sample invoices and an inspection for demos and smoke tests."""

from __future__ import annotations

from datetime import date, timedelta

from pydantic import BaseModel

from .records import (
    DEFAULT_INVOICE_CONFIG,
    InspectionArea,
    InspectionData,
    InspectionItem,
    InspectionPhoto,
    Invoice,
    InvoiceServiceItem,
    InvoiceStatus,
    PropertyType,
)


def _day(today: date, offset: int) -> str:
    return (today + timedelta(days=offset)).isoformat()


def _service(sid: str, description: str, price: float) -> InvoiceServiceItem:
    return InvoiceServiceItem(id=sid, description=description, quantity=1, unit_price=price, total=price)


def _demo_invoice(
    today: date,
    number: int,
    *,
    issued: int,
    due: int,
    client: str,
    address: str,
    email: str,
    location: str,
    property_type: PropertyType,
    area: float,
    services: list[InvoiceServiceItem],
    paid: float | None,
    status: InvoiceStatus,
    notes: str,
) -> Invoice:
    invoice = Invoice(
        id=f"demo_inv_{number:03d}",
        invoice_number=f"INV-{today.year}-{number:03d}",
        invoice_date=_day(today, issued),
        due_date=_day(today, due),
        client_id=f"demo_client_{number:03d}",
        client_name=client,
        client_address=address,
        client_email=email,
        property_location=location,
        property_type=property_type,
        property_area=area,
        services=services,
        status=status,
        notes=notes,
        config=DEFAULT_INVOICE_CONFIG,
    )
    # The area line is stored with the services, as the app does on save
    invoice.services.append(invoice.property_service().model_copy(update={"id": f"property_service_{number:03d}"}))
    invoice = invoice.with_computed_totals()
    amount_paid = invoice.total_amount if paid is None else paid
    return invoice.model_copy(update={"amount_paid": amount_paid})


def generate_demo_invoices(today: date | None = None) -> list[Invoice]:
    """Four invoices covering the Paid, Unpaid, Draft and Partial states."""
    today = today or date.today()
    return [
        _demo_invoice(
            today, 1, issued=-7, due=23,
            client="Ahmed Al Farsi",
            address="Villa 123, Al Mouj\nMuscat, Oman",
            email="ahmed.farsi@email.com",
            location="Villa 123, Al Mouj, Muscat",
            property_type=PropertyType.RESIDENTIAL, area=350,
            services=[
                _service("service_001", "Comprehensive Property Inspection", 150),
                _service("service_002", "Electrical System Audit", 100),
            ],
            paid=None, status=InvoiceStatus.PAID,
            notes="Property inspection completed successfully. All major systems are in good condition.",
        ),
        _demo_invoice(
            today, 2, issued=-3, due=27,
            client="Global Investments LLC",
            address="PO Box 500, PC 112\nRuwi, Oman",
            email="contact@globalinvest.com",
            location="Office Building, Knowledge Oasis Muscat",
            property_type=PropertyType.COMMERCIAL, area=1200,
            services=[
                _service("service_003", "Commercial Property Inspection", 300),
                _service("service_004", "Fire Safety System Check", 150),
            ],
            paid=0, status=InvoiceStatus.UNPAID,
            notes="Commercial inspection for office building. Fire safety systems require attention.",
        ),
        _demo_invoice(
            today, 3, issued=0, due=30,
            client="Fatima Al Balushi",
            address="Apartment 7B, Qurum Heights\nMuscat, Oman",
            email="fatima.b@email.com",
            location="Apartment 7B, Qurum Heights",
            property_type=PropertyType.RESIDENTIAL, area=180,
            services=[_service("service_005", "Standard Residential Inspection", 150)],
            paid=0, status=InvoiceStatus.DRAFT,
            notes="Draft invoice for apartment inspection. Awaiting client confirmation.",
        ),
        _demo_invoice(
            today, 4, issued=-10, due=20,
            client="Mohammed Al Rashid",
            address="Villa 456, Al Khuwair\nMuscat, Oman",
            email="mohammed.rashid@email.com",
            location="Villa 456, Al Khuwair",
            property_type=PropertyType.RESIDENTIAL, area=280,
            services=[
                _service("service_006", "Comprehensive Property Inspection", 150),
                _service("service_007", "Plumbing System Check", 100),
                _service("service_008", "Re-inspection (Follow-up)", 75),
            ],
            paid=400, status=InvoiceStatus.PARTIAL,
            notes="Initial inspection completed. Follow-up inspection scheduled after repairs.",
        ),
    ]


class DemoInvoiceStats(BaseModel):
    total_invoices: int
    paid_amount: float
    unpaid_amount: float
    partial_amount: float
    draft_count: int
    total_value: float


def demo_invoice_stats(invoices: list[Invoice]) -> DemoInvoiceStats:
    def amount(status: InvoiceStatus) -> float:
        return sum(inv.total_amount for inv in invoices if inv.status == status)

    return DemoInvoiceStats(
        total_invoices=len(invoices),
        paid_amount=amount(InvoiceStatus.PAID),
        unpaid_amount=amount(InvoiceStatus.UNPAID),
        partial_amount=amount(InvoiceStatus.PARTIAL),
        draft_count=sum(1 for inv in invoices if inv.status == InvoiceStatus.DRAFT),
        total_value=sum(inv.total_amount for inv in invoices),
    )


def generate_demo_inspection(today: date | None = None) -> InspectionData:
    """A small villa inspection with passes, failures and a missing photo."""
    today = today or date.today()

    def item(iid: str, category: str, point: str, status: str, **kw) -> InspectionItem:
        return InspectionItem(id=iid, category=category, point=point, status=status, **kw)

    return InspectionData(
        id="demo_insp_001",
        client_name="Ahmed Al Farsi",
        property_location="Villa 123, Al Mouj, Muscat",
        property_type="Residential Villa",
        inspector_name="Salim Al Hinai",
        inspection_date=_day(today, -1),
        areas=[
            InspectionArea(id="area_1", name="Living Room", items=[
                item("i1", "Walls", "Paint finish and plaster", "Pass"),
                item("i2", "Electrical", "Socket outlets and switches", "Fail",
                     comments="Loose socket cover near the window.",
                     location="North wall",
                     photos=[InspectionPhoto(id="p1", caption="Loose socket cover")]),
                item("i3", "Windows", "Sealing and hardware", "Pass"),
            ]),
            InspectionArea(id="area_2", name="Kitchen", items=[
                item("i4", "Plumbing", "Sink drainage", "Pass"),
                item("i5", "Plumbing", "Leakage under cabinets", "Fail",
                     comments="Minor moisture stain under the sink cabinet."),
                item("i6", "Gas", "Gas line and detector", "N/A",
                     comments="Electric cooking only."),
            ]),
            InspectionArea(id="area_3", name="Exterior", items=[
                item("i7", "Roof", "Waterproofing membrane", "Pass"),
                item("i8", "Garden", "Irrigation system", "Pass"),
            ]),
        ],
    )

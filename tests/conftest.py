"""Shared fixtures: sample records and a tiny real PNG."""

from __future__ import annotations

import base64
import io
from datetime import date

import pytest
from PIL import Image

from inspectdocs.core.demo import generate_demo_inspection, generate_demo_invoices

TODAY = date(2024, 3, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (8, 6), (0, 31, 63)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_base64(png_bytes):
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")


@pytest.fixture
def inspection():
    return generate_demo_inspection(TODAY)


@pytest.fixture
def invoices():
    return generate_demo_invoices(TODAY)


@pytest.fixture
def inspection_json():
    """A record as exported by the web app: camelCase keys and nulls."""
    return {
        "id": "insp_42",
        "clientName": "Salma Al Habsi",
        "propertyLocation": "Villa 9, Madinat Sultan Qaboos",
        "propertyType": None,
        "inspectorName": "",
        "inspectionDate": "2024-03-15",
        "aiSummary": None,
        "areas": [
            {
                "id": "a1",
                "name": "Bathroom",
                "items": [
                    {"id": "x1", "category": "Plumbing", "point": "Shower drain", "status": "Fail",
                     "comments": "Slow drainage", "location": "Master bath", "photos": []},
                    {"id": "x2", "category": "Tiles", "point": "Grout", "status": "",
                     "comments": None, "location": None, "photos": None},
                ],
            }
        ],
    }


@pytest.fixture
def invoice_json():
    return {
        "id": "inv_1",
        "invoiceNumber": "INV-2024-010",
        "invoiceDate": "2024-03-15",
        "dueDate": "2024-04-14",
        "clientName": "Salma Al Habsi",
        "clientAddress": "Villa 9\nMuscat",
        "clientEmail": "salma@example.com",
        "propertyLocation": "Villa 9, Madinat Sultan Qaboos",
        "propertyType": "Residential",
        "propertyArea": 200,
        "services": [
            {"id": "s1", "description": "Thermal imaging", "quantity": 1, "unitPrice": 80, "total": 80},
        ],
        "subtotal": 380,
        "tax": 19,
        "totalAmount": 399,
        "amountPaid": 0,
        "status": "Unpaid",
        "notes": None,
        "config": {"currency": "OMR", "vatRate": 5, "residentialRate": 1.5, "commercialRate": 2.0},
    }

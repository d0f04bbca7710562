from datetime import date, timedelta
from decimal import Decimal

import pytest

from trade_ledger.models import Document


def _invoice_payload(**overrides):
    payload = {
        "type": "invoice",
        "customer": {"name": "Jane Smith", "postal_code": "sw1a 1aa"},
        "items": [
            {"description": "Radiator", "quantity": "2", "unit_price": "50", "vat_percent": "20"},
            {"description": "Labour", "quantity": "1", "unit_price": "30", "vat_percent": "0"},
        ],
    }
    payload.update(overrides)
    return payload


def _quote_payload(**overrides):
    payload = _invoice_payload(type="quote")
    payload.update(overrides)
    return payload


@pytest.fixture()
def invoice(client, headers):
    response = client.post("/documents", json=_invoice_payload(), headers=headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture()
def quote(client, headers):
    response = client.post("/documents", json=_quote_payload(), headers=headers)
    assert response.status_code == 201
    return response.json()


def test_create_invoice(client, headers, invoice):
    assert invoice["number"] == 1
    assert invoice["status"] == "Unpaid"
    assert Decimal(invoice["subtotal"]) == Decimal("130")
    assert Decimal(invoice["total_vat"]) == Decimal("20")
    assert Decimal(invoice["total"]) == Decimal("150")
    assert Decimal(invoice["balance_due"]) == Decimal("150")
    assert invoice["customer_snapshot"]["name"] == "Jane Smith"
    assert invoice["customer_snapshot"]["postal_code"] == "SW1A 1AA"
    assert invoice["customer_id"] is not None
    assert [item["position"] for item in invoice["items"]] == [0, 1]
    assert date.fromisoformat(invoice["due_date"]) == date.fromisoformat(
        invoice["date"]
    ) + timedelta(days=30)
    assert invoice["expiry_date"] is None

    second = client.post("/documents", json=_invoice_payload(), headers=headers)
    assert second.json()["number"] == 2


def test_quote_numbers_start_at_1001(client, headers, quote):
    assert quote["number"] == 1001
    assert quote["status"] == "Draft"
    assert quote["due_date"] is None
    assert quote["expiry_date"] is not None


def test_validation_failure_consumes_no_number(client, headers):
    response = client.post("/documents", json=_invoice_payload(items=[]), headers=headers)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "ValidationError"
    assert "At least one line item is required." in body["detail"]

    bad_line = _invoice_payload(
        items=[{"description": "Cable", "quantity": "-1", "unit_price": "5"}]
    )
    assert client.post("/documents", json=bad_line, headers=headers).status_code == 400

    response = client.post("/documents", json=_invoice_payload(), headers=headers)
    assert response.status_code == 201
    assert response.json()["number"] == 1


def test_quote_rejects_partial_payment(client, headers):
    response = client.post(
        "/documents", json=_quote_payload(partial_payment="10"), headers=headers
    )

    assert response.status_code == 400
    assert "Quotes cannot carry a partial payment." in response.json()["detail"]


def test_customer_is_required(client, headers):
    payload = _invoice_payload()
    del payload["customer"]

    response = client.post("/documents", json=payload, headers=headers)

    assert response.status_code == 400
    assert "A customer is required." in response.json()["detail"]


def test_update_recomputes_totals(client, headers, invoice):
    response = client.patch(
        f"/documents/{invoice['id']}",
        json={"discount_percent": "10", "notes": "Thanks for your business"},
        headers=headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert Decimal(body["discount_amount"]) == Decimal("13")
    assert Decimal(body["total_vat"]) == Decimal("18")
    assert Decimal(body["total"]) == Decimal("135")
    assert body["notes"] == "Thanks for your business"

    response = client.patch(
        f"/documents/{invoice['id']}",
        json={"items": [{"description": "Call out", "quantity": "1", "unit_price": "60"}]},
        headers=headers,
    )
    body = response.json()
    assert len(body["items"]) == 1
    assert Decimal(body["subtotal"]) == Decimal("60")
    assert Decimal(body["total"]) == Decimal("54")


def test_patch_cannot_change_type_or_number(client, headers, invoice):
    response = client.patch(
        f"/documents/{invoice['id']}", json={"number": 99}, headers=headers
    )

    assert response.status_code == 422


def test_terminal_document_is_locked(client, headers, invoice, db_session):
    paid = client.post(
        f"/documents/{invoice['id']}/status", json={"status": "Paid"}, headers=headers
    )
    assert paid.status_code == 200

    response = client.patch(
        f"/documents/{invoice['id']}", json={"notes": "late edit"}, headers=headers
    )

    assert response.status_code == 403
    assert response.json()["error"] == "DocumentLockedError"
    document = db_session.get(Document, invoice["id"])
    assert document.notes is None


def test_marking_paid_settles_balance_and_is_idempotent(client, headers, invoice):
    url = f"/documents/{invoice['id']}/status"

    first = client.post(url, json={"status": "Paid"}, headers=headers)
    second = client.post(url, json={"status": "Paid"}, headers=headers)

    assert first.status_code == 200
    body = first.json()
    assert body["status"] == "Paid"
    assert Decimal(body["balance_due"]) == Decimal("0")
    assert body["paid_at"] is not None
    assert [Decimal(payment["amount"]) for payment in body["payments"]] == [
        Decimal("150")
    ]
    assert second.status_code == 200
    assert len(second.json()["payments"]) == 1


def test_illegal_transition_returns_409(client, headers, invoice, quote):
    client.post(
        f"/documents/{invoice['id']}/status", json={"status": "Paid"}, headers=headers
    )

    response = client.post(
        f"/documents/{invoice['id']}/status", json={"status": "Unpaid"}, headers=headers
    )
    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "IllegalTransitionError"
    assert body["from"] == "Paid"
    assert body["to"] == "Unpaid"

    response = client.post(
        f"/documents/{quote['id']}/status", json={"status": "Paid"}, headers=headers
    )
    assert response.status_code == 409


def test_quote_lifecycle(client, headers, quote):
    url = f"/documents/{quote['id']}"

    sent = client.post(f"{url}/status", json={"status": "Sent"}, headers=headers)
    assert sent.json()["status"] == "Sent"

    unsent = client.post(f"{url}/unsend", headers=headers)
    assert unsent.status_code == 200
    assert unsent.json()["status"] == "Draft"

    client.post(f"{url}/status", json={"status": "Sent"}, headers=headers)
    accepted = client.post(f"{url}/status", json={"status": "Accepted"}, headers=headers)
    assert accepted.json()["status"] == "Accepted"

    assert client.post(f"{url}/unsend", headers=headers).status_code == 409
    response = client.patch(url, json={"notes": "changed"}, headers=headers)
    assert response.status_code == 403


def test_payments_flip_invoice_to_paid(client, headers, invoice):
    url = f"/documents/{invoice['id']}/payments"

    response = client.post(url, json={"amount": "50", "method": "card"}, headers=headers)
    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "Unpaid"
    assert Decimal(body["partial_payment"]) == Decimal("50")
    assert Decimal(body["balance_due"]) == Decimal("100")

    response = client.post(url, json={"amount": "100"}, headers=headers)
    body = response.json()
    assert body["status"] == "Paid"
    assert Decimal(body["balance_due"]) == Decimal("0")
    assert body["paid_at"] is not None
    assert len(body["payments"]) == 2

    response = client.post(url, json={"amount": "10"}, headers=headers)
    assert response.status_code == 403


def test_payment_must_be_positive(client, headers, invoice, quote):
    response = client.post(
        f"/documents/{invoice['id']}/payments", json={"amount": "0"}, headers=headers
    )
    assert response.status_code == 400
    assert "Payment amount must be greater than zero." in response.json()["detail"]

    response = client.post(
        f"/documents/{quote['id']}/payments", json={"amount": "10"}, headers=headers
    )
    assert response.status_code == 400


def test_overdue_refresh_is_idempotent(client, headers, invoice):
    past = _invoice_payload(date="2020-01-01", due_date="2020-01-31")
    late = client.post("/documents", json=past, headers=headers).json()

    first = client.post("/documents/overdue", headers=headers)
    second = client.post("/documents/overdue", headers=headers)

    assert [document["id"] for document in first.json()] == [late["id"]]
    assert second.json() == []
    current = client.get(f"/documents/{invoice['id']}", headers=headers).json()
    assert current["status"] == "Unpaid"

    response = client.post(
        f"/documents/{late['id']}/status", json={"status": "Paid"}, headers=headers
    )
    assert response.json()["status"] == "Paid"


def test_manual_overdue_requires_past_due_date(client, headers, invoice):
    response = client.post(
        f"/documents/{invoice['id']}/status", json={"status": "Overdue"}, headers=headers
    )

    assert response.status_code == 400
    assert "Invoice is not past its due date." in response.json()["detail"]


def test_other_company_cannot_touch_document(
    client, headers, other_headers, invoice
):
    url = f"/documents/{invoice['id']}"

    assert client.get(url, headers=other_headers).status_code == 403
    assert client.patch(url, json={"notes": "x"}, headers=other_headers).status_code == 403
    response = client.post(
        f"{url}/status", json={"status": "Paid"}, headers=other_headers
    )
    assert response.status_code == 403
    assert response.json()["error"] == "TenantIsolationError"

    assert client.get(url, headers=headers).json()["status"] == "Unpaid"
    assert client.get("/documents/missing", headers=headers).status_code == 404


def test_list_is_scoped_and_filtered(client, headers, other_headers, invoice, quote):
    client.post("/documents", json=_invoice_payload(), headers=other_headers)
    other_customer = _invoice_payload(customer={"name": "Tom Brown"})
    client.post("/documents", json=other_customer, headers=headers)

    documents = client.get("/documents", headers=headers).json()
    assert len(documents) == 3

    quotes = client.get("/documents", params={"type": "quote"}, headers=headers).json()
    assert [document["id"] for document in quotes] == [quote["id"]]

    unpaid = client.get("/documents", params={"unpaid_only": True}, headers=headers).json()
    assert {document["type"] for document in unpaid} == {"invoice"}
    assert len(unpaid) == 2

    found = client.get("/documents", params={"q": "tom"}, headers=headers).json()
    assert [document["customer_snapshot"]["name"] for document in found] == ["Tom Brown"]

    assert len(client.get("/documents", headers=other_headers).json()) == 1


def test_summary_preview(client):
    response = client.post(
        "/documents/summary",
        json={
            "items": [
                {"description": "Boiler service", "quantity": "1", "unit_price": "150"}
            ],
            "discount_percent": "10",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert Decimal(body["discount_amount"]) == Decimal("15")
    assert Decimal(body["total"]) == Decimal("135")


def test_unknown_company_is_refused(client):
    response = client.post(
        "/documents", json=_invoice_payload(), headers={"X-Company-Id": "nope"}
    )

    assert response.status_code == 404


def test_discount_with_extra_places_is_refused(client, headers):
    response = client.post(
        "/documents", json=_invoice_payload(discount_percent="12.345"), headers=headers
    )

    assert response.status_code == 400
    assert "Discount allows at most 2 decimal places." in response.json()["detail"]
    created = client.post("/documents", json=_invoice_payload(), headers=headers)
    assert created.json()["number"] == 1


def test_summary_preview_refuses_extra_places(client):
    response = client.post(
        "/documents/summary",
        json={"items": [{"description": "Washer", "quantity": "1000", "unit_price": "0.00005"}]},
    )

    assert response.status_code == 400


def test_overpayment_reported_after_total_drops(client, headers, invoice):
    assert Decimal(invoice["overpayment"]) == Decimal("0")
    client.post(
        f"/documents/{invoice['id']}/payments", json={"amount": "100"}, headers=headers
    )

    response = client.patch(
        f"/documents/{invoice['id']}",
        json={"items": [{"description": "Call out", "quantity": "1", "unit_price": "60"}]},
        headers=headers,
    )

    body = response.json()
    assert Decimal(body["total"]) == Decimal("60")
    assert Decimal(body["partial_payment"]) == Decimal("100")
    assert Decimal(body["balance_due"]) == Decimal("0")
    assert Decimal(body["overpayment"]) == Decimal("40")


def test_void_keeps_document_and_its_number(client, headers, invoice):
    url = f"/documents/{invoice['id']}"

    response = client.post(
        f"{url}/void", json={"reason": "Raised against the wrong job"}, headers=headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "Void"
    assert body["number"] == 1
    assert body["void"]["reason"] == "Raised against the wrong job"
    assert body["void"]["voided_by"] == "admin"

    following = client.post("/documents", json=_invoice_payload(), headers=headers)
    assert following.json()["number"] == 2

    listed = client.get("/documents", headers=headers).json()
    assert invoice["id"] in [document["id"] for document in listed]
    assert client.get(url, headers=headers).json()["status"] == "Void"


def test_void_document_is_locked(client, headers, invoice):
    url = f"/documents/{invoice['id']}"
    client.post(f"{url}/void", json={"reason": "Duplicate"}, headers=headers)

    assert client.patch(url, json={"notes": "x"}, headers=headers).status_code == 403
    assert (
        client.post(f"{url}/payments", json={"amount": "10"}, headers=headers).status_code
        == 403
    )
    response = client.post(f"{url}/status", json={"status": "Paid"}, headers=headers)
    assert response.status_code == 409
    again = client.post(f"{url}/void", json={"reason": "Duplicate"}, headers=headers)
    assert again.status_code == 403


def test_void_refuses_terminal_documents_and_blank_reasons(
    client, headers, invoice, quote
):
    client.post(
        f"/documents/{invoice['id']}/status", json={"status": "Paid"}, headers=headers
    )

    paid = client.post(
        f"/documents/{invoice['id']}/void", json={"reason": "Refund"}, headers=headers
    )
    assert paid.status_code == 403
    assert paid.json()["error"] == "DocumentLockedError"

    blank = client.post(
        f"/documents/{quote['id']}/void", json={"reason": "  "}, headers=headers
    )
    assert blank.status_code == 400
    assert blank.json()["detail"] == ["Void reason is required."]
    assert client.get(f"/documents/{quote['id']}", headers=headers).json()["status"] == "Draft"


def test_voided_invoice_is_not_marked_overdue(client, headers):
    past = _invoice_payload(date="2020-01-01", due_date="2020-01-31")
    late = client.post("/documents", json=past, headers=headers).json()
    client.post(
        f"/documents/{late['id']}/void", json={"reason": "Written off"}, headers=headers
    )

    assert client.post("/documents/overdue", headers=headers).json() == []
    unpaid = client.get("/documents", params={"unpaid_only": True}, headers=headers)
    assert unpaid.json() == []


def test_other_company_cannot_void(client, other_headers, invoice):
    response = client.post(
        f"/documents/{invoice['id']}/void", json={"reason": "x"}, headers=other_headers
    )

    assert response.status_code == 403

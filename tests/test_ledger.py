from decimal import Decimal

import pytest

from trade_ledger.errors import ValidationError
from trade_ledger.schemas import DocumentDraft, DocumentPatch, LineItemIn, SummaryRequest
from trade_ledger.services import ledger
from trade_ledger.services.calculator import compute


def _line(description="Boiler", quantity="1", unit_price="1000", vat_percent="0"):
    return LineItemIn(
        description=description,
        quantity=Decimal(quantity),
        unit_price=Decimal(unit_price),
        vat_percent=Decimal(vat_percent),
    )


def _draft(customer, items, **kwargs):
    return DocumentDraft(type="invoice", customer_id=customer.id, items=items, **kwargs)


def test_stored_fields_recompute_to_stored_totals(db_session, company, customer):
    document = ledger.create_document(
        db_session,
        company.id,
        _draft(customer, [_line()], discount_percent=Decimal("12.35")),
    )

    summary = compute(
        document.items, document.discount_percent, document.partial_payment
    )
    assert summary.discount_amount == document.discount_amount == Decimal("123.50")
    assert summary.total == document.total == Decimal("876.50")

    ledger.update_document(db_session, company.id, document.id, DocumentPatch(notes="hi"))
    db_session.expire_all()

    assert document.total == Decimal("876.50")
    assert document.discount_percent == Decimal("12.35")


def test_discount_finer_than_stored_scale_is_refused(db_session, company, customer):
    with pytest.raises(ValidationError) as excinfo:
        ledger.create_document(
            db_session,
            company.id,
            _draft(customer, [_line()], discount_percent=Decimal("12.345")),
        )

    assert "Discount allows at most 2 decimal places." in excinfo.value.errors


def test_patch_discount_finer_than_stored_scale_is_refused(
    db_session, company, customer
):
    document = ledger.create_document(db_session, company.id, _draft(customer, [_line()]))

    with pytest.raises(ValidationError):
        ledger.update_document(
            db_session,
            company.id,
            document.id,
            DocumentPatch(discount_percent=Decimal("5.125")),
        )

    db_session.expire_all()
    assert document.total == Decimal("1000.00")


def test_line_inputs_finer_than_stored_scale_are_refused(db_session, company, customer):
    items = [
        _line(quantity="0.0004"),
        _line(unit_price="0.00005"),
        _line(vat_percent="17.125"),
    ]

    with pytest.raises(ValidationError) as excinfo:
        ledger.create_document(db_session, company.id, _draft(customer, items))

    errors = excinfo.value.errors
    assert "Line 1: quantity allows at most 3 decimal places." in errors
    assert "Line 2: unit price allows at most 4 decimal places." in errors
    assert "Line 3: VAT allows at most 2 decimal places." in errors


def test_trailing_zeros_are_not_extra_places(db_session, company, customer):
    document = ledger.create_document(
        db_session,
        company.id,
        _draft(customer, [_line(quantity="2.500000", unit_price="10.000000")]),
    )

    assert document.subtotal == Decimal("25.00")


def test_preview_matches_created_document(db_session, company, customer):
    items = [
        _line("Copper pipe", quantity="3", unit_price="12.3456", vat_percent="20"),
        _line("Labour", quantity="1.5", unit_price="42", vat_percent="0"),
    ]

    preview = ledger.preview_summary(
        SummaryRequest(items=items, discount_percent=Decimal("7.5"))
    )
    document = ledger.create_document(
        db_session,
        company.id,
        _draft(customer, items, discount_percent=Decimal("7.5")),
    )

    assert preview.subtotal == document.subtotal
    assert preview.discount_amount == document.discount_amount
    assert preview.total_vat == document.total_vat
    assert preview.total == document.total


def test_preview_refuses_what_creation_refuses():
    with pytest.raises(ValidationError) as excinfo:
        ledger.preview_summary(
            SummaryRequest(items=[_line(quantity="1000", unit_price="0.00005")])
        )

    assert "Line 1: unit price allows at most 4 decimal places." in excinfo.value.errors

"""Financial summary of a list of line items.

Everything is computed in ``Decimal``. Amounts are rounded half-up to pennies at
the summation steps only, never per line, so rounding error does not compound
across a long invoice.

Items are duck-typed: anything with ``description``, ``quantity``,
``unit_price`` and ``vat_percent`` attributes works (request schemas, ORM lines,
``LineItem``).
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable

from ..errors import ValidationError

ZERO = Decimal("0")
HUNDRED = Decimal("100")
PENNY = Decimal("0.01")


@dataclass(frozen=True)
class LineItem:
    description: str
    quantity: Decimal
    unit_price: Decimal
    vat_percent: Decimal = ZERO


@dataclass(frozen=True)
class FinancialSummary:
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    discounted_net: Decimal
    total_vat: Decimal
    total: Decimal
    partial_payment: Decimal
    balance_due: Decimal
    # Advisory only: how far the partial payment exceeds the total.
    overpayment: Decimal
    line_nets: tuple[Decimal, ...] = ()


def to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def money(value) -> Decimal:
    return to_decimal(value).quantize(PENNY, rounding=ROUND_HALF_UP)


def _number(value, label: str, errors: list[str]) -> Decimal | None:
    try:
        number = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        errors.append(f"{label} must be a number.")
        return None
    if not number.is_finite():
        errors.append(f"{label} must be a number.")
        return None
    return number


def validate_items(items: Iterable) -> list[str]:
    errors: list[str] = []
    for index, item in enumerate(items, start=1):
        label = f"Line {index}"
        description = (getattr(item, "description", None) or "").strip()
        if not description:
            errors.append(f"{label}: description is required.")
        quantity = _number(getattr(item, "quantity", None), f"{label}: quantity", errors)
        if quantity is not None and quantity < 0:
            errors.append(f"{label}: quantity cannot be negative.")
        unit_price = _number(
            getattr(item, "unit_price", None), f"{label}: unit price", errors
        )
        if unit_price is not None and unit_price < 0:
            errors.append(f"{label}: unit price cannot be negative.")
        vat_percent = _number(
            getattr(item, "vat_percent", None), f"{label}: VAT", errors
        )
        if vat_percent is not None and not ZERO <= vat_percent <= HUNDRED:
            errors.append(f"{label}: VAT must be between 0 and 100%.")
    return errors


def validate_discount(discount_percent, errors: list[str]) -> Decimal | None:
    discount = _number(discount_percent, "Discount", errors)
    if discount is not None and not ZERO <= discount <= HUNDRED:
        errors.append("Discount must be between 0 and 100%.")
        return None
    return discount


def validate_partial_payment(partial_payment, errors: list[str]) -> Decimal | None:
    partial = _number(partial_payment, "Partial payment", errors)
    if partial is not None and partial < 0:
        errors.append("Partial payment cannot be negative.")
        return None
    return partial


def compute(
    items: Iterable,
    discount_percent=ZERO,
    partial_payment=ZERO,
    vat_after_discount: bool = True,
) -> FinancialSummary:
    items = list(items)
    errors = validate_items(items)
    discount = validate_discount(discount_percent, errors)
    partial = validate_partial_payment(partial_payment, errors)
    if errors:
        raise ValidationError(errors)

    nets = [to_decimal(item.quantity) * to_decimal(item.unit_price) for item in items]
    subtotal = money(sum(nets, ZERO))
    discount_amount = money(subtotal * discount / HUNDRED)
    discounted_net = subtotal - discount_amount

    # Scaling every line net by discounted_net / subtotal and summing the line
    # VAT equals scaling the summed (net * rate) once; the latter divides once.
    vat_base = sum(
        (net * to_decimal(item.vat_percent) for net, item in zip(nets, items)), ZERO
    )
    if vat_after_discount and subtotal > 0:
        vat_base = vat_base * discounted_net / subtotal
    total_vat = money(vat_base / HUNDRED)
    total = money(discounted_net + total_vat)

    partial = money(partial)
    balance_due = total - partial
    overpayment = ZERO
    if balance_due < 0:
        overpayment = -balance_due
        balance_due = ZERO

    return FinancialSummary(
        subtotal=subtotal,
        discount_percent=discount,
        discount_amount=discount_amount,
        discounted_net=discounted_net,
        total_vat=total_vat,
        total=total,
        partial_payment=partial,
        balance_due=money(balance_due),
        overpayment=money(overpayment),
        line_nets=tuple(money(net) for net in nets),
    )

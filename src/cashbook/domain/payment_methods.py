"""Payment method taxonomy and channel classification.

Payment method tags arrive from the store as free-form text ("EFECTIVO",
"transfer", "Depósito", ...). They are normalized once into
:class:`PaymentMethod` and then classified into a :class:`PaymentChannel`.
Receivables and payables use different channel rules: customers may pay
electronically by transfer, deposit, card or check, while suppliers are
only paid electronically by transfer.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable, Iterable, Optional, TypeVar

from cashbook.utils.money import decimal_sum


class PaymentMethod(str, Enum):
    """Normalized payment method."""

    CASH = "CASH"
    TRANSFER = "TRANSFER"
    DEPOSIT = "DEPOSIT"
    CARD = "CARD"
    CHECK = "CHECK"
    UNRECOGNIZED = "UNRECOGNIZED"


class PaymentChannel(str, Enum):
    """Custody channel a payment settles through."""

    CASH = "CASH"
    ELECTRONIC = "ELECTRONIC"
    OTHER = "OTHER"


PAYMENT_METHOD_ALIASES: dict[str, PaymentMethod] = {
    "cash": PaymentMethod.CASH,
    "efectivo": PaymentMethod.CASH,
    "transfer": PaymentMethod.TRANSFER,
    "transferencia": PaymentMethod.TRANSFER,
    "transferencia bancaria": PaymentMethod.TRANSFER,
    "deposit": PaymentMethod.DEPOSIT,
    "deposito": PaymentMethod.DEPOSIT,
    "depósito": PaymentMethod.DEPOSIT,
    "card": PaymentMethod.CARD,
    "tarjeta": PaymentMethod.CARD,
    "check": PaymentMethod.CHECK,
    "cheque": PaymentMethod.CHECK,
}

RECEIVABLE_ELECTRONIC_METHODS = frozenset(
    {
        PaymentMethod.TRANSFER,
        PaymentMethod.DEPOSIT,
        PaymentMethod.CARD,
        PaymentMethod.CHECK,
    }
)

PAYABLE_ELECTRONIC_METHODS = frozenset({PaymentMethod.TRANSFER})


def normalize_payment_method(tag: Optional[str]) -> PaymentMethod:
    """Normalize a free-form payment method tag.

    Matching is case-insensitive and ignores surrounding whitespace. Tags
    outside the known vocabulary, including empty ones, map to
    ``PaymentMethod.UNRECOGNIZED``.
    """
    if not tag:
        return PaymentMethod.UNRECOGNIZED
    return PAYMENT_METHOD_ALIASES.get(tag.strip().lower(), PaymentMethod.UNRECOGNIZED)


def classify_receivable(method: PaymentMethod) -> PaymentChannel:
    """Channel for a payment received from a debtor."""
    if method == PaymentMethod.CASH:
        return PaymentChannel.CASH
    if method in RECEIVABLE_ELECTRONIC_METHODS:
        return PaymentChannel.ELECTRONIC
    return PaymentChannel.OTHER


def classify_payable(method: PaymentMethod) -> PaymentChannel:
    """Channel for a payment made to a supplier."""
    if method == PaymentMethod.CASH:
        return PaymentChannel.CASH
    if method in PAYABLE_ELECTRONIC_METHODS:
        return PaymentChannel.ELECTRONIC
    return PaymentChannel.OTHER


@dataclass(frozen=True)
class ChannelSplit:
    """Total of a payment set and its split by channel."""

    total: Decimal
    cash: Decimal
    electronic: Decimal
    other: Decimal


T = TypeVar("T")


def split_by_channel(
    items: Iterable[T],
    amount: Callable[[T], Decimal],
    method: Callable[[T], PaymentMethod],
    classify: Callable[[PaymentMethod], PaymentChannel],
) -> ChannelSplit:
    """Split payments into cash, electronic and other portions.

    ``other`` is the total minus the two named portions, so the three always
    add up to the total whatever tags are present.
    """
    items = list(items)
    total = decimal_sum(amount(item) for item in items)
    cash = decimal_sum(
        amount(item) for item in items if classify(method(item)) == PaymentChannel.CASH
    )
    electronic = decimal_sum(
        amount(item)
        for item in items
        if classify(method(item)) == PaymentChannel.ELECTRONIC
    )
    return ChannelSplit(
        total=total,
        cash=cash,
        electronic=electronic,
        other=total - cash - electronic,
    )

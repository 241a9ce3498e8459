"""Same-day credit settlement detection."""

from typing import Sequence

from cashbook.domain.entities import CreditGrant, ReceivablePayment, SameDaySettlement
from cashbook.utils.money import decimal_sum


def find_same_day_settlements(
    grants: Sequence[CreditGrant], payments: Sequence[ReceivablePayment]
) -> list[SameDaySettlement]:
    """Match the day's credit grants against the day's receivable payments.

    A grant with at least one payment pointing back at it was extended and
    (at least partly) collected on the same day.

    Args:
        grants: Credit grants issued on the day
        payments: Receivable payments received on the day

    Returns:
        One settlement per matched grant, in grant order
    """
    payments_by_grant: dict[str, list[ReceivablePayment]] = {}
    for payment in payments:
        payments_by_grant.setdefault(payment.credit_grant_id, []).append(payment)

    settlements = []
    for grant in grants:
        matched = payments_by_grant.get(grant.id)
        if not matched:
            continue
        settlements.append(
            SameDaySettlement(
                grant=grant,
                payments=tuple(matched),
                total_paid=decimal_sum(p.amount for p in matched),
            )
        )
    return settlements

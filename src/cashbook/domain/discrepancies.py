"""Advisory alerts for a daily summary."""

from cashbook.domain.entities import Alert, DailySummary, Severity
from cashbook.utils.money import decimal_sum, format_currency


def detect_discrepancies(summary: DailySummary) -> list[Alert]:
    """Evaluate the alert rules against a summary, in priority order.

    Every rule that applies produces an alert; none suppresses another.

    Args:
        summary: Completed daily summary

    Returns:
        Ordered list of alerts (possibly empty)
    """
    alerts: list[Alert] = []

    settlements = summary.credits.same_day_settlements
    if settlements:
        settled = decimal_sum(item.total_paid for item in settlements)
        alerts.append(
            Alert(
                severity=Severity.INFO,
                message=(
                    f"{len(settlements)} credit(s) granted and settled today. "
                    f"Same-day settlement: {format_currency(settled)}"
                ),
            )
        )

    if summary.sales.credit > 0:
        alerts.append(
            Alert(
                severity=Severity.WARNING,
                message=(
                    f"Credit sales today: {format_currency(summary.sales.credit)} "
                    "(not in the cash drawer)"
                ),
            )
        )

    if summary.outflows.total > summary.income.total:
        alerts.append(
            Alert(
                severity=Severity.WARNING,
                message=(
                    f"Outflows ({format_currency(summary.outflows.total)}) exceed "
                    f"income ({format_currency(summary.income.total)})"
                ),
            )
        )

    if (
        summary.sales.count == 0
        and summary.income.count == 0
        and summary.outflows.count == 0
    ):
        alerts.append(
            Alert(severity=Severity.INFO, message="No movements recorded today")
        )

    return alerts

"""Daily summary command."""

import click
from cashbook.cli.error_handling import handle_domain_error
from cashbook.domain.balances import BalanceService
from cashbook.domain.discrepancies import detect_discrepancies
from cashbook.domain.entities import DailySummary, Severity
from cashbook.domain.errors import DomainError
from cashbook.domain.summary import DailySummaryService
from cashbook.utils.date_parser import BUSINESS_TIMEZONE
from cashbook.utils.money import format_currency

LABEL_WIDTH = 40
AMOUNT_WIDTH = 16


def _line(label: str, amount, indent: int = 0) -> None:
    indent_str = " " * (4 * indent)
    click.echo(
        f"{indent_str}{label:<{LABEL_WIDTH - 4 * indent}} {format_currency(amount):>{AMOUNT_WIDTH}}"
    )


def _heading(title: str) -> None:
    click.echo()
    click.echo(title)
    click.echo("-" * (LABEL_WIDTH + AMOUNT_WIDTH + 1))


def _time(instant) -> str:
    return instant.astimezone(BUSINESS_TIMEZONE).strftime("%H:%M")


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _display_summary(summary: DailySummary) -> None:
    """Print the summary blocks."""
    sales = summary.sales
    _heading(f"Sales ({_plural(sales.count, 'sale')})")
    _line("Total", sales.total)
    _line("Cash", sales.cash, indent=1)
    _line("Credit", sales.credit, indent=1)
    _line("Profit", sales.profit)

    income = summary.income
    _heading(f"Income ({_plural(income.count, 'movement')})")
    _line("Total", income.total)
    _line("Sales", income.sales, indent=1)
    _line("Receivable payments", income.receivable_payments, indent=1)
    _line("Cash", income.receivable_detail.cash, indent=2)
    _line("Electronic", income.receivable_detail.electronic, indent=2)
    _line("Other", income.receivable_detail.other, indent=2)
    _line("Transfers in", income.transfers, indent=1)
    _line("Other income", income.other, indent=1)

    outflows = summary.outflows
    _heading(f"Outflows ({_plural(outflows.count, 'movement')})")
    _line("Total", outflows.total)
    _line("Supplier payments", outflows.supplier_payments, indent=1)
    _line("Cash", outflows.supplier_detail.cash, indent=2)
    _line("Transfer", outflows.supplier_detail.electronic, indent=2)
    _line("Other", outflows.supplier_detail.other, indent=2)
    _line("Expenses", outflows.expenses, indent=1)
    _line("Transfers out", outflows.transfers, indent=1)

    transfers = summary.transfers
    _heading("Transfers")
    _line("In", transfers.inflow_total)
    _line("Out", transfers.outflow_total)
    _line("Net", transfers.net)

    credits = summary.credits
    _heading(f"Credits granted ({credits.count})")
    _line("Total granted", credits.total)

    physical = summary.cash.physical
    electronic = summary.cash.electronic
    _heading("Cash reconciliation")
    _line("Cash sales", physical.sales_income, indent=1)
    _line("Cash receivable payments", physical.receivable_income, indent=1)
    _line("Other cash income", physical.other_income, indent=1)
    _line("Cash supplier payments", -physical.supplier_outflow, indent=1)
    _line("Expenses", -physical.expense_outflow, indent=1)
    _line("Physical cash movement", physical.total)
    _line("Electronic movement today", electronic.movement_today)
    _line("Bank balance", electronic.bank_balance)
    if electronic.bank_balance_updated_at is not None:
        click.echo(f"    (updated {electronic.bank_balance_updated_at:%Y-%m-%d %H:%M} UTC)")
    click.echo("=" * (LABEL_WIDTH + AMOUNT_WIDTH + 1))
    _line("Expected cash on hand", summary.cash.expected)


def _display_details(summary: DailySummary) -> None:
    """Print the records behind the totals."""
    on_credit = {sale.id for sale in summary.sales.credit_sales}

    _heading("Sales")
    for sale in summary.sales.sales:
        kind = "credit" if sale.id in on_credit else "cash"
        click.echo(
            f"{_time(sale.timestamp)} {sale.id:<12} {kind:<7} {sale.status.value:<11} "
            f"{format_currency(sale.total):>12}"
        )

    _heading("Receivable payments")
    for payment in summary.income.payments:
        click.echo(
            f"{_time(payment.paid_at)} {payment.id:<12} {payment.method.value:<12} "
            f"{(payment.debtor_name or '')[:20]:<20} {format_currency(payment.amount):>12}"
        )

    _heading("Supplier payments")
    for payment in summary.outflows.supplier_payment_list:
        click.echo(
            f"{_time(payment.paid_at)} {payment.id:<12} {payment.method.value:<12} "
            f"{(payment.supplier_name or '')[:20]:<20} {format_currency(payment.amount):>12}"
        )

    _heading("Expenses")
    for expense in summary.outflows.expense_list:
        click.echo(
            f"{_time(expense.spent_at)} {expense.id:<12} {(expense.reason or '')[:33]:<33} "
            f"{format_currency(expense.amount):>12}"
        )

    _heading("Transfers")
    for transfer in summary.transfers.transfers:
        click.echo(
            f"{_time(transfer.timestamp)} {transfer.id:<12} {transfer.direction.value:<8} "
            f"{(transfer.reason or '')[:24]:<24} {format_currency(transfer.amount):>12}"
        )

    if summary.credits.same_day_settlements:
        _heading("Credits settled the same day")
        for settlement in summary.credits.same_day_settlements:
            grant = settlement.grant
            click.echo(
                f"{grant.id:<12} {(grant.debtor_name or grant.debtor_id)[:20]:<20} "
                f"granted {format_currency(grant.amount)} paid {format_currency(settlement.total_paid)}"
            )


@click.command("summary")
@click.option("--date", "target_date", default="today", help="Business day (YYYY-MM-DD, 'today', 'yesterday')")
@click.option("--details", is_flag=True, help="List the records behind each total")
@click.pass_context
def summary(ctx, target_date: str, details: bool):
    """Show the daily cash reconciliation summary."""
    db = ctx.obj["db"]
    service = DailySummaryService(db)

    try:
        result = service.compute(target_date)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    day = result.period.date
    click.echo(f"\nDaily Summary for {day.isoformat()}")
    click.echo(
        f"Window: {result.period.start:%Y-%m-%d %H:%M:%S} to {result.period.end:%Y-%m-%d %H:%M:%S} UTC"
    )

    opening = BalanceService(db).get_opening(day)
    if opening is not None:
        _line("Opening cash", opening.amount)

    _display_summary(result)
    if details:
        _display_details(result)

    alerts = detect_discrepancies(result)
    if alerts:
        _heading("Alerts")
        for alert in alerts:
            prefix = "WARNING" if alert.severity == Severity.WARNING else "INFO"
            click.echo(f"[{prefix}] {alert.message}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)

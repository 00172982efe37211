"""Fintrack CLI application using Typer.

This module provides a terminal front end for the finance client:
listing accounts, categories, budgets and goals, the dashboard summary,
income/expense reports and exports.
"""

import asyncio
import logging
import sys
from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from fintrack.domain.finance.entities import Category, TransactionFilters
from fintrack.domain.finance.services import CategoryHierarchyService
from fintrack.domain.finance.value_objects import BudgetStatus
from fintrack.domain.shared.exceptions import FintrackError
from fintrack.domain.shared.periods import Interval, ensure_valid_range
from fintrack.domain.shared.time import today_utc
from fintrack.infrastructure.export import (
    ExcelReportWriter,
    export_filename,
    save_export,
)
from fintrack.session import FinanceSession
from fintrack_config import get_settings

T = TypeVar("T")

app = typer.Typer(
    name="fintrack",
    help="Fintrack - personal finance tracker CLI",
    no_args_is_help=True,
)
console = Console()

DATE_FORMATS = ["%Y-%m-%d"]

STATUS_STYLES = {
    BudgetStatus.OK: "green",
    BudgetStatus.WARNING: "yellow",
    BudgetStatus.DANGER: "red",
    BudgetStatus.EXCEEDED: "bold red",
}


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure logging for the CLI from settings."""
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger("fintrack").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _open_session() -> FinanceSession:
    return FinanceSession.from_settings()


def _run(action: Callable[[FinanceSession], Awaitable[T]]) -> T:
    """Run ``action`` inside a session, turning client errors into exit code 1."""

    async def _main() -> T:
        async with _open_session() as session:
            return await action(session)

    try:
        return asyncio.run(_main())
    except FintrackError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        field_errors = getattr(e, "field_errors", None) or {}
        for field, messages in field_errors.items():
            for message in messages:
                console.print(f"  [dim]{field}:[/dim] {message}")
        raise typer.Exit(1) from e


def _money(value: Decimal, currency: str = "") -> str:
    text = f"{value:,.2f}"
    return f"{text} {currency}".strip()


def _percent(value: Decimal) -> str:
    return f"{value:.1f}%"


def _date_range(start: Optional[datetime], end: Optional[datetime]) -> tuple[date, date]:
    today = today_utc()
    start_date = start.date() if start else today.replace(day=1)
    end_date = end.date() if end else today
    return start_date, end_date


def _check_range(start_date: date, end_date: date) -> None:
    try:
        ensure_valid_range(start_date, end_date)
    except FintrackError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    _configure_logging()
    if verbose:
        logging.getLogger("fintrack").setLevel(logging.DEBUG)


# =============================================================================
# Listings
# =============================================================================


@app.command("accounts")
def list_accounts() -> None:
    """List accounts with their balances."""
    accounts = _run(lambda s: s.accounts.list())

    table = Table(title="Accounts")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Balance", justify="right")
    table.add_column("Active")

    total = Decimal("0")
    for account in accounts:
        table.add_row(
            str(account.id),
            account.name,
            account.type.value,
            _money(account.balance, account.currency),
            "yes" if account.is_active else "[dim]no[/dim]",
        )
        if account.is_active:
            total += account.balance

    console.print(table)
    console.print(f"[bold]Total balance:[/bold] {_money(total)}")


@app.command("categories")
def list_categories() -> None:
    """Show the category tree."""
    categories = _run(lambda s: s.categories.list())
    hierarchy = CategoryHierarchyService(categories)

    flat: dict[int, Category] = {}

    def _collect(category: Category) -> None:
        flat[category.id] = category
        for child in category.children:
            _collect(child)

    for category in categories:
        _collect(category)

    table = Table(title="Categories")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Name")
    table.add_column("Type")

    children: dict[Optional[int], list[Category]] = defaultdict(list)
    for category in flat.values():
        parent_id = category.parent_id if category.parent_id in flat else None
        children[parent_id].append(category)

    # Parents before children; depth drives the indentation
    ordered: list[Category] = []
    seen: set[int] = set()

    def _walk(parent_id: Optional[int]) -> None:
        for child in sorted(children[parent_id], key=lambda c: (c.type.value, c.name.lower())):
            if child.id in seen:
                continue
            seen.add(child.id)
            ordered.append(child)
            _walk(child.id)

    _walk(None)

    for category in ordered:
        indent = "  " * hierarchy.depth(category.id)
        table.add_row(str(category.id), f"{indent}{category.name}", category.type.value)

    console.print(table)


@app.command("budgets")
def list_budgets(
    all_budgets: bool = typer.Option(False, "--all", help="Include inactive budgets"),
) -> None:
    """List budgets with their utilization."""
    overview = _run(lambda s: s.budgets.overview(include_inactive=all_budgets))

    table = Table(title="Budgets")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Category")
    table.add_column("Period")
    table.add_column("Spent", justify="right")
    table.add_column("Amount", justify="right")
    table.add_column("Used", justify="right")
    table.add_column("Status")

    for budget, usage in overview:
        name = "Overall" if budget.is_overall else (
            budget.category.name if budget.category else f"Category #{budget.category_id}"
        )
        style = STATUS_STYLES[usage.status]
        used = _percent(usage.percentage)
        if usage.is_over_budget:
            used = f"{used} ({_percent(usage.raw_percentage)})"
        table.add_row(
            str(budget.id),
            name,
            budget.period.value,
            _money(usage.spent),
            _money(budget.amount),
            used,
            f"[{style}]{usage.status.value}[/{style}]",
        )

    console.print(table)


@app.command("goals")
def list_goals() -> None:
    """List savings goals with their progress."""
    goals = _run(lambda s: s.goals.list())
    today = today_utc()

    table = Table(title="Goals")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Name")
    table.add_column("Current", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("Deadline")

    for goal in goals:
        days = goal.days_remaining(today)
        if goal.deadline is None:
            deadline = "-"
        elif days is not None and days < 0:
            deadline = f"{goal.deadline} [red]({-days} days overdue)[/red]"
        else:
            deadline = f"{goal.deadline} ({days} days)"
        table.add_row(
            str(goal.id),
            goal.name,
            _money(goal.current_amount),
            _money(goal.target_amount),
            _percent(goal.progress),
            _money(goal.remaining),
            deadline,
        )

    console.print(table)


@app.command("summary")
def show_summary() -> None:
    """Show the dashboard summary."""
    summary = _run(lambda s: s.dashboard.summary())

    console.print("\n[bold green]Dashboard[/bold green]")
    console.print(f"Total balance:  {_money(summary.total_balance)}")
    console.print(f"Income:         [green]{_money(summary.total_income)}[/green]")
    console.print(f"Expenses:       [red]{_money(summary.total_expenses)}[/red]")
    console.print(f"Net income:     [bold]{_money(summary.net_income)}[/bold]\n")

    if summary.spending_by_category:
        table = Table(title="Spending by category")
        table.add_column("Category")
        table.add_column("Amount", justify="right")
        table.add_column("Share", justify="right")
        for item in summary.spending_by_category:
            table.add_row(item.category_name, _money(item.total_amount), _percent(item.percentage))
        console.print(table)


# =============================================================================
# Reports and exports
# =============================================================================


@app.command("report")
def show_report(  # NOQA: PLR0913
    start: Optional[datetime] = typer.Option(None, formats=DATE_FORMATS, help="Start date"),
    end: Optional[datetime] = typer.Option(None, formats=DATE_FORMATS, help="End date"),
    interval: Interval = typer.Option(Interval.MONTHLY, help="Trend bucket size"),
    account: Optional[int] = typer.Option(None, help="Only this account"),
    category: Optional[int] = typer.Option(None, help="Only this category"),
    xlsx: Optional[Path] = typer.Option(None, help="Also write the report to this .xlsx file"),
) -> None:
    """Aggregate an income/expense report for a date range."""
    start_date, end_date = _date_range(start, end)
    _check_range(start_date, end_date)

    report = _run(
        lambda s: s.reports.build_report(
            start_date,
            end_date,
            interval=interval,
            account_id=account,
            category_id=category,
        ),
    )

    console.print(f"\n[bold green]Report {start_date} to {end_date}[/bold green]")
    console.print(f"Income:      [green]{_money(report.total_income)}[/green]")
    console.print(f"Expenses:    [red]{_money(report.total_expense)}[/red]")
    console.print(f"Net income:  [bold]{_money(report.net_income)}[/bold]\n")

    for title, items in (
        ("Expenses by category", report.expense_by_category),
        ("Income by category", report.income_by_category),
    ):
        if not items:
            continue
        table = Table(title=title)
        table.add_column("Category")
        table.add_column("Amount", justify="right")
        table.add_column("Share", justify="right")
        table.add_column("Count", justify="right")
        for item in items:
            table.add_row(
                item.category_name,
                _money(item.amount),
                _percent(item.percentage),
                str(item.transaction_count),
            )
        console.print(table)

    trend = Table(title=f"Trend ({interval.value})")
    trend.add_column("Period")
    trend.add_column("Income", justify="right")
    trend.add_column("Expenses", justify="right")
    trend.add_column("Net", justify="right")
    for point in report.trend:
        style = "green" if point.net >= 0 else "red"
        trend.add_row(
            point.period_label,
            _money(point.income),
            _money(point.expense),
            f"[{style}]{_money(point.net)}[/{style}]",
        )
    console.print(trend)

    if xlsx is not None:
        writer = ExcelReportWriter(currency=get_settings().default_currency)
        path = save_export(writer.render(report), xlsx, overwrite=True)
        console.print(f"[dim]Workbook written to {path}[/dim]")


@app.command("export")
def export(  # NOQA: PLR0913
    kind: str = typer.Argument(..., help="What to export: 'transactions' or 'report'"),
    fmt: str = typer.Option("csv", "--format", "-f", help="csv, or pdf for reports"),
    start: Optional[datetime] = typer.Option(None, formats=DATE_FORMATS, help="Start date"),
    end: Optional[datetime] = typer.Option(None, formats=DATE_FORMATS, help="End date"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Target file"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing file"),
) -> None:
    """Download a CSV/PDF export from the server."""
    if kind not in ("transactions", "report"):
        console.print(f"[red]Error:[/red] Unknown export kind '{kind}'")
        raise typer.Exit(1)
    if fmt not in ("csv", "pdf") or (kind == "transactions" and fmt != "csv"):
        console.print(f"[red]Error:[/red] Format '{fmt}' is not available for {kind}")
        raise typer.Exit(1)

    start_date, end_date = _date_range(start, end)
    _check_range(start_date, end_date)

    if kind == "transactions":
        filters = TransactionFilters(start_date=start_date, end_date=end_date)
        content = _run(lambda s: s.transactions.export_csv(filters))
    else:
        content = _run(lambda s: s.reports.export(fmt, start_date, end_date))

    target = output or Path(export_filename(kind, fmt, start_date, end_date))
    try:
        path = save_export(content, target, overwrite=overwrite)
    except FileExistsError as e:
        console.print(f"[red]Error:[/red] {e} (use --overwrite)")
        raise typer.Exit(1) from e
    console.print(f"[green]Saved[/green] {path} ({len(content)} bytes)")


@app.command("login")
def login(
    email: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Sign in and print the bearer token for FINTRACK_API_TOKEN."""

    async def _login(session: FinanceSession) -> str:
        user = await session.login(email, password)
        console.print(f"[green]Signed in as {user.name}[/green]")
        return session.client.token or ""

    token = _run(_login)
    console.print(
        "[dim]Add this to your config/.env.dev file:[/dim]\n"
        f"[cyan]FINTRACK_API_TOKEN[/cyan]={token}",
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()

"""CLI entry point for the ledger generator.

Usage:
    # Three months, opening balance 25,000, salary on the 1st
    ledgergen generate --from 2024-01-01 --to 2024-03-31 --opening 25000 \\
        --salary 45000 --company "Acme Ltd" --seed 7 -o runs/q1.db \\
        --export runs/q1.csv --export runs/q1.xlsx

    # Inspect or re-check a stored ledger
    ledgergen show runs/q1.db
    ledgergen verify runs/q1.db
"""

import logging
import random
import sys
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path

import click
import duckdb
from dotenv import find_dotenv, load_dotenv

# Load .env by walking upward from the CWD.
_dotenv_path = find_dotenv(usecwd=True)
if _dotenv_path:
    load_dotenv(_dotenv_path)

from ledgergen.export import export_ledger, format_amount
from ledgergen.generator import generate_ledger, verify
from ledgergen.models import DateRange, GenerationConfig, LedgerConfigError
from ledgergen.settings import load_settings
from ledgergen.store import LedgerStoreError, read_ledger, read_ledger_meta, write_ledger

log = logging.getLogger(__name__)


class MoneyParamType(click.ParamType):
    """Accepts ``12500``, ``12,500.50`` or ``1,25,000``."""

    name = "amount"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            amount = Decimal(str(value).replace(",", "").strip())
        except InvalidOperation:
            self.fail(f"{value!r} is not a valid amount", param, ctx)
        if not amount.is_finite():
            self.fail(f"{value!r} is not a valid amount", param, ctx)
        return amount


MONEY = MoneyParamType()
ISO_DATE = click.DateTime(formats=["%Y-%m-%d"])


def _configure_logging(quiet: bool) -> None:
    level = logging.WARNING if quiet else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


def _default_output_db_path(
    output_dir: Path, date_range: DateRange, now: datetime | None = None
) -> Path:
    """Generate a default output .db path from the range + timestamp."""
    if now is None:
        now = datetime.now(timezone.utc)
    ts = now.strftime("%Y%m%d_%H%M%S")
    return (
        output_dir
        / f"ledger_{date_range.start:%Y%m%d}-{date_range.end:%Y%m%d}_{ts}.db"
    )


def _open_ledger_db(target: Path) -> duckdb.DuckDBPyConnection:
    if target.suffix != ".db":
        raise click.ClickException(f"{target} is not a .db file.")
    if not target.exists():
        raise click.ClickException(f"{target} does not exist.")
    try:
        return duckdb.connect(str(target), read_only=True)
    except duckdb.Error as e:
        raise click.ClickException(f"Cannot open {target} as a DuckDB database: {e}")


@click.group()
def main():
    """Ledgergen — synthetic bank statement ledgers."""


@main.command()
@click.option("--from", "date_from", type=ISO_DATE, required=True, help="First day (YYYY-MM-DD)")
@click.option("--to", "date_to", type=ISO_DATE, required=True, help="Last day (YYYY-MM-DD)")
@click.option("--opening", type=MONEY, default=Decimal("0"), show_default=True, help="Opening balance")
@click.option("--salary", type=MONEY, default=None, help="Monthly salary credit")
@click.option("--salary-day", type=int, default=None, help="Day of month salary is paid")
@click.option("--company", default=None, help="Employer name (salary is only credited when set)")
@click.option("--debits", type=int, default=None, help="Debits per month")
@click.option("--credits", type=int, default=None, help="Credits per month")
@click.option("--closing", type=MONEY, default=None, help="Target closing balance")
@click.option("--seed", type=int, default=None, help="Random seed (default: $LEDGERGEN_SEED or random)")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output database path (default: runs/ledger_<range>_<timestamp>.db)",
)
@click.option(
    "--export",
    "exports",
    multiple=True,
    type=click.Path(path_type=Path),
    help="Also write a .csv or .xlsx statement (repeatable)",
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress verbose output")
@click.option("--force", "-f", is_flag=True, help="Overwrite output file without prompting")
def generate(
    date_from: datetime,
    date_to: datetime,
    opening: Decimal,
    salary: Decimal | None,
    salary_day: int | None,
    company: str | None,
    debits: int | None,
    credits: int | None,
    closing: Decimal | None,
    seed: int | None,
    output: Path | None,
    exports: tuple[Path, ...],
    quiet: bool,
    force: bool,
):
    """Generate a ledger and store it in a DuckDB database."""
    _configure_logging(quiet)

    try:
        settings = load_settings()
        date_range = DateRange(date_from.date(), date_to.date())
        config = GenerationConfig(
            opening_balance=opening,
            salary_amount=salary,
            salary_day=salary_day if salary_day is not None else settings.salary_day,
            company_name=company,
            debit_count=debits if debits is not None else settings.debit_count,
            credit_count=credits if credits is not None else settings.credit_count,
            target_closing_balance=closing,
            minimum_balance=settings.minimum_balance,
            daily_cap=settings.daily_cap,
        )
        config.validate()
    except LedgerConfigError as e:
        raise click.ClickException(str(e))

    for path in exports:
        if path.suffix.lower() not in (".csv", ".xlsx"):
            raise click.BadParameter(
                f"{path}: only .csv and .xlsx exports are supported",
                param_hint="--export",
            )

    if seed is None:
        seed = settings.seed
    if seed is None:
        seed = random.randrange(1, 1_000_000)

    if output is None:
        output = _default_output_db_path(settings.output_dir, date_range)
    elif output.suffix != ".db":
        output = output.with_suffix(".db")
        log.warning("Output path adjusted to %s (added .db suffix)", output)
    output.parent.mkdir(parents=True, exist_ok=True)

    if output.exists() and not force:
        click.confirm(
            f"{output} already exists and will be overwritten. Continue?",
            abort=True,
        )

    log.info("Range: %s .. %s", date_range.start, date_range.end)
    log.info("Seed: %d", seed)
    log.info("Output: %s", output)

    result = generate_ledger(date_range, config, seed=seed)
    errors = verify(
        result,
        minimum_balance=config.minimum_balance,
        target=config.target_closing_balance,
    )

    if output.exists():
        output.unlink()
    conn = duckdb.connect(str(output))
    try:
        write_ledger(conn, result, date_range, config, seed=seed)
    finally:
        conn.close()

    if exports:
        log.info("--- Exports (%d) ---", len(exports))
        for path in exports:
            export_ledger(result, path)

    if not quiet:
        click.echo(f"\nTransactions: {len(result.transactions)}")
        click.echo(f"  dropped: {result.dropped}  clamped: {result.clamped}")
        click.echo(f"Opening balance: {format_amount(result.opening_balance)}")
        click.echo(f"Total debits:    {format_amount(result.total_debits)}")
        click.echo(f"Total credits:   {format_amount(result.total_credits)}")
        click.echo(f"Closing balance: {format_amount(result.final_balance)}")

    if errors:
        click.echo(f"\nVerification errors: {len(errors)}")
        for err in errors:
            click.echo(f"  ! {err}")
        sys.exit(1)


@main.command()
@click.argument("target", type=click.Path(path_type=Path))
@click.option("--limit", "-n", type=int, default=None, help="Show at most N rows")
def show(target: Path, limit: int | None):
    """Show a stored ledger.

    \b
    Example:
        ledgergen show runs/q1.db
        ledgergen show runs/q1.db -n 20
    """
    conn = _open_ledger_db(target)
    try:
        meta = read_ledger_meta(conn)
        if not meta:
            raise click.ClickException(
                f"{target} has no ledger metadata — not a ledgergen database."
            )
        result = read_ledger(conn)
    except LedgerStoreError as e:
        raise click.ClickException(str(e))
    finally:
        conn.close()

    click.echo(f"Ledger: {target}\n")
    click.echo(f"Created: {meta.get('created_at_utc', '(unknown)')}")
    click.echo(f"Range: {meta.get('date_from')} .. {meta.get('date_to')}")
    if meta.get("seed"):
        click.echo(f"Seed: {meta['seed']}")
    click.echo(f"Opening balance: {format_amount(result.opening_balance)}")
    click.echo(f"Closing balance: {format_amount(result.final_balance)}")
    if meta.get("target_closing_balance"):
        click.echo(f"Target closing:  {format_amount(Decimal(meta['target_closing_balance']))}")

    rows = result.transactions if limit is None else result.transactions[:limit]
    click.echo(f"\nTransactions ({len(result.transactions)}):")
    for t in rows:
        click.echo(
            f"  {t.transaction_date:%d %b %Y}  {t.description[:44]:<44}"
            f"  {format_amount(t.debit):>14}  {format_amount(t.credit):>14}"
            f"  {format_amount(t.balance):>14}"
        )
    if len(rows) < len(result.transactions):
        click.echo(f"  ... {len(result.transactions) - len(rows)} more")


@main.command("verify")
@click.argument("target", type=click.Path(path_type=Path))
def verify_cmd(target: Path):
    """Re-check balances and ordering of a stored ledger."""
    conn = _open_ledger_db(target)
    try:
        meta = read_ledger_meta(conn)
        result = read_ledger(conn)
    except LedgerStoreError as e:
        raise click.ClickException(str(e))
    finally:
        conn.close()

    floor = Decimal(meta["minimum_balance"]) if "minimum_balance" in meta else None
    target_balance = (
        Decimal(meta["target_closing_balance"])
        if "target_closing_balance" in meta
        else None
    )
    errors = verify(result, minimum_balance=floor, target=target_balance)
    if errors:
        click.echo(f"{target}: {len(errors)} error(s)")
        for err in errors:
            click.echo(f"  ! {err}")
        sys.exit(1)
    click.echo(f"{target}: OK ({len(result.transactions)} transactions)")


if __name__ == "__main__":
    main()

"""Project-level defaults for the CLI.

Precedence (lowest to highest):
1) built-in defaults
2) ``[tool.ledgergen]`` in ``pyproject.toml`` of the working directory
3) ``LEDGERGEN_SEED`` environment variable (seed only)
4) explicit command-line options
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from pathlib import Path

from .models import (
    DAILY_CAP,
    DEFAULT_CREDIT_COUNT,
    DEFAULT_DEBIT_COUNT,
    DEFAULT_SALARY_DAY,
    MIN_BALANCE_FLOOR,
    LedgerConfigError,
)

log = logging.getLogger(__name__)

SEED_ENV = "LEDGERGEN_SEED"
TOOL_TABLE = "ledgergen"


@dataclass
class Settings:
    debit_count: int = DEFAULT_DEBIT_COUNT
    credit_count: int = DEFAULT_CREDIT_COUNT
    salary_day: int = DEFAULT_SALARY_DAY
    minimum_balance: Decimal = MIN_BALANCE_FLOOR
    daily_cap: int = DAILY_CAP
    output_dir: Path = Path("runs")
    seed: int | None = None


def _read_tool_table(pyproject_path: Path) -> dict:
    if not pyproject_path.exists():
        return {}
    try:
        data = tomllib.loads(pyproject_path.read_text())
    except OSError as e:
        raise LedgerConfigError(f"Failed to read {pyproject_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise LedgerConfigError(f"Invalid TOML in {pyproject_path}: {e}") from e
    table = data.get("tool", {}).get(TOOL_TABLE, {})
    if not isinstance(table, dict):
        raise LedgerConfigError(f"[tool.{TOOL_TABLE}] must be a table")
    return table


def _coerce(name: str, value: object) -> object:
    try:
        if name == "minimum_balance":
            return Decimal(str(value))
        if name == "output_dir":
            return Path(str(value))
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError, InvalidOperation) as e:
        raise LedgerConfigError(
            f"Invalid value for [tool.{TOOL_TABLE}].{name}: {value!r}"
        ) from e


def load_settings(cwd: Path | None = None) -> Settings:
    """Build Settings from pyproject.toml and the environment."""
    cwd = cwd or Path.cwd()
    settings = Settings()
    known = {f.name for f in fields(Settings)}

    for key, value in _read_tool_table(cwd / "pyproject.toml").items():
        if key not in known:
            log.warning("Ignoring unknown setting [tool.%s].%s", TOOL_TABLE, key)
            continue
        setattr(settings, key, _coerce(key, value))

    raw_seed = os.environ.get(SEED_ENV, "").strip()
    if raw_seed:
        try:
            settings.seed = int(raw_seed)
        except ValueError as e:
            raise LedgerConfigError(f"{SEED_ENV} must be an integer, got {raw_seed!r}") from e

    return settings

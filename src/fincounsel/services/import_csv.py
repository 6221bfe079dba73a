"""CSV ingestion for the debt payoff calculator."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ..logging_config import get_logger
from .debts import Debt

logger = get_logger(__name__)


@dataclass(slots=True)
class DebtColumnMapping:
    """Maps debt fields to the accepted (normalized) CSV headers."""

    name: tuple[str, ...] = ("name", "debt", "creditor")
    balance: tuple[str, ...] = ("balance", "amount_owed")
    min_payment: tuple[str, ...] = ("min_payment", "minpayment", "minimum_payment")
    interest_rate: tuple[str, ...] = ("interest_rate", "interestrate", "apr", "rate")


def normalize_frame(*, file_path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """Load a CSV file into a DataFrame with snake_case lower-case headers."""

    frame = pd.read_csv(file_path, encoding=encoding)
    frame.columns = [
        str(c).strip().lower().replace(" ", "_").replace("-", "_") for c in frame.columns
    ]
    return frame


def _pick(frame: pd.DataFrame, candidates: tuple[str, ...]) -> str | None:
    for candidate in candidates:
        if candidate in frame.columns:
            return candidate
    return None


def _numeric(frame: pd.DataFrame, column: str | None) -> pd.Series:
    if column is None:
        return pd.Series(0.0, index=frame.index)
    cleaned = frame[column].astype(str).str.replace(r"[$,%\s]", "", regex=True)
    values = pd.to_numeric(cleaned, errors="coerce")
    return values.replace([float("inf"), float("-inf")], float("nan")).fillna(0.0)


def frame_to_debts(frame: pd.DataFrame, mapping: DebtColumnMapping | None = None) -> list[Debt]:
    """Convert a normalized frame to debts; unparseable numbers become 0."""

    mapping = mapping or DebtColumnMapping()
    balance_col = _pick(frame, mapping.balance)
    if balance_col is None:
        raise ValueError("CSV must contain a balance column.")

    name_col = _pick(frame, mapping.name)
    balances = _numeric(frame, balance_col)
    minimums = _numeric(frame, _pick(frame, mapping.min_payment))
    rates = _numeric(frame, _pick(frame, mapping.interest_rate))

    debts: list[Debt] = []
    for position, index in enumerate(frame.index, start=1):
        raw_name = frame.at[index, name_col] if name_col else None
        name = str(raw_name).strip() if raw_name is not None and not pd.isna(raw_name) else ""
        debts.append(
            Debt(
                id=position,
                name=name or f"Debt {position}",
                balance=float(balances[index]),
                min_payment=float(minimums[index]),
                interest_rate=float(rates[index]),
            )
        )
    return debts


def load_debts_csv(csv_path: Path, *, mapping: DebtColumnMapping | None = None) -> list[Debt]:
    """Parse ``csv_path`` into debts ready for :func:`~fincounsel.services.debts.simulate`."""

    frame = normalize_frame(file_path=csv_path)
    debts = frame_to_debts(frame, mapping)
    logger.info("Loaded debts from CSV", extra={"path": str(csv_path), "rows": len(debts)})
    return debts


__all__ = ["DebtColumnMapping", "frame_to_debts", "load_debts_csv", "normalize_frame"]

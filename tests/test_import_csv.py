"""Debt CSV ingestion."""

from __future__ import annotations

from decimal import Decimal

import pandas as pd
import pytest

from fincounsel.services.import_csv import (
    DebtColumnMapping,
    frame_to_debts,
    load_debts_csv,
    normalize_frame,
)


def test_load_debts_csv_normalizes_headers_and_amounts(tmp_path):
    csv_path = tmp_path / "debts.csv"
    csv_path.write_text(
        "Name,Balance,Min Payment,Interest Rate\n"
        'Visa,"$5,000.00",150,18.99%\n'
        "Car Loan,12000,310,6.5\n",
        encoding="utf-8",
    )

    debts = load_debts_csv(csv_path)

    assert [d.name for d in debts] == ["Visa", "Car Loan"]
    assert [d.id for d in debts] == [1, 2]
    assert debts[0].balance == Decimal("5000.00")
    assert debts[0].min_payment == Decimal("150.00")
    assert debts[0].interest_rate == Decimal("18.99")


def test_missing_optional_columns_default_to_zero(tmp_path):
    csv_path = tmp_path / "balances.csv"
    csv_path.write_text("balance\n100\nnot a number\n", encoding="utf-8")

    debts = load_debts_csv(csv_path)

    assert [d.name for d in debts] == ["Debt 1", "Debt 2"]
    assert debts[1].balance == Decimal("0.00")
    assert debts[0].interest_rate == Decimal("0")


def test_balance_column_is_required():
    frame = pd.DataFrame({"name": ["Visa"], "apr": [19.9]})

    with pytest.raises(ValueError):
        frame_to_debts(frame)


def test_custom_mapping():
    frame = pd.DataFrame({"creditor_name": ["Bank"], "owed": [250]})
    mapping = DebtColumnMapping(name=("creditor_name",), balance=("owed",))

    debts = frame_to_debts(frame, mapping)

    assert debts[0].name == "Bank"
    assert debts[0].balance == Decimal("250.00")


def test_normalize_frame_headers(tmp_path):
    csv_path = tmp_path / "x.csv"
    csv_path.write_text(" Amount-Owed ,APR\n1,2\n", encoding="utf-8")

    frame = normalize_frame(file_path=csv_path)

    assert list(frame.columns) == ["amount_owed", "apr"]


def test_infinite_amounts_count_as_zero(tmp_path):
    csv_path = tmp_path / "debts.csv"
    csv_path.write_text(
        "name,balance,min_payment,apr\nCard,inf,50,19.99\nLoan,1000,-inf,1e400\n",
        encoding="utf-8",
    )

    debts = load_debts_csv(csv_path)

    assert debts[0].balance == Decimal("0.00")
    assert debts[0].min_payment == Decimal("50.00")
    assert debts[1].min_payment == Decimal("0.00")
    assert debts[1].interest_rate == Decimal("0")

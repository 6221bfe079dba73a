"""Core payoff simulation behaviour."""

from __future__ import annotations

from decimal import Decimal

import pytest

from fincounsel.services.debts import (
    MAX_MONTHS,
    Debt,
    PayoffStrategy,
    default_debts,
    priority_order,
    simulate,
)


def _balances(entry) -> dict:
    return {snap.id: snap.balance for snap in entry.debts}


def test_zero_interest_single_debt_takes_ten_months():
    debt = Debt(id=1, name="Loan", balance=1000, min_payment=100, interest_rate=0)

    result = simulate([debt], 0, "avalanche")

    assert result is not None
    assert len(result.schedule) == 10
    assert result.payoff_time == 10
    assert result.total_interest_paid == Decimal("0")
    assert result.total_paid == Decimal("1000")
    assert [entry.month for entry in result.schedule] == list(range(1, 11))
    assert result.schedule[-1].total_balance == Decimal("0")
    assert result.paid_off


def test_empty_debt_list_returns_none():
    assert simulate([], 200, "avalanche") is None
    assert simulate([], 200, "snowball") is None


def test_unknown_strategy_raises():
    debt = Debt(name="Loan", balance=100, min_payment=10, interest_rate=5)

    with pytest.raises(ValueError):
        simulate([debt], 0, "fastest")


def test_strategy_is_case_insensitive():
    debt = Debt(name="Loan", balance=100, min_payment=50, interest_rate=0)

    result = simulate([debt], 0, " Snowball ")

    assert result.strategy is PayoffStrategy.SNOWBALL


def test_avalanche_prioritizes_highest_rate_in_first_month():
    result = simulate(default_debts(), 200, "avalanche")

    first = result.schedule[0]
    assert [snap.id for snap in first.debts] == [2, 1, 3]
    # Credit Card 2: 3000 + 57.48 interest - 75 minimum - 200 extra
    assert _balances(first) == {
        2: Decimal("2782.48"),
        1: Decimal("4929.13"),
        3: Decimal("9858.25"),
    }
    assert first.total_balance == Decimal("17569.86")


def test_snowball_prioritizes_lowest_balance_in_first_month():
    debts = [
        Debt(id=1, name="Store card", balance=2000, min_payment=50, interest_rate=24),
        Debt(id=2, name="Medical", balance=500, min_payment=50, interest_rate=0),
    ]

    snowball = simulate(debts, 100, "snowball")
    avalanche = simulate(debts, 100, "avalanche")

    assert _balances(snowball.schedule[0]) == {2: Decimal("350"), 1: Decimal("1990")}
    assert _balances(avalanche.schedule[0]) == {1: Decimal("1890"), 2: Decimal("450")}


def test_zero_minimum_payments_run_to_the_month_cap():
    debts = [
        Debt(id=1, name="A", balance=1000, min_payment=0, interest_rate=10),
        Debt(id=2, name="B", balance=250, min_payment=0, interest_rate=3),
    ]

    result = simulate(debts, 0, "avalanche")

    assert result.payoff_time == MAX_MONTHS
    assert len(result.schedule) == MAX_MONTHS
    assert len(result.schedule[-1].debts) == 2
    assert not result.paid_off
    for previous, current in zip(result.schedule, result.schedule[1:]):
        assert current.total_balance >= previous.total_balance


def test_runaway_interest_reaches_the_cap_without_overflowing_precision():
    debts = [Debt(id=1, name="Payday", balance=1000, min_payment=0, interest_rate=200)]

    result = simulate(debts, 0, "avalanche")

    assert result.payoff_time == MAX_MONTHS
    assert not result.paid_off
    assert result.total_paid - result.total_interest_paid == result.total_original_balance
    assert result.schedule[-1].total_balance > Decimal("1e40")
    assert result.to_dict(include_schedule=False)["total_paid"] > 1e40


def test_balances_beyond_default_decimal_precision():
    debt = Debt(id=1, name="Sovereign", balance=1e30, min_payment=Decimal("1e28"), interest_rate=5)

    result = simulate([debt], 0, "snowball")

    assert debt.balance == Decimal("1e30")
    assert result.paid_off
    assert result.total_paid - result.total_interest_paid == result.total_original_balance


def test_total_paid_is_exact_sum_of_original_balance_and_interest():
    result = simulate(default_debts(), 200, "avalanche")

    assert result.total_original_balance == Decimal("18000.00")
    assert result.total_paid == result.total_original_balance + result.total_interest_paid
    assert result.total_interest_paid > 0


def test_payoff_time_matches_schedule_length_and_cap():
    for strategy in ("avalanche", "snowball"):
        result = simulate(default_debts(), 200, strategy)
        assert result.payoff_time == len(result.schedule)
        assert 0 < result.payoff_time <= MAX_MONTHS
        assert result.paid_off


def test_balances_never_increase_when_minimums_cover_interest():
    result = simulate(default_debts(), 200, "snowball")

    for previous, current in zip(result.schedule, result.schedule[1:]):
        before = _balances(previous)
        for debt_id, balance in _balances(current).items():
            assert balance <= before[debt_id]


def test_retired_debts_leave_the_schedule():
    debts = [
        Debt(id=1, name="Small", balance=100, min_payment=60, interest_rate=0),
        Debt(id=2, name="Large", balance=600, min_payment=100, interest_rate=0),
    ]

    result = simulate(debts, 0, "snowball")

    assert [snap.id for snap in result.schedule[1].debts] == [1, 2]
    assert [snap.id for snap in result.schedule[2].debts] == [2]
    assert result.payoff_time == 6


def test_leftover_extra_payment_is_not_carried_to_next_debt():
    debts = [
        Debt(id=1, name="Nearly done", balance=100, min_payment=50, interest_rate=0),
        Debt(id=2, name="Car", balance=1000, min_payment=50, interest_rate=0),
    ]

    result = simulate(debts, 200, "snowball")

    first = result.schedule[0]
    assert _balances(first) == {1: Decimal("0"), 2: Decimal("950")}
    assert _balances(result.schedule[1]) == {2: Decimal("700")}


def test_balance_at_one_cent_is_retired_after_first_month():
    debt = Debt(id=1, name="Dust", balance="0.01", min_payment=0, interest_rate=0)

    result = simulate([debt], 0, "avalanche")

    assert result.payoff_time == 1
    assert result.schedule[0].total_balance == Decimal("0.01")


def test_avalanche_ties_keep_input_order():
    debts = [
        Debt(id=1, name="First", balance=100, min_payment=10, interest_rate=15),
        Debt(id=2, name="Second", balance=50, min_payment=10, interest_rate=15),
        Debt(id=3, name="Third", balance=75, min_payment=10, interest_rate=20),
    ]

    ordered = priority_order(debts, PayoffStrategy.AVALANCHE)

    assert [debt.id for debt in ordered] == [3, 1, 2]


def test_input_debts_are_not_mutated():
    debts = default_debts()

    simulate(debts, 200, "avalanche")

    assert [debt.balance for debt in debts] == [
        Decimal("5000.00"),
        Decimal("3000.00"),
        Decimal("10000.00"),
    ]


def test_result_to_dict_serializes_money_as_floats():
    debt = Debt(id=7, name="Loan", balance=1000, min_payment=100, interest_rate=0)

    payload = simulate([debt], 0, "avalanche").to_dict()

    assert payload["strategy"] == "avalanche"
    assert payload["payoff_time"] == 10
    assert payload["total_paid"] == 1000.0
    assert payload["paid_off"] is True
    assert payload["schedule"][0] == {
        "month": 1,
        "total_balance": 900.0,
        "debts": [{"id": 7, "name": "Loan", "balance": 900.0}],
    }

"""Debt payoff simulation (avalanche and snowball)."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Context, Decimal, localcontext
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from ..logging_config import get_logger

logger = get_logger(__name__)

MAX_MONTHS = 600  # 50 years
RETIRED_THRESHOLD = Decimal("0.01")
_CENT = Decimal("0.01")
_ZERO = Decimal("0")
_MONTHS_PER_YEAR = Decimal(12)
_HUNDRED = Decimal(100)
# Digits carried through the monthly loop; enough for 600 months of compounding.
_WORKING_PRECISION = 120


class PayoffStrategy(str, Enum):
    """Orderings that decide which debt receives the extra payment."""

    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"

    @classmethod
    def parse(cls, value: "PayoffStrategy | str") -> "PayoffStrategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Invalid debt payoff strategy: {value!r}") from exc


def to_money(value: Any) -> Decimal:
    """Return ``value`` as a Decimal quantized to cents."""

    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    return _cents(amount)


def _cents(amount: Decimal) -> Decimal:
    """Quantize to cents with a context wide enough for any magnitude."""

    digits = max(_WORKING_PRECISION, amount.adjusted() + 3)
    return amount.quantize(_CENT, context=Context(prec=digits, rounding=ROUND_HALF_UP))


def money_float(value: Decimal) -> float:
    """Display helper: cents-rounded float for JSON and charts."""

    return float(_cents(value))


@dataclass(slots=True)
class Debt:
    """One liability being repaid.

    Amounts are coerced to Decimal cents; ``interest_rate`` is the nominal
    annual percentage (18.99 means 18.99%). Negative values are accepted
    as-is: the simulator does not validate its input.
    """

    name: str
    balance: Decimal
    min_payment: Decimal
    interest_rate: Decimal
    id: Optional[int] = None

    def __post_init__(self) -> None:
        self.balance = to_money(self.balance)
        self.min_payment = to_money(self.min_payment)
        if not isinstance(self.interest_rate, Decimal):
            self.interest_rate = Decimal(str(self.interest_rate))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "balance": money_float(self.balance),
            "min_payment": money_float(self.min_payment),
            "interest_rate": float(self.interest_rate),
        }


@dataclass(frozen=True, slots=True)
class DebtSnapshot:
    """Balance of a single debt at the end of a simulated month."""

    id: Optional[int]
    name: str
    balance: Decimal


@dataclass(frozen=True, slots=True)
class PayoffScheduleEntry:
    """One simulated month: 1-based index, total and per-debt balances."""

    month: int
    total_balance: Decimal
    debts: tuple[DebtSnapshot, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "total_balance": money_float(self.total_balance),
            "debts": [
                {"id": snap.id, "name": snap.name, "balance": money_float(snap.balance)}
                for snap in self.debts
            ],
        }


@dataclass(frozen=True, slots=True)
class SimulationResult:
    """Outcome of a payoff simulation; built once per call and never mutated."""

    payoff_time: int
    total_interest_paid: Decimal
    total_original_balance: Decimal
    total_paid: Decimal
    schedule: tuple[PayoffScheduleEntry, ...]
    strategy: PayoffStrategy

    @property
    def paid_off(self) -> bool:
        """False when the month cap stopped the run with debts still active."""

        if not self.schedule:
            return True
        return all(snap.balance <= RETIRED_THRESHOLD for snap in self.schedule[-1].debts)

    def to_dict(self, *, include_schedule: bool = True) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "strategy": self.strategy.value,
            "payoff_time": self.payoff_time,
            "total_interest_paid": money_float(self.total_interest_paid),
            "total_original_balance": money_float(self.total_original_balance),
            "total_paid": money_float(self.total_paid),
            "paid_off": self.paid_off,
        }
        if include_schedule:
            payload["schedule"] = [entry.to_dict() for entry in self.schedule]
        return payload


@dataclass(slots=True)
class _ActiveDebt:
    debt: Debt
    balance: Decimal = field(default=_ZERO)


def priority_order(debts: Iterable[Debt], strategy: PayoffStrategy | str) -> list[Debt]:
    """Return debts sorted by payoff priority; ties keep their input order."""

    strategy = PayoffStrategy.parse(strategy)
    if strategy is PayoffStrategy.AVALANCHE:
        # Highest APR first. ``reverse=True`` keeps the sort stable.
        return sorted(debts, key=lambda d: d.interest_rate, reverse=True)
    return sorted(debts, key=lambda d: d.balance)


def _monthly_interest(balance: Decimal, annual_rate: Decimal) -> Decimal:
    interest = balance * annual_rate / _HUNDRED / _MONTHS_PER_YEAR
    return _cents(interest)


def simulate(
    debts: Sequence[Debt],
    extra_payment: Decimal | float | int | str,
    strategy: PayoffStrategy | str,
) -> Optional[SimulationResult]:
    """Simulate month-by-month repayment until every debt is retired.

    Each month every active debt accrues one month of interest and receives
    its minimum payment (the balance is clamped at zero). The extra payment
    then goes to the first active debt in priority order only; whatever it
    does not need is not rolled to the next debt. Debts at or below one cent
    leave the active set after the month is recorded. The run stops after
    ``MAX_MONTHS`` entries even when balances never shrink.

    Returns ``None`` for an empty debt list.
    """

    if not debts:
        return None

    strategy = PayoffStrategy.parse(strategy)
    extra = to_money(extra_payment)
    active = [_ActiveDebt(debt=d, balance=d.balance) for d in priority_order(debts, strategy)]

    logger.debug(
        "Starting payoff simulation",
        extra={"debt_count": len(active), "strategy": strategy.value, "extra_payment": str(extra)},
    )

    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        schedule: list[PayoffScheduleEntry] = []
        total_interest = _ZERO
        month = 0

        while active and month < MAX_MONTHS:
            month += 1

            for item in active:
                interest = _monthly_interest(item.balance, item.debt.interest_rate)
                total_interest += interest
                item.balance = max(_ZERO, item.balance + interest - item.debt.min_payment)

            if extra > 0:
                priority = active[0]
                priority.balance -= min(extra, priority.balance)

            schedule.append(
                PayoffScheduleEntry(
                    month=month,
                    total_balance=sum((item.balance for item in active), _ZERO),
                    debts=tuple(
                        DebtSnapshot(id=item.debt.id, name=item.debt.name, balance=item.balance)
                        for item in active
                    ),
                )
            )

            active = [item for item in active if item.balance > RETIRED_THRESHOLD]

        if active:
            logger.warning(
                "Payoff simulation hit the month cap",
                extra={"max_months": MAX_MONTHS, "remaining_debts": len(active)},
            )

        total_original = sum((d.balance for d in debts), _ZERO)
        total_paid = total_original + total_interest

    result = SimulationResult(
        payoff_time=len(schedule),
        total_interest_paid=total_interest,
        total_original_balance=total_original,
        total_paid=total_paid,
        schedule=tuple(schedule),
        strategy=strategy,
    )
    logger.info(
        "Payoff simulation finished",
        extra={
            "strategy": strategy.value,
            "months": result.payoff_time,
            "total_interest": str(result.total_interest_paid),
        },
    )
    return result


def avalanche_schedule(
    *, debts: Sequence[Debt], extra_payment: Any = 0
) -> Optional[SimulationResult]:
    """Return payoff simulation prioritizing highest APR first."""
    return simulate(debts, extra_payment, PayoffStrategy.AVALANCHE)


def snowball_schedule(
    *, debts: Sequence[Debt], extra_payment: Any = 0
) -> Optional[SimulationResult]:
    """Return payoff simulation prioritizing smallest balances first."""
    return simulate(debts, extra_payment, PayoffStrategy.SNOWBALL)


@dataclass(frozen=True, slots=True)
class StrategyComparison:
    """Side-by-side avalanche and snowball outcomes for the same inputs."""

    avalanche: SimulationResult
    snowball: SimulationResult

    @property
    def recommended(self) -> PayoffStrategy:
        """Cheaper strategy; fewer months breaks ties, then avalanche."""

        a, s = self.avalanche, self.snowball
        if (s.total_interest_paid, s.payoff_time) < (a.total_interest_paid, a.payoff_time):
            return PayoffStrategy.SNOWBALL
        return PayoffStrategy.AVALANCHE

    @property
    def interest_saved(self) -> Decimal:
        return abs(self.avalanche.total_interest_paid - self.snowball.total_interest_paid)

    @property
    def months_saved(self) -> int:
        return abs(self.avalanche.payoff_time - self.snowball.payoff_time)

    def to_dict(self) -> dict[str, Any]:
        return {
            "avalanche": self.avalanche.to_dict(include_schedule=False),
            "snowball": self.snowball.to_dict(include_schedule=False),
            "recommended": self.recommended.value,
            "interest_saved": money_float(self.interest_saved),
            "months_saved": self.months_saved,
        }


def compare_strategies(
    *, debts: Sequence[Debt], extra_payment: Any = 0
) -> Optional[StrategyComparison]:
    """Run both strategies over the same debts."""

    avalanche = avalanche_schedule(debts=debts, extra_payment=extra_payment)
    snowball = snowball_schedule(debts=debts, extra_payment=extra_payment)
    if avalanche is None or snowball is None:
        return None
    return StrategyComparison(avalanche=avalanche, snowball=snowball)


def schedule_summary(result: Optional[SimulationResult]) -> tuple[int, float, float]:
    """Return (months, total_interest, total_paid) for display."""

    if result is None:
        return 0, 0.0, 0.0
    return (
        result.payoff_time,
        money_float(result.total_interest_paid),
        money_float(result.total_paid),
    )


DEFAULT_EXTRA_PAYMENT = Decimal("200")
DEFAULT_STRATEGY = PayoffStrategy.AVALANCHE


def default_debts() -> list[Debt]:
    """Example debts the payoff calculator starts with."""

    return [
        Debt(id=1, name="Credit Card 1", balance=Decimal("5000"), min_payment=Decimal("150"),
             interest_rate=Decimal("18.99")),
        Debt(id=2, name="Credit Card 2", balance=Decimal("3000"), min_payment=Decimal("75"),
             interest_rate=Decimal("22.99")),
        Debt(id=3, name="Personal Loan", balance=Decimal("10000"), min_payment=Decimal("250"),
             interest_rate=Decimal("12.99")),
    ]


__all__ = [
    "MAX_MONTHS",
    "Debt",
    "DebtSnapshot",
    "PayoffScheduleEntry",
    "PayoffStrategy",
    "SimulationResult",
    "StrategyComparison",
    "avalanche_schedule",
    "compare_strategies",
    "default_debts",
    "priority_order",
    "schedule_summary",
    "simulate",
    "snowball_schedule",
]

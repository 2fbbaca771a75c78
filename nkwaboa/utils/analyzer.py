from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Dict, Iterable, NamedTuple, Optional, Tuple

from nkwaboa.models.transaction import BankAccount, Transaction

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class InvalidArgumentError(ValueError):
    """Raised when an analysis is called with an argument it cannot work with."""


class MonthKey(NamedTuple):
    """Calendar month used to bucket transactions. Sorts chronologically."""

    year: int
    month: int

    @classmethod
    def from_date(cls, value: date) -> "MonthKey":
        return cls(value.year, value.month)

    def next(self) -> "MonthKey":
        if self.month == 12:
            return MonthKey(self.year + 1, 1)
        return MonthKey(self.year, self.month + 1)

    @property
    def label(self) -> str:
        return f"{MONTH_ABBREVIATIONS[self.month - 1]}-{self.year}"


@dataclass
class MonthBucket:
    """Expense and income totals for a single month, both stored as magnitudes."""

    expense_total: float = 0.0
    income_total: float = 0.0

    @property
    def net(self) -> float:
        return self.income_total - self.expense_total

    def to_dict(self) -> Dict[str, float]:
        data = asdict(self)
        data["net"] = self.net
        return data


@dataclass
class BudgetVariance:
    budget: float
    actual_expenses: float

    @property
    def variance(self) -> float:
        return self.budget - self.actual_expenses

    @property
    def abs_variance(self) -> float:
        return abs(self.variance)

    @property
    def status(self) -> str:
        return "Under Budget" if self.variance >= 0 else "Over Budget"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.update(variance=self.variance, abs_variance=self.abs_variance, status=self.status)
        return data


@dataclass
class MaterialImpact:
    """Share of total expense cost attributable to one category."""

    category: str
    material_cost: float
    other_costs: float
    transaction_count: int

    @property
    def total_costs(self) -> float:
        return self.material_cost + self.other_costs

    @property
    def percentage(self) -> float:
        total = self.total_costs
        if total <= 0:
            return 0.0
        return self.material_cost / total * 100

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["percentage"] = self.percentage
        return data


class FinancialAnalyzer:
    """
    Cash-flow analytics over a fixed snapshot of transactions.

    The analyzer copies the given sequences on construction and never mutates
    them, so every method is a pure read over the same data and can be called
    repeatedly (or from several threads) with identical results.
    """

    def __init__(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        bank_accounts: Optional[Iterable[BankAccount]] = None,
    ) -> None:
        self._transactions: Tuple[Transaction, ...] = tuple(t for t in (transactions or ()) if t is not None)
        # Reserved for reconciliation against expenditures; no analysis reads it.
        self._bank_accounts: Tuple[BankAccount, ...] = tuple(bank_accounts or ())

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self._transactions

    @property
    def bank_accounts(self) -> Tuple[BankAccount, ...]:
        return self._bank_accounts

    def monthly_cash_flow(self) -> Dict[MonthKey, MonthBucket]:
        buckets: Dict[MonthKey, MonthBucket] = defaultdict(MonthBucket)
        for txn in self._transactions:
            if txn.date is None:
                continue
            bucket = buckets[MonthKey.from_date(txn.date)]
            if txn.amount < 0:
                bucket.expense_total += abs(txn.amount)
            else:
                bucket.income_total += txn.amount
        return {key: buckets[key] for key in sorted(buckets)}

    def calculate_burn_rate(self) -> float:
        """Average monthly expense total across all months present in the data."""
        monthly = self.monthly_cash_flow()
        if not monthly:
            return 0.0
        total_expenses = sum(bucket.expense_total for bucket in monthly.values())
        return total_expenses / len(monthly)

    def forecast_cash_needs(self, months_to_project: int, today: Optional[date] = None) -> Dict[MonthKey, float]:
        """
        Flat projection of the current burn rate over the months following
        ``today`` (defaults to the current date).
        """
        if months_to_project <= 0:
            return {}

        burn_rate = self.calculate_burn_rate()
        month = MonthKey.from_date(today or date.today())
        forecast: Dict[MonthKey, float] = {}
        for _ in range(months_to_project):
            month = month.next()
            forecast[month] = burn_rate
        return forecast

    def profitability_by_category(self) -> Dict[str, float]:
        totals: Dict[str, float] = defaultdict(float)
        for txn in self._transactions:
            if txn.category is None:
                continue
            totals[txn.category] += txn.amount
        return dict(totals)

    def total_expenses(self) -> float:
        return sum(abs(txn.amount) for txn in self._transactions if txn.amount < 0)

    def total_expenditure(self) -> float:
        return sum(txn.amount for txn in self._transactions)

    def compare_budget_vs_actuals(self, budget: float) -> BudgetVariance:
        return BudgetVariance(budget=budget, actual_expenses=self.total_expenses())

    def analyze_material_impact(self, material_category: Optional[str]) -> MaterialImpact:
        if material_category is None:
            raise InvalidArgumentError("Invalid material category")

        target = material_category.casefold()
        material_cost = 0.0
        other_costs = 0.0
        count = 0
        for txn in self._transactions:
            if txn.amount >= 0:
                continue
            if txn.category is not None and txn.category.casefold() == target:
                material_cost += abs(txn.amount)
                count += 1
            else:
                other_costs += abs(txn.amount)

        return MaterialImpact(
            category=material_category,
            material_cost=material_cost,
            other_costs=other_costs,
            transaction_count=count,
        )

    def category_expense_totals(self) -> Dict[str, float]:
        totals: Dict[str, float] = defaultdict(float)
        for txn in self._transactions:
            if txn.category is None or txn.amount >= 0:
                continue
            totals[txn.category] += abs(txn.amount)
        return dict(totals)

    def overspending_categories(self, limits: Dict[str, float]) -> Dict[str, float]:
        """Categories whose expense total exceeds their limit."""
        if not limits:
            return {}

        totals = self.category_expense_totals()
        return {
            cat: amount
            for cat, amount in totals.items()
            if cat in limits and amount > limits[cat]
        }

    def generate_cash_flow_report(self, currency: Optional[str] = None) -> str:
        from nkwaboa.utils import report

        return report.format_cash_flow_report(
            self.monthly_cash_flow(), self.calculate_burn_rate(), currency=currency
        )

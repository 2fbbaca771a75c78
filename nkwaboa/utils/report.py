"""
Plain-text rendering of analyzer results.
All rounding of monetary figures happens here.
"""
from typing import Dict, Optional

from nkwaboa.core.config import settings
from nkwaboa.utils.analyzer import BudgetVariance, MaterialImpact, MonthBucket, MonthKey

NO_DATA_MESSAGE = "No expenditure data available"
RULE = "-----------------------------------------------"


def _money(amount: float, currency: str) -> str:
    return f"{currency}{amount:.2f}"


def format_cash_flow_report(
    monthly: Dict[MonthKey, MonthBucket],
    burn_rate: float,
    currency: Optional[str] = None,
) -> str:
    if not monthly:
        return NO_DATA_MESSAGE

    currency = currency if currency is not None else settings.CURRENCY_SYMBOL
    lines = [
        "Monthly Cash Flow Report",
        RULE,
        "Month-Year\tExpenses\tIncome\t\tNet",
        RULE,
    ]
    for month, bucket in monthly.items():
        lines.append(
            "\t".join([
                month.label,
                _money(bucket.expense_total, currency),
                _money(bucket.income_total, currency),
                _money(bucket.net, currency),
            ])
        )
    lines.append("")
    lines.append(f"Average Monthly Burn Rate: {_money(burn_rate, currency)}")
    return "\n".join(lines)


def format_budget_variance(result: BudgetVariance, currency: Optional[str] = None) -> str:
    currency = currency if currency is not None else settings.CURRENCY_SYMBOL
    return (
        f"Budget: {_money(result.budget, currency)}\n"
        f"Actual Expenses: {_money(result.actual_expenses, currency)}\n"
        f"Variance: {_money(result.abs_variance, currency)} ({result.status})"
    )


def format_material_impact(result: MaterialImpact, currency: Optional[str] = None) -> str:
    currency = currency if currency is not None else settings.CURRENCY_SYMBOL
    return (
        f"Material: {result.category}\n"
        f"Total Cost: {_money(result.material_cost, currency)} ({result.transaction_count} transactions)\n"
        f"Percentage of Total Costs: {result.percentage:.1f}%"
    )

from __future__ import annotations

from decimal import ROUND_CEILING, Decimal

from domain.errors import UnsustainableBudget
from domain.schemas import GoalProjection

ACHIEVABLE_NOW_MESSAGE = "You can achieve this goal immediately with your current savings rate!"
UNSUSTAINABLE_MESSAGE = "Your monthly expenses exceed your income. Consider reviewing your budget."


def project_goal(target_amount: Decimal, monthly_savings_rate: Decimal) -> GoalProjection:
    """
    Months needed to reach `target_amount` at `monthly_savings_rate`.

    Raises UnsustainableBudget when the rate is zero or negative and ValueError for a
    non-positive target.
    """
    target_amount = Decimal(str(target_amount))
    monthly_savings_rate = Decimal(str(monthly_savings_rate))
    if target_amount <= 0:
        raise ValueError("target_amount must be > 0")
    if monthly_savings_rate <= 0:
        raise UnsustainableBudget(monthly_savings_rate)

    if target_amount <= monthly_savings_rate:
        return GoalProjection(
            target_amount=target_amount,
            monthly_savings_rate=monthly_savings_rate,
            status="achievable_now",
            months_required=0,
            message=ACHIEVABLE_NOW_MESSAGE,
        )

    months = int((target_amount / monthly_savings_rate).to_integral_value(rounding=ROUND_CEILING))
    return GoalProjection(
        target_amount=target_amount,
        monthly_savings_rate=monthly_savings_rate,
        status="projected",
        months_required=months,
        message=(
            f"To reach your goal of ₹{target_amount:,}, you'll need approximately "
            f"{months} months at your current savings rate."
        ),
    )


def project_goal_or_guidance(target_amount: Decimal, monthly_savings_rate: Decimal) -> GoalProjection:
    try:
        return project_goal(target_amount, monthly_savings_rate)
    except UnsustainableBudget as exc:
        return GoalProjection(
            target_amount=Decimal(str(target_amount)),
            monthly_savings_rate=exc.monthly_savings_rate,
            status="unsustainable",
            months_required=None,
            message=UNSUSTAINABLE_MESSAGE,
        )

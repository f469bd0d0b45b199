from __future__ import annotations

import unittest
from decimal import Decimal

from analytics.goal_projection import (
    ACHIEVABLE_NOW_MESSAGE,
    UNSUSTAINABLE_MESSAGE,
    project_goal,
    project_goal_or_guidance,
)
from domain.errors import UnsustainableBudget


class ProjectGoalTests(unittest.TestCase):
    def test_months_required_is_ceiling(self) -> None:
        projection = project_goal(Decimal("100000"), Decimal("20000"))

        self.assertEqual(projection.status, "projected")
        self.assertEqual(projection.months_required, 5)
        self.assertIn("5 months", projection.message)

    def test_partial_month_rounds_up(self) -> None:
        self.assertEqual(project_goal(Decimal("100001"), Decimal("20000")).months_required, 6)

    def test_negative_rate_is_unsustainable(self) -> None:
        with self.assertRaises(UnsustainableBudget) as ctx:
            project_goal(Decimal("100000"), Decimal("-5000"))
        self.assertEqual(ctx.exception.monthly_savings_rate, Decimal("-5000"))

    def test_zero_rate_is_unsustainable(self) -> None:
        with self.assertRaises(UnsustainableBudget):
            project_goal(Decimal("100000"), Decimal("0"))

    def test_target_within_one_month_is_achievable_now(self) -> None:
        for target in ("15000", "20000"):
            projection = project_goal(Decimal(target), Decimal("20000"))
            self.assertEqual(projection.status, "achievable_now")
            self.assertEqual(projection.months_required, 0)
            self.assertEqual(projection.message, ACHIEVABLE_NOW_MESSAGE)

    def test_non_positive_target_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            project_goal(Decimal("0"), Decimal("20000"))

    def test_int_inputs_are_accepted(self) -> None:
        self.assertEqual(project_goal(90000, 30000).months_required, 3)


class ProjectGoalOrGuidanceTests(unittest.TestCase):
    def test_unsustainable_budget_becomes_guidance(self) -> None:
        projection = project_goal_or_guidance(Decimal("100000"), Decimal("-5000"))

        self.assertEqual(projection.status, "unsustainable")
        self.assertIsNone(projection.months_required)
        self.assertEqual(projection.message, UNSUSTAINABLE_MESSAGE)
        self.assertEqual(projection.monthly_savings_rate, Decimal("-5000"))

    def test_sustainable_budget_passes_through(self) -> None:
        self.assertEqual(project_goal_or_guidance(Decimal("100000"), Decimal("20000")).months_required, 5)


if __name__ == "__main__":
    unittest.main()

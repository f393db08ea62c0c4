# -*- coding: utf-8 -*-
"""Daily dashboard view: goal progress, suggestions and streak."""

from __future__ import annotations

from typing import List, Optional

from .models import CalorieGoals, DashboardResponse, DayStats
from .weekly import has_data, logging_streak

GOAL_MESSAGES = {
    "Lose": "Cut-focused plan: prioritize protein + fiber.",
    "Gain": "Surplus plan: add clean calories + strength meals.",
    "Maintain": "Maintain plan: keep steady intake and macros.",
}


def smart_suggestion(remaining_calories: float, protein_deficit: float) -> str:
    if remaining_calories > 250:
        if protein_deficit > 20:
            return "You have calories left and are low on protein. Try Greek yogurt + almonds."
        return "You have room left. A balanced snack like hummus + veggies works well."
    return "Great job staying close to your goal today."


def goal_message(goal: Optional[str]) -> str:
    return GOAL_MESSAGES.get(goal or "Maintain", GOAL_MESSAGES["Maintain"])


def build_dashboard(
    days: List[DayStats],
    goals: CalorieGoals,
    *,
    day_index: int,
    today_index: int,
    goal: Optional[str] = None,
) -> DashboardResponse:
    day = days[day_index]
    consumed = day.calories
    remaining = max(0.0, goals.calorie_goal - consumed)
    protein_deficit = max(0.0, goals.protein_goal - day.protein)
    progress = min(1.0, consumed / goals.calorie_goal) if goals.calorie_goal else 0.0
    goal_label = goal if goal in GOAL_MESSAGES else "Maintain"
    return DashboardResponse(
        date=day.date,
        day_index=day_index,
        goals=goals,
        consumed=consumed,
        remaining=round(remaining, 1),
        protein_deficit=round(protein_deficit, 1),
        progress=round(progress, 3),
        over_goal=consumed > goals.calorie_goal,
        streak=logging_streak(days, today_index),
        has_data=has_data(days),
        suggestion=smart_suggestion(remaining, protein_deficit),
        goal=goal_label,
        goal_message=goal_message(goal_label),
        day=day,
    )

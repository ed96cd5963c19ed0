"""
Progress tracking derived from a user's meal plans and weight logs.
"""

from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from domain.enums import ProgressPeriod
from domain.mappers.user_mapper import UserMapper
from domain.models import User, MealPlan, WeightLog
from domain.schemas.progress_schemas import WeightLogCreate
from repositories import MealPlanRepository, ProfileRepository, WeightLogRepository

logger = logging.getLogger("nutriplan.progress")

PERIOD_DAYS = {
    ProgressPeriod.WEEK: 7,
    ProgressPeriod.MONTH: 30,
    ProgressPeriod.YEAR: 365,
}

ACHIEVEMENTS = (
    ("first_meal_plan", "First Meal Plan", "Created your first meal plan"),
    ("ai_explorer", "AI Explorer", "Generated a meal plan with AI"),
    ("week_warrior", "Week Warrior", "Completed 7 meal plans"),
    ("consistency_king", "Consistency King", "Planned meals 10 days in a row"),
)

_MACROS = ("calories", "protein", "carbs", "fat")


def _created_on(plan: MealPlan) -> Optional[date]:
    created = plan.created_at
    if isinstance(created, datetime):
        return created.date()
    return created


def _streaks(days: Iterable[date], today: date) -> Tuple[int, int]:
    """
    (current, longest) runs of consecutive days.

    The current run must end today or yesterday, otherwise it is zero.
    """
    ordered = sorted(set(d for d in days if d is not None))
    if not ordered:
        return 0, 0

    longest = run = 1
    for previous, day in zip(ordered, ordered[1:]):
        run = run + 1 if day - previous == timedelta(days=1) else 1
        longest = max(longest, run)

    current = 0
    if today - ordered[-1] <= timedelta(days=1):
        current = 1
        for previous, day in zip(reversed(ordered[:-1]), reversed(ordered)):
            if day - previous != timedelta(days=1):
                break
            current += 1
    return current, longest


def _average(values: List[float]) -> float:
    return round(sum(values) / len(values), 2) if values else 0


class ProgressService:
    """Overview, weight, nutrition trend, achievements and streaks"""

    @staticmethod
    def _plans(db: Session, user: User) -> List[MealPlan]:
        return MealPlanRepository(db).all_for_user(user.id)

    @staticmethod
    def streak(db: Session, user: User) -> Dict[str, int]:
        days = [_created_on(p) for p in ProgressService._plans(db, user)]
        current, longest = _streaks(days, date.today())
        return {"currentStreak": current, "longestStreak": longest}

    @staticmethod
    def overview(db: Session, user: User) -> Dict[str, Any]:
        plans = ProgressService._plans(db, user)
        today = date.today()
        started = [p for p in plans if p.start_date <= today]
        completed = [p for p in started if p.end_date < today]
        current, _ = _streaks([_created_on(p) for p in plans], today)
        return {
            "goalCompletion": round(len(completed) / len(started) * 100) if started else 0,
            "streakDays": current,
            "totalMealPlans": len(plans),
            "averageCalories": round(
                _average([p.total_calories for p in plans if p.total_calories is not None])
            ),
            "aiGeneratedPlans": sum(1 for p in plans if p.is_ai_generated),
        }

    @staticmethod
    def weight(db: Session, user: User) -> Dict[str, Any]:
        """
        Weight summary.

        ``progress`` is the share of the distance from the starting weight to
        the target already covered, clamped to 0-100.
        """
        history = WeightLogRepository(db).history(user.id)
        profile = ProfileRepository(db).get_by_user_id(user.id)
        profile_weight = profile.weight if profile else None
        target = profile.target_weight if profile else None

        current = history[-1].weight if history else profile_weight
        starting = history[0].weight if history else profile_weight

        progress = 0
        if None not in (current, starting, target) and starting != target:
            progress = (starting - current) / (starting - target) * 100
            progress = round(min(max(progress, 0), 100))

        return {
            "currentWeight": current,
            "startingWeight": starting,
            "targetWeight": target,
            "progress": progress,
            "history": [UserMapper.weight_log_to_dict(log) for log in history],
        }

    @staticmethod
    def log_weight(db: Session, user: User, data: WeightLogCreate) -> WeightLog:
        log = WeightLogRepository(db).create(
            WeightLog(
                user_id=user.id,
                weight=data.weight,
                logged_on=data.logged_on or date.today(),
                notes=data.notes,
            )
        )
        logger.info(f"weight_logged user_id={user.id} weight={data.weight} on={log.logged_on}")
        return log

    @staticmethod
    def nutrition(
        db: Session, user: User, period: ProgressPeriod = ProgressPeriod.WEEK
    ) -> Dict[str, Any]:
        """Average plan macros over plans created in the period, plus a per-day breakdown"""
        since = date.today() - timedelta(days=PERIOD_DAYS[period] - 1)
        plans = [
            p for p in ProgressService._plans(db, user)
            if _created_on(p) is not None and _created_on(p) >= since
        ]

        by_day: Dict[date, List[MealPlan]] = {}
        for plan in plans:
            by_day.setdefault(_created_on(plan), []).append(plan)

        def averages(group: List[MealPlan]) -> Dict[str, float]:
            return {
                m: _average(
                    [getattr(p, f"total_{m}") for p in group if getattr(p, f"total_{m}") is not None]
                )
                for m in _MACROS
            }

        return {
            "period": period.value,
            "startDate": since,
            "endDate": date.today(),
            "planCount": len(plans),
            "averages": averages(plans),
            "daily": [
                {"date": day, "planCount": len(group), **averages(group)}
                for day, group in sorted(by_day.items())
            ],
        }

    @staticmethod
    def achievements(db: Session, user: User) -> Dict[str, Any]:
        plans = ProgressService._plans(db, user)
        today = date.today()
        current, longest = _streaks([_created_on(p) for p in plans], today)
        earned = {
            "first_meal_plan": len(plans) >= 1,
            "ai_explorer": any(p.is_ai_generated for p in plans),
            "week_warrior": sum(1 for p in plans if p.end_date < today) >= 7,
            "consistency_king": max(current, longest) >= 10,
        }
        badges = [
            {"id": key, "title": title, "description": text, "unlocked": earned[key]}
            for key, title, text in ACHIEVEMENTS
        ]
        return {
            "achievements": badges,
            "unlocked": [b for b in badges if b["unlocked"]],
            "unlockedCount": sum(1 for b in badges if b["unlocked"]),
        }

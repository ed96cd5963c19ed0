"""
Tests for progress tracking: weight history, nutrition trends, streaks and
achievements derived from meal plans.
"""

from datetime import date, datetime, time, timedelta

import pytest
from sqlalchemy.orm import Session

from test_fixtures import (
    client,
    db_session,
    make_user,
    make_profile,
    make_meal_plan,
    auth_headers,
)
from services.progress_service import _streaks


def _days_ago(n: int) -> datetime:
    return datetime.combine(date.today() - timedelta(days=n), time(12, 0))


# =============================================================================
# STREAK CALCULATION
# =============================================================================


@pytest.mark.parametrize(
    "offsets,expected",
    [
        ([], (0, 0)),
        ([0], (1, 1)),
        ([0, 1, 2], (3, 3)),
        ([1, 2], (2, 2)),
        ([2, 3, 4, 5], (0, 4)),
        ([0, 0, 1], (2, 2)),
        ([0, 2, 3, 4], (1, 3)),
    ],
)
def test_streaks(offsets, expected):
    today = date(2026, 3, 10)
    days = [today - timedelta(days=n) for n in offsets]
    assert _streaks(days, today) == expected


# =============================================================================
# WEIGHT
# =============================================================================


def test_log_weight_and_progress(db_session: Session):
    """
    Verifies:
    - Logging returns 201 and defaults logged_on to today
    - Starting weight is the oldest log, current the newest
    - progress is the share of the way to the target weight
    """
    user = make_user(db_session)
    make_profile(db_session, user, weight=78.0, target_weight=72.0)
    headers = auth_headers(user)

    r = client.post(
        "/api/progress/weight",
        headers=headers,
        json={"weight": 80, "logged_on": str(date.today() - timedelta(days=14))},
    )
    assert r.status_code == 201
    assert r.json()["message"] == "Weight logged successfully"

    r = client.post("/api/progress/weight", headers=headers, json={"weight": 76, "notes": "after holiday"})
    assert r.json()["data"]["logged_on"] == date.today().isoformat()

    data = client.get("/api/progress/weight", headers=headers).json()["data"]
    assert data["startingWeight"] == 80
    assert data["currentWeight"] == 76
    assert data["targetWeight"] == 72
    assert data["progress"] == 50
    assert [h["weight"] for h in data["history"]] == [80, 76]
    assert data["history"][1]["notes"] == "after holiday"


def test_weight_progress_is_clamped(db_session: Session):
    user = make_user(db_session)
    make_profile(db_session, user, weight=78.0, target_weight=72.0)
    headers = auth_headers(user)
    client.post("/api/progress/weight", headers=headers, json={"weight": 70})

    data = client.get("/api/progress/weight", headers=headers).json()["data"]
    assert data["startingWeight"] == 70
    assert data["progress"] == 0

    client.post("/api/progress/weight", headers=headers, json={"weight": 90})
    data = client.get("/api/progress/weight", headers=headers).json()["data"]
    assert (data["startingWeight"], data["currentWeight"]) == (70, 90)
    assert data["progress"] == 100


def test_weight_without_logs_uses_profile(db_session: Session):
    user = make_user(db_session)
    make_profile(db_session, user, weight=78.0, target_weight=72.0)

    data = client.get("/api/progress/weight", headers=auth_headers(user)).json()["data"]
    assert (data["currentWeight"], data["startingWeight"], data["progress"]) == (78, 78, 0)
    assert data["history"] == []


def test_weight_without_profile(db_session: Session):
    user = make_user(db_session)
    data = client.get("/api/progress/weight", headers=auth_headers(user)).json()["data"]
    assert data["currentWeight"] is None
    assert data["targetWeight"] is None
    assert data["progress"] == 0


def test_log_weight_validation(db_session: Session):
    user = make_user(db_session)
    r = client.post("/api/progress/weight", headers=auth_headers(user), json={"weight": 5})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "weight"

    assert client.post("/api/progress/weight", json={"weight": 70}).status_code == 401


# =============================================================================
# NUTRITION, OVERVIEW, ACHIEVEMENTS
# =============================================================================


def test_nutrition_period_averages(db_session: Session):
    """
    Verifies:
    - Only plans created inside the period count
    - Averages skip plans without totals
    - The daily breakdown is grouped by creation day, oldest first
    """
    user = make_user(db_session)
    make_meal_plan(db_session, user, name="Old", created_at=_days_ago(20), total_calories=3000)
    make_meal_plan(
        db_session, user, name="A", created_at=_days_ago(2), total_calories=1800, total_protein=120
    )
    make_meal_plan(
        db_session, user, name="B", created_at=_days_ago(2), total_calories=2200, total_protein=140
    )
    make_meal_plan(db_session, user, name="C", created_at=_days_ago(0))
    headers = auth_headers(user)

    data = client.get("/api/progress/nutrition", headers=headers).json()["data"]
    assert data["period"] == "week"
    assert data["planCount"] == 3
    assert data["averages"]["calories"] == 2000
    assert data["averages"]["protein"] == 130
    assert data["averages"]["fat"] == 0
    assert [d["planCount"] for d in data["daily"]] == [2, 1]
    assert data["daily"][0]["date"] == (date.today() - timedelta(days=2)).isoformat()

    data = client.get("/api/progress/nutrition", headers=headers, params={"period": "month"}).json()["data"]
    assert data["planCount"] == 4
    assert data["averages"]["calories"] == pytest.approx(2333.33)

    r = client.get("/api/progress/nutrition", headers=headers, params={"period": "decade"})
    assert r.status_code == 400


def test_overview(db_session: Session):
    user = make_user(db_session)
    today = date.today()
    make_meal_plan(db_session, user, start_date=today - timedelta(days=20), created_at=_days_ago(1), total_calories=1900)
    make_meal_plan(
        db_session,
        user,
        start_date=today - timedelta(days=3),
        is_ai_generated=True,
        created_at=_days_ago(0),
        total_calories=2100,
    )
    make_meal_plan(db_session, user, start_date=today + timedelta(days=7), created_at=_days_ago(0))

    data = client.get("/api/progress", headers=auth_headers(user)).json()["data"]
    assert data == {
        "goalCompletion": 50,
        "streakDays": 2,
        "totalMealPlans": 3,
        "averageCalories": 2000,
        "aiGeneratedPlans": 1,
    }


def test_streak_endpoint(db_session: Session):
    user = make_user(db_session)
    for n in (0, 1, 2, 6, 7, 8, 9):
        make_meal_plan(db_session, user, created_at=_days_ago(n))

    data = client.get("/api/progress/streak", headers=auth_headers(user)).json()["data"]
    assert data == {"currentStreak": 3, "longestStreak": 4}


def test_achievements(db_session: Session):
    user = make_user(db_session)
    headers = auth_headers(user)

    data = client.get("/api/progress/achievements", headers=headers).json()["data"]
    assert data["unlockedCount"] == 0
    assert [a["id"] for a in data["achievements"]] == [
        "first_meal_plan",
        "ai_explorer",
        "week_warrior",
        "consistency_king",
    ]

    for n in range(10):
        make_meal_plan(
            db_session,
            user,
            start_date=date.today() - timedelta(days=30),
            created_at=_days_ago(n),
            is_ai_generated=(n == 0),
        )
    data = client.get("/api/progress/achievements", headers=headers).json()["data"]
    assert data["unlockedCount"] == 4
    assert {a["title"] for a in data["unlocked"]} == {
        "First Meal Plan",
        "AI Explorer",
        "Week Warrior",
        "Consistency King",
    }

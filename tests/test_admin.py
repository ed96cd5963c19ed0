"""
Tests for the admin surface: dashboard, users, moderation, the ingredient
catalogue, the AI audit log, suggestion moderation and sending suggestions.
"""

from datetime import date

import pytest
from sqlalchemy.orm import Session

from test_fixtures import (
    client,
    db_session,
    make_user,
    make_admin,
    make_profile,
    make_category,
    make_ingredient,
    make_recipe,
    make_meal_plan,
    make_suggestion,
    make_meal_suggestion,
    make_recipe_suggestion,
    auth_headers,
)
from domain.enums import AnalysisType, SuggestionStatus, SuggestionType
from domain.models import AIAnalysisLog, FoodCategory, Ingredient, Suggestion, User


# =============================================================================
# ACCESS
# =============================================================================


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/api/admin/dashboard"),
        ("get", "/api/admin/users"),
        ("get", "/api/admin/ai-logs"),
        ("get", "/api/admin/suggestions"),
        ("get", "/api/admin/user-suggestions/analytics"),
    ],
)
def test_admin_routes_reject_regular_users(db_session: Session, method, path):
    user = make_user(db_session)
    r = getattr(client, method)(path, headers=auth_headers(user))
    assert r.status_code == 403
    assert r.json()["message"] == "Admin access required"
    assert r.json()["error"]["code"] == "FORBIDDEN"

    assert getattr(client, method)(path).status_code == 401


def test_dashboard_counts(db_session: Session):
    admin = make_admin(db_session)
    sarah = make_user(db_session)
    make_user(db_session, profile_type="athlete", is_active=False)
    make_recipe(db_session, creator=sarah, view_count=9)
    make_recipe(db_session, title="Draft Curry", is_approved=False)
    make_meal_plan(db_session, sarah, is_ai_generated=True, total_calories=1800)
    make_meal_plan(db_session, sarah, name="Manual Week", total_calories=2200)
    make_suggestion(db_session, sarah)
    make_suggestion(db_session, sarah, status=SuggestionStatus.IMPLEMENTED)

    r = client.get("/api/admin/dashboard", headers=auth_headers(admin))
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["users"]["total"] == 3
    assert data["users"]["active"] == 2
    assert {k: data["recipes"][k] for k in ("total", "approved", "pending")} == {
        "total": 2,
        "approved": 1,
        "pending": 1,
    }
    assert data["mealPlans"] == {
        "total": 2,
        "aiGenerated": 1,
        "userCreated": 1,
        "avgCalories": 2000,
    }
    assert data["suggestions"] == {"pending": 1, "approved": 0, "rejected": 0, "implemented": 1}
    assert [r["title"] for r in data["popularRecipes"]] == ["Grilled Chicken Salad"]
    assert len(data["recentUsers"]) == 3


# =============================================================================
# USERS
# =============================================================================


def test_list_users_with_filters(db_session: Session):
    admin = make_admin(db_session)
    make_user(db_session)
    make_user(db_session, profile_type="athlete", is_active=False)
    headers = auth_headers(admin)

    r = client.get("/api/admin/users", headers=headers)
    body = r.json()
    assert body["pagination"]["limit"] == 20
    assert body["pagination"]["total"] == 3
    assert "password" not in body["data"][0]

    r = client.get("/api/admin/users", headers=headers, params={"role": "admin"})
    assert [u["full_name"] for u in r.json()["data"]] == ["Raj Patel"]

    r = client.get("/api/admin/users", headers=headers, params={"is_active": "false"})
    assert [u["first_name"] for u in r.json()["data"]] == ["Michael"]

    r = client.get("/api/admin/users", headers=headers, params={"search": "sarah"})
    assert [u["last_name"] for u in r.json()["data"]] == ["Martinez"]


def test_user_profile_with_activity_stats(db_session: Session):
    admin = make_admin(db_session)
    user = make_user(db_session)
    make_profile(db_session, user)
    make_recipe(db_session, creator=user)
    make_meal_plan(db_session, user)
    make_suggestion(db_session, user)

    r = client.get(f"/api/admin/users/{user.id}/profile", headers=auth_headers(admin))
    data = r.json()["data"]
    assert data["user"]["email"] == user.email
    assert data["profile"]["age"] == 32
    assert data["stats"] == {"mealPlans": 1, "recipes": 1, "reviews": 0, "suggestions": 1}

    r = client.get("/api/admin/users/99999/profile", headers=auth_headers(admin))
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"


def test_set_user_status(db_session: Session):
    """
    Verifies:
    - Deactivating a user locks them out of the API
    - An admin cannot deactivate their own account
    """
    admin = make_admin(db_session)
    user = make_user(db_session)
    headers = auth_headers(admin)

    r = client.put(f"/api/admin/users/{user.id}/status", headers=headers, json={"is_active": False})
    assert r.status_code == 200
    assert r.json()["message"] == "User deactivated successfully"
    assert r.json()["data"]["is_active"] is False
    assert client.get("/api/auth/profile", headers=auth_headers(user)).status_code == 401

    r = client.put(f"/api/admin/users/{admin.id}/status", headers=headers, json={"is_active": False})
    assert r.status_code == 400
    assert r.json()["message"] == "You cannot deactivate your own account"
    db_session.expire_all()
    assert db_session.get(User, admin.id).is_active is True


# =============================================================================
# RECIPE MODERATION AND AI LOGS
# =============================================================================


def test_pending_recipes_and_approval(db_session: Session):
    admin = make_admin(db_session)
    make_recipe(db_session, title="Approved Already")
    draft = make_recipe(db_session, title="Miso Salmon", is_approved=False)
    headers = auth_headers(admin)

    r = client.get("/api/admin/recipes/pending", headers=headers)
    assert [x["title"] for x in r.json()["data"]] == ["Miso Salmon"]

    r = client.put(
        f"/api/admin/recipes/{draft.id}/approve",
        headers=headers,
        json={"is_approved": True, "is_featured": True},
    )
    assert r.json()["message"] == "Recipe approved successfully"
    assert r.json()["data"]["is_featured"] is True

    featured = client.get("/api/recipes/featured").json()["data"]
    assert [x["title"] for x in featured] == ["Miso Salmon"]
    assert client.get("/api/admin/recipes/pending", headers=headers).json()["data"] == []

    r = client.put("/api/admin/recipes/99999/approve", headers=headers, json={"is_approved": False})
    assert r.status_code == 404


def test_ai_logs_listing(db_session: Session):
    admin = make_admin(db_session)
    user = make_user(db_session)
    db_session.add_all(
        [
            AIAnalysisLog(
                user_id=user.id,
                analysis_type=AnalysisType.MEAL_PLAN,
                prompt="plan prompt",
                response="{}",
                tokens_used=120,
                processing_time_ms=900,
            ),
            AIAnalysisLog(
                user_id=user.id,
                analysis_type=AnalysisType.RECIPE_GENERATION,
                prompt="recipe prompt",
                response="RuntimeError: quota",
                used_fallback=True,
            ),
        ]
    )
    db_session.commit()
    headers = auth_headers(admin)

    r = client.get("/api/admin/ai-logs", headers=headers)
    data = r.json()["data"]
    assert [log["analysis_type"] for log in data] == ["recipe_generation", "meal_plan"]
    assert data[0]["used_fallback"] is True
    assert data[0]["user_email"] == user.email

    r = client.get("/api/admin/ai-logs", headers=headers, params={"analysis_type": "meal_plan"})
    assert [log["tokens_used"] for log in r.json()["data"]] == [120]


# =============================================================================
# CATEGORIES AND INGREDIENTS
# =============================================================================


def test_category_crud(db_session: Session):
    admin = make_admin(db_session)
    headers = auth_headers(admin)

    r = client.post("/api/admin/categories", headers=headers, json={"name": "  Grains ", "color": "#d4a373"})
    assert r.status_code == 201
    category_id = r.json()["data"]["id"]
    assert r.json()["data"]["name"] == "Grains"

    dup = client.post("/api/admin/categories", headers=headers, json={"name": "grains"})
    assert dup.status_code == 409
    assert dup.json()["message"] == "Category with this name already exists"

    r = client.put(f"/api/admin/categories/{category_id}", headers=headers, json={"icon": "wheat"})
    assert r.json()["data"]["icon"] == "wheat"

    r = client.get("/api/admin/categories", headers=headers)
    assert r.json()["data"][0]["ingredient_count"] == 0

    r = client.delete(f"/api/admin/categories/{category_id}", headers=headers)
    assert r.json()["message"] == "Category deleted successfully"
    assert db_session.query(FoodCategory).count() == 0

    r = client.delete(f"/api/admin/categories/{category_id}", headers=headers)
    assert r.status_code == 404


def test_category_with_ingredients_cannot_be_deleted(db_session: Session):
    admin = make_admin(db_session)
    vegetables = make_category(db_session)
    make_ingredient(db_session, "Kale", category=vegetables)

    r = client.delete(f"/api/admin/categories/{vegetables.id}", headers=auth_headers(admin))
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot delete category that has ingredients"

    r = client.get("/api/admin/categories", headers=auth_headers(admin))
    assert r.json()["data"][0]["ingredient_count"] == 1


def test_ingredient_crud(db_session: Session):
    """
    Verifies:
    - Create with nutrition and category; names are unique case-insensitively
    - Unknown category ids are rejected with 400
    - Search and category filters apply to the listing
    - Ingredients used by recipes cannot be deleted
    """
    admin = make_admin(db_session)
    vegetables = make_category(db_session)
    headers = auth_headers(admin)

    r = client.post(
        "/api/admin/ingredients",
        headers=headers,
        json={
            "name": "Broccoli",
            "category_id": vegetables.id,
            "calories_per_100g": 34,
            "protein_per_100g": 2.8,
            "allergens": [],
            "vitamins": {"c": 89.2},
        },
    )
    assert r.status_code == 201
    broccoli = r.json()["data"]
    assert broccoli["category_name"] == "Vegetables"
    assert broccoli["vitamins"] == {"c": 89.2}

    assert client.post("/api/admin/ingredients", headers=headers, json={"name": "broccoli"}).status_code == 409

    r = client.post("/api/admin/ingredients", headers=headers, json={"name": "Quinoa", "category_id": 999})
    assert r.status_code == 400
    assert r.json()["message"] == "Category not found"

    make_ingredient(db_session, "Brown Rice")
    r = client.get("/api/admin/ingredients", headers=headers, params={"search": "broc"})
    assert [i["name"] for i in r.json()["data"]] == ["Broccoli"]
    r = client.get("/api/admin/ingredients", headers=headers, params={"category_id": vegetables.id})
    assert r.json()["pagination"]["total"] == 1

    r = client.put(
        f"/api/admin/ingredients/{broccoli['id']}", headers=headers, json={"name": "Tenderstem Broccoli"}
    )
    assert r.json()["data"]["name"] == "Tenderstem Broccoli"

    make_recipe(db_session, ingredients=[(db_session.get(Ingredient, broccoli["id"]), 200, "g")])
    r = client.delete(f"/api/admin/ingredients/{broccoli['id']}", headers=headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot delete ingredient that is used in recipes"

    r = client.delete("/api/admin/ingredients/99999", headers=headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Ingredient not found"


@pytest.mark.parametrize("kind", ["categories", "ingredients"])
def test_update_rejects_null_name(db_session: Session, kind):
    admin = make_admin(db_session)
    vegetables = make_category(db_session)
    kale = make_ingredient(db_session, "Kale", category=vegetables)
    row_id = vegetables.id if kind == "categories" else kale.id

    r = client.put(f"/api/admin/{kind}/{row_id}", headers=auth_headers(admin), json={"name": None})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"
    assert r.json()["errors"][0]["field"] == "name"

    db_session.expire_all()
    assert db_session.get(FoodCategory, vegetables.id).name == "Vegetables"
    assert db_session.get(Ingredient, kale.id).name == "Kale"


# =============================================================================
# MEAL PLANS
# =============================================================================


def test_meal_plan_listing_and_approval(db_session: Session):
    admin = make_admin(db_session)
    sarah = make_user(db_session)
    michael = make_user(db_session, profile_type="athlete")
    plan = make_meal_plan(db_session, sarah, name="Cutting Week")
    make_meal_plan(db_session, michael, name="Bulking Week", is_ai_generated=True)
    headers = auth_headers(admin)

    r = client.get("/api/admin/meal-plans", headers=headers)
    assert r.json()["pagination"]["total"] == 2

    r = client.get("/api/admin/meal-plans", headers=headers, params={"is_ai_generated": "true"})
    data = r.json()["data"]
    assert [p["name"] for p in data] == ["Bulking Week"]
    assert data[0]["creator_name"] == "Michael Chen"

    r = client.get("/api/admin/meal-plans", headers=headers, params={"user_id": sarah.id})
    assert [p["name"] for p in r.json()["data"]] == ["Cutting Week"]

    r = client.put(f"/api/admin/meal-plans/{plan.id}/approve", headers=headers, json={"is_approved": True})
    assert r.json()["message"] == "Meal plan approved successfully"
    assert r.json()["data"]["is_approved"] is True

    r = client.put("/api/admin/meal-plans/99999/approve", headers=headers, json={"is_approved": True})
    assert r.status_code == 404


# =============================================================================
# SUGGESTION MODERATION
# =============================================================================


def test_suggestion_status_and_delete(db_session: Session):
    admin = make_admin(db_session)
    user = make_user(db_session)
    suggestion = make_suggestion(db_session, user)
    headers = auth_headers(admin)

    r = client.put(
        f"/api/admin/suggestions/{suggestion.id}/status",
        headers=headers,
        json={"status": "approved", "admin_response": "Coming next sprint"},
    )
    assert r.json()["message"] == "Suggestion status updated successfully"
    assert r.json()["data"]["status"] == "approved"
    assert r.json()["data"]["admin_response"] == "Coming next sprint"

    r = client.get("/api/suggestions/approved", headers=auth_headers(user))
    assert [s["id"] for s in r.json()["data"]] == [suggestion.id]

    r = client.delete(f"/api/admin/suggestions/{suggestion.id}", headers=headers)
    assert r.json()["message"] == "Suggestion deleted successfully"
    assert db_session.query(Suggestion).count() == 0
    assert client.delete(f"/api/admin/suggestions/{suggestion.id}", headers=headers).status_code == 404


def test_suggestion_analytics(db_session: Session):
    admin = make_admin(db_session)
    user = make_user(db_session)
    voter = make_user(db_session, profile_type="athlete")
    quiet = make_suggestion(db_session, user, title="Quiet idea")
    busy = make_suggestion(
        db_session, user, title="Busy idea", suggestion_type=SuggestionType.MEAL_PLAN
    )
    for person in (user, voter):
        client.post(
            f"/api/suggestions/{busy.id}/interact",
            headers=auth_headers(person),
            json={"interaction_type": "upvote"},
        )

    r = client.get("/api/admin/suggestions/analytics", headers=auth_headers(admin))
    data = r.json()["data"]
    assert data["total"] == 2
    assert data["statusStats"]["pending"] == 2
    assert data["typeStats"] == {"recipe": 1, "meal_plan": 1}
    assert data["topSuggestions"][0]["title"] == "Busy idea"
    assert data["topSuggestions"][0]["upvotes"] == 2
    assert {s["id"] for s in data["recentSuggestions"]} == {quiet.id, busy.id}


# =============================================================================
# CURATED CATALOGUES
# =============================================================================


def test_curated_meal_crud_and_toggle(db_session: Session):
    admin = make_admin(db_session)
    headers = auth_headers(admin)

    r = client.post(
        "/api/admin/suggestions/meals",
        headers=headers,
        json={
            "title": "Protein Pancakes",
            "meal_type": "breakfast",
            "calories_per_serving": 420,
            "ingredients": [{"name": "oats", "amount": 60, "unit": "g"}],
            "is_featured": None,
        },
    )
    assert r.status_code == 201
    meal = r.json()["data"]
    assert meal["is_active"] is True
    assert meal["is_featured"] is False
    assert meal["created_by"] == admin.id

    r = client.put(f"/api/admin/suggestions/meals/{meal['id']}", headers=headers, json={"cuisine_type": "american"})
    assert r.json()["data"]["cuisine_type"] == "american"

    r = client.post(f"/api/admin/suggestions/meals/{meal['id']}/toggle-status", headers=headers)
    assert r.json()["data"] == {"id": meal["id"], "is_active": False}
    assert r.json()["message"] == "Meal suggestion deactivated successfully"

    r = client.get("/api/admin/suggestions/meals", headers=headers, params={"is_active": "false"})
    assert [m["title"] for m in r.json()["data"]] == ["Protein Pancakes"]

    r = client.delete(f"/api/admin/suggestions/meals/{meal['id']}", headers=headers)
    assert r.json()["message"] == "Meal suggestion deleted successfully"
    r = client.post(f"/api/admin/suggestions/meals/{meal['id']}/toggle-status", headers=headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Meal suggestion not found"


def test_curated_recipe_featured_toggle(db_session: Session):
    admin = make_admin(db_session)
    recipe = make_recipe_suggestion(db_session, admin)
    headers = auth_headers(admin)

    r = client.post(f"/api/admin/suggestions/recipes/{recipe.id}/toggle-featured", headers=headers)
    assert r.json()["data"] == {"id": recipe.id, "is_featured": True}
    assert r.json()["message"] == "Recipe suggestion featured successfully"

    r = client.post(f"/api/admin/suggestions/recipes/{recipe.id}/toggle-featured", headers=headers)
    assert r.json()["message"] == "Recipe suggestion unfeatured successfully"

    r = client.put(
        f"/api/admin/suggestions/recipes/{recipe.id}", headers=headers, json={"title": "Ok"}
    )
    assert r.status_code == 400


# =============================================================================
# SENDING SUGGESTIONS TO USERS
# =============================================================================


def test_send_meal_and_recipe_suggestions(db_session: Session):
    """
    Verifies:
    - Sent suggestions appear in the recipient's inbox
    - Only regular users can receive suggestions
    - The linked curated suggestion must exist and be active
    """
    admin = make_admin(db_session)
    user = make_user(db_session)
    other_admin = make_admin(db_session)
    oats = make_meal_suggestion(db_session, admin)
    retired = make_meal_suggestion(db_session, admin, title="Retired Toast", is_active=False)
    soup = make_recipe_suggestion(db_session, admin)
    headers = auth_headers(admin)

    r = client.post(
        "/api/admin/user-suggestions/meals",
        headers=headers,
        json={"user_id": user.id, "meal_suggestion_id": oats.id, "message": "Great pre-workout"},
    )
    assert r.status_code == 201
    assert r.json()["message"] == "Meal suggestion sent successfully"
    assert r.json()["data"]["user_email"] == user.email

    r = client.post(
        "/api/admin/user-suggestions/recipes",
        headers=headers,
        json={"user_id": user.id, "recipe_suggestion_id": soup.id},
    )
    assert r.status_code == 201

    inbox = client.get("/api/user-suggestions", headers=auth_headers(user)).json()
    assert inbox["pagination"]["total"] == 2

    r = client.post(
        "/api/admin/user-suggestions/meals",
        headers=headers,
        json={"user_id": other_admin.id, "meal_suggestion_id": oats.id},
    )
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"

    r = client.post(
        "/api/admin/user-suggestions/meals",
        headers=headers,
        json={"user_id": user.id, "meal_suggestion_id": retired.id},
    )
    assert r.status_code == 404
    assert r.json()["message"] == "Meal suggestion not found"

    r = client.get("/api/admin/user-suggestions", headers=headers, params={"suggestion_type": "meal"})
    assert r.json()["pagination"]["total"] == 1


def test_recipient_listing_counts(db_session: Session):
    admin = make_admin(db_session)
    sarah = make_user(db_session)
    michael = make_user(db_session, profile_type="athlete")
    make_profile(db_session, michael)
    oats = make_meal_suggestion(db_session, admin)
    client.post(
        "/api/admin/user-suggestions/meals",
        headers=auth_headers(admin),
        json={"user_id": sarah.id, "meal_suggestion_id": oats.id},
    )

    r = client.get("/api/admin/user-suggestions/users", headers=auth_headers(admin))
    rows = r.json()["data"]
    assert [u["first_name"] for u in rows] == ["Michael", "Sarah"]
    assert (rows[0]["has_profile"], rows[0]["suggestionCount"]) == (True, 0)
    assert (rows[1]["suggestionCount"], rows[1]["unreadCount"]) == (1, 1)

    r = client.get(
        "/api/admin/user-suggestions/users", headers=auth_headers(admin), params={"has_profile": "false"}
    )
    assert [u["first_name"] for u in r.json()["data"]] == ["Sarah"]


def test_weekly_suggestion_create_and_conflict(db_session: Session):
    admin = make_admin(db_session)
    user = make_user(db_session)
    oats = make_meal_suggestion(db_session, admin)
    headers = auth_headers(admin)
    payload = {
        "user_id": user.id,
        "week_start_date": "2026-03-02",
        "title": "High Protein Week",
        "total_calories": 14000,
        "items": [
            {"meal_type": "breakfast", "day_of_week": "monday", "meal_suggestion_id": oats.id},
            {"meal_type": "dinner", "day_of_week": "monday", "custom_meal_name": "Steak and Greens"},
        ],
    }

    r = client.post("/api/admin/user-suggestions/weekly", headers=headers, json=payload)
    assert r.status_code == 201
    assert r.json()["message"] == "Weekly meal suggestion created successfully"
    data = r.json()["data"]
    assert data["week_end_date"] == "2026-03-08"
    assert data["item_count"] == 2
    assert data["items"][0]["suggestion_title"] == "Overnight Oats"

    r = client.post("/api/admin/user-suggestions/weekly", headers=headers, json=payload)
    assert r.status_code == 409
    assert r.json()["message"] == "Weekly suggestion already exists for this user and week"

    r = client.put(
        f"/api/admin/user-suggestions/weekly/{data['id']}/status",
        headers=headers,
        json={"admin_notes": "Check in after week one"},
    )
    assert r.json()["data"]["admin_notes"] == "Check in after week one"
    assert r.json()["data"]["is_read"] is False


def test_status_patch_ignores_null_read_flag(db_session: Session):
    """
    Verifies:
    - A null is_read leaves the stored flag alone on single and weekly rows
    - is_accepted can still be cleared back to null
    """
    admin = make_admin(db_session)
    user = make_user(db_session)
    oats = make_meal_suggestion(db_session, admin)
    headers = auth_headers(admin)

    sent = client.post(
        "/api/admin/user-suggestions/meals",
        headers=headers,
        json={"user_id": user.id, "meal_suggestion_id": oats.id},
    ).json()["data"]
    weekly = client.post(
        "/api/admin/user-suggestions/weekly",
        headers=headers,
        json={
            "user_id": user.id,
            "week_start_date": "2026-03-02",
            "title": "Light Week",
            "items": [{"meal_type": "lunch", "day_of_week": "monday", "custom_meal_name": "Lentil Soup"}],
        },
    ).json()["data"]

    r = client.put(
        f"/api/admin/user-suggestions/{sent['id']}/status",
        headers=headers,
        json={"is_read": True, "is_accepted": True},
    )
    assert (r.json()["data"]["is_read"], r.json()["data"]["is_accepted"]) == (True, True)

    r = client.put(
        f"/api/admin/user-suggestions/{sent['id']}/status",
        headers=headers,
        json={"is_read": None, "is_accepted": None},
    )
    assert r.status_code == 200
    assert (r.json()["data"]["is_read"], r.json()["data"]["is_accepted"]) == (True, None)

    r = client.put(
        f"/api/admin/user-suggestions/weekly/{weekly['id']}/status",
        headers=headers,
        json={"is_read": None, "admin_notes": "Swap Friday dinner"},
    )
    assert r.status_code == 200
    assert r.json()["data"]["is_read"] is False
    assert r.json()["data"]["admin_notes"] == "Swap Friday dinner"


def test_user_suggestion_analytics(db_session: Session):
    admin = make_admin(db_session)
    sarah = make_user(db_session)
    michael = make_user(db_session, profile_type="athlete")
    oats = make_meal_suggestion(db_session, admin)
    soup = make_recipe_suggestion(db_session, admin)
    headers = auth_headers(admin)
    for body in (
        {"user_id": sarah.id, "meal_suggestion_id": oats.id},
        {"user_id": michael.id, "meal_suggestion_id": oats.id},
    ):
        client.post("/api/admin/user-suggestions/meals", headers=headers, json=body)
    sent = client.post(
        "/api/admin/user-suggestions/recipes",
        headers=headers,
        json={"user_id": sarah.id, "recipe_suggestion_id": soup.id},
    ).json()["data"]
    client.post(
        f"/api/user-suggestions/{sent['id']}/respond",
        headers=auth_headers(sarah),
        json={"is_accepted": True},
    )
    client.post(
        "/api/admin/user-suggestions/weekly",
        headers=headers,
        json={"user_id": michael.id, "week_start_date": str(date(2026, 3, 2)), "title": "Plan A"},
    )

    data = client.get("/api/admin/user-suggestions/analytics", headers=headers).json()["data"]
    assert data["userSuggestionStats"] == {
        "total": 3,
        "read": 1,
        "accepted": 1,
        "rejected": 0,
        "meal": 2,
        "recipe": 1,
    }
    assert data["weeklySuggestionStats"] == {"total": 1, "read": 0, "accepted": 0, "rejected": 0}
    assert [(u["name"], u["suggestionCount"]) for u in data["topUsers"]] == [
        ("Sarah Martinez", 2),
        ("Michael Chen", 2),
    ]
    assert len(data["recentSuggestions"]) == 3

"""
Tests for user-authored suggestions, voting, and interactions with the
admin-curated meal and recipe suggestion catalogues.
"""

from sqlalchemy.orm import Session

from test_fixtures import (
    client,
    db_session,
    make_user,
    make_suggestion,
    make_meal_suggestion,
    make_recipe_suggestion,
    auth_headers,
)
from domain.enums import MealType, SuggestionStatus, SuggestionType
from domain.models import MealSuggestion, RecipeSuggestion


# =============================================================================
# USER-AUTHORED SUGGESTIONS
# =============================================================================


def test_create_suggestion_starts_pending(db_session: Session):
    user = make_user(db_session)
    r = client.post(
        "/api/suggestions",
        headers=auth_headers(user),
        json={
            "suggestion_type": "meal_plan",
            "title": "Ramadan meal plans",
            "description": "Suhoor and iftar focused plans",
            "content": {"days": 30},
        },
    )
    assert r.status_code == 201
    assert r.json()["message"] == "Suggestion created successfully"
    data = r.json()["data"]
    assert data["status"] == "pending"
    assert data["suggestion_type"] == "meal_plan"
    assert data["content"] == {"days": 30}
    assert data["first_name"] == "Sarah"
    assert (data["upvotes"], data["downvotes"], data["interaction_count"]) == (0, 0, 0)


def test_create_suggestion_rejects_unknown_type(db_session: Session):
    user = make_user(db_session)
    r = client.post(
        "/api/suggestions",
        headers=auth_headers(user),
        json={"suggestion_type": "feature", "title": "Dark mode"},
    )
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "suggestion_type"


def test_list_own_suggestions_with_filters(db_session: Session):
    """
    Verifies:
    - Only the caller's suggestions are listed
    - status (query alias), suggestion_type and search filters apply
    """
    user = make_user(db_session)
    other = make_user(db_session, profile_type="athlete")
    make_suggestion(db_session, user, title="Keto desserts")
    make_suggestion(db_session, user, title="Family plans", suggestion_type=SuggestionType.MEAL_PLAN)
    make_suggestion(db_session, user, title="Vegan curries", status=SuggestionStatus.APPROVED)
    make_suggestion(db_session, other, title="Someone else's idea")
    headers = auth_headers(user)

    r = client.get("/api/suggestions", headers=headers)
    assert [s["title"] for s in r.json()["data"]] == ["Vegan curries", "Family plans", "Keto desserts"]

    r = client.get("/api/suggestions", headers=headers, params={"status": "approved"})
    assert [s["title"] for s in r.json()["data"]] == ["Vegan curries"]

    r = client.get("/api/suggestions", headers=headers, params={"suggestion_type": "meal_plan"})
    assert [s["title"] for s in r.json()["data"]] == ["Family plans"]

    r = client.get("/api/suggestions", headers=headers, params={"search": "keto"})
    assert [s["title"] for s in r.json()["data"]] == ["Keto desserts"]


def test_approved_suggestions_are_public(db_session: Session):
    sarah = make_user(db_session)
    michael = make_user(db_session, profile_type="athlete")
    make_suggestion(db_session, sarah, title="Pending idea")
    make_suggestion(db_session, sarah, title="Approved idea", status=SuggestionStatus.APPROVED)
    make_suggestion(db_session, sarah, title="Shipped idea", status=SuggestionStatus.IMPLEMENTED)
    make_suggestion(db_session, sarah, title="Rejected idea", status=SuggestionStatus.REJECTED)

    r = client.get("/api/suggestions/approved", headers=auth_headers(michael))
    assert {s["title"] for s in r.json()["data"]} == {"Approved idea", "Shipped idea"}


def test_vote_replaces_previous_vote(db_session: Session):
    """
    Verifies:
    - One vote per user; voting again changes it
    - Tallies count every voter
    """
    author = make_user(db_session)
    suggestion = make_suggestion(db_session, author)
    voter = make_user(db_session, profile_type="athlete")
    url = f"/api/suggestions/{suggestion.id}/interact"

    r = client.post(url, headers=auth_headers(voter), json={"interaction_type": "upvote"})
    assert r.status_code == 200
    assert r.json()["message"] == "Vote recorded successfully"
    assert r.json()["data"]["upvotes"] == 1

    client.post(url, headers=auth_headers(author), json={"interaction_type": "upvote"})
    r = client.post(url, headers=auth_headers(voter), json={"interaction_type": "downvote"})
    data = r.json()["data"]
    assert (data["upvotes"], data["downvotes"], data["interaction_count"]) == (1, 1, 2)


def test_vote_on_missing_suggestion(db_session: Session):
    user = make_user(db_session)
    r = client.post(
        "/api/suggestions/9999/interact", headers=auth_headers(user), json={"interaction_type": "upvote"}
    )
    assert r.status_code == 404
    assert r.json()["message"] == "Suggestion not found"

    r = client.get("/api/suggestions/9999", headers=auth_headers(user))
    assert r.status_code == 404


# =============================================================================
# CURATED CATALOGUES
# =============================================================================


def test_meal_catalogue_shows_active_featured_first(db_session: Session):
    user = make_user(db_session)
    make_meal_suggestion(db_session, title="Overnight Oats")
    make_meal_suggestion(db_session, title="Shakshuka", is_featured=True)
    make_meal_suggestion(db_session, title="Retired Toast", is_active=False)
    make_meal_suggestion(db_session, title="Poke Bowl", meal_type=MealType.LUNCH)

    r = client.get("/api/suggestions/meals", headers=auth_headers(user))
    assert r.status_code == 200
    assert [m["title"] for m in r.json()["data"]] == ["Shakshuka", "Poke Bowl", "Overnight Oats"]
    assert r.json()["data"][0]["meal_type"] == "breakfast"

    r = client.get("/api/suggestions/meals", headers=auth_headers(user), params={"meal_type": "lunch"})
    assert [m["title"] for m in r.json()["data"]] == ["Poke Bowl"]


def test_recipe_catalogue_lists_active_only(db_session: Session):
    user = make_user(db_session)
    make_recipe_suggestion(db_session, title="Lentil Soup")
    make_recipe_suggestion(db_session, title="Hidden Stew", is_active=False)

    r = client.get("/api/suggestions/recipes", headers=auth_headers(user))
    data = r.json()["data"]
    assert [x["title"] for x in data] == ["Lentil Soup"]
    assert data[0]["servings"] == 4
    assert data[0]["ingredients"] == [{"name": "red lentils", "amount": 250, "unit": "g"}]


def test_like_toggle_moves_like_count(db_session: Session):
    user = make_user(db_session)
    meal = make_meal_suggestion(db_session)
    url = f"/api/suggestions/meals/{meal.id}/interact"

    r = client.post(url, headers=auth_headers(user), json={"interaction_type": "like"})
    assert r.json()["data"] == {"active": True}
    assert r.json()["message"] == "Meal suggestion like added successfully"
    db_session.expire_all()
    assert db_session.get(MealSuggestion, meal.id).like_count == 1

    r = client.post(url, headers=auth_headers(user), json={"interaction_type": "like"})
    assert r.json()["data"] == {"active": False}
    assert r.json()["message"] == "Meal suggestion like removed successfully"
    db_session.expire_all()
    assert db_session.get(MealSuggestion, meal.id).like_count == 0


def test_view_counts_only_when_added(db_session: Session):
    user = make_user(db_session)
    recipe = make_recipe_suggestion(db_session)
    url = f"/api/suggestions/recipes/{recipe.id}/interact"

    client.post(url, headers=auth_headers(user), json={"interaction_type": "view"})
    client.post(url, headers=auth_headers(user), json={"interaction_type": "view"})
    client.post(url, headers=auth_headers(user), json={"interaction_type": "view"})

    db_session.expire_all()
    assert db_session.get(RecipeSuggestion, recipe.id).view_count == 2


def test_interaction_with_inactive_suggestion(db_session: Session):
    user = make_user(db_session)
    meal = make_meal_suggestion(db_session, is_active=False)
    r = client.post(
        f"/api/suggestions/meals/{meal.id}/interact",
        headers=auth_headers(user),
        json={"interaction_type": "save"},
    )
    assert r.status_code == 404
    assert r.json()["message"] == "Meal suggestion not found"

    r = client.post(
        f"/api/suggestions/meals/{meal.id}/interact",
        headers=auth_headers(user),
        json={"interaction_type": "bookmark"},
    )
    assert r.status_code == 400


def test_saved_lists_both_kinds(db_session: Session):
    """
    Verifies:
    - Saved meals and recipes are listed separately with a combined total
    - Un-saving removes the entry
    - Other interaction types are not "saved"
    """
    user = make_user(db_session)
    oats = make_meal_suggestion(db_session)
    shakshuka = make_meal_suggestion(db_session, title="Shakshuka")
    soup = make_recipe_suggestion(db_session)
    headers = auth_headers(user)

    client.post(f"/api/suggestions/meals/{oats.id}/interact", headers=headers, json={"interaction_type": "save"})
    client.post(f"/api/suggestions/meals/{shakshuka.id}/interact", headers=headers, json={"interaction_type": "try"})
    client.post(f"/api/suggestions/recipes/{soup.id}/interact", headers=headers, json={"interaction_type": "save"})

    data = client.get("/api/suggestions/saved", headers=headers).json()["data"]
    assert [m["title"] for m in data["meals"]] == ["Overnight Oats"]
    assert [r["title"] for r in data["recipes"]] == ["Lentil Soup"]
    assert data["total"] == 2

    client.post(f"/api/suggestions/recipes/{soup.id}/interact", headers=headers, json={"interaction_type": "save"})
    data = client.get("/api/suggestions/saved", headers=headers).json()["data"]
    assert data["recipes"] == []
    assert data["total"] == 1

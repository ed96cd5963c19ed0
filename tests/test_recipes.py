"""
Tests for the recipe catalogue: browsing, authoring, reviews, likes and
profile-based suggestions.
"""

from sqlalchemy.orm import Session

from test_fixtures import (
    client,
    db_session,
    make_user,
    make_admin,
    make_profile,
    make_recipe,
    make_ingredient,
    make_meal_plan,
    meal_item,
    auth_headers,
)
from domain.enums import Difficulty, MealType
from domain.models import MealPlanItem, Recipe


def _recipe_payload(**overrides) -> dict:
    payload = {
        "title": "Quinoa Power Bowl",
        "description": "Quinoa with roasted vegetables and chickpeas",
        "instructions": "Cook the quinoa. Roast the vegetables. Combine everything.",
        "prep_time": 15,
        "cook_time": 25,
        "servings": 2,
        "difficulty": "easy",
        "cuisine_type": "mediterranean",
        "dietary_tags": ["vegan"],
        "calories_per_serving": 510,
        "protein_per_serving": 19,
        "ingredients": [
            {"name": "quinoa", "amount": 150, "unit": "g"},
            {"name": "Spinach", "amount": 60, "unit": "g"},
        ],
    }
    payload.update(overrides)
    return payload


# =============================================================================
# BROWSING
# =============================================================================


def test_list_recipes_paginates_newest_first(db_session: Session):
    """
    Verifies:
    - Pagination block reports total and totalPages
    - Newest recipes come first
    - Summaries carry ingredient lines and review_count
    """
    for title in ("Oat Pancakes", "Beef Stir Fry", "Miso Soup"):
        make_recipe(db_session, title=title)

    r = client.get("/api/recipes", params={"page": 1, "limit": 2})
    assert r.status_code == 200
    body = r.json()
    assert [item["title"] for item in body["data"]] == ["Miso Soup", "Beef Stir Fry"]
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}
    first = body["data"][0]
    assert first["review_count"] == 0
    assert first["ingredients"][0] == {"name": "chicken breast", "amount": 300, "unit": "g"}

    r = client.get("/api/recipes", params={"page": 2, "limit": 2})
    assert [item["title"] for item in r.json()["data"]] == ["Oat Pancakes"]


def test_list_recipes_filters(db_session: Session):
    make_recipe(db_session, title="Thai Green Curry", cuisine_type="thai", difficulty=Difficulty.MEDIUM)
    make_recipe(db_session, title="Greek Salad", is_approved=False)
    make_recipe(db_session, title="Green Smoothie", is_featured=True)

    r = client.get("/api/recipes", params={"search": "green"})
    assert {x["title"] for x in r.json()["data"]} == {"Thai Green Curry", "Green Smoothie"}

    r = client.get("/api/recipes", params={"is_approved": "false"})
    assert [x["title"] for x in r.json()["data"]] == ["Greek Salad"]

    r = client.get("/api/recipes", params={"cuisine_type": "thai"})
    assert [x["title"] for x in r.json()["data"]] == ["Thai Green Curry"]

    r = client.get("/api/recipes", params={"difficulty": "medium"})
    assert [x["title"] for x in r.json()["data"]] == ["Thai Green Curry"]

    r = client.get("/api/recipes/featured")
    assert [x["title"] for x in r.json()["data"]] == ["Green Smoothie"]


def test_invalid_pagination_is_a_validation_error(db_session: Session):
    r = client.get("/api/recipes", params={"page": 0})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "page"


def test_get_recipe_counts_views(db_session: Session):
    """
    Verifies:
    - Each detail read increments view_count
    - Unknown ids give 404 "Recipe not found"
    """
    recipe = make_recipe(db_session)

    first = client.get(f"/api/recipes/{recipe.id}")
    second = client.get(f"/api/recipes/{recipe.id}")
    assert first.status_code == 200
    assert first.json()["data"]["view_count"] == 1
    assert second.json()["data"]["view_count"] == 2
    assert second.json()["data"]["reviews"] == []

    r = client.get("/api/recipes/99999")
    assert r.status_code == 404
    assert r.json()["message"] == "Recipe not found"


# =============================================================================
# AUTHORING
# =============================================================================


def test_create_recipe_links_catalogue_ingredients(db_session: Session):
    """
    Verifies:
    - 201 with the new id
    - New recipes wait for approval and record their creator
    - Lines whose name matches a catalogue ingredient get its id
    """
    spinach = make_ingredient(db_session, "Spinach")
    user = make_user(db_session)

    r = client.post("/api/recipes", headers=auth_headers(user), json=_recipe_payload())
    assert r.status_code == 201
    assert r.json()["message"] == "Recipe created successfully"
    recipe_id = r.json()["data"]["id"]

    detail = client.get(f"/api/recipes/{recipe_id}").json()["data"]
    assert detail["is_approved"] is False
    assert detail["created_by"] == user.id
    assert detail["creator_name"] == "Sarah Martinez"
    lines = {line["name"]: line["ingredient_id"] for line in detail["ingredients"]}
    assert lines == {"quinoa": None, "Spinach": spinach.id}


def test_create_recipe_requires_auth_and_ingredients(db_session: Session):
    r = client.post("/api/recipes", json=_recipe_payload())
    assert r.status_code == 401

    user = make_user(db_session)
    r = client.post("/api/recipes", headers=auth_headers(user), json=_recipe_payload(ingredients=[]))
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "ingredients"


def test_update_recipe_owner_only(db_session: Session):
    """
    Verifies:
    - Other users get 403
    - The owner's moderation flags are ignored
    - An admin may change anything, including approval
    """
    owner = make_user(db_session)
    stranger = make_user(db_session, profile_type="athlete")
    admin = make_admin(db_session)
    recipe = make_recipe(db_session, creator=owner, is_approved=False)

    r = client.put(
        f"/api/recipes/{recipe.id}", headers=auth_headers(stranger), json={"title": "Stolen Salad"}
    )
    assert r.status_code == 403
    assert r.json()["message"] == "You can only modify your own recipes"

    r = client.put(
        f"/api/recipes/{recipe.id}",
        headers=auth_headers(owner),
        json={
            "title": "Chicken Caesar Salad",
            "is_approved": True,
            "ingredients": [{"name": "romaine", "amount": 1, "unit": "head"}],
        },
    )
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["title"] == "Chicken Caesar Salad"
    assert data["is_approved"] is False
    assert [line["name"] for line in data["ingredients"]] == ["romaine"]

    r = client.put(
        f"/api/recipes/{recipe.id}", headers=auth_headers(admin), json={"is_approved": True}
    )
    assert r.json()["data"]["is_approved"] is True


def test_delete_recipe(db_session: Session):
    owner = make_user(db_session)
    stranger = make_user(db_session, profile_type="athlete")
    recipe = make_recipe(db_session, creator=owner)

    assert client.delete(f"/api/recipes/{recipe.id}", headers=auth_headers(stranger)).status_code == 403
    r = client.delete(f"/api/recipes/{recipe.id}", headers=auth_headers(owner))
    assert r.status_code == 200

    db_session.expire_all()
    assert db_session.get(Recipe, recipe.id) is None
    assert client.delete(f"/api/recipes/{recipe.id}", headers=auth_headers(owner)).status_code == 404


def test_delete_recipe_keeps_meal_plans_using_it(db_session: Session):
    """
    Verifies:
    - Plan items that pointed at a deleted recipe survive with recipe_id cleared
    - Plan nutrition still answers and drops the recipe's contribution
    """
    owner = make_user(db_session)
    recipe = make_recipe(db_session, creator=owner)
    plan = make_meal_plan(
        db_session,
        owner,
        items=[
            meal_item(recipe_id=recipe.id),
            meal_item(
                meal_type=MealType.DINNER,
                custom_meal_name="Lentil Soup",
                custom_nutrition={"calories": 300, "protein": 18},
            ),
        ],
    )

    assert client.delete(f"/api/recipes/{recipe.id}", headers=auth_headers(owner)).status_code == 200

    db_session.expire_all()
    items = db_session.query(MealPlanItem).filter(MealPlanItem.meal_plan_id == plan.id).all()
    assert len(items) == 2
    assert sorted(i.custom_meal_name or "" for i in items) == ["", "Lentil Soup"]
    assert all(i.recipe_id is None for i in items)

    r = client.get(f"/api/meal-plans/{plan.id}/nutrition", headers=auth_headers(owner))
    assert r.status_code == 200
    assert r.json()["data"]["totals"]["calories"] == 300
    assert r.json()["data"]["days_count"] == 1


# =============================================================================
# REVIEWS AND LIKES
# =============================================================================


def test_review_updates_average_and_rejects_duplicates(db_session: Session):
    recipe = make_recipe(db_session)
    sarah = make_user(db_session)
    michael = make_user(db_session, profile_type="athlete")

    r = client.post(
        f"/api/recipes/{recipe.id}/review",
        headers=auth_headers(sarah),
        json={"rating": 5, "comment": "Fresh and filling"},
    )
    assert r.status_code == 201
    assert r.json()["data"]["first_name"] == "Sarah"
    client.post(f"/api/recipes/{recipe.id}/review", headers=auth_headers(michael), json={"rating": 2})

    detail = client.get(f"/api/recipes/{recipe.id}").json()["data"]
    assert detail["avg_rating"] == 3.5
    assert detail["review_count"] == 2

    again = client.post(
        f"/api/recipes/{recipe.id}/review", headers=auth_headers(sarah), json={"rating": 4}
    )
    assert again.status_code == 400
    assert again.json()["message"] == "You have already reviewed this recipe"

    bad = client.post(f"/api/recipes/{recipe.id}/review", headers=auth_headers(sarah), json={"rating": 6})
    assert bad.status_code == 400

    missing = client.post("/api/recipes/99999/review", headers=auth_headers(sarah), json={"rating": 4})
    assert missing.status_code == 404


def test_like_toggles(db_session: Session):
    recipe = make_recipe(db_session)
    user = make_user(db_session)
    headers = auth_headers(user)

    r = client.post(f"/api/recipes/{recipe.id}/like", headers=headers)
    assert r.json()["data"] == {"liked": True, "like_count": 1}
    assert r.json()["message"] == "Recipe liked"

    r = client.post(f"/api/recipes/{recipe.id}/like", headers=headers)
    assert r.json()["data"] == {"liked": False, "like_count": 0}
    assert r.json()["message"] == "Recipe unliked"


# =============================================================================
# SUGGESTIONS
# =============================================================================


def test_suggestions_without_profile_are_popular(db_session: Session):
    user = make_user(db_session)
    make_recipe(db_session, title="Rarely Viewed", view_count=1)
    make_recipe(db_session, title="Crowd Favourite", view_count=50)
    make_recipe(db_session, title="Hidden Draft", is_approved=False, view_count=500)

    r = client.get("/api/recipes/suggestions", headers=auth_headers(user))
    assert r.status_code == 200
    assert r.json()["message"] == "Popular recipes"
    assert [x["title"] for x in r.json()["data"]] == ["Crowd Favourite", "Rarely Viewed"]


def test_suggestions_follow_preferences_and_allergies(db_session: Session):
    """
    Verifies:
    - Only recipes sharing a preferred tag are returned
    - Recipes tagged with an allergy are excluded
    - Higher rated recipes come first
    """
    user = make_user(db_session)
    make_profile(db_session, user, dietary_preferences=["vegan"], allergies=["nuts"])
    make_recipe(db_session, title="Tofu Scramble", dietary_tags=["vegan"], avg_rating=4.0)
    make_recipe(db_session, title="Vegan Pesto", dietary_tags=["vegan", "nuts"], avg_rating=5.0)
    make_recipe(db_session, title="Chana Masala", dietary_tags=["Vegan"], avg_rating=4.8)
    make_recipe(db_session, title="Steak Frites", dietary_tags=["high-protein"])

    r = client.get("/api/recipes/suggestions", headers=auth_headers(user))
    assert r.json()["message"] == "Personalized recipe suggestions"
    assert [x["title"] for x in r.json()["data"]] == ["Chana Masala", "Tofu Scramble"]

"""Tests for nutrition endpoints."""

from datetime import datetime, timezone

from fastapi.testclient import TestClient


class TestNutritionEndpoints:
    """Test nutrition log endpoints."""

    def test_create_entry(self, client: TestClient, auth_headers: dict, sample_nutrition_data: dict):
        response = client.post("/api/nutrition", json=sample_nutrition_data, headers=auth_headers)
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Nutrition log created successfully"
        assert body["data"]["foodItem"] == "Grilled chicken salad"
        assert body["data"]["mealType"] == "lunch"

    def test_create_rejects_negative_macros(self, client: TestClient, auth_headers: dict, sample_nutrition_data: dict):
        sample_nutrition_data["protein"] = -1
        response = client.post("/api/nutrition", json=sample_nutrition_data, headers=auth_headers)
        assert response.status_code == 400

    def test_search_is_case_insensitive(self, client: TestClient, auth_headers: dict, sample_nutrition_data: dict):
        """Test search matches a substring of the food item in any case."""
        for food in ["Grilled Chicken Salad", "Chicken soup", "Banana"]:
            client.post("/api/nutrition", json={**sample_nutrition_data, "foodItem": food}, headers=auth_headers)

        response = client.get("/api/nutrition", params={"search": "CHICKEN"}, headers=auth_headers)
        foods = {e["foodItem"] for e in response.json()["data"]}
        assert foods == {"Grilled Chicken Salad", "Chicken soup"}

    def test_filter_by_meal_type(self, client: TestClient, auth_headers: dict, sample_nutrition_data: dict):
        client.post("/api/nutrition", json=sample_nutrition_data, headers=auth_headers)
        client.post("/api/nutrition", json={**sample_nutrition_data, "mealType": "snack"}, headers=auth_headers)

        response = client.get("/api/nutrition", params={"mealType": "snack"}, headers=auth_headers)
        assert [e["mealType"] for e in response.json()["data"]] == ["snack"]

    def test_update_and_delete(self, client: TestClient, auth_headers: dict, sample_nutrition_data: dict):
        entry_id = client.post("/api/nutrition", json=sample_nutrition_data, headers=auth_headers).json()["data"]["id"]

        response = client.put(f"/api/nutrition/{entry_id}", json={"calories": 400}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["calories"] == 400

        response = client.delete(f"/api/nutrition/{entry_id}", headers=auth_headers)
        assert response.status_code == 200

        response = client.put(f"/api/nutrition/{entry_id}", json={"calories": 1}, headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Nutrition log not found"

    def test_stats(self, client: TestClient, auth_headers: dict, sample_nutrition_data: dict):
        client.post("/api/nutrition", json=sample_nutrition_data, headers=auth_headers)
        client.post(
            "/api/nutrition",
            json={**sample_nutrition_data, "mealType": "dinner", "calories": 450},
            headers=auth_headers,
        )

        response = client.get("/api/nutrition/stats", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["summary"]["totalCalories"] == 800
        assert data["summary"]["avgCalories"] == 400
        assert sum(m["count"] for m in data["byMeal"]) == 2

    def test_search_treats_wildcards_literally(self, client: TestClient, auth_headers: dict, sample_nutrition_data: dict):
        """Test ``%`` and ``_`` in a search term only match themselves."""
        for food in ["Banana", "100% orange juice", "Trail_mix"]:
            client.post("/api/nutrition", json={**sample_nutrition_data, "foodItem": food}, headers=auth_headers)

        response = client.get("/api/nutrition", params={"search": "%"}, headers=auth_headers)
        assert [e["foodItem"] for e in response.json()["data"]] == ["100% orange juice"]

        response = client.get("/api/nutrition", params={"search": "n_n"}, headers=auth_headers)
        assert response.json()["data"] == []

    def test_offset_date_stored_as_local_time(self, client: TestClient, auth_headers: dict, sample_nutrition_data: dict):
        sent = datetime(2024, 5, 15, 6, 0, tzinfo=timezone.utc)
        response = client.post(
            "/api/nutrition",
            json={**sample_nutrition_data, "date": sent.isoformat()},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["data"]["date"] == sent.astimezone().replace(tzinfo=None).isoformat()

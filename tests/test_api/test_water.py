"""Tests for water intake endpoints."""

from fastapi.testclient import TestClient


class TestWaterUpsert:
    """Test the per-day upsert endpoints."""

    def test_first_post_creates(self, client: TestClient, auth_headers: dict):
        response = client.post("/api/water", json={"glasses": 4, "amount": 1000}, headers=auth_headers)
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Water intake created successfully"
        assert body["data"]["date"] == "2024-05-15T00:00:00"

    def test_second_post_same_day_updates(self, client: TestClient, auth_headers: dict):
        first = client.post("/api/water", json={"glasses": 4, "amount": 1000}, headers=auth_headers)
        second = client.post("/api/water", json={"glasses": 6, "amount": 1500}, headers=auth_headers)

        assert second.status_code == 200
        assert second.json()["message"] == "Water intake updated successfully"
        assert second.json()["data"]["id"] == first.json()["data"]["id"]

        response = client.get("/api/water", headers=auth_headers)
        assert len(response.json()["data"]) == 1

    def test_post_for_another_day(self, client: TestClient, auth_headers: dict):
        response = client.post(
            "/api/water",
            json={"glasses": 2, "amount": 500, "date": "2024-05-12T18:45:00"},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["data"]["date"] == "2024-05-12T00:00:00"

    def test_amount_bounds(self, client: TestClient, auth_headers: dict):
        response = client.post("/api/water", json={"glasses": 4, "amount": 5001}, headers=auth_headers)
        assert response.status_code == 400

    def test_quick_add(self, client: TestClient, auth_headers: dict):
        """Test quick-add sets today's glasses and derives the amount."""
        response = client.post("/api/water/quick-add", json={"glasses": 3}, headers=auth_headers)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["glasses"] == 3
        assert data["amount"] == 750

        response = client.post("/api/water/quick-add", json={"glasses": 5}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["amount"] == 1250

    def test_quick_add_over_limit(self, client: TestClient, auth_headers: dict):
        response = client.post("/api/water/quick-add", json={"glasses": 21}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestWaterQueries:
    """Test today, stats, update and delete."""

    def test_today_placeholder(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/water/today", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"] == {"glasses": 0, "amount": 0}

    def test_today_record(self, client: TestClient, auth_headers: dict):
        client.post("/api/water", json={"glasses": 7, "amount": 1750}, headers=auth_headers)

        response = client.get("/api/water/today", headers=auth_headers)
        assert response.json()["data"]["glasses"] == 7

    def test_stats(self, client: TestClient, auth_headers: dict):
        for day, glasses in [(13, 6), (14, 8), (15, 7)]:
            client.post(
                "/api/water",
                json={"glasses": glasses, "amount": glasses * 250, "date": f"2024-05-{day}T12:00:00"},
                headers=auth_headers,
            )

        response = client.get("/api/water/stats", params={"period": 7}, headers=auth_headers)
        data = response.json()["data"]
        assert data["summary"]["totalGlasses"] == 21
        assert data["summary"]["avgAmount"] == 1750
        assert data["summary"]["daysTracked"] == 3
        assert [d["glasses"] for d in data["dailyIntake"]] == [6, 8, 7]

    def test_update_and_delete(self, client: TestClient, auth_headers: dict, other_auth_headers: dict):
        record_id = client.post(
            "/api/water", json={"glasses": 4, "amount": 1000}, headers=auth_headers
        ).json()["data"]["id"]

        response = client.put(f"/api/water/{record_id}", json={"glasses": 5}, headers=other_auth_headers)
        assert response.status_code == 404

        response = client.put(f"/api/water/{record_id}", json={"glasses": 5}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["glasses"] == 5
        assert response.json()["data"]["amount"] == 1000

        response = client.delete(f"/api/water/{record_id}", headers=auth_headers)
        assert response.status_code == 200
        assert client.get("/api/water", headers=auth_headers).json()["data"] == []

    def test_stats_with_very_long_period(self, client: TestClient, auth_headers: dict):
        client.post("/api/water", json={"glasses": 4, "amount": 1000}, headers=auth_headers)

        for path in ("/api/water/stats", "/api/workouts/stats", "/api/nutrition/stats"):
            response = client.get(path, params={"period": 1_000_000}, headers=auth_headers)
            assert response.status_code == 200

        response = client.get("/api/water/stats", params={"period": 1_000_000}, headers=auth_headers)
        assert response.json()["data"]["summary"]["daysTracked"] == 1

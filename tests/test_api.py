# -*- coding: utf-8 -*-

from __future__ import annotations

import base64
import json
import os
import re
import shutil
import sys
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from uuid import uuid4

import httpx
from fastapi.testclient import TestClient

_IMAGE_B64 = base64.b64encode(b"\xff\xd8\xff\xe0" + b"fake-jpeg-bytes" * 4).decode("ascii")
_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def _fake_ai(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/food/analyze":
        body = json.loads(request.content)
        if body.get("imageUrl") == "http://img.test/fail.jpg":
            return httpx.Response(500, json={"error": "model down"})
        return httpx.Response(
            200,
            json={
                "items": [
                    {"name": "Chicken breast", "calories": 330, "protein_g": 62, "fat_g": 7},
                    {"name": "Rice", "calories": 200, "carbs_g": 44, "protein_g": 4},
                ],
                "warnings": [],
            },
        )
    if path == "/chat":
        body = json.loads(request.content)
        return httpx.Response(200, json={"reply": f"echo: {body['message']}"})
    if path == "/exercises/body-parts":
        return httpx.Response(200, json=["chest", "back"])
    if path == "/exercises":
        part = request.url.params.get("bodyPart")
        rows = [
            {
                "id": "0001",
                "name": "Push-up",
                "bodyPart": "chest",
                "target": "pectorals",
                "equipment": "body weight",
                "secondaryMuscles": ["triceps", "shoulders"],
            },
            {
                "id": "0002",
                "name": "Pull-up",
                "bodyPart": "back",
                "target": "lats",
                "equipment": "body weight",
                "secondaryMuscles": ["biceps"],
            },
        ]
        return httpx.Response(200, json=[r for r in rows if part in (None, r["bodyPart"])])
    if path.startswith("/exercises/"):
        return httpx.Response(404, json={"error": "Exercise not found"})
    return httpx.Response(404, text="not found")


class TestFitlogApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="fitlog-test-"))
        data_root = cls._tmp / "data"
        os.environ["FITLOG_DATA_ROOT"] = str(data_root)
        os.environ["FITLOG_DB_PATH"] = str(data_root / "fitlog.db")
        os.environ["FITLOG_JWT_SECRET"] = "test-secret"
        os.environ["FITLOG_AI_BASE_URL"] = "http://ai.test"
        os.environ["FITLOG_DEFAULT_TZ"] = "UTC"

        # Ensure settings/app reflect the env vars above.
        for name in list(sys.modules.keys()):
            if name == "fitlog" or name.startswith("fitlog."):
                sys.modules.pop(name, None)

        from fitlog.ai.client import AiClient, get_ai_client  # noqa: WPS433 (import inside test for env control)
        from fitlog.api import app  # noqa: WPS433

        app.dependency_overrides[get_ai_client] = lambda: AiClient(
            base_url="http://ai.test", transport=httpx.MockTransport(_fake_ai)
        )
        cls.app = app
        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls) -> None:
        cls.app.dependency_overrides.clear()
        try:
            cls.client.close()
        except Exception:
            pass
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def _register(self) -> dict:
        email = f"user-{uuid4().hex[:8]}@example.com"
        resp = self.client.post("/api/auth/register", json={"email": email, "password": "password123"})
        self.assertEqual(resp.status_code, 200, resp.text)
        # Authenticate with the bearer header only; drop the cookie set by register.
        self.client.cookies.clear()
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    def _onboard(self, headers: dict, **extra) -> None:
        profile = {
            "display_name": "Sam",
            "age": 30,
            "gender": "Male",
            "height_cm": 180,
            "weight_kg": 80,
            "activity_level": "moderate",
            "goal": "Lose",
        }
        profile.update(extra)
        resp = self.client.put("/api/profile", json=profile, headers=headers)
        self.assertEqual(resp.status_code, 200, resp.text)

    def test_health_and_auth_required(self) -> None:
        unauth = TestClient(self.app)
        self.assertEqual(unauth.get("/api/health").json(), {"ok": True})
        self.assertEqual(unauth.get("/api/nutrition/goals").status_code, 401)
        self.assertEqual(unauth.get("/api/food-logs").status_code, 401)
        resp = unauth.get("/api/plans", headers={"Authorization": "Bearer not-a-token"})
        self.assertEqual(resp.status_code, 401)
        unauth.close()

    def test_register_login_me(self) -> None:
        email = f"login-{uuid4().hex[:8]}@example.com"
        resp = self.client.post("/api/auth/register", json={"email": email, "password": "password123"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertFalse(resp.json()["user"]["has_profile"])
        self.assertRegex(resp.json()["user"]["created_at"], _TIMESTAMP_RE)

        dup = self.client.post("/api/auth/register", json={"email": email, "password": "password123"})
        self.assertEqual(dup.status_code, 400)
        self.assertEqual(dup.json()["detail"], "Email already registered")

        bad = self.client.post("/api/auth/login", json={"email": email, "password": "wrong-password"})
        self.assertEqual(bad.status_code, 401)

        self.client.cookies.clear()
        ok = self.client.post("/api/auth/login", json={"email": email, "password": "password123"})
        self.assertEqual(ok.status_code, 200)
        # Cookie auth works on its own.
        me = self.client.get("/api/auth/me")
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["email"], email)

        self.client.post("/api/auth/logout")
        self.client.cookies.clear()
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)

    def test_profile_and_goals(self) -> None:
        headers = self._register()

        self.assertEqual(self.client.get("/api/profile", headers=headers).status_code, 404)
        goals = self.client.get("/api/nutrition/goals", headers=headers).json()
        self.assertEqual(goals["calorie_goal"], 2000)
        self.assertEqual(goals["source"], "default")

        incomplete = self.client.put("/api/profile", json={"display_name": "  Sam  "}, headers=headers)
        self.assertEqual(incomplete.status_code, 400)
        self.assertEqual(incomplete.json()["detail"], "Please fill in all fields.")

        self._onboard(headers)
        profile = self.client.get("/api/profile", headers=headers).json()
        self.assertEqual(profile["display_name"], "Sam")
        self.assertRegex(profile["updated_at"], _TIMESTAMP_RE)
        self.assertTrue(self.client.get("/api/auth/me", headers=headers).json()["has_profile"])

        goals = self.client.get("/api/nutrition/goals", headers=headers).json()
        self.assertEqual(goals["source"], "computed")
        self.assertEqual(goals["calorie_goal"], 2759)
        self.assertEqual(goals["protein_goal"], 207)

        metrics = self.client.get("/api/profile/metrics", headers=headers).json()
        self.assertEqual(metrics["bmi"], 24.7)
        self.assertEqual(metrics["bmr"], 1780.0)
        self.assertEqual(metrics["tdee"], 2759.0)
        self.assertEqual(metrics["missing"], [])

        # Partial update keeps the onboarding fields.
        resp = self.client.put("/api/profile", json={"calorie_goal": 2200}, headers=headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        goals = self.client.get("/api/nutrition/goals", headers=headers).json()
        self.assertEqual(goals["source"], "profile")
        self.assertEqual(
            (goals["calorie_goal"], goals["protein_goal"], goals["carbs_goal"], goals["fat_goal"]),
            (2200, 165, 220, 73),
        )

    def test_food_logs_weekly_and_dashboard(self) -> None:
        headers = self._register()
        self._onboard(headers, calorie_goal=2200)

        oats = self.client.post(
            "/api/food-logs",
            json={
                "items": [{"name": "Oats", "calories": 300, "protein_g": 10, "carbs_g": 54, "fat_g": 5}],
                "meal_type": "breakfast",
                "created_at": "2024-03-11T08:00:00Z",
            },
            headers=headers,
        )
        self.assertEqual(oats.status_code, 200, oats.text)
        oats = oats.json()
        self.assertEqual(oats["meal_type"], "Breakfast")
        self.assertEqual(oats["total_calories"], 300)
        self.assertEqual(oats["health_score"], 83)
        self.assertEqual(oats["source"], "manual")
        self.assertEqual(oats["created_at"], "2024-03-11T08:00:00.000Z")

        lunch = self.client.post(
            "/api/food-logs",
            json={
                "total_calories": 500,
                "protein_g": 20,
                "carbs_g": 50,
                "fat_g": 10,
                "meal_type": "Lunch",
                "created_at": "2024-03-11T12:00:00Z",
            },
            headers=headers,
        )
        self.assertEqual(lunch.status_code, 200, lunch.text)
        self.assertEqual(lunch.json()["health_score"], 86)

        bad = self.client.post("/api/food-logs", json={"created_at": "yesterday"}, headers=headers)
        self.assertEqual(bad.status_code, 400)

        listing = self.client.get("/api/food-logs", headers=headers).json()
        self.assertEqual(listing["count"], 2)
        self.assertEqual(listing["entries"][0]["meal_type"], "Lunch")
        self.assertEqual(
            self.client.get("/api/food-logs?meal_type=lunch", headers=headers).json()["count"], 1
        )
        self.assertEqual(
            self.client.get("/api/food-logs?start=2024-03-12", headers=headers).json()["count"], 0
        )

        weekly = self.client.get("/api/nutrition/weekly?date=2024-03-13&tz=UTC", headers=headers)
        self.assertEqual(weekly.status_code, 200, weekly.text)
        weekly = weekly.json()
        self.assertEqual(weekly["selected_day_index"], 2)
        self.assertEqual(weekly["day_labels"][0], "Mon")
        self.assertTrue(weekly["has_data"])
        # A past week counts its streak back from Sunday.
        self.assertEqual(weekly["streak"], 0)
        monday = weekly["days"][0]
        self.assertEqual(monday["date"], "2024-03-11")
        self.assertEqual(monday["calories"], 800)
        self.assertEqual((monday["protein"], monday["carbs"], monday["fat"]), (30, 104, 15))
        self.assertEqual(monday["other"], 130)
        self.assertEqual(monday["entry_count"], 2)
        self.assertEqual(monday["meals"]["Breakfast"]["calories"], 300)
        self.assertEqual(monday["meals"]["Lunch"]["calories"], 500)
        self.assertEqual(weekly["days"][1]["calories"], 0)

        dashboard = self.client.get("/api/nutrition/dashboard?date=2024-03-11&tz=UTC", headers=headers)
        self.assertEqual(dashboard.status_code, 200, dashboard.text)
        dashboard = dashboard.json()
        self.assertEqual(dashboard["consumed"], 800)
        self.assertEqual(dashboard["remaining"], 1400)
        self.assertEqual(dashboard["protein_deficit"], 135)
        self.assertEqual(dashboard["progress"], 0.364)
        self.assertIn("low on protein", dashboard["suggestion"])
        self.assertEqual(dashboard["goal"], "Lose")

        tuesday = self.client.get(
            "/api/nutrition/dashboard?date=2024-03-11&tz=UTC&day=1", headers=headers
        ).json()
        self.assertEqual(tuesday["consumed"], 0)
        self.assertEqual(tuesday["date"], "2024-03-12")

        self.assertEqual(
            self.client.get("/api/nutrition/weekly?tz=Not/AZone", headers=headers).status_code, 400
        )
        self.assertEqual(
            self.client.get("/api/nutrition/weekly?date=2024-13-45", headers=headers).status_code, 400
        )

        self.assertEqual(self.client.delete(f"/api/food-logs/{oats['id']}", headers=headers).status_code, 200)
        self.assertEqual(self.client.delete(f"/api/food-logs/{oats['id']}", headers=headers).status_code, 404)

    def test_weekly_defaults_to_current_week(self) -> None:
        headers = self._register()
        now = datetime.now(timezone.utc)
        for moment in (now, now - timedelta(days=1)):
            resp = self.client.post(
                "/api/food-logs",
                json={"total_calories": 400, "protein_g": 25, "created_at": moment.isoformat()},
                headers=headers,
            )
            self.assertEqual(resp.status_code, 200, resp.text)

        weekly = self.client.get("/api/nutrition/weekly?tz=UTC", headers=headers)
        self.assertEqual(weekly.status_code, 200, weekly.text)
        weekly = weekly.json()
        today_index = now.date().weekday()
        self.assertEqual(weekly["selected_day_index"], today_index)
        self.assertEqual(weekly["days"][today_index]["date"], now.date().isoformat())
        self.assertEqual(weekly["days"][today_index]["entry_count"], 1)
        # Inside the current week the streak counts back from today; on a Monday
        # yesterday belongs to the previous week.
        self.assertEqual(weekly["streak"], 2 if today_index > 0 else 1)

        dashboard = self.client.get("/api/nutrition/dashboard?tz=UTC", headers=headers).json()
        self.assertEqual(dashboard["day_index"], today_index)
        self.assertEqual(dashboard["consumed"], 400)
        self.assertEqual(dashboard["streak"], weekly["streak"])

    def test_weekly_rejects_dates_past_calendar_end(self) -> None:
        headers = self._register()
        for path in ("/api/nutrition/weekly", "/api/nutrition/dashboard"):
            resp = self.client.get(f"{path}?date=9999-12-30&tz=UTC", headers=headers)
            self.assertEqual(resp.status_code, 400, path)
            self.assertEqual(resp.json()["detail"], "Invalid date: 9999-12-30")

    def test_food_log_pagination_and_date_filters(self) -> None:
        headers = self._register()
        for hour in (8, 9, 10):
            resp = self.client.post(
                "/api/food-logs",
                json={"total_calories": 100 * hour, "created_at": f"2024-03-11T{hour:02d}:00:00Z"},
                headers=headers,
            )
            self.assertEqual(resp.status_code, 200, resp.text)

        page = self.client.get("/api/food-logs?limit=2", headers=headers).json()
        self.assertEqual(page["count"], 3)
        self.assertEqual([e["total_calories"] for e in page["entries"]], [1000, 900])

        rest = self.client.get("/api/food-logs?limit=2&offset=2", headers=headers).json()
        self.assertEqual(rest["count"], 3)
        self.assertEqual([e["total_calories"] for e in rest["entries"]], [800])

        past_end = self.client.get("/api/food-logs?offset=5", headers=headers).json()
        self.assertEqual((past_end["count"], past_end["entries"]), (3, []))

        same_day = self.client.get("/api/food-logs?start=2024-03-11&end=2024-03-11&limit=1", headers=headers).json()
        self.assertEqual(same_day["count"], 3)
        self.assertEqual(len(same_day["entries"]), 1)

        bad_start = self.client.get("/api/food-logs?start=2024-13-01", headers=headers)
        self.assertEqual(bad_start.status_code, 400)
        self.assertEqual(bad_start.json()["detail"], "Invalid start: 2024-13-01")
        self.assertEqual(self.client.get("/api/food-logs?end=tomorrow", headers=headers).status_code, 400)

    def test_logs_are_private(self) -> None:
        owner = self._register()
        other = self._register()
        log = self.client.post("/api/food-logs", json={"total_calories": 100}, headers=owner).json()
        self.assertEqual(self.client.get("/api/food-logs", headers=other).json()["count"], 0)
        self.assertEqual(self.client.delete(f"/api/food-logs/{log['id']}", headers=other).status_code, 404)

    def test_score_endpoint(self) -> None:
        headers = self._register()
        resp = self.client.post("/api/nutrition/score", json={"calories": 500, "protein_g": 40}, headers=headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json(), {"score": 90, "other_calories": 340.0, "macro_calories": 160.0})

    def test_food_analysis(self) -> None:
        headers = self._register()

        resp = self.client.post(
            "/api/food/analyze",
            json={"image_base64": f"data:image/jpeg;base64,{_IMAGE_B64}"},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        analysis = resp.json()
        self.assertEqual(len(analysis["items"]), 2)
        self.assertEqual(analysis["total_calories"], 530)
        self.assertEqual(analysis["protein_g"], 66)

        invalid = self.client.post(
            "/api/food/analyze", json={"image_base64": "!!!!not-base64!!!!"}, headers=headers
        )
        self.assertEqual(invalid.status_code, 400)

        failed = self.client.post(
            "/api/food/analyze", json={"image_url": "http://img.test/fail.jpg"}, headers=headers
        )
        self.assertEqual(failed.status_code, 502)
        self.assertEqual(failed.json()["detail"], "model down")

        logged = self.client.post(
            "/api/food/analyze-and-log",
            json={
                "image_url": "http://img.test/lunch.jpg",
                "meal_type": "Dinner",
                "corrected": True,
                "created_at": "2024-03-12T19:00:00Z",
            },
            headers=headers,
        )
        self.assertEqual(logged.status_code, 200, logged.text)
        log = logged.json()["log"]
        self.assertEqual(log["source"], "ai")
        self.assertEqual(log["meal_type"], "Dinner")
        self.assertEqual(log["total_calories"], 530)
        self.assertEqual(log["image_url"], "http://img.test/lunch.jpg")
        self.assertTrue(log["corrected"])
        listed = self.client.get("/api/food-logs", headers=headers).json()["entries"]
        self.assertTrue(listed[0]["corrected"])

    def test_chat_and_exercises(self) -> None:
        headers = self._register()

        chat = self.client.post(
            "/api/chat",
            json={"message": "  hello  ", "history": [{"role": "user", "content": "hi"}]},
            headers=headers,
        )
        self.assertEqual(chat.status_code, 200, chat.text)
        self.assertEqual(chat.json()["reply"], "echo: hello")
        self.assertEqual(chat.json()["status"], "ok")

        parts = self.client.get("/api/exercises/body-parts", headers=headers)
        self.assertEqual(parts.json(), ["all", "chest", "back"])

        chest = self.client.get("/api/exercises?body_part=chest", headers=headers).json()
        self.assertEqual([e["name"] for e in chest], ["Push-up"])
        self.assertEqual(len(self.client.get("/api/exercises?body_part=all", headers=headers).json()), 2)

        by_muscle = self.client.get("/api/exercises?q=TRICEPS", headers=headers).json()
        self.assertEqual([e["name"] for e in by_muscle], ["Push-up"])
        both = self.client.get("/api/exercises?q=body%20weight", headers=headers).json()
        self.assertEqual(len(both), 2)
        # Free text applies after the body-part filter.
        none = self.client.get("/api/exercises?body_part=back&q=triceps", headers=headers).json()
        self.assertEqual(none, [])

        missing = self.client.get("/api/exercises/9999", headers=headers)
        self.assertEqual(missing.status_code, 502)
        self.assertEqual(missing.json()["detail"], "Exercise not found")

    def test_plans(self) -> None:
        headers = self._register()

        empty = self.client.post("/api/plans", json={"name": "Push", "exercises": []}, headers=headers)
        self.assertEqual(empty.status_code, 400)
        self.assertEqual(empty.json()["detail"], "Add at least one exercise to your plan.")

        created = self.client.post(
            "/api/plans",
            json={
                "name": "  ",
                "exercises": [
                    {"exercise_id": "0001", "name": "Push-up", "body_part": "chest", "equipment": "body weight"},
                    {"exercise_id": "0002", "name": "Pull-up", "body_part": "back"},
                ],
            },
            headers=headers,
        )
        self.assertEqual(created.status_code, 200, created.text)
        plan = created.json()
        self.assertEqual(plan["name"], "My Plan")
        self.assertRegex(plan["created_at"], _TIMESTAMP_RE)
        self.assertEqual(plan["exercise_count"], 2)
        self.assertEqual(plan["exercises"][0]["body_parts"], ["chest"])
        self.assertEqual(plan["exercises"][0]["equipments"], ["body weight"])
        self.assertEqual(plan["exercises"][1]["difficulty"], "unknown")

        listing = self.client.get("/api/plans", headers=headers).json()
        self.assertEqual(len(listing["items"]), 1)
        self.assertEqual(listing["items"][0]["exercise_count"], 2)

        detail = self.client.get(f"/api/plans/{plan['id']}", headers=headers).json()
        self.assertEqual([e["name"] for e in detail["exercises"]], ["Push-up", "Pull-up"])
        self.assertEqual([e["position"] for e in detail["exercises"]], [0, 1])

        self.assertEqual(self.client.delete(f"/api/plans/{plan['id']}", headers=headers).status_code, 200)
        self.assertEqual(self.client.get(f"/api/plans/{plan['id']}", headers=headers).status_code, 404)

    def test_runs(self) -> None:
        headers = self._register()
        self._onboard(headers)

        run = self.client.post(
            "/api/runs",
            json={"started_at": "2024-03-12T06:30:00Z", "duration_s": 1800, "distance_m": 5000},
            headers=headers,
        )
        self.assertEqual(run.status_code, 200, run.text)
        run = run.json()
        self.assertEqual(run["pace_s_per_km"], 360.0)
        self.assertEqual(run["speed_kmh"], 10.0)
        self.assertEqual(run["calories_kcal"], 400.0)
        self.assertTrue(run["calories_estimated"])
        self.assertEqual(run["started_at"], "2024-03-12T06:30:00.000Z")
        self.assertRegex(run["created_at"], _TIMESTAMP_RE)

        logged = self.client.post(
            "/api/runs",
            json={"started_at": "2024-03-13T06:30:00Z", "duration_s": 600, "distance_m": 2000, "calories_kcal": 150},
            headers=headers,
        ).json()
        self.assertFalse(logged["calories_estimated"])

        bad = self.client.post(
            "/api/runs", json={"started_at": "soon", "duration_s": 60, "distance_m": 100}, headers=headers
        )
        self.assertEqual(bad.status_code, 400)

        self.assertEqual(self.client.get("/api/runs", headers=headers).json()["count"], 2)

        summary = self.client.get("/api/runs/summary?start=2024-03-11&end=2024-03-13", headers=headers).json()
        self.assertEqual([d["date"] for d in summary["days"]], ["2024-03-11", "2024-03-12", "2024-03-13"])
        self.assertEqual(summary["days"][1]["distance_m"], 5000)
        self.assertEqual(summary["run_count"], 2)
        self.assertEqual(summary["distance_m"], 7000)
        self.assertEqual(summary["avg_pace_s_per_km"], 342.9)
        self.assertEqual(summary["warnings"], [])

        reversed_range = self.client.get(
            "/api/runs/summary?start=2024-03-13&end=2024-03-11", headers=headers
        ).json()
        self.assertEqual(reversed_range["days"], [])
        self.assertEqual(reversed_range["warnings"], ["Invalid date range"])
        self.assertIsNone(reversed_range["avg_pace_s_per_km"])

        huge = self.client.get("/api/runs/summary?start=1000-01-01&end=3000-12-31", headers=headers)
        self.assertEqual(huge.status_code, 200)
        self.assertEqual(huge.json()["days"], [])
        self.assertTrue(huge.json()["warnings"][0].startswith("Date range too long"))

        leap_year = self.client.get("/api/runs/summary?start=2024-01-01&end=2024-12-31", headers=headers).json()
        self.assertEqual(len(leap_year["days"]), 366)
        self.assertEqual(leap_year["warnings"], [])
        self.assertEqual(leap_year["run_count"], 2)


if __name__ == "__main__":
    unittest.main()

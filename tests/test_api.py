"""HTTP tests for the risk and trading plan endpoints."""

from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from api.main import create_app

LONG_SETUP = {
    "entryPrice": 50000,
    "stopLoss": 48000,
    "takeProfit": 55000,
    "leverage": 10,
    "riskPercentage": 1,
    "accountBalance": 10000,
    "positionType": "long",
}


class RiskApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app(config_path="config/does-not-exist.yaml"))
        self.client.__enter__()

    def tearDown(self) -> None:
        self.client.__exit__(None, None, None)

    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")
        self.assertTrue(self.client.get("/health/ready").json()["ready"])

    def test_analyze_long_setup(self) -> None:
        response = self.client.post("/risk/analyze", json=LONG_SETUP)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])

        data = body["data"]
        self.assertEqual(data["riskLevel"], "LOW")
        self.assertEqual(data["parameters"]["positionType"], "LONG")
        self.assertAlmostEqual(data["calculations"]["positionSize"], 0.05, places=12)
        self.assertAlmostEqual(data["calculations"]["liquidationPrice"], 45025.0, places=6)
        self.assertAlmostEqual(data["calculations"]["riskRewardRatio"], 2.5, places=12)
        self.assertEqual(
            [s["scenario"] for s in data["simulations"]],
            ["stopLossHit", "takeProfitHit", "liquidation"],
        )
        self.assertEqual(data["simulations"][2]["pnlPercentage"], -90)
        self.assertIn("timestamp", data)

    def test_analyze_reports_every_issue(self) -> None:
        payload = dict(LONG_SETUP, stopLoss=52000, takeProfit=49000, leverage=200)
        response = self.client.post("/risk/analyze", json=payload)
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        messages = [error["message"] for error in body["errors"]]
        self.assertEqual(
            messages,
            [
                "Leverage must be between 1 and 125",
                "For long positions, stop loss must be below entry price",
                "For long positions, take profit must be above entry price",
            ],
        )

    def test_malformed_body_is_bad_request(self) -> None:
        payload = {key: value for key, value in LONG_SETUP.items() if key != "entryPrice"}
        response = self.client.post("/risk/analyze", json=payload)
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])

        response = self.client.post("/risk/analyze", json=dict(LONG_SETUP, positionType="sideways"))
        self.assertEqual(response.status_code, 400)

    def test_validate_endpoint(self) -> None:
        ok = self.client.post("/risk/validate", json=LONG_SETUP).json()["data"]
        self.assertEqual(ok, {"valid": True, "errors": []})

        bad = self.client.post("/risk/validate", json=dict(LONG_SETUP, stopLoss=51000)).json()["data"]
        self.assertFalse(bad["valid"])
        self.assertEqual(bad["errors"][0]["field"], "stop_loss")

    def test_liquidation_endpoint(self) -> None:
        response = self.client.post(
            "/risk/liquidation",
            json={"entryPrice": 50000, "leverage": 20, "positionType": "SHORT"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertAlmostEqual(response.json()["data"]["liquidationPrice"], 52487.5, places=6)

        default_side = self.client.post("/risk/liquidation", json={"entryPrice": 50000, "leverage": 10})
        self.assertAlmostEqual(default_side.json()["data"]["liquidationPrice"], 45025.0, places=6)

    def test_position_size_endpoint(self) -> None:
        response = self.client.post(
            "/risk/position-size",
            json={"accountBalance": 10000, "riskPercentage": 1, "entryPrice": 50000, "stopLoss": 48000},
        )
        data = response.json()["data"]
        self.assertAlmostEqual(data["positionSize"], 0.05, places=12)
        self.assertAlmostEqual(data["riskAmount"], 100.0, places=9)

        flat = self.client.post(
            "/risk/position-size",
            json={"accountBalance": 10000, "riskPercentage": 1, "entryPrice": 100, "stopLoss": 100},
        )
        self.assertEqual(flat.status_code, 400)

    def test_overflowing_analysis_is_bad_request(self) -> None:
        payload = dict(
            LONG_SETUP,
            accountBalance=1e308,
            riskPercentage=100,
            entryPrice=2,
            stopLoss=1,
            takeProfit=3,
        )
        response = self.client.post("/risk/analyze", json=payload)
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertIn("Trade cannot be analyzed", body["error"])

    def test_overflowing_position_size_is_bad_request(self) -> None:
        response = self.client.post(
            "/risk/position-size",
            json={"accountBalance": 1e308, "riskPercentage": 100, "entryPrice": 1.5, "stopLoss": 1},
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])

    def test_guidelines(self) -> None:
        data = self.client.get("/risk/recommendations").json()["data"]
        self.assertEqual(data["riskManagement"][0]["title"], "Position Sizing")


class PlanApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app(config_path="config/does-not-exist.yaml"))
        self.client.__enter__()

    def tearDown(self) -> None:
        self.client.__exit__(None, None, None)

    def _create(self, **overrides) -> dict:
        payload = {**LONG_SETUP, "userId": "user-1", "name": "BTC swing", **overrides}
        response = self.client.post("/plans", json=payload)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]

    def test_create_computes_snapshot_server_side(self) -> None:
        plan = self._create(description="Breakout retest")
        self.assertEqual(plan["status"], "DRAFT")
        self.assertEqual(plan["riskLevel"], "LOW")
        self.assertAlmostEqual(plan["positionSize"], 0.05, places=12)
        self.assertAlmostEqual(plan["orderValue"], 2500.0, places=9)

        fetched = self.client.get(f"/plans/{plan['id']}").json()["data"]
        self.assertEqual(fetched["name"], "BTC swing")

    def test_create_rejects_bad_name_and_parameters(self) -> None:
        payload = dict(LONG_SETUP, userId="user-1", name="", stopLoss=60000)
        response = self.client.post("/plans", json=payload)
        self.assertEqual(response.status_code, 400)
        fields = [error["field"] for error in response.json()["errors"]]
        self.assertEqual(fields, ["name", "stop_loss"])

    def test_create_with_overflowing_parameters_is_bad_request(self) -> None:
        payload = dict(
            LONG_SETUP,
            userId="user-1",
            name="Overflow",
            accountBalance=1e308,
            riskPercentage=100,
            entryPrice=2,
            stopLoss=1,
            takeProfit=3,
        )
        response = self.client.post("/plans", json=payload)
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])
        self.assertEqual(self.client.get("/plans/user/user-1").json()["data"], [])

    def test_status_lifecycle(self) -> None:
        plan_id = self._create()["id"]

        activated = self.client.patch(f"/plans/{plan_id}", json={"status": "ACTIVE"})
        self.assertEqual(activated.status_code, 200)
        self.assertEqual(activated.json()["data"]["status"], "ACTIVE")

        again = self.client.patch(f"/plans/{plan_id}", json={"status": "ACTIVE"})
        self.assertEqual(again.status_code, 400)
        self.assertEqual(again.json()["error"], "Only draft plans can be activated")

        executed = self.client.patch(f"/plans/{plan_id}", json={"status": "EXECUTED"}).json()["data"]
        self.assertIsNotNone(executed["executedAt"])

        cancelled = self.client.patch(f"/plans/{plan_id}", json={"status": "CANCELLED"})
        self.assertEqual(cancelled.status_code, 400)

    def test_list_and_filter(self) -> None:
        first = self._create()["id"]
        second = self._create(name="ETH fade")["id"]
        self.client.patch(f"/plans/{second}", json={"status": "ACTIVE"})

        plans = self.client.get("/plans/user/user-1").json()["data"]
        self.assertEqual({plan["id"] for plan in plans}, {first, second})

        active = self.client.get("/plans/user/user-1/status/active").json()["data"]
        self.assertEqual([plan["id"] for plan in active], [second])

        invalid = self.client.get("/plans/user/user-1/status/archived")
        self.assertEqual(invalid.status_code, 400)

    def test_delete_and_missing(self) -> None:
        plan_id = self._create()["id"]
        self.assertEqual(self.client.delete(f"/plans/{plan_id}").status_code, 200)
        self.assertEqual(self.client.get(f"/plans/{plan_id}").status_code, 404)
        self.assertEqual(self.client.delete(f"/plans/{plan_id}").status_code, 404)
        missing = self.client.patch("/plans/unknown", json={"status": "ACTIVE"})
        self.assertEqual(missing.status_code, 404)


if __name__ == "__main__":
    unittest.main()

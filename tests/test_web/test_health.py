"""Tests for the /health endpoint and app-level error handlers."""

import unittest

from tracker.store import MemoryRecordStore
from web import create_app


class TestHealthEndpoint(unittest.TestCase):

    def setUp(self):
        self.app = create_app(store=MemoryRecordStore())
        self.app.config["TESTING"] = True
        self.client = self.app.test_client()

    def test_health_returns_200(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)

    def test_health_has_version(self):
        data = self.client.get("/health").get_json()
        self.assertEqual(data["status"], "healthy")
        self.assertEqual(data["version"], "0.1.0")

    def test_unknown_route_is_json_404(self):
        response = self.client.get("/nowhere")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json(), {"error": "Not found"})

    def test_wrong_method_is_json_405(self):
        response = self.client.delete("/api/v1/products")
        self.assertEqual(response.status_code, 405)
        self.assertIn("error", response.get_json())


if __name__ == "__main__":
    unittest.main()

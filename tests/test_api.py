import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from edgelabeler.api.main import app
from edgelabeler.api import routes
from edgelabeler.services.errors import SaveError
from edgelabeler.services.labeling_session import SessionState
from roof_fixtures import hip_roof_facets, facet_payload


def session_body(measurement_id="m-api"):
    return {
        "measurement_id": measurement_id,
        "facets": [facet_payload(f) for f in hip_roof_facets()],
    }


class TestApi(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def start(self):
        response = self.client.post("/api/sessions", json=session_body())
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_health_rules_and_edge_types(self):
        self.assertEqual(self.client.get("/api/health").json(), {"status": "ok"})

        rules = self.client.get("/api/rules").json()
        self.assertEqual(rules[0]["id"], "edge.horizontal")
        self.assertEqual(len(rules), 5)

        types = self.client.get("/api/edge-types").json()
        self.assertEqual(len(types), 7)
        self.assertEqual(types[0]["type"], "Ridge")

    def test_classify(self):
        body = session_body()
        body["elevation_ranks"] = {"edge-2": 1}
        response = self.client.post("/api/classify", json=body)
        self.assertEqual(response.status_code, 200)

        data = response.json()
        self.assertEqual(len(data["edges"]), 9)
        self.assertTrue(all(e["auto_detected"] for e in data["edges"]))
        self.assertEqual(sum(data["totals"]["counts"].values()), 9)

    def test_invalid_facet_rejected(self):
        body = session_body()
        body["facets"][0]["points"] = body["facets"][0]["points"][:2]
        response = self.client.post("/api/classify", json=body)
        self.assertEqual(response.status_code, 422)

    def test_zero_connection_tolerance_rejected(self):
        body = session_body()
        body["params"] = {"connection_tolerance": 0}
        response = self.client.post("/api/classify", json=body)
        self.assertEqual(response.status_code, 422)

    def test_junctions(self):
        sid = self.start()["session_id"]
        response = self.client.get(f"/api/sessions/{sid}/junctions")
        self.assertEqual(response.status_code, 200)

        junctions = response.json()
        self.assertEqual(len(junctions), 6)
        self.assertTrue(all(len(j["edge_ids"]) == 3 for j in junctions))

    def test_session_being_saved_refuses_changes(self):
        sid = self.start()["session_id"]
        routes._service.sessions.get(sid).state = SessionState.SAVING

        self.assertEqual(self.client.post(f"/api/sessions/{sid}/undo").status_code, 409)
        response = self.client.put(
            f"/api/sessions/{sid}/edges/edge-0", json={"edge_type": "Ridge"},
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(self.client.delete(f"/api/sessions/{sid}").status_code, 409)

    def test_session_workflow(self):
        data = self.start()
        sid = data["session_id"]
        self.assertEqual(data["state"], "idle")
        self.assertEqual(data["summary"]["unlabeled"], 9)

        data = self.client.post(f"/api/sessions/{sid}/detect").json()
        self.assertEqual(data["state"], "reviewing")
        self.assertEqual(data["summary"]["unlabeled"], 0)
        self.assertTrue(data["can_undo"])

        response = self.client.put(
            f"/api/sessions/{sid}/edges/edge-0", json={"edge_type": "Valley"},
        )
        edge = response.json()["edges"][0]
        self.assertEqual(edge["edge_type"], "Valley")
        self.assertTrue(edge["user_modified"])

        data = self.client.post(
            f"/api/sessions/{sid}/accept", json={"high_confidence_only": False},
        ).json()
        self.assertEqual(data["accepted"], 8)
        self.assertEqual(data["session"]["summary"]["user_labeled"], 9)

        data = self.client.post(f"/api/sessions/{sid}/undo").json()
        self.assertEqual(data["summary"]["user_labeled"], 1)
        data = self.client.post(f"/api/sessions/{sid}/redo").json()
        self.assertEqual(data["summary"]["user_labeled"], 9)

        response = self.client.post(f"/api/sessions/{sid}/save")
        self.assertEqual(response.status_code, 200)
        saved = response.json()
        self.assertEqual(saved["measurement_id"], "m-api")
        self.assertEqual(saved["edge_count"], 9)
        self.assertIsNotNone(routes._service.store.get("m-api"))

        self.assertEqual(self.client.get(f"/api/sessions/{sid}").status_code, 404)

    def test_reset_and_cancel(self):
        sid = self.start()["session_id"]
        self.client.post(f"/api/sessions/{sid}/detect")
        data = self.client.post(f"/api/sessions/{sid}/reset").json()
        self.assertEqual(data["summary"]["unlabeled"], 9)

        self.assertEqual(self.client.delete(f"/api/sessions/{sid}").status_code, 204)
        self.assertEqual(self.client.get(f"/api/sessions/{sid}").status_code, 404)

    def test_unknown_session_and_edge(self):
        self.assertEqual(self.client.get("/api/sessions/missing").status_code, 404)

        sid = self.start()["session_id"]
        response = self.client.put(
            f"/api/sessions/{sid}/edges/edge-99", json={"edge_type": "Ridge"},
        )
        self.assertEqual(response.status_code, 404)

        response = self.client.put(
            f"/api/sessions/{sid}/edges/edge-0", json={"edge_type": "Gutter"},
        )
        self.assertEqual(response.status_code, 422)

    def test_failed_save_keeps_session(self):
        sid = self.start()["session_id"]
        with patch.object(
            routes._service, "save_session", side_effect=SaveError("store unavailable"),
        ):
            response = self.client.post(f"/api/sessions/{sid}/save")

        self.assertEqual(response.status_code, 502)
        self.assertEqual(self.client.get(f"/api/sessions/{sid}").status_code, 200)


if __name__ == "__main__":
    unittest.main(verbosity=2)

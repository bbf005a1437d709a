"""Tests for the Flask REST service."""
from unittest.mock import MagicMock

import pytest

from models.exceptions import Conflict
from web.app import create_app

STRING_ID = "test-tenant-log-trigger-FIRING-1-1"


def _string_payload(**overrides):
    payload = {
        "type": "STRING",
        "tenantId": "test-tenant",
        "triggerId": "log-trigger",
        "triggerMode": "FIRING",
        "dataId": "app-log",
        "operator": "CONTAINS",
        "pattern": "ERROR",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def app(memory_definitions, alerts_service):
    app = create_app({}, {"definitions": memory_definitions, "alerts": alerts_service})
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def test_status(client):
    resp = client.get("/status")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "STARTED"


class TestStringConditions:
    def test_empty_list_is_204(self, client):
        resp = client.get("/conditions/string/")
        assert resp.status_code == 204
        assert resp.data == b""

    def test_create_and_list(self, client):
        resp = client.post("/conditions/string/", json=_string_payload())
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["conditionId"] == STRING_ID
        assert body["pattern"] == "ERROR"

        resp = client.get("/conditions/string/")
        assert resp.status_code == 200
        assert [c["conditionId"] for c in resp.get_json()] == [STRING_ID]

    def test_create_without_type_tag(self, client):
        payload = _string_payload()
        del payload["type"]
        assert client.post("/conditions/string/", json=payload).status_code == 200

    def test_create_duplicate_is_400(self, client):
        client.post("/conditions/string/", json=_string_payload())
        resp = client.post("/conditions/string/", json=_string_payload())
        assert resp.status_code == 400
        assert resp.get_json() == {"errorMsg": "Existing condition or invalid ID"}

    def test_create_without_id_is_400(self, client):
        resp = client.post("/conditions/string/", json={"operator": "EQUAL", "pattern": "x"})
        assert resp.status_code == 400
        assert resp.get_json() == {"errorMsg": "Existing condition or invalid ID"}

    @pytest.mark.parametrize("kwargs", [
        {"data": "not json", "content_type": "text/plain"},
        {"json": _string_payload(operator="LIKE")},
        {"json": _string_payload(type="THRESHOLD")},
        {"json": ["not", "an", "object"]},
        {"json": _string_payload(operator="MATCH", pattern="(")},
    ])
    def test_create_invalid_payload_is_400(self, client, kwargs):
        resp = client.post("/conditions/string/", **kwargs)
        assert resp.status_code == 400
        assert resp.get_json() == {"errorMsg": "Existing condition or invalid ID"}
        assert client.get("/conditions/string/").status_code == 204

    def test_create_losing_race_is_400(self, alerts_service):
        store = MagicMock()
        store.get_condition.return_value = None
        store.add_condition.side_effect = Conflict("taken")
        client = create_app({}, {"definitions": store, "alerts": alerts_service}).test_client()

        resp = client.post("/conditions/string/", json=_string_payload())
        assert resp.status_code == 400
        assert resp.get_json() == {"errorMsg": "Existing condition or invalid ID"}

    def test_get_one(self, client):
        client.post("/conditions/string/", json=_string_payload())
        resp = client.get(f"/conditions/string/{STRING_ID}")
        assert resp.status_code == 200
        assert resp.get_json()["operator"] == "CONTAINS"

    def test_get_missing_is_404(self, client):
        resp = client.get("/conditions/string/nope")
        assert resp.status_code == 404
        assert resp.get_json() == {"errorMsg": "Condition ID nope not found or invalid ID"}

    def test_get_other_variant_is_404(self, client, memory_definitions, threshold_condition):
        memory_definitions.add_condition(threshold_condition)
        resp = client.get(f"/conditions/string/{threshold_condition.condition_id}")
        assert resp.status_code == 404
        assert client.get(f"/conditions/threshold/{threshold_condition.condition_id}").status_code == 200

    def test_list_only_own_variant(self, client, memory_definitions, threshold_condition):
        memory_definitions.add_condition(threshold_condition)
        assert client.get("/conditions/string/").status_code == 204
        assert len(client.get("/conditions/threshold/").get_json()) == 1

    def test_update(self, client, memory_definitions):
        client.post("/conditions/string/", json=_string_payload())
        resp = client.put(f"/conditions/string/{STRING_ID}",
                          json=_string_payload(conditionId=STRING_ID, pattern="FATAL"))
        assert resp.status_code == 200
        assert memory_definitions.get_condition(STRING_ID).pattern == "FATAL"

    def test_update_id_mismatch_is_404(self, client):
        client.post("/conditions/string/", json=_string_payload())
        resp = client.put("/conditions/string/other-id", json=_string_payload())
        assert resp.status_code == 404

    def test_update_missing_is_404(self, client):
        resp = client.put(f"/conditions/string/{STRING_ID}", json=_string_payload())
        assert resp.status_code == 404

    def test_update_without_body_is_404(self, client):
        resp = client.put(f"/conditions/string/{STRING_ID}", data="x", content_type="text/plain")
        assert resp.status_code == 404

    def test_delete(self, client, memory_definitions):
        client.post("/conditions/string/", json=_string_payload())
        resp = client.delete(f"/conditions/string/{STRING_ID}")
        assert resp.status_code == 200
        assert memory_definitions.get_condition(STRING_ID) is None
        assert client.delete(f"/conditions/string/{STRING_ID}").status_code == 404

    def test_delete_other_variant_is_404(self, client, memory_definitions, threshold_condition):
        memory_definitions.add_condition(threshold_condition)
        resp = client.delete(f"/conditions/string/{threshold_condition.condition_id}")
        assert resp.status_code == 404
        assert memory_definitions.get_condition(threshold_condition.condition_id) is not None


def _threshold_eval(value=1001.0, mode="FIRING", operator="GT"):
    return {
        "condition": {
            "type": "THRESHOLD", "tenantId": "test-tenant", "triggerId": "rt-trigger-jboss",
            "triggerMode": mode, "dataId": "rt-jboss-data", "operator": operator,
            "threshold": 1000.0,
        },
        "data": {"type": "NUMERIC", "id": "rt-jboss-data", "timestamp": 1000, "value": value},
    }


def _create_alert(client, **overrides):
    payload = {"tenantId": "test-tenant", "triggerId": "rt-trigger-jboss",
               "severity": "HIGH", "evalSets": [[_threshold_eval()]]}
    payload.update(overrides)
    return client.post("/alerts/", json=payload)


class TestAlerts:
    def test_empty_list_is_204(self, client):
        assert client.get("/alerts/").status_code == 204

    def test_create(self, client, recorder):
        resp = _create_alert(client)
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "OPEN"
        assert body["severity"] == "HIGH"
        assert body["evalSets"][0][0]["data"]["value"] == 1001.0
        assert len(recorder.messages) == 1

    def test_back_to_back_creates_do_not_collide(self, client):
        first = _create_alert(client)
        second = _create_alert(client)
        assert first.status_code == 200 and second.status_code == 200
        assert first.get_json()["alertId"] != second.get_json()["alertId"]
        assert len(client.get("/alerts/").get_json()) == 2

    def test_create_with_empty_sets_is_400(self, client):
        assert _create_alert(client, evalSets=[]).status_code == 400
        assert _create_alert(client, evalSets=[[]]).status_code == 400

    def test_create_with_mismatched_pair_is_400(self, client):
        bad = _threshold_eval()
        bad["data"] = {"type": "AVAILABILITY", "id": "rt-jboss-data", "value": "DOWN"}
        assert _create_alert(client, evalSets=[[bad]]).status_code == 400

    def test_create_with_bad_severity_is_400(self, client):
        assert _create_alert(client, severity="URGENT").status_code == 400

    def test_ack_and_resolve(self, client):
        alert_id = _create_alert(client).get_json()["alertId"]

        resp = client.put(f"/alerts/ack/{alert_id}?ackBy=jdoe&ackNotes=looking")
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "ACKNOWLEDGED"
        assert resp.get_json()["ackBy"] == "jdoe"

        resp = client.put(f"/alerts/ack/{alert_id}?ackBy=jdoe")
        assert resp.status_code == 400

        resp = client.put(f"/alerts/resolve/{alert_id}?resolvedBy=jdoe",
                          json={"resolvedEvalSets": [[_threshold_eval(998.0, "AUTORESOLVE", "LTE")]]})
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "RESOLVED"
        assert body["resolvedEvalSets"][0][0]["data"]["value"] == 998.0

        assert client.get("/alerts/?status=RESOLVED").get_json()[0]["alertId"] == alert_id
        assert client.get("/alerts/?status=OPEN").status_code == 204

    def test_manual_resolve_without_body(self, client):
        alert_id = _create_alert(client).get_json()["alertId"]
        resp = client.put(f"/alerts/resolve/{alert_id}?resolvedBy=jdoe")
        assert resp.status_code == 200
        assert resp.get_json()["resolvedEvalSets"] is None

    def test_get_alert(self, client):
        alert_id = _create_alert(client).get_json()["alertId"]
        assert client.get(f"/alerts/{alert_id}").status_code == 200
        resp = client.get("/alerts/missing")
        assert resp.status_code == 404
        assert resp.get_json() == {"errorMsg": "Alert ID missing not found"}

    def test_unknown_alert_transition_is_404(self, client):
        assert client.put("/alerts/ack/missing?ackBy=jdoe").status_code == 404
        assert client.put("/alerts/resolve/missing").status_code == 404

    def test_bad_status_filter_is_400(self, client):
        assert client.get("/alerts/?status=BOGUS").status_code == 400

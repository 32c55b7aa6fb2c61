"""
Integration tests for the HTTP API.

Run with: BEEYARD_ENV=test pytest src/beeyard/api/api_test.py -v
"""

from unittest.mock import patch

import pytest

from beeyard.api import data_service


class TestApiaries:
    """Tests for /api/apiaries"""

    def test_list(self, client, sample_tree):
        response = client.get("/api/apiaries")

        assert response.status_code == 200
        assert [a["id"] for a in response.get_json()["data"]] == [1, 2]

    def test_create_and_get(self, client):
        response = client.post("/api/apiaries", json={"id": 0, "name": "Meadow", "location_lat": 1.0})

        assert response.status_code == 201
        fetched = client.get("/api/apiaries/0").get_json()["data"]
        assert fetched["name"] == "Meadow"
        assert fetched["location_lat"] == 1.0

    def test_update(self, client, sample_apiary):
        response = client.put(f"/api/apiaries/{sample_apiary.id}", json={"name": "Renamed"})

        assert response.status_code == 200
        assert client.get(f"/api/apiaries/{sample_apiary.id}").get_json()["data"]["name"] == "Renamed"

    def test_get_missing_is_404(self, client):
        response = client.get("/api/apiaries/404")

        assert response.status_code == 404
        assert response.get_json()["status"] == "empty"

    @pytest.mark.parametrize(
        "body",
        [None, {"name": "no id"}, {"id": "abc"}, {"id": 1, "last_revision": "tuesday"}],
    )
    def test_invalid_body_is_400(self, client, body):
        response = client.post("/api/apiaries", json=body)

        assert response.status_code == 400

    def test_delete_cascades(self, client, sample_tree):
        response = client.delete("/api/apiaries/1")

        assert response.status_code == 200
        assert response.get_json()["data"]["records_deleted"] == 6
        assert client.get(f"/api/hives/{sample_tree[1][0]}").status_code == 404

    def test_delete_missing_is_500(self, client):
        assert client.delete("/api/apiaries/9").status_code == 500

    def test_delete_all(self, client, sample_tree):
        response = client.delete("/api/apiaries")

        assert response.status_code == 200
        assert client.get("/api/apiaries").get_json()["data"] == []

    def test_next_id(self, client, sample_tree):
        assert client.get("/api/apiaries/next-id").get_json()["data"] == 3


class TestHives:
    """Tests for /api/apiaries/<id>/hives and /api/hives"""

    def test_list_by_apiary(self, client, sample_tree):
        response = client.get("/api/apiaries/2/hives")

        assert [h["id"] for h in response.get_json()["data"]] == sample_tree[2]

    def test_list_for_missing_apiary_is_503(self, client):
        assert client.get("/api/apiaries/50/hives").status_code == 503

    def test_save_hive(self, client, sample_apiary):
        response = client.post(f"/api/apiaries/{sample_apiary.id}/hives", json={"id": 7, "name": "New"})

        assert response.status_code == 201
        assert response.get_json()["data"]["apiary_id"] == sample_apiary.id
        assert client.get("/api/hives/7").get_json()["data"]["apiary_id"] == sample_apiary.id

    def test_save_hive_in_missing_apiary_is_500(self, client):
        assert client.post("/api/apiaries/50/hives", json={"id": 7}).status_code == 500

    def test_get_with_recordings(self, client, sample_hive, sample_records):
        response = client.get(f"/api/hives/{sample_hive.id}?recordings=true")

        data = response.get_json()["data"]
        assert [r["date"] for r in data["recordings"]] == ["2024-01-01", "2024-01-02"]
        assert [r["timestamp"] for r in data["recordings"][0]["records"]] == [
            "2024-01-01T08:00:00",
            "2024-01-01T20:00:00",
        ]

    def test_get_without_recordings(self, client, sample_hive, sample_records):
        data = client.get(f"/api/hives/{sample_hive.id}").get_json()["data"]

        assert "recordings" not in data

    def test_delete(self, client, sample_tree):
        response = client.delete("/api/hives/0")

        assert response.get_json()["data"]["records_deleted"] == 3

    def test_next_id(self, client, sample_tree):
        assert client.get("/api/hives/next-id").get_json()["data"] == 4


class TestRecords:
    """Tests for /api/hives/<id>/records"""

    def test_save_record(self, client, sample_hive):
        response = client.post(
            f"/api/hives/{sample_hive.id}/records",
            json={"id": 0, "timestamp": "2024-01-01T10:00:00", "num_bees": 5},
        )

        assert response.status_code == 201
        assert response.get_json()["data"]["hive_id"] == sample_hive.id

    def test_offset_timestamp_stays_on_its_clock_day(self, client, sample_hive):
        response = client.post(
            f"/api/hives/{sample_hive.id}/records",
            json={"id": 0, "timestamp": "2024-01-01T23:30:00-05:00"},
        )

        assert response.get_json()["data"]["timestamp"] == "2024-01-01T23:30:00"
        day = client.get(f"/api/hives/{sample_hive.id}/recordings/2024-01-01").get_json()["data"]
        assert [r["id"] for r in day["records"]] == [0]

    def test_record_without_timestamp_is_400(self, client, sample_hive):
        response = client.post(f"/api/hives/{sample_hive.id}/records", json={"id": 0})

        assert response.status_code == 400

    def test_save_batch(self, client, sample_hive, sample_records):
        response = client.post(
            f"/api/hives/{sample_hive.id}/records/batch",
            json=[{"timestamp": "2024-01-03T10:00:00"}, {"timestamp": "2024-01-03T11:00:00"}],
        )

        assert response.status_code == 201
        assert [r["id"] for r in response.get_json()["data"]] == [3, 4]
        assert client.get("/api/records/next-id").get_json()["data"] == 5

    def test_batch_must_be_a_list(self, client, sample_hive):
        response = client.post(f"/api/hives/{sample_hive.id}/records/batch", json={"timestamp": "x"})

        assert response.status_code == 400


class TestRecordings:
    """Tests for /api/hives/<id>/recording(s)"""

    def test_range(self, client, sample_hive, sample_records):
        response = client.get(f"/api/hives/{sample_hive.id}/recording?start=2024-01-01&end=2024-01-02")

        data = response.get_json()["data"]
        assert data["date"] == "2024-01-01"
        assert len(data["records"]) == 3

    def test_single_day(self, client, sample_hive, sample_records):
        data = client.get(f"/api/hives/{sample_hive.id}/recordings/2024-01-02").get_json()["data"]

        assert [r["id"] for r in data["records"]] == [2]

    def test_missing_start_is_400(self, client, sample_hive):
        assert client.get(f"/api/hives/{sample_hive.id}/recording").status_code == 400

    def test_bad_day_is_400(self, client, sample_hive):
        assert client.get(f"/api/hives/{sample_hive.id}/recordings/someday").status_code == 400

    def test_missing_hive_is_503(self, client):
        assert client.get("/api/hives/99/recordings/2024-01-01").status_code == 503

    def test_delete_day(self, client, sample_hive, sample_records):
        response = client.delete(f"/api/hives/{sample_hive.id}/recordings/2024-01-01")

        assert response.status_code == 200
        assert response.get_json()["data"] == {"date": "2024-01-01", "records_deleted": 2}
        remaining = client.get(f"/api/hives/{sample_hive.id}?recordings=true").get_json()["data"]
        assert [r["date"] for r in remaining["recordings"]] == ["2024-01-02"]


def test_health(client):
    assert client.get("/api/health").get_json() == {"status": "ok"}


class TestConnections:
    """Each request works on its own store connection"""

    def test_each_request_opens_and_closes_its_own(self, app):
        handles = []
        for _ in range(2):
            with app.test_request_context("/api/apiaries"):
                handles.append(data_service().database)
                assert handles[-1].is_open

        assert handles[0] is not handles[1]
        assert not any(h.is_open for h in handles)

    def test_same_request_reuses_its_connection(self, app):
        with app.test_request_context("/api/apiaries"):
            assert data_service() is data_service()

    def test_requests_without_store_access_open_nothing(self, app):
        with patch("beeyard.api.Database") as database:
            app.test_client().get("/api/health")

        database.assert_not_called()

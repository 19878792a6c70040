"""
Tests for POST /{subnet}/measurement and GET /{subnet}/retrieval-success-rate
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.daily_measurement import DailyMeasurement
from app.models.geo_measurement import GeoMeasurement


@pytest.fixture
def history(db):
    """Walrus counters for 2024-01-01 .. 2024-01-05 plus an arweave row that must never leak in"""
    for offset, (total, successful) in enumerate([(10, 9), (20, 15), (5, 0), (7, 7), (1, 1)]):
        db.add(DailyMeasurement(
            subnet="walrus",
            day=date(2024, 1, 1 + offset),
            total=total,
            successful=successful,
        ))
    db.add(DailyMeasurement(subnet="arweave", day=date(2024, 1, 2), total=99, successful=98))
    db.commit()


def test_three_successes_then_todays_rate(client):
    for _ in range(3):
        response = client.post("/walrus/measurement", json={"retrievalSucceeded": True})
        assert response.status_code == 200
        assert response.json() == {"success": True}

    response = client.get("/walrus/retrieval-success-rate")
    assert response.status_code == 200
    assert response.json() == [
        {"day": date.today().isoformat(), "total": "3", "successful": "3"}
    ]


def test_counters_accumulate_mixed_results(client):
    outcomes = [True, False, True, True, False, False, True]
    for outcome in outcomes:
        client.post("/arweave/measurement", json={"retrievalSucceeded": outcome})

    rows = client.get("/arweave/retrieval-success-rate").json()
    assert len(rows) == 1
    assert rows[0]["total"] == str(len(outcomes))
    assert rows[0]["successful"] == str(sum(outcomes))


def test_subnets_are_counted_separately(client):
    client.post("/walrus/measurement", json={"retrievalSucceeded": True})
    client.post("/arweave/measurement", json={"retrievalSucceeded": False})
    client.post("/arweave/measurement", json={"retrievalSucceeded": False})

    walrus = client.get("/walrus/retrieval-success-rate").json()
    arweave = client.get("/arweave/retrieval-success-rate").json()
    assert [(r["total"], r["successful"]) for r in walrus] == [("1", "1")]
    assert [(r["total"], r["successful"]) for r in arweave] == [("2", "0")]


def test_no_events_today_returns_empty_list(client, history):
    response = client.get("/walrus/retrieval-success-rate")
    assert response.status_code == 200
    assert response.json() == []


def test_range_query_is_inclusive_and_ordered(client, history):
    response = client.get("/walrus/retrieval-success-rate?from=2024-01-01&to=2024-01-03")
    assert response.status_code == 200

    rows = response.json()
    assert [r["day"] for r in rows] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert rows[1] == {"day": "2024-01-02", "total": "20", "successful": "15"}
    for row in rows:
        assert isinstance(row["total"], str)
        assert int(row["total"]) >= int(row["successful"]) >= 0


def test_inverted_range_is_empty_not_an_error(client, history):
    response = client.get("/walrus/retrieval-success-rate?from=2024-01-05&to=2024-01-01")
    assert response.status_code == 200
    assert response.json() == []


def test_only_from_defaults_to_until_today(client, history):
    response = client.get("/walrus/retrieval-success-rate?from=2024-01-04")
    assert [r["day"] for r in response.json()] == ["2024-01-04", "2024-01-05"]


def test_counters_beyond_double_precision_stay_exact(client, db):
    huge = 2 ** 53 + 1
    db.add(DailyMeasurement(subnet="walrus", day=date(2024, 2, 1), total=huge, successful=huge - 2))
    db.commit()

    rows = client.get("/walrus/retrieval-success-rate?from=2024-02-01&to=2024-02-01").json()
    assert rows == [{"day": "2024-02-01", "total": "9007199254740993", "successful": "9007199254740991"}]


def test_upsert_increments_existing_row(client, db):
    db.add(DailyMeasurement(subnet="walrus", day=date.today(), total=41, successful=40))
    db.commit()

    client.post("/walrus/measurement", json={"retrievalSucceeded": False})

    rows = client.get("/walrus/retrieval-success-rate").json()
    assert rows[0]["total"] == "42"
    assert rows[0]["successful"] == "40"


@pytest.mark.parametrize("subnet", ["filecoin", "WALRUS", "walrus2", "geo_filecoin"])
def test_unknown_subnet_is_rejected(client, db, subnet):
    response = client.post(f"/{subnet}/measurement", json={"retrievalSucceeded": True})
    assert response.status_code == 422
    assert client.get(f"/{subnet}/retrieval-success-rate").status_code == 422
    assert db.query(DailyMeasurement).count() == 0


@pytest.mark.parametrize("body", [{}, {"retrievalSucceeded": None}, {"retrievalSucceeded": "maybe"}])
def test_missing_or_invalid_flag_is_rejected(client, db, body):
    response = client.post("/walrus/measurement", json=body)
    assert response.status_code == 422
    assert db.query(DailyMeasurement).count() == 0


def test_malformed_dates_are_rejected(client):
    assert client.get("/walrus/retrieval-success-rate?from=yesterday").status_code == 422
    assert client.get("/walrus/retrieval-success-rate?to=2024-13-01").status_code == 422


def test_geo_filecoin_measurement_goes_through_geo_route(client, db):
    """The dedicated geo route wins over /{subnet}/measurement and stores a detail row"""
    response = client.post("/geo-filecoin/measurement", json={"retrievalSucceeded": True})
    assert response.status_code == 200

    rows = client.get("/geo-filecoin/retrieval-success-rate").json()
    assert [(r["total"], r["successful"]) for r in rows] == [("1", "1")]
    assert db.query(GeoMeasurement).count() == 1


def test_root():
    response = TestClient(app).get("/")
    assert response.status_code == 200
    assert "running" in response.json()["message"]

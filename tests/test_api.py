from fastapi.testclient import TestClient

from tour_builder.catalog import TourCatalog
from tour_builder.main import SelectionPayload, app
from tour_builder.schemas import EmptySelection, JoinAndLeave, Tour

RED_LINE = {
    "id": "1",
    "slug": "red-line-paris-rome",
    "title": "Red Line - Paris to Rome",
    "line": "RED",
    "durationDays": 7,
    "fullStops": [
        {"city": "Paris", "country": "France", "days": 2},
        {"city": "Lucerne", "country": "Switzerland", "days": 3},
        {"city": "Rome", "country": "Italy", "days": 2},
    ],
    "regularPricePerPerson": 1000,
    "promoPricePerPerson": 800,
    "basePricePerDay": 160,
}
BLUE_LINE = {
    "id": "2",
    "slug": "blue-line-venice",
    "title": "Blue Line - Venice",
    "line": "BLUE",
    "durationDays": 2,
    "fullStops": [{"city": "Venice"}, {"city": "Milan"}],
    "promoPricePerPerson": 300,
}


def test_itinerary_endpoint_splices_catalog_payloads():
    client = TestClient(app)

    response = client.post(
        "/api/itinerary",
        json={
            "base": RED_LINE,
            "insert": BLUE_LINE,
            "insert_after_day": 2,
            "selection": {"join_day": 0, "leave_day": 4},
            "passengers": 2,
            "departure": "2026-02-04",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["itinerary"]["total_days"] == 9
    assert [r["stop"]["city"] for r in body["itinerary"]["ranges"]] == [
        "Paris", "Lucerne", "Venice", "Milan", "Lucerne", "Rome",
    ]
    assert body["day_count"] == 5
    assert body["end_date"] == "2026-02-08"
    assert body["price"]["total"] == 2600
    assert body["custom_route"]["tour_slug"] == "blue-line-venice"


def test_itinerary_endpoint_rejects_out_of_range_splice():
    client = TestClient(app)

    response = client.post("/api/itinerary", json={"base": RED_LINE, "insert": BLUE_LINE, "insert_after_day": 7})

    assert response.status_code == 422
    assert "insert_after_day=7" in response.json()["detail"]


def test_itinerary_endpoint_rejects_malformed_payload():
    client = TestClient(app)

    response = client.post("/api/itinerary", json={"insert": BLUE_LINE})

    assert response.status_code == 422
    assert isinstance(response.json()["detail"], list)


def test_selection_endpoint_moves_nearest_boundary():
    client = TestClient(app)

    response = client.post("/api/selection", json={"selection": {"join_day": 2, "leave_day": 4}, "day": 6})

    assert response.status_code == 200
    assert response.json() == {"kind": "join_and_leave", "join_day": 2, "leave_day": 6}


def test_selection_endpoint_rejects_half_selection():
    client = TestClient(app)

    response = client.post("/api/selection", json={"selection": {"join_day": 2}, "day": 6})

    assert response.status_code == 422


def test_price_endpoint_clamps_passengers():
    client = TestClient(app)

    response = client.post("/api/price", json={"base": RED_LINE, "passengers": 0})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1000
    assert body["per_person_lines"] == [{"label": "Per head", "value": 1000}]


def test_catalog_itinerary_endpoint(monkeypatch):
    catalog = TourCatalog([Tour.model_validate(RED_LINE), Tour.model_validate(BLUE_LINE)])
    monkeypatch.setattr("tour_builder.main.catalog", catalog)
    client = TestClient(app)

    response = client.get("/api/tours/red-line-paris-rome/itinerary", params={"insert": "2", "after": 6})

    assert response.status_code == 200
    body = response.json()
    assert body["itinerary"]["total_days"] == 9
    assert body["to_city"] == "Rome"


def test_catalog_itinerary_endpoint_unknown_tour(monkeypatch):
    monkeypatch.setattr("tour_builder.main.catalog", TourCatalog())
    client = TestClient(app)

    response = client.get("/api/tours/missing/itinerary")

    assert response.status_code == 404


def test_selection_endpoint_keeps_selection_inside_the_itinerary():
    client = TestClient(app)

    response = client.post(
        "/api/selection",
        json={"selection": {"join_day": 5, "leave_day": 10}, "day": 1, "total_days": 3},
    )

    assert response.status_code == 200
    assert response.json() == {"kind": "join_and_leave", "join_day": 1, "leave_day": 2}


def test_selection_payload_converts_to_shared_selection_types():
    assert isinstance(SelectionPayload().to_selection(), EmptySelection)
    assert SelectionPayload(join_day=1, leave_day=3).to_selection() == JoinAndLeave(join_day=1, leave_day=3)

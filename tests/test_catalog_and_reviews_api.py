from __future__ import annotations

SERVICE_PAYLOAD = {
    "name": "Bridal Makeup",
    "description": "Full bridal look with trial",
    "price": 15000,
    "duration": 180,
    "category": "bridal",
}

REVIEW_PAYLOAD = {
    "name": "Kavya",
    "email": "Kavya@Example.com",
    "rating": 5,
    "comment": "Loved the hair spa!",
    "service": "Hair Spa",
}


def test_service_crud(client):
    created = client.post("/api/services", json=SERVICE_PAYLOAD)
    assert created.status_code == 201
    service = created.json()["service"]
    assert service["name"] == "Bridal Makeup"
    assert service["category"] == "bridal"
    assert "createdAt" in service

    client.post("/api/services", json={**SERVICE_PAYLOAD, "name": "Haircut", "price": 500, "duration": 45, "category": "hair"})

    listing = client.get("/api/services").json()
    assert listing["count"] == 2
    hair = client.get("/api/services", params={"category": "hair"}).json()
    assert [s["name"] for s in hair["services"]] == ["Haircut"]

    updated = client.put(f"/api/services/{service['id']}", json={"price": 18000})
    assert updated.status_code == 200
    assert updated.json()["service"]["price"] == 18000
    assert updated.json()["service"]["duration"] == 180

    fetched = client.get(f"/api/services/{service['id']}").json()["service"]
    assert fetched["price"] == 18000

    deleted = client.delete(f"/api/services/{service['id']}")
    assert deleted.status_code == 200
    assert client.get(f"/api/services/{service['id']}").status_code == 404


def test_service_validation_and_missing(client):
    assert client.post("/api/services", json={**SERVICE_PAYLOAD, "category": "nails"}).status_code == 400
    assert client.post("/api/services", json={**SERVICE_PAYLOAD, "price": -1}).status_code == 400
    assert client.put("/api/services/65b1f0c2a1b2c3d4e5f60718", json={"price": 10}).status_code == 404

    empty = client.put("/api/services/65b1f0c2a1b2c3d4e5f60718", json={})
    assert empty.status_code == 400
    assert empty.json()["message"] == "No fields to update"

    missing = client.delete("/api/services/65b1f0c2a1b2c3d4e5f60718")
    assert missing.json() == {"success": False, "message": "Service not found"}


def test_reviews_wait_for_approval(client):
    submitted = client.post("/api/reviews", json={**REVIEW_PAYLOAD, "approved": True})
    assert submitted.status_code == 201
    review = submitted.json()["review"]
    assert review["approved"] is False
    assert review["verified"] is False
    assert review["email"] == "kavya@example.com"

    assert client.get("/api/reviews").json()["count"] == 0
    assert client.get("/api/reviews/all").json()["count"] == 1

    approved = client.put(f"/api/reviews/{review['id']}/approve")
    assert approved.status_code == 200
    assert approved.json()["review"]["approved"] is True

    public = client.get("/api/reviews").json()
    assert [r["comment"] for r in public["reviews"]] == ["Loved the hair spa!"]

    assert client.delete(f"/api/reviews/{review['id']}").status_code == 200
    assert client.get("/api/reviews/all").json()["count"] == 0


def test_review_validation_and_missing(client):
    assert client.post("/api/reviews", json={**REVIEW_PAYLOAD, "rating": 6}).status_code == 400
    assert client.post("/api/reviews", json={**REVIEW_PAYLOAD, "comment": "x" * 501}).status_code == 400

    missing = client.put("/api/reviews/65b1f0c2a1b2c3d4e5f60718/approve")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Review not found"

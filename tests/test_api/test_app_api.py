# tests/test_api/test_app_api.py
from core.errors import StoreFailure
from core.services.loan_ledger import LoanLedger

def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"success": True, "status": "ok"}

def test_unknown_route_uses_envelope(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json()["success"] is False

def test_validation_error_envelope(client):
    response = client.get("/api/books/not-a-number")
    assert response.status_code == 422
    data = response.json()
    assert data["success"] is False
    assert data["message"].startswith("Invalid request: book_id")

def test_store_failure_is_500(client, monkeypatch):
    """Store failures reach the client as a generic 500."""
    def broken_listing(self, loan_filter):
        raise StoreFailure("Could not list loans")

    monkeypatch.setattr(LoanLedger, "list_loans", broken_listing)

    response = client.get("/api/loans")
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error"}

def test_cors_preflight(client):
    response = client.options("/api/books", headers={
        "Origin": "http://localhost:4200",
        "Access-Control-Request-Method": "POST",
    })
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:4200"

"""
Tests for the FastAPI page request dependency.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pagewise.dependencies import PageRequestDep


@pytest.fixture
def client():
    """
    Provides a test client for an app echoing the parsed page request.

    Returns:
        TestClient: Client for the test app
    """
    app = FastAPI()

    @app.get("/posts")
    async def list_posts(page_request: PageRequestDep):
        return page_request.model_dump()

    return TestClient(app)


class TestPageRequestParams:
    """Tests for page_request_params."""

    def test_defaults(self, client):
        """Test missing parameters use defaults."""
        response = client.get("/posts")

        assert response.status_code == 200
        assert response.json() == {
            "page": 1,
            "per_page": None,
            "total_entries": None,
        }

    def test_explicit_values(self, client):
        """Test page and per_page are parsed."""
        response = client.get("/posts", params={"page": 3, "per_page": 25})

        assert response.json()["page"] == 3
        assert response.json()["per_page"] == 25

    def test_page_below_one_clamped(self, client):
        """Test page numbers below 1 become 1."""
        response = client.get("/posts", params={"page": -4})

        assert response.status_code == 200
        assert response.json()["page"] == 1

    @pytest.mark.parametrize("per_page", [0, -1])
    def test_non_positive_per_page_rejected(self, client, per_page):
        """Test non-positive per_page is rejected with 422."""
        response = client.get("/posts", params={"per_page": per_page})

        assert response.status_code == 422

    @pytest.mark.parametrize("page", ["abc", "-1", "0", "2.5", ""])
    def test_invalid_page_becomes_first(self, client, page):
        """Test non-numeric and non-positive pages become page 1."""
        response = client.get("/posts", params={"page": page})

        assert response.status_code == 200
        assert response.json()["page"] == 1

    def test_non_numeric_per_page_rejected(self, client):
        """Test non-numeric per_page is rejected with 422."""
        response = client.get("/posts", params={"per_page": "abc"})

        assert response.status_code == 422

"""
BDD step definitions for the health feature (pytest-bdd).
Gherkin requirements mapped onto HTTP calls through the sync TestClient.
"""

import pytest
from fastapi.testclient import TestClient
from pytest_bdd import parsers, scenarios, then, when

from portfolio_api.main import app

scenarios("../features/health.feature")


@pytest.fixture
def http():
    # No lifespan: these scenarios never reach Redis or the database
    return TestClient(app)


@pytest.fixture
def response():
    """Store last response for then steps."""
    return {}


@when(parsers.parse('I request "{method}" "{path}"'))
def request_path(http, response, method, path):
    r = http.request(method, path)
    response["status"] = r.status_code
    response["body"] = r.json()


@then(parsers.parse("the response status should be {status:d}"))
def status_is(response, status):
    assert response["status"] == status


@then(parsers.parse('the response body should have "{key}" equals "{value}"'))
def body_field_equals(response, key, value):
    assert response["body"].get(key) == value

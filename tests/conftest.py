# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from quickcheck.api.http import app

from tests.fixtures.deals import cash_flow_beast, section8_example, standard_example


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def standard_raw():
    return standard_example()


@pytest.fixture
def section8_raw():
    return section8_example()


@pytest.fixture
def go_raw():
    return cash_flow_beast()

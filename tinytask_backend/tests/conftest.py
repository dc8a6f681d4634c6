from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.api.repositories import InMemoryRepository
from src.api.service import TaskService
from src.api.settings import get_settings


@pytest.fixture()
def repo() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture()
def service(repo: InMemoryRepository) -> TaskService:
    return TaskService(repo)


@pytest.fixture()
def app():
    """A fresh application per test, so ids always start at 1."""
    return create_app(get_settings())


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)

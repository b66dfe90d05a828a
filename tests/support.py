"""Shared helpers: an in-memory SQLite database and an app wired to it."""

from collections.abc import Generator

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from blog_api.core.config import get_settings
from blog_api.core.database import build_engine, get_db
from blog_api.main import create_app
from blog_api.models import Base
from blog_api.scripts.seed_categories import seed_categories

API = "/api/v1"


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with all tables and the fixed categories."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with factory() as db:
        seed_categories(db)
    return factory


def make_app(factory: sessionmaker) -> FastAPI:
    application = create_app(get_settings())

    def override_get_db() -> Generator[Session, None, None]:
        db = factory()
        try:
            yield db
        finally:
            db.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


def register(
    client: TestClient,
    name: str,
    email: str,
    password: str = "secret1",
) -> dict:
    """Register through the API (which also logs the client in) and return the user payload."""
    response = client.post(
        f"{API}/auth/register",
        json={
            "name": name,
            "email": email,
            "password": password,
            "password_confirmation": password,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_post(client: TestClient, title: str = "Hello World", **overrides: object) -> dict:
    body = {
        "title": title,
        "subtitle": "A first post",
        "content": {"type": "doc", "content": [{"type": "text", "text": "hi"}]},
        "image": "https://res.cloudinary.com/demo-cloud/image/upload/v1/blog-api/cover.jpg",
        "category": "Technology",
    }
    body.update(overrides)
    response = client.post(f"{API}/posts", json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]

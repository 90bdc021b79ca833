"""Global fixtures: in-memory SQLite, FastAPI TestClient and a fixed "today"."""
import os

# Settings se leen al importar el paquete
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TZ"] = "America/Mexico_City"

from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from microgreens.main import app
from microgreens.services.auth_service import create_user
from microgreens.utils.db import Base, SessionLocal, engine, init_db
from microgreens.utils.dependencies import get_today

TODAY = date(2025, 1, 12)


def make_siembra(**kwargs):
    """Siembra en memoria con valores razonables; cualquier campo se puede sobreescribir."""
    data = {
        "siembra_id": "s1",
        "tipo_microgreen": "Rábano",
        "variedad_id": None,
        "fecha_siembra": date(2025, 1, 5),
        "fecha_cupula": None,
        "fecha_luz": None,
        "fecha_esperada_cosecha": date(2025, 1, 12),
        "fecha_real_cosecha": None,
        "cantidad_sembrada": Decimal("40"),
        "ubicacion_bandeja": "A1",
        "notas": None,
        "created_at": datetime(2025, 1, 5, 9, 0),
        "updated_at": datetime(2025, 1, 5, 9, 0),
    }
    data.update(kwargs)
    return SimpleNamespace(**data)


# --------------------
# Fixtures
# --------------------
@pytest.fixture
def db_session():
    """Tablas limpias por prueba sobre la BD en memoria compartida."""
    Base.metadata.drop_all(bind=engine)
    init_db()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(db_session):
    """TestClient con el lifespan activo (carga de variedades) y hoy = TODAY."""
    app.dependency_overrides[get_today] = lambda: TODAY
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def user(db_session):
    return create_user(db_session, "grower", "Grower", "grower@example.com", "secreto123")


@pytest.fixture
def auth_headers(client, user):
    resp = client.post("/auth/token", data={"username": "grower", "password": "secreto123"})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}

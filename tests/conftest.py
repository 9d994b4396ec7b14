"""
Shared fixtures.

API tests run against both storage backends through the ``store``
fixture; the relational one uses an in-memory SQLite database.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from config.settings import Settings
from src.corretaje.api.main import create_app
from src.corretaje.db.session import create_all_tables, drop_all_tables
from src.corretaje.db.memory import InMemoryStore
from src.corretaje.db.store import SqlStore


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, storage_backend="memory", database_url=None, log_format="console")


@pytest.fixture
def sql_engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_all_tables(engine)

    yield engine

    drop_all_tables(engine)
    engine.dispose()


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def sql_store(sql_engine):
    return SqlStore(sql_engine)


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Each API test runs once per storage backend."""
    if request.param == "memory":
        return request.getfixturevalue("memory_store")
    return request.getfixturevalue("sql_store")


@pytest.fixture
def client(settings, store):
    """Create a test client for a fresh application."""
    return TestClient(create_app(settings=settings, store=store))


@pytest.fixture
def sample_property_payload():
    """Sample property in the external API shape."""
    return {
        "titulo": "Departamento Moderno en Providencia",
        "descripcion": "Moderno departamento completamente amoblado.",
        "precio": 850000,
        "tipo": "departamento",
        "estado": "arriendo",
        "ubicacion": {
            "direccion": "Av. Providencia 1234",
            "comuna": "Providencia",
            "ciudad": "Santiago",
            "region": "Metropolitana",
        },
        "caracteristicas": {
            "dormitorios": 2,
            "banos": 2,
            "metrosCuadrados": 90,
            "estacionamientos": 1,
            "amoblado": True,
        },
        "amenidades": ["Gimnasio", "Terraza"],
        "imagenes": ["/uploads/depto-providencia-1.jpg"],
        "fechaDisponible": "2025-02-01",
        "garantia": "2 meses",
        "agente": {
            "nombre": "María González",
            "telefono": "+56 9 1234 5678",
            "email": "maria@corretajepremium.cl",
        },
    }


@pytest.fixture
def sample_inquiry_payload():
    """Sample contact form submission."""
    return {
        "nombre": "Juan",
        "apellido": "Pérez",
        "email": "juan.perez@example.com",
        "telefono": "+56 9 2222 3333",
        "tipoServicio": "arriendo",
        "tipoPropiedad": "departamento",
        "ubicacionPreferida": "Providencia",
        "presupuestoMaximo": 900000,
        "dormitorios": 2,
        "amenidadesDeseadas": ["Gimnasio"],
        "creditoPreAprobado": False,
        "comentarios": "Busco algo cerca del metro.",
    }

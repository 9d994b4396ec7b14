"""
Tests for application-level endpoints and error handling.
"""
from unittest.mock import patch

import structlog
from fastapi.testclient import TestClient

from src.corretaje.api.main import create_app
from src.corretaje.db.memory import InMemoryStore
from src.corretaje.db.store import SqlStore
from src.corretaje.utils.logger import app_context_processor


class TestHealth:

    def test_health(self, client, store):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["database"] == "connected"
        assert body["storage"] == store.backend
        assert "timestamp" in body

    def test_health_without_database(self, settings):
        client = TestClient(create_app(settings=settings, store=SqlStore(None)))

        body = client.get("/health").json()

        assert body["status"] == "OK"
        assert body["database"] == "not_configured"
        assert body["storage"] == "sin configurar"

    def test_root(self, client):
        body = client.get("/").json()

        assert body["health"] == "/health"
        assert body["version"]


class TestGeneralStats:

    def test_empty_stats(self, client):
        response = client.get("/api/stats")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["propiedades"] == {
            "total": 0,
            "enVenta": 0,
            "enArriendo": 0,
            "porTipo": {},
            "precioPromedio": {"venta": 0, "arriendo": 0},
        }
        assert data["consultas"]["total"] == 0

    def test_stats_after_creates(self, client, sample_property_payload, sample_inquiry_payload):
        client.post("/api/propiedades", json=sample_property_payload)
        client.post("/api/propiedades", json=dict(sample_property_payload, precio=950000))
        client.post("/api/propiedades", json=dict(sample_property_payload, estado="venta", tipo="casa", precio=300000000))
        client.post("/api/consultas", json=sample_inquiry_payload)

        data = client.get("/api/stats").json()["data"]

        assert data["propiedades"]["total"] == 3
        assert data["propiedades"]["enArriendo"] == 2
        assert data["propiedades"]["porTipo"] == {"departamento": 2, "casa": 1}
        assert data["propiedades"]["precioPromedio"] == {"venta": 300000000, "arriendo": 900000}
        assert data["consultas"]["total"] == 1
        assert data["consultas"]["recientes"] == 1


class TestErrorHandling:

    def test_unknown_route(self, client):
        response = client.get("/api/inmuebles")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Ruta no encontrada"
        assert "GET /api/propiedades" in body["availableEndpoints"]
        assert "POST /api/consultas" in body["availableEndpoints"]

    def test_unsupported_method(self, client):
        response = client.patch("/api/propiedades/1", json={})

        assert response.status_code == 404
        assert response.json()["error"] == "Ruta no encontrada"

    def test_unconfigured_database(self, settings, sample_property_payload):
        client = TestClient(create_app(settings=settings, store=SqlStore(None)))

        listing = client.get("/api/propiedades")
        created = client.post("/api/propiedades", json=sample_property_payload)

        assert listing.status_code == 500
        assert listing.json()["error"] == "Error al obtener propiedades"
        assert "DATABASE_URL" in listing.json()["details"]
        assert created.status_code == 500
        assert created.json()["error"] == "Error al crear propiedades"

    def test_validation_runs_before_storage(self, settings):
        client = TestClient(create_app(settings=settings, store=SqlStore(None)))

        response = client.post("/api/consultas", json={"nombre": "Ana"})

        assert response.status_code == 400

    def test_unexpected_error(self, settings):
        store = InMemoryStore()
        client = TestClient(create_app(settings=settings, store=store), raise_server_exceptions=False)

        with patch.object(store.propiedades, "list", side_effect=RuntimeError("boom")):
            response = client.get("/api/propiedades")

        assert response.status_code == 500
        assert response.json() == {"error": "Error interno del servidor"}


class TestRequestId:

    def test_generated_when_absent(self, client):
        response = client.get("/health")

        assert response.headers["X-Request-ID"]

    def test_client_value_echoed(self, client):
        response = client.get("/api/propiedades", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"


class TestUploads:
    """Tests for listing image serving."""

    def test_serves_files_from_uploads_dir(self, settings, tmp_path):
        (tmp_path / "depto-providencia-1.jpg").write_bytes(b"\xff\xd8\xff\xe0imagen")
        app_settings = settings.model_copy(update={"uploads_dir": str(tmp_path)})
        client = TestClient(create_app(settings=app_settings, store=InMemoryStore()))

        response = client.get("/uploads/depto-providencia-1.jpg")

        assert response.status_code == 200
        assert response.content == b"\xff\xd8\xff\xe0imagen"
        assert response.headers["content-type"] == "image/jpeg"

    def test_missing_file(self, settings, tmp_path):
        app_settings = settings.model_copy(update={"uploads_dir": str(tmp_path)})
        client = TestClient(create_app(settings=app_settings, store=InMemoryStore()))

        assert client.get("/uploads/no-existe.jpg").status_code == 404

    def test_not_mounted_without_directory(self, settings, tmp_path):
        app_settings = settings.model_copy(update={"uploads_dir": str(tmp_path / "ausente")})
        app = create_app(settings=app_settings, store=InMemoryStore())

        assert all(getattr(route, "name", None) != "uploads" for route in app.routes)
        assert TestClient(app).get("/uploads/x.jpg").json()["error"] == "Ruta no encontrada"


class TestLoggingConfiguration:
    """Tests that the application's own settings drive logging."""

    def test_renderer_follows_injected_settings(self, settings):
        create_app(settings=settings.model_copy(update={"log_format": "console"}), store=InMemoryStore())
        assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)

        create_app(settings=settings.model_copy(update={"log_format": "json"}), store=InMemoryStore())
        assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)

    def test_app_context_uses_injected_settings(self, settings):
        app_settings = settings.model_copy(update={"environment": "staging", "storage_backend": "database"})

        event = app_context_processor(app_settings)(None, "info", {"event": "x"})

        assert event["environment"] == "staging"
        assert event["storage_backend"] == "database"
        assert event["service"] == "corretaje-api"

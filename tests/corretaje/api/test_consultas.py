"""
Tests for the inquiries endpoints.
"""
import pytest


@pytest.fixture
def inquiries(client, sample_inquiry_payload):
    compra = dict(sample_inquiry_payload, nombre="Rosa", tipoServicio="compra", prioridad="alta")
    records = []
    for payload in (sample_inquiry_payload, compra):
        response = client.post("/api/consultas", json=payload)
        assert response.status_code == 201
        records.append(response.json()["data"])
    return records


class TestCreateInquiry:

    def test_create(self, client, sample_inquiry_payload):
        response = client.post("/api/consultas", json=sample_inquiry_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Consulta enviada exitosamente. Te contactaremos pronto."
        data = body["data"]
        assert isinstance(data["id"], int)
        assert data["estado"] == "nueva"
        assert data["prioridad"] == "media"
        assert data["tipoServicio"] == "arriendo"
        assert data["amenidadesDeseadas"] == ["Gimnasio"]
        assert data["creditoPreAprobado"] is False

    def test_client_cannot_choose_initial_state(self, client, sample_inquiry_payload):
        data = client.post("/api/consultas", json=dict(sample_inquiry_payload, estado="completada")).json()["data"]

        assert data["estado"] == "nueva"

    @pytest.mark.parametrize(
        "email",
        ["juan", "juan@", "juan@example", "juan perez@example.com", "juan@example.com\n"],
    )
    def test_invalid_email(self, client, sample_inquiry_payload, email):
        response = client.post("/api/consultas", json=dict(sample_inquiry_payload, email=email))

        assert response.status_code == 400
        assert response.json()["error"] == "Formato de email inválido"

    def test_missing_required_fields(self, client):
        response = client.post("/api/consultas", json={"nombre": "Juan", "email": "juan@example.com"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Faltan campos requeridos"
        assert body["missing"] == ["apellido", "telefono", "tipoServicio"]

    def test_invalid_priority(self, client, sample_inquiry_payload):
        response = client.post("/api/consultas", json=dict(sample_inquiry_payload, prioridad="urgente"))

        assert response.status_code == 400
        assert response.json()["error"] == "Datos de consulta inválidos"


class TestListInquiries:

    def test_list_newest_first(self, client, inquiries):
        body = client.get("/api/consultas").json()

        assert body["meta"]["total"] == 2
        created = [i["fechaCreacion"] for i in body["data"]]
        assert created == sorted(created, reverse=True)

    def test_filters(self, client, inquiries):
        compra = client.get("/api/consultas", params={"tipoServicio": "compra"}).json()
        alta = client.get("/api/consultas", params={"prioridad": "alta"}).json()
        nuevas = client.get("/api/consultas", params={"estado": "nueva"}).json()

        assert [i["nombre"] for i in compra["data"]] == ["Rosa"]
        assert compra["meta"]["filtros"] == {"tipoServicio": "compra"}
        assert [i["nombre"] for i in alta["data"]] == ["Rosa"]
        assert nuevas["meta"]["total"] == 2

    def test_malformed_date_filter(self, client):
        response = client.get("/api/consultas", params={"fechaHasta": "31-12-2024"})

        assert response.status_code == 400


class TestInquiryById:

    def test_get(self, client, inquiries):
        target = inquiries[0]

        response = client.get(f"/api/consultas/{target['id']}")

        assert response.status_code == 200
        assert response.json()["data"] == target

    def test_get_missing(self, client):
        response = client.get("/api/consultas/42")

        assert response.status_code == 404
        assert response.json()["error"] == "Consulta no encontrada"

    def test_non_numeric_id(self, client):
        response = client.get("/api/consultas/uno")

        assert response.status_code == 400
        assert response.json()["error"] == "ID de consulta inválido"

    def test_update_state(self, client, inquiries):
        target = inquiries[0]

        response = client.put(f"/api/consultas/{target['id']}", json={"estado": "en_proceso"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == target["id"]
        assert data["estado"] == "en_proceso"
        assert data["email"] == target["email"]
        assert client.get("/api/consultas", params={"estado": "en_proceso"}).json()["meta"]["total"] == 1

    def test_update_invalid_email(self, client, inquiries):
        response = client.put(f"/api/consultas/{inquiries[0]['id']}", json={"email": "no-es-email"})

        assert response.status_code == 400

    def test_update_rejects_trailing_newline_in_email(self, client, inquiries):
        target = inquiries[0]

        response = client.put(f"/api/consultas/{target['id']}", json={"email": "rosa@example.com\n"})

        assert response.status_code == 400
        assert client.get(f"/api/consultas/{target['id']}").json()["data"]["email"] == target["email"]

    def test_update_missing(self, client):
        assert client.put("/api/consultas/42", json={"estado": "pendiente"}).status_code == 404

    def test_delete(self, client, inquiries):
        target = inquiries[1]

        response = client.delete(f"/api/consultas/{target['id']}")

        assert response.status_code == 200
        assert response.json()["message"] == "Consulta eliminada exitosamente"
        assert client.get("/api/consultas").json()["meta"]["total"] == 1
        assert client.delete(f"/api/consultas/{target['id']}").status_code == 404


class TestInquiryStats:

    def test_stats_route_is_not_an_id(self, client, inquiries):
        response = client.get("/api/consultas/stats")

        assert response.status_code == 200
        body = response.json()
        data = body["data"]
        assert data["total"] == 2
        assert data["porEstado"]["nueva"] == 2
        assert data["porTipoServicio"] == {"arriendo": 1, "compra": 1}
        assert data["porPrioridad"] == {"alta": 1, "media": 1, "baja": 0}
        assert data["recientes"] == 2
        assert "timestamp" in body["meta"]

    def test_empty_stats(self, client):
        data = client.get("/api/consultas/stats").json()["data"]

        assert data["total"] == 0
        assert data["porEstado"] == {"nueva": 0, "pendiente": 0, "en_proceso": 0, "completada": 0}

"""HTTP tests over FastAPI TestClient and in-memory SQLite (today = 2025-01-12)."""
import pytest


def _crear_siembra(client, headers, **kwargs):
    body = {
        "tipo_microgreen": "Mostaza",
        "fecha_siembra": "2025-01-05",
        "fecha_esperada_cosecha": "2025-01-12",
        "cantidad_sembrada": 40,
        "ubicacion_bandeja": "A1",
    }
    body.update(kwargs)
    resp = client.post("/siembras", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


# --------------------
# Auth / health
# --------------------
def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_login_and_me(client, auth_headers):
    resp = client.get("/auth/me", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["username"] == "grower"
    assert resp.json()["last_login_at"] is not None


def test_login_wrong_password(client, user):
    resp = client.post("/auth/token", data={"username": "grower", "password": "otra"})
    assert resp.status_code == 401


def test_endpoints_require_token(client):
    assert client.get("/siembras").status_code == 401
    resp = client.get("/siembras", headers={"Authorization": "Bearer basura"})
    assert resp.status_code == 401


# --------------------
# Siembras
# --------------------
def test_create_and_get_siembra_with_derived_fields(client, auth_headers):
    creada = _crear_siembra(client, auth_headers)
    assert creada["estado"] == "listo"
    assert creada["dias_desde_siembra"] == 7
    assert creada["dias_para_cosecha"] == 0
    assert creada["puede_cosecharse"] is True
    assert creada["eficiencia_pct"] is None

    resp = client.get(f"/siembras/{creada['siembra_id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["fecha_siembra"] == "2025-01-05"


def test_iso_timestamp_is_normalized_to_local_day(client, auth_headers):
    # Medianoche en Ciudad de México = 06:00 UTC
    creada = _crear_siembra(client, auth_headers, fecha_siembra="2025-01-05T06:00:00.000Z")
    assert creada["fecha_siembra"] == "2025-01-05"


def test_invalid_date_is_422(client, auth_headers):
    resp = client.post("/siembras", headers=auth_headers, json={
        "tipo_microgreen": "Mostaza", "fecha_siembra": "2025-02-30",
        "fecha_esperada_cosecha": "2025-03-05", "cantidad_sembrada": 10,
    })
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"


@pytest.mark.parametrize("fecha", ["20250105", "2025-01-05\n", 20250105])
def test_non_dashed_date_is_422(client, auth_headers, fecha):
    resp = client.post("/siembras", headers=auth_headers, json={
        "tipo_microgreen": "Mostaza", "fecha_siembra": fecha,
        "fecha_esperada_cosecha": "2025-01-12", "cantidad_sembrada": 10,
    })
    assert resp.status_code == 422


def test_expected_before_planting_is_rejected(client, auth_headers):
    resp = client.post("/siembras", headers=auth_headers, json={
        "tipo_microgreen": "Mostaza", "fecha_siembra": "2025-01-10",
        "fecha_esperada_cosecha": "2025-01-05", "cantidad_sembrada": 10,
    })
    assert resp.status_code == 422


def test_create_from_seeded_variety(client, auth_headers):
    variedades = client.get("/variedades", params={"q": "guisantes"}, headers=auth_headers).json()
    assert len(variedades) == 1
    creada = _crear_siembra(
        client, auth_headers,
        tipo_microgreen=None, variedad_id=variedades[0]["variedad_id"], fecha_esperada_cosecha=None,
    )
    assert creada["tipo_microgreen"] == "Guisantes"
    assert creada["fecha_esperada_cosecha"] == "2025-01-17"
    assert creada["fecha_luz"] == "2025-01-09"
    assert creada["estado"] == "creciendo"


def test_list_filters_and_pagination(client, auth_headers):
    _crear_siembra(client, auth_headers)
    _crear_siembra(client, auth_headers, fecha_siembra="2025-01-11", fecha_esperada_cosecha="2025-01-18",
                   ubicacion_bandeja="B1")

    resp = client.get("/siembras", headers=auth_headers)
    data = resp.json()
    assert data["total"] == 2
    assert [s["fecha_siembra"] for s in data["items"]] == ["2025-01-11", "2025-01-05"]

    listas = client.get("/siembras", params={"estado": "listo"}, headers=auth_headers).json()
    assert [s["fecha_siembra"] for s in listas["items"]] == ["2025-01-05"]

    en_b1 = client.get("/siembras", params={"bandeja": "B1"}, headers=auth_headers).json()
    assert en_b1["total"] == 1

    rango = client.get("/siembras", params={"desde": "2025-01-06", "hasta": "2025-01-31"},
                       headers=auth_headers).json()
    assert rango["total"] == 1

    bad = client.get("/siembras", params={"desde": "06/01/2025"}, headers=auth_headers)
    assert bad.status_code == 422
    assert bad.json()["error"] == "invalid_date_format"


def test_update_and_delete_siembra(client, auth_headers):
    creada = _crear_siembra(client, auth_headers)
    resp = client.patch(f"/siembras/{creada['siembra_id']}", headers=auth_headers,
                        json={"fecha_esperada_cosecha": "2025-01-15", "notas": "mover a luz"})
    assert resp.status_code == 200
    assert resp.json()["estado"] == "sembrado"
    assert resp.json()["dias_para_cosecha"] == 3
    assert resp.json()["notas"] == "mover a luz"

    assert client.delete(f"/siembras/{creada['siembra_id']}", headers=auth_headers).status_code == 204
    resp = client.get(f"/siembras/{creada['siembra_id']}", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"].startswith("siembra_not_found")


def test_stats_and_upcoming(client, auth_headers):
    _crear_siembra(client, auth_headers)
    _crear_siembra(client, auth_headers, fecha_siembra="2025-01-08", fecha_esperada_cosecha="2025-01-14")
    _crear_siembra(client, auth_headers, fecha_siembra="2025-01-10", fecha_esperada_cosecha="2025-01-20")

    stats = client.get("/siembras/stats", headers=auth_headers).json()
    assert stats["total"] == 3
    assert stats["listas"] == 1
    assert stats["sembradas"] == 2

    proximas = client.get("/siembras/proximas", headers=auth_headers).json()
    assert [s["fecha_esperada_cosecha"] for s in proximas] == ["2025-01-12", "2025-01-14"]
    amplias = client.get("/siembras/proximas", params={"dias": 10}, headers=auth_headers).json()
    assert len(amplias) == 3


# --------------------
# Cosechas
# --------------------
def test_harvest_flow(client, auth_headers):
    siembra = _crear_siembra(client, auth_headers)
    resp = client.post("/cosechas", headers=auth_headers, json={
        "siembra_id": siembra["siembra_id"], "fecha_cosecha": "2025-01-11",
        "peso_cosechado": 95.5, "calidad": 5,
    })
    assert resp.status_code == 201, resp.text
    cosecha = resp.json()
    assert cosecha["tipo_microgreen"] == "Mostaza"

    actual = client.get(f"/siembras/{siembra['siembra_id']}", headers=auth_headers).json()
    assert actual["estado"] == "cosechado"
    assert actual["fecha_real_cosecha"] == "2025-01-11"
    assert actual["eficiencia_pct"] == -14.3

    duplicada = client.post("/cosechas", headers=auth_headers, json={
        "siembra_id": siembra["siembra_id"], "fecha_cosecha": "2025-01-12",
        "peso_cosechado": 10, "calidad": 3,
    })
    assert duplicada.status_code == 409

    stats = client.get("/cosechas/stats", headers=auth_headers).json()
    assert stats["total"] == 1
    assert stats["peso_total"] == 95.5
    assert stats["por_tipo"][0]["tipo_microgreen"] == "Mostaza"

    assert client.delete(f"/cosechas/{cosecha['cosecha_id']}", headers=auth_headers).status_code == 204
    despues = client.get(f"/siembras/{siembra['siembra_id']}", headers=auth_headers).json()
    assert despues["fecha_real_cosecha"] is None
    assert despues["estado"] == "listo"


def test_harvest_requires_growing_or_ready(client, auth_headers):
    siembra = _crear_siembra(client, auth_headers, fecha_siembra="2025-01-11", fecha_esperada_cosecha="2025-01-18")
    assert siembra["puede_cosecharse"] is False
    resp = client.post("/cosechas", headers=auth_headers, json={
        "siembra_id": siembra["siembra_id"], "fecha_cosecha": "2025-01-12",
        "peso_cosechado": 10, "calidad": 3,
    })
    assert resp.status_code == 422
    assert resp.json()["detail"].startswith("not_harvestable")


def test_harvest_before_sowing_rejected(client, auth_headers):
    siembra = _crear_siembra(client, auth_headers)
    resp = client.post("/cosechas", headers=auth_headers, json={
        "siembra_id": siembra["siembra_id"], "fecha_cosecha": "2025-01-01",
        "peso_cosechado": 10, "calidad": 3,
    })
    assert resp.status_code == 422
    assert resp.json()["detail"].startswith("harvest_before_sowing")


@pytest.mark.parametrize("campo,valor", [("calidad", 6), ("calidad", 0), ("peso_cosechado", -1)])
def test_harvest_field_bounds(client, auth_headers, campo, valor):
    siembra = _crear_siembra(client, auth_headers)
    body = {"siembra_id": siembra["siembra_id"], "fecha_cosecha": "2025-01-11",
            "peso_cosechado": 10, "calidad": 3}
    body[campo] = valor
    assert client.post("/cosechas", headers=auth_headers, json=body).status_code == 422


def test_deleting_siembra_removes_harvest(client, auth_headers):
    siembra = _crear_siembra(client, auth_headers)
    client.post("/cosechas", headers=auth_headers, json={
        "siembra_id": siembra["siembra_id"], "fecha_cosecha": "2025-01-11",
        "peso_cosechado": 10, "calidad": 3,
    })
    client.delete(f"/siembras/{siembra['siembra_id']}", headers=auth_headers)
    assert client.get("/cosechas", headers=auth_headers).json() == []


# --------------------
# Variedades
# --------------------
def test_predefined_varieties_seeded_and_read_only(client, auth_headers):
    variedades = client.get("/variedades", headers=auth_headers).json()
    assert len(variedades) == 6
    assert all(not v["is_custom"] for v in variedades)

    brocoli = next(v for v in variedades if v["nombre"] == "Brócoli")
    resp = client.put(f"/variedades/{brocoli['variedad_id']}", headers=auth_headers, json={
        "nombre": "Brócoli", "categoria": "brassicas", "growth_days": 10,
    })
    assert resp.status_code == 403
    assert resp.json()["detail"].startswith("variety_readonly")
    assert client.delete(f"/variedades/{brocoli['variedad_id']}", headers=auth_headers).status_code == 403


def test_custom_variety_crud(client, auth_headers):
    resp = client.post("/variedades", headers=auth_headers, json={
        "nombre": "Mostaza", "categoria": "brassicas", "growth_days": 6,
        "dome_days": 2, "tags": ["Picante"],
    })
    assert resp.status_code == 201, resp.text
    mostaza = resp.json()
    assert mostaza["is_custom"] is True

    resp = client.put(f"/variedades/{mostaza['variedad_id']}", headers=auth_headers, json={
        "nombre": "Mostaza roja", "categoria": "brassicas", "growth_days": 7,
    })
    assert resp.status_code == 200
    assert resp.json()["growth_days"] == 7

    conflicto = client.post("/variedades", headers=auth_headers, json={
        "nombre": "rúcula", "categoria": "brassicas", "growth_days": 7,
    })
    assert conflicto.status_code == 409

    assert client.delete(f"/variedades/{mostaza['variedad_id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/variedades/{mostaza['variedad_id']}", headers=auth_headers).status_code == 404


# --------------------
# Calendario / reportes
# --------------------
def test_calendar_events(client, auth_headers):
    siembra = _crear_siembra(client, auth_headers, fecha_cupula="2025-01-06")
    eventos = client.get("/calendario", params={"inicio": "2025-01-01", "fin": "2025-01-31"},
                         headers=auth_headers).json()
    assert [e["id"] for e in eventos] == [
        f"{siembra['siembra_id']}-planted",
        f"{siembra['siembra_id']}-dome",
        f"{siembra['siembra_id']}-harvest",
    ]
    etapas = client.get("/calendario/dia", params={"dia": "2025-01-07"}, headers=auth_headers).json()
    assert etapas[0]["etapa"] == "dome"


def test_report_endpoints(client, auth_headers):
    _crear_siembra(client, auth_headers)
    _crear_siembra(client, auth_headers, tipo_microgreen="Girasol", fecha_siembra="2025-01-10",
                   fecha_esperada_cosecha="2025-01-18")

    columnas = client.get("/reports/columns", headers=auth_headers).json()
    assert columnas[0]["key"] == "tipo_microgreen"

    resp = client.post("/reports/siembras", headers=auth_headers, json={
        "rango_fechas": {"inicio": "2025-01-01", "fin": "2025-01-31"},
        "filtros": {"estados": ["listo"]},
    })
    assert resp.status_code == 200, resp.text
    reporte = resp.json()
    assert reporte["total"] == 1
    assert reporte["filas"][0]["Nombre de Planta"] == "Mostaza"
    assert reporte["filas"][0]["Estado"] == "Listo para cosechar"

    analytics = client.post("/reports/analytics", headers=auth_headers, json={}).json()
    assert analytics["distribucion_estados"] == {"sembrado": 1, "creciendo": 0, "listo": 1, "cosechado": 0}
    assert analytics["resumen_ejecutivo"]["total_siembras"] == 2


def test_report_presets_endpoint(client, auth_headers):
    _crear_siembra(client, auth_headers)
    presets = client.get("/reports/presets", headers=auth_headers).json()
    assert [p["nombre"] for p in presets] == ["Reporte Mensual Estándar", "Análisis Trimestral", "Export Completo CSV"]
    mensual = presets[0]["siembras"]
    assert mensual["rango_fechas"] == {"inicio": "2025-01-01", "fin": "2025-01-12"}

    resp = client.post("/reports/siembras", headers=auth_headers, json=mensual)
    assert resp.status_code == 200, resp.text
    assert resp.json()["total"] == 1

    analisis = client.post("/reports/analytics", headers=auth_headers, json=presets[1]["analytics"]).json()
    assert analisis["resumen_ejecutivo"]["total_siembras"] == 1


def test_report_rejects_inverted_range(client, auth_headers):
    resp = client.post("/reports/siembras", headers=auth_headers, json={
        "rango_fechas": {"inicio": "2025-02-01", "fin": "2025-01-01"},
    })
    assert resp.status_code == 422

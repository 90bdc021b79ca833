# services/analytics_service.py
"""
Servicio de analytics para dashboards y reportes de análisis.
Consumido por api/reports.py, api/siembras.py y api/cosechas.py

Funciones puras sobre listas ya cargadas; "hoy" siempre llega como parámetro.
"""
import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List

from microgreens.enums.enums import SiembraEstadoEnum
from microgreens.schemas.common import DateRange
from microgreens.schemas.reports import ANALYTICS_SECTIONS, AnalyticsReportConfig
from microgreens.services.lifecycle import ciclo_de_vida, estado_de
from microgreens.services.report_service import filtrar_siembras

logger = logging.getLogger(__name__)

SIN_NOMBRE = "Sin nombre"
SIN_BANDEJA = "Sin bandeja"


# ==================== HELPERS INTERNOS ====================


def _pct(parte: int, total: int) -> int:
    return round(parte / total * 100) if total > 0 else 0


def _promedio(valores: List[float], decimales: int = 1) -> float:
    return round(sum(valores) / len(valores), decimales) if valores else 0.0


def _cosechadas(siembras: Iterable[Any]) -> List[Any]:
    return [s for s in siembras if s.fecha_real_cosecha is not None]


def _dias_ciclo(siembra: Any) -> int:
    return (siembra.fecha_real_cosecha - siembra.fecha_siembra).days


# ==================== SIEMBRAS ====================


def contar_por_estado(siembras: Iterable[Any], today: date) -> Dict[str, int]:
    conteo = {estado.value: 0 for estado in SiembraEstadoEnum}
    atrasadas = 0
    total = 0
    for s in siembras:
        ciclo = ciclo_de_vida(s, today)
        conteo[ciclo.estado.value] += 1
        atrasadas += int(ciclo.atrasada)
        total += 1
    return {
        "total": total,
        "sembradas": conteo["sembrado"],
        "creciendo": conteo["creciendo"],
        "listas": conteo["listo"],
        "cosechadas": conteo["cosechado"],
        "atrasadas": atrasadas,
    }


def proximas_cosechas(siembras: Iterable[Any], today: date, dias: int = 3) -> List[Any]:
    """Siembras sin cosechar con cosecha esperada en [hoy, hoy + dias]."""
    limite = today + timedelta(days=dias)
    proximas = [
        s for s in siembras
        if s.fecha_real_cosecha is None and today <= s.fecha_esperada_cosecha <= limite
    ]
    return sorted(proximas, key=lambda s: s.fecha_esperada_cosecha)


def resumen_ejecutivo(siembras: List[Any], rango: DateRange, today: date) -> Dict[str, Any]:
    total = len(siembras)
    cosechadas = _cosechadas(siembras)
    activas = [s for s in siembras if s.fecha_real_cosecha is None]
    inicio = rango.inicio.strftime("%d/%m/%Y") if rango.inicio else "-"
    fin = (rango.fin or today).strftime("%d/%m/%Y")
    return {
        "periodo": f"{inicio} - {fin}",
        "total_siembras": total,
        "cosechadas": len(cosechadas),
        "activas": len(activas),
        "tasa_eficiencia": _pct(len(cosechadas), total),
        "promedio_dias_cosecha": _promedio([_dias_ciclo(s) for s in cosechadas]),
    }


def distribucion_estados(siembras: List[Any], today: date) -> Dict[str, int]:
    distribucion = {estado.value: 0 for estado in SiembraEstadoEnum}
    for s in siembras:
        distribucion[estado_de(s, today).value] += 1
    return distribucion


def top_plantas(siembras: List[Any], limite: int = 10) -> List[Dict[str, Any]]:
    conteo: Dict[str, Dict[str, int]] = defaultdict(lambda: {"total": 0, "cosechadas": 0})
    for s in siembras:
        datos = conteo[s.tipo_microgreen or SIN_NOMBRE]
        datos["total"] += 1
        if s.fecha_real_cosecha is not None:
            datos["cosechadas"] += 1

    filas = [
        {
            "tipo_microgreen": nombre,
            "total": datos["total"],
            "cosechadas": datos["cosechadas"],
            "tasa_exito": _pct(datos["cosechadas"], datos["total"]),
        }
        for nombre, datos in conteo.items()
    ]
    filas.sort(key=lambda f: (-f["tasa_exito"], -f["total"]))
    return filas[:limite]


def promedios_tiempo(siembras: List[Any]) -> Dict[str, float]:
    """
    Días promedio desde la siembra hasta la cosecha real, la cúpula y la luz.
    Cada promedio solo cuenta las siembras que tienen esa fecha.
    """
    cupula = [(s.fecha_cupula - s.fecha_siembra).days for s in siembras if s.fecha_cupula is not None]
    luz = [(s.fecha_luz - s.fecha_siembra).days for s in siembras if s.fecha_luz is not None]
    return {
        "promedio_dias_cosecha": _promedio([_dias_ciclo(s) for s in _cosechadas(siembras)]),
        "promedio_dias_cupula": _promedio(cupula),
        "promedio_dias_luz": _promedio(luz),
    }


def tasas_eficiencia(siembras: List[Any], today: date) -> Dict[str, Any]:
    total = len(siembras)
    ciclos = [ciclo_de_vida(s, today) for s in siembras]
    cosechadas = sum(1 for c in ciclos if c.estado == SiembraEstadoEnum.cosechado)
    atrasadas = sum(1 for c in ciclos if c.atrasada)
    desviaciones = [c.eficiencia_pct for c in ciclos if c.eficiencia_pct is not None]
    return {
        "eficiencia_general": _pct(cosechadas, total),
        "tasa_atraso": _pct(atrasadas, total),
        "tasa_activas": _pct(total - cosechadas, total),
        "desviacion_promedio_pct": _promedio(desviaciones) if desviaciones else None,
    }


def tendencias_mensuales(siembras: List[Any]) -> List[Dict[str, Any]]:
    meses: Dict[str, Dict[str, int]] = defaultdict(lambda: {"sembradas": 0, "cosechadas": 0})
    for s in siembras:
        mes = s.fecha_siembra.strftime("%Y-%m")
        meses[mes]["sembradas"] += 1
        if s.fecha_real_cosecha is not None:
            meses[mes]["cosechadas"] += 1
    return [
        {
            "mes": mes,
            "sembradas": datos["sembradas"],
            "cosechadas": datos["cosechadas"],
            "eficiencia": _pct(datos["cosechadas"], datos["sembradas"]),
        }
        for mes, datos in sorted(meses.items())
    ]


def rendimiento_bandejas(siembras: List[Any]) -> List[Dict[str, Any]]:
    bandejas: Dict[str, Dict[str, int]] = defaultdict(lambda: {"total": 0, "cosechadas": 0})
    for s in siembras:
        datos = bandejas[s.ubicacion_bandeja or SIN_BANDEJA]
        datos["total"] += 1
        if s.fecha_real_cosecha is not None:
            datos["cosechadas"] += 1
    filas = [
        {
            "ubicacion_bandeja": bandeja,
            "total": datos["total"],
            "cosechadas": datos["cosechadas"],
            "eficiencia": _pct(datos["cosechadas"], datos["total"]),
        }
        for bandeja, datos in bandejas.items()
    ]
    filas.sort(key=lambda f: -f["eficiencia"])
    return filas


PROYECCION_DIAS = (30, 60, 90)


def proyecciones(siembras: List[Any], today: date) -> Dict[str, int]:
    """Siembras sin cosechar cuya cosecha esperada cae en los próximos 30/60/90 días."""
    restantes = [
        ciclo.dias_para_cosecha
        for ciclo in (ciclo_de_vida(s, today) for s in siembras)
        if ciclo.estado != SiembraEstadoEnum.cosechado
    ]
    return {f"cosechas_{dias}_dias": sum(1 for r in restantes if 0 < r <= dias) for dias in PROYECCION_DIAS}


def generar_reporte_analytics(
    siembras: Iterable[Any],
    config: AnalyticsReportConfig,
    today: date,
) -> Dict[str, Any]:
    filtradas = filtrar_siembras(siembras, config.filtros, config.rango_fechas, today)
    builders = {
        "resumen_ejecutivo": lambda: resumen_ejecutivo(filtradas, config.rango_fechas, today),
        "distribucion_estados": lambda: distribucion_estados(filtradas, today),
        "top_plantas": lambda: top_plantas(filtradas),
        "promedios_tiempo": lambda: promedios_tiempo(filtradas),
        "tasas_eficiencia": lambda: tasas_eficiencia(filtradas, today),
        "tendencias_mensuales": lambda: tendencias_mensuales(filtradas),
        "rendimiento_bandejas": lambda: rendimiento_bandejas(filtradas),
        "proyecciones": lambda: proyecciones(filtradas, today),
    }
    resultado: Dict[str, Any] = {"nombre": config.nombre, "generado_el": today.isoformat()}
    for seccion in config.secciones:
        if seccion not in ANALYTICS_SECTIONS:
            logger.warning("generar_reporte_analytics: sección desconocida '%s'", seccion)
            continue
        resultado[seccion] = builders[seccion]()
    return resultado


# ==================== COSECHAS ====================


def _tipo_de(cosecha: Any) -> str:
    tipo = getattr(cosecha, "tipo_microgreen", None)
    if tipo is None:
        siembra = getattr(cosecha, "siembra", None)
        tipo = getattr(siembra, "tipo_microgreen", None)
    return tipo or SIN_NOMBRE


def estadisticas_cosechas(cosechas: Iterable[Any], today: date) -> Dict[str, Any]:
    cosechas = list(cosechas)
    total = len(cosechas)
    pesos = [float(c.peso_cosechado) for c in cosechas]
    este_mes = [
        c for c in cosechas
        if c.fecha_cosecha.year == today.year and c.fecha_cosecha.month == today.month
    ]
    hace_7_dias = today - timedelta(days=7)

    por_tipo: Dict[str, List[Any]] = defaultdict(list)
    for c in cosechas:
        por_tipo[_tipo_de(c)].append(c)

    filas = []
    for tipo, items in por_tipo.items():
        peso_total = sum(float(c.peso_cosechado) for c in items)
        filas.append({
            "tipo_microgreen": tipo,
            "total_cosechas": len(items),
            "peso_total": round(peso_total, 1),
            "peso_promedio": round(peso_total / len(items), 1),
            "calidad_promedio": _promedio([c.calidad for c in items]),
        })
    filas.sort(key=lambda f: -f["peso_total"])

    return {
        "total": total,
        "peso_total": round(sum(pesos), 1),
        "calidad_promedio": _promedio([c.calidad for c in cosechas]),
        "cosechas_este_mes": len(este_mes),
        "peso_este_mes": round(sum(float(c.peso_cosechado) for c in este_mes), 1),
        "cosechas_ultimos_7_dias": sum(1 for c in cosechas if hace_7_dias <= c.fecha_cosecha <= today),
        "por_tipo": filas,
    }

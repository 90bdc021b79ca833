from enum import Enum

# =====================================================
# 🔐 USUARIOS / ACCESOS
# =====================================================
class UsuarioEstadoEnum(str, Enum):
    a = "a"  # Activo
    i = "i"  # Inactivo


# =====================================================
# 🌱 SIEMBRAS
# =====================================================
class SiembraEstadoEnum(str, Enum):
    """Orden del ciclo de vida; el terminal va al final."""
    sembrado = "sembrado"
    creciendo = "creciendo"
    listo = "listo"
    cosechado = "cosechado"


ESTADO_LABELS = {
    SiembraEstadoEnum.sembrado: "Sembrado",
    SiembraEstadoEnum.creciendo: "Creciendo",
    SiembraEstadoEnum.listo: "Listo para cosechar",
    SiembraEstadoEnum.cosechado: "Cosechado",
}


# =====================================================
# 📅 CALENDARIO
# =====================================================
class EventoTipoEnum(str, Enum):
    planted = "planted"
    dome = "dome"
    light = "light"
    harvest = "harvest"
    harvested = "harvested"


# =====================================================
# 🌿 VARIEDADES
# =====================================================
class CategoriaVariedadEnum(str, Enum):
    brassicas = "brassicas"  # Brócoli, col rizada, rúcula
    legumes = "legumes"      # Guisantes, lentejas
    herbs = "herbs"          # Albahaca, cilantro
    greens = "greens"        # Espinaca, acelga
    grains = "grains"        # Trigo, cebada
    flowers = "flowers"      # Girasol, caléndula
    other = "other"


class DificultadEnum(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


# =====================================================
# 🔽 UTILIDADES
# =====================================================
class SortOrderEnum(str, Enum):
    asc = "asc"
    desc = "desc"

# models/__init__.py
from microgreens.utils.db import Base  # re-export
from .user import Usuario
from .variedad import Variedad
from .siembra import Siembra
from .cosecha import Cosecha

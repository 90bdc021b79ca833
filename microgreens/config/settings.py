# config/settings.py
"""
Configuración centralizada de la aplicación usando Pydantic Settings.
Las variables se cargan desde el archivo .env
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Configuración de la aplicación"""

    # Base de datos
    DATABASE_URL: str = "sqlite:///./microgreens.db"

    # JWT
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 720
    ALGORITHM: str = "HS256"

    # CORS
    CORS_ALLOW_ORIGINS: List[str] = ["http://localhost:3000"]

    # Zona horaria de referencia para "hoy" y para normalizar timestamps
    APP_TZ: str = "America/Mexico_City"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Siembras
    UPCOMING_HARVEST_DAYS: int = 3  # Ventana por defecto para próximas cosechas
    SEED_VARIETIES: bool = True  # Cargar variedades predefinidas al arrancar

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

from datetime import date

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from microgreens.enums.enums import UsuarioEstadoEnum
from microgreens.models.user import Usuario
from microgreens.repositories import SqlCosechaRepository, SqlSiembraRepository, SqlVariedadRepository
from microgreens.utils.datetime_utils import today_local
from microgreens.utils.db import get_db
from microgreens.utils.security import oauth2_scheme, decode_access_token

def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> Usuario:
    payload = decode_access_token(token)
    if not payload or "sub" not in payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido o expirado")
    user = db.get(Usuario, int(payload["sub"]))
    if not user or user.status != UsuarioEstadoEnum.a.value:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Usuario no encontrado o inactivo")
    return user

def get_today() -> date:
    """Fecha de hoy en la zona de la aplicación; se sobreescribe en pruebas."""
    return today_local()

# ------ Repositorios sobre la sesión de la petición ------

def get_siembra_repo(db: Session = Depends(get_db)) -> SqlSiembraRepository:
    return SqlSiembraRepository(db)

def get_cosecha_repo(db: Session = Depends(get_db)) -> SqlCosechaRepository:
    return SqlCosechaRepository(db)

def get_variedad_repo(db: Session = Depends(get_db)) -> SqlVariedadRepository:
    return SqlVariedadRepository(db)

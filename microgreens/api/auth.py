# api/auth.py
"""
API de autenticación.
Endpoints: login, me.
"""
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from microgreens.models.user import Usuario
from microgreens.schemas.user import Token, UserOut
from microgreens.services.auth_service import authenticate_user, issue_access_token
from microgreens.utils.db import get_db
from microgreens.utils.dependencies import get_current_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/token",
    response_model=Token,
    summary="Login (OAuth2)",
    description=(
        "Autenticación usando OAuth2 Password Flow.\n\n"
        "**Formato:** `application/x-www-form-urlencoded` (estándar OAuth2)\n\n"
        "**Campos:**\n"
        "- `username`: Username del usuario\n"
        "- `password`: Contraseña\n\n"
        "**Response:**\n"
        "- `access_token`: Token JWT para usar en header `Authorization: Bearer <token>`\n"
        "- `token_type`: Siempre `bearer`"
    )
)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """Login con username y password"""
    user = authenticate_user(db, form_data.username, form_data.password)
    token = issue_access_token(user)
    return {"access_token": token, "token_type": "bearer"}


@router.get(
    "/me",
    response_model=UserOut,
    summary="Obtener usuario actual",
    description=(
        "Retorna la información del usuario autenticado.\n\n"
        "**Requiere autenticación:** Sí (Bearer token en header)"
    )
)
def me(current_user: Usuario = Depends(get_current_user)):
    """Obtener información del usuario autenticado"""
    return current_user

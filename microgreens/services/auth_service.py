# services/auth_service.py
"""
Servicio de autenticación.
Maneja login, generación de tokens JWT y alta de usuarios.
"""
import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from microgreens.enums.enums import UsuarioEstadoEnum
from microgreens.models.user import Usuario
from microgreens.utils.datetime_utils import now_local
from microgreens.utils.security import verify_password, create_access_token, hash_password

logger = logging.getLogger(__name__)


def authenticate_user(db: Session, username: str, password: str) -> Usuario:
    """
    Autenticar usuario con username y password.

    Args:
        db: Sesión de BD
        username: Username del usuario
        password: Contraseña en texto plano

    Returns:
        Usuario autenticado

    Raises:
        HTTPException: Si credenciales inválidas o usuario inactivo
    """
    user = db.query(Usuario).filter(Usuario.username == username).first()

    if not user or user.status != UsuarioEstadoEnum.a.value or not verify_password(password, user.password_hash):
        logger.info("Login fallido para '%s'", username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciales inválidas"
        )

    # Actualizar último login
    user.last_login_at = now_local()
    db.add(user)
    db.commit()
    db.refresh(user)

    return user


def issue_access_token(user: Usuario) -> str:
    """
    Generar token JWT para un usuario.

    Args:
        user: Usuario autenticado

    Returns:
        Token JWT como string
    """
    return create_access_token(subject=user.usuario_id)


def create_user(db: Session, username: str, nombre: str, email: str, password: str) -> Usuario:
    """Alta de usuario activo. Falla con 409 si username o email ya existen."""
    existe = (
        db.query(Usuario.usuario_id)
        .filter((Usuario.username == username) | (Usuario.email == email))
        .first()
    )
    if existe:
        raise HTTPException(status_code=409, detail="user_exists: username o email ya registrado.")

    user = Usuario(
        username=username,
        nombre=nombre,
        email=email,
        password_hash=hash_password(password),
        status=UsuarioEstadoEnum.a.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Usuario creado: %s", username)
    return user

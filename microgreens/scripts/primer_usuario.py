# scripts/primer_usuario.py
"""
Crea el usuario inicial 'admin' si no existe.

    python -m microgreens.scripts.primer_usuario
"""
import os

from microgreens.models.user import Usuario
from microgreens.services.auth_service import create_user
from microgreens.utils.db import SessionLocal, init_db


def create_initial_user():
    init_db()
    db = SessionLocal()
    try:
        existing = db.query(Usuario).filter(Usuario.username == "admin").first()
        if existing:
            print("⚠️ Usuario 'admin' ya existe (id:", existing.usuario_id, ").")
            return

        user = create_user(
            db,
            username="admin",
            nombre="Administrador",
            email="admin@microgreens.local",
            password=os.environ.get("ADMIN_PASSWORD", "admin123"),
        )
        print("✅ Usuario 'admin' creado. ID:", user.usuario_id)
    finally:
        db.close()

if __name__ == "__main__":
    create_initial_user()

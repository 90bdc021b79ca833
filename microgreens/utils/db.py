from sqlalchemy import MetaData, create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool

from microgreens.config.settings import settings

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

_engine_kwargs = {}
# SQLite en memoria: una sola conexión compartida por todas las sesiones
if settings.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
    _engine_kwargs["poolclass"] = StaticPool

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args,
    future=True,
    **_engine_kwargs,
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)

# ───────────────────────────────────────────────
# Convención de nombres para constraints / índices
# ───────────────────────────────────────────────
convention = {
    "ix": "ix_%(table_name)s_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

class Base(DeclarativeBase):
    """Clase base de la que heredan todos los modelos ORM."""
    metadata = MetaData(naming_convention=convention)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db(bind=None) -> None:
    """Crea las tablas que falten. En producción usar migraciones."""
    import microgreens.models  # noqa: F401  registra los modelos en Base.metadata
    Base.metadata.create_all(bind=bind or engine)

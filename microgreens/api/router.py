from fastapi import APIRouter
from .auth import router as auth_router
from .siembras import router as siembras_router
from .cosechas import router as cosechas_router
from .variedades import router as variedades_router
from .calendario import router as calendario_router
from .reports import router as reports_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(siembras_router)
api_router.include_router(cosechas_router)
api_router.include_router(variedades_router)
api_router.include_router(calendario_router)
api_router.include_router(reports_router)

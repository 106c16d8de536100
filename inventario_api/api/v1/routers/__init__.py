from fastapi import APIRouter

# Importa cada módulo de rutas
from inventario_api.api.v1.routers import (
    auth,
    usuarios,
    catalogos,
    inventario,
    inventario_nuevo,
    auditoria,
    reportes,
    health,
)

# Router principal con prefijo global
api_router = APIRouter(prefix="/api/v1", redirect_slashes=False)

# Endpoint raíz para verificar que la API funciona
@api_router.get("/", tags=["Root"])
def read_root():
    return {"message": "Bienvenido a la API v1 de Inventario de Activos"}

# Registro de módulos de rutas
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(usuarios.router, prefix="/usuarios")
api_router.include_router(catalogos.router, prefix="/catalogos")
api_router.include_router(inventario.router, prefix="/inventario")
api_router.include_router(inventario_nuevo.router, prefix="/inventario-nuevo")
api_router.include_router(auditoria.router, prefix="/auditoria")
api_router.include_router(reportes.router, prefix="/reportes")
api_router.include_router(health.router)

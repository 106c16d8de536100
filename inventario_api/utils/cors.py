from typing import List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventario_api.core.config import settings


def origenes_permitidos() -> List[str]:
    """Orígenes de `BACKEND_CORS_ORIGINS` (lista o texto separado por comas); comodín en desarrollo."""
    configurados = settings.backend_cors_origins or []
    if isinstance(configurados, str):
        configurados = configurados.split(",")
    origenes = [o.strip() for o in configurados if o and o.strip()]

    if not origenes or settings.environment == "development":
        return ["*"]
    return origenes


def setup_cors(app: FastAPI) -> None:
    origenes = origenes_permitidos()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origenes,
        allow_methods=["*"],
        allow_headers=["*"],
        # El navegador rechaza credenciales con origen comodín
        allow_credentials=origenes != ["*"],
    )

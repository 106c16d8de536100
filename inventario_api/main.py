from fastapi import FastAPI
from inventario_api.api.v1 import api_router
from inventario_api.core.errors import registrar_handlers
from inventario_api.core.lifespan import lifespan
from inventario_api.utils.cors import setup_cors


def create_app() -> FastAPI:
    """
    Factory function que crea y configura la aplicación FastAPI.
    """
    app = FastAPI(
        title="Inventario de Activos Fijos",
        version="1.0.0",
        description="Backend de conciliación de activos fijos: inventario histórico vs. registro en campo",
        lifespan=lifespan,
    )

    # --- Configuración CORS ---
    setup_cors(app)

    # --- Errores de dominio ---
    registrar_handlers(app)

    # --- Rutas centralizadas ---
    app.include_router(api_router)

    return app


app = create_app()

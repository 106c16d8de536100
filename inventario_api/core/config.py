# inventario_api/core/config.py
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List


# Roles del sistema
class Roles:
    """
    Constantes para roles de usuario.

    Roles disponibles:
    - ADMINISTRADOR: Acceso completo, gestiona usuarios, catálogos y reportes
    - COORDINADOR: Supervisa el avance del inventario (reportes y auditoría)
    - REGISTRADOR: Personal de campo, registra y corrige activos escaneados
    """
    ADMINISTRADOR = "ADMINISTRADOR"
    COORDINADOR = "COORDINADOR"
    REGISTRADOR = "REGISTRADOR"

    TODOS = (ADMINISTRADOR, COORDINADOR, REGISTRADOR)


class Settings(BaseSettings):
    # --- Core ---
    environment: str = Field("development", description="development | test | production")
    log_level: str = Field("INFO")

    # --- Seguridad / JWT ---
    secret_key: str = Field(...)
    algorithm: str = Field("HS256")
    access_token_expire_minutes: int = Field(60)
    refresh_token_expire_days: int = Field(7)

    # --- Base de datos ---
    database_url: str = Field(...)

    # --- CORS ---
    backend_cors_origins: List[str] | str = Field("")

    # ============================================================================
    # GENERACIÓN DE CÓDIGOS
    # ============================================================================
    # Cuando dos registros simultáneos calculan el mismo código diario, la
    # restricción UNIQUE rechaza el segundo INSERT y el registro completo se
    # reintenta desde cero hasta este número de veces.
    # ============================================================================

    codigo_max_reintentos: int = Field(
        1,
        ge=0,
        description="Reintentos de un registro tras colisión de código generado"
    )

    # --- Administrador inicial ---
    admin_username: str = Field("admin")
    admin_password: str = Field("admin12345")
    admin_email: str = Field("admin@inventario.com.pe")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()

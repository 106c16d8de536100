# inventario_api/schemas/auditoria.py
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime


class RegistroAuditoriaRead(BaseModel):
    id: str
    inventario_nuevo_id: str
    user_id: str
    lat: float
    lng: float
    timestamp: datetime
    device_info: Optional[Dict[str, Any]] = None

    class Config:
        from_attributes = True


class AuditoriaListado(BaseModel):
    total: int = Field(..., description="Cantidad de registros devueltos")
    registros: List[RegistroAuditoriaRead]

# inventario_api/services/auditoria_service.py
"""
Bitácora de ubicación GPS.

`registrar` solo agrega filas dentro de la transacción del llamador (no hace
commit); las consultas devuelven el historial completo, más reciente primero.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from inventario_api.core.errors import ValidacionError
from inventario_api.models.auditoria_ubicacion import RegistroAuditoriaUbicacion
from inventario_api.schemas.inventario_nuevo import LocationData
from inventario_api.utils.fechas import FechaHelper

logger = logging.getLogger(__name__)


def serializar_device_info(location: LocationData) -> Optional[dict]:
    info = location.device_info
    if info is None:
        return None
    if isinstance(info, str):
        return {"info": info}
    return info.model_dump(exclude_none=True)


class AuditoriaService:
    def __init__(self, db: Session):
        self.db = db

    def registrar(self, inventario_nuevo_id: str, usuario_id: str, location: LocationData) -> RegistroAuditoriaUbicacion:
        if not (-90 <= location.lat <= 90) or not (-180 <= location.lng <= 180):
            raise ValidacionError(
                f"Coordenadas fuera de rango: lat={location.lat}, lng={location.lng}",
                lat=location.lat,
                lng=location.lng,
            )

        registro = RegistroAuditoriaUbicacion(
            inventario_nuevo_id=inventario_nuevo_id,
            user_id=usuario_id,
            lat=location.lat,
            lng=location.lng,
            device_info=serializar_device_info(location),
        )
        self.db.add(registro)
        self.db.flush()

        logger.info(
            f"Ubicación registrada: usuario={usuario_id} activo={inventario_nuevo_id} "
            f"lat={location.lat} lng={location.lng}"
        )
        return registro

    def por_inventario_nuevo(self, inventario_nuevo_id: str) -> List[RegistroAuditoriaUbicacion]:
        return (
            self.db.query(RegistroAuditoriaUbicacion)
            .filter(RegistroAuditoriaUbicacion.inventario_nuevo_id == inventario_nuevo_id)
            .order_by(RegistroAuditoriaUbicacion.timestamp.desc())
            .all()
        )

    def por_usuario(
        self,
        usuario_id: str,
        fecha_desde: Optional[date] = None,
        fecha_hasta: Optional[date] = None,
    ) -> List[RegistroAuditoriaUbicacion]:
        """Historial de un usuario; ambos límites son días locales inclusivos."""
        query = self.db.query(RegistroAuditoriaUbicacion).filter(
            RegistroAuditoriaUbicacion.user_id == usuario_id
        )
        if fecha_desde:
            query = query.filter(RegistroAuditoriaUbicacion.timestamp >= FechaHelper.inicio_dia_utc(fecha_desde))
        if fecha_hasta:
            query = query.filter(RegistroAuditoriaUbicacion.timestamp <= FechaHelper.fin_dia_utc(fecha_hasta))
        return query.order_by(RegistroAuditoriaUbicacion.timestamp.desc()).all()

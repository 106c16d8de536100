# inventario_api/services/inventario_service.py
from typing import Optional

from sqlalchemy.orm import Session

from inventario_api.crud import inventario as crud_inventario
from inventario_api.crud import inventario_nuevo as crud_inventario_nuevo
from inventario_api.models.inventario import EstadoReporte, Inventario
from inventario_api.models.inventario_nuevo import InventarioNuevo

LONGITUD_MINIMA_BUSQUEDA = 3


class InventarioService:
    """Consultas del inventario histórico: escaneo en campo y listados de escritorio."""

    def __init__(self, db: Session):
        self.db = db

    def activo_vinculado(self, inventario: Inventario) -> Optional[InventarioNuevo]:
        # La FK es el vínculo oficial; el código AF cubre datos cargados sin ella
        nuevo = crud_inventario_nuevo.get_by_inventario_origen(self.db, inventario.id)
        if nuevo is None and inventario.cod_af_inventario:
            nuevo = crud_inventario_nuevo.get_by_cod_af_inventario(self.db, inventario.cod_af_inventario)
        return nuevo

    def detalle(self, inventario: Inventario) -> dict:
        nuevo = self.activo_vinculado(inventario)
        return {
            "inventario": inventario,
            "inventario_nuevo": nuevo,
            "estado_actual": EstadoReporte.ENCONTRADO if nuevo else EstadoReporte.FALTANTE,
            "estado_futuro": EstadoReporte.ENCONTRADO,
        }

    def detalle_por_etiqueta(self, cod_etiqueta: str) -> Optional[dict]:
        inventario = crud_inventario.get_by_cod_etiqueta(self.db, cod_etiqueta)
        return self.detalle(inventario) if inventario else None

    def detalle_por_patrimonial(self, cod_patrimonial: str) -> Optional[dict]:
        inventario = crud_inventario.get_by_cod_patrimonial(self.db, cod_patrimonial)
        return self.detalle(inventario) if inventario else None

    def detalle_por_id(self, inventario_id: str) -> Optional[dict]:
        inventario = crud_inventario.get_inventario(self.db, inventario_id)
        return self.detalle(inventario) if inventario else None

    # ==================== LISTADOS DE ESCRITORIO ====================

    def mis_registros(self, usuario_id: str, cod_proyecto: Optional[str] = None) -> dict:
        """
        Activos que registró `usuario_id`, separados en dos listas.

        - inventarios_encontrados: filas del histórico conciliadas con sus códigos AF
        - inventarios_nuevos_sin_origen: sus registros sobrantes

        `total` es la suma de ambas listas.
        """
        encontrados = crud_inventario.encontrados_por_usuario(self.db, usuario_id, cod_proyecto)
        sobrantes = crud_inventario_nuevo.list_sobrantes(self.db, creado_por=usuario_id, cod_proyecto=cod_proyecto)
        return {
            "inventarios_encontrados": encontrados,
            "inventarios_nuevos_sin_origen": sobrantes,
            "total": len(encontrados) + len(sobrantes),
        }

    def buscar_todos(
        self,
        termino: Optional[str] = None,
        cod_proyecto: Optional[str] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> dict:
        """
        Búsqueda paginada sobre el histórico y los sobrantes a la vez.

        El término se ignora si tiene menos de LONGITUD_MINIMA_BUSQUEDA caracteres.
        `skip` y `limit` se aplican a cada lista por separado.
        """
        termino = termino.strip() if termino else None
        if termino and len(termino) < LONGITUD_MINIMA_BUSQUEDA:
            termino = None

        base = crud_inventario.buscar_paginado(self.db, termino, cod_proyecto, skip, limit)
        sobrantes = crud_inventario_nuevo.list_sobrantes(
            self.db, cod_proyecto=cod_proyecto, termino=termino, skip=skip, limit=limit
        )
        return {
            "inventarios_base": base,
            "inventarios_nuevos_sin_origen": sobrantes,
            "total": len(base) + len(sobrantes),
        }

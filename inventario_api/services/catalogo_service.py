# inventario_api/services/catalogo_service.py
"""
Alta de la estructura organizacional.

Los códigos de sucursal, área y responsable se derivan del código del padre
con la secuencia por padre del generador de códigos.
"""

from sqlalchemy.orm import Session

from inventario_api.core.errors import RecursoNoEncontradoError, ValidacionError
from inventario_api.crud import catalogo as crud_catalogo
from inventario_api.models.area import Area
from inventario_api.models.proyecto import Proyecto
from inventario_api.models.responsable import Responsable
from inventario_api.models.sucursal import Sucursal
from inventario_api.schemas.catalogo import AreaCreate, ProyectoCreate, ResponsableCreate, SucursalCreate
from inventario_api.services.generador_codigos import GeneradorCodigos
from inventario_api.utils.logger import logger


class CatalogoService:
    def __init__(self, db: Session):
        self.db = db
        self.generador = GeneradorCodigos(db)

    def crear_proyecto(self, data: ProyectoCreate) -> Proyecto:
        if crud_catalogo.get_proyecto_by_codigo(self.db, data.cod_proyecto):
            raise ValidacionError(f"El proyecto {data.cod_proyecto} ya existe")
        proyecto = crud_catalogo.create(self.db, Proyecto(**data.model_dump()))
        logger.info(f"Proyecto creado: {proyecto.cod_proyecto}")
        return proyecto

    def crear_sucursal(self, data: SucursalCreate) -> Sucursal:
        proyecto = crud_catalogo.get_proyecto(self.db, data.proyecto_id)
        if not proyecto:
            raise RecursoNoEncontradoError("proyecto", data.proyecto_id)
        codigo = self.generador.generar_codigo_hijo(Sucursal.proyecto_id, proyecto.id, proyecto.cod_proyecto)
        sucursal = crud_catalogo.create(self.db, Sucursal(cod_sucursal=codigo, **data.model_dump()))
        logger.info(f"Sucursal creada: {codigo}")
        return sucursal

    def crear_area(self, data: AreaCreate) -> Area:
        sucursal = crud_catalogo.get_sucursal(self.db, data.sucursal_id)
        if not sucursal:
            raise RecursoNoEncontradoError("sucursal", data.sucursal_id, "La sucursal especificada no existe")
        codigo = self.generador.generar_codigo_hijo(Area.sucursal_id, sucursal.id, sucursal.cod_sucursal)
        area = crud_catalogo.create(self.db, Area(cod_area=codigo, **data.model_dump()))
        logger.info(f"Área creada: {codigo}")
        return area

    def crear_responsable(self, data: ResponsableCreate) -> Responsable:
        area = crud_catalogo.get_area(self.db, data.area_id)
        if not area:
            raise RecursoNoEncontradoError("área", data.area_id, "El área especificada no existe")
        codigo = self.generador.generar_codigo_hijo(Responsable.area_id, area.id, area.cod_area)
        responsable = crud_catalogo.create(self.db, Responsable(cod_responsable=codigo, **data.model_dump()))
        logger.info(f"Responsable creado: {codigo}")
        return responsable

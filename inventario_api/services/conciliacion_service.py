# inventario_api/services/conciliacion_service.py
"""
Motor de conciliación de activos fijos.

Registra un activo confirmado en campo, vinculado a un activo del inventario
histórico o como sobrante, y corrige registros previos. Cada operación es una
única transacción sobre inventario_nuevo, la tabla de atributos de su
categoría, inventario (marca de conciliación) y la bitácora de ubicación:
o se confirman todos los cambios o ninguno.

Orden de escritura en el registro:
    1. categoría efectiva (solicitud o inventario origen)
    2. códigos AF y de etiqueta
    3. fila de inventario_nuevo
    4. fila de atributos de la categoría (si se envió el bloque)
    5. inventario origen: encontrado = true, cod_af_inventario
    6. registro de auditoría de ubicación
    7. commit
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from inventario_api.core.config import settings
from inventario_api.core.errors import (
    ConflictoCodigoError,
    InventarioError,
    OrigenYaConciliadoError,
    RecursoNoEncontradoError,
    TransaccionError,
    ValidacionError,
)
from inventario_api.models.activos_especificos import EquipoInformatico, Mobiliario, Vehiculo
from inventario_api.models.inventario import Inventario, RegistroInventario, TipoActivoFijo
from inventario_api.models.inventario_nuevo import InventarioNuevo
from inventario_api.schemas.inventario_nuevo import (
    RegisterFromExistingRequest,
    UpdateFromExistingRequest,
)
from inventario_api.services.auditoria_service import AuditoriaService
from inventario_api.services.generador_codigos import GeneradorCodigos
from inventario_api.utils.logger import logger


# Categoría -> (modelo de atributos, relación en InventarioNuevo)
TABLAS_POR_CATEGORIA = {
    TipoActivoFijo.MOBILIARIO: (Mobiliario, "mobiliario"),
    TipoActivoFijo.EQUIPOS_INFORMATICOS: (EquipoInformatico, "equipo_informatico"),
    TipoActivoFijo.VEHICULOS: (Vehiculo, "vehiculo"),
}

CAMPOS_EDITABLES = {
    "cod_proyecto",
    "cod_sucursal",
    "cod_area",
    "cod_patrimonial",
    "descripcion",
    "tipo_activo_fijo",
    "estado",
    "cod_responsable",
    "compuesto",
    "detalle_compuesto",
    "observaciones",
}

# Columnas NOT NULL: un null explícito en la corrección conserva el valor guardado
CAMPOS_OBLIGATORIOS = {
    "cod_proyecto",
    "cod_sucursal",
    "cod_area",
    "descripcion",
    "tipo_activo_fijo",
    "cod_responsable",
    "compuesto",
}

COLUMNAS_CODIGO = ("cod_etiqueta", "cod_af_inventario")


def es_colision_de_codigo(error: IntegrityError) -> bool:
    """True si la violación de integridad proviene de un código generado duplicado."""
    mensaje = str(error.orig)
    return any(columna in mensaje for columna in COLUMNAS_CODIGO)


class ConciliacionService:
    def __init__(self, db: Session):
        self.db = db
        self.generador = GeneradorCodigos(db)
        self.auditoria = AuditoriaService(db)

    # ============================================================================
    # REGISTRO DESDE INVENTARIO EXISTENTE
    # ============================================================================

    def registrar_desde_existente(self, datos: RegisterFromExistingRequest, usuario_id: str) -> InventarioNuevo:
        """
        Registra un activo nuevo, conciliándolo con `datos.inventario_origen_id` si se informa.

        Ante una colisión de código generado el registro completo se revierte y
        se reintenta hasta `settings.codigo_max_reintentos` veces. Cualquier otro
        error de base de datos revierte la transacción y se informa como
        `TransaccionError`; los errores de dominio se propagan sin modificar.

        Raises:
            RecursoNoEncontradoError: el inventario origen no existe
            OrigenYaConciliadoError: el inventario origen ya fue conciliado
            ValidacionError: falta la categoría o el bloque no corresponde
            CapacidadAgotadaError: se agotó la secuencia diaria
            ConflictoCodigoError: colisión persistente tras los reintentos
            IntegridadDatosError: el máximo código del día tiene formato inválido
            TransaccionError: falla de base de datos, transacción revertida
        """
        intento = 0
        while True:
            try:
                nuevo = self._registrar(datos, usuario_id)
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                if not es_colision_de_codigo(e):
                    self._log_fallo("registrar_desde_existente", usuario_id, datos.inventario_origen_id, e)
                    raise TransaccionError("registrar_desde_existente") from e
                if intento >= settings.codigo_max_reintentos:
                    logger.error(
                        f"Colisión de código persistente tras {intento + 1} intentos "
                        f"(usuario={usuario_id}, origen={datos.inventario_origen_id})"
                    )
                    raise ConflictoCodigoError(
                        "No fue posible asignar un código único al activo, intente nuevamente",
                        intentos=intento + 1,
                    ) from e
                intento += 1
                logger.warning(f"Colisión de código generado, reintento {intento}/{settings.codigo_max_reintentos}")
                continue
            except SQLAlchemyError as e:
                self.db.rollback()
                self._log_fallo("registrar_desde_existente", usuario_id, datos.inventario_origen_id, e)
                raise TransaccionError("registrar_desde_existente") from e
            except Exception as e:
                self.db.rollback()
                self._log_fallo("registrar_desde_existente", usuario_id, datos.inventario_origen_id, e)
                raise

            self.db.refresh(nuevo)
            if nuevo.inventario_origen_id:
                logger.info(
                    f"Activo conciliado: {nuevo.cod_etiqueta} ({nuevo.cod_af_inventario}) "
                    f"con inventario origen {nuevo.inventario_origen_id}"
                )
            else:
                logger.info(f"Activo sobrante registrado: {nuevo.cod_etiqueta} ({nuevo.cod_af_inventario})")
            return nuevo

    def _registrar(self, datos: RegisterFromExistingRequest, usuario_id: str) -> InventarioNuevo:
        origen = None
        if datos.inventario_origen_id:
            origen = self._obtener_origen(datos.inventario_origen_id)
            self._validar_origen_disponible(origen)

        # 1. Categoría efectiva
        tipo = datos.tipo_activo_fijo or (origen.tipo_activo_fijo if origen else None)
        if tipo is None:
            if origen is None:
                raise ValidacionError("El tipo de activo fijo es requerido para activos nuevos")
            raise ValidacionError(
                "El tipo de activo fijo es requerido: el inventario origen no tiene categoría",
                inventario_origen_id=origen.id,
            )
        tipo = TipoActivoFijo(tipo)
        bloque = self._bloque_para(datos, tipo)

        # 2. Códigos
        cod_af_inventario = self.generador.generar_cod_af_inventario()
        cod_etiqueta = self.generador.generar_cod_etiqueta()

        # 3. Activo nuevo
        nuevo = InventarioNuevo(
            cod_proyecto=datos.cod_proyecto,
            cod_sucursal=datos.cod_sucursal,
            cod_area=datos.cod_area,
            cod_af_inventario=cod_af_inventario,
            cod_patrimonial=datos.cod_patrimonial,
            cod_etiqueta=cod_etiqueta,
            descripcion=datos.descripcion,
            tipo_activo_fijo=tipo,
            estado=datos.estado,
            cod_responsable=datos.cod_responsable,
            compuesto=datos.compuesto,
            detalle_compuesto=datos.detalle_compuesto,
            observaciones=datos.observaciones,
            registro_inventario=RegistroInventario.AF_CONCILIADO,
            creado_por=usuario_id,
            inventario_origen_id=origen.id if origen else None,
        )
        self.db.add(nuevo)
        self.db.flush()

        # 4. Atributos de la categoría
        if bloque is not None:
            self._guardar_atributos(nuevo, tipo, bloque)

        # 5. Marca de conciliación en el histórico
        if origen is not None:
            origen.encontrado = True
            origen.cod_af_inventario = cod_af_inventario
            self.db.flush()

        # 6. Auditoría
        self.auditoria.registrar(nuevo.id, usuario_id, datos.location)
        return nuevo

    # ============================================================================
    # CORRECCIÓN DE UN REGISTRO
    # ============================================================================

    def actualizar_desde_existente(
        self,
        inventario_nuevo_id: str,
        datos: UpdateFromExistingRequest,
        usuario_id: str,
    ) -> InventarioNuevo:
        """
        Corrige un activo ya registrado y agrega un nuevo registro de auditoría.

        Los códigos generados y el vínculo con el inventario origen no cambian.
        Si cambia la categoría se eliminan los atributos de las otras categorías.

        Raises:
            RecursoNoEncontradoError: el activo o el inventario origen informado no existen
            ValidacionError: el bloque de atributos no corresponde a la categoría
            TransaccionError: falla de base de datos, transacción revertida
        """
        try:
            nuevo = self.db.get(InventarioNuevo, inventario_nuevo_id)
            if nuevo is None:
                raise RecursoNoEncontradoError(
                    "registro de inventario_nuevo",
                    inventario_nuevo_id,
                    "El registro de inventario_nuevo no existe",
                )
            if datos.inventario_origen_id:
                self._obtener_origen(datos.inventario_origen_id)

            cambios = datos.model_dump(exclude_unset=True, include=CAMPOS_EDITABLES)
            for campo, valor in cambios.items():
                if valor is None and campo in CAMPOS_OBLIGATORIOS:
                    continue
                setattr(nuevo, campo, valor)

            tipo = TipoActivoFijo(nuevo.tipo_activo_fijo)
            bloque = self._bloque_para(datos, tipo)

            # Una sola categoría de atributos por activo
            for categoria, (_, relacion) in TABLAS_POR_CATEGORIA.items():
                if categoria != tipo and getattr(nuevo, relacion) is not None:
                    setattr(nuevo, relacion, None)
            self.db.flush()

            if bloque is not None:
                self._guardar_atributos(nuevo, tipo, bloque)

            self.auditoria.registrar(nuevo.id, usuario_id, datos.location)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self._log_fallo("actualizar_desde_existente", usuario_id, inventario_nuevo_id, e)
            raise TransaccionError("actualizar_desde_existente") from e
        except Exception as e:
            self.db.rollback()
            self._log_fallo("actualizar_desde_existente", usuario_id, inventario_nuevo_id, e)
            raise

        self.db.refresh(nuevo)
        logger.info(f"Activo actualizado: {nuevo.cod_etiqueta} por usuario {usuario_id}")
        return nuevo

    # ============================================================================
    # HELPERS
    # ============================================================================

    def _obtener_origen(self, inventario_id: str) -> Inventario:
        origen = self.db.get(Inventario, inventario_id)
        if origen is None:
            raise RecursoNoEncontradoError("inventario origen", inventario_id)
        return origen

    def _validar_origen_disponible(self, origen: Inventario) -> None:
        vinculado = (
            self.db.query(InventarioNuevo.id)
            .filter(InventarioNuevo.inventario_origen_id == origen.id)
            .first()
        )
        if origen.encontrado or vinculado:
            raise OrigenYaConciliadoError(origen.id, origen.cod_af_inventario)

    @staticmethod
    def _bloque_para(datos, tipo: TipoActivoFijo):
        categoria_bloque, bloque = datos.bloque_enviado()
        if bloque is not None and categoria_bloque != tipo:
            raise ValidacionError(
                f"Los atributos enviados son de '{categoria_bloque.value}' "
                f"pero el activo es de tipo '{tipo.value}'"
            )
        return bloque

    def _guardar_atributos(self, nuevo: InventarioNuevo, tipo: TipoActivoFijo, bloque) -> None:
        """Inserta o actualiza la fila de atributos de la categoría."""
        modelo, relacion = TABLAS_POR_CATEGORIA[tipo]
        existente = getattr(nuevo, relacion)
        if existente is None:
            self.db.add(modelo(inventario_nuevo_id=nuevo.id, **bloque.model_dump()))
        else:
            for campo, valor in bloque.model_dump(exclude_unset=True).items():
                setattr(existente, campo, valor)
        self.db.flush()
        # La relación puede haberse cargado vacía antes del INSERT
        self.db.expire(nuevo, [relacion])

    @staticmethod
    def _log_fallo(operacion: str, usuario_id: str, objetivo_id: Optional[str], error: Exception) -> None:
        if isinstance(error, InventarioError) and error.status_code < 500:
            logger.warning(f"{operacion} rechazado ({error.code}): {error.message} (usuario={usuario_id}, objetivo={objetivo_id})")
            return
        logger.error(
            f"Error en {operacion} (usuario={usuario_id}, objetivo={objetivo_id}); transacción revertida",
            exc_info=True,
        )

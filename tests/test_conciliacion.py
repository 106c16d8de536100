"""
Tests del motor de conciliación (capa de servicio).

Cubren el vínculo con el inventario origen, la atomicidad del registro,
la inmutabilidad de los códigos y la acumulación de la bitácora GPS.
"""
import re

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from inventario_api.core.config import settings
from inventario_api.core.errors import (
    ConflictoCodigoError,
    OrigenYaConciliadoError,
    RecursoNoEncontradoError,
    TransaccionError,
    ValidacionError,
)
from inventario_api.models import (
    EquipoInformatico,
    Inventario,
    InventarioNuevo,
    Mobiliario,
    RegistroAuditoriaUbicacion,
    RegistroInventario,
    TipoActivoFijo,
    Vehiculo,
)
from inventario_api.schemas.inventario_nuevo import RegisterFromExistingRequest, UpdateFromExistingRequest
from inventario_api.services.auditoria_service import AuditoriaService
from inventario_api.services.conciliacion_service import ConciliacionService
from inventario_api.services.generador_codigos import GeneradorCodigos

pytestmark = pytest.mark.unit


def _registro(payload: dict) -> RegisterFromExistingRequest:
    return RegisterFromExistingRequest(**payload)


def _contar(db, modelo) -> int:
    return db.query(modelo).count()


# ==================== REGISTRO CON ORIGEN ====================

class TestRegistroConOrigen:
    def test_concilia_el_inventario_origen(self, db, registrador, inventario_factory, payload_registro):
        origen = inventario_factory()
        datos = _registro(payload_registro(
            inventario_origen_id=origen.id,
            tipo_activo_fijo="Equipos Informaticos",
            equipos_informaticos_fields={"marca": "LENOVO", "modelo": "T14", "serie": "PF3ABC12"},
        ))

        nuevo = ConciliacionService(db).registrar_desde_existente(datos, registrador.id)

        db.expire_all()
        origen = db.get(Inventario, origen.id)
        assert origen.encontrado is True
        assert origen.cod_af_inventario == nuevo.cod_af_inventario
        assert nuevo.inventario_origen_id == origen.id
        assert nuevo.registro_inventario == RegistroInventario.AF_CONCILIADO
        assert re.fullmatch(r"\d{10}", nuevo.cod_etiqueta)
        assert re.fullmatch(r"AF-\d{8}-\d{4}", nuevo.cod_af_inventario)

        equipo = db.query(EquipoInformatico).filter(EquipoInformatico.inventario_nuevo_id == nuevo.id).one()
        assert equipo.serie == "PF3ABC12"
        assert nuevo.datos_especificos.id == equipo.id

    def test_hereda_la_categoria_del_origen(self, db, registrador, inventario_factory, payload_registro):
        origen = inventario_factory(tipo_activo_fijo=TipoActivoFijo.VEHICULOS)
        datos = _registro(payload_registro(
            inventario_origen_id=origen.id,
            vehiculos_fields={"placa": "ABC-123", "anio": 2019},
        ))

        nuevo = ConciliacionService(db).registrar_desde_existente(datos, registrador.id)

        assert nuevo.tipo_activo_fijo == TipoActivoFijo.VEHICULOS
        assert nuevo.vehiculo.placa == "ABC-123"

    def test_origen_inexistente(self, db, registrador, payload_registro):
        datos = _registro(payload_registro(inventario_origen_id="no-existe", tipo_activo_fijo="Mobiliario"))

        with pytest.raises(RecursoNoEncontradoError) as exc:
            ConciliacionService(db).registrar_desde_existente(datos, registrador.id)

        assert exc.value.message == "El inventario origen especificado no existe"
        assert _contar(db, InventarioNuevo) == 0

    def test_origen_sin_categoria_y_sin_tipo(self, db, registrador, inventario_factory, payload_registro):
        origen = inventario_factory()
        datos = _registro(payload_registro(inventario_origen_id=origen.id))

        with pytest.raises(ValidacionError):
            ConciliacionService(db).registrar_desde_existente(datos, registrador.id)
        assert _contar(db, InventarioNuevo) == 0

    def test_origen_ya_conciliado(self, db, registrador, inventario_factory, payload_registro):
        origen = inventario_factory(tipo_activo_fijo=TipoActivoFijo.MOBILIARIO)
        service = ConciliacionService(db)
        service.registrar_desde_existente(_registro(payload_registro(inventario_origen_id=origen.id)), registrador.id)

        with pytest.raises(OrigenYaConciliadoError):
            service.registrar_desde_existente(_registro(payload_registro(inventario_origen_id=origen.id)), registrador.id)

        assert _contar(db, InventarioNuevo) == 1
        assert _contar(db, RegistroAuditoriaUbicacion) == 1


# ==================== REGISTRO SOBRANTE ====================

class TestRegistroSobrante:
    def test_sobrante_requiere_categoria(self, db, registrador, payload_registro):
        datos = _registro(payload_registro(mobiliario_fields={"material": "MELAMINA"}))

        with pytest.raises(ValidacionError) as exc:
            ConciliacionService(db).registrar_desde_existente(datos, registrador.id)

        assert exc.value.message == "El tipo de activo fijo es requerido para activos nuevos"
        for modelo in (InventarioNuevo, Mobiliario, EquipoInformatico, Vehiculo, RegistroAuditoriaUbicacion):
            assert _contar(db, modelo) == 0

    def test_sobrante_con_categoria(self, db, registrador, payload_registro):
        datos = _registro(payload_registro(
            tipo_activo_fijo="Mobiliario",
            mobiliario_fields={"material": "MELAMINA", "color": "BLANCO", "largo": 1.2, "ancho": 0.6, "alto": 0.75},
        ))

        nuevo = ConciliacionService(db).registrar_desde_existente(datos, registrador.id)

        assert nuevo.inventario_origen_id is None
        assert nuevo.creado_por == registrador.id
        assert nuevo.mobiliario.material == "MELAMINA"
        assert float(nuevo.mobiliario.alto) == 0.75

    def test_sin_bloque_no_crea_atributos(self, db, registrador, payload_registro):
        datos = _registro(payload_registro(tipo_activo_fijo="Vehiculos"))

        nuevo = ConciliacionService(db).registrar_desde_existente(datos, registrador.id)

        assert nuevo.datos_especificos is None
        assert _contar(db, Vehiculo) == 0
        assert _contar(db, RegistroAuditoriaUbicacion) == 1

    def test_bloque_de_otra_categoria(self, db, registrador, payload_registro):
        datos = _registro(payload_registro(tipo_activo_fijo="Mobiliario", vehiculos_fields={"placa": "XYZ-987"}))

        with pytest.raises(ValidacionError):
            ConciliacionService(db).registrar_desde_existente(datos, registrador.id)
        assert _contar(db, InventarioNuevo) == 0

    def test_etiquetas_consecutivas(self, db, registrador, payload_registro):
        service = ConciliacionService(db)
        codigos = [
            service.registrar_desde_existente(_registro(payload_registro(tipo_activo_fijo="Mobiliario")), registrador.id).cod_etiqueta
            for _ in range(3)
        ]

        assert len(set(codigos)) == 3
        secuencias = [int(c[6:]) for c in codigos]
        assert secuencias == [1, 2, 3]
        assert len({c[:6] for c in codigos}) == 1


# ==================== ATOMICIDAD ====================

class TestAtomicidad:
    def test_falla_en_auditoria_revierte_todo(self, db, registrador, inventario_factory, payload_registro, monkeypatch):
        origen = inventario_factory()

        def falla(self, *args, **kwargs):
            raise RuntimeError("fallo simulado en auditoría")

        monkeypatch.setattr(AuditoriaService, "registrar", falla)
        datos = _registro(payload_registro(
            inventario_origen_id=origen.id,
            tipo_activo_fijo="Equipos Informaticos",
            equipos_informaticos_fields={"serie": "SN-1"},
        ))

        with pytest.raises(RuntimeError, match="fallo simulado"):
            ConciliacionService(db).registrar_desde_existente(datos, registrador.id)

        db.expire_all()
        assert _contar(db, InventarioNuevo) == 0
        assert _contar(db, EquipoInformatico) == 0
        assert _contar(db, RegistroAuditoriaUbicacion) == 0
        origen = db.get(Inventario, origen.id)
        assert origen.encontrado is False
        assert origen.cod_af_inventario is None

    def test_falla_en_actualizacion_revierte_todo(self, db, registrador, payload_registro, monkeypatch):
        service = ConciliacionService(db)
        nuevo = service.registrar_desde_existente(_registro(payload_registro(tipo_activo_fijo="Mobiliario")), registrador.id)
        descripcion_original = nuevo.descripcion

        def falla(self, *args, **kwargs):
            raise RuntimeError("fallo simulado")

        monkeypatch.setattr(AuditoriaService, "registrar", falla)
        with pytest.raises(RuntimeError):
            ConciliacionService(db).actualizar_desde_existente(
                nuevo.id,
                UpdateFromExistingRequest(descripcion="OTRA DESCRIPCION", location={"lat": 1, "lng": 1}),
                registrador.id,
            )

        db.expire_all()
        assert db.get(InventarioNuevo, nuevo.id).descripcion == descripcion_original
        assert _contar(db, RegistroAuditoriaUbicacion) == 1

    def test_error_de_base_de_datos_en_registro(self, db, registrador, inventario_factory, payload_registro, monkeypatch):
        origen = inventario_factory()

        def falla(self, *args, **kwargs):
            raise OperationalError("INSERT INTO registro_auditoria_ubicacion", {}, Exception("disk I/O error"))

        monkeypatch.setattr(AuditoriaService, "registrar", falla)
        datos = _registro(payload_registro(inventario_origen_id=origen.id, tipo_activo_fijo="Mobiliario"))

        with pytest.raises(TransaccionError) as exc:
            ConciliacionService(db).registrar_desde_existente(datos, registrador.id)

        assert exc.value.code == "TRANSACCION"
        assert exc.value.operacion == "registrar_desde_existente"
        assert isinstance(exc.value.__cause__, OperationalError)
        db.expire_all()
        assert _contar(db, InventarioNuevo) == 0
        assert db.get(Inventario, origen.id).encontrado is False

    def test_integridad_no_relacionada_con_codigos(self, db, registrador, payload_registro, monkeypatch):
        def falla(self, *args, **kwargs):
            raise IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))

        monkeypatch.setattr(AuditoriaService, "registrar", falla)
        monkeypatch.setattr(settings, "codigo_max_reintentos", 3)

        with pytest.raises(TransaccionError):
            ConciliacionService(db).registrar_desde_existente(
                _registro(payload_registro(tipo_activo_fijo="Mobiliario")), registrador.id
            )
        assert _contar(db, InventarioNuevo) == 0

    def test_error_de_base_de_datos_en_correccion(self, db, registrador, payload_registro, monkeypatch):
        nuevo = ConciliacionService(db).registrar_desde_existente(
            _registro(payload_registro(tipo_activo_fijo="Mobiliario")), registrador.id
        )

        def falla(self, *args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("database is locked"))

        monkeypatch.setattr(AuditoriaService, "registrar", falla)
        with pytest.raises(TransaccionError) as exc:
            ConciliacionService(db).actualizar_desde_existente(
                nuevo.id,
                UpdateFromExistingRequest(descripcion="OTRA", location={"lat": 1, "lng": 1}),
                registrador.id,
            )

        assert exc.value.operacion == "actualizar_desde_existente"
        db.expire_all()
        assert db.get(InventarioNuevo, nuevo.id).descripcion != "OTRA"


# ==================== CORRECCIÓN ====================

class TestActualizacion:
    def test_codigos_inmutables_y_auditoria_acumulada(self, db, registrador, inventario_factory, payload_registro):
        origen = inventario_factory(tipo_activo_fijo=TipoActivoFijo.EQUIPOS_INFORMATICOS)
        service = ConciliacionService(db)
        nuevo = service.registrar_desde_existente(
            _registro(payload_registro(inventario_origen_id=origen.id)), registrador.id
        )
        etiqueta, cod_af = nuevo.cod_etiqueta, nuevo.cod_af_inventario

        for i, lat in enumerate((-12.06, -12.07), start=1):
            actualizado = service.actualizar_desde_existente(
                nuevo.id,
                UpdateFromExistingRequest(
                    descripcion=f"LAPTOP CORREGIDA {i}",
                    location={"lat": lat, "lng": -77.04},
                ),
                registrador.id,
            )
            assert actualizado.cod_etiqueta == etiqueta
            assert actualizado.cod_af_inventario == cod_af
            assert actualizado.inventario_origen_id == origen.id

        registros = AuditoriaService(db).por_inventario_nuevo(nuevo.id)
        assert len(registros) == 3
        assert [float(r.lat) for r in registros] == [-12.07, -12.06, -12.05]
        assert registros[0].timestamp >= registros[1].timestamp >= registros[2].timestamp

    def test_campos_omitidos_se_conservan(self, db, registrador, payload_registro):
        service = ConciliacionService(db)
        nuevo = service.registrar_desde_existente(
            _registro(payload_registro(tipo_activo_fijo="Mobiliario", observaciones="RAYADO")), registrador.id
        )

        actualizado = service.actualizar_desde_existente(
            nuevo.id,
            UpdateFromExistingRequest(estado="MALO", descripcion=None, location={"lat": 0, "lng": 0}),
            registrador.id,
        )

        assert actualizado.estado.value == "MALO"
        assert actualizado.descripcion == "LAPTOP LENOVO THINKPAD T14"
        assert actualizado.observaciones == "RAYADO"
        assert actualizado.tipo_activo_fijo == TipoActivoFijo.MOBILIARIO

    def test_upsert_de_atributos(self, db, registrador, payload_registro):
        service = ConciliacionService(db)
        nuevo = service.registrar_desde_existente(
            _registro(payload_registro(tipo_activo_fijo="Mobiliario", mobiliario_fields={"material": "MADERA"})),
            registrador.id,
        )

        service.actualizar_desde_existente(
            nuevo.id,
            UpdateFromExistingRequest(mobiliario_fields={"color": "NEGRO"}, location={"lat": 0, "lng": 0}),
            registrador.id,
        )

        db.expire_all()
        filas = db.query(Mobiliario).filter(Mobiliario.inventario_nuevo_id == nuevo.id).all()
        assert len(filas) == 1
        assert filas[0].material == "MADERA"
        assert filas[0].color == "NEGRO"

    def test_cambio_de_categoria(self, db, registrador, payload_registro):
        service = ConciliacionService(db)
        nuevo = service.registrar_desde_existente(
            _registro(payload_registro(tipo_activo_fijo="Mobiliario", mobiliario_fields={"material": "METAL"})),
            registrador.id,
        )

        actualizado = service.actualizar_desde_existente(
            nuevo.id,
            UpdateFromExistingRequest(
                tipo_activo_fijo="Vehiculos",
                vehiculos_fields={"placa": "B7K-441", "numero_motor": "M-998"},
                location={"lat": 0, "lng": 0},
            ),
            registrador.id,
        )

        assert actualizado.tipo_activo_fijo == TipoActivoFijo.VEHICULOS
        assert _contar(db, Mobiliario) == 0
        assert _contar(db, Vehiculo) == 1
        assert actualizado.datos_especificos.placa == "B7K-441"

    def test_activo_inexistente(self, db, registrador):
        with pytest.raises(RecursoNoEncontradoError) as exc:
            ConciliacionService(db).actualizar_desde_existente(
                "no-existe", UpdateFromExistingRequest(location={"lat": 0, "lng": 0}), registrador.id
            )
        assert exc.value.message == "El registro de inventario_nuevo no existe"

    def test_origen_informado_inexistente(self, db, registrador, payload_registro):
        service = ConciliacionService(db)
        nuevo = service.registrar_desde_existente(_registro(payload_registro(tipo_activo_fijo="Mobiliario")), registrador.id)

        with pytest.raises(RecursoNoEncontradoError):
            service.actualizar_desde_existente(
                nuevo.id,
                UpdateFromExistingRequest(inventario_origen_id="no-existe", location={"lat": 0, "lng": 0}),
                registrador.id,
            )
        assert _contar(db, RegistroAuditoriaUbicacion) == 1


# ==================== COLISIÓN DE CÓDIGOS ====================

class TestColisionDeCodigos:
    @pytest.fixture
    def etiqueta_repetida(self, monkeypatch):
        """La primera llamada al generador devuelve una etiqueta ya usada."""
        original = GeneradorCodigos.generar_cod_etiqueta
        estado = {"llamadas": 0, "repetida": None}

        def generar(self, hoy=None):
            estado["llamadas"] += 1
            if estado["llamadas"] == 1 and estado["repetida"]:
                return estado["repetida"]
            return original(self, hoy)

        monkeypatch.setattr(GeneradorCodigos, "generar_cod_etiqueta", generar)
        return estado

    def test_reintenta_tras_colision(self, db, registrador, payload_registro, activo_factory, etiqueta_repetida, monkeypatch):
        existente = activo_factory()
        etiqueta_repetida["repetida"] = existente.cod_etiqueta
        monkeypatch.setattr(settings, "codigo_max_reintentos", 1)

        nuevo = ConciliacionService(db).registrar_desde_existente(
            _registro(payload_registro(tipo_activo_fijo="Mobiliario")), registrador.id
        )

        assert nuevo.cod_etiqueta != existente.cod_etiqueta
        assert etiqueta_repetida["llamadas"] == 2
        assert _contar(db, InventarioNuevo) == 2
        assert _contar(db, RegistroAuditoriaUbicacion) == 1

    def test_sin_reintentos_lanza_conflicto(self, db, registrador, payload_registro, activo_factory, etiqueta_repetida, monkeypatch):
        existente = activo_factory()
        etiqueta_repetida["repetida"] = existente.cod_etiqueta
        monkeypatch.setattr(settings, "codigo_max_reintentos", 0)

        with pytest.raises(ConflictoCodigoError):
            ConciliacionService(db).registrar_desde_existente(
                _registro(payload_registro(tipo_activo_fijo="Mobiliario")), registrador.id
            )

        assert _contar(db, InventarioNuevo) == 1
        assert _contar(db, RegistroAuditoriaUbicacion) == 0

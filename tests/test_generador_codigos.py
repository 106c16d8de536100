"""
Tests del generador de códigos: secuencias diarias y secuencia por padre.
"""
from datetime import date, timedelta

import pytest

from inventario_api.core.errors import CapacidadAgotadaError, IntegridadDatosError
from inventario_api.models import Area, Sucursal
from inventario_api.schemas.catalogo import AreaCreate, ProyectoCreate, ResponsableCreate, SucursalCreate
from inventario_api.services.catalogo_service import CatalogoService
from inventario_api.services.generador_codigos import GeneradorCodigos

pytestmark = pytest.mark.unit

HOY = date(2025, 11, 16)


class TestCodigoEtiqueta:
    def test_primera_etiqueta_del_dia(self, db):
        assert GeneradorCodigos(db).generar_cod_etiqueta(HOY) == "2511160001"

    def test_formato_con_fecha_actual(self, db):
        codigo = GeneradorCodigos(db).generar_cod_etiqueta()
        assert codigo == f"{date.today().strftime('%y%m%d')}0001"
        assert len(codigo) == 10 and codigo.isdigit()

    def test_incrementa_desde_el_maximo_del_dia(self, db, activo_factory):
        activo_factory(cod_etiqueta="2511160003", cod_af_inventario="AF-20251116-0003")
        activo_factory(cod_etiqueta="2511160007", cod_af_inventario="AF-20251116-0007")

        assert GeneradorCodigos(db).generar_cod_etiqueta(HOY) == "2511160008"

    def test_prefijo_de_otro_dia_no_interfiere(self, db, activo_factory):
        ayer = HOY - timedelta(days=1)
        activo_factory(cod_etiqueta=f"{ayer.strftime('%y%m%d')}0950", cod_af_inventario="AF-20251115-0950")

        assert GeneradorCodigos(db).generar_cod_etiqueta(HOY) == "2511160001"

    def test_limite_diario(self, db, activo_factory):
        activo_factory(cod_etiqueta="2511169999", cod_af_inventario="AF-20251116-0001")

        with pytest.raises(CapacidadAgotadaError) as exc:
            GeneradorCodigos(db).generar_cod_etiqueta(HOY)

        assert exc.value.limite == 9999
        assert "límite de 9999" in exc.value.message

    def test_ultimo_valor_permitido(self, db, activo_factory):
        activo_factory(cod_etiqueta="2511169998", cod_af_inventario="AF-20251116-0001")
        assert GeneradorCodigos(db).generar_cod_etiqueta(HOY) == "2511169999"

    def test_maximo_con_formato_invalido(self, db, activo_factory):
        activo_factory(cod_etiqueta="2511160004", cod_af_inventario="AF-20251116-0004")
        activo_factory(cod_etiqueta="25111612AB", cod_af_inventario="AF-20251116-0005")

        with pytest.raises(IntegridadDatosError) as exc:
            GeneradorCodigos(db).generar_cod_etiqueta(HOY)

        assert exc.value.code == "INTEGRIDAD_DATOS"
        assert exc.value.datos["codigo"] == "25111612AB"
        assert exc.value.datos["columna"] == "cod_etiqueta"
        assert "25111612AB" in exc.value.message


class TestCodigoAF:
    def test_primer_codigo_af(self, db):
        assert GeneradorCodigos(db).generar_cod_af_inventario(HOY) == "AF-20251116-0001"

    def test_secuencia_independiente_de_la_etiqueta(self, db, activo_factory):
        activo_factory(cod_etiqueta="2511160500", cod_af_inventario="AF-20251116-0041")

        generador = GeneradorCodigos(db)
        assert generador.generar_cod_af_inventario(HOY) == "AF-20251116-0042"
        assert generador.generar_cod_etiqueta(HOY) == "2511160501"

    def test_limite_diario_af(self, db, activo_factory):
        activo_factory(cod_etiqueta="2511160001", cod_af_inventario="AF-20251116-9999")

        with pytest.raises(CapacidadAgotadaError):
            GeneradorCodigos(db).generar_cod_af_inventario(HOY)

    def test_sufijo_af_no_numerico(self, db, activo_factory):
        activo_factory(cod_etiqueta="2511160001", cod_af_inventario="AF-20251116-00X1")

        with pytest.raises(IntegridadDatosError, match="AF-20251116-00X1"):
            GeneradorCodigos(db).generar_cod_af_inventario(HOY)


class TestCodigoHijo:
    def test_codigos_de_sucursal_area_y_responsable(self, db):
        service = CatalogoService(db)
        proyecto = service.crear_proyecto(ProyectoCreate(cod_proyecto="PRJ07", empresa="Empresa Siete"))

        s1 = service.crear_sucursal(SucursalCreate(proyecto_id=proyecto.id, nombre_sucursal="Sede Central"))
        s2 = service.crear_sucursal(SucursalCreate(proyecto_id=proyecto.id, nombre_sucursal="Sede Norte"))
        area = service.crear_area(AreaCreate(sucursal_id=s2.id, area="Logística"))
        responsable = service.crear_responsable(ResponsableCreate(area_id=area.id, nombre="Ana Quispe"))

        assert s1.cod_sucursal == "PRJ07-1"
        assert s2.cod_sucursal == "PRJ07-2"
        assert area.cod_area == "PRJ07-2-1"
        assert responsable.cod_responsable == "PRJ07-2-1-1"

    def test_secuencia_por_padre_es_independiente(self, db):
        service = CatalogoService(db)
        proyecto = service.crear_proyecto(ProyectoCreate(cod_proyecto="PRJ08", empresa="Empresa Ocho"))
        s1 = service.crear_sucursal(SucursalCreate(proyecto_id=proyecto.id, nombre_sucursal="A"))
        s2 = service.crear_sucursal(SucursalCreate(proyecto_id=proyecto.id, nombre_sucursal="B"))
        service.crear_area(AreaCreate(sucursal_id=s1.id, area="Almacén"))

        generador = GeneradorCodigos(db)
        assert generador.generar_codigo_hijo(Area.sucursal_id, s1.id, s1.cod_sucursal) == "PRJ08-1-2"
        assert generador.generar_codigo_hijo(Area.sucursal_id, s2.id, s2.cod_sucursal) == "PRJ08-2-1"
        assert generador.generar_codigo_hijo(Sucursal.proyecto_id, proyecto.id, "PRJ08") == "PRJ08-3"

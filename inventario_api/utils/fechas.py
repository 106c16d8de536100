"""
Reloj único del sistema.

Los códigos (etiqueta y AF) llevan el día calendario local del servidor,
mientras que los timestamps se guardan en UTC naive. Los filtros por fecha
traducen el día local a su rango UTC para que "hoy" signifique lo mismo en
los códigos, en la bitácora y en los listados.
"""

from datetime import date, datetime, time, timezone
from typing import Tuple


class FechaHelper:
    """Conversión entre el calendario local y los timestamps UTC almacenados."""

    @staticmethod
    def hoy() -> date:
        """Día calendario local del servidor (el que aparece en los códigos)."""
        return date.today()

    @staticmethod
    def ahora_utc() -> datetime:
        """
        Instante actual en UTC, sin tzinfo.

        Es el valor por defecto de las columnas de fecha/hora de los modelos.
        """
        return datetime.now(timezone.utc).replace(tzinfo=None)

    @staticmethod
    def local_a_utc(momento: datetime) -> datetime:
        """
        Convierte un datetime naive en hora local a UTC naive.

        Ejemplo (servidor en America/Lima, UTC-5):
            >>> FechaHelper.local_a_utc(datetime(2025, 11, 16, 0, 0))
            datetime.datetime(2025, 11, 16, 5, 0)
        """
        # astimezone() interpreta un datetime naive en la zona local del proceso
        return momento.astimezone(timezone.utc).replace(tzinfo=None)

    @staticmethod
    def inicio_dia_utc(dia: date) -> datetime:
        """Primer instante del día local `dia`, expresado en UTC naive."""
        return FechaHelper.local_a_utc(datetime.combine(dia, time.min))

    @staticmethod
    def fin_dia_utc(dia: date) -> datetime:
        """Último instante del día local `dia`, expresado en UTC naive."""
        return FechaHelper.local_a_utc(datetime.combine(dia, time.max))

    @staticmethod
    def rango_dias_utc(desde: date, hasta: date) -> Tuple[datetime, datetime]:
        """
        Rango UTC inclusivo que cubre los días locales `desde`..`hasta`.

        Returns:
            Tuple[datetime, datetime]: (inicio de `desde`, fin de `hasta`)
        """
        return FechaHelper.inicio_dia_utc(desde), FechaHelper.fin_dia_utc(hasta)

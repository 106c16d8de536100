# inventario_api/utils/logger.py
import logging

from inventario_api.core.config import settings

logger = logging.getLogger("inventario_api")
logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
if not logger.handlers:
    ch = logging.StreamHandler()
    fmt = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    formatter = logging.Formatter(fmt)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

"""
OptionPulse – Shared Module
============================
Utilidades transversales usadas por todas las capas.

Este módulo contiene:
- config/: Settings y configuración
- logging/: Setup de logging

NOTA: Este módulo no contiene lógica de negocio.
"""

from optionpulse.shared.config.settings import settings, Settings
from optionpulse.shared.logging.logger import setup_logging, get_logger

__all__ = [
    "settings",
    "Settings",
    "setup_logging",
    "get_logger",
]

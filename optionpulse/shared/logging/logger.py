"""
OptionPulse – Logging configuration
====================================
Un solo handler en stdout para el bot y la API. Cada capa pide su logger
con get_logger("<módulo>") y queda bajo el namespace "optionpulse.":

  optionpulse.run_cycle       → señal, confirmación y precio por ciclo
  optionpulse.execute_trade   → contrato elegido, tamaño y orden enviada
  optionpulse.tradier_client  → requests y errores HTTP hacia Tradier

INFO muestra el consenso ciclo a ciclo, WARNING los ciclos saltados por
feed caído y ERROR los trades fallidos. Los access logs de aiohttp y
uvicorn se suben a WARNING para que no tapen el log de trading.
"""

from __future__ import annotations

import logging
import sys


def setup_logging(level: int = logging.INFO) -> None:
    """Configura el root logger una sola vez al arranque."""
    fmt = (
        "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    # Evitar handlers duplicados si se llama más de una vez
    if not root.handlers:
        root.addHandler(handler)
    root.setLevel(level)

    # Silenciar librerías ruidosas
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Fábrica de loggers con namespace prefijado."""
    return logging.getLogger(f"optionpulse.{name}")

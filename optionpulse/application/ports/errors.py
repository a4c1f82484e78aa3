"""
OptionPulse – Application Port Errors
======================================
Errores técnicos que pueden lanzar las implementaciones de los puertos
(feed de mercado, broker). El ciclo los trata como recuperables:
se loguean y se reintenta en el próximo ciclo.

JERARQUÍA:
    ProviderError (base)
    ├── AuthenticationError   (401 / 403)
    ├── MarketDataError       (timesales / quotes / chains)
    └── OrderRejectedError    (POST de orden rechazado)
"""

from __future__ import annotations

from typing import Any, Optional


class ProviderError(Exception):
    """Error de un proveedor externo (transporte, HTTP, payload)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        self.message = message
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
        }


class AuthenticationError(ProviderError):
    """Token inválido o sin permisos."""


class MarketDataError(ProviderError):
    """Fallo obteniendo datos de mercado."""


class OrderRejectedError(ProviderError):
    """El broker rechazó la orden."""

"""
OptionPulse – Domain Exceptions
================================
Excepciones específicas del dominio de negocio.

Estas excepciones capturan errores de lógica de negocio,
NO errores técnicos (esos van en application/ports/errors.py).

JERARQUÍA:
    DomainError (base)
    ├── InvalidSignalError
    ├── RiskManagementError
    └── ValidationError
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Excepción base para errores de dominio."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "message": self.message,
        }


class InvalidSignalError(DomainError):
    """Error cuando una señal no es una dirección operable (CALL/PUT)."""

    def __init__(self, message: str, reason: str = None):
        super().__init__(message, code="INVALID_SIGNAL")
        self.reason = reason


class RiskManagementError(DomainError):
    """Error cuando se viola una regla de gestión de riesgo."""

    def __init__(self, message: str, rule: str = None):
        super().__init__(message, code="RISK_VIOLATION")
        self.rule = rule


class ValidationError(DomainError):
    """Error de validación general de datos de dominio."""

    def __init__(self, message: str, field: str = None, value: Any = None):
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field
        self.value = value

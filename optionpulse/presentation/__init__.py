"""
OptionPulse – Presentation Layer
==================================
API HTTP de observabilidad y control del bot.

Este módulo contiene:
- api/: FastAPI routes

REGLA DE DEPENDENCIA:
Esta capa SOLO llama a use cases y DTOs de application/.
"""

from optionpulse.presentation.api.routes import init_routes, router

__all__ = [
    "router",
    "init_routes",
]

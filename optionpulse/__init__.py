"""
OptionPulse
============
Bot de trading de opciones sobre Tradier.

Capas:
- domain/: barras, indicadores, reglas de señal, confirmación, riesgo
- application/: ciclo de evaluación, ejecución de trades, loop periódico
- infrastructure/: cliente REST de Tradier, bus de eventos
- presentation/: API FastAPI
- shared/: configuración y logging
"""

__version__ = "0.1.0"

"""
OptionPulse – Infrastructure Layer
====================================
Implementaciones concretas de interfaces.

Este módulo contiene:
- external/: API REST de Tradier (barras, cadenas, órdenes) y bus de eventos

REGLA DE DEPENDENCIA:
Esta capa implementa interfaces definidas en application/ports/.

Puede importar de:
- domain/ (entidades, value objects)
- application/ (ports)
- shared/ (config, logging)
"""

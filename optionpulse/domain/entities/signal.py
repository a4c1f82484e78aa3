"""
OptionPulse – Domain Entity: Signal
=====================================
Dirección producida por el evaluador en cada ciclo.

- CALL: sesgo alcista → comprar call.
- PUT:  sesgo bajista → comprar put.
- NONE: sin consenso de reglas → no operar y romper la confirmación.

Se hereda de str para que serialice directo a JSON (API / eventos).
"""

from __future__ import annotations

from enum import Enum

from optionpulse.domain.exceptions.domain_errors import InvalidSignalError


class Signal(str, Enum):
    """Señal direccional de un ciclo."""
    CALL = "CALL"
    PUT = "PUT"
    NONE = "NONE"

    @property
    def is_directional(self) -> bool:
        return self is not Signal.NONE

    @property
    def option_type(self) -> str:
        """Tipo de opción de Tradier ("call" | "put") para esta dirección."""
        if self is Signal.NONE:
            raise InvalidSignalError("NONE no tiene tipo de opción", reason="not_directional")
        return self.value.lower()

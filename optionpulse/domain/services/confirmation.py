"""
OptionPulse – Domain Service: Confirmation State Machine
==========================================================
Debounce de señales: solo se opera tras `threshold` señales idénticas
consecutivas.

═══════════════════════════════════════════════════════════════════
                    TRANSICIONES
═══════════════════════════════════════════════════════════════════

  IDLE ──NONE──▸ IDLE
  IDLE ──X────▸ ACCUMULATING(X, 1)

  ACCUMULATING(S, c) ──NONE──▸ IDLE                   (consenso roto)
  ACCUMULATING(S, c) ──S─────▸ ACCUMULATING(S, c+1)
                                └─ si c+1 ≥ threshold: evento CONFIRMADO(S) → IDLE
  ACCUMULATING(S, c) ──Y≠S───▸ ACCUMULATING(Y, 1)     (flip, no se arrastra c)

Con threshold = 1 la primera señal direccional se confirma al instante.

POR QUÉ NO VARIABLES GLOBALES:
- El estado vive en una instancia de larga duración (una por bot),
  creada por el container e inyectada en el ciclo.
- Single-writer: el ciclo nunca corre en paralelo consigo mismo.

Un ciclo fallido (feed caído, barras insuficientes) NO llama a update():
la falta de datos no es una señal NONE.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from optionpulse.domain.entities.signal import Signal
from optionpulse.domain.exceptions.domain_errors import ValidationError


class ConfirmationPhase(str, Enum):
    IDLE = "IDLE"
    ACCUMULATING = "ACCUMULATING"


@dataclass(frozen=True, slots=True)
class ConfirmationState:
    """Estado inmutable de la máquina (cada transición crea uno nuevo)."""

    signal: Optional[Signal] = None
    count: int = 0

    @property
    def phase(self) -> ConfirmationPhase:
        if self.signal is None or self.count == 0:
            return ConfirmationPhase.IDLE
        return ConfirmationPhase.ACCUMULATING

    @property
    def pending(self) -> Tuple[Signal, ...]:
        """Secuencia de señales a la espera de consenso."""
        if self.signal is None:
            return ()
        return (self.signal,) * self.count

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "signal": self.signal.value if self.signal else None,
            "count": self.count,
            "pending": [s.value for s in self.pending],
        }


IDLE = ConfirmationState()


@dataclass(frozen=True, slots=True)
class ConfirmationUpdate:
    """Resultado de procesar una señal."""

    confirmed: Optional[Signal]
    state: ConfirmationState
    message: str

    @property
    def is_confirmed(self) -> bool:
        return self.confirmed is not None


class ConfirmationStateMachine:
    """
    Máquina de confirmación multi-ciclo.

    USO:
        machine = ConfirmationStateMachine(threshold=2)
        update = machine.update(Signal.CALL)   # 1/2, esperando
        update = machine.update(Signal.CALL)   # confirmado → IDLE
        if update.is_confirmed:
            await executor.execute(update.confirmed)
    """

    def __init__(self, threshold: int = 2) -> None:
        if threshold < 1:
            raise ValidationError("threshold debe ser >= 1", field="threshold", value=threshold)
        self._threshold = threshold
        self._state: ConfirmationState = IDLE

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def state(self) -> ConfirmationState:
        return self._state

    def reset(self) -> None:
        self._state = IDLE

    def update(self, signal: Signal) -> ConfirmationUpdate:
        """Aplica una señal y devuelve si hubo confirmación."""
        current = self._state

        if not signal.is_directional:
            self._state = IDLE
            message = (
                "Sin señal. Consenso reiniciado"
                if current.phase is ConfirmationPhase.ACCUMULATING
                else "Sin señal. Esperando..."
            )
            return ConfirmationUpdate(confirmed=None, state=self._state, message=message)

        if current.signal is signal:
            count = current.count + 1
        else:
            count = 1

        if count >= self._threshold:
            self._state = IDLE
            return ConfirmationUpdate(
                confirmed=signal,
                state=self._state,
                message=f"Señal {signal.value} confirmada ({count}/{self._threshold})",
            )

        self._state = ConfirmationState(signal=signal, count=count)
        return ConfirmationUpdate(
            confirmed=None,
            state=self._state,
            message=f"{count}/{self._threshold} señales {signal.value} confirmadas. Esperando...",
        )

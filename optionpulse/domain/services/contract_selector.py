"""
OptionPulse – Domain Service: Contract Selector
=================================================
Elige el contrato a comprar para una señal confirmada.

LÓGICA:
1. Filtrar por tipo: CALL → "call", PUT → "put".
2. Descartar contratos sin ask positivo (no se pueden dimensionar).
3. Elegir el strike más cercano al precio spot: min |strike − spot|.
   Empate → el de ask más bajo.

La cadena que llega ya es la del vencimiento más cercano; la
resolución del vencimiento vive en el caso de uso de ejecución.
"""

from __future__ import annotations

from typing import Iterable, Optional

from optionpulse.domain.entities.option_contract import OptionContract
from optionpulse.domain.entities.signal import Signal


class ContractSelector:
    """Selector de contrato por distancia al spot."""

    @staticmethod
    def select(
        contracts: Iterable[OptionContract],
        direction: Signal,
        spot_price: float,
    ) -> Optional[OptionContract]:
        """
        Args:
            contracts: Cadena de opciones de un vencimiento
            direction: Signal.CALL o Signal.PUT
            spot_price: Precio actual del subyacente

        Returns:
            Contrato elegido, o None si no hay candidatos
        """
        option_type = direction.option_type
        candidates = [
            c for c in contracts
            if c.option_type == option_type and c.is_quoted
        ]
        if not candidates:
            return None

        return min(candidates, key=lambda c: (abs(c.strike - spot_price), c.ask))

"""
OptionPulse – Application Port: Market Data Provider
=====================================================
Interfaz para obtener barras recientes.

Los use cases solicitan datos; la infraestructura
decide CÓMO obtenerlos (Tradier REST, CSV histórico, fixture de test).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from optionpulse.domain.entities.bar import Bar


class IMarketDataProvider(ABC):
    """
    Interfaz para proveer barras OHLCV.

    IMPLEMENTACIONES POSIBLES:
    - TradierMarketDataAdapter (REST timesales)
    - FakeMarketDataProvider (testing)
    """

    @abstractmethod
    async def fetch_recent_bars(
        self,
        symbol: str,
        interval: str,
        max_count: int,
    ) -> List[Bar]:
        """
        Obtiene las barras más recientes.

        Args:
            symbol: Subyacente (e.g. "SPY")
            interval: Intervalo de barra (e.g. "1min")
            max_count: Máximo de barras a devolver

        Returns:
            Barras ordenadas por tiempo ASC (pueden ser menos que max_count)

        Raises:
            ProviderError si el feed falla (red, auth, payload)
        """
        pass

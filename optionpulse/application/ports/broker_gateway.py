"""
OptionPulse – Application Port: Broker Gateway
================================================
Interfaz hacia el broker: cadenas de opciones, cotizaciones y órdenes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List

from optionpulse.domain.entities.option_contract import OptionContract
from optionpulse.domain.entities.trade import OrderReceipt, OrderRequest


class IBrokerGateway(ABC):
    """
    Interfaz del broker.

    IMPLEMENTACIONES POSIBLES:
    - TradierBrokerAdapter (REST)
    - FakeBrokerGateway (testing)

    Todos los métodos pueden lanzar ProviderError.
    """

    @abstractmethod
    async def get_profile(self) -> Dict[str, Any]:
        """Perfil del usuario (verificación de conexión / credenciales)."""
        pass

    @abstractmethod
    async def get_expirations(self, symbol: str) -> List[date]:
        """Vencimientos disponibles, ordenados ASC."""
        pass

    @abstractmethod
    async def get_option_chain(self, symbol: str, expiration: date) -> List[OptionContract]:
        """Cadena completa (calls y puts) de un vencimiento."""
        pass

    @abstractmethod
    async def get_quote(self, symbol: str) -> float:
        """Último precio del subyacente."""
        pass

    @abstractmethod
    async def submit_order(self, order: OrderRequest) -> OrderReceipt:
        """Envía una orden. Lanza OrderRejectedError si el broker la rechaza."""
        pass

"""
OptionPulse – Domain Service: Risk Calculator
===============================================
Dimensionado de posición por presupuesto fijo.

FÓRMULA:
    quantity = floor(risk_per_trade / (ask × contract_multiplier))

Se redondea SIEMPRE hacia abajo: nunca se arriesga más que el
presupuesto. Si quantity < 1 el contrato es demasiado caro y la
ejecución se omite.

contract_multiplier = 1 reproduce la regla "presupuesto ÷ precio del
instrumento" sobre el ask cotizado; con 100 se dimensiona sobre el
costo real de un contrato estándar de opciones USA.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from optionpulse.domain.exceptions.domain_errors import RiskManagementError


@dataclass(frozen=True)
class RiskConfig:
    """Configuración de gestión de riesgo."""

    risk_per_trade: float = 100.0   # USD arriesgados por trade
    contract_multiplier: int = 1    # unidades por contrato aplicadas al ask

    def __post_init__(self) -> None:
        if self.risk_per_trade <= 0:
            raise RiskManagementError("risk_per_trade debe ser > 0", rule="risk_per_trade")
        if self.contract_multiplier < 1:
            raise RiskManagementError(
                "contract_multiplier debe ser >= 1", rule="contract_multiplier"
            )


@dataclass(frozen=True)
class PositionSize:
    """Resultado del dimensionado."""

    quantity: int
    unit_cost: float
    total_cost: float
    is_valid: bool
    rejection_reason: Optional[str] = None


class RiskCalculator:
    """
    Calculadora de tamaño de posición.

    NO tiene dependencias externas.
    """

    def __init__(self, config: RiskConfig = None):
        self._config = config or RiskConfig()

    @property
    def config(self) -> RiskConfig:
        return self._config

    def size_position(self, ask: Optional[float]) -> PositionSize:
        """
        Calcula la cantidad de contratos para un ask dado.

        Args:
            ask: Precio ask del contrato (None / <= 0 → inválido)

        Returns:
            PositionSize con cantidad y validación
        """
        if ask is None or ask <= 0:
            return PositionSize(
                quantity=0,
                unit_cost=0.0,
                total_cost=0.0,
                is_valid=False,
                rejection_reason="Ask no disponible",
            )

        unit_cost = ask * self._config.contract_multiplier
        quantity = math.floor(self._config.risk_per_trade / unit_cost)

        if quantity < 1:
            return PositionSize(
                quantity=0,
                unit_cost=unit_cost,
                total_cost=0.0,
                is_valid=False,
                rejection_reason=(
                    f"Opción demasiado cara para el riesgo: "
                    f"costo {unit_cost:.2f} > presupuesto {self._config.risk_per_trade:.2f}"
                ),
            )

        return PositionSize(
            quantity=quantity,
            unit_cost=unit_cost,
            total_cost=quantity * unit_cost,
            is_valid=True,
        )

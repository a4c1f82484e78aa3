"""
Execute Trade Use Case.

Caso de uso para ejecutar una señal confirmada en el broker.
Implementa ITradeExecutor: el ciclo solo ve un TradeOutcome.

PASOS:
1. Resolver el vencimiento más cercano (>= hoy)
2. Cargar la cadena de ese vencimiento
3. Elegir contrato del tipo correcto con strike más cercano al spot
4. Dimensionar por presupuesto fijo (floor, mínimo 1)
5. Enviar orden buy_to_open a mercado (o simular en dry_run)

Los errores del broker se reportan como FAILED, nunca se propagan:
la máquina de confirmación ya fue reseteada y el loop debe seguir.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from optionpulse.application.ports.broker_gateway import IBrokerGateway
from optionpulse.application.ports.errors import ProviderError
from optionpulse.application.ports.trade_executor import ITradeExecutor
from optionpulse.domain.entities.signal import Signal
from optionpulse.domain.entities.trade import OrderRequest, TradeOutcome, TradeStatus
from optionpulse.domain.exceptions.domain_errors import InvalidSignalError
from optionpulse.domain.services.contract_selector import ContractSelector
from optionpulse.domain.services.risk_calculator import RiskCalculator
from optionpulse.shared.logging.logger import get_logger

logger = get_logger("execute_trade")


class ExecuteTradeUseCase(ITradeExecutor):
    """
    Caso de uso: Ejecutar trade de opciones.

    DEPENDE SOLO DE:
    - Interfaz del broker (IBrokerGateway)
    - Domain services puros (ContractSelector, RiskCalculator)
    """

    def __init__(
        self,
        broker: IBrokerGateway,
        symbol: str,
        risk_calculator: RiskCalculator,
        contract_selector: ContractSelector = None,
        dry_run: bool = False,
        today: Callable[[], date] = date.today,
    ):
        self._broker = broker
        self._symbol = symbol
        self._risk_calculator = risk_calculator
        self._selector = contract_selector or ContractSelector()
        self._dry_run = dry_run
        self._today = today

    async def execute(
        self,
        direction: Signal,
        spot_price: Optional[float] = None,
    ) -> TradeOutcome:
        """
        Ejecuta la señal confirmada.

        Args:
            direction: Signal.CALL o Signal.PUT
            spot_price: Precio del subyacente; si es None se consulta al broker

        Returns:
            TradeOutcome (nunca lanza por errores del broker)
        """
        if not direction.is_directional:
            raise InvalidSignalError("Solo se ejecutan señales CALL/PUT", reason="not_directional")

        try:
            return await self._execute(direction, spot_price)
        except ProviderError as e:
            logger.error("❌ Fallo al colocar trade %s: %s", direction.value, e.message)
            return TradeOutcome(
                status=TradeStatus.FAILED,
                direction=direction,
                reason=e.message,
            )

    async def _execute(self, direction: Signal, spot_price: Optional[float]) -> TradeOutcome:
        # 1. Vencimiento más cercano
        expiration = await self._nearest_expiration()
        if expiration is None:
            return self._skipped(direction, "Sin vencimientos disponibles")

        # 2. Cadena
        chain = await self._broker.get_option_chain(self._symbol, expiration)

        # 3. Selección por distancia al spot
        if spot_price is None:
            spot_price = await self._broker.get_quote(self._symbol)
        contract = self._selector.select(chain, direction, spot_price)
        if contract is None:
            logger.info("No hay contratos %s para %s", direction.option_type, expiration)
            return self._skipped(direction, f"Sin contratos {direction.option_type} cotizados")

        # 4. Dimensionado
        size = self._risk_calculator.size_position(contract.ask)
        if not size.is_valid:
            logger.info("🚫 %s (ask=%.2f)", size.rejection_reason, contract.ask or 0.0)
            return TradeOutcome(
                status=TradeStatus.SKIPPED,
                direction=direction,
                contract_symbol=contract.symbol,
                ask=contract.ask,
                reason=size.rejection_reason,
            )

        order = OrderRequest(
            account_symbol=self._symbol,
            option_symbol=contract.symbol,
            quantity=size.quantity,
        )

        # 5. Envío
        if self._dry_run:
            logger.info(
                "[dry-run] %s %s x%d @ ask %.2f (no enviada)",
                direction.value, contract.symbol, size.quantity, contract.ask,
            )
            return TradeOutcome(
                status=TradeStatus.SIMULATED,
                direction=direction,
                contract_symbol=contract.symbol,
                quantity=size.quantity,
                ask=contract.ask,
                reason="dry_run",
            )

        receipt = await self._broker.submit_order(order)
        logger.info(
            "✅ Ejecutado trade %s en %s, cantidad: %d (orden %s)",
            direction.value, contract.symbol, size.quantity, receipt.order_id,
        )
        return TradeOutcome(
            status=TradeStatus.SUBMITTED,
            direction=direction,
            contract_symbol=contract.symbol,
            quantity=size.quantity,
            ask=contract.ask,
            order_id=receipt.order_id,
        )

    async def _nearest_expiration(self) -> Optional[date]:
        today = self._today()
        expirations = await self._broker.get_expirations(self._symbol)
        upcoming = sorted(e for e in expirations if e >= today)
        return upcoming[0] if upcoming else None

    @staticmethod
    def _skipped(direction: Signal, reason: str) -> TradeOutcome:
        return TradeOutcome(status=TradeStatus.SKIPPED, direction=direction, reason=reason)

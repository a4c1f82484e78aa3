"""
Dependency Injection Container.

Este módulo proporciona el contenedor de inyección de dependencias
que gestiona todas las instancias de adapters, servicios y casos de uso.

Clean Architecture: Este contenedor vive en la capa más externa y es el único
lugar donde se crean dependencias concretas.

Todas las instancias son singletons perezosos: el bot es un único proceso
con UNA ventana de barras y UNA máquina de confirmación.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

# Domain
from optionpulse.domain.services.confirmation import ConfirmationStateMachine
from optionpulse.domain.services.contract_selector import ContractSelector
from optionpulse.domain.services.indicator_engine import (
    IIndicatorEngine,
    IndicatorEngine,
    IndicatorEngineConfig,
)
from optionpulse.domain.services.risk_calculator import RiskCalculator, RiskConfig
from optionpulse.domain.services.signal_rules import SignalEvaluator, SignalRulesConfig

# Application
from optionpulse.application.ports.broker_gateway import IBrokerGateway
from optionpulse.application.ports.event_publisher import IEventPublisher
from optionpulse.application.ports.market_data_provider import IMarketDataProvider
from optionpulse.application.ports.trade_executor import ITradeExecutor
from optionpulse.application.services.trading_loop import TradingLoop
from optionpulse.application.use_cases.run_cycle_usecase import RunCycleUseCase

# Infrastructure
from optionpulse.infrastructure.external.tradier_client import TradierClient

# Shared
from optionpulse.shared.config.settings import Settings


@dataclass
class Container:
    """
    Contenedor de Inyección de Dependencias.

    Gestiona el ciclo de vida de todas las dependencias de la aplicación.
    Las capas internas dependen de abstracciones (ports), nunca de Tradier.
    """

    # Configuración
    settings: Settings = field(default_factory=Settings)

    # Infraestructura
    _tradier_client: Optional[TradierClient] = None
    _market_data_provider: Optional[IMarketDataProvider] = None
    _broker_gateway: Optional[IBrokerGateway] = None
    _event_publisher: Optional[IEventPublisher] = None

    # Domain Services
    _indicator_engine: Optional[IIndicatorEngine] = None
    _signal_evaluator: Optional[SignalEvaluator] = None
    _confirmation: Optional[ConfirmationStateMachine] = None
    _risk_calculator: Optional[RiskCalculator] = None

    # Use Cases / Services
    _trade_executor: Optional[ITradeExecutor] = None
    _run_cycle: Optional[RunCycleUseCase] = None
    _trading_loop: Optional[TradingLoop] = None

    # ==================== Infrastructure ====================

    @property
    def tradier_client(self) -> TradierClient:
        """Cliente HTTP compartido por market data y broker."""
        if self._tradier_client is None:
            self._tradier_client = TradierClient(
                base_url=self.settings.tradier_base_url,
                access_token=self.settings.tradier_access_token,
                timeout_seconds=self.settings.http_timeout_seconds,
            )
        return self._tradier_client

    @property
    def market_data_provider(self) -> IMarketDataProvider:
        if self._market_data_provider is None:
            from optionpulse.infrastructure.external.tradier_adapter import TradierMarketDataAdapter
            self._market_data_provider = TradierMarketDataAdapter(
                self.tradier_client,
                session_filter=self.settings.session_filter,
            )
        return self._market_data_provider

    @property
    def broker_gateway(self) -> IBrokerGateway:
        if self._broker_gateway is None:
            from optionpulse.infrastructure.external.tradier_adapter import TradierBrokerAdapter
            self._broker_gateway = TradierBrokerAdapter(
                self.tradier_client,
                account_id=self.settings.tradier_account_id,
            )
        return self._broker_gateway

    @property
    def event_publisher(self) -> IEventPublisher:
        if self._event_publisher is None:
            from optionpulse.infrastructure.external.event_bus_adapter import EventBusAdapter
            self._event_publisher = EventBusAdapter(
                max_recent=self.settings.recent_events_limit,
            )
        return self._event_publisher

    # ==================== Domain Services ====================

    @property
    def indicator_engine(self) -> IIndicatorEngine:
        if self._indicator_engine is None:
            s = self.settings
            self._indicator_engine = IndicatorEngine(IndicatorEngineConfig(
                rsi_period=s.rsi_period,
                ema_fast_period=s.ema_fast_period,
                ema_mid_period=s.ema_mid_period,
                ema_slow_period=s.ema_slow_period,
                macd_fast_period=s.macd_fast_period,
                macd_slow_period=s.macd_slow_period,
                macd_signal_period=s.macd_signal_period,
                volume_spike_lookback=s.volume_spike_lookback,
                volume_spike_multiplier=s.volume_spike_multiplier,
            ))
        return self._indicator_engine

    @property
    def signal_evaluator(self) -> SignalEvaluator:
        if self._signal_evaluator is None:
            s = self.settings
            self._signal_evaluator = SignalEvaluator(SignalRulesConfig(
                call_rsi_lower=s.call_rsi_lower,
                call_rsi_upper=s.call_rsi_upper,
                put_rsi_lower=s.put_rsi_lower,
                put_rsi_upper=s.put_rsi_upper,
            ))
        return self._signal_evaluator

    @property
    def confirmation(self) -> ConfirmationStateMachine:
        """Máquina de confirmación (singleton, única escritora: run_cycle)."""
        if self._confirmation is None:
            self._confirmation = ConfirmationStateMachine(
                threshold=self.settings.confirmation_threshold,
            )
        return self._confirmation

    @property
    def risk_calculator(self) -> RiskCalculator:
        if self._risk_calculator is None:
            self._risk_calculator = RiskCalculator(RiskConfig(
                risk_per_trade=self.settings.risk_per_trade,
                contract_multiplier=self.settings.contract_multiplier,
            ))
        return self._risk_calculator

    # ==================== Use Cases ====================

    @property
    def trade_executor(self) -> ITradeExecutor:
        if self._trade_executor is None:
            from optionpulse.application.use_cases.execute_trade_usecase import ExecuteTradeUseCase
            self._trade_executor = ExecuteTradeUseCase(
                broker=self.broker_gateway,
                symbol=self.settings.symbol,
                risk_calculator=self.risk_calculator,
                contract_selector=ContractSelector(),
                dry_run=self.settings.dry_run,
            )
        return self._trade_executor

    @property
    def run_cycle(self) -> RunCycleUseCase:
        if self._run_cycle is None:
            s = self.settings
            self._run_cycle = RunCycleUseCase(
                market_data=self.market_data_provider,
                indicator_engine=self.indicator_engine,
                signal_evaluator=self.signal_evaluator,
                confirmation=self.confirmation,
                trade_executor=self.trade_executor,
                event_publisher=self.event_publisher,
                symbol=s.symbol,
                interval=s.interval,
                window_capacity=s.window_capacity,
                min_bars_required=s.min_bars_required,
            )
        return self._run_cycle

    @property
    def trading_loop(self) -> TradingLoop:
        if self._trading_loop is None:
            self._trading_loop = TradingLoop(
                self.run_cycle,
                interval_seconds=self.settings.poll_interval_seconds,
            )
        return self._trading_loop

    # ==================== Lifecycle ====================

    async def close(self) -> None:
        """Libera recursos de red (sesión aiohttp)."""
        if self._tradier_client is not None:
            await self._tradier_client.close()

    def reset(self) -> None:
        """Resetea todas las instancias (útil para tests)."""
        self._tradier_client = None
        self._market_data_provider = None
        self._broker_gateway = None
        self._event_publisher = None
        self._indicator_engine = None
        self._signal_evaluator = None
        self._confirmation = None
        self._risk_calculator = None
        self._trade_executor = None
        self._run_cycle = None
        self._trading_loop = None

    def override(self, name: str, instance: Any) -> None:
        """
        Override una dependencia (útil para tests con fakes).

        Args:
            name: Nombre de la dependencia (ej: 'market_data_provider')
            instance: Instancia a usar
        """
        attr_name = f"_{name}"
        if hasattr(self, attr_name):
            setattr(self, attr_name, instance)
        else:
            raise ValueError(f"Unknown dependency: {name}")


# ==================== Global Container ====================

_container: Optional[Container] = None


def get_container() -> Container:
    """Obtiene la instancia global del contenedor."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    global _container
    if _container is not None:
        _container.reset()
    _container = None


def init_container(settings: Optional[Settings] = None) -> Container:
    """
    Inicializa el contenedor con configuración específica.

    Args:
        settings: Configuración opcional. Si es None, se lee del entorno.
    """
    global _container
    if settings is None:
        settings = Settings()
    _container = Container(settings=settings)
    return _container


def create_test_container(settings: Optional[Settings] = None, **fakes) -> Container:
    """
    Crea un contenedor con dependencias sustituidas.

    Ejemplo:
        container = create_test_container(
            market_data_provider=FakeMarketData(bars),
            broker_gateway=FakeBroker(),
        )
    """
    container = Container(settings=settings) if settings is not None else Container()
    for name, fake in fakes.items():
        container.override(name, fake)
    return container

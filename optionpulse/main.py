"""
OptionPulse – Main Application Entry Point
============================================
Orquesta el bot: Tradier REST + Indicadores + Reglas + Confirmación + Ejecución.

ARQUITECTURA DE ARRANQUE:
  1. Configurar logging
  2. Crear el contenedor (DI) con Settings del entorno
  3. FastAPI lifespan (startup):
     a. Verificar credenciales (sin credenciales → solo API, sin loop)
     b. Probar conexión con Tradier (GET /user/profile)
     c. Lanzar TradingLoop como background task
  4. FastAPI lifespan (shutdown):
     a. Detener loop, cancelar tasks, cerrar sesión HTTP

FLUJO DE DATOS (cada poll_interval_seconds):
  Tradier timesales → BarSeries(100) → IndicatorEngine → SignalEvaluator
       → ConfirmationStateMachine(2) → ExecuteTradeUseCase
       → Tradier orders (buy_to_open, market, day)

  uvicorn optionpulse.main:app --host 0.0.0.0 --port 8888
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from optionpulse.application.ports.errors import ProviderError
from optionpulse.container import init_container
from optionpulse.presentation.api.routes import init_routes, router
from optionpulse.shared.logging.logger import get_logger, setup_logging

# ─── Contenedor de Dependencias ─────────────────────────────────────────
container = init_container()
settings = container.settings

# ─── Logging ────────────────────────────────────────────────────────────
setup_logging(logging.DEBUG if settings.debug else logging.INFO)
logger = get_logger("main")

# Task references para lifecycle
_background_tasks: list[asyncio.Task] = []


async def _test_connection() -> bool:
    """GET /user/profile: valida token y conectividad antes de operar."""
    try:
        profile = await container.broker_gateway.get_profile()
    except ProviderError as e:
        logger.error("❌ Error de conexión con Tradier: %s", e.message)
        return False
    logger.info("✓ Conexión exitosa con Tradier (cuenta: %s)", profile.get("name") or profile.get("id"))
    return True


# ─── FastAPI Lifespan ───────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup/shutdown lifecycle de la aplicación.
    El loop de trading se lanza como task de larga duración.
    """
    logger.info("=" * 60)
    logger.info("  OptionPulse - Bot de opciones")
    logger.info("  Subyacente: %s  (barras %s, sesión %s)",
                settings.symbol, settings.interval, settings.session_filter)
    logger.info("  Ventana: %d barras, mínimo %d",
                settings.window_capacity, container.run_cycle.min_bars)
    logger.info("  Indicadores: RSI %d, EMA %d/%d/%d, MACD %d/%d/%d, VWAP, volumen",
                settings.rsi_period,
                settings.ema_fast_period, settings.ema_mid_period, settings.ema_slow_period,
                settings.macd_fast_period, settings.macd_slow_period, settings.macd_signal_period)
    logger.info("  Confirmación: %d señales consecutivas", settings.confirmation_threshold)
    logger.info("  Riesgo por trade: $%.2f  %s",
                settings.risk_per_trade, "(DRY RUN)" if settings.dry_run else "")
    logger.info("  Periodo del loop: %.0fs", settings.poll_interval_seconds)
    logger.info("=" * 60)

    init_routes(
        container.run_cycle,
        container.signal_evaluator,
        container.event_publisher,
        container.broker_gateway,
        settings,
        trading_loop=container.trading_loop,
    )

    if not settings.has_credentials:
        try:
            settings.require_credentials()
        except RuntimeError as e:
            logger.error("❌ %s. El loop de trading NO se inicia.", e)
    else:
        connected = await _test_connection()
        if settings.loop_autostart and connected:
            loop_task = asyncio.create_task(
                container.trading_loop.start(), name="trading-loop"
            )
            _background_tasks.append(loop_task)
        elif not connected:
            logger.error("El loop de trading NO se inicia sin conexión al broker")

    logger.info("✓ Todos los componentes iniciados correctamente")

    yield  # ← La app está corriendo aquí

    # ── SHUTDOWN ──
    logger.info("Iniciando shutdown...")

    if container.trading_loop.is_running:
        await container.trading_loop.stop()

    for task in _background_tasks:
        if not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
    _background_tasks.clear()

    await container.close()
    logger.info("✓ Shutdown completo")


# ─── FastAPI App ────────────────────────────────────────────────────────

app = FastAPI(
    title="OptionPulse",
    description="Bot de opciones sobre Tradier: indicadores técnicos, confirmación multi-ciclo y ejecución con riesgo fijo",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(router)


def run() -> None:
    """Entry point de consola: `optionpulse`."""
    import uvicorn

    uvicorn.run(
        "optionpulse.main:app",
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    run()

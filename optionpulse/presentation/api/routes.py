"""
OptionPulse – API Routes (FastAPI)
====================================
Endpoints REST de observabilidad y control.

Endpoints disponibles:
  GET  /api/health          → health check
  GET  /api/status          → ventana, confirmación, loop y último ciclo
  GET  /api/indicators      → último snapshot + detalle de condiciones
  GET  /api/events/recent   → eventos de dominio recientes
  GET  /api/broker/profile  → prueba de conexión con Tradier
  POST /api/cycle           → ejecutar un ciclo ahora (serializado con el loop)
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from optionpulse.application.dto.status_dto import StatusResponseDTO
from optionpulse.application.ports.errors import AuthenticationError, ProviderError
from optionpulse.shared.logging.logger import get_logger

logger = get_logger("api.routes")

router = APIRouter()

# Referencias a componentes inyectados desde main.py
_run_cycle = None
_trading_loop = None
_signal_evaluator = None
_event_publisher = None
_broker_gateway = None
_settings = None


def init_routes(
    run_cycle,
    signal_evaluator,
    event_publisher,
    broker_gateway,
    settings,
    trading_loop=None,
) -> None:
    """Inyectar dependencias desde main.py al arrancar."""
    global _run_cycle, _trading_loop, _signal_evaluator
    global _event_publisher, _broker_gateway, _settings
    _run_cycle = run_cycle
    _trading_loop = trading_loop
    _signal_evaluator = signal_evaluator
    _event_publisher = event_publisher
    _broker_gateway = broker_gateway
    _settings = settings


def _require_ready() -> None:
    if _run_cycle is None or _settings is None:
        raise HTTPException(status_code=503, detail="Server not ready")


# ─── Estado ────────────────────────────────────────────────────────────

@router.get("/api/health")
async def health_check() -> dict:
    """Health check para monitoreo."""
    return {"status": "ok", "service": "optionpulse"}


@router.get("/api/status")
async def system_status() -> dict:
    _require_ready()
    return StatusResponseDTO.from_components(
        _run_cycle,
        symbol=_settings.symbol,
        interval=_settings.interval,
        loop=_trading_loop,
        dry_run=_settings.dry_run,
    ).to_dict()


@router.get("/api/indicators")
async def get_indicators() -> dict:
    """Indicadores del último ciclo evaluado y condición a condición."""
    _require_ready()
    last = _run_cycle.last_result
    if last is None or last.snapshot is None:
        return {
            "symbol": _settings.symbol,
            "ready": False,
            "message": last.message if last is not None else "Sin ciclos todavía",
        }
    return {
        "symbol": _settings.symbol,
        "ready": True,
        "price": last.price,
        "signal": last.signal.value if last.signal else None,
        "indicators": last.snapshot.to_dict(),
        "conditions": _signal_evaluator.explain(last.snapshot, last.price),
    }


@router.get("/api/events/recent")
async def recent_events(limit: int = Query(default=50, ge=1, le=500)) -> dict:
    if _event_publisher is None:
        return {"count": 0, "events": []}
    events = _event_publisher.recent(limit)
    return {"count": len(events), "events": events}


# ─── Broker ────────────────────────────────────────────────────────────

@router.get("/api/broker/profile")
async def broker_profile() -> dict:
    """Prueba de conexión: GET /user/profile en Tradier."""
    if _broker_gateway is None:
        raise HTTPException(status_code=503, detail="Server not ready")
    try:
        profile = await _broker_gateway.get_profile()
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=e.message)
    except ProviderError as e:
        logger.warning("Prueba de conexión fallida: %s", e.message)
        raise HTTPException(status_code=502, detail=e.message)
    return {"connected": True, "profile": profile}


# ─── Control ───────────────────────────────────────────────────────────

@router.post("/api/cycle")
async def run_cycle_now() -> dict:
    """Ejecutar un ciclo fuera de agenda (espera si el loop está en uno)."""
    _require_ready()
    result = await _run_cycle.execute()
    logger.info("Ciclo manual: %s", result.status.value)
    return result.to_dict()

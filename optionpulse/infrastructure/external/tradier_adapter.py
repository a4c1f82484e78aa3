"""
Tradier REST Adapters.

Adapta TradierClient a los puertos de la aplicación:
- TradierMarketDataAdapter → IMarketDataProvider (GET /markets/timesales)
- TradierBrokerAdapter     → IBrokerGateway (perfil, vencimientos,
                              cadenas, cotizaciones, órdenes)

FORMATO DE PAYLOADS:
Tradier colapsa las colecciones de un solo elemento: `series.data`,
`options.option`, `quotes.quote` o `expirations.date` pueden llegar como
lista, como objeto único o como null. _as_list() normaliza los tres casos.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from optionpulse.application.ports.broker_gateway import IBrokerGateway
from optionpulse.application.ports.errors import MarketDataError, OrderRejectedError
from optionpulse.application.ports.market_data_provider import IMarketDataProvider
from optionpulse.domain.entities.bar import Bar
from optionpulse.domain.entities.option_contract import OptionContract
from optionpulse.domain.entities.trade import OrderReceipt, OrderRequest
from optionpulse.domain.exceptions.domain_errors import ValidationError
from optionpulse.infrastructure.external.tradier_client import TradierClient
from optionpulse.shared.logging.logger import get_logger

logger = get_logger("tradier_adapter")


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _section(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    """payload[key] como dict; Tradier envía null o "" cuando no hay datos."""
    value = payload.get(key) if isinstance(payload, dict) else None
    return value if isinstance(value, dict) else {}


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


# ════════════════════════════════════════════════════════════════
#  MARKET DATA
# ════════════════════════════════════════════════════════════════

class TradierMarketDataAdapter(IMarketDataProvider):
    """
    Implementación de IMarketDataProvider usando /markets/timesales.

    Las filas inválidas (OHLC incoherente, campos faltantes) se descartan
    con warning: una barra corrupta no debe tumbar el ciclo completo.
    """

    def __init__(self, client: TradierClient, session_filter: str = "open"):
        self._client = client
        self._session_filter = session_filter

    async def fetch_recent_bars(
        self,
        symbol: str,
        interval: str,
        max_count: int,
    ) -> List[Bar]:
        payload = await self._client.get(
            "/markets/timesales",
            params={
                "symbol": symbol,
                "interval": interval,
                "session_filter": self._session_filter,
            },
        )
        rows = _as_list(_section(payload, "series").get("data"))

        bars: List[Bar] = []
        for row in rows:
            bar = self._parse_bar(row)
            if bar is not None:
                bars.append(bar)

        bars.sort(key=lambda b: b.time)
        if max_count > 0:
            bars = bars[-max_count:]

        logger.debug("timesales %s %s → %d barras", symbol, interval, len(bars))
        return bars

    @staticmethod
    def _parse_bar(row: Dict[str, Any]) -> Optional[Bar]:
        try:
            return Bar(
                time=TradierMarketDataAdapter._parse_time(row),
                open=float(row["open"]),
                high=float(row["high"]),
                low=float(row["low"]),
                close=float(row["close"]),
                volume=float(row.get("volume") or 0),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.warning("Barra descartada %s: %s", row, e)
            return None

    @staticmethod
    def _parse_time(row: Dict[str, Any]) -> datetime:
        raw = row.get("time")
        if raw:
            return datetime.fromisoformat(str(raw))
        if row.get("timestamp") is not None:
            return datetime.fromtimestamp(float(row["timestamp"]), tz=timezone.utc)
        raise KeyError("time")


# ════════════════════════════════════════════════════════════════
#  BROKER
# ════════════════════════════════════════════════════════════════

class TradierBrokerAdapter(IBrokerGateway):
    """Implementación de IBrokerGateway sobre la API REST de Tradier."""

    def __init__(self, client: TradierClient, account_id: str):
        self._client = client
        self._account_id = account_id

    async def get_profile(self) -> Dict[str, Any]:
        payload = await self._client.get("/user/profile")
        return _section(payload, "profile")

    async def get_expirations(self, symbol: str) -> List[date]:
        payload = await self._client.get(
            "/markets/options/expirations",
            params={"symbol": symbol, "includeAllRoots": "true"},
        )
        raw_dates = _as_list(_section(payload, "expirations").get("date"))
        expirations = []
        for raw in raw_dates:
            try:
                expirations.append(date.fromisoformat(str(raw)))
            except ValueError:
                logger.warning("Vencimiento inválido descartado: %r", raw)
        return sorted(expirations)

    async def get_option_chain(self, symbol: str, expiration: date) -> List[OptionContract]:
        payload = await self._client.get(
            "/markets/options/chains",
            params={
                "symbol": symbol,
                "expiration": expiration.isoformat(),
                "greeks": "false",
            },
        )
        rows = _as_list(_section(payload, "options").get("option"))

        contracts = []
        for row in rows:
            try:
                contracts.append(OptionContract(
                    symbol=str(row["symbol"]),
                    underlying=str(row.get("underlying") or symbol),
                    option_type=str(row["option_type"]).lower(),
                    strike=float(row["strike"]),
                    ask=_optional_float(row.get("ask")),
                    bid=_optional_float(row.get("bid")),
                    expiration=(
                        date.fromisoformat(row["expiration_date"])
                        if row.get("expiration_date") else expiration
                    ),
                ))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Contrato descartado %s: %s", row.get("symbol"), e)

        logger.debug("Cadena %s %s → %d contratos", symbol, expiration, len(contracts))
        return contracts

    async def get_quote(self, symbol: str) -> float:
        payload = await self._client.get("/markets/quotes", params={"symbols": symbol})
        quotes = _as_list(_section(payload, "quotes").get("quote"))
        for quote in quotes:
            if not isinstance(quote, dict) or quote.get("symbol") != symbol:
                continue
            if quote.get("last") is None:
                break
            try:
                return float(quote["last"])
            except (TypeError, ValueError) as e:
                raise MarketDataError(
                    f"Cotización inválida para {symbol}: {quote['last']!r}", payload=payload,
                ) from e
        raise MarketDataError(f"Sin cotización para {symbol}", payload=payload)

    async def submit_order(self, order: OrderRequest) -> OrderReceipt:
        payload = await self._client.post(
            f"/accounts/{self._account_id}/orders",
            data=order.to_form(),
        )
        body = _section(payload, "order")
        if body.get("id") is None or body.get("status") not in (None, "ok"):
            raise OrderRejectedError(
                f"Orden rechazada para {order.option_symbol}: {payload}",
                payload=payload,
            )
        return OrderReceipt(order_id=str(body["id"]), status=str(body.get("status", "ok")))

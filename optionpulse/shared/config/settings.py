"""
OptionPulse – Settings (Pydantic BaseSettings)
==============================================
Configuración centralizada cargada desde variables de entorno / .env.
Se usa pydantic-settings para validación estricta al arranque.

Las credenciales de Tradier NO tienen default: si faltan, el bot
arranca en modo solo-lectura de configuración y require_credentials()
falla con un mensaje claro antes de lanzar el loop.
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ─── Tradier REST ───────────────────────────────────────────────────
    tradier_access_token: str = Field(default="", description="Bearer token de Tradier")
    tradier_account_id: str = Field(default="", description="ID de cuenta para órdenes")
    tradier_base_url: str = Field(
        default="https://api.tradier.com/v1",
        description="Endpoint REST (usar sandbox.tradier.com para paper)",
    )
    http_timeout_seconds: float = Field(
        default=10.0, description="Timeout total (seg) por request HTTP"
    )

    # ─── Mercado ────────────────────────────────────────────────────────
    symbol: str = Field(default="SPY", description="Subyacente a operar")
    interval: str = Field(default="1min", description="Intervalo de barras timesales")
    session_filter: str = Field(
        default="open", description="Filtro de sesión de timesales (open | all)"
    )

    # ─── Ciclo ──────────────────────────────────────────────────────────
    poll_interval_seconds: float = Field(
        default=60.0, description="Periodo (seg) entre ciclos de evaluación"
    )
    loop_autostart: bool = Field(
        default=True, description="Lanzar el loop de trading al arrancar la app"
    )
    window_capacity: int = Field(
        default=100, description="Máximo de barras en la ventana (FIFO)"
    )
    min_bars_required: int = Field(
        default=100, description="Barras mínimas para evaluar un ciclo"
    )
    confirmation_threshold: int = Field(
        default=2, description="Señales idénticas consecutivas para ejecutar"
    )

    # ─── Indicadores ────────────────────────────────────────────────────
    rsi_period: int = Field(default=14)
    ema_fast_period: int = Field(default=9)
    ema_mid_period: int = Field(default=21)
    ema_slow_period: int = Field(default=50)
    macd_fast_period: int = Field(default=12)
    macd_slow_period: int = Field(default=26)
    macd_signal_period: int = Field(default=9)
    volume_spike_lookback: int = Field(
        default=10, description="Barras previas para el volumen medio"
    )
    volume_spike_multiplier: float = Field(
        default=1.0, description="Volumen actual > media × multiplicador"
    )

    # ─── Reglas de señal ────────────────────────────────────────────────
    call_rsi_lower: float = Field(default=50.0, description="RSI mínimo (exclusivo) para CALL")
    call_rsi_upper: float = Field(default=70.0, description="RSI máximo (exclusivo) para CALL")
    put_rsi_lower: float = Field(default=30.0, description="RSI mínimo (exclusivo) para PUT")
    put_rsi_upper: float = Field(default=50.0, description="RSI máximo (exclusivo) para PUT")

    # ─── Ejecución ──────────────────────────────────────────────────────
    risk_per_trade: float = Field(
        default=100.0, description="Presupuesto USD arriesgado por trade"
    )
    contract_multiplier: int = Field(
        default=1, description="Multiplicador aplicado al ask al dimensionar"
    )
    dry_run: bool = Field(
        default=False, description="Simular órdenes sin enviarlas al broker"
    )

    # ─── Event Bus / API ────────────────────────────────────────────────
    recent_events_limit: int = Field(
        default=100, description="Eventos recientes retenidos para la API"
    )
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8888)
    debug: bool = Field(default=False)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @model_validator(mode="after")
    def _check_window(self) -> "Settings":
        if self.window_capacity < 1:
            raise ValueError("window_capacity debe ser >= 1")
        if self.min_bars_required > self.window_capacity:
            raise ValueError(
                f"min_bars_required ({self.min_bars_required}) no puede superar "
                f"window_capacity ({self.window_capacity})"
            )
        if self.confirmation_threshold < 1:
            raise ValueError("confirmation_threshold debe ser >= 1")
        return self

    @property
    def has_credentials(self) -> bool:
        return bool(self.tradier_access_token and self.tradier_account_id)

    def require_credentials(self) -> None:
        """Falla si faltan TRADIER_ACCESS_TOKEN o TRADIER_ACCOUNT_ID."""
        missing = [
            name
            for name, value in (
                ("TRADIER_ACCESS_TOKEN", self.tradier_access_token),
                ("TRADIER_ACCOUNT_ID", self.tradier_account_id),
            )
            if not value
        ]
        if missing:
            raise RuntimeError(f"Faltan credenciales en el entorno: {', '.join(missing)}")


# Singleton global – se importa donde se necesite
settings = Settings()

"""
OptionPulse – Domain Value Object: Bar Series
===============================================
Ventana cronológica de barras con capacidad fija (FIFO).

PROTECCIÓN DE MEMORIA:
- collections.deque con maxlen → descarta automáticamente las barras
  más antiguas al exceder la capacidad. O(1) en append.

REFRESCO DESDE EL FEED:
- El feed devuelve en cada ciclo las últimas N barras, solapadas con
  las que ya tenemos. merge() solo agrega las nuevas:
    time >  última → append
    time == última → reemplaza (barra en curso refrescada por el feed)
    time <  última → se ignora (ya está en la ventana)
- No se asumen huecos: la continuidad es responsabilidad del feed.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator, List, Optional

from optionpulse.domain.entities.bar import Bar
from optionpulse.domain.exceptions.domain_errors import ValidationError


class BarSeries:
    """Ventana deslizante de barras ordenadas por tiempo."""

    def __init__(self, capacity: int = 100, bars: Iterable[Bar] = ()) -> None:
        if capacity < 1:
            raise ValidationError("capacity debe ser >= 1", field="capacity", value=capacity)
        self._capacity = capacity
        self._bars: deque[Bar] = deque(maxlen=capacity)
        self.merge(bars)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def latest(self) -> Optional[Bar]:
        return self._bars[-1] if self._bars else None

    def __len__(self) -> int:
        return len(self._bars)

    def __iter__(self) -> Iterator[Bar]:
        return iter(self._bars)

    def __getitem__(self, index: int) -> Bar:
        return self._bars[index]

    def append(self, bar: Bar) -> None:
        """Agrega una barra estrictamente posterior a la última."""
        last = self.latest
        if last is not None and bar.time <= last.time:
            raise ValidationError(
                f"Barra fuera de orden: {bar.time} <= {last.time}",
                field="time",
                value=bar.time,
            )
        self._bars.append(bar)

    def merge(self, bars: Iterable[Bar]) -> int:
        """
        Integra un lote del feed respetando el orden cronológico.

        Returns:
            Número de barras nuevas agregadas (los reemplazos no cuentan)
        """
        added = 0
        for bar in bars:
            last = self.latest
            if last is None or bar.time > last.time:
                self._bars.append(bar)
                added += 1
            elif bar.time == last.time:
                self._bars[-1] = bar
        return added

    def clear(self) -> None:
        self._bars.clear()

    # ─── Columnas para el motor de indicadores ──────────────────────

    @property
    def closes(self) -> List[float]:
        return [b.close for b in self._bars]

    @property
    def highs(self) -> List[float]:
        return [b.high for b in self._bars]

    @property
    def lows(self) -> List[float]:
        return [b.low for b in self._bars]

    @property
    def volumes(self) -> List[float]:
        return [b.volume for b in self._bars]

    def to_list(self) -> List[Bar]:
        return list(self._bars)

"""Domain value objects."""
from optionpulse.domain.value_objects.bar_series import BarSeries
from optionpulse.domain.value_objects.indicator_snapshot import IndicatorSnapshot, MacdValue

__all__ = [
    "BarSeries",
    "IndicatorSnapshot",
    "MacdValue",
]

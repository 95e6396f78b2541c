"""
Rolling player-count history for the live dashboard.
"""

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional, Sequence

DEFAULT_HISTORY_SIZE = 50


@dataclass(frozen=True)
class HistorySample:
    """Player count observed at a point in time."""
    timestamp: str  # HH:MM:SS, local time
    players_online: int


class HistoryBuffer:
    """
    Fixed-capacity, chronologically ordered buffer of samples.

    The newest sample is at the tail; once full, appending evicts the oldest.
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._samples: deque[HistorySample] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._samples.maxlen

    def append(self, sample: HistorySample) -> None:
        self._samples.append(sample)

    def record(self, players_online: int, when: Optional[datetime] = None) -> HistorySample:
        """Append a sample stamped with ``when`` (default: now) and return it."""
        when = when or datetime.now()
        sample = HistorySample(when.strftime("%H:%M:%S"), players_online)
        self.append(sample)
        return sample

    def latest(self, count: int) -> list[HistorySample]:
        """Get up to ``count`` newest samples, oldest first."""
        if count <= 0:
            return []
        return list(self._samples)[-count:]

    def values(self) -> list[int]:
        return [sample.players_online for sample in self._samples]

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[HistorySample]:
        return iter(self._samples)


SPARK_BLOCKS = " ▁▂▃▄▅▆▇█"


def sparkline(values: Sequence[int], ceiling: Optional[int] = None) -> str:
    """
    Render values as a string of block characters.

    Args:
        values: Values to plot, oldest first.
        ceiling: Value drawn as a full block. Defaults to the largest value.

    Returns:
        One character per value ("" for no values).
    """
    if not values:
        return ""

    top = ceiling if ceiling and ceiling > 0 else max(values)
    if top <= 0:
        return SPARK_BLOCKS[1] * len(values)

    steps = len(SPARK_BLOCKS) - 1
    result = []
    for value in values:
        ratio = min(max(value, 0) / top, 1.0)
        # Keep a visible baseline so an empty server still draws a line
        index = max(1, round(ratio * steps))
        result.append(SPARK_BLOCKS[index])

    return "".join(result)

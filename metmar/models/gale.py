"""Gale warning time-series models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class GaleWarning:
    number: int  # 0 when the snapshot announces no warning
    timestamp: datetime


@dataclass(frozen=True)
class GalePoint:
    x: float  # days since the plot epoch
    y: int
    date: str
    yearday: int

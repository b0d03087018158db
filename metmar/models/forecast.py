"""Canonical normalized forecast record."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Forecast:
    id: str  # routing key, unique within one fetch batch
    title: str
    content: str

"""
Shared cost model: scaled Euclidean distance and urgency weights.
"""

from __future__ import annotations

from math import hypot
from typing import Iterable, List

from .config import DISTANCE_SCALE, URGENCY_WEIGHTS
from .models import Location, Patient


def calculate_distance(a: Location, b: Location) -> float:
    return hypot(a.x - b.x, a.y - b.y) * DISTANCE_SCALE


def urgency_weight(urgency: str) -> int:
    return URGENCY_WEIGHTS[urgency]


def sort_by_urgency(patients: Iterable[Patient]) -> List[Patient]:
    # sorted() is stable, so equal urgencies keep collection order.
    return sorted(patients, key=lambda p: urgency_weight(p.urgency), reverse=True)

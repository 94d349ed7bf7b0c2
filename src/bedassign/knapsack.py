"""
Knapsack allocation: per specialization, fill each hospital with the
urgency-maximizing subset of still-unassigned patients.

Every patient weighs one bed, so the table is indexed by beds used. On equal
urgency value the selection with the smaller total travel distance wins.
Only the hospital-level match is made here; beds and doctors are left empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .distance import calculate_distance, urgency_weight
from .models import Assignment, Doctor, Hospital, Patient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cell:
    value: int = 0
    distance: float = 0.0
    picks: Tuple[int, ...] = ()  # indexes into the candidate list


def group_by_specialization(patients: Sequence[Patient]) -> Dict[str, List[Patient]]:
    groups: Dict[str, List[Patient]] = {}
    for patient in patients:
        groups.setdefault(patient.required_specialization, []).append(patient)
    return groups


def best_selection(values: Sequence[int], distances: Sequence[float], capacity: int) -> _Cell:
    """0/1 knapsack with unit weights; returns the top cell of the table."""
    dp = [_Cell() for _ in range(capacity + 1)]
    for i, (value, distance) in enumerate(zip(values, distances)):
        for w in range(capacity, 0, -1):
            prev = dp[w - 1]
            new_value = prev.value + value
            new_distance = prev.distance + distance
            cur = dp[w]
            if new_value > cur.value or (new_value == cur.value and new_distance < cur.distance):
                dp[w] = _Cell(new_value, new_distance, prev.picks + (i,))
    return dp[capacity]


def knapsack_dp(
    patients: Sequence[Patient], hospitals: Sequence[Hospital], doctors: Sequence[Doctor]
) -> List[Assignment]:
    assignments: List[Assignment] = []

    for specialization, group in group_by_specialization(patients).items():
        group_hospitals = [h for h in hospitals if h.specialization == specialization]
        if not group_hospitals:
            logger.debug("No %s hospital; %d patients stay unassigned", specialization, len(group))
            continue

        def nearest(p: Patient) -> float:
            return min(calculate_distance(p.location, h.location) for h in group_hospitals)

        group = sorted(group, key=lambda p: (-urgency_weight(p.urgency), nearest(p)))

        for hospital in group_hospitals:
            candidates = [p for p in group if not p.is_assigned]
            if not candidates:
                break
            distances = [calculate_distance(p.location, hospital.location) for p in candidates]
            values = [urgency_weight(p.urgency) for p in candidates]
            room = hospital.capacity - hospital.current_patients
            cell = best_selection(values, distances, room)
            for i in cell.picks:
                patient = candidates[i]
                hospital.admit()
                patient.assign(hospital.hospital_id, distances[i])
                assignments.append(Assignment(patient.patient_id, hospital.hospital_id, distances[i]))
            logger.debug(
                "Hospital %s takes %d %s patients (value=%d)",
                hospital.hospital_id,
                len(cell.picks),
                specialization,
                cell.value,
            )

    return assignments

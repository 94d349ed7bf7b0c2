"""
Per-run statistics and comparison tables.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from .models import AllocationResult, Assignment, Hospital, Patient


def average_distance(patients: Sequence[Patient]) -> float:
    distances = [p.travel_distance for p in patients if p.is_assigned]
    if not distances:
        return 0.0
    return float(np.mean(distances))


def mean_utilization(hospitals: Sequence[Hospital]) -> float:
    # Empty hospitals count as 0% so the mean covers the whole network.
    if not hospitals:
        return 0.0
    return float(np.mean([h.current_patients / h.capacity * 100 for h in hospitals]))


def efficiency_score(assigned: int, total: int, avg_distance: float, utilization: float) -> int:
    assignment_rate = assigned / total if total else 0.0
    distance_score = max(0.0, 1 - avg_distance / 50)
    utilization_score = utilization / 100
    # weights on the 0-100 scale; halves round up
    score = assignment_rate * 40 + distance_score * 30 + utilization_score * 30
    return int(math.floor(score + 0.5))


def summarize_run(
    algorithm: str,
    patients: Sequence[Patient],
    hospitals: Sequence[Hospital],
    assignments: List[Assignment],
    execution_time_ms: float,
    best_cost: Optional[float] = None,
    nodes_visited: int = 0,
    budget_exhausted: bool = False,
) -> AllocationResult:
    assigned = sum(1 for p in patients if p.is_assigned)
    avg = average_distance(patients)
    util = mean_utilization(hospitals)
    return AllocationResult(
        algorithm=algorithm,
        execution_time_ms=execution_time_ms,
        patients_assigned=assigned,
        total_patients=len(patients),
        avg_distance_km=avg,
        utilization_percent=util,
        efficiency_score=efficiency_score(assigned, len(patients), avg, util),
        assignments=assignments,
        best_cost=best_cost,
        nodes_visited=nodes_visited,
        budget_exhausted=budget_exhausted,
    )


def results_to_dataframe(results: Sequence[AllocationResult]) -> pd.DataFrame:
    records = []
    for r in results:
        records.append(
            {
                "algorithm": r.algorithm,
                "execution_time_ms": r.execution_time_ms,
                "patients_assigned": r.patients_assigned,
                "total_patients": r.total_patients,
                "assigned_pct": round(r.assignment_rate * 100),
                "avg_distance_km": r.avg_distance_km,
                "utilization_percent": r.utilization_percent,
                "efficiency_score": r.efficiency_score,
            }
        )
    return pd.DataFrame.from_records(
        records,
        columns=[
            "algorithm",
            "execution_time_ms",
            "patients_assigned",
            "total_patients",
            "assigned_pct",
            "avg_distance_km",
            "utilization_percent",
            "efficiency_score",
        ],
    )


def _bed_status(utilization: float) -> str:
    if utilization >= 100:
        return "full"
    if utilization >= 70:
        return "filling"
    return "available"


def bed_availability(hospitals: Sequence[Hospital]) -> pd.DataFrame:
    records = []
    for h in hospitals:
        util = h.current_patients / h.capacity * 100
        records.append(
            {
                "hospital_id": h.hospital_id,
                "name": h.name,
                "specialization": h.specialization,
                "capacity": h.capacity,
                "current_patients": h.current_patients,
                "available_beds": h.capacity - h.current_patients,
                "free_bed_pool": len(h.available_beds),
                "utilization_percent": util,
                "status": _bed_status(util),
            }
        )
    return pd.DataFrame.from_records(records)

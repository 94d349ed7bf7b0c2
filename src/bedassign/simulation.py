"""
Session wiring: reset -> allocate -> aggregate, once per algorithm.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

from .branch_bound import BranchAndBound, Edge, placement_cost
from .config import ALGORITHM_LABELS, ALGORITHMS, AllocationConfig
from .data_generation import generate_sample_data
from .greedy import greedy_matching
from .knapsack import knapsack_dp
from .metrics import summarize_run
from .models import AllocationResult, Assignment, CapacityInvariantError, Doctor, Hospital, Patient
from .staffing import StaffingManager

logger = logging.getLogger(__name__)

Allocator = Callable[[Sequence[Patient], Sequence[Hospital], Sequence[Doctor]], List[Assignment]]


class AllocationSession:
    """
    Owns the patient, hospital and doctor collections for one session.

    Allocators mutate the collections in place, so every run starts with a
    full reset and results of different algorithms never build on each other.
    """

    def __init__(
        self,
        patients: List[Patient],
        hospitals: List[Hospital],
        doctors: List[Doctor],
        cfg: Optional[AllocationConfig] = None,
    ):
        self.cfg = cfg or AllocationConfig()
        self.patients = patients
        self.hospitals = hospitals
        self.doctors = doctors
        self.results: List[AllocationResult] = []

    @classmethod
    def generate(cls, cfg: AllocationConfig) -> "AllocationSession":
        hospitals, doctors, patients = generate_sample_data(cfg)
        return cls(patients, hospitals, doctors, cfg)

    def reset(self) -> None:
        for p in self.patients:
            p.reset()
        for h in self.hospitals:
            h.reset()
        for d in self.doctors:
            d.reset()

    def selected_algorithms(self, algorithm: str) -> List[str]:
        if algorithm == "all":
            return list(ALGORITHMS)
        if algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm {algorithm!r}; expected 'all' or one of {ALGORITHMS}")
        return [algorithm]

    def run(self, algorithm: str = "all") -> List[AllocationResult]:
        names = self.selected_algorithms(algorithm)
        self.results = []
        for i, name in enumerate(names):
            if i and self.cfg.run_delay > 0:
                time.sleep(self.cfg.run_delay)
            self.results.append(self.run_algorithm(name))
        return self.results

    def run_algorithm(self, name: str) -> AllocationResult:
        if name not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm {name!r}; expected one of {ALGORITHMS}")
        self.reset()
        label = ALGORITHM_LABELS[name]
        logger.info(
            "Running %s on %d patients / %d hospitals", label, len(self.patients), len(self.hospitals)
        )

        search: Optional[BranchAndBound] = None
        allocators: Dict[str, Allocator] = {"greedy": greedy_matching, "knapsack": knapsack_dp}
        if name == "branch-bound":
            search = BranchAndBound(self.cfg.bnb_node_budget)
            allocators[name] = search.run

        start = time.perf_counter()
        assignments = allocators[name](self.patients, self.hospitals, self.doctors)
        elapsed_ms = (time.perf_counter() - start) * 1000

        self.check_invariants()
        if search is not None:
            result = summarize_run(
                label,
                self.patients,
                self.hospitals,
                assignments,
                elapsed_ms,
                best_cost=search.best_cost,
                nodes_visited=search.nodes_visited,
                budget_exhausted=search.budget_exhausted,
            )
        else:
            result = summarize_run(label, self.patients, self.hospitals, assignments, elapsed_ms)
        logger.info(
            "%s assigned %d/%d patients in %.2f ms (efficiency %d)",
            label,
            result.patients_assigned,
            result.total_patients,
            elapsed_ms,
            result.efficiency_score,
        )
        return result

    def check_invariants(self) -> None:
        by_id = {h.hospital_id: h for h in self.hospitals}
        for h in self.hospitals:
            if not 0 <= h.current_patients <= h.capacity:
                raise CapacityInvariantError(
                    f"Hospital {h.hospital_id} holds {h.current_patients}/{h.capacity}"
                )
        for d in self.doctors:
            if d.current_patients > d.max_patients:
                raise CapacityInvariantError(
                    f"Doctor {d.doctor_id} holds {d.current_patients}/{d.max_patients}"
                )
        for p in self.patients:
            if p.assigned_hospital is None:
                continue
            hospital = by_id.get(p.assigned_hospital)
            if hospital is None or hospital.specialization != p.required_specialization:
                raise CapacityInvariantError(
                    f"Patient {p.patient_id} placed in incompatible hospital {p.assigned_hospital}"
                )

    def assignment_cost(self) -> float:
        """Branch-and-bound cost of the placement currently held by the collections."""
        by_id = {h.hospital_id: i for i, h in enumerate(self.hospitals)}
        edges = [
            Edge(p, by_id[p.assigned_hospital], p.travel_distance)
            for p in self.patients
            if p.assigned_hospital is not None
        ]
        return placement_cost(edges)

    def allocate_doctor_to_patient(self, patient_id: int) -> bool:
        patient = next((p for p in self.patients if p.patient_id == patient_id), None)
        if patient is None:
            return False
        staffing = StaffingManager(self.doctors)
        # reallocation frees the previous doctor first
        staffing.release(patient)
        doctor = staffing.best_for(patient)
        if doctor is None:
            return False
        staffing.assign(patient, doctor)
        return True

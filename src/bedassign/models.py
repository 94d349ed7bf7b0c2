"""
Typed containers shared by the allocators and the orchestrator.

Assignment fields on `Patient` are nullable: ``None`` is the unassigned state.
Hospital-level capacity, the free-bed pool and doctor loads are tracked
independently and are allowed to disagree.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import GRID_SIZE, URGENCIES


class CapacityInvariantError(AssertionError):
    """Raised when a hospital or doctor would exceed its capacity."""


@dataclass(frozen=True)
class Location:
    x: float
    y: float

    def __post_init__(self) -> None:
        if not (0 <= self.x <= GRID_SIZE and 0 <= self.y <= GRID_SIZE):
            raise ValueError(f"Location ({self.x}, {self.y}) outside [0, {GRID_SIZE}]^2")


@dataclass
class Hospital:
    hospital_id: int
    name: str
    capacity: int
    specialization: str
    location: Location
    doctor_ids: List[int] = field(default_factory=list)
    equipment: List[str] = field(default_factory=list)
    current_patients: int = 0
    utilization: float = 0.0  # percent
    available_beds: List[int] = field(default_factory=list)  # min-heap of free bed numbers
    occupied_beds: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError(f"Hospital {self.hospital_id} capacity must be >= 1, got {self.capacity}")
        if not self.available_beds and not self.occupied_beds:
            self.available_beds = list(range(1, self.capacity + 1))
        heapq.heapify(self.available_beds)

    def has_room(self) -> bool:
        return self.current_patients < self.capacity

    def admit(self) -> None:
        if not self.has_room():
            raise CapacityInvariantError(
                f"Hospital {self.hospital_id} already holds {self.current_patients}/{self.capacity}"
            )
        self.current_patients += 1
        self.utilization = self.current_patients / self.capacity * 100

    def take_bed(self) -> Optional[int]:
        """Pop the lowest-numbered free bed, or None if the pool is empty."""
        if not self.available_beds:
            return None
        bed = heapq.heappop(self.available_beds)
        self.occupied_beds.append(bed)
        return bed

    def reset(self) -> None:
        self.current_patients = 0
        self.utilization = 0.0
        self.available_beds = list(range(1, self.capacity + 1))
        self.occupied_beds = []


@dataclass
class Patient:
    patient_id: int
    name: str
    ailment: str
    required_specialization: str
    urgency: str  # critical / urgent / stable
    location: Location
    assigned_hospital: Optional[int] = None
    assigned_doctor: Optional[int] = None
    bed_number: Optional[int] = None
    travel_distance: float = 0.0

    def __post_init__(self) -> None:
        if self.urgency not in URGENCIES:
            raise ValueError(f"Unknown urgency {self.urgency!r} for patient {self.patient_id}")

    @property
    def is_assigned(self) -> bool:
        return self.assigned_hospital is not None

    def assign(self, hospital_id: int, distance: float) -> None:
        self.assigned_hospital = hospital_id
        self.travel_distance = distance

    def reset(self) -> None:
        self.assigned_hospital = None
        self.assigned_doctor = None
        self.bed_number = None
        self.travel_distance = 0.0


@dataclass
class Doctor:
    doctor_id: int
    name: str
    specialization: str
    hospital_id: int
    experience: int
    max_patients: int
    current_patients: int = 0

    def __post_init__(self) -> None:
        if self.max_patients < 1:
            raise ValueError(f"Doctor {self.doctor_id} max_patients must be >= 1")
        if self.experience < 0:
            raise ValueError(f"Doctor {self.doctor_id} experience must be >= 0")

    def has_capacity(self) -> bool:
        return self.current_patients < self.max_patients

    def load_ratio(self) -> float:
        return self.current_patients / self.max_patients

    def take_patient(self) -> None:
        if not self.has_capacity():
            raise CapacityInvariantError(
                f"Doctor {self.doctor_id} already holds {self.current_patients}/{self.max_patients}"
            )
        self.current_patients += 1

    def release_patient(self) -> None:
        if self.current_patients == 0:
            raise CapacityInvariantError(f"Doctor {self.doctor_id} has no patient to release")
        self.current_patients -= 1

    def reset(self) -> None:
        self.current_patients = 0


@dataclass
class Assignment:
    patient_id: int
    hospital_id: int
    distance: float
    bed_number: Optional[int] = None
    doctor_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "patientId": self.patient_id,
            "hospitalId": self.hospital_id,
            "distance": self.distance,
        }
        if self.bed_number is not None:
            record["bedNumber"] = self.bed_number
        if self.doctor_id is not None:
            record["doctorId"] = self.doctor_id
        return record


@dataclass
class AllocationResult:
    algorithm: str
    execution_time_ms: float
    patients_assigned: int
    total_patients: int
    avg_distance_km: float
    utilization_percent: float
    efficiency_score: int
    assignments: List[Assignment] = field(default_factory=list)
    best_cost: Optional[float] = None  # branch-and-bound only
    nodes_visited: int = 0
    budget_exhausted: bool = False

    @property
    def assignment_rate(self) -> float:
        if self.total_patients == 0:
            return 0.0
        return self.patients_assigned / self.total_patients

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "executionTimeMs": self.execution_time_ms,
            "patientsAssigned": self.patients_assigned,
            "totalPatients": self.total_patients,
            "avgDistanceKm": self.avg_distance_km,
            "utilizationPercent": self.utilization_percent,
            "efficiencyScore": self.efficiency_score,
            "assignments": [a.to_dict() for a in self.assignments],
        }

"""
Centralized allocation defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


SPECIALIZATIONS: List[str] = ["cardiology", "neurology", "orthopedics", "emergency", "pediatrics"]
URGENCIES: List[str] = ["critical", "urgent", "stable"]
URGENCY_WEIGHTS: Dict[str, int] = {"critical": 3, "urgent": 2, "stable": 1}

ALGORITHMS: List[str] = ["greedy", "knapsack", "branch-bound"]
ALGORITHM_LABELS: Dict[str, str] = {
    "greedy": "Greedy Matching",
    "knapsack": "Knapsack DP",
    "branch-bound": "Branch & Bound",
}

AILMENTS: Dict[str, List[str]] = {
    "cardiology": ["Heart Attack", "Arrhythmia", "Chest Pain", "Heart Failure", "Angina", "Cardiomyopathy"],
    "neurology": ["Stroke", "Seizure", "Headache", "Memory Loss", "Epilepsy", "Migraine"],
    "orthopedics": ["Broken Bone", "Joint Pain", "Spinal Injury", "Fracture", "Arthritis", "Torn Ligament"],
    "emergency": ["Trauma", "Accident", "Poisoning", "Severe Bleeding", "Burn Injury", "Cardiac Arrest"],
    "pediatrics": ["Fever", "Cough", "Growth Issues", "Childhood Illness", "Asthma", "Allergic Reaction"],
}

EQUIPMENT: Dict[str, List[str]] = {
    "cardiology": ["ECG Machine", "Defibrillator", "Cardiac Monitor"],
    "neurology": ["MRI Scanner", "EEG Machine", "Neurological Tools"],
    "orthopedics": ["X-Ray Machine", "Surgical Tools", "Rehabilitation Equipment"],
    "emergency": ["Trauma Kit", "Ventilator", "Emergency Drugs"],
    "pediatrics": ["Pediatric Monitor", "Child-Sized Equipment", "Play Area"],
}
DEFAULT_EQUIPMENT: List[str] = ["Basic Medical Equipment"]

HOSPITAL_NAMES: List[str] = [
    "Apollo Hospitals", "Fortis Healthcare", "Max Healthcare", "Manipal Hospitals",
    "Narayana Health", "AIIMS Delhi", "Tata Memorial Hospital", "KIMS Hospital",
    "City General Hospital", "Metropolitan Medical Center", "Regional Health Center",
    "University Hospital", "Community Medical Center", "Central Hospital",
    "St. Mary's Hospital", "Memorial Medical Center", "Valley General Hospital",
    "Riverside Medical Center", "Sunset Hospital", "Oakwood Medical Center",
]
DOCTOR_NAMES: List[str] = [
    "Dr. Nikhitha", "Dr. Deekshitha", "Dr. Srinivas", "Dr. Dhana", "Dr. Prince",
    "Dr. Vijay", "Dr. Prasad", "Dr. Chandra", "Dr. Lokesh", "Dr. Nikhitha Reddy",
    "Dr. Srinivas Kumar", "Dr. Dhana Raj", "Dr. Prince Singh", "Dr. Prasad Rao",
    "Dr. Chandra Sekhar", "Dr. Lokesh Reddy", "Dr. Deekshitha Gupta", "Dr. Vijay Singh",
]
PATIENT_NAMES: List[str] = [
    "Ajay", "Teja", "Dileep", "Hari Krishna", "Rithwik", "Madhu", "Prudhvi",
    "Ajay Kumar", "Teja Reddy", "Dileep Sharma", "Hari Krishna Singh", "Rithwik Patel",
    "Madhu Gupta", "Prudhvi Verma", "Ajay Singh", "Teja Kumar", "Dileep Reddy",
    "Rithwik Kumar", "Madhu Patel", "Prudhvi Singh", "Ajay Patel", "Teja Sharma",
]

GRID_SIZE: float = 100.0  # locations live in [0, GRID_SIZE] x [0, GRID_SIZE]
DISTANCE_SCALE: float = 10.0  # grid units -> km


@dataclass
class AllocationConfig:
    hospital_count: int = 8
    patient_count: int = 40
    doctors_per_hospital: int = 3
    hospital_capacity: int = 6
    capacity_jitter: int = 5  # capacity drawn from hospital_capacity + [-jitter, jitter)
    urgency_mix: Dict[str, int] = field(
        default_factory=lambda: {"critical": 20, "urgent": 30, "stable": 50}
    )
    doctor_max_patients: Tuple[int, int] = (3, 7)
    doctor_experience: Tuple[int, int] = (1, 20)
    seed: int = 42
    bnb_node_budget: Optional[int] = 500_000  # None disables the cutoff
    run_delay: float = 0.0  # seconds slept between algorithm runs


def normalize_urgency_mix(mix: Dict[str, int]) -> Dict[str, int]:
    """Rescale urgency percentages so they add up to (roughly) 100."""
    values = {u: int(mix.get(u, 0)) for u in URGENCIES}
    if any(v < 0 for v in values.values()):
        raise ValueError(f"Urgency percentages must be non-negative: {values}")
    total = sum(values.values())
    if total == 0:
        raise ValueError("Urgency mix cannot be all zero")
    if total == 100:
        return values
    factor = 100 / total
    return {u: int(round(v * factor)) for u, v in values.items()}

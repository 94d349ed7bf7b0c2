"""
Synthetic hospital network: hospitals, their doctors, and a patient population.

Generation is seeded so a given config always yields the same collections,
in the same order.
"""

from __future__ import annotations

from random import Random
from string import ascii_uppercase
from typing import Dict, List, Tuple

import numpy as np

from .config import (
    AILMENTS,
    DEFAULT_EQUIPMENT,
    DOCTOR_NAMES,
    EQUIPMENT,
    GRID_SIZE,
    HOSPITAL_NAMES,
    PATIENT_NAMES,
    SPECIALIZATIONS,
    AllocationConfig,
    normalize_urgency_mix,
)
from .models import Doctor, Hospital, Location, Patient


def _random_location(rng: Random) -> Location:
    return Location(rng.uniform(0, GRID_SIZE), rng.uniform(0, GRID_SIZE))


def _hospital_name(index: int) -> str:
    if index < len(HOSPITAL_NAMES):
        return HOSPITAL_NAMES[index]
    return f"Hospital {ascii_uppercase[index % 26]}{'' if index < 26 else index // 26}"


def _draw_urgency(rng: Random, mix: Dict[str, int]) -> str:
    roll = rng.random() * 100
    if roll < mix["critical"]:
        return "critical"
    if roll < mix["critical"] + mix["urgent"]:
        return "urgent"
    return "stable"


def generate_hospitals(cfg: AllocationConfig) -> List[Hospital]:
    rng = Random(cfg.seed)
    hospitals: List[Hospital] = []
    for i in range(cfg.hospital_count):
        # round-robin so every specialization is covered once count >= 5
        specialization = SPECIALIZATIONS[i % len(SPECIALIZATIONS)]
        jitter = rng.randint(-cfg.capacity_jitter, cfg.capacity_jitter - 1) if cfg.capacity_jitter else 0
        hospitals.append(
            Hospital(
                hospital_id=i,
                name=_hospital_name(i),
                capacity=int(np.clip(cfg.hospital_capacity + jitter, 1, None)),
                specialization=specialization,
                location=_random_location(rng),
                equipment=list(EQUIPMENT.get(specialization, DEFAULT_EQUIPMENT)),
            )
        )
    return hospitals


def generate_doctors(cfg: AllocationConfig, hospitals: List[Hospital]) -> List[Doctor]:
    rng = Random(cfg.seed + 999)
    doctors: List[Doctor] = []
    lo_load, hi_load = cfg.doctor_max_patients
    lo_exp, hi_exp = cfg.doctor_experience
    for hospital in hospitals:
        for _ in range(cfg.doctors_per_hospital):
            doctor = Doctor(
                doctor_id=len(doctors),
                name=rng.choice(DOCTOR_NAMES),
                specialization=hospital.specialization,
                hospital_id=hospital.hospital_id,
                experience=rng.randint(lo_exp, hi_exp),
                max_patients=rng.randint(lo_load, hi_load),
            )
            doctors.append(doctor)
            hospital.doctor_ids.append(doctor.doctor_id)
    return doctors


def generate_patients(cfg: AllocationConfig) -> List[Patient]:
    rng = Random(cfg.seed + 123)
    mix = normalize_urgency_mix(cfg.urgency_mix)
    patients: List[Patient] = []
    for i in range(cfg.patient_count):
        specialization = rng.choice(SPECIALIZATIONS)
        patients.append(
            Patient(
                patient_id=i,
                name=rng.choice(PATIENT_NAMES),
                ailment=rng.choice(AILMENTS[specialization]),
                required_specialization=specialization,
                urgency=_draw_urgency(rng, mix),
                location=_random_location(rng),
            )
        )
    return patients


def generate_sample_data(cfg: AllocationConfig) -> Tuple[List[Hospital], List[Doctor], List[Patient]]:
    hospitals = generate_hospitals(cfg)
    doctors = generate_doctors(cfg, hospitals)
    patients = generate_patients(cfg)
    return hospitals, doctors, patients

"""
Greedy matching: most urgent patients first, each to the nearest compatible hospital with room.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from .distance import calculate_distance, sort_by_urgency
from .models import Assignment, Doctor, Hospital, Patient
from .staffing import StaffingManager

logger = logging.getLogger(__name__)


def greedy_matching(
    patients: Sequence[Patient], hospitals: Sequence[Hospital], doctors: Sequence[Doctor]
) -> List[Assignment]:
    staffing = StaffingManager(doctors)
    available = [h for h in hospitals if h.has_room()]
    assignments: List[Assignment] = []

    for patient in sort_by_urgency(patients):
        best_index = -1
        best_distance = float("inf")
        for i, hospital in enumerate(available):
            if hospital.specialization != patient.required_specialization:
                continue
            distance = calculate_distance(patient.location, hospital.location)
            if distance < best_distance:  # strict: first scanned wins ties
                best_distance = distance
                best_index = i

        if best_index < 0:
            logger.debug("No compatible hospital with room for patient %s", patient.patient_id)
            continue

        hospital = available[best_index]
        hospital.admit()
        patient.assign(hospital.hospital_id, best_distance)
        patient.bed_number = hospital.take_bed()

        doctor = staffing.first_available(hospital)
        if doctor is not None:
            staffing.assign(patient, doctor)

        assignments.append(
            Assignment(
                patient_id=patient.patient_id,
                hospital_id=hospital.hospital_id,
                distance=best_distance,
                bed_number=patient.bed_number,
                doctor_id=patient.assigned_doctor,
            )
        )
        if not hospital.has_room():
            available.pop(best_index)

    return assignments

"""
Doctor sub-allocation: who treats a patient once a hospital has been chosen.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

from .models import Doctor, Hospital, Patient

logger = logging.getLogger(__name__)


class StaffingManager:
    def __init__(self, doctors: Sequence[Doctor]):
        self.doctors = doctors
        self._by_id: Dict[int, Doctor] = {d.doctor_id: d for d in doctors}

    def first_available(self, hospital: Hospital) -> Optional[Doctor]:
        """First doctor on the hospital roster, in roster order, with spare capacity."""
        for doctor_id in hospital.doctor_ids:
            doctor = self._by_id.get(doctor_id)
            if doctor is not None and doctor.has_capacity():
                return doctor
        return None

    def best_for(self, patient: Patient) -> Optional[Doctor]:
        """
        Rank every free doctor sharing the patient's specialization by
        experience minus a load penalty; ties keep roster order.
        """
        candidates = [
            d
            for d in self.doctors
            if d.specialization == patient.required_specialization and d.has_capacity()
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda d: d.experience - d.load_ratio() * 10)

    def assign(self, patient: Patient, doctor: Doctor) -> None:
        doctor.take_patient()
        patient.assigned_doctor = doctor.doctor_id
        logger.debug("Doctor %s takes patient %s", doctor.doctor_id, patient.patient_id)

    def release(self, patient: Patient) -> None:
        """Drop the patient's current doctor, if any, freeing one slot."""
        if patient.assigned_doctor is None:
            return
        doctor = self._by_id.get(patient.assigned_doctor)
        if doctor is not None:
            doctor.release_patient()
        patient.assigned_doctor = None

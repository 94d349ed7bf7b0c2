import pytest

from bedassign.models import Doctor, Hospital, Location, Patient


@pytest.fixture
def make_hospital():
    def _make(hospital_id, capacity=2, specialization="cardiology", x=0.0, y=0.0, **kwargs):
        return Hospital(
            hospital_id=hospital_id,
            name=f"H{hospital_id}",
            capacity=capacity,
            specialization=specialization,
            location=Location(x, y),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_patient():
    def _make(patient_id, urgency="stable", specialization="cardiology", x=0.0, y=0.0):
        return Patient(
            patient_id=patient_id,
            name=f"P{patient_id}",
            ailment="Chest Pain",
            required_specialization=specialization,
            urgency=urgency,
            location=Location(x, y),
        )

    return _make


@pytest.fixture
def make_doctor():
    def _make(doctor_id, hospital, max_patients=3, experience=5, current_patients=0):
        doctor = Doctor(
            doctor_id=doctor_id,
            name=f"Dr. {doctor_id}",
            specialization=hospital.specialization,
            hospital_id=hospital.hospital_id,
            experience=experience,
            max_patients=max_patients,
            current_patients=current_patients,
        )
        hospital.doctor_ids.append(doctor_id)
        return doctor

    return _make


@pytest.fixture
def cardiology_scenario(make_hospital, make_patient):
    """One cardiology hospital with two beds and three cardiology patients."""
    hospitals = [make_hospital(0, capacity=2, x=0, y=0)]
    patients = [
        make_patient(0, "critical", x=1, y=0),
        make_patient(1, "stable", x=2, y=0),
        make_patient(2, "urgent", x=0, y=1),
    ]
    return patients, hospitals


@pytest.fixture
def crossing_scenario(make_hospital, make_patient):
    """Two single-bed hospitals where nearest-first placement is not the cheapest."""
    hospitals = [make_hospital(0, capacity=1, x=0, y=0), make_hospital(1, capacity=1, x=10, y=0)]
    patients = [make_patient(0, "critical", x=4, y=0), make_patient(1, "critical", x=0, y=0)]
    return patients, hospitals

import pytest

from bedassign.greedy import greedy_matching


class TestGreedyMatching:
    def test_urgent_patients_take_the_last_beds(self, cardiology_scenario):
        patients, hospitals = cardiology_scenario
        assignments = greedy_matching(patients, hospitals, [])

        assert [a.patient_id for a in assignments] == [0, 2]
        assert [a.distance for a in assignments] == [pytest.approx(10.0), pytest.approx(10.0)]
        assert patients[1].assigned_hospital is None
        assert hospitals[0].current_patients == 2
        assert hospitals[0].utilization == pytest.approx(100.0)

    def test_beds_handed_out_lowest_first(self, cardiology_scenario):
        patients, hospitals = cardiology_scenario
        greedy_matching(patients, hospitals, [])
        assert patients[0].bed_number == 1
        assert patients[2].bed_number == 2
        assert patients[1].bed_number is None

    def test_equidistant_hospitals_first_listed_wins(self, make_hospital, make_patient):
        left, right = make_hospital(0, x=0, y=0), make_hospital(1, x=2, y=0)
        patient = make_patient(0, x=1, y=0)

        greedy_matching([patient], [right, left], [])
        assert patient.assigned_hospital == 1

    def test_deterministic_for_same_input(self, make_hospital, make_patient):
        def build():
            hospitals = [make_hospital(i, capacity=1, x=10 * i, y=5) for i in range(3)]
            patients = [make_patient(i, ("critical", "urgent", "stable")[i % 3], x=7 * i, y=3) for i in range(5)]
            return patients, hospitals

        first = greedy_matching(*build(), [])
        second = greedy_matching(*build(), [])
        assert first == second

    def test_nearest_compatible_hospital_chosen(self, make_hospital, make_patient):
        hospitals = [
            make_hospital(0, specialization="neurology", x=1, y=0),
            make_hospital(1, x=50, y=0),
            make_hospital(2, x=20, y=0),
        ]
        patient = make_patient(0, x=0, y=0)
        greedy_matching([patient], hospitals, [])
        assert patient.assigned_hospital == 2
        assert patient.travel_distance == pytest.approx(200.0)

    def test_first_doctor_with_room_is_assigned(self, make_hospital, make_patient, make_doctor):
        hospital = make_hospital(0, capacity=3)
        busy = make_doctor(5, hospital, max_patients=1, current_patients=1)
        free = make_doctor(3, hospital, max_patients=2)
        patient = make_patient(0)

        assignments = greedy_matching([patient], [hospital], [busy, free])
        assert patient.assigned_doctor == 3
        assert free.current_patients == 1
        assert busy.current_patients == 1
        assert assignments[0].doctor_id == 3

    def test_patient_admitted_without_doctor_when_roster_full(self, make_hospital, make_patient, make_doctor):
        hospital = make_hospital(0, capacity=3)
        doctor = make_doctor(0, hospital, max_patients=1)
        patients = [make_patient(i, x=i, y=0) for i in range(3)]

        greedy_matching(patients, [hospital], [doctor])
        assert all(p.is_assigned for p in patients)
        assert [p.assigned_doctor for p in patients] == [0, None, None]
        assert hospital.current_patients == 3
        assert doctor.current_patients == 1

    def test_patient_admitted_without_bed_when_pool_drifted(self, make_hospital, make_patient):
        hospital = make_hospital(0, capacity=2)
        hospital.available_beds = []
        patient = make_patient(0)

        assignments = greedy_matching([patient], [hospital], [])
        assert patient.assigned_hospital == 0
        assert patient.bed_number is None
        assert assignments[0].bed_number is None
        assert hospital.current_patients == 1

    def test_unknown_specialization_left_unassigned(self, make_hospital, make_patient):
        patient = make_patient(0, specialization="neurology")
        assert greedy_matching([patient], [make_hospital(0)], []) == []
        assert not patient.is_assigned

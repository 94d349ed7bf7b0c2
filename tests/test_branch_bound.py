import pytest

from bedassign.branch_bound import BranchAndBound, Edge, branch_and_bound, build_edges, placement_cost
from bedassign.greedy import greedy_matching


def _greedy_cost(patients, hospitals):
    index = {h.hospital_id: i for i, h in enumerate(hospitals)}
    greedy_matching(patients, hospitals, [])
    edges = [Edge(p, index[p.assigned_hospital], p.travel_distance) for p in patients if p.is_assigned]
    cost = placement_cost(edges)
    for p in patients:
        p.reset()
    for h in hospitals:
        h.reset()
    return cost


class TestBranchAndBound:
    def test_edges_only_for_matching_specialization(self, make_hospital, make_patient):
        hospitals = [make_hospital(0, x=30, y=0), make_hospital(1, specialization="neurology"), make_hospital(2, x=10, y=0)]
        edges = build_edges(make_patient(0, "urgent"), hospitals)
        assert [e.hospital_index for e in edges] == [2, 0]
        assert edges[0].cost == pytest.approx(100.0 - 20)

    def test_scenario_keeps_most_urgent(self, cardiology_scenario):
        patients, hospitals = cardiology_scenario
        search = BranchAndBound()
        assignments = search.run(patients, hospitals, [])

        assert {a.patient_id for a in assignments} == {0, 2}
        assert search.best_cost == pytest.approx(-30.0)
        assert hospitals[0].current_patients == 2
        assert all(p.bed_number is None and p.assigned_doctor is None for p in patients)

    def test_finds_cheaper_placement_than_greedy(self, crossing_scenario):
        patients, hospitals = crossing_scenario
        greedy_cost = _greedy_cost(patients, hospitals)
        assert greedy_cost == pytest.approx(80.0)

        search = BranchAndBound()
        search.run(patients, hospitals, [])
        assert search.best_cost == pytest.approx(0.0)
        assert patients[0].assigned_hospital == 1
        assert patients[1].assigned_hospital == 0

    def test_never_worse_than_greedy(self, make_hospital, make_patient):
        hospitals = [
            make_hospital(0, capacity=2, x=10, y=10),
            make_hospital(1, capacity=1, x=60, y=20),
            make_hospital(2, capacity=2, specialization="neurology", x=40, y=80),
            make_hospital(3, capacity=1, x=90, y=90),
        ]
        urgencies = ("stable", "critical", "urgent")
        patients = [
            make_patient(i, urgencies[i % 3], "neurology" if i % 4 == 0 else "cardiology", x=(i * 37) % 100, y=(i * 53) % 100)
            for i in range(9)
        ]
        greedy_cost = _greedy_cost(patients, hospitals)

        search = BranchAndBound()
        search.run(patients, hospitals, [])
        assert not search.budget_exhausted
        assert search.best_cost <= greedy_cost + 1e-9

    def test_search_does_not_touch_shared_state(self, cardiology_scenario):
        patients, hospitals = cardiology_scenario
        BranchAndBound().search(patients, hospitals)
        assert hospitals[0].current_patients == 0
        assert not any(p.is_assigned for p in patients)

    def test_patient_placed_while_room_remains(self, make_hospital, make_patient):
        # the first patient in urgency order must be placed; the second finds no room
        hospitals = [make_hospital(0, capacity=1)]
        patients = [make_patient(0, "critical", x=5, y=0), make_patient(1, "critical", x=1, y=0)]
        assignments = branch_and_bound(patients, hospitals, [])
        assert [a.patient_id for a in assignments] == [0]
        assert not patients[1].is_assigned

    def test_unknown_specialization_left_unassigned(self, make_hospital, make_patient):
        stray = make_patient(1, specialization="orthopedics")
        assignments = branch_and_bound([make_patient(0), stray], [make_hospital(0)], [])
        assert [a.patient_id for a in assignments] == [0]
        assert not stray.is_assigned

    def test_budget_keeps_first_complete_placement(self, crossing_scenario):
        patients, hospitals = crossing_scenario
        search = BranchAndBound(node_budget=3)
        search.run(patients, hospitals, [])

        assert search.budget_exhausted
        assert search.best_cost == pytest.approx(80.0)
        assert patients[0].assigned_hospital == 0
        assert patients[1].assigned_hospital == 1

    def test_budget_below_patient_count_still_reaches_first_placement(self, crossing_scenario):
        patients, hospitals = crossing_scenario
        search = BranchAndBound(node_budget=1)
        search.run(patients, hospitals, [])

        assert search.budget_exhausted
        assert search.best_cost == pytest.approx(80.0)
        assert all(p.is_assigned for p in patients)

    def test_large_budget_matches_unbounded(self, crossing_scenario):
        patients, hospitals = crossing_scenario
        bounded = BranchAndBound(node_budget=10_000)
        bounded_edges = bounded.search(patients, hospitals)
        unbounded = BranchAndBound()
        unbounded_edges = unbounded.search(patients, hospitals)

        assert not bounded.budget_exhausted
        assert bounded.best_cost == unbounded.best_cost
        assert bounded_edges == unbounded_edges

    def test_empty_input(self):
        search = BranchAndBound()
        assert search.run([], [], []) == []
        assert search.best_cost == 0.0

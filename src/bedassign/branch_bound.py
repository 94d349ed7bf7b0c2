"""
Branch-and-bound allocation: depth-first search over patient -> hospital edges.

Patients are placed in urgency order. Each placement costs its travel distance
minus ten times the urgency weight, and the search keeps the cheapest complete
placement. A branch is cut once its cost plus the most optimistic cost of the
patients still to place can no longer beat the best found. A patient with no
compatible hospital left is skipped and stays unassigned.

Occupancy during the search lives in a private load table; the shared
hospitals are only touched once the best placement is applied. Only the
hospital-level match is made here; beds and doctors are left empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .distance import calculate_distance, sort_by_urgency, urgency_weight
from .models import Assignment, Doctor, Hospital, Patient

logger = logging.getLogger(__name__)

URGENCY_REWARD = 10


@dataclass(frozen=True)
class Edge:
    patient: Patient
    hospital_index: int
    distance: float

    @property
    def cost(self) -> float:
        return self.distance - urgency_weight(self.patient.urgency) * URGENCY_REWARD


def placement_cost(edges: Sequence[Edge]) -> float:
    return sum(e.cost for e in edges)


def build_edges(patient: Patient, hospitals: Sequence[Hospital]) -> List[Edge]:
    """Compatible edges for one patient, cheapest first (ties keep hospital order)."""
    edges = [
        Edge(patient, i, calculate_distance(patient.location, h.location))
        for i, h in enumerate(hospitals)
        if h.specialization == patient.required_specialization
    ]
    edges.sort(key=lambda e: e.cost)
    return edges


@dataclass
class _Frame:
    depth: int
    cost: float
    placed: Optional[Edge] = None  # edge taken to reach this node, undone on pop
    next_edge: int = 0
    branched: bool = False


class BranchAndBound:
    def __init__(self, node_budget: Optional[int] = None):
        self.node_budget = node_budget
        self.best_cost = float("inf")
        self.nodes_visited = 0
        self.budget_exhausted = False

    def search(self, patients: Sequence[Patient], hospitals: Sequence[Hospital]) -> List[Edge]:
        """Return the cheapest placement found; does not mutate any entity."""
        self.best_cost = float("inf")
        self.nodes_visited = 0
        self.budget_exhausted = False

        order = sort_by_urgency(patients)
        edges = [build_edges(p, hospitals) for p in order]
        capacity = [h.capacity for h in hospitals]
        loads = [h.current_patients for h in hospitals]

        # floor[k]: lowest possible cost contribution of patients k.. (skipping costs 0)
        floor = [0.0] * (len(order) + 1)
        for k in range(len(order) - 1, -1, -1):
            cheapest = edges[k][0].cost if edges[k] else 0.0
            floor[k] = floor[k + 1] + min(0.0, cheapest)

        # the first dive needs len(order) + 1 nodes to reach a complete placement
        budget = self.node_budget
        if budget is not None:
            budget = max(budget, len(order) + 1)

        best: List[Edge] = []
        path: List[Edge] = []

        def enter(depth: int, cost: float) -> bool:
            """Count a node; True when it still has children worth expanding."""
            nonlocal best
            self.nodes_visited += 1
            if budget is not None and self.nodes_visited > budget:
                self.budget_exhausted = True
                return False
            if cost + floor[depth] >= self.best_cost:
                return False
            if depth == len(order):
                self.best_cost = cost
                best = list(path)
                return False
            return True

        stack: List[_Frame] = []
        if enter(0, 0.0):
            stack.append(_Frame(0, 0.0))

        while stack and not self.budget_exhausted:
            frame = stack[-1]
            options = edges[frame.depth]
            while frame.next_edge < len(options):
                edge = options[frame.next_edge]
                frame.next_edge += 1
                if loads[edge.hospital_index] < capacity[edge.hospital_index]:
                    break
            else:
                edge = None

            if edge is not None:
                frame.branched = True
                loads[edge.hospital_index] += 1
                path.append(edge)
                cost = frame.cost + edge.cost
                if enter(frame.depth + 1, cost):
                    stack.append(_Frame(frame.depth + 1, cost, placed=edge))
                else:
                    path.pop()
                    loads[edge.hospital_index] -= 1
                continue

            if not frame.branched:
                # no compatible hospital with room: the patient stays unassigned
                frame.branched = True
                if enter(frame.depth + 1, frame.cost):
                    stack.append(_Frame(frame.depth + 1, frame.cost))
                continue

            stack.pop()
            if frame.placed is not None:
                path.pop()
                loads[frame.placed.hospital_index] -= 1

        if self.budget_exhausted:
            logger.warning(
                "Branch-and-bound stopped after %d nodes; keeping best placement found (cost %.1f)",
                budget,
                self.best_cost,
            )
        return best

    def run(
        self, patients: Sequence[Patient], hospitals: Sequence[Hospital], doctors: Sequence[Doctor]
    ) -> List[Assignment]:
        best = self.search(patients, hospitals)
        assignments: List[Assignment] = []
        for edge in best:
            hospital = hospitals[edge.hospital_index]
            hospital.admit()
            edge.patient.assign(hospital.hospital_id, edge.distance)
            assignments.append(Assignment(edge.patient.patient_id, hospital.hospital_id, edge.distance))
        logger.debug("Branch-and-bound visited %d nodes, best cost %.1f", self.nodes_visited, self.best_cost)
        return assignments


def branch_and_bound(
    patients: Sequence[Patient],
    hospitals: Sequence[Hospital],
    doctors: Sequence[Doctor],
    node_budget: Optional[int] = None,
) -> List[Assignment]:
    return BranchAndBound(node_budget).run(patients, hospitals, doctors)

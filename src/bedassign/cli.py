from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pandas as pd
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import AllocationConfig
from .metrics import bed_availability, results_to_dataframe
from .simulation import AllocationSession
from .visualize import plot_comparison

console = Console()
app = typer.Typer(add_completion=False, no_args_is_help=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _build_config(
    hospitals: int,
    patients: int,
    doctors_per_hospital: int,
    capacity: int,
    critical: int,
    urgent: int,
    stable: int,
    seed: int,
    node_budget: int,
) -> AllocationConfig:
    return AllocationConfig(
        hospital_count=hospitals,
        patient_count=patients,
        doctors_per_hospital=doctors_per_hospital,
        hospital_capacity=capacity,
        urgency_mix={"critical": critical, "urgent": urgent, "stable": stable},
        seed=seed,
        bnb_node_budget=node_budget if node_budget > 0 else None,
    )


@app.command("run")
def run(
    algorithm: str = typer.Option("all", help="all, greedy, knapsack or branch-bound."),
    hospitals: int = typer.Option(8, help="Number of hospitals."),
    patients: int = typer.Option(40, help="Number of patients."),
    doctors_per_hospital: int = typer.Option(3, help="Doctors on each hospital roster."),
    capacity: int = typer.Option(6, help="Base bed capacity per hospital."),
    critical: int = typer.Option(20, help="Percent of critical patients."),
    urgent: int = typer.Option(30, help="Percent of urgent patients."),
    stable: int = typer.Option(50, help="Percent of stable patients."),
    seed: int = typer.Option(42, help="Random seed."),
    node_budget: int = typer.Option(500_000, help="Branch-and-bound node limit (0 = unlimited)."),
    assignments: bool = typer.Option(False, help="Print the final patient assignments."),
    beds: bool = typer.Option(False, help="Print bed availability after the last run."),
    png_out: Optional[Path] = typer.Option(None, help="Save a comparison chart to this path."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    _setup_logging(verbose)
    try:
        cfg = _build_config(
            hospitals, patients, doctors_per_hospital, capacity, critical, urgent, stable, seed, node_budget
        )
        session = AllocationSession.generate(cfg)
        console.log("Running allocation...", style="bold")
        results = session.run(algorithm)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    _print_results(results_to_dataframe(results))
    for r in results:
        if r.budget_exhausted:
            console.log(f"[yellow]{r.algorithm} stopped at the node budget; result is the best found so far[/]")
    if assignments:
        _print_assignments(session)
    if beds:
        _print_beds(session)
    if png_out:
        plot_comparison(results, outfile=png_out)
        console.log(f"Saved comparison chart to {png_out}")


@app.command("generate")
def generate(
    hospitals: int = typer.Option(8, help="Number of hospitals."),
    patients: int = typer.Option(40, help="Number of patients."),
    doctors_per_hospital: int = typer.Option(3, help="Doctors on each hospital roster."),
    capacity: int = typer.Option(6, help="Base bed capacity per hospital."),
    seed: int = typer.Option(42, help="Random seed."),
) -> None:
    cfg = AllocationConfig(
        hospital_count=hospitals,
        patient_count=patients,
        doctors_per_hospital=doctors_per_hospital,
        hospital_capacity=capacity,
        seed=seed,
    )
    session = AllocationSession.generate(cfg)
    table = Table(title="Hospitals", show_header=True, header_style="bold magenta")
    for col in ["ID", "Name", "Specialization", "Capacity", "Location", "Doctors"]:
        table.add_column(col)
    for h in session.hospitals:
        table.add_row(
            str(h.hospital_id),
            h.name,
            h.specialization,
            str(h.capacity),
            f"({h.location.x:.1f}, {h.location.y:.1f})",
            str(len(h.doctor_ids)),
        )
    console.print(table)
    demand = {}
    for p in session.patients:
        demand[p.urgency] = demand.get(p.urgency, 0) + 1
    console.print(f"{len(session.patients)} patients: " + ", ".join(f"{k}={v}" for k, v in demand.items()))


def _print_results(df: pd.DataFrame) -> None:
    table = Table(title="Algorithm comparison", show_header=True, header_style="bold magenta")
    table.add_column("Algorithm")
    table.add_column("Time")
    table.add_column("Assigned")
    table.add_column("Avg distance")
    table.add_column("Utilization")
    table.add_column("Efficiency")
    for row in df.itertuples(index=False):
        table.add_row(
            row.algorithm,
            f"{row.execution_time_ms:0.2f} ms",
            f"{row.patients_assigned}/{row.total_patients} ({row.assigned_pct}%)",
            f"{row.avg_distance_km:0.1f} km",
            f"{row.utilization_percent:0.1f}%",
            f"{row.efficiency_score}%",
        )
    console.print(table)


def _print_assignments(session: AllocationSession) -> None:
    hospitals = {h.hospital_id: h for h in session.hospitals}
    table = Table(title="Assignments", show_header=True, header_style="bold magenta")
    for col in ["Patient", "Urgency", "Specialization", "Hospital", "Bed", "Doctor", "Distance"]:
        table.add_column(col)
    for p in session.patients:
        hospital = hospitals.get(p.assigned_hospital) if p.is_assigned else None
        table.add_row(
            f"{p.patient_id} {p.name}",
            p.urgency,
            p.required_specialization,
            hospital.name if hospital else "-",
            str(p.bed_number) if p.bed_number is not None else "-",
            str(p.assigned_doctor) if p.assigned_doctor is not None else "-",
            f"{p.travel_distance:0.1f} km" if p.is_assigned else "-",
        )
    console.print(table)


def _print_beds(session: AllocationSession) -> None:
    df = bed_availability(session.hospitals)
    table = Table(title="Bed availability", show_header=True, header_style="bold magenta")
    for col in ["Hospital", "Specialization", "Occupied", "Available", "Utilization", "Status"]:
        table.add_column(col)
    for row in df.itertuples(index=False):
        table.add_row(
            row.name,
            row.specialization,
            f"{row.current_patients}/{row.capacity}",
            str(row.available_beds),
            f"{row.utilization_percent:0.1f}%",
            row.status,
        )
    console.print(table)

"""Analyze a recorded simulation run and generate diagnostic figures."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .core.logging_utils import RunLogger

FIGS_SUBDIR = "figs"
EVENT_TYPES = ("orbit_acquired", "orbit_lost", "focus_changed")


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        columns: Dict[str, List[float]] = {name: [] for name in reader.fieldnames or []}
        for row in reader:
            for key, value in row.items():
                if key is None:
                    continue
                columns.setdefault(key, []).append(float(value))
    return {key: np.asarray(values) for key, values in columns.items()}


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row:
                continue
            event = {
                "t": float(row["t"]),
                "type": row["type"],
                "focus": int(float(row["focus"])),
                "e": float(row["e"]),
            }
            details_raw = row.get("details", "")
            if details_raw:
                try:
                    event["details"] = json.loads(details_raw)
                except json.JSONDecodeError:
                    event["details"] = details_raw
            events.append(event)
    return events


def relative_drift(series: np.ndarray) -> float:
    """``(last - first) / first``, or the absolute change when first is ~0."""

    if series.size == 0:
        return 0.0
    denom = series[0] if abs(series[0]) > 1e-12 else 1.0
    return float((series[-1] - series[0]) / denom)


def momentum_drift(ts: Dict[str, np.ndarray]) -> float:
    """Largest deviation of total momentum from its first recorded value."""

    px = ts.get("px", np.array([]))
    py = ts.get("py", np.array([]))
    if px.size == 0:
        return 0.0
    return float(np.max(np.hypot(px - px[0], py - py[0])))


def summarize_events(events: List[dict]) -> Dict[str, int]:
    summary: Dict[str, int] = {event_type: 0 for event_type in EVENT_TYPES}
    for event in events:
        if event["type"] in summary:
            summary[event["type"]] += 1
    return summary


def bound_fraction(ts: Dict[str, np.ndarray]) -> float:
    """Share of recorded samples in which the probe had a bound orbit."""

    focus = ts.get("focus", np.array([]))
    if focus.size == 0:
        return 0.0
    return float(np.count_nonzero(focus >= 0) / focus.size)


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def plot_trajectory(fig_dir: Path, ts: Dict[str, np.ndarray]) -> None:
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot(ts["x"], ts["y"], color="#6bc5c0", lw=1.0, label="Probe")
    ax.scatter([ts["x"][0]], [ts["y"][0]], color="#4a86f7", s=30, label="Start")
    ax.set_aspect("equal", "datalim")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title("Probe trajectory")
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "trajectory.png", dpi=150)
    plt.close(fig)


def plot_energy(fig_dir: Path, ts: Dict[str, np.ndarray], rel_drift: float) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], ts["energy"], color="#ffa94d")
    ax.set_xlabel("t [s]")
    ax.set_ylabel("Total energy")
    ax.set_title(f"Body energy, relative drift {rel_drift:.2e}")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "energy.png", dpi=150)
    plt.close(fig)


def plot_momentum(fig_dir: Path, ts: Dict[str, np.ndarray]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], ts["px"], color="#94d82d", label="px")
    ax.plot(ts["t"], ts["py"], color="#4dabf7", label="py")
    ax.set_xlabel("t [s]")
    ax.set_ylabel("Total momentum")
    ax.set_title("Body momentum")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "momentum.png", dpi=150)
    plt.close(fig)


def plot_eccentricity(fig_dir: Path, ts: Dict[str, np.ndarray]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    # NaN samples (no bound orbit) leave gaps in the line
    ax.plot(ts["t"], ts["e"], color="#9775fa")
    ax.set_xlabel("t [s]")
    ax.set_ylabel("e [-]")
    ax.set_title("Predicted orbit eccentricity")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "eccentricity.png", dpi=150)
    plt.close(fig)


def print_summary(
    run_dir: Path,
    meta: dict,
    rel_drift: float,
    p_drift: float,
    bound: float,
    event_summary: Dict[str, int],
) -> None:
    print(f"Run: {run_dir.name}")
    if "seed" in meta:
        print(f" Seed: {meta['seed']}")
    print(f" Bodies: {meta.get('body_count', '?')}, dt = {meta.get('dt_phys', '?')}")
    print(f" Relative energy drift dE/E = {rel_drift:.3e}")
    print(f" Max momentum deviation = {p_drift:.3e}")
    print(f" Bound orbit in {bound:.0%} of samples")
    print(
        " Events:" +
        ",".join(f" {etype}: {count}" for etype, count in event_summary.items())
    )


def resolve_run_dir(parser: argparse.ArgumentParser, runs_dir: Path, run_arg: str | None) -> Path:
    if run_arg:
        run_path = Path(run_arg)
        if not run_path.is_dir():
            run_path = runs_dir / run_arg
    else:
        last_run_file = runs_dir / RunLogger.LAST_RUN_FILENAME
        if not last_run_file.exists():
            parser.error(f"No run given and {last_run_file} is missing.")
        run_path = runs_dir / last_run_file.read_text(encoding="utf-8").strip()

    if not run_path.is_dir():
        parser.error(f"Run directory not found: {run_path}")
    return run_path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a recorded run and write figures.")
    parser.add_argument("run_dir", nargs="?", help="run folder, or a run id inside --runs-dir")
    parser.add_argument("--runs-dir", default="data/runs", help="root folder of recorded runs")
    args = parser.parse_args(argv)

    run_path = resolve_run_dir(parser, Path(args.runs_dir), args.run_dir)

    meta_path = run_path / RunLogger.META_FILENAME
    ts_path = run_path / RunLogger.TIMESERIES_FILENAME
    ev_path = run_path / RunLogger.EVENTS_FILENAME
    if not meta_path.exists() or not ts_path.exists() or not ev_path.exists():
        parser.error("Run directory is missing meta/timeseries/events files.")

    with meta_path.open("r", encoding="utf-8") as fh:
        meta = json.load(fh)

    ts = load_timeseries(ts_path)
    events = load_events(ev_path)
    if not ts or ts["t"].size == 0:
        parser.error("timeseries.csv is empty, nothing to analyze.")

    rel_drift = relative_drift(ts["energy"])
    p_drift = momentum_drift(ts)
    bound = bound_fraction(ts)
    event_summary = summarize_events(events)

    fig_dir = ensure_fig_dir(run_path)
    plot_trajectory(fig_dir, ts)
    plot_energy(fig_dir, ts, rel_drift)
    plot_momentum(fig_dir, ts)
    plot_eccentricity(fig_dir, ts)

    print_summary(run_path, meta, rel_drift, p_drift, bound, event_summary)


if __name__ == "__main__":
    main()

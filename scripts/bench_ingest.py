#!/usr/bin/env python3
"""Ingest pytest-benchmark JSON results into DuckDB.

Usage:
    uv run pytest tests/bench --benchmark-only --benchmark-json bench/raw/cpython.json
    uv run scripts/bench_ingest.py [--db bench/strutil_bench.duckdb] [--notes "initial baseline"]

Reads raw JSON from bench/raw/ (one file per variant, named after the
variant, e.g. cpython.json or pypy.json) and inserts into DuckDB.
Each run creates a new bench_runs entry with the current commit SHA.
"""

from __future__ import annotations

import json
import platform
import subprocess
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import click
import duckdb

DB_DEFAULT = "bench/strutil_bench.duckdb"
RAW_DIR = Path("bench/raw")

# Trailing word of test_bench_{scenario}_{phase}
KNOWN_PHASES = frozenset({"lookup", "scan", "bind", "render", "join"})

SCHEMA = """
CREATE TABLE IF NOT EXISTS bench_runs (
    id          INTEGER PRIMARY KEY,
    commit_sha  VARCHAR NOT NULL,
    timestamp   TIMESTAMP NOT NULL,
    machine     VARCHAR,
    notes       VARCHAR
);

CREATE TABLE IF NOT EXISTS bench_results (
    run_id      INTEGER NOT NULL REFERENCES bench_runs(id),
    variant     VARCHAR NOT NULL,
    scenario    VARCHAR NOT NULL,
    phase       VARCHAR NOT NULL,
    mean_ns     DOUBLE NOT NULL,
    stddev_ns   DOUBLE,
    min_ns      DOUBLE,
    max_ns      DOUBLE,
    iterations  BIGINT,
    PRIMARY KEY (run_id, variant, scenario, phase)
);
"""


def get_commit_sha() -> str:
    """Get current git commit SHA."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return "unknown"
    return result.stdout.strip() if result.returncode == 0 else "unknown"


def get_machine() -> str:
    """Get machine identifier."""
    return f"{platform.node()}/{platform.machine()}"


def create_run(con: duckdb.DuckDBPyConnection, notes: str | None) -> int:
    """Create a new benchmark run entry, return its ID."""
    con.execute(SCHEMA)

    max_id = con.execute("SELECT COALESCE(MAX(id), 0) FROM bench_runs").fetchone()[0]
    run_id = max_id + 1

    con.execute(
        "INSERT INTO bench_runs (id, commit_sha, timestamp, machine, notes) VALUES (?, ?, ?, ?, ?)",
        [run_id, get_commit_sha(), datetime.now(timezone.utc), get_machine(), notes],
    )
    return run_id


def split_bench_name(name: str) -> tuple[str, str]:
    """Split test_bench_{scenario}_{phase} into (scenario, phase).

    Parametrized ids ("[...]") are dropped. Names without a known phase
    suffix are filed under the "lookup" phase.
    """
    clean = name.split("[", 1)[0].removeprefix("test_bench_")
    parts = clean.rsplit("_", 1)
    if len(parts) == 2 and parts[1] in KNOWN_PHASES:
        return parts[0], parts[1]
    return clean, "lookup"


def parse_pytest_benchmark_json(data: dict[str, Any], variant: str) -> list[dict[str, Any]]:
    """Parse pytest-benchmark JSON output into normalized results."""
    results = []
    for bench in data.get("benchmarks", []):
        scenario, phase = split_bench_name(bench.get("name", ""))

        stats = bench.get("stats", {})
        # pytest-benchmark reports in seconds, convert to nanoseconds
        to_ns = 1_000_000_000
        results.append({
            "variant": variant,
            "scenario": scenario,
            "phase": phase,
            "mean_ns": stats.get("mean", 0) * to_ns,
            "stddev_ns": (stats.get("stddev") or 0) * to_ns,
            "min_ns": stats.get("min", 0) * to_ns,
            "max_ns": stats.get("max", 0) * to_ns,
            "iterations": stats.get("iterations"),
        })
    return results


def insert_results(
    con: duckdb.DuckDBPyConnection, run_id: int, rows: list[dict[str, Any]]
) -> None:
    """Insert normalized rows for one run."""
    for row in rows:
        con.execute(
            """INSERT INTO bench_results
               (run_id, variant, scenario, phase, mean_ns, stddev_ns, min_ns, max_ns, iterations)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            [
                run_id,
                row["variant"],
                row["scenario"],
                row["phase"],
                row["mean_ns"],
                row["stddev_ns"],
                row["min_ns"],
                row["max_ns"],
                row["iterations"],
            ],
        )


@click.command()
@click.option("--db", default=DB_DEFAULT, help="DuckDB database path")
@click.option("--notes", default=None, help="Notes for this benchmark run")
@click.option("--raw-dir", default=str(RAW_DIR), help="Directory with raw JSON files")
def main(db: str, notes: str | None, raw_dir: str) -> None:
    """Ingest benchmark results into DuckDB."""
    raw_path = Path(raw_dir)

    if not raw_path.exists():
        click.echo(f"Raw directory {raw_path} does not exist", err=True)
        sys.exit(1)

    json_files = sorted(raw_path.glob("*.json"))
    if not json_files:
        click.echo(f"No JSON files found in {raw_path}", err=True)
        sys.exit(1)

    con = duckdb.connect(db)
    run_id = create_run(con, notes)
    total = 0

    for json_file in json_files:
        variant = json_file.stem
        data = json.loads(json_file.read_text())
        if not isinstance(data, dict) or "benchmarks" not in data:
            click.echo(f"  Skipping {json_file.name}: not pytest-benchmark output")
            continue

        rows = parse_pytest_benchmark_json(data, variant)
        insert_results(con, run_id, rows)
        total += len(rows)
        click.echo(f"  Ingested {len(rows)} results from {json_file.name} ({variant})")

    con.close()
    click.echo(f"\nRun #{run_id}: {total} results ingested into {db}")


if __name__ == "__main__":
    main()

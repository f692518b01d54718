"""Tests for scripts/bench_ingest.py (pytest-benchmark JSON → DuckDB)."""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path
from types import ModuleType
from typing import Any

import duckdb
import pytest
from click.testing import CliRunner

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "bench_ingest.py"


@pytest.fixture(scope="module")
def bench_ingest() -> ModuleType:
    spec = importlib.util.spec_from_file_location("bench_ingest", SCRIPT)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _payload() -> dict[str, Any]:
    return {
        "benchmarks": [
            {
                "name": "test_bench_short_first_key_lookup",
                "stats": {"mean": 2e-7, "stddev": 1e-8, "min": 1e-7, "max": 5e-7, "iterations": 1},
            },
            {
                "name": "test_bench_long_map_scan",
                "stats": {"mean": 4e-6, "stddev": None, "min": 3e-6, "max": 9e-6, "iterations": 1},
            },
            {
                "name": "test_bench_odd_name[param]",
                "stats": {"mean": 1e-6, "min": 1e-6, "max": 1e-6},
            },
        ]
    }


class TestSplitBenchName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("test_bench_long_map_scan", ("long_map", "scan")),
            ("test_bench_search_model_bind", ("search_model", "bind")),
            ("test_bench_two_placeholders_render", ("two_placeholders", "render")),
            ("test_bench_combined_id_join", ("combined_id", "join")),
            ("test_bench_something_else", ("something_else", "lookup")),
            ("test_bench_x_scan[a-b]", ("x", "scan")),
        ],
    )
    def test_split(self, bench_ingest: ModuleType, name: str, expected: tuple[str, str]) -> None:
        assert bench_ingest.split_bench_name(name) == expected


class TestParsePytestBenchmarkJson:
    def test_converts_seconds_to_nanoseconds(self, bench_ingest: ModuleType) -> None:
        rows = bench_ingest.parse_pytest_benchmark_json(_payload(), "cpython")
        assert len(rows) == 3
        first = rows[0]
        assert first["variant"] == "cpython"
        assert (first["scenario"], first["phase"]) == ("short_first_key", "lookup")
        assert first["mean_ns"] == pytest.approx(200.0)
        assert rows[1]["stddev_ns"] == 0

    def test_empty_payload(self, bench_ingest: ModuleType) -> None:
        assert bench_ingest.parse_pytest_benchmark_json({}, "cpython") == []


class TestMain:
    def test_ingests_into_duckdb(self, bench_ingest: ModuleType, tmp_path: Path) -> None:
        raw = tmp_path / "raw"
        raw.mkdir()
        (raw / "cpython.json").write_text(json.dumps(_payload()))
        (raw / "other.json").write_text(json.dumps([1, 2, 3]))
        db = tmp_path / "bench.duckdb"

        result = CliRunner().invoke(
            bench_ingest.main, ["--db", str(db), "--raw-dir", str(raw), "--notes", "baseline"]
        )

        assert result.exit_code == 0, result.output
        assert "Skipping other.json" in result.output
        assert "Run #1: 3 results" in result.output

        con = duckdb.connect(str(db))
        try:
            assert con.execute("SELECT notes FROM bench_runs").fetchall() == [("baseline",)]
            phases = con.execute(
                "SELECT phase FROM bench_results ORDER BY scenario"
            ).fetchall()
        finally:
            con.close()
        assert sorted(p for (p,) in phases) == ["lookup", "lookup", "scan"]

    def test_second_run_gets_next_id(self, bench_ingest: ModuleType, tmp_path: Path) -> None:
        raw = tmp_path / "raw"
        raw.mkdir()
        (raw / "cpython.json").write_text(json.dumps(_payload()))
        db = tmp_path / "bench.duckdb"
        args = ["--db", str(db), "--raw-dir", str(raw)]

        CliRunner().invoke(bench_ingest.main, args)
        result = CliRunner().invoke(bench_ingest.main, args)

        assert result.exit_code == 0, result.output
        assert "Run #2" in result.output

    def test_missing_raw_dir(self, bench_ingest: ModuleType, tmp_path: Path) -> None:
        result = CliRunner().invoke(
            bench_ingest.main, ["--db", str(tmp_path / "x.duckdb"), "--raw-dir", str(tmp_path / "nope")]
        )
        assert result.exit_code == 1

    def test_empty_raw_dir(self, bench_ingest: ModuleType, tmp_path: Path) -> None:
        result = CliRunner().invoke(
            bench_ingest.main, ["--db", str(tmp_path / "x.duckdb"), "--raw-dir", str(tmp_path)]
        )
        assert result.exit_code == 1

"""Shared case fixtures for strutil tests.

Loads YAML case files from tests/fixtures/ for parametrized testing.
Each file holds one or more documents shaped as::

    name: fixture_name
    cases:
      - name: case_name
        ...case fields...
        expect: ...
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class FixtureCase:
    """A single test case from a YAML fixture file."""

    fixture_name: str
    case_name: str
    data: dict[str, Any]
    expect: Any

    @property
    def id(self) -> str:
        return f"{self.fixture_name}::{self.case_name}"


def load_cases(filename: str) -> list[FixtureCase]:
    """Load every case from one fixture file (may contain multiple documents)."""
    cases: list[FixtureCase] = []
    path = FIXTURE_DIR / filename
    with path.open(encoding="utf-8") as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            fixture_name = doc["name"]
            for case in doc["cases"]:
                data = {k: v for k, v in case.items() if k not in ("name", "expect")}
                cases.append(
                    FixtureCase(
                        fixture_name=fixture_name,
                        case_name=case["name"],
                        data=data,
                        expect=case["expect"],
                    )
                )
    return cases

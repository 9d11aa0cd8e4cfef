"""Load and validate JSON instances against the bundled schemas.

Usage::

    from egress_audit.contracts.load import validate_instance, validate_file

    validate_instance(report.to_dict(), "violation_report.schema.json")
    validate_file(Path("out/report.json"), "violation_report.schema.json")
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

SCHEMA_DIR = "data/schemas"


def _schema_path(name: str) -> Path:
    """Resolve a bundled schema.

    Priority:
    1. ``src/egress_audit/data/schemas/`` relative to this file
    2. pip-installed package data via importlib.resources
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    with resources.as_file(resources.files("egress_audit") / SCHEMA_DIR / name) as p:
        if not p.exists():
            raise FileNotFoundError(f"unknown schema: {name}")
        return p


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by filename."""
    path = _schema_path(name)
    return json.loads(path.read_text(encoding="utf-8"))


def validate_instance(instance: Any, schema_name: str) -> None:
    """Validate *instance* against the named schema.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    jsonschema.validate(instance=instance, schema=load_schema(schema_name))


def validate_file(instance_path: Path, schema_name: str) -> None:
    """Load a JSON file and validate it against the named schema."""
    instance = json.loads(instance_path.read_text(encoding="utf-8"))

    # Surface a readable error before the generic jsonschema message.
    if schema_name == "violation_report.schema.json":
        sv = instance.get("schema_version") if isinstance(instance, dict) else None
        if sv != "violation_report_v1":
            raise ValueError(
                f"{instance_path}: expected schema_version='violation_report_v1', got {sv!r}"
            )

    validate_instance(instance, schema_name)

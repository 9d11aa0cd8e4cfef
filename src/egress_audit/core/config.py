"""Scan configuration — the immutable policy a single scan runs under.

A configuration is built once per invocation, from the defaults in
``egress_audit.policy.defaults`` overlaid with an optional policy file
(YAML, JSON or a ``pyproject.toml`` ``[tool.egress-audit]`` table) and
explicit caller overrides.
"""

from __future__ import annotations

import json
import logging
import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Iterable, Mapping

import jsonschema
import yaml

from egress_audit.contracts.load import validate_instance
from egress_audit.core.exclude import ExcludePattern, parse_excludes
from egress_audit.policy import defaults

_logger = logging.getLogger(__name__)

ENV_CONFIG = "EGRESS_AUDIT_CONFIG"
ENV_JOBS = "EGRESS_AUDIT_JOBS"

PYPROJECT_TABLE = "egress-audit"


class PolicyError(ValueError):
    """Raised when a policy document or override is malformed."""

    def __init__(self, message: str, *, source: str | Path | None = None) -> None:
        self.source = str(source) if source is not None else None
        prefix = f"{self.source}: " if self.source else ""
        super().__init__(prefix + message)


def _dedupe(items: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


@dataclass(frozen=True)
class ScanConfiguration:
    """Immutable scan policy.

    ``forbidden_literals`` has set semantics but keeps its configured order,
    which is the order the matcher tries literals in.
    """

    root_directories: tuple[Path, ...] = field(
        default_factory=lambda: tuple(Path(r) for r in defaults.DEFAULT_ROOTS)
    )
    forbidden_literals: tuple[str, ...] = defaults.DEFAULT_FORBIDDEN_LITERALS
    exclude_patterns: tuple[ExcludePattern, ...] = field(
        default_factory=lambda: parse_excludes(defaults.DEFAULT_EXCLUDES)
    )
    allowed_extensions: frozenset[str] = defaults.DEFAULT_EXTENSIONS
    pinned_files: tuple[Path, ...] = field(
        default_factory=lambda: tuple(Path(p) for p in defaults.DEFAULT_PINNED_FILES)
    )
    base_dir: Path | None = None
    jobs: int = defaults.DEFAULT_JOBS

    def __post_init__(self) -> None:
        # Normalise caller-supplied iterables so equality and hashing behave.
        object.__setattr__(
            self, "root_directories", tuple(Path(r) for r in self.root_directories)
        )
        object.__setattr__(self, "forbidden_literals", _dedupe(self.forbidden_literals))
        object.__setattr__(self, "exclude_patterns", parse_excludes(self.exclude_patterns))
        object.__setattr__(self, "allowed_extensions", frozenset(self.allowed_extensions))
        object.__setattr__(self, "pinned_files", tuple(Path(p) for p in self.pinned_files))
        if self.base_dir is not None:
            object.__setattr__(self, "base_dir", Path(self.base_dir))
        if not isinstance(self.jobs, int) or self.jobs < 1:
            raise PolicyError(f"jobs must be a positive integer, got {self.jobs!r}")

    def with_overrides(self, **changes: Any) -> "ScanConfiguration":
        """Return a copy with *changes* applied (``None`` values are ignored)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def to_dict(self) -> dict[str, Any]:
        """Policy-file shaped view (the same keys ``from_mapping`` accepts)."""
        return {
            "roots": [r.as_posix() for r in self.root_directories],
            "forbidden_literals": list(self.forbidden_literals),
            "exclude": [str(p) for p in self.exclude_patterns],
            "extensions": sorted(self.allowed_extensions),
            "pinned_files": [p.as_posix() for p in self.pinned_files],
            "jobs": self.jobs,
        }

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        *,
        base: "ScanConfiguration | None" = None,
        source: str | Path | None = None,
    ) -> "ScanConfiguration":
        """Overlay a policy document onto *base* (defaults when omitted)."""
        try:
            validate_instance(dict(data), "scan_policy.schema.json")
        except jsonschema.ValidationError as exc:
            where = "/".join(str(p) for p in exc.absolute_path) or "<root>"
            raise PolicyError(f"invalid policy at {where}: {exc.message}", source=source) from exc

        changes: dict[str, Any] = {}
        if "roots" in data:
            changes["root_directories"] = data["roots"]
        if "forbidden_literals" in data:
            changes["forbidden_literals"] = data["forbidden_literals"]
        if "exclude" in data:
            try:
                changes["exclude_patterns"] = parse_excludes(data["exclude"])
            except ValueError as exc:
                raise PolicyError(str(exc), source=source) from exc
        if "extensions" in data:
            changes["allowed_extensions"] = data["extensions"]
        if "pinned_files" in data:
            changes["pinned_files"] = data["pinned_files"]
        if "jobs" in data:
            changes["jobs"] = data["jobs"]
        return replace(base or cls(), **changes)


def read_policy_document(path: Path) -> dict[str, Any]:
    """Load the raw policy mapping from a YAML, JSON or TOML file."""
    if not path.is_file():
        raise PolicyError("policy file not found", source=path)

    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    try:
        if suffix == ".json":
            data: Any = json.loads(text)
        elif suffix == ".toml":
            doc = tomllib.loads(text)
            # pyproject.toml keeps the policy under [tool.egress-audit]
            data = doc.get("tool", {}).get(PYPROJECT_TABLE, {}) if "tool" in doc else doc
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        raise PolicyError(f"cannot parse policy: {exc}", source=path) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise PolicyError("policy document must be a mapping", source=path)
    return data


def load_policy(path: str | Path, *, base_dir: Path | None = None) -> ScanConfiguration:
    """Build a configuration from the policy file at *path*.

    When *base_dir* is omitted, relative roots are taken relative to the
    directory holding the policy file.
    """
    p = Path(path)
    data = read_policy_document(p)
    cfg = ScanConfiguration.from_mapping(data, source=p)
    _logger.debug("loaded policy %s (%d forbidden literal(s))", p, len(cfg.forbidden_literals))
    return replace(cfg, base_dir=base_dir if base_dir is not None else p.resolve().parent)


def resolve_configuration(
    config_path: str | Path | None = None,
    *,
    roots: Iterable[str | Path] | None = None,
    base_dir: Path | None = None,
    jobs: int | None = None,
    env: Mapping[str, str] | None = None,
) -> ScanConfiguration:
    """Effective configuration for a CLI / API call.

    Precedence: explicit arguments, then ``EGRESS_AUDIT_*`` environment
    variables, then the policy file, then the built-in defaults.
    """
    if env is None:
        env = os.environ

    path = config_path or env.get(ENV_CONFIG) or None
    if path:
        cfg = load_policy(path, base_dir=base_dir)
    else:
        cfg = ScanConfiguration(base_dir=base_dir)

    if jobs is None and env.get(ENV_JOBS):
        raw = env[ENV_JOBS]
        try:
            jobs = int(raw)
        except ValueError as exc:
            raise PolicyError(f"{ENV_JOBS} must be an integer, got {raw!r}") from exc

    root_dirs = tuple(Path(r) for r in roots) if roots else None
    return cfg.with_overrides(root_directories=root_dirs, jobs=jobs)

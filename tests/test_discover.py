"""Tests for the directory walker."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from egress_audit.core.discover import walk
from egress_audit.core.exclude import parse_excludes

_EXTS = {".ts", ".tsx", ".js", ".html"}


def _touch(root: Path, rel: str, text: str = "") -> Path:
    p = root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def _shown(candidates) -> list[str]:
    return sorted(c.display for c in candidates)


class TestWalk:
    def test_recurses_and_filters_by_extension(self, tmp_path: Path):
        _touch(tmp_path, "src/a.ts")
        _touch(tmp_path, "src/deep/b.tsx")
        _touch(tmp_path, "src/readme.md")
        _touch(tmp_path, "index.html")

        found = walk([tmp_path], (), _EXTS)
        rel = sorted(c.path.relative_to(tmp_path).as_posix() for c in found)
        assert rel == ["index.html", "src/a.ts", "src/deep/b.tsx"]

    def test_extension_match_is_case_sensitive(self, tmp_path: Path):
        _touch(tmp_path, "upper.TS")
        _touch(tmp_path, "lower.ts")
        found = walk([tmp_path], (), _EXTS)
        assert [c.path.name for c in found] == ["lower.ts"]

    def test_relative_roots_keep_their_spelling(self, tmp_path: Path):
        _touch(tmp_path, "packages/ui/utils/sharing.ts")
        found = walk(["packages/ui"], (), _EXTS, base_dir=tmp_path)
        assert _shown(found) == ["packages/ui/utils/sharing.ts"]
        assert found[0].location == tmp_path / "packages/ui/utils/sharing.ts"

    def test_excluded_directory_is_pruned(self, tmp_path: Path):
        _touch(tmp_path, "app/node_modules/lib/index.js")
        _touch(tmp_path, "app/main.js")
        found = walk(["app"], parse_excludes(["node_modules"]), _EXTS, base_dir=tmp_path)
        assert _shown(found) == ["app/main.js"]

    def test_excluded_directory_is_never_listed(self, tmp_path: Path, monkeypatch):
        _touch(tmp_path, "app/node_modules/lib/index.js")
        _touch(tmp_path, "app/main.js")

        listed: list[str] = []
        real_scandir = os.scandir

        def spy(path):
            listed.append(Path(path).name)
            return real_scandir(path)

        monkeypatch.setattr("egress_audit.core.discover.os.scandir", spy)
        walk(["app"], parse_excludes(["node_modules"]), _EXTS, base_dir=tmp_path)
        assert "node_modules" not in listed
        assert "lib" not in listed

    def test_excluded_file_is_skipped(self, tmp_path: Path):
        _touch(tmp_path, "ui/sharing.ts")
        _touch(tmp_path, "ui/sharing.test.ts")
        found = walk(["ui"], parse_excludes(["suffix:.test.ts"]), _EXTS, base_dir=tmp_path)
        assert _shown(found) == ["ui/sharing.ts"]

    def test_dist_substring_rule_matches_children(self, tmp_path: Path):
        _touch(tmp_path, "ui/dist/bundle.js")
        _touch(tmp_path, "ui/distance.ts")
        found = walk(["ui"], parse_excludes(["dist/"]), _EXTS, base_dir=tmp_path)
        assert _shown(found) == ["ui/distance.ts"]

    def test_missing_root_yields_nothing(self, tmp_path: Path):
        _touch(tmp_path, "present/a.ts")
        found = walk(["absent", "present"], (), _EXTS, base_dir=tmp_path)
        assert _shown(found) == ["present/a.ts"]

    def test_root_that_is_a_file_yields_nothing(self, tmp_path: Path):
        f = _touch(tmp_path, "a.ts")
        assert walk([f], (), _EXTS) == []

    def test_roots_are_visited_in_order(self, tmp_path: Path):
        _touch(tmp_path, "b/x.ts")
        _touch(tmp_path, "a/y.ts")
        found = walk(["b", "a"], (), _EXTS, base_dir=tmp_path)
        assert [c.display for c in found] == ["b/x.ts", "a/y.ts"]

    def test_depth_first_order_is_deterministic(self, tmp_path: Path):
        _touch(tmp_path, "r/b.ts")
        _touch(tmp_path, "r/a/z.ts")
        _touch(tmp_path, "r/c.ts")
        first = walk(["r"], (), _EXTS, base_dir=tmp_path)
        second = walk(["r"], (), _EXTS, base_dir=tmp_path)
        assert first == second
        assert [c.display for c in first] == ["r/a/z.ts", "r/b.ts", "r/c.ts"]

    def test_empty_extension_set_yields_nothing(self, tmp_path: Path):
        _touch(tmp_path, "a.ts")
        assert walk([tmp_path], (), set()) == []

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlink_cycle_terminates(self, tmp_path: Path):
        _touch(tmp_path, "r/a.ts")
        try:
            os.symlink(tmp_path / "r", tmp_path / "r" / "loop", target_is_directory=True)
        except OSError:
            pytest.skip("cannot create symlinks here")
        found = walk(["r"], (), _EXTS, base_dir=tmp_path)
        assert _shown(found) == ["r/a.ts"]

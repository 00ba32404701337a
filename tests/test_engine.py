"""Tests for the scan/clean engine."""

from __future__ import annotations

import pytest

from devsweep import __version__
from devsweep.config import ScanConfig
from devsweep.core.cleanup import CleanupMode
from devsweep.core.engine import SweepEngine
from devsweep.core.results import FindingFilter
from devsweep.core.walker import ScanError
from devsweep.models.rule import Category

MB = 1024 * 1024


@pytest.fixture
def engine():
    return SweepEngine()


@pytest.fixture
def project(root, make_file):
    make_file(root / "web" / "node_modules" / "react" / "index.js", 40 * MB)
    make_file(root / "web" / "build" / "app.js", 20 * MB)
    make_file(root / "web" / "coverage" / "lcov.info", 3 * MB)
    make_file(root / "py" / "__pycache__" / "mod.pyc", 2 * MB)
    make_file(root / "py" / "logs" / "app.log", 5 * MB)
    make_file(root / "py" / "main.py", 10)
    return root


@pytest.fixture
def ide_home(fake_home, make_file):
    make_file(fake_home / ".vscode" / "extensions" / "ext.vsix", 8 * MB)
    make_file(fake_home / ".config" / "Code" / "Cache" / "data", MB // 2)
    return fake_home


class TestScan:
    def test_report(self, engine, project):
        report = engine.scan(ScanConfig(root=project))

        assert report.version == __version__
        assert report.total_count == 5
        assert report.total_bytes == 70 * MB
        assert [f.matched_name for f in report.findings] == [
            "node_modules", "build", "logs", "coverage", "__pycache__",
        ]
        # root, web, py
        assert report.dirs_visited == 3

    def test_safe_profile(self, engine, root, make_file):
        make_file(root / "app" / "build" / "out.bin", 2 * MB)
        make_file(root / "app" / "node_modules" / "dep.js", 2 * MB)

        report = engine.scan(ScanConfig(root=root, profile="safe"))

        assert [f.matched_name for f in report.findings] == ["node_modules"]
        assert report.findings[0].category is Category.DEPS

    def test_category_filter(self, engine, project):
        report = engine.scan(ScanConfig(root=project, category="logs"))
        assert [f.matched_name for f in report.findings] == ["logs"]

    def test_sort_by_type(self, engine, project):
        report = engine.scan(ScanConfig(root=project, sort="type"))
        assert [f.category.value for f in report.findings] == ["build", "cache", "deps", "logs", "test"]

    def test_progress_callback(self, engine, project):
        seen = []
        engine.scan(ScanConfig(root=project), on_progress=seen.append)
        assert project / "web" / "node_modules" in seen
        assert len(seen) == 5

    def test_unreadable_root(self, engine, tmp_path):
        with pytest.raises(ScanError):
            engine.scan(ScanConfig(root=tmp_path / "missing"))

    def test_to_dict(self, engine, project):
        data = engine.scan(ScanConfig(root=project, category="deps")).to_dict()
        assert data["version"] == __version__
        assert data["config"]["category"] == "deps"
        assert data["total_count"] == 1
        assert data["total_bytes"] == 40 * MB
        assert data["findings"] == [
            {
                "path": str(project / "web" / "node_modules"),
                "name": "node_modules",
                "size_bytes": 40 * MB,
                "size_mb": 40.0,
                "category": "deps",
                "description": "npm/yarn dependencies",
                "is_ide": False,
            }
        ]


class TestIDEScan:
    def test_ide_excluded_by_default(self, engine, project, ide_home):
        report = engine.scan(ScanConfig(root=project))
        assert not any(f.is_ide for f in report.findings)

    def test_ide_included(self, engine, project, ide_home):
        report = engine.scan(ScanConfig(root=project, include_ide=True))
        ide = [f for f in report.findings if f.is_ide]
        # .config/Code is below the 1 MB threshold
        assert [f.path for f in ide] == [ide_home / ".vscode"]
        assert ide[0].category is Category.IDE
        assert ide[0].size_bytes == 8 * MB

    def test_ide_bypasses_category_filter(self, engine, project, ide_home):
        report = engine.scan(ScanConfig(root=project, include_ide=True, profile="safe", min_size_mb=0))
        names = sorted(f.matched_name for f in report.findings if f.is_ide)
        assert names == [".vscode", "Code"]

    def test_no_home(self, engine, monkeypatch):
        monkeypatch.delenv("HOME", raising=False)
        monkeypatch.delenv("USERPROFILE", raising=False)
        assert engine.scan_ide(FindingFilter()) == []

    def test_files_are_not_ide_caches(self, engine, fake_home, make_file):
        make_file(fake_home / ".cursor", 5 * MB)
        assert engine.scan_ide(FindingFilter(), home=fake_home) == []


class TestClean:
    def test_dry_run_leaves_tree_untouched(self, engine, project, snapshot):
        before = snapshot(project)
        report = engine.scan(ScanConfig(root=project))

        result = engine.clean(report.findings, CleanupMode.DRY_RUN)

        assert snapshot(project) == before
        assert result.deleted_count == 0
        assert len(result.would_delete) == 5

    def test_non_interactive_never_deletes_ide(self, engine, project, ide_home):
        report = engine.scan(ScanConfig(root=project, include_ide=True))

        result = engine.clean(report.findings, CleanupMode.NON_INTERACTIVE)

        assert result.deleted_count == 5
        assert result.deleted_bytes == 70 * MB
        assert (ide_home / ".vscode").is_dir()
        assert result.skipped_ide == [ide_home / ".vscode"]
        assert (project / "py" / "main.py").exists()
        assert engine.scan(ScanConfig(root=project)).findings == []

    def test_interactive_follows_report_order(self, engine, project):
        report = engine.scan(ScanConfig(root=project, sort="name"))
        asked = []
        engine.clean(report.findings, CleanupMode.INTERACTIVE, confirm=lambda f: asked.append(f.path) or False)
        assert asked == [f.path for f in report.findings]

"""Tests for ArtifactWriter (webforge.writer).

Covers:
- Writing nested paths with UTF-8 content
- Skipping existing files unless overwrite is set
- Dry runs touching nothing
- Executable bits
- Construction from Settings
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from webforge.config import Settings
from webforge.engine.artifacts import Artifact, ArtifactSet
from webforge.writer import ArtifactWriter


@pytest.fixture
def artifact_set() -> ArtifactSet:
    """Two nested files and one executable script."""
    return ArtifactSet(
        artifacts=[
            Artifact(path="src/lib/a.ts", content="export const a = \"é\";\n"),
            Artifact(path="app/(dashboard)/layout.tsx", content="export default 1;\n"),
            Artifact(path="scripts/setup.sh", content="#!/bin/sh\necho ok\n", executable=True),
        ]
    )


class TestArtifactWriter:
    @pytest.mark.unit
    def test_writes_every_artifact(self, tmp_path: Path, artifact_set: ArtifactSet):
        report = ArtifactWriter(tmp_path).write(artifact_set)
        assert report.written == artifact_set.paths
        assert report.skipped == []
        assert report.total == 3
        assert (tmp_path / "src" / "lib" / "a.ts").read_text(encoding="utf-8") == "export const a = \"é\";\n"
        assert (tmp_path / "app" / "(dashboard)" / "layout.tsx").exists()

    @pytest.mark.unit
    def test_existing_files_are_skipped(self, tmp_path: Path, artifact_set: ArtifactSet):
        target = tmp_path / "src" / "lib" / "a.ts"
        target.parent.mkdir(parents=True)
        target.write_text("keep", encoding="utf-8")
        report = ArtifactWriter(tmp_path).write(artifact_set)
        assert report.skipped == ["src/lib/a.ts"]
        assert target.read_text(encoding="utf-8") == "keep"

    @pytest.mark.unit
    def test_overwrite_replaces_files(self, tmp_path: Path, artifact_set: ArtifactSet):
        target = tmp_path / "src" / "lib" / "a.ts"
        target.parent.mkdir(parents=True)
        target.write_text("old", encoding="utf-8")
        report = ArtifactWriter(tmp_path, overwrite=True).write(artifact_set)
        assert report.skipped == []
        assert target.read_text(encoding="utf-8").startswith("export const a")

    @pytest.mark.unit
    def test_dry_run_writes_nothing(self, tmp_path: Path, artifact_set: ArtifactSet):
        out = tmp_path / "out"
        report = ArtifactWriter(out, dry_run=True).write(artifact_set)
        assert report.dry_run is True
        assert report.written == artifact_set.paths
        assert not out.exists()

    @pytest.mark.unit
    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_executable_bit(self, tmp_path: Path, artifact_set: ArtifactSet):
        ArtifactWriter(tmp_path).write(artifact_set)
        assert os.access(tmp_path / "scripts" / "setup.sh", os.X_OK)
        assert not os.access(tmp_path / "src" / "lib" / "a.ts", os.X_OK)

    @pytest.mark.unit
    def test_target_path(self, tmp_path: Path):
        writer = ArtifactWriter(tmp_path)
        assert writer.target(Artifact(path="app/api/x/[id]/route.ts", content="")) == (
            tmp_path / "app" / "api" / "x" / "[id]" / "route.ts"
        )

    @pytest.mark.unit
    def test_from_settings(self, tmp_path: Path):
        writer = ArtifactWriter.from_settings(Settings(output_dir=tmp_path, overwrite=True, dry_run=True))
        assert writer.output_dir == tmp_path
        assert writer.overwrite is True
        assert writer.dry_run is True

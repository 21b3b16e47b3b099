"""Write an :class:`ArtifactSet` to disk."""

from __future__ import annotations

import stat
from dataclasses import dataclass, field
from pathlib import Path

from webforge.config import Settings
from webforge.engine.artifacts import Artifact, ArtifactSet
from webforge.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class WriteReport:
    """Relative paths written and skipped by one :meth:`ArtifactWriter.write` call."""

    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def total(self) -> int:
        return len(self.written) + len(self.skipped)


class ArtifactWriter:
    """Writes artifacts below an output directory.

    Existing files are left alone unless ``overwrite`` is set.  In dry-run
    mode nothing touches the filesystem; the report lists what would have
    been written.
    """

    def __init__(self, output_dir: str | Path, overwrite: bool = False, dry_run: bool = False) -> None:
        self.output_dir = Path(output_dir)
        self.overwrite = overwrite
        self.dry_run = dry_run

    @classmethod
    def from_settings(cls, settings: Settings) -> "ArtifactWriter":
        return cls(settings.output_dir, overwrite=settings.overwrite, dry_run=settings.dry_run)

    def target(self, artifact: Artifact) -> Path:
        return self.output_dir.joinpath(*artifact.path.split("/"))

    def write(self, artifact_set: ArtifactSet) -> WriteReport:
        report = WriteReport(dry_run=self.dry_run)
        for artifact in artifact_set.artifacts:
            path = self.target(artifact)
            if path.exists() and not self.overwrite:
                logger.debug("Skipping existing file %s", path)
                report.skipped.append(artifact.path)
                continue
            if not self.dry_run:
                self._write_one(artifact, path)
            report.written.append(artifact.path)

        verb = "Would write" if self.dry_run else "Wrote"
        logger.info(
            "%s %d file(s) to %s (%d skipped)",
            verb, len(report.written), self.output_dir, len(report.skipped),
        )
        return report

    def _write_one(self, artifact: Artifact, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(artifact.content, encoding="utf-8")
        if artifact.executable:
            mode = path.stat().st_mode
            path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        logger.debug("Wrote %s", path)

"""Import orchestration entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ImportStatus(Enum):
    """Result of handling one workbook path."""

    IMPORTED = "imported"
    IGNORED = "ignored"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ImportOutcome:
    """Output contract for one workbook import."""

    workbook_path: Path
    status: ImportStatus
    asset_path: Path | None = None
    sheet_count: int = 0
    error: Exception | None = None


@dataclass(frozen=True)
class BatchResult:
    """Outcomes of one import batch, in delivered order."""

    outcomes: tuple[ImportOutcome, ...]

    @property
    def imported(self) -> tuple[ImportOutcome, ...]:
        return self._with_status(ImportStatus.IMPORTED)

    @property
    def skipped(self) -> tuple[ImportOutcome, ...]:
        return self._with_status(ImportStatus.SKIPPED)

    @property
    def failed(self) -> tuple[ImportOutcome, ...]:
        return self._with_status(ImportStatus.FAILED)

    def _with_status(self, status: ImportStatus) -> tuple[ImportOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.status is status)

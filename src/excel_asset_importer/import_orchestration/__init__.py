"""Import orchestration exports."""

from .import_contracts import BatchResult, ImportOutcome, ImportStatus
from .workbook_import import (
    TEMPORARY_FILE_PREFIX,
    import_batch,
    import_workbook,
    is_workbook_path,
    resolve_asset_path,
)

__all__ = [
    "BatchResult",
    "ImportOutcome",
    "ImportStatus",
    "TEMPORARY_FILE_PREFIX",
    "import_batch",
    "import_workbook",
    "is_workbook_path",
    "resolve_asset_path",
]

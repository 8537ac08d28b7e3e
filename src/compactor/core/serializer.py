"""JSON rendering of folder reports."""

from __future__ import annotations

import json
import os
from typing import Any

from compactor.models.file_record import FileRecord
from compactor.models.folder_report import FolderReport


def record_to_dict(record: FileRecord) -> dict[str, Any]:
    return {
        "path": os.fspath(record.path),
        "logical_size": record.logical_size,
        "physical_size": record.physical_size,
    }


def report_to_dict(report: FolderReport) -> dict[str, Any]:
    """Convert a report to plain JSON-ready data, keeping field and bucket order."""
    return {
        "path": os.fspath(report.path),
        "logical_size": report.logical_size,
        "physical_size": report.physical_size,
        "compressible": [record_to_dict(r) for r in report.compressible],
        "compressed": [record_to_dict(r) for r in report.compressed],
        "skipped": [record_to_dict(r) for r in report.skipped],
    }


def to_json(report: FolderReport, indent: int | None = None) -> str:
    """Serialize ``report`` to JSON text.

    Compact by default. Encoding errors are not caught: a report that
    cannot be serialized is a bug, not a user error.
    """
    return json.dumps(report_to_dict(report), indent=indent)

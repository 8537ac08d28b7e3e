"""Compactor data models."""

from compactor.models.file_record import FileRecord
from compactor.models.folder_report import FolderReport

__all__ = [
    "FileRecord",
    "FolderReport",
]

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from epr.exceptions import UploadNotFoundError
from epr.summary_logs.models import SummaryLogFile


class UploadStore(Protocol):
    def read(self, file: SummaryLogFile) -> bytes:
        ...


class LocalUploadStore:
    """
    Reads uploaded summary log files from a local directory.
    `file.key` is the path of the upload relative to the root.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def read(self, file: SummaryLogFile) -> bytes:
        path = (self.root / file.key).resolve()
        if self.root.resolve() not in path.parents:
            raise UploadNotFoundError(f"Upload key escapes upload directory: {file.key}")
        if not path.is_file():
            raise UploadNotFoundError(f"Upload not found: fileId={file.id}, key={file.key}")
        return path.read_bytes()

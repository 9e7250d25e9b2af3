import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, Protocol
import logging

from app.core.exceptions import ExportFailure

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^\w\-]+", re.UNICODE)

def archive_filename(project_name: str, project_id: int) -> str:
    # Archive_<name>_<id>.json, with path separators and spaces squashed
    safe_name = _UNSAFE_CHARS.sub("_", project_name or "").strip("_") or "project"
    return f"Archive_{safe_name}_{project_id}.json"

class ExportSink(Protocol):
    def deliver(self, payload: Dict[str, Any], filename: str) -> str:
        ...

class FileExportSink:
    """
    Writes export artifacts as pretty-printed JSON files under one directory.
    A file either appears complete or not at all (temp file + rename).
    """

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def deliver(self, payload: Dict[str, Any], filename: str) -> str:
        try:
            body = json.dumps(payload, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            logger.error(f"Archive payload for {filename} is not JSON serializable: {e}")
            raise ExportFailure(f"Could not serialize archive {filename}.")

        target = self.directory / filename
        tmp_path = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=".export-", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(body)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, target)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            logger.error(f"Failed to write archive {target}: {e}")
            raise ExportFailure(f"Could not write archive {filename}: {e.strerror or e}")

        logger.info(f"Wrote archive {target} ({len(body)} bytes)")
        return str(target)

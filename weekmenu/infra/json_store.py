"""JSON file persistence shared by the repositories.

Reads treat a missing file as an empty store. Writes go to a temp file in the same
directory and are moved into place, so readers never see a half-written file.
Any I/O or decode failure is logged and raised as StoreError carrying the underlying message.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import RLock

from weekmenu.domain.errors import StoreError

logger = logging.getLogger(__name__)


class JsonFileStore:
    def __init__(self, path):
        self.path = Path(path)
        # Guards read-modify-write cycles of the owning repository
        self.lock = RLock()

    def read(self, default):
        if not self.path.exists():
            return default
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in %s: %s", self.path, e)
            raise StoreError(f"Invalid JSON in {self.path.name}: {e}") from e
        except OSError as e:
            logger.error("Error reading %s: %s", self.path, e)
            raise StoreError(str(e)) from e
        return default if data is None else data

    def write(self, data) -> None:
        try:
            os.makedirs(self.path.parent, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.stem}_", suffix=".json"
            )
        except OSError as e:
            logger.error("Error preparing write of %s: %s", self.path, e)
            raise StoreError(str(e)) from e
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                json.dump(data, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error writing %s: %s", self.path, e)
            raise StoreError(str(e)) from e
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)


__all__ = ['JsonFileStore']

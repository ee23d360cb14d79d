"""
JSON file persistence for the catalog.

The whole catalog lives in one document shaped like
``{"products": [{"id": ..., "name": ..., "image_url": ..., "price": ...}]}``.
Every save rewrites that document in full.  There is no locking here:
callers that mutate must serialize load -> modify -> save themselves
(see ``ProductService``).
"""

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

from pydantic import ValidationError as SchemaError

from .errors import StorageReadError, StorageWriteError
from .models import Catalog

logger = logging.getLogger(__name__)

NEW_FILE_MODE = 0o644


class ProductStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def ensure_exists(self) -> bool:
        """Create an empty catalog document if none exists yet.

        Meant to run once at startup.  Returns True when a new document
        was written.
        """
        if self.path.exists():
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageWriteError(f"cannot create {self.path.parent}: {e}") from e
        self.save(Catalog())
        logger.info("Created empty catalog at %s", self.path)
        return True

    def load(self) -> Catalog:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Failed to read catalog %s: %s", self.path, e)
            raise StorageReadError("Failed to read products") from e

        try:
            return Catalog.model_validate(data)
        except SchemaError as e:
            logger.error("Catalog %s is malformed: %s", self.path, e)
            raise StorageReadError("Failed to read products") from e

    def save(self, catalog: Catalog) -> None:
        tmp_name = None
        try:
            payload = json.dumps(catalog.model_dump(), indent=2, ensure_ascii=False).encode("utf-8")
            # write next to the target so os.replace stays on one filesystem
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except (OSError, ValueError) as e:
            logger.error("Failed to write catalog %s: %s", self.path, e)
            raise StorageWriteError("Failed to save products") from e
        finally:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def _file_mode(self) -> int:
        # mkstemp creates 0600; keep whatever the catalog had before
        try:
            return stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            return NEW_FILE_MODE

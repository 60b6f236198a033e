"""Filesystem implementation of BlobStore.

Blobs are plain files under a root directory, so ``user/site/index.html``
keys map to the same layout a static file server expects.
"""

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalBlobStore:
    def __init__(self, root: Path | str):
        self.root = Path(root).resolve()

    def _path_for(self, key: str) -> Path | None:
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root) or path == self.root:
            logger.warning("Rejected blob key outside store root", extra={"key": key})
            return None
        return path

    def write(self, key: str, content: str) -> bool:
        path = self._path_for(key)
        if path is None:
            return False

        tmp_path = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f'.{path.name}-')
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(content)
            os.replace(tmp_path, path)
            logger.debug("Wrote blob", extra={"key": key, "bytes": len(content)})
            return True
        except OSError as e:
            logger.error("Failed to write blob", extra={"key": key, "error": str(e)})
            if tmp_path:
                Path(tmp_path).unlink(missing_ok=True)
            return False

    def read(self, key: str) -> str | None:
        path = self._path_for(key)
        if path is None:
            return None

        try:
            return path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Failed to read blob", extra={"key": key, "error": str(e)})
            return None

    def delete(self, key: str) -> bool:
        path = self._path_for(key)
        if path is None:
            return False

        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error("Failed to delete blob", extra={"key": key, "error": str(e)})
            return False

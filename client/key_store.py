"""
Durable storage for the accepted license key.

Only the normalized key is stored; everything derived from it is recomputed
on each run. Writes go to a temporary file that replaces the store in one
step, so a crash never leaves a half-written file behind.
"""

import json
import logging
import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

logger = logging.getLogger(__name__)


@dataclass
class StoredLicense:
    """Mutable view of the store contents inside ``KeyStore.open_session``."""

    license_key: Optional[str] = None


class KeyStore:
    """JSON file holding ``{"licenseKey": ...}``."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        """Return the stored key, or None if the file is missing or unreadable."""
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable license store %s: %s", self.path, e)
            return None

        key = data.get("licenseKey") if isinstance(data, dict) else None
        return key if isinstance(key, str) and key else None

    def save(self, license_key: Optional[str]) -> None:
        """Replace the stored key; None clears it."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".license-", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump({"licenseKey": license_key}, fh)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    @contextmanager
    def open_session(self) -> Iterator[StoredLicense]:
        """
        Load the store, yield it for modification, and write it back on exit.

        Nothing is written if the block raises.
        """
        stored = StoredLicense(license_key=self.load())
        original = stored.license_key
        yield stored
        if stored.license_key != original:
            self.save(stored.license_key)

"""Per-user directories on disk."""

import logging
import shutil
from pathlib import Path

from accounts.config import get_settings

logger = logging.getLogger(__name__)


class UserStorage:
    """Directory tree keyed by case-folded user name."""

    def __init__(self, root: str | Path | None = None):
        self.root = Path(root if root is not None else get_settings().repo_root_path)

    def user_path(self, name: str) -> Path:
        """Absolute path of a user's directory."""
        return (self.root / name.lower()).absolute()

    def create(self, name: str) -> Path:
        path = self.user_path(name)
        path.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Created user directory {path}")
        return path

    def rename(self, old_name: str, new_name: str) -> Path:
        old_path = self.user_path(old_name)
        new_path = self.user_path(new_name)
        if old_path == new_path:
            return new_path
        old_path.rename(new_path)
        logger.info(f"Renamed user directory {old_path} -> {new_path}")
        return new_path

    def remove(self, name: str) -> None:
        path = self.user_path(name)
        if path.exists():
            shutil.rmtree(path)
            logger.info(f"Removed user directory {path}")

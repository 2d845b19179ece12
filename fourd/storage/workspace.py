"""
Workspace layout for the generated site.

Provides:
- The fixed directory shape (root, icons/, data/, screenshots/)
- Idempotent creation of that shape
- Path helpers for the files written into it
"""

from pathlib import Path
from typing import List, Sequence

from fourd.errors import FilesystemError
from fourd.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SUBDIRS = ['icons', 'data', 'screenshots']


class WorkspaceLayout:
    """Directory layout of one generated project."""

    def __init__(self, root: Path, subdirs: Sequence[str] = DEFAULT_SUBDIRS):
        """
        Args:
            root: Project directory (its name is the project name)
            subdirs: Subfolders created under the root
        """
        self.root = Path(root)
        self.subdirs: List[str] = list(subdirs)

    @property
    def name(self) -> str:
        return self.root.name

    @property
    def data_dir(self) -> Path:
        return self.root / 'data'

    def path(self, relative: str) -> Path:
        """Resolve a workspace-relative path such as ``icons/icon-72.png``."""
        return self.root / relative

    def ensure(self) -> Path:
        """
        Create the root and every subfolder if absent.

        Existing directories are left alone, so running this twice is safe.

        Returns:
            The workspace root

        Raises:
            FilesystemError: If a directory cannot be created
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            for sub in self.subdirs:
                (self.root / sub).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Cannot create workspace: {e.strerror or e}", str(self.root)) from e

        logger.info(f"Workspace ready at {self.root}")
        return self.root

    def write_text(self, relative: str, content: str) -> Path:
        """Write (or overwrite) a UTF-8 text file inside the workspace."""
        target = self.path(relative)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, 'w', encoding='utf-8', newline='') as f:
                f.write(content)
        except OSError as e:
            raise FilesystemError(f"Cannot write file: {e.strerror or e}", str(target)) from e
        return target

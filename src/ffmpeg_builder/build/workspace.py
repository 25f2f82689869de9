"""Workspace management for one pipeline run.

Workspace Structure:
    {out_dir}/ffmpeg/       # root; its existence marks a previous run
    ├── source/             # fetched sources (removed on success)
    ├── build/              # shared prefix for components (removed on success)
    │   ├── include/
    │   └── lib/pkgconfig/
    └── install/            # final FFmpeg install (kept)
        └── lib/pkgconfig/  # discovery path reported to the host build
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


class WorkspaceError(Exception):
    """Raised when workspace directories cannot be created or removed."""

    pass


class WorkspaceExistsError(WorkspaceError):
    """Raised when the workspace root is left over from a previous run."""

    pass


@dataclass(frozen=True)
class Workspace:
    """Directory layout of one pipeline run."""

    root: Path

    @property
    def source(self) -> Path:
        return self.root / "source"

    @property
    def build(self) -> Path:
        return self.root / "build"

    @property
    def install(self) -> Path:
        return self.root / "install"

    @property
    def pkg_config_dir(self) -> Path:
        """Search path used to find components built earlier in the run."""
        return self.build / "lib" / "pkgconfig"

    @property
    def install_pkg_config_dir(self) -> Path:
        """Discovery path of the installed FFmpeg libraries."""
        return self.install / "lib" / "pkgconfig"


class WorkspaceManager:
    """Creates and cleans up the source/build/install stages."""

    @staticmethod
    def prepare(root: Path) -> Workspace:
        """Create a fresh workspace under root.

        Args:
            root: Workspace root directory

        Returns:
            The created Workspace

        Raises:
            WorkspaceExistsError: If root already exists
            WorkspaceError: If any directory cannot be created
        """
        workspace = Workspace(Path(root).resolve())

        if workspace.root.exists():
            raise WorkspaceExistsError(f"Workspace already exists: {workspace.root}")

        try:
            workspace.root.mkdir(parents=True)
            for stage_dir in (workspace.source, workspace.build, workspace.install):
                stage_dir.mkdir()
        except OSError as e:
            raise WorkspaceError(f"Failed to create workspace {workspace.root}: {e}") from e

        logger.debug(f"Created workspace at {workspace.root}")
        return workspace

    @staticmethod
    def finalize(workspace: Workspace) -> None:
        """Remove the source and build stages, keeping install.

        Raises:
            WorkspaceError: If a stage directory cannot be removed
        """
        for stage_dir in (workspace.source, workspace.build):
            try:
                shutil.rmtree(stage_dir)
            except OSError as e:
                raise WorkspaceError(f"Failed to remove {stage_dir}: {e}") from e

        logger.debug(f"Removed transient stages under {workspace.root}")

    @staticmethod
    def remove(root: Path) -> None:
        """Delete a workspace root left by an earlier run.

        Raises:
            WorkspaceError: If root cannot be removed
        """
        root = Path(root)
        if not root.exists():
            return

        logger.info(f"Removing existing workspace {root}")
        try:
            shutil.rmtree(root)
        except OSError as e:
            raise WorkspaceError(f"Failed to remove {root}: {e}") from e

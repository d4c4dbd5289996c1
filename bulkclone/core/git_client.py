"""Small helpers for running Git commands and performing shallow clones."""

from __future__ import annotations

import os
import subprocess

from .constants import CLONE_DEPTH
from .types import CloneResult


class GitClient:
    def __init__(self, git: str = "git") -> None:
        self.git = git

    # ---------- process helpers ----------
    @staticmethod
    def _run(cmd: list[str], cwd: str | None = None) -> tuple[bool, str | None]:
        # stderr joins stdout so git's progress lands on our stdout
        try:
            subprocess.check_call(cmd, cwd=cwd, stderr=subprocess.STDOUT)
            return True, None
        except subprocess.CalledProcessError as e:
            return False, f"{e}"
        except OSError as e:
            return False, f"{cmd[0]}: {e}"

    # ---------- clone ----------
    def clone_shallow(self, name: str, url: str, root: str) -> CloneResult:
        """Clone url into root/name at depth 1 unless root/name already exists.

        Anything already at the destination counts as a finished clone; it is
        not checked to be a valid checkout of url.
        """
        dest = os.path.join(root, name)
        if os.path.lexists(dest):
            print(f"{dest} has already been cloned, skipping")
            return CloneResult(ok=True, skipped=True)

        cmd = [self.git, "clone", "--depth", str(CLONE_DEPTH), url]
        print(f"Cloning {name} into {root}...")
        ok, err = self._run(cmd, cwd=root)
        return CloneResult(ok=ok, error=err)

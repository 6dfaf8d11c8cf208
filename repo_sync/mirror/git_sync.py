"""
Git Sync — Mirror-clone a source repo and push it to the target.

Branches and tags are pushed with explicit refspecs rather than
``git push --mirror`` so hidden refs (refs/pull/*) are left behind.
Every failure is raised as TransferError with credentials redacted.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from .errors import TransferError
from .redaction import sanitize
from .urls import authenticated_url

logger = logging.getLogger(__name__)

BRANCH_REFSPEC = "refs/heads/*:refs/heads/*"
TAG_REFSPEC = "refs/tags/*:refs/tags/*"


@contextmanager
def scratch_directory(prefix: str = "repo-sync-") -> Iterator[Path]:
    """Create a fresh temp directory and always remove it afterwards."""
    path = Path(tempfile.mkdtemp(prefix=prefix))
    logger.debug(f"[mirror-git] Using temp directory: {path}")
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        logger.debug(f"[mirror-git] Cleaned up temp directory: {path}")


def _git_env() -> dict:
    env = dict(os.environ)
    # Fail on bad credentials instead of waiting for a prompt.
    env["GIT_TERMINAL_PROMPT"] = "0"
    return env


def _git(args: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """Run a git command with captured output."""
    return subprocess.run(
        ["git", *args],
        cwd=str(cwd) if cwd else None,
        capture_output=True,
        text=True,
        env=_git_env(),
    )


def _run_or_raise(args: List[str], failure: str, cwd: Optional[Path] = None) -> None:
    try:
        result = _git(args, cwd=cwd)
    except OSError as e:
        raise TransferError(f"{failure}: {sanitize(e)}") from None

    if result.returncode != 0:
        output = result.stderr.strip() or result.stdout.strip() or f"git exited with {result.returncode}"
        error = sanitize(output)
        logger.error(f"[mirror-git] {failure}: {error}")
        raise TransferError(f"{failure}: {error}")


def mirror_transfer(
    clone_url: str,
    push_url: str,
    source_token: str,
    target_token: str,
    work_dir: Path,
    force_push: bool = False,
) -> None:
    """
    Mirror ``clone_url`` into ``work_dir`` and push branches then tags.

    Tags are only pushed once branches succeeded. A tag push failure
    leaves the branches already on the target in place.
    """
    repo_name = clone_url.rstrip("/").rsplit("/", 1)[-1]
    if not repo_name.endswith(".git"):
        repo_name = f"{repo_name}.git"
    repo_dir = work_dir / repo_name

    logger.info(f"[mirror-git] Cloning {clone_url}")
    _run_or_raise(
        ["clone", "--mirror", authenticated_url(clone_url, source_token), str(repo_dir)],
        f"Failed to clone {clone_url}",
    )

    auth_push_url = authenticated_url(push_url, target_token)
    push_cmd = ["push", "--force"] if force_push else ["push"]

    logger.info(f"[mirror-git] Pushing branches and tags to {push_url}")
    _run_or_raise([*push_cmd, auth_push_url, BRANCH_REFSPEC], "Failed to push branches", cwd=repo_dir)
    logger.info("[mirror-git] Branches pushed")

    _run_or_raise([*push_cmd, auth_push_url, TAG_REFSPEC], "Failed to push tags", cwd=repo_dir)
    logger.info("[mirror-git] Tags pushed")

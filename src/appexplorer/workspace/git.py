import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

log = logging.getLogger(__name__)

UNKNOWN_REVISION = ""
UNKNOWN_REMOTE = "https://example.com/unknown_remote"

GITHUB_REMOTE = re.compile(
    r"(?:git@|https://)github\.com[:/]([^/\s]+)/([^/\s]+?)(?:\.git)?(?=\s|$)"
)


@dataclass(frozen=True)
class RepoInfo:
    revision: str = UNKNOWN_REVISION
    remote_origin: str = UNKNOWN_REMOTE

    def permalink(self, rel_path: str, line: int) -> Optional[str]:
        """
        Builds a GitHub blob URL for a line, or None for non-GitHub remotes
        and unknown revisions.
        """
        match = GITHUB_REMOTE.search(self.remote_origin)
        if not match or not self.revision:
            return None
        owner, repo = match.group(1), match.group(2)
        return f"https://github.com/{owner}/{repo}/blob/{self.revision}/{rel_path}#L{line}"


def _run_git(args: List[str], cwd: Path) -> Optional[str]:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        log.warning(f"Could not run git {' '.join(args)}: {e}")
        return None
    if result.returncode != 0:
        log.debug(f"git {' '.join(args)} exited with {result.returncode}")
        return None
    return result.stdout


def get_commit_hash(cwd: Path) -> str:
    stdout = _run_git(["rev-parse", "--short", "HEAD"], cwd)
    if not stdout or not stdout.strip():
        log.warning(f"No git revision found for {cwd}")
        return UNKNOWN_REVISION
    return stdout.strip()


def get_remote_url(cwd: Path) -> str:
    stdout = _run_git(["remote", "-v"], cwd)
    if stdout:
        match = GITHUB_REMOTE.search(stdout)
        if match:
            return match.group(0)
        # Any other remote is still better than the placeholder
        first = stdout.split()
        if len(first) >= 2:
            return first[1]
    log.warning(f"No git remote found for {cwd}")
    return UNKNOWN_REMOTE


def read_repo_info(file_path: Path) -> RepoInfo:
    """
    Best-effort repository metadata for the repository holding `file_path`.
    Never raises; missing data degrades to placeholders.
    """
    cwd = file_path if file_path.is_dir() else file_path.parent
    if not cwd.is_dir():
        return RepoInfo()
    return RepoInfo(revision=get_commit_hash(cwd), remote_origin=get_remote_url(cwd))

"""Centralized path helpers for the match record and the report.

Environment-first, with robust fallbacks that still work when installed
as a package or executed from arbitrary CWDs.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Best-effort repository root.

    Order: env var TTT_REPO_ROOT -> nearest parent of CWD containing .git -> CWD.
    """
    env = os.getenv("TTT_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path.cwd().resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def state_file() -> Path:
    p = os.getenv("TTT_STATE_FILE")
    return Path(p) if p else repo_root() / "resources" / "current_game_state.json"


def report_file() -> Path:
    p = os.getenv("TTT_REPORT_FILE")
    return Path(p) if p else repo_root() / "README.md"


def get_git_commit() -> str | None:
    """Return the current git commit hash if available.

    Works when running inside a git repo; returns None otherwise.
    """
    root = repo_root()
    try:
        out = subprocess.check_output(
            ["git", "-C", str(root), "rev-parse", "HEAD"],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
        return out.strip()
    except (OSError, subprocess.SubprocessError):
        # Try reading .git/HEAD and ref file
        head = root / ".git" / "HEAD"
        try:
            txt = head.read_text().strip()
            if txt.startswith("ref:"):
                ref_path = txt.split()[1]
                ref_file = root / ".git" / ref_path
                if ref_file.exists():
                    return ref_file.read_text().strip()
                return None
            return txt if txt else None
        except OSError:
            return None

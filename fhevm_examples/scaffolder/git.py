"""Best-effort git repository initialisation for scaffolded projects."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from fhevm_examples.utils import run_command


class GitInitResult(BaseModel):
    """Outcome of :func:`init_repository`.  Never raised, always returned."""

    initialized: bool = Field(..., description="Whether a new repository was created")
    message: str = Field(default="", description="Success note or reason for skipping")


async def _run_git(*args: str, cwd: Path, timeout: float) -> tuple[int, str, str]:
    """Run ``git <args>``; a missing git binary is reported as exit code 127."""
    try:
        return await run_command(["git", *args], cwd=cwd, timeout=timeout)
    except FileNotFoundError:
        return 127, "", "git executable not found"
    except OSError as exc:
        return 126, "", f"git could not be started: {exc}"


async def init_repository(path: str | Path, timeout: float = 30.0) -> GitInitResult:
    """Initialise a git repository in *path*.

    Skipped when *path* already sits inside a git work tree.  Any failure
    (git missing, non-zero exit, timeout) is captured in the result.
    """
    repo_path = Path(path)

    code, stdout, _ = await _run_git(
        "rev-parse", "--is-inside-work-tree", cwd=repo_path, timeout=timeout
    )
    if code == 127:
        return GitInitResult(initialized=False, message="git executable not found")
    if code == 0 and stdout == "true":
        return GitInitResult(
            initialized=False,
            message=f"{repo_path} is already inside a git repository",
        )

    code, _, stderr = await _run_git("init", cwd=repo_path, timeout=timeout)
    if code != 0:
        reason = stderr or f"git init exited with code {code}"
        return GitInitResult(initialized=False, message=f"Could not initialize git repository: {reason}")

    return GitInitResult(initialized=True, message="Git repository initialized")

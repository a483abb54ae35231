import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

from .errors import BareRepositoryError, NotARepositoryError
from .util import file_util, log

CONFIG_NAME_SHARED = ".git-bump.lua"
CONFIG_NAME_PRIVATE = "git-bump.lua"
CONFIG_NAME_USER = ".git-bump.lua"

GLOBAL_USER = "global-user"
REPO_PRIVATE = "repo-private"
REPO_SHARED = "repo-shared"


class Repository(NamedTuple):
    root: Path
    git_dir: Path


class CandidatePath(NamedTuple):
    label: str
    path: Path


def _rev_parse(flag: str, cwd=None) -> str:
    return (
        subprocess.check_output(
            ["git", "rev-parse", flag],
            stderr=subprocess.DEVNULL,
            cwd=cwd,
        )
        .decode()
        .strip()
    )


def discover_repository(cwd=None) -> Repository:
    try:
        if _rev_parse("--is-bare-repository", cwd=cwd) == "true":
            raise BareRepositoryError()
        root = _rev_parse("--show-toplevel", cwd=cwd)
        git_dir = _rev_parse("--absolute-git-dir", cwd=cwd)
    except (subprocess.CalledProcessError, FileNotFoundError):
        raise NotARepositoryError()
    return Repository(Path(root), Path(git_dir))


def candidate_paths(repository: Repository, home: Optional[Path] = None) -> list[CandidatePath]:
    """The three config locations, lowest priority first."""
    home = Path.home() if home is None else Path(home)
    return [
        CandidatePath(GLOBAL_USER, home / CONFIG_NAME_USER),
        CandidatePath(REPO_PRIVATE, repository.git_dir / CONFIG_NAME_PRIVATE),
        CandidatePath(REPO_SHARED, repository.root / CONFIG_NAME_SHARED),
    ]


def resolve(candidates: list[CandidatePath]) -> list[CandidatePath]:
    existing = []
    for candidate in candidates:
        if file_util.is_readable_file(candidate.path):
            log.debug(f"using {candidate.label} config {log.escape(candidate.path)}")
            existing.append(candidate)
        else:
            log.debug(f"no {candidate.label} config at {log.escape(candidate.path)}")
    return existing

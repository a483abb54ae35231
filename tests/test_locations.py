import os
import shutil
import subprocess

import pytest

from git_bump import locations
from git_bump.errors import BareRepositoryError, NotARepositoryError
from git_bump.locations import CandidatePath

needs_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def test_candidate_paths_are_in_priority_order(repo, tmp_path):
    candidates = locations.candidate_paths(repo, home=tmp_path / "home")

    assert candidates == [
        CandidatePath(locations.GLOBAL_USER, tmp_path / "home" / ".git-bump.lua"),
        CandidatePath(locations.REPO_PRIVATE, repo.git_dir / "git-bump.lua"),
        CandidatePath(locations.REPO_SHARED, repo.root / ".git-bump.lua"),
    ]


def test_candidate_paths_default_to_users_home(repo, home):
    assert locations.candidate_paths(repo)[0].path == home / ".git-bump.lua"


def test_resolve_keeps_existing_candidates_in_order(repo, home):
    (repo.root / ".git-bump.lua").write_text("return {}")
    (home / ".git-bump.lua").write_text("return {}")

    resolved = locations.resolve(locations.candidate_paths(repo))

    assert [c.label for c in resolved] == [locations.GLOBAL_USER, locations.REPO_SHARED]


def test_resolve_with_nothing_present_is_empty(repo, home):
    assert locations.resolve(locations.candidate_paths(repo)) == []


def test_resolve_ignores_directories(repo, home):
    (repo.git_dir / "git-bump.lua").mkdir()

    assert locations.resolve(locations.candidate_paths(repo)) == []


@needs_git
def test_discover_repository_finds_root_and_git_dir(tmp_path):
    subprocess.run(["git", "init", "-q", str(tmp_path)], check=True)
    (tmp_path / "sub").mkdir()

    repository = locations.discover_repository(cwd=tmp_path / "sub")

    assert repository.root.resolve() == tmp_path.resolve()
    assert repository.git_dir.resolve() == (tmp_path / ".git").resolve()


@needs_git
def test_discover_repository_outside_git_fails(tmp_path, monkeypatch):
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    with pytest.raises(NotARepositoryError, match="Not a Git repository"):
        locations.discover_repository(cwd=tmp_path)


@needs_git
def test_discover_repository_rejects_bare_repositories(tmp_path):
    bare = tmp_path / "bare.git"
    subprocess.run(["git", "init", "-q", "--bare", str(bare)], check=True)

    with pytest.raises(BareRepositoryError):
        locations.discover_repository(cwd=bare)


def test_discover_repository_without_git_binary(tmp_path, monkeypatch):
    monkeypatch.setenv("PATH", str(tmp_path))
    with pytest.raises(NotARepositoryError):
        locations.discover_repository(cwd=os.fspath(tmp_path))

"""Shared fixtures for tests that drive real git repositories."""

import tempfile
from pathlib import Path
from typing import List, Optional

import pytest
from git import Repo

from submodule_hook.config import HookConfig
from submodule_hook.hooks.prepare_commit_msg import run_hook


@pytest.fixture(autouse=True)
def isolated_git_home(monkeypatch):
    """Give every test its own HOME with a predictable git identity."""
    with tempfile.TemporaryDirectory() as home:
        (Path(home) / ".gitconfig").write_text(
            "[user]\n"
            "\tname = Test User\n"
            "\temail = test@example.com\n"
            "[protocol \"file\"]\n"
            "\tallow = always\n"
            "[init]\n"
            "\tdefaultBranch = master\n"
            "[commit]\n"
            "\tgpgsign = false\n"
        )
        monkeypatch.setenv("HOME", home)
        monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
        monkeypatch.delenv("GIT_CONFIG_GLOBAL", raising=False)
        for var in (
            "SUBMODULE_HOOK_HASH_LENGTH",
            "SUBMODULE_HOOK_MAX_COMMIT_SHOWN",
            "SUBMODULE_HOOK_LOG_LEVEL",
            "SUBMODULE_HOOK_LOG_FILE",
            "GIT_AUTHOR_DATE",
            "GIT_COMMITTER_DATE",
            "GIT_EDITOR",
        ):
            monkeypatch.delenv(var, raising=False)
        yield Path(home)


class Workspace:
    """A superproject plus two independent repositories to use as submodules."""

    def __init__(self, root: Path):
        self.root = root
        self.main_path = root / "main"
        self.main = create_repo(self.main_path)
        self.sub1_path = root / "sub1"
        self.sub2_path = root / "sub2"
        create_repo(self.sub1_path)
        create_repo(self.sub2_path)
        self.message_file = root / "COMMIT_EDITMSG"

    def add_submodule(self, source: Path, name: str) -> Repo:
        self.main.git.submodule("add", str(source), name)
        return Repo(self.main_path / name)

    def stage(self, *paths: str) -> None:
        self.main.git.add(*paths)

    def commit(self, message: str) -> None:
        self.main.git.commit("-m", message)

    def hook_commit(
        self, message: str = "", config: Optional[HookConfig] = None, amend: bool = False
    ) -> List[str]:
        """Run the hook the way ``git commit -m`` / ``--amend --no-edit`` would, then commit."""
        if amend:
            self.message_file.write_text(self.main.head.commit.message)
            run_hook(self.main_path, self.message_file, "commit", "HEAD", config or HookConfig())
            self.main.git.commit("--amend", "-F", str(self.message_file))
        else:
            self.message_file.write_text(message + "\n")
            run_hook(self.main_path, self.message_file, "message", None, config or HookConfig())
            self.main.git.commit("-F", str(self.message_file))
        return self.last_message()

    def last_message(self) -> List[str]:
        return self.main.git.log("--format=%B", "-n", "1", "HEAD").strip().splitlines()


def create_repo(path: Path) -> Repo:
    path.mkdir()
    repo = Repo.init(path)
    repo.git.commit("--allow-empty", "-m", "Initial commit")
    return repo


def empty_commit(repo: Repo, message: str) -> str:
    repo.git.commit("--allow-empty", "-m", message)
    return repo.head.commit.hexsha


@pytest.fixture
def workspace():
    """Create a superproject and two candidate submodule repositories."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Workspace(Path(temp_dir))

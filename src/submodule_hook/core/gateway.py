"""GitPython-backed read-only queries against the outer repository and its submodules."""

import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from loguru import logger

from submodule_hook.errors import GatewayError
from submodule_hook.models import CommitLogEntry

GITMODULES = ".gitmodules"
GITLINK_MODE = "160000"


class GitGateway:
    """Version-control gateway for one outer repository.

    Snapshots are named by a commit-ish string; ``None`` means the staged
    index, i.e. the tree the commit under construction will record.
    """

    def __init__(self, project_root: Path):
        self.project_root = Path(project_root).resolve()
        self._repo: Optional[Repo] = None

    @property
    def repo(self) -> Repo:
        """Get the outer repository."""
        if self._repo is None:
            try:
                self._repo = Repo(self.project_root, search_parent_directories=True)
            except (InvalidGitRepositoryError, NoSuchPathError) as e:
                raise GatewayError(f"No git repository found at {self.project_root}") from e
        return self._repo

    @property
    def working_tree(self) -> Path:
        if self.repo.working_tree_dir is None:
            raise GatewayError(f"{self.project_root} is a bare repository")
        return Path(self.repo.working_tree_dir)

    def _git(self, command: str, *args: str) -> str:
        try:
            return getattr(self.repo.git, command)(*args)
        except GitCommandError as e:
            raise GatewayError(f"git {command.replace('_', '-')} failed: {e.stderr.strip()}") from e

    # === Comparison base ===

    def head_revision(self) -> Optional[str]:
        """Current HEAD commit, or None on an unborn branch."""
        if not self.repo.head.is_valid():
            return None
        return self.repo.head.commit.hexsha

    def head_author_timestamp(self) -> Optional[int]:
        if not self.repo.head.is_valid():
            return None
        return self.repo.head.commit.authored_date

    def resolve_revision(self, rev: str) -> Optional[str]:
        """Resolve ``rev`` to a commit id, or None if it does not name a commit."""
        try:
            return self.repo.git.rev_parse("--verify", "--quiet", f"{rev}^{{commit}}")
        except GitCommandError:
            return None

    def parent_revision(self, amend: bool) -> Optional[str]:
        """Commit whose pointers the new commit is compared against.

        For a normal commit this is HEAD. When amending, HEAD is the commit
        being replaced, so its first parent is used instead; the base never
        moves forward across repeated amends.
        """
        if not self.repo.head.is_valid():
            return None
        head = self.repo.head.commit
        if not amend:
            return head.hexsha
        return head.parents[0].hexsha if head.parents else None

    # === Submodule registration ===

    def declared_submodule_paths(self, rev: Optional[str]) -> List[str]:
        """Paths declared in ``.gitmodules`` at ``rev``, in declaration order.

        A missing, empty or unparsable ``.gitmodules`` yields no paths.
        """
        blob = f"{rev}:{GITMODULES}" if rev else f":{GITMODULES}"
        try:
            self.repo.git.cat_file("-e", blob)
        except GitCommandError:
            logger.debug(f"No {GITMODULES} at {rev[:8] if rev else 'index'}")
            return []

        try:
            output = self.repo.git.config(
                "--blob", blob, "-z", "--get-regexp", r"^submodule\..*\.path$"
            )
        except GitCommandError as e:
            # Exit status 1 means no matching keys; anything else is a parse error
            if e.status != 1:
                logger.warning(f"Ignoring unreadable {GITMODULES} ({blob}): {e.stderr.strip()}")
            return []

        paths: List[str] = []
        for record in output.split("\0"):
            if not record:
                continue
            _, _, path = record.partition("\n")
            path = path.strip().rstrip("/")
            if path and path not in paths:
                paths.append(path)
        return paths

    # === Gitlink pointers ===

    def gitlink_pointers(self, rev: Optional[str], paths: Sequence[str]) -> Dict[str, str]:
        """Map each of ``paths`` that is a gitlink at ``rev`` to its recorded commit id."""
        if not paths:
            return {}

        pointers: Dict[str, str] = {}
        if rev is None:
            output = self._git("ls_files", "--stage", "-z", "--", *paths)
            for record in output.split("\0"):
                if not record:
                    continue
                meta, _, path = record.partition("\t")
                mode, sha, _stage = meta.split()
                if mode == GITLINK_MODE:
                    pointers[path] = sha
        else:
            output = self._git("ls_tree", "-z", rev, "--", *paths)
            for record in output.split("\0"):
                if not record:
                    continue
                meta, _, path = record.partition("\t")
                mode, obj_type, sha = meta.split()
                if mode == GITLINK_MODE and obj_type == "commit":
                    pointers[path] = sha
        return pointers

    # === Submodule history ===

    def list_commits(self, path: str, old: str, new: str) -> List[CommitLogEntry]:
        """Commits reachable from ``new`` but not ``old`` in submodule ``path``, newest first."""
        submodule_dir = self.working_tree / path
        try:
            submodule = Repo(submodule_dir)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise GatewayError(f"Submodule {path} is not checked out at {submodule_dir}") from e

        try:
            entries = [
                CommitLogEntry(revision=commit.hexsha, subject=commit.summary)
                for commit in submodule.iter_commits(f"{old}..{new}")
            ]
        except GitCommandError as e:
            raise GatewayError(
                f"Cannot list commits {old[:8]}..{new[:8]} in {path}: {e.stderr.strip()}"
            ) from e
        finally:
            submodule.close()

        logger.debug(f"{path}: {len(entries)} commits in {old[:8]}..{new[:8]}")
        return entries

    # === Message helpers ===

    def parse_trailers(self, message: str) -> List[str]:
        """Trailer lines git finds in ``message`` (empty if there are none)."""
        with tempfile.TemporaryDirectory() as temp_dir:
            message_file = Path(temp_dir) / "MSG"
            message_file.write_text(message, encoding="utf-8")
            output = self._git(
                "interpret_trailers", "--only-trailers", "--only-input", str(message_file)
            )
        return [line for line in output.splitlines() if line.strip()]

    def comment_char(self) -> str:
        """The comment character git uses in commit message templates."""
        try:
            value = self.repo.git.config("--get", "core.commentChar")
        except GitCommandError:
            return "#"
        return value if len(value) == 1 else "#"

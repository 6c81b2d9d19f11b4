"""Tests for gitlink change detection."""

from typing import Dict, List, Optional

from submodule_hook.core.differ import diff_gitlinks
from submodule_hook.core.gateway import GitGateway
from submodule_hook.models import ChangeType

from conftest import empty_commit

PARENT = "p" * 40


class FakeGateway:
    """In-memory snapshots keyed by revision (None is the index)."""

    def __init__(self, declared: Dict[Optional[str], List[str]], pointers: Dict[Optional[str], Dict[str, str]]):
        self.declared = declared
        self.pointers = pointers

    def declared_submodule_paths(self, rev):
        return list(self.declared.get(rev, []))

    def gitlink_pointers(self, rev, paths):
        snapshot = self.pointers.get(rev, {})
        return {path: snapshot[path] for path in paths if path in snapshot}


def test_no_submodules_anywhere():
    assert diff_gitlinks(FakeGateway({}, {}), PARENT) == []


def test_no_parent_means_everything_is_added():
    gateway = FakeGateway({None: ["a", "b"]}, {None: {"a": "1" * 40, "b": "2" * 40}})

    changes = diff_gitlinks(gateway, None)

    assert [(c.path, c.change_type) for c in changes] == [
        ("a", ChangeType.ADDED),
        ("b", ChangeType.ADDED),
    ]


def test_added_removed_and_modified_in_declaration_order():
    gateway = FakeGateway(
        {None: ["zeta", "alpha", "new"], PARENT: ["gone", "zeta", "alpha"]},
        {
            None: {"zeta": "2" * 40, "alpha": "a" * 40, "new": "n" * 40},
            PARENT: {"gone": "g" * 40, "zeta": "1" * 40, "alpha": "a" * 40},
        },
    )

    changes = diff_gitlinks(gateway, PARENT)

    assert [(c.path, c.change_type) for c in changes] == [
        ("zeta", ChangeType.MODIFIED),
        ("new", ChangeType.ADDED),
        ("gone", ChangeType.REMOVED),
    ]
    zeta = changes[0]
    assert zeta.old.revision == "1" * 40
    assert zeta.new.revision == "2" * 40


def test_declared_path_without_gitlink_is_absent():
    gateway = FakeGateway(
        {None: ["lib"], PARENT: ["lib"]},
        {None: {}, PARENT: {"lib": "1" * 40}},
    )

    changes = diff_gitlinks(gateway, PARENT)

    assert len(changes) == 1
    assert changes[0].change_type is ChangeType.REMOVED
    assert changes[0].new is None


def test_real_repository_diff(workspace):
    first = workspace.add_submodule(workspace.sub1_path, "first")
    workspace.add_submodule(workspace.sub2_path, "second")
    workspace.commit("add submodules")
    new_sha = empty_commit(first, "one more")
    workspace.stage("first")

    gateway = GitGateway(workspace.main_path)
    changes = diff_gitlinks(gateway, gateway.parent_revision(amend=False))

    assert len(changes) == 1
    assert changes[0].path == "first"
    assert changes[0].new.revision == new_sha


def test_malformed_gitmodules_means_no_submodules(workspace):
    (workspace.main_path / ".gitmodules").write_text("[submodule \"broken\"\n\tpath = \n")
    workspace.stage(".gitmodules")

    gateway = GitGateway(workspace.main_path)

    assert gateway.declared_submodule_paths(None) == []
    assert diff_gitlinks(gateway, gateway.parent_revision(amend=False)) == []

"""End to end tests: git runs the installed hook for each way of committing."""

import pytest

from submodule_hook.cli.setup_hooks import install_hook

from conftest import empty_commit

ADD_SUBJECT = "sed -i '1s/^/subject line/'"


@pytest.fixture
def hooked(workspace, monkeypatch):
    """Workspace with the hook installed and one submodule with a staged commit."""
    module = workspace.add_submodule(workspace.sub1_path, "first")
    workspace.commit("add submodules")
    install_hook(workspace.main_path)
    monkeypatch.setenv("SUBMODULE_HOOK_HASH_LENGTH", "0")

    empty_commit(module, "commit 1")
    workspace.stage("first")
    workspace.module = module
    return workspace


def block(*subjects):
    return ["Submodule changes:", "first:"] + [f"     {s}" for s in subjects] + ["", "End of submodule changes:"]


def test_amend_no_edit_lists_superset(hooked):
    hooked.commit("Test commit")
    assert hooked.last_message() == ["Test commit", ""] + block("commit 1")

    empty_commit(hooked.module, "commit 2")
    hooked.stage("first")
    hooked.main.git.commit("--amend", "--no-edit")

    assert hooked.last_message() == ["Test commit", ""] + block("commit 2", "commit 1")


def test_amend_with_message_lists_superset(hooked):
    hooked.commit("Test commit")
    empty_commit(hooked.module, "commit 2")
    hooked.stage("first")

    hooked.main.git.commit("--amend", "-m", "reworded")

    assert hooked.last_message() == ["reworded", ""] + block("commit 2", "commit 1")


def test_amend_with_message_and_nothing_staged_keeps_block(hooked):
    hooked.commit("Test commit")

    hooked.main.git.commit("--amend", "-m", "reworded")

    assert hooked.last_message() == ["reworded", ""] + block("commit 1")


def test_amend_in_editor_replaces_block(hooked, monkeypatch):
    hooked.commit("Test commit")
    empty_commit(hooked.module, "commit 2")
    hooked.stage("first")

    monkeypatch.setenv("GIT_EDITOR", "true")
    hooked.main.git.commit("--amend")

    assert hooked.last_message() == ["Test commit", ""] + block("commit 2", "commit 1")


def test_editor_commit_keeps_subject_apart(hooked, monkeypatch):
    monkeypatch.setenv("GIT_EDITOR", ADD_SUBJECT)
    hooked.main.git.commit()

    assert hooked.last_message() == ["subject line", ""] + block("commit 1")


def test_verbose_editor_commit_puts_block_above_diff(hooked, monkeypatch):
    monkeypatch.setenv("GIT_EDITOR", ADD_SUBJECT)
    hooked.main.git.commit("-v")

    message = hooked.last_message()
    assert message == ["subject line", ""] + block("commit 1")
    assert not any(line.startswith("diff --git") for line in message)

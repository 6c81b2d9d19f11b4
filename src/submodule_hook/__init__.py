"""Summarize submodule updates in commit messages from a prepare-commit-msg hook."""

"""Exceptions raised by submodule-hook."""


class SubmoduleHookError(Exception):
    """Base class for all submodule-hook errors."""


class GatewayError(SubmoduleHookError):
    """A git query failed; the commit must be aborted."""


class HookInstallError(SubmoduleHookError):
    """The prepare-commit-msg hook could not be installed or removed."""

#!/usr/bin/env python3
"""
Hook script installed as ``.git/hooks/prepare-commit-msg``.

Git runs it before the commit message editor opens (or before committing with
``-m``/``--no-edit``) and aborts the commit if it exits non-zero.
"""

import sys

from submodule_hook.hooks.prepare_commit_msg import main

if __name__ == "__main__":
    sys.exit(main())

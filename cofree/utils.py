"""
Utility functions for the cofree library.
"""

import os


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


# Environment variable to control debug mode
DEBUG_TRAMPOLINE = _env_flag("COFREE_DEBUG")


def identity(value):
    return value


__all__ = [
    "DEBUG_TRAMPOLINE",
    "identity",
]

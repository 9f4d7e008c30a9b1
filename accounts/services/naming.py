"""Naming rules shared by users, organizations and repositories."""

import re

_LEGAL_NAME_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")

RESERVED_NAMES = frozenset(
    {
        "debug",
        "raw",
        "install",
        "api",
        "avatar",
        "user",
        "org",
        "help",
        "stars",
        "issues",
        "pulls",
        "commits",
        "repo",
        "template",
        "admin",
        "new",
        ".",
        "..",
    }
)
RESERVED_SUFFIXES = (".git", ".keys")


def is_legal_name(name: str) -> bool:
    """Check that a name uses allowed characters and is not reserved."""
    if not name or not _LEGAL_NAME_RE.match(name):
        return False
    lower = name.lower()
    if lower in RESERVED_NAMES:
        return False
    return not lower.endswith(RESERVED_SUFFIXES)

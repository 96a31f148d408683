"""Application version numbers."""

MAJOR_VERSION = 1
MINOR_VERSION = 7
PATCH_VERSION = 1
BUILD_VERSION = 5


def version_string(major: int, minor: int, patch: int, build: int) -> str:
    """Return a version in the ``major.minor.patchbBUILD`` form."""
    return f"{major}.{minor}.{patch}b{build}"


APP_VERSION = version_string(MAJOR_VERSION, MINOR_VERSION, PATCH_VERSION, BUILD_VERSION)
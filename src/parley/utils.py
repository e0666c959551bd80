"""
Utility functions for Parley.
"""

import os


def get_project_root() -> str:
    """
    Get the project root directory (parent of src/parley).

    Returns:
        Absolute path to the project root directory
    """
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def get_package_root() -> str:
    """Directory of the installed ``parley`` package."""
    return os.path.dirname(os.path.abspath(__file__))


def env_flag(value: str | None, default: bool = False) -> bool:
    """
    Interpret an environment variable as a boolean flag.

    Args:
        value: Raw value (``None`` when the variable is unset)
        default: Result used when the variable is unset or blank

    Returns:
        True for "1", "true", "yes" and "on" (case-insensitive)
    """
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}

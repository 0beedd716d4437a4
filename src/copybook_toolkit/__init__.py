"""Top-level package for the Copybook Toolkit.

Provides subpackages:
- copybook_toolkit.core – content model, errors, schema validation, utilities
- copybook_toolkit.layout – grid sizing, layout strategies, viewport and pagination
- copybook_toolkit.fonts – font subsetting, validation and default font lookup
- copybook_toolkit.export – PDF export orchestration and background worker
"""

from importlib.metadata import PackageNotFoundError, version as _dist_version
from pathlib import Path


def _get_version() -> str:
    """Installed distribution version, or the checkout's pyproject.toml value."""
    try:
        return _dist_version("copybook-toolkit")
    except PackageNotFoundError:
        pass

    # Source checkout without an install: src/copybook_toolkit -> repo root
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        lines = pyproject.read_text(encoding="utf-8").splitlines()
    except OSError:
        return "0.0.0"
    for line in lines:
        key, _, value = line.partition("=")
        if key.strip() == "version":
            return value.strip().strip("\"'")
    return "0.0.0"


__version__ = _get_version()
__all__: list[str] = ["__version__"]

"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import os
import sys
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local affected package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of affected modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name == "affected" or module_name.startswith("affected."):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def _clean_ci_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests never see the CI variables of the machine running them."""
    for name in (
        "GITHUB_ACTIONS",
        "GITHUB_EVENT_NAME",
        "GITHUB_EVENT_PATH",
        "GITHUB_REPOSITORY",
        "GITHUB_OUTPUT",
        "GITHUB_TOKEN",
        "GITHUB_API_URL",
        "INPUT_TOKEN",
        "INPUT_BASEREF",
        "INPUT_HEADREF",
        "INPUT_BASEDIRECTORIES",
        "INPUT_WORKSPACECONFIG",
        "AFFECTED_BASE_REF",
        "AFFECTED_HEAD_REF",
    ):
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.upper().startswith("AFFECTED__"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_structlog() -> None:
    structlog.reset_defaults()

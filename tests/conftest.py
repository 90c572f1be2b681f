"""Global test configuration for tagstitch tests."""

import pytest
import structlog

from tagstitch.core.config import Settings


@pytest.fixture(autouse=True)
def _restore_structlog_config():
    """Undo per-test structlog configuration so loggers never outlive capsys streams."""
    saved = structlog.get_config()
    yield
    structlog.configure(**saved)


@pytest.fixture
def settings(monkeypatch):
    """Settings built from defaults only, ignoring the caller's environment."""
    for name in Settings.model_fields:
        monkeypatch.delenv(name, raising=False)
    return Settings(_env_file=None)


@pytest.fixture
def latex_template():
    """A minimal host template with one marker line."""
    return [
        "\\begin{document}",
        "<<%sCHUNK_LABEL_HERE>>=",
        "@",
        "\\end{document}",
    ]

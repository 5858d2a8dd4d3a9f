import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

# Ensure local source package (src/minicurl) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from minicurl.models import HTTPResponse  # noqa: E402


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def make_response():
    """Build an HTTPResponse with sensible defaults."""

    def _make(
        status_code: int = 200,
        body: bytes = b"",
        headers: list[tuple[str, bytes]] | None = None,
    ) -> HTTPResponse:
        return HTTPResponse(
            status_code=status_code,
            headers=tuple(headers or ()),
            body_bytes=body,
        )

    return _make

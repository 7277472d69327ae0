import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Click runner for invoking `more-ordered-lists` in tests."""
    return CliRunner()

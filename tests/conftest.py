"""
Pytest configuration and shared fixtures.
"""

import pytest

from statcard.config import Config


@pytest.fixture
def config(tmp_path):
    """Configuration pointing every directory into a temp dir."""
    return Config(
        login="u",
        access_token="test_token",
        cache_dir=tmp_path / "cache",
        svg_dir=tmp_path / "svg",
    )

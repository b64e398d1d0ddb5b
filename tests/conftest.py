"""Test configuration and fixtures for the derbyjson test suite."""

import os
import sys
import pathlib

# Pin defaults before the package reads its settings
os.environ.setdefault('DERBYJSON_UNKNOWN_FIELDS', 'preserve')
os.environ.setdefault('DERBYJSON_CHECK_VERSION', 'true')

# Ensure tests can import from src/
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest

from derbyjson.config import get_settings

DATA_DIR = ROOT / "tests" / "data"


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so environment changes made by a test take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def data_dir() -> pathlib.Path:
    """Directory holding sample DerbyJSON documents."""
    return DATA_DIR


@pytest.fixture
def rosters_bytes() -> bytes:
    """Two-team rosters document, as written by a stats tool."""
    return (DATA_DIR / "rosters.json").read_bytes()


@pytest.fixture
def game_bytes() -> bytes:
    """Full game document with every jam event kind."""
    return (DATA_DIR / "game.json").read_bytes()


@pytest.fixture
def gotham_roster() -> bytes:
    """Single-team roster document."""
    return (
        b'{"type":"roster","team":{"name":"Gotham Girls",'
        b'"skaters":[{"name":"Bonnie Thunders","number":"39"}]}}'
    )


@pytest.fixture
def league_bytes() -> bytes:
    """League document with a venue, teams and certifications."""
    return (DATA_DIR / "league.json").read_bytes()

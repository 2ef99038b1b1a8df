"""Shared fixtures for the funcdoc test suite."""

from pathlib import Path

import pytest

from funcdoc.config import ParserConfig
from funcdoc.parsers.definition_parser import FunctionParser

# Source files under files/ are parser input, not test modules
collect_ignore_glob = ["files/*"]

FILES_DIR = Path(__file__).parent / "files"


@pytest.fixture
def files_dir() -> Path:
    return FILES_DIR


@pytest.fixture
def parser() -> FunctionParser:
    """A parser with the built-in defaults, independent of FUNCDOC_* variables."""
    return FunctionParser(ParserConfig())


@pytest.fixture
def comprehensive(parser):
    return parser.load(str(FILES_DIR / "comprehensive"))

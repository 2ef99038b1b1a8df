import logging

import pytest

from funcdoc.config import ParserConfig
from funcdoc.exceptions import FuncdocError


def test_defaults():
    config = ParserConfig()
    assert config.extensions == (".py",)
    assert config.index_name == "__main__"
    assert config.ignore == []
    assert config.default_charge == 1


def test_extensions_are_normalized():
    assert ParserConfig(extensions=("py", ".pyw")).extensions == (".py", ".pyw")


@pytest.mark.parametrize("charge", [0, -1, True, "2"])
def test_invalid_default_charge(charge):
    with pytest.raises(FuncdocError):
        ParserConfig(default_charge=charge)


def test_from_env(monkeypatch):
    monkeypatch.setenv("FUNCDOC_EXTENSIONS", "py, pyw")
    monkeypatch.setenv("FUNCDOC_INDEX_NAME", "index")
    monkeypatch.setenv("FUNCDOC_IGNORE", "scratch,dir/old")
    monkeypatch.setenv("FUNCDOC_DEFAULT_CHARGE", "3")
    config = ParserConfig.from_env()
    assert config.extensions == (".py", ".pyw")
    assert config.index_name == "index"
    assert config.ignore == ["scratch", "dir/old"]
    assert config.default_charge == 3


def test_from_file(tmp_path):
    path = tmp_path / "funcdoc.yaml"
    path.write_text(
        "index_name: index\n"
        "ignore:\n"
        "  - scratch\n"
        "default_charge: 2\n"
        "extensions: [py]\n"
    )
    config = ParserConfig.from_file(path)
    assert config.index_name == "index"
    assert config.ignore == ["scratch"]
    assert config.default_charge == 2
    assert config.extensions == (".py",)


def test_from_empty_file(tmp_path):
    path = tmp_path / "funcdoc.yaml"
    path.write_text("")
    assert ParserConfig.from_file(path) == ParserConfig()


@pytest.mark.parametrize("contents", [
    "index_nmae: index\n",
    "- a\n- b\n",
    "index_name: [unclosed\n",
])
def test_from_file_rejects(tmp_path, contents):
    path = tmp_path / "funcdoc.yaml"
    path.write_text(contents)
    with pytest.raises(FuncdocError):
        ParserConfig.from_file(path)


def test_from_missing_file(tmp_path):
    with pytest.raises(FuncdocError):
        ParserConfig.from_file(tmp_path / "missing.yaml")


def test_set_logging_configures_package_logger():
    logger = ParserConfig(log_level="DEBUG").set_logging()
    assert logger.name == "funcdoc"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

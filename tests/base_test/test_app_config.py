#!filepath: tests/base_test/test_app_config.py
import yaml
import pytest

from fmconvert.config import AppConfig, ConvertConfig, LogConfig
from fmconvert.config.app_config import default_config_path


@pytest.fixture
def sample_config_file(tmp_path):
    """
    创建临时 YAML 配置文件用于测试
    """
    data = {
        "log": {
            "dir": "logs",
            "rotation": "1 day",
            "retention": "7 days",
            "level": "DEBUG",
        },
        "convert": {
            "snapshot": "none",
            "overwrite": False,
            "discard_on_failure": True,
            "progress_every": 10,
        },
    }

    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump(data), encoding="utf-8")
    return config_file


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("FMCONVERT_LOG_LEVEL", raising=False)
    monkeypatch.delenv("FMCONVERT_LOG_DIR", raising=False)


def test_app_config_load(sample_config_file):
    cfg = AppConfig.load(path=str(sample_config_file))

    assert isinstance(cfg.log, LogConfig)
    assert isinstance(cfg.convert, ConvertConfig)
    assert cfg.log.level == "DEBUG"
    assert cfg.convert.snapshot == "none"
    assert cfg.convert.overwrite is False
    assert cfg.convert.discard_on_failure is True
    assert cfg.convert.progress_every == 10
    # 未给出的字段使用默认值
    assert cfg.convert.snapshot_max_mb == 256


def test_default_config_is_bundled():
    assert default_config_path().exists()

    cfg = AppConfig.load()
    assert cfg.convert.snapshot == "auto"
    assert cfg.convert.overwrite is True


def test_env_overrides_log_section(sample_config_file, monkeypatch, tmp_path):
    monkeypatch.setenv("FMCONVERT_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("FMCONVERT_LOG_DIR", str(tmp_path / "l"))

    cfg = AppConfig.load(path=sample_config_file)

    assert cfg.log.level == "WARNING"
    assert cfg.log.dir == str(tmp_path / "l")


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.load(path=tmp_path / "nope.yml")


def test_invalid_snapshot_mode_rejected(tmp_path):
    p = tmp_path / "bad.yml"
    p.write_text(yaml.safe_dump({"convert": {"snapshot": "sometimes"}}), encoding="utf-8")

    with pytest.raises(ValueError):
        AppConfig.load(path=p)

import pytest

from usagelogic import canon, config, exceptions


def test_default_config():
    cfg = config.default_config()
    assert cfg.cost_rate == 0.0
    assert cfg.date_field == "Date"
    assert "confidential" in cfg.notice_markers


def test_negative_rate_rejected():
    with pytest.raises(exceptions.ConfigError):
        config.EngineConfig(cost_rate=-0.1)


@pytest.mark.parametrize("stored,expected", [("0.17", 0.17), (0.2, 0.2), ("1,000", 1000.0)])
def test_rate_from_settings(stored, expected):
    cfg = config.config_from_settings({canon.RATE_SETTING_KEY: stored})
    assert cfg.cost_rate == pytest.approx(expected)


@pytest.mark.parametrize("settings", [None, {}, {canon.RATE_SETTING_KEY: "abc"}, {canon.RATE_SETTING_KEY: -3}])
def test_bad_settings_keep_default(settings):
    assert config.config_from_settings(settings).cost_rate == 0.0

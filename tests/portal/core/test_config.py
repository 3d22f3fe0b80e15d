import pytest

from portal.core import config
from portal.core.categories import Category, parse_category


def test_validate_runtime_config_allows_development_defaults(monkeypatch) -> None:
    monkeypatch.setattr(config, 'APP_ENV', 'development')
    monkeypatch.setattr(config, 'SESSION_SECRET_KEY', 'change-me')

    config.validate_runtime_config()


def test_validate_runtime_config_rejects_default_secret_in_production(monkeypatch) -> None:
    monkeypatch.setattr(config, 'APP_ENV', 'production')
    monkeypatch.setattr(config, 'SESSION_SECRET_KEY', 'change-me')
    monkeypatch.setattr(config, 'SEED_DEMO_DATA', False)

    with pytest.raises(RuntimeError, match='SESSION_SECRET_KEY'):
        config.validate_runtime_config()


def test_validate_runtime_config_rejects_demo_seed_in_production(monkeypatch) -> None:
    monkeypatch.setattr(config, 'APP_ENV', 'production')
    monkeypatch.setattr(config, 'SESSION_SECRET_KEY', 'a-real-secret')
    monkeypatch.setattr(config, 'SEED_DEMO_DATA', True)

    with pytest.raises(RuntimeError, match='SEED_DEMO_DATA'):
        config.validate_runtime_config()


def test_parse_category_accepts_only_known_keys() -> None:
    assert parse_category('COMMUNITY') is Category.COMMUNITY
    assert parse_category('community') is None
    assert parse_category(None) is None
    assert Category.MY_WORK_SPACE.label == 'My Work Space'

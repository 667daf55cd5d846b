"""Тесты конфигурации и сборки резолвера из настроек."""
import pytest
from extavatars.application.avatars import build_config, build_resolver
from extavatars.config.settings import Settings, get_settings

AVATAR_ENV = ("AVATAR__URL", "AVATAR__CHANGE_URL", "CANONICAL_WEB_URL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in AVATAR_ENV:
        monkeypatch.delenv(name, raising=False)
    # Чтобы не подхватить .env из рабочего каталога
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_defaults():
    settings = Settings(_env_file=None)

    assert settings.avatar.url is None
    assert settings.avatar.change_url is None
    assert settings.canonical_web_url is None
    assert settings.secure_transport is False


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("AVATAR__URL", "http://avatars.example.org/%s.png")
    monkeypatch.setenv("AVATAR__CHANGE_URL", "https://accounts.example.org/%s")
    monkeypatch.setenv("CANONICAL_WEB_URL", "https://review.example.org/")

    settings = Settings(_env_file=None)

    assert settings.avatar.url == "http://avatars.example.org/%s.png"
    assert settings.avatar.change_url == "https://accounts.example.org/%s"
    assert settings.secure_transport is True


def test_settings_accept_change_url_key():
    settings = Settings(_env_file=None, avatar={"url": "https://x.example/%s", "changeUrl": "https://y.example/%s"})

    assert settings.avatar.change_url == "https://y.example/%s"


def test_settings_from_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("AVATAR__URL=https://x.example/%s\nCANONICAL_WEB_URL=http://review.example.org\n")

    settings = Settings(_env_file=env_file)

    assert settings.avatar.url == "https://x.example/%s"
    assert settings.secure_transport is False


def test_empty_avatar_url_is_kept():
    """Пустой шаблон остается заданным, а не превращается в None."""
    settings = Settings(_env_file=None, avatar={"url": ""})

    assert settings.avatar.url == ""


@pytest.mark.parametrize(
    "canonical_url,expected",
    [
        ("https://review.example.org/", True),
        ("http://review.example.org/", False),
        ("", False),
        (None, False),
    ],
)
def test_secure_transport(canonical_url, expected):
    settings = Settings(_env_file=None, canonical_web_url=canonical_url)

    assert settings.secure_transport is expected


def test_build_config_from_settings():
    settings = Settings(
        _env_file=None,
        canonical_web_url="https://review.example.org/",
        avatar={"url": "http://x.example/%s.png", "change_url": "https://y.example/%s"},
    )

    config = build_config(settings)

    assert config.avatar_url_template == "http://x.example/%s.png"
    assert config.change_avatar_url_template == "https://y.example/%s"
    assert config.secure_transport is True
    assert build_resolver(settings).resolve_avatar_url("alice") == "https://x.example/alice.png"


def test_get_settings_warns_when_avatar_url_missing(caplog):
    settings = get_settings()

    assert settings.avatar.url is None
    assert any("AVATAR__URL" in record.getMessage() for record in caplog.records)


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("AVATAR__URL", "https://x.example/%s")

    assert get_settings() is get_settings()

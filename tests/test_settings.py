import pytest

from backend.settings import DEFAULT_CORS_ORIGINS, Settings, load_settings


def test_defaults():
    assert load_settings({}) == Settings()
    assert Settings().host == "localhost"
    assert Settings().port == 8000
    assert Settings().cors_origins == DEFAULT_CORS_ORIGINS


def test_environment_overrides():
    settings = load_settings({
        "SURFACE_HOST": "127.0.0.1",
        "SURFACE_PORT": "9001",
        "SURFACE_LOG_LEVEL": "debug",
        "SURFACE_CORS_ORIGINS": "http://a.test, http://b.test,,",
    })
    assert settings.host == "127.0.0.1"
    assert settings.port == 9001
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ("http://a.test", "http://b.test")


@pytest.mark.parametrize("port", ["http", "0", "70000", ""])
def test_invalid_port(port):
    with pytest.raises(ValueError, match="SURFACE_PORT"):
        load_settings({"SURFACE_PORT": port})

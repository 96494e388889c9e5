import pytest
from pydantic import ValidationError

from semloc.settings import DEFAULT_TIMEOUT_MS, describe_settings_error, load_settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SEMLOC_BROWSER", raising=False)
    monkeypatch.delenv("SEMLOC_TIMEOUT_MS", raising=False)


def test_defaults_when_environment_is_empty() -> None:
    settings = load_settings()

    assert settings.browser == "chromium"
    assert settings.timeout_ms == DEFAULT_TIMEOUT_MS


def test_reads_browser_and_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEMLOC_BROWSER", " Firefox ")
    monkeypatch.setenv("SEMLOC_TIMEOUT_MS", "5000")

    settings = load_settings()

    assert settings.browser == "firefox"
    assert settings.timeout_ms == 5000


@pytest.mark.parametrize(
    "name, value",
    [
        ("SEMLOC_BROWSER", "netscape"),
        ("SEMLOC_TIMEOUT_MS", "0"),
        ("SEMLOC_TIMEOUT_MS", "soon"),
        ("SEMLOC_TIMEOUT_MS", "²"),
    ],
)
def test_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError) as excinfo:
        load_settings()

    assert name in describe_settings_error(excinfo.value)

from __future__ import annotations

from pathlib import Path

import pytest

from alge.core.constants import DEFAULT_MAX_DEPTH
from alge.serde.config import SerdeSettings
from alge.serde.errors import SerdeConfigError

ENV_KEYS = [
    "ALGE_SERDE_MAX_DEPTH",
    "ALGE_SERDE_PARSE_NUMERIC_STRINGS",
    "ALGE_SERDE_LOG_JSON",
    "ALGE_SERDE_VERBOSE",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_alge_toml(tmp: Path, content: str) -> Path:
    p = tmp / "alge.toml"
    p.write_text(content)
    return p


def test_serde_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    _write_alge_toml(
        tmp_path,
        """
        [serde]
        max_depth = 50
        parse_numeric_strings = false
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ALGE_SERDE_MAX_DEPTH", "75")

    s = SerdeSettings.load()

    assert s.max_depth == 75  # env override
    assert s.parse_numeric_strings is False  # from TOML


def test_serde_settings_from_toml_top_level_keys(tmp_path: Path, monkeypatch) -> None:
    _write_alge_toml(tmp_path, "max_depth = 12\nverbose = true\n")
    monkeypatch.chdir(tmp_path)

    s = SerdeSettings.load()

    assert s.max_depth == 12
    assert s.verbose is True


def test_serde_settings_from_pyproject(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
        [tool.alge.serde]
        log_json = true
        max_depth = 30
        """.strip()
    )
    monkeypatch.chdir(tmp_path)

    s = SerdeSettings.load()

    assert s.log_json is True
    assert s.max_depth == 30


def test_serde_settings_explicit_path(tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    path.write_text("[serde]\nmax_depth = 9\n")

    assert SerdeSettings.from_toml(path).max_depth == 9


def test_serde_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    s = SerdeSettings.load()

    assert s == SerdeSettings()
    assert s.max_depth == DEFAULT_MAX_DEPTH
    assert s.parse_numeric_strings is True


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("yes", True), ("ON", True), ("0", False), ("off", False), ("False", False)],
)
def test_env_booleans(raw: str, expected: bool, tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ALGE_SERDE_PARSE_NUMERIC_STRINGS", raw)

    assert SerdeSettings.load().parse_numeric_strings is expected


@pytest.mark.parametrize(
    "key, raw",
    [
        ("ALGE_SERDE_MAX_DEPTH", "deep"),
        ("ALGE_SERDE_MAX_DEPTH", "0"),
        ("ALGE_SERDE_VERBOSE", "maybe"),
    ],
)
def test_invalid_env_values_raise(key: str, raw: str, tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(key, raw)

    with pytest.raises(SerdeConfigError):
        SerdeSettings.load()


def test_invalid_toml_raises(tmp_path: Path, monkeypatch) -> None:
    _write_alge_toml(tmp_path, "[serde\nmax_depth = ")
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SerdeConfigError):
        SerdeSettings.load()


def test_to_options() -> None:
    opts = SerdeSettings(max_depth=5, parse_numeric_strings=False).to_options()
    assert opts.max_depth == 5
    assert opts.parse_numeric_strings is False
    assert SerdeSettings().to_options(max_depth=3).max_depth == 3

"""Tests for configuration loading and validation."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from sheetbuild.config import ConfigError, load_config, parse_sheet_id

from conftest import SERVICE_ACCOUNT, SHEET_ID


def _environ(**overrides):
    environ = {
        "GOOGLE_SHEET_ID": SHEET_ID,
        "GOOGLE_SERVICE_ACCOUNT": json.dumps(SERVICE_ACCOUNT),
    }
    environ.update(overrides)
    return environ


def test_load_config_defaults() -> None:
    config = load_config(_environ())
    assert config.sheet_id == SHEET_ID
    assert config.service_account_info["client_email"] == SERVICE_ACCOUNT["client_email"]
    assert config.output_dir == Path("site")
    assert config.range_suffix == "A:Z"
    assert config.tab_overrides == {}
    assert config.fetch_timeout is None


def test_sheet_id_whitespace_is_stripped() -> None:
    assert parse_sheet_id(f"  {SHEET_ID[:10]}\n\t{SHEET_ID[10:]} ") == SHEET_ID


@pytest.mark.parametrize("raw", ["", "   ", "short-id", "has/slash/in/the/sheet/identifier"])
def test_bad_sheet_id_fails_fast(raw) -> None:
    with pytest.raises(ConfigError):
        load_config(_environ(GOOGLE_SHEET_ID=raw))


def test_malformed_sheet_id_message_mentions_length() -> None:
    with pytest.raises(ConfigError) as exc:
        parse_sheet_id("abc")
    assert "length=3" in str(exc.value)


@pytest.mark.parametrize(
    "raw",
    ["", "{not json", "[]", json.dumps({"client_email": "x@example.com"})],
)
def test_bad_service_account_fails_fast(raw) -> None:
    with pytest.raises(ConfigError):
        load_config(_environ(GOOGLE_SERVICE_ACCOUNT=raw))


def test_service_account_from_credentials_file(tmp_path: Path) -> None:
    cred_file = tmp_path / "credentials.json"
    cred_file.write_text(json.dumps(SERVICE_ACCOUNT), encoding="utf-8")

    config = load_config(
        _environ(GOOGLE_SERVICE_ACCOUNT="", GOOGLE_APPLICATION_CREDENTIALS=str(cred_file))
    )

    assert config.service_account_info["private_key"] == SERVICE_ACCOUNT["private_key"]


def test_missing_credentials_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(
            _environ(
                GOOGLE_SERVICE_ACCOUNT="",
                GOOGLE_APPLICATION_CREDENTIALS=str(tmp_path / "nope.json"),
            )
        )


def test_optional_settings() -> None:
    config = load_config(
        _environ(
            OUTPUT_DIR="public",
            SHEET_RANGE="A:G",
            TRANSLATION_TABS=" Requests , Translations ,",
            FETCH_TIMEOUT="30",
        )
    )
    assert config.output_dir == Path("public")
    assert config.range_suffix == "A:G"
    assert config.tab_overrides == {"translations": ("Requests", "Translations")}
    assert config.fetch_timeout == 30.0


def test_output_dir_argument_wins() -> None:
    config = load_config(_environ(OUTPUT_DIR="public"), output_dir=Path("out"))
    assert config.output_dir == Path("out")


@pytest.mark.parametrize("raw", ["soon", "0", "-5"])
def test_bad_timeout(raw) -> None:
    with pytest.raises(ConfigError):
        load_config(_environ(FETCH_TIMEOUT=raw))


def test_env_file_is_loaded(tmp_path: Path, monkeypatch) -> None:
    for name in ("GOOGLE_SHEET_ID", "GOOGLE_SERVICE_ACCOUNT"):
        # setenv first so the undo also removes what load_dotenv writes
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    env_file = tmp_path / "build.env"
    env_file.write_text(
        f"GOOGLE_SHEET_ID={SHEET_ID}\nGOOGLE_SERVICE_ACCOUNT='{json.dumps(SERVICE_ACCOUNT)}'\n",
        encoding="utf-8",
    )

    config = load_config(env_file=env_file)

    assert config.sheet_id == SHEET_ID


def test_masked_sheet_id_hides_most_of_the_id() -> None:
    config = load_config(_environ())
    assert SHEET_ID not in config.masked_sheet_id
    assert config.masked_sheet_id.endswith(f"{SHEET_ID[-6:]} (len={len(SHEET_ID)})")

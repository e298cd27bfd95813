"""
Tests for the torkeys CLI.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from _torkeys_test_helpers import (
    RFC8032_ONION_ADDRESS,
    RFC8032_PUBLIC_KEY,
    RFC8032_PUBLIC_KEY_B64,
)
from typer.testing import CliRunner

from torkeys.address import derive_address
from torkeys.cli import app
from torkeys.encoding import decode_key
from torkeys.errors import EntropyUnavailableError

runner = CliRunner()


class TestGenerate:
    def test_generate_json(self) -> None:
        result = runner.invoke(app, ["generate", "--json", "--log-level", "ERROR"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        public_key = decode_key(data["public_key"])
        private_key = decode_key(data["private_key"])

        assert data["address"] == derive_address(public_key)
        assert private_key[32:] == public_key

    def test_generate_text(self) -> None:
        result = runner.invoke(app, ["generate", "--log-level", "ERROR"])

        assert result.exit_code == 0, result.output
        assert "address: " in result.stdout
        assert ".onion" in result.stdout
        assert "private_key: " in result.stdout

    def test_output_format_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TORKEYS_OUTPUT__FORMAT", "json")

        result = runner.invoke(app, ["generate", "--log-level", "ERROR"])

        assert result.exit_code == 0, result.output
        assert set(json.loads(result.stdout)) == {"address", "public_key", "private_key"}

    def test_entropy_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def failing_generate() -> None:
            raise EntropyUnavailableError("no entropy")

        monkeypatch.setattr("torkeys.cli.generate_keypair", failing_generate)

        result = runner.invoke(app, ["generate", "--log-level", "ERROR"])

        assert result.exit_code == 1


class TestAddress:
    def test_base64_key(self) -> None:
        result = runner.invoke(
            app, ["address", RFC8032_PUBLIC_KEY_B64, "--json", "--log-level", "ERROR"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {
            "address": RFC8032_ONION_ADDRESS,
            "public_key": RFC8032_PUBLIC_KEY_B64,
        }

    def test_hex_key(self) -> None:
        result = runner.invoke(
            app, ["address", RFC8032_PUBLIC_KEY.hex(), "--hex", "--log-level", "ERROR"]
        )

        assert result.exit_code == 0, result.output
        assert f"address: {RFC8032_ONION_ADDRESS}" in result.stdout

    @pytest.mark.parametrize(
        "args",
        [
            ["AAAA"],
            ["not base64!"],
            [RFC8032_PUBLIC_KEY.hex()[:-2], "--hex"],
            ["zz", "--hex"],
        ],
    )
    def test_invalid_key(self, args: list[str]) -> None:
        result = runner.invoke(app, ["address", *args, "--log-level", "ERROR"])
        assert result.exit_code == 1


class TestDecode:
    def test_decode(self) -> None:
        result = runner.invoke(
            app, ["decode", RFC8032_ONION_ADDRESS, "--json", "--log-level", "ERROR"]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["public_key"] == RFC8032_PUBLIC_KEY_B64
        assert data["public_key_hex"] == RFC8032_PUBLIC_KEY.hex()

    def test_decode_invalid(self) -> None:
        result = runner.invoke(app, ["decode", "example.onion", "--log-level", "ERROR"])
        assert result.exit_code == 1


class TestConfigInit:
    def test_creates_config(self, isolated_settings: Path) -> None:
        result = runner.invoke(app, ["config-init", "--log-level", "ERROR"])

        assert result.exit_code == 0, result.output
        config_path = isolated_settings / "config.toml"
        assert config_path.exists()
        assert str(config_path) in result.stdout

    def test_respects_config_file_env(
        self, tmp_path: Path, isolated_settings: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_path = tmp_path / "custom.toml"
        monkeypatch.setenv("TORKEYS_CONFIG_FILE", str(config_path))

        result = runner.invoke(app, ["config-init", "--log-level", "ERROR"])

        assert result.exit_code == 0, result.output
        assert config_path.exists()
        assert str(config_path) in result.stdout
        assert not (isolated_settings / "config.toml").exists()

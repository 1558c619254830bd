"""
Unit tests for PostalConfig and the argument validators.
"""

from unittest.mock import patch

import pytest

from ezpostal.config import PostalConfig
from ezpostal.utils import validate_api_config, validate_path, validate_template


@pytest.fixture
def no_dotenv():
    with patch("ezpostal.config.load_dotenv") as mock_load:
        yield mock_load


class TestFromEnv:

    def test_reads_variables(self, monkeypatch, no_dotenv):
        monkeypatch.setenv("POSTAL_ADDR", "https://postal.example.com")
        monkeypatch.setenv("POSTAL_TOKEN", "secret")
        monkeypatch.setenv("POSTAL_TIMEOUT", "7.5")

        config = PostalConfig.from_env()

        assert config.base_uri == "https://postal.example.com"
        assert config.token == "secret"
        assert config.timeout == 7.5
        no_dotenv.assert_called_once()

    def test_timeout_is_optional(self, monkeypatch, no_dotenv):
        monkeypatch.setenv("POSTAL_ADDR", "https://postal.example.com")
        monkeypatch.setenv("POSTAL_TOKEN", "secret")
        monkeypatch.delenv("POSTAL_TIMEOUT", raising=False)

        assert PostalConfig.from_env().timeout is None

    def test_missing_token_is_rejected(self, monkeypatch, no_dotenv):
        monkeypatch.setenv("POSTAL_ADDR", "https://postal.example.com")
        monkeypatch.delenv("POSTAL_TOKEN", raising=False)

        with pytest.raises(ValueError):
            PostalConfig.from_env()

    def test_invalid_timeout_is_rejected(self, monkeypatch, no_dotenv):
        monkeypatch.setenv("POSTAL_ADDR", "https://postal.example.com")
        monkeypatch.setenv("POSTAL_TOKEN", "secret")
        monkeypatch.setenv("POSTAL_TIMEOUT", "ten")

        with pytest.raises(ValueError, match="POSTAL_TIMEOUT"):
            PostalConfig.from_env()

    def test_repr_hides_token(self):
        config = PostalConfig(base_uri="https://postal.example.com", token="secret")
        assert "secret" not in repr(config)


class TestValidators:

    def test_api_config_requires_http_url(self):
        validate_api_config("http://localhost:5000", "t")
        with pytest.raises(ValueError):
            validate_api_config("ftp://postal.example.com", "t")
        with pytest.raises(ValueError):
            validate_api_config(None, "t")

    def test_validate_path(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_text("a")

        assert validate_path(path) == str(path)
        with pytest.raises(FileNotFoundError):
            validate_path(tmp_path / "missing.txt")
        with pytest.raises(FileNotFoundError):
            validate_path(tmp_path)
        with pytest.raises(ValueError):
            validate_path(123)

    def test_validate_template(self, tmp_path):
        html = tmp_path / "t.html"
        html.write_text("<p></p>")
        text = tmp_path / "t.txt"
        text.write_text("")

        assert validate_template(html) == str(html)
        with pytest.raises(ValueError):
            validate_template(text)

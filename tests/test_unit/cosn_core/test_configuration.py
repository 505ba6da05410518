"""Tests for the Configuration source."""

from pathlib import Path

import pytest

from cosn_core.configuration import Configuration
from cosn_core.exceptions import ConfigurationError


class TestConfiguration:
    """Test the typed accessors of Configuration."""

    def test_get(self) -> None:
        """Test string access with trimming and defaults."""
        configuration = Configuration({"fs.cosn.region": " ap-guangzhou ", "n": 3})

        assert configuration.get("fs.cosn.region") == "ap-guangzhou"
        assert configuration.get("n") == "3"
        assert configuration.get("missing") is None
        assert configuration.get("missing", "fallback") == "fallback"

    def test_get_int(self) -> None:
        """Test integer access."""
        configuration = Configuration({"size": "8388608", "bad": "eight"})

        assert configuration.get_int("size", 0) == 8388608
        assert configuration.get_int("missing", 5) == 5
        with pytest.raises(ConfigurationError) as excinfo:
            configuration.get_int("bad", 0)
        assert excinfo.value.key == "bad"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("true", True), ("YES", True), ("1", True), ("off", False), (False, False)],
    )
    def test_get_bool(self, value: object, expected: bool) -> None:
        """Test boolean access."""
        assert Configuration({"flag": value}).get_bool("flag") is expected

    def test_get_bool_invalid(self) -> None:
        """Test that unrecognised boolean values are rejected."""
        with pytest.raises(ConfigurationError):
            Configuration({"flag": "maybe"}).get_bool("flag")

    def test_get_bool_default(self) -> None:
        """Test the default for an unset boolean."""
        assert Configuration().get_bool("flag", default=True) is True

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("a, b ,c", ["a", "b", "c"]),
            (" a,,b, ", ["a", "b"]),
            ("", []),
            (["a ", " b"], ["a", "b"]),
            (("a", ""), ["a"]),
        ],
    )
    def test_get_trimmed_strings(self, value: object, expected: list[str]) -> None:
        """Test list access from strings and sequences."""
        assert Configuration({"list": value}).get_trimmed_strings("list") == expected

    def test_get_trimmed_strings_unset(self) -> None:
        """Test that an unset key yields an empty list."""
        assert Configuration().get_trimmed_strings("list") == []

    @pytest.mark.parametrize("value", [42, {"a": 1}.items(), ["a", 3]])
    def test_get_trimmed_strings_invalid(self, value: object) -> None:
        """Test that values that are not strings are rejected."""
        with pytest.raises(ConfigurationError):
            Configuration({"list": value}).get_trimmed_strings("list")

    def test_set_and_unset(self) -> None:
        """Test mutation and the mapping helpers."""
        configuration = Configuration()
        configuration.set("a", "1")

        assert "a" in configuration
        assert configuration.keys() == ["a"]
        assert len(configuration) == 1

        configuration.unset("a")
        assert "a" not in configuration
        assert configuration.as_dict() == {}

    def test_nested_values_are_flattened(self) -> None:
        """Test that nested mappings become dotted keys."""
        configuration = Configuration({"fs": {"cosn": {"region": "ap-beijing"}}})

        assert list(configuration) == ["fs.cosn.region"]
        assert configuration.get_raw("fs.cosn.region") == "ap-beijing"


class TestConfigurationFromYaml:
    """Test loading a Configuration from a YAML file."""

    def test_load(self, tmp_path: Path) -> None:
        """Test loading both flat and nested keys."""
        path = tmp_path / "core-site.yaml"
        path.write_text(
            "fs.cosn.credentials.provider: simple\n"
            "fs:\n"
            "  cosn:\n"
            "    userinfo:\n"
            "      secretId: K1\n"
            "      secretKey: S1\n",
            encoding="utf-8",
        )

        configuration = Configuration.from_yaml(path)

        assert configuration.get("fs.cosn.credentials.provider") == "simple"
        assert configuration.get("fs.cosn.userinfo.secretId") == "K1"
        assert configuration.get("fs.cosn.userinfo.secretKey") == "S1"

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test that an empty document yields an empty configuration."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert len(Configuration.from_yaml(path)) == 0

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file is a configuration error."""
        with pytest.raises(ConfigurationError) as excinfo:
            Configuration.from_yaml(tmp_path / "missing.yaml")

        assert "Unable to load configuration file" in str(excinfo.value)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test that malformed YAML is a configuration error."""
        path = tmp_path / "broken.yaml"
        path.write_text("a: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            Configuration.from_yaml(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        """Test that a list document is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- simple\n- environment\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as excinfo:
            Configuration.from_yaml(path)

        assert "must contain a mapping" in str(excinfo.value)

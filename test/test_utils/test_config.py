"""Tests for the config loader functionality."""

import pytest

from caftruth.config import (
    ConfigCycleError,
    ConfigIncludeError,
    ConfigPathError,
    ConfigTypeError,
    apply_overrides,
    deep_merge,
    load_config,
    load_config_file,
    parse_value,
    set_nested_value,
)


class TestConfigLoader:
    """Test suite for the YAML config loader."""

    def test_basic_load(self, tmp_path):
        """Test basic YAML loading without any special features."""
        config_file = tmp_path / "basic.yaml"
        config_file.write_text(
            """
io:
  reader:
    name: hdf5
    file_keys: input.h5
validate:
  strict: true
"""
        )

        cfg = load_config_file(str(config_file))

        assert cfg["io"]["reader"]["name"] == "hdf5"
        assert cfg["io"]["reader"]["file_keys"] == "input.h5"
        assert cfg["validate"]["strict"] is True

    def test_string_load(self):
        """Test loading a configuration from a string."""
        cfg = load_config("io:\n  writer:\n    name: csv\n")
        assert cfg["io"]["writer"]["name"] == "csv"

    def test_empty(self, tmp_path):
        """Test that an empty file yields an empty configuration."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_config_file(str(config_file)) == {}

    def test_top_level_include(self, tmp_path):
        """Test including another YAML file at the top level."""
        base_config = tmp_path / "base.yaml"
        base_config.write_text(
            """
io:
  reader:
    name: hdf5
    n_entry: 10
validate:
  check_lepton: true
"""
        )

        main_config = tmp_path / "main.yaml"
        main_config.write_text(
            """
include: base.yaml

validate:
  check_lepton: false
"""
        )

        cfg = load_config_file(str(main_config))

        assert cfg["io"]["reader"]["name"] == "hdf5"
        assert cfg["io"]["reader"]["n_entry"] == 10
        assert cfg["validate"]["check_lepton"] is False

    def test_multiple_includes(self, tmp_path):
        """Test including multiple YAML files, merged in order."""
        (tmp_path / "reader.yaml").write_text("io:\n  reader:\n    name: hdf5\n")
        (tmp_path / "writer.yaml").write_text("io:\n  writer:\n    name: csv\n")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "main.yaml").write_text(
            "include:\n  - ../reader.yaml\n  - ../writer.yaml\n"
        )

        cfg = load_config_file(str(tmp_path / "sub" / "main.yaml"))

        assert cfg["io"]["reader"]["name"] == "hdf5"
        assert cfg["io"]["writer"]["name"] == "csv"

    def test_cycle(self, tmp_path):
        """Test that circular includes are detected."""
        (tmp_path / "a.yaml").write_text("include: b.yaml\n")
        (tmp_path / "b.yaml").write_text("include: a.yaml\n")

        with pytest.raises(ConfigCycleError) as excinfo:
            load_config_file(str(tmp_path / "a.yaml"))

        assert len(excinfo.value.cycle_path) == 3

    def test_missing_include(self, tmp_path):
        """Test that missing included files raise."""
        (tmp_path / "main.yaml").write_text("include: missing.yaml\n")

        with pytest.raises(ConfigIncludeError):
            load_config_file(str(tmp_path / "main.yaml"))

    def test_not_a_dict(self, tmp_path):
        """Test that a configuration which is not a mapping raises."""
        (tmp_path / "list.yaml").write_text("- a\n- b\n")

        with pytest.raises(ConfigTypeError):
            load_config_file(str(tmp_path / "list.yaml"))


class TestConfigOperations:
    """Test suite for the configuration dictionary operations."""

    def test_deep_merge(self):
        """Test that nested dictionaries are merged, not replaced."""
        base = {"io": {"reader": {"name": "hdf5", "n_entry": 5}}}
        override = {"io": {"reader": {"n_entry": 10}}}
        merged = deep_merge(base, override)

        assert merged == {"io": {"reader": {"name": "hdf5", "n_entry": 10}}}
        assert base["io"]["reader"]["n_entry"] == 5

    @pytest.mark.parametrize(
        "value_str, value",
        [
            ("10", 10),
            ("1.5", 1.5),
            ("true", True),
            ("[1, 2]", [1, 2]),
            ("hdf5", "hdf5"),
            ("", ""),
        ],
    )
    def test_parse_value(self, value_str, value):
        """Test that values are parsed with YAML typing."""
        assert parse_value(value_str) == value

    def test_set_nested_value(self):
        """Test setting a value along a path which does not exist yet."""
        cfg = {"io": {"reader": {"name": "hdf5"}}}
        assert set_nested_value(cfg, "io.reader.n_entry", 3) is cfg
        assert cfg == {"io": {"reader": {"name": "hdf5", "n_entry": 3}}}

        cfg = set_nested_value({}, "validate.strict", True)
        assert cfg == {"validate": {"strict": True}}

    @pytest.mark.parametrize("key_path", ["", "io..n_entry", "io.reader."])
    def test_empty_path(self, key_path):
        """Test that paths with an empty component are rejected."""
        with pytest.raises(ConfigPathError):
            set_nested_value({}, key_path, 1)

    def test_set_through_scalar(self):
        """Test that a path cannot traverse a scalar value."""
        with pytest.raises(ConfigTypeError):
            set_nested_value({"io": 1}, "io.reader", 2)

    def test_apply_overrides(self):
        """Test applying command-line style overrides."""
        cfg = apply_overrides(
            {"validate": {"strict": False}},
            ["validate.strict=true", "io.reader.n_entry = 4"],
        )
        assert cfg["validate"]["strict"] is True
        assert cfg["io"]["reader"]["n_entry"] == 4

        with pytest.raises(ConfigPathError):
            apply_overrides({}, ["validate.strict"])

import pytest

import grooveshift.settings


def test_defaults () -> None:

	"""An empty configuration means no shift, one pass and the song's own tempo."""

	settings = grooveshift.settings.Settings()

	assert settings.resolution is None
	assert settings.magnitude == 0.0
	assert settings.tolerance == 0.0
	assert settings.loop == 1
	assert settings.bpm is None
	assert settings.pattern_source is None


@pytest.mark.parametrize("kwargs", [
	{"resolution": 0},
	{"tolerance": -1},
	{"loop": 0},
	{"bpm": 0},
	{"clip": -1},
	{"magnitude": float("nan")},
	{"pattern": []},
	{"pattern": [1.0], "pattern_file": "pool.txt"},
])
def test_invalid_settings (kwargs: dict) -> None:

	"""Inconsistent values are rejected before any work is done."""

	with pytest.raises(ValueError):
		grooveshift.settings.Settings(**kwargs)


def test_negative_magnitude_is_allowed () -> None:

	"""A negative magnitude inverts the pattern."""

	assert grooveshift.settings.Settings(magnitude=-10).magnitude == -10


def test_pattern_source_prefers_file () -> None:

	"""The pattern source is the file when one is configured."""

	assert grooveshift.settings.Settings(pattern_file="pool.txt").pattern_source == "pool.txt"
	assert grooveshift.settings.Settings(pattern={1: 1.0}).pattern_source == {1: 1.0}


def test_from_mapping_parses_text_pattern () -> None:

	"""A pattern written as text in a config file is parsed."""

	settings = grooveshift.settings.Settings.from_mapping({"pattern": "0 1 0 -1", "resolution": 8})

	assert settings.pattern == [0.0, 1.0, 0.0, -1.0]
	assert settings.resolution == 8


def test_from_mapping_converts_remap_keys () -> None:

	"""Remap tables are coerced to integers."""

	settings = grooveshift.settings.Settings.from_mapping({"transpose": {"36": "35"}, "bank": None})

	assert settings.transpose == {36: 35}
	assert settings.bank == {}


def test_from_mapping_rejects_unknown_keys () -> None:

	"""Typos in a config file are reported, not ignored."""

	with pytest.raises(ValueError, match="magnitdue"):
		grooveshift.settings.Settings.from_mapping({"magnitdue": 10})


def test_load_config_missing_file (tmp_path) -> None:

	"""A missing config file gives an empty configuration."""

	assert grooveshift.settings.load_config(str(tmp_path / "missing.yaml")) == {}


def test_load_config_yaml (tmp_path) -> None:

	"""YAML values are read as a mapping."""

	path = tmp_path / "config.yaml"
	path.write_text("resolution: 16\nmagnitude: 12.5\npattern: [1, 0, -1, 0]\ntranspose:\n  36: 35\n")

	config = grooveshift.settings.load_config(str(path))
	settings = grooveshift.settings.Settings.from_mapping(config)

	assert settings.resolution == 16
	assert settings.magnitude == 12.5
	assert settings.pattern == [1, 0, -1, 0]
	assert settings.transpose == {36: 35}


def test_load_config_empty_file (tmp_path) -> None:

	"""An empty YAML file is an empty configuration."""

	path = tmp_path / "config.yaml"
	path.write_text("")

	assert grooveshift.settings.load_config(str(path)) == {}


def test_load_config_rejects_non_mapping (tmp_path) -> None:

	"""The top level of a config file must be a mapping."""

	path = tmp_path / "config.yaml"
	path.write_text("- 1\n- 2\n")

	with pytest.raises(ValueError):
		grooveshift.settings.load_config(str(path))

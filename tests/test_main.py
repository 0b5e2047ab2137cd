import pytest

import grooveshift.__main__
import grooveshift.events
import grooveshift.midi_file

import conftest


@pytest.fixture
def input_path (tmp_path) -> str:

	"""A MIDI file with a kick on beat one and a snare on beat two."""

	path = str(tmp_path / "in.mid")
	grooveshift.midi_file.write_song(conftest.make_song([(0, 36, 120), (480, 38, 120)], tempo=500000), path)
	return path


def test_transform_file (input_path: str, tmp_path) -> None:

	"""Note-offs on the off-sixteenths are pushed 29 ticks late by a two-step pattern."""

	output_path = str(tmp_path / "out.mid")

	grooveshift.__main__.main([input_path, "-o", output_path, "-r", "16", "-m", "30", "-p", "0 1"])

	song = grooveshift.midi_file.read_song(output_path)
	assert conftest.deltas(song.performance_track) == [0, 0, 149, 331, 149]
	assert song.performance_track.events[0] == grooveshift.events.NoteOn(0, 36, 0, time=0)


def test_transpose_and_loop (input_path: str, tmp_path) -> None:

	"""Remap and loop options are applied."""

	output_path = str(tmp_path / "out.mid")

	grooveshift.__main__.main([input_path, "-o", output_path, "--transpose", "36:35", "--bank", "0:9", "-l", "3"])

	song = grooveshift.midi_file.read_song(output_path)
	events = song.performance_track.events
	assert len(events) == 13
	assert {e.channel for e in events} == {9}
	assert 36 not in {e.note for e in events}


def test_config_file_supplies_defaults (input_path: str, tmp_path) -> None:

	"""Values from a YAML config are used, and the command line overrides them."""

	config = tmp_path / "config.yaml"
	config.write_text("resolution: 16\nmagnitude: 60\npattern: '0 1'\n")
	output_path = str(tmp_path / "out.mid")

	grooveshift.__main__.main([input_path, "-o", output_path, "-c", str(config), "-m", "30"])

	song = grooveshift.midi_file.read_song(output_path)
	assert conftest.deltas(song.performance_track) == [0, 0, 149, 331, 149]


def test_dump (input_path: str, capsys) -> None:

	"""--dump prints the performance track instead of writing MIDI."""

	grooveshift.__main__.main([input_path, "--dump"])

	lines = capsys.readouterr().out.splitlines()
	assert len(lines) == 5
	assert lines[-1].split() == ["600", "625.0", "120", "38", "note_off"]


def test_grid_mismatch_exits_with_error (tmp_path) -> None:

	"""An off-grid note ends the run with status 1 and no output file."""

	input_path = str(tmp_path / "in.mid")
	output_path = tmp_path / "out.mid"
	grooveshift.midi_file.write_song(conftest.make_song([(50, 36, 70)]), input_path)

	with pytest.raises(SystemExit) as info:
		grooveshift.__main__.main([input_path, "-o", str(output_path), "-r", "16", "-p", "1"])

	assert info.value.code == 1
	assert not output_path.exists()


def test_missing_pattern_file_exits_with_error (input_path: str, tmp_path) -> None:

	"""An unreadable pattern pool ends the run with status 1."""

	with pytest.raises(SystemExit) as info:
		grooveshift.__main__.main([input_path, "-o", str(tmp_path / "out.mid"), "-f", str(tmp_path / "missing.txt")])

	assert info.value.code == 1


def test_clip_flag_defaults_to_zero () -> None:

	"""--clip without a value clips at each copy's boundary."""

	parser = grooveshift.__main__.build_parser()

	assert parser.parse_args(["--clip"]).clip == 0
	assert parser.parse_args(["--clip", "2"]).clip == 2
	assert parser.parse_args([]).clip is None

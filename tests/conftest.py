import typing

import pytest

import grooveshift.events
import grooveshift.timing


NoteTuple = typing.Tuple[int, int, int]


def make_track (notes: typing.Iterable[NoteTuple], channel: int = 0, velocity: int = 100) -> grooveshift.events.Track:

	"""
	Build a delta-time performance track from (start tick, note, length) triples.
	"""

	events: typing.List[grooveshift.events.Event] = []

	for start, note, length in notes:
		events.append(grooveshift.events.NoteOn(channel, note, velocity, time=start))
		events.append(grooveshift.events.NoteOff(channel, note, 0, time=start + length))

	track = grooveshift.events.Track(events=events, absolute=True)
	grooveshift.timing.sort_by_time(track)
	grooveshift.timing.to_relative(track)

	return track


def make_song (
	notes: typing.Iterable[NoteTuple] = (),
	resolution: int = 480,
	tempo: typing.Optional[int] = None,
	numerator: typing.Optional[int] = None,
	subdivisions: int = 8,
) -> grooveshift.events.Song:

	"""
	Build a normalized two-track song: optional tempo and time signature, then the notes.
	"""

	meta = grooveshift.events.Track()

	if numerator is not None:
		meta.events.append(grooveshift.events.TimeSignature(numerator, 2, 24, subdivisions))

	if tempo is not None:
		meta.events.append(grooveshift.events.SetTempo(tempo))

	return grooveshift.events.Song(resolution=resolution, format_kind=1, tracks=[meta, make_track(notes)])


def deltas (track: grooveshift.events.Track) -> typing.List[int]:

	"""Delta times of a track, in order."""

	return [event.time for event in track.events]


@pytest.fixture
def one_bar_song () -> grooveshift.events.Song:

	"""A kick on the downbeat and a snare on beat two, 120 BPM, 480 ticks per quarter."""

	return make_song([(0, 36, 120), (480, 38, 120)])

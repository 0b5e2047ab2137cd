import pytest

import grooveshift.events
import grooveshift.loop

import conftest


def _track (*deltas: int) -> grooveshift.events.Track:

	"""Alternating note-on/note-off pairs with the given deltas."""

	events = []
	for index, delta in enumerate(deltas):
		note = 36 + index // 2
		if index % 2 == 0:
			events.append(grooveshift.events.NoteOn(0, note, 100, time=delta))
		else:
			events.append(grooveshift.events.NoteOff(0, note, 0, time=delta))
	return grooveshift.events.Track(events=events)


def test_single_copy_is_unchanged () -> None:

	"""loop=1 without clipping returns the same events."""

	track = _track(0, 120, 360, 120)
	before = list(track.events)

	grooveshift.loop.loop_track(track, 1, 600)

	assert track.events == before


def test_two_copies_are_concatenated () -> None:

	"""loop=2 repeats the events once, as independent copies."""

	track = _track(0, 120, 360, 120)
	original = list(track.events)

	grooveshift.loop.loop_track(track, 2, 600)

	assert len(track) == 8
	assert track.events[:4] == original
	assert track.events[4:] == original

	track.events[4].time = 999
	assert track.events[0].time == 0


def test_loop_count_must_be_positive () -> None:

	"""There is no such thing as zero copies."""

	with pytest.raises(ValueError):
		grooveshift.loop.loop_track(_track(0, 120), 0, 120)


def test_absolute_track_is_rejected () -> None:

	"""Copies are joined by deltas, so the track must be in delta time."""

	track = _track(0, 120)
	track.absolute = True

	with pytest.raises(ValueError):
		grooveshift.loop.loop_track(track, 2, 120)


def test_clip_is_a_no_op_on_an_unshifted_track () -> None:

	"""Copies that end exactly on their boundary are not altered."""

	track = _track(0, 120, 360, 120)
	reference = _track(0, 120, 360, 120)

	grooveshift.loop.loop_track(track, 2, 600, clip=0)
	grooveshift.loop.loop_track(reference, 2, 600)

	assert track.events == reference.events


def test_clip_pulls_late_events_back_to_the_boundary () -> None:

	"""A last note-off shifted 30 ticks late is clipped to the end of each copy."""

	track = _track(0, 120, 360, 150)

	grooveshift.loop.loop_track(track, 2, 600, clip=0)

	assert conftest.deltas(track) == [0, 120, 360, 120, 0, 120, 360, 120]


def test_clipped_note_on_becomes_note_off () -> None:

	"""A note-on crossing the boundary is turned into a note-off for the same note."""

	track = grooveshift.events.Track(events=[
		grooveshift.events.NoteOn(0, 60, 100, time=0),
		grooveshift.events.NoteOn(3, 62, 90, time=700),
	])

	grooveshift.loop.loop_track(track, 1, 600, clip=0)

	assert track.events[1] == grooveshift.events.NoteOff(3, 62, 90, time=600)


def test_clip_bar_value_moves_the_cutoff () -> None:

	"""With clip=1 the first copy is cut at half its length; only the crossing event changes."""

	track = _track(0, 120, 360, 120)

	grooveshift.loop.loop_track(track, 1, 600, clip=1)

	assert [grooveshift.events.kind(e) for e in track.events] == ["note_on", "note_off", "note_off", "note_off"]
	assert conftest.deltas(track) == [0, 120, 180, 120]
	assert track.events[2].note == 37


def test_accumulator_starts_fresh_each_call () -> None:

	"""Clipping state does not leak from one call to the next."""

	first = _track(0, 120, 360, 150)
	second = _track(0, 120, 360, 150)

	grooveshift.loop.loop_track(first, 2, 600, clip=0)
	grooveshift.loop.loop_track(second, 2, 600, clip=0)

	assert first.events == second.events


def test_clip_accumulator_advance () -> None:

	"""advance returns the position before the move."""

	accumulator = grooveshift.loop.ClipAccumulator()

	assert accumulator.advance(100) == 0
	assert accumulator.advance(20) == 100
	assert accumulator.position == 120

"""
The full transformation, from a decoded song to the song that is written back out.

Order of work:

1. Collapse the song into a meta track and a performance track.
2. Apply note and channel substitutions.
3. Apply the tempo override, then resolve the grid resolution.
4. Shift every note event by the weight of its grid slot.
5. Repeat (and optionally clip) the performance.
6. Put a silent note at the very start, so players that skip leading
   silence still start the performance on time.
"""

import logging
import random
import typing

import grooveshift.deviation
import grooveshift.events
import grooveshift.grid
import grooveshift.loop
import grooveshift.meter
import grooveshift.normalize
import grooveshift.pattern
import grooveshift.remap
import grooveshift.settings
import grooveshift.tempo
import grooveshift.timing


logger = logging.getLogger(__name__)


DumpRow = typing.Tuple[int, float, int, typing.Optional[int], str]


def _playback_mock (track: grooveshift.events.Track) -> grooveshift.events.NoteOn:

	"""
	A zero-velocity note-on at time 0, on the channel and note of the first note event.
	"""

	for event in track.events:
		if isinstance(event, grooveshift.events.NOTE_EVENTS):
			return grooveshift.events.NoteOn(event.channel, event.note, 0, time=0)

	return grooveshift.events.NoteOn(0, 0, 0, time=0)


def transform (
	song: grooveshift.events.Song,
	settings: grooveshift.settings.Settings,
	rng: typing.Optional[random.Random] = None,
) -> grooveshift.events.Song:

	"""
	Run the whole timing transformation on a song, in place, and return it.

	Parameters:
		song: The decoded song. Any number of tracks is accepted.
		settings: Resolution, magnitude, tolerance, pattern and loop settings.
		rng: Random generator for shuffling a pattern pool. Defaults to one
			seeded from ``settings.seed``.

	Raises:
		grooveshift.deviation.GridMatchError: An event is off the grid by
			more than the tolerance.
		grooveshift.pattern.PatternPoolError: The pattern file cannot be read.
	"""

	grooveshift.normalize.normalize(song)

	track = song.performance_track

	grooveshift.remap.remap(track, "note", settings.transpose)
	grooveshift.remap.remap(track, "channel", settings.bank)

	if settings.bpm is not None:
		grooveshift.tempo.set_tempo(song, settings.bpm)

	resolution = settings.resolution or grooveshift.meter.fastest_metrical_level(song)
	length_ticks = grooveshift.timing.total_ticks(track)

	logger.info(
		f"Performance: {len(track)} events over {length_ticks} ticks at "
		f"{grooveshift.tempo.beats_per_minute(song):.2f} BPM, grid resolution {resolution}"
	)

	source = settings.pattern_source

	if source is not None:

		if rng is None:
			rng = random.Random(settings.seed)

		resolver = grooveshift.pattern.PatternResolver(source, rng=rng)
		grid = grooveshift.grid.build_grid(song, resolution)
		tolerance_ticks = grooveshift.tempo.ms_to_ticks(song, settings.tolerance)

		grooveshift.deviation.deviate_track(song, grid, resolver, settings.magnitude, tolerance_ticks)

	else:
		logger.info("No pattern given, timing left unchanged")

	grooveshift.loop.loop_track(track, settings.loop, length_ticks, settings.clip)

	track.events.insert(0, _playback_mock(track))

	return song


def _field (event: grooveshift.events.Event) -> typing.Optional[int]:

	if isinstance(event, grooveshift.events.NOTE_EVENTS):
		return event.note
	if isinstance(event, grooveshift.events.SetTempo):
		return event.tempo
	if isinstance(event, grooveshift.events.TimeSignature):
		return event.numerator
	if isinstance(event, grooveshift.events.Other):
		return None

	raise TypeError(f"Unknown event type: {type(event).__name__}")


def dump (song: grooveshift.events.Song) -> typing.List[DumpRow]:

	"""
	Describe the performance track as (absolute time, milliseconds, delta, field, kind) rows.

	Milliseconds are measured from the start at the song tempo.

	The field is the note number for note events, the tempo for tempo events,
	the numerator for time signatures and None otherwise.
	"""

	track = song.performance_track if len(song.tracks) > 1 else song.tracks[0]
	times = grooveshift.timing.absolute_times(track)

	rows: typing.List[DumpRow] = []
	previous = 0

	for absolute, event in zip(times, track.events):
		rows.append((
			absolute,
			grooveshift.tempo.ticks_to_ms(song, absolute),
			absolute - previous,
			_field(event),
			grooveshift.events.kind(event),
		))
		previous = absolute

	return rows


def format_dump (rows: typing.Iterable[DumpRow]) -> str:
	return "\n".join(
		f"{absolute:>8} {milliseconds:>10.1f} {delta:>6} {'' if field is None else field:>8}  {kind}"
		for absolute, milliseconds, delta, field, kind in rows
	)

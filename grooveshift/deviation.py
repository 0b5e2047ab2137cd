import logging

import grooveshift.events
import grooveshift.grid
import grooveshift.pattern
import grooveshift.tempo
import grooveshift.timing


logger = logging.getLogger(__name__)


class GridMatchError (ValueError):

	"""
	Raised when an event lies further than the tolerance from every grid slot.

	This means the resolution, tolerance and pattern do not fit the timing of
	the input, so the run stops rather than leaving the event unshifted.
	"""

	def __init__ (self, event: grooveshift.events.Event, ticks: int, grid: grooveshift.grid.Grid, tolerance: int) -> None:

		self.event = event
		self.ticks = ticks

		super().__init__(
			f"No grid slot within {tolerance} ticks of {grooveshift.events.kind(event)} at tick {ticks} "
			f"(resolution {grid.resolution}, slot every {grid.step:.2f} ticks). "
			"Try a larger tolerance or a different resolution."
		)


def deviation_ticks (song: grooveshift.events.Song, magnitude_ms: float, weight: float) -> int:

	"""
	Tick offset for a weighted deviation: the magnitude in milliseconds scaled by the weight.
	"""

	return grooveshift.timing.round_half_away(grooveshift.tempo.ms_to_ticks(song, magnitude_ms * weight))


def apply_deviation (
	song: grooveshift.events.Song,
	event: grooveshift.events.Event,
	grid: grooveshift.grid.Grid,
	resolver: grooveshift.pattern.PatternResolver,
	magnitude_ms: float,
	tolerance_ticks: int,
) -> int:

	"""
	Shift one absolute-time event by the pattern weight of its grid slot.

	Returns the number of ticks the event moved (negative = earlier). The
	shifted time is never earlier than the start of the track.

	Raises:
		GridMatchError: The event does not sit on the grid within tolerance.
	"""

	match = grooveshift.grid.match_slot(grid, event.time, tolerance_ticks)

	if match is None:
		raise GridMatchError(event, event.time, grid, tolerance_ticks)

	weights = resolver.weights(match.bar)
	weight = grooveshift.pattern.weight_for_slot(weights, match.slot)
	delta = deviation_ticks(song, magnitude_ms, weight)

	shifted = max(0, event.time + delta)
	moved = shifted - event.time
	event.time = shifted

	return moved


def deviate_track (
	song: grooveshift.events.Song,
	grid: grooveshift.grid.Grid,
	resolver: grooveshift.pattern.PatternResolver,
	magnitude_ms: float,
	tolerance_ticks: int,
) -> grooveshift.events.Song:

	"""
	Apply pattern-weighted deviations to the note events of the performance track.

	The track is converted to absolute time, every note event is shifted
	(anything else keeps its absolute time and is never grid-matched), the
	events are re-sorted (shifts can swap neighbours) and the track is
	converted back to delta times.
	"""

	track = song.performance_track
	grooveshift.timing.to_absolute(track)

	shifted_count = 0

	for index, event in enumerate(track.events):

		if not isinstance(event, grooveshift.events.NOTE_EVENTS):
			continue

		moved = apply_deviation(song, event, grid, resolver, magnitude_ms, tolerance_ticks)
		if moved:
			shifted_count += 1
			logger.debug(f"Event {index} ({grooveshift.events.kind(event)}) moved {moved:+d} ticks to {event.time}")

	grooveshift.timing.sort_by_time(track)
	grooveshift.timing.to_relative(track)

	logger.info(f"Shifted {shifted_count} of {len(track)} events")

	return song

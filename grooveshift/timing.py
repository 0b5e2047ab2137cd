import math
import typing

import grooveshift.events


def round_half_away (value: float) -> int:

	"""
	Round to the nearest integer, with halves rounded away from zero.

	Python's ``round()`` rounds halves to even, which would make a +1.5 tick
	shift and a -1.5 tick shift differ in size.
	"""

	return int(math.copysign(math.floor(abs(value) + 0.5), value))


def to_absolute (track: grooveshift.events.Track) -> grooveshift.events.Track:

	"""
	Replace every delta time with the running total from the start of the track.

	The first event's absolute time equals its own delta. Converts in place and
	returns the track for chaining. A track already in absolute form is left alone.
	"""

	if track.absolute:
		return track

	position = 0

	for event in track.events:
		position += event.time
		event.time = position

	track.absolute = True

	return track


def to_relative (track: grooveshift.events.Track) -> grooveshift.events.Track:

	"""
	Replace every absolute time with the difference from the previous event.

	The events must already be sorted by absolute time; an unsorted track
	produces negative deltas. The first event keeps its absolute time as its delta.
	"""

	if not track.absolute:
		return track

	previous = 0

	for event in track.events:
		current = event.time
		event.time = current - previous
		previous = current

	track.absolute = False

	return track


def sort_by_time (track: grooveshift.events.Track) -> grooveshift.events.Track:

	"""
	Stable sort of an absolute-time track, so equal times keep their order.
	"""

	if not track.absolute:
		raise ValueError("Only absolute-time tracks can be sorted")

	track.events.sort(key=lambda event: event.time)

	return track


def total_ticks (track: grooveshift.events.Track) -> int:

	"""
	Return the position of the last event, in ticks from the start of the track.
	"""

	if not track.events:
		return 0

	if track.absolute:
		return max(event.time for event in track.events)

	return sum(event.time for event in track.events)


def absolute_times (track: grooveshift.events.Track) -> typing.List[int]:

	"""
	Return the absolute time of every event without converting the track.
	"""

	if track.absolute:
		return [event.time for event in track.events]

	times = []
	position = 0

	for event in track.events:
		position += event.time
		times.append(position)

	return times

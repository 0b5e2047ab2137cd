import dataclasses
import logging
import typing

import grooveshift.events
import grooveshift.timing


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class ClipAccumulator:

	"""
	Running position of the looped output, in ticks from its start.
	"""

	position: int = 0

	def advance (self, delta: int) -> int:

		"""Move forward by a delta and return the position before the move."""

		before = self.position
		self.position += delta
		return before


def _truncate (event: grooveshift.events.Event, delta: int) -> grooveshift.events.Event:

	"""
	Turn a boundary-crossing event into a note-off at a shortened delta.

	Note events keep their channel, note and velocity. Other events have no
	note to release and only lose their delta.
	"""

	if isinstance(event, grooveshift.events.NOTE_EVENTS):
		return grooveshift.events.NoteOff(event.channel, event.note, event.velocity, time=delta)

	if isinstance(event, grooveshift.events.META_EVENTS):
		return dataclasses.replace(event, time=delta)

	raise TypeError(f"Unknown event type: {type(event).__name__}")


def loop_track (
	track: grooveshift.events.Track,
	count: int = 1,
	length_ticks: int = 0,
	clip: typing.Optional[int] = None,
) -> grooveshift.events.Track:

	"""
	Repeat a delta-time track ``count`` times, optionally clipping each copy.

	With ``clip`` set to a bar value ``b``, copy ``i`` (counting from 1) is cut
	at ``length_ticks / (b + 1) * i`` ticks from the start of the output. The
	first event of the copy that reaches the cutoff becomes a note-off placed
	exactly on it; later events of that copy are kept as they are. With
	``clip=0`` every copy ends where the unshifted performance would have
	ended, so shifts that push the last notes late do not make copies drift.

	Parameters:
		track: The performance track, in delta time.
		count: Number of copies (at least 1).
		length_ticks: Nominal length of one copy, used for the clip cutoffs.
		clip: Bar value for clipping, or None to concatenate copies untouched.
	"""

	if count < 1:
		raise ValueError("loop count must be at least 1")

	if clip is not None and clip < 0:
		raise ValueError("clip must not be negative")

	if track.absolute:
		raise ValueError("Only delta-time tracks can be looped")

	accumulator = ClipAccumulator()
	events: typing.List[grooveshift.events.Event] = []

	for copy in range(1, count + 1):

		cutoff = length_ticks / (clip + 1) * copy if clip is not None else None
		clipped = False

		for original in track.events:

			event = dataclasses.replace(original)
			before = accumulator.advance(event.time)

			if cutoff is not None and not clipped and accumulator.position >= cutoff:
				delta = max(0, grooveshift.timing.round_half_away(cutoff - before))
				event = _truncate(event, delta)
				accumulator.position = before + delta
				clipped = True
				logger.debug(f"Copy {copy} clipped at tick {cutoff:.0f}")

			events.append(event)

	if count > 1:
		logger.info(f"Looped {len(track)} events {count} times{' with clipping' if clip is not None else ''}")

	track.events = events

	return track

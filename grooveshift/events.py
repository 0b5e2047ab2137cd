import dataclasses
import typing

import grooveshift.constants


@dataclasses.dataclass
class NoteOn:

	"""
	A note-on event. Velocity 0 is kept as a note-on, as in the file.
	"""

	channel: int
	note: int
	velocity: int
	time: int = 0


@dataclasses.dataclass
class NoteOff:

	"""
	A note-off event.
	"""

	channel: int
	note: int
	velocity: int
	time: int = 0


@dataclasses.dataclass
class SetTempo:

	"""
	A tempo change, in microseconds per quarter note.
	"""

	tempo: int
	time: int = 0


@dataclasses.dataclass
class TimeSignature:

	"""
	A time signature, with the denominator stored as a power of two (2 = quarter note).
	"""

	numerator: int = 4
	denominator_exponent: int = 2
	clocks_per_click: int = 24
	subdivisions_per_quarter: int = 8
	time: int = 0

	@property
	def denominator (self) -> int:
		return 2 ** self.denominator_exponent


@dataclasses.dataclass
class Other:

	"""
	Any event the timing engine does not interpret. The payload is carried through untouched.
	"""

	payload: typing.Any
	time: int = 0


Event = typing.Union[NoteOn, NoteOff, SetTempo, TimeSignature, Other]

# Performance track events, and everything that belongs on the meta track.
NOTE_EVENTS = (NoteOn, NoteOff)
META_EVENTS = (SetTempo, TimeSignature, Other)


def kind (event: Event) -> str:

	"""
	Return a short name for the event's variant, as used in diagnostic output.
	"""

	if isinstance(event, NoteOn):
		return "note_on"
	if isinstance(event, NoteOff):
		return "note_off"
	if isinstance(event, SetTempo):
		return "set_tempo"
	if isinstance(event, TimeSignature):
		return "time_signature"
	if isinstance(event, Other):
		return "other"

	raise TypeError(f"Unknown event type: {type(event).__name__}")


@dataclasses.dataclass
class Track:

	"""
	An ordered list of events.

	``absolute`` records how the ``time`` field of every event is read: as the
	delta from the previous event (False) or as ticks from the start of the
	track (True). A track is never in a mixed state between conversions.
	"""

	events: typing.List[Event] = dataclasses.field(default_factory=list)
	absolute: bool = False

	def __len__ (self) -> int:
		return len(self.events)

	def __iter__ (self) -> typing.Iterator[Event]:
		return iter(self.events)


@dataclasses.dataclass
class Song:

	"""
	A decoded performance: the tick resolution, the file format, and its tracks.

	After normalization a song holds exactly two tracks, the meta track
	(tempo, time signature and anything unclassified) followed by the
	performance track (note events only).

	Parameters:
		resolution: Ticks per quarter note. Must be positive.
		format_kind: Standard MIDI File format (0, 1 or 2).
		tracks: Tracks in file order.
	"""

	resolution: int
	format_kind: int = 1
	tracks: typing.List[Track] = dataclasses.field(default_factory=list)

	def __post_init__ (self) -> None:
		if self.resolution <= 0:
			raise ValueError("resolution must be positive")

	@property
	def meta_track (self) -> Track:
		return self.tracks[grooveshift.constants.META_TRACK]

	@property
	def performance_track (self) -> Track:
		return self.tracks[grooveshift.constants.PERFORMANCE_TRACK]

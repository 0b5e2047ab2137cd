import dataclasses
import logging
import math
import typing

import grooveshift.events
import grooveshift.meter
import grooveshift.timing


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Grid:

	"""
	Reference tick positions for a performance at a given resolution.

	The grid divides every measure into ``resolution`` evenly spaced slots
	and lays them out across the whole performance track. ``bars`` holds the
	absolute tick position of every slot, grouped one list per bar; the last
	bar may be shorter when the performance does not end on a bar line.

	Parameters:
		resolution: Grid slots per measure (16 = sixteenth notes in 4/4).
		ticks_per_quarter: The song's tick resolution.
		beats_per_measure: Quarter notes per measure, from the time signature.
		total_ticks: Length of the performance track in ticks.
		note_count: Number of grid slots spanning the performance track.
		bars: Absolute slot positions, grouped by bar.
	"""

	resolution: int
	ticks_per_quarter: int
	beats_per_measure: int
	total_ticks: int
	note_count: int
	bars: typing.List[typing.List[float]] = dataclasses.field(default_factory=list)

	def __post_init__ (self) -> None:
		if self.resolution <= 0:
			raise ValueError("resolution must be positive")

	@property
	def step (self) -> float:

		"""Distance between two neighbouring slots, in ticks."""

		return self.ticks_per_quarter / (self.resolution / self.beats_per_measure)

	@property
	def bar_count (self) -> float:
		return self.note_count / self.resolution

	@property
	def bar_length (self) -> float:

		"""
		Length of one bar in ticks, measured as the performance length over the bar count.
		"""

		if self.note_count == 0 or self.total_ticks == 0:
			return self.step * self.resolution

		return self.total_ticks / self.bar_count

	def bar_start (self, bar: int) -> float:
		return bar * self.resolution * self.step

	def bar_offsets (self, bar: int) -> typing.List[float]:

		"""
		Slot positions of a bar relative to the bar's first slot.

		Bars past the end of the grid, or a short final bar, are given the full
		layout of ``resolution`` slots so that events at the very end of the
		performance still find their slot.
		"""

		if 0 <= bar < len(self.bars) and len(self.bars[bar]) == self.resolution:
			first = self.bars[bar][0]
			return [position - first for position in self.bars[bar]]

		return [slot * self.step for slot in range(self.resolution)]


@dataclasses.dataclass(frozen=True)
class GridMatch:

	"""
	The grid slot an event was matched to.
	"""

	bar: int
	slot: int


def note_count (song: grooveshift.events.Song, resolution: int) -> int:

	"""
	Number of grid slots spanning the whole performance track at a resolution.
	"""

	total = grooveshift.timing.total_ticks(song.performance_track)
	beats = grooveshift.meter.beats_per_measure(song)

	return grooveshift.timing.round_half_away((total / song.resolution) * (resolution / beats))


def build_grid (song: grooveshift.events.Song, resolution: int) -> Grid:

	"""
	Build the reference grid for a song at a resolution.

	The k-th slot sits at ``k * ticks_per_quarter / (resolution / beats_per_measure)``.
	Slots are grouped into bars of ``resolution`` entries.
	"""

	if resolution <= 0:
		raise ValueError("resolution must be positive")

	grid = Grid(
		resolution = resolution,
		ticks_per_quarter = song.resolution,
		beats_per_measure = grooveshift.meter.beats_per_measure(song),
		total_ticks = grooveshift.timing.total_ticks(song.performance_track),
		note_count = note_count(song, resolution),
	)

	positions = [k * grid.step for k in range(grid.note_count)]

	grid.bars = [positions[i:i + resolution] for i in range(0, len(positions), resolution)]

	logger.debug(f"Grid at resolution {resolution}: {grid.note_count} slots in {len(grid.bars)} bars, step {grid.step:.2f} ticks")

	return grid


def current_bar (grid: Grid, ticks: int) -> int:

	"""
	Index of the bar an absolute tick position falls in.
	"""

	return int(math.floor(ticks / grid.bar_length))


def match_slot (grid: Grid, ticks: int, tolerance: int) -> typing.Optional[GridMatch]:

	"""
	Find the grid slot an absolute tick position belongs to.

	The position is measured from the start of its bar and compared with the
	bar's slots in ascending order; the first slot within ``tolerance`` ticks
	wins. A position within tolerance of the next bar's downbeat matches slot
	0 of that bar. Returns None when no slot is close enough.
	"""

	if tolerance < 0:
		raise ValueError("tolerance must not be negative")

	bar = current_bar(grid, ticks)
	offset = ticks - grid.bar_start(bar)

	for slot, position in enumerate(grid.bar_offsets(bar)):
		if abs(offset - position) <= tolerance:
			return GridMatch(bar=bar, slot=slot)

	if abs(offset - grid.resolution * grid.step) <= tolerance:
		return GridMatch(bar=bar + 1, slot=0)

	return None

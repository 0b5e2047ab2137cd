import logging
import typing

import grooveshift.events


logger = logging.getLogger(__name__)


REMAP_FIELDS = ("note", "channel")


def remap (track: grooveshift.events.Track, field: str, mapping: typing.Mapping[int, int]) -> grooveshift.events.Track:

	"""
	Substitute note numbers (``field="note"``) or channels (``field="channel"``) on note events.

	Values without an entry in ``mapping`` are left unchanged. Other events
	are never touched. Modifies the track in place and returns it.

	Example::

		# Move the kick from C1 to B0 and the snare from D1 to E1
		remap(track, "note", {36: 35, 38: 40})

		# Send everything on channel 0 to channel 9
		remap(track, "channel", {0: 9})
	"""

	if field not in REMAP_FIELDS:
		raise ValueError(f"Cannot remap {field!r}, expected one of {REMAP_FIELDS}")

	if not mapping:
		return track

	changed = 0

	for event in track.events:

		if not isinstance(event, grooveshift.events.NOTE_EVENTS):
			continue

		value = getattr(event, field)

		if value in mapping:
			setattr(event, field, mapping[value])
			changed += 1

	logger.info(f"Remapped {field} on {changed} events")

	return track


def parse_mapping (pairs: typing.Iterable[str]) -> typing.Dict[int, int]:

	"""
	Parse ``FROM:TO`` strings (as given on the command line) into a mapping.
	"""

	mapping: typing.Dict[int, int] = {}

	for pair in pairs:

		source, separator, target = pair.partition(":")

		if not separator:
			raise ValueError(f"Expected FROM:TO, got {pair!r}")

		mapping[int(source)] = int(target)

	return mapping

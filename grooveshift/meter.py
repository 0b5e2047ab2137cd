import typing

import grooveshift.constants
import grooveshift.events


def _find_time_signature (song: grooveshift.events.Song) -> typing.Optional[grooveshift.events.TimeSignature]:

	for event in song.meta_track.events:
		if isinstance(event, grooveshift.events.TimeSignature):
			return event

	return None


def beats_per_measure (song: grooveshift.events.Song) -> int:

	"""
	Numerator of the song's first time signature, or 4 when it has none.
	"""

	signature = _find_time_signature(song)

	if signature is None:
		return grooveshift.constants.DEFAULT_BEATS_PER_MEASURE

	return signature.numerator


def fastest_metrical_level (song: grooveshift.events.Song) -> int:

	"""
	The finest subdivision count per measure the time signature describes.

	This is the beats per measure multiplied by the signature's subdivisions
	per quarter note (8 in most files, giving 32 for 4/4). Without a time
	signature the level is 16, a sixteenth-note grid. Used as the grid
	resolution when none is given.
	"""

	signature = _find_time_signature(song)

	if signature is None:
		return grooveshift.constants.DEFAULT_METRICAL_LEVEL

	return signature.numerator * signature.subdivisions_per_quarter

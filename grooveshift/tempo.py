import logging
import typing

import grooveshift.constants
import grooveshift.events
import grooveshift.timing


logger = logging.getLogger(__name__)


def _find_tempo (song: grooveshift.events.Song) -> typing.Optional[grooveshift.events.SetTempo]:

	for event in song.meta_track.events:
		if isinstance(event, grooveshift.events.SetTempo):
			return event

	return None


def tempo_microseconds (song: grooveshift.events.Song) -> int:

	"""
	Microseconds per quarter note, from the first tempo event of the meta track.

	Files without tempo metadata are read at the MIDI default of 120 BPM.
	"""

	event = _find_tempo(song)

	if event is None:
		return grooveshift.constants.DEFAULT_TEMPO

	return event.tempo


def beats_per_minute (song: grooveshift.events.Song) -> float:
	return grooveshift.constants.MICROSECONDS_PER_MINUTE / tempo_microseconds(song)


def microseconds_per_tick (song: grooveshift.events.Song) -> float:
	return tempo_microseconds(song) / song.resolution


def milliseconds_per_tick (song: grooveshift.events.Song) -> float:
	return microseconds_per_tick(song) / grooveshift.constants.MICROSECONDS_PER_MILLISECOND


def ms_to_ticks (song: grooveshift.events.Song, milliseconds: float) -> int:

	"""
	Convert a duration in milliseconds to the nearest whole number of ticks at the song's tempo.
	"""

	return grooveshift.timing.round_half_away(milliseconds / milliseconds_per_tick(song))


def ticks_to_ms (song: grooveshift.events.Song, ticks: float) -> float:
	return ticks * milliseconds_per_tick(song)


def bpm_to_tempo (bpm: float) -> int:

	"""
	Convert beats per minute to microseconds per quarter note.
	"""

	if bpm <= 0:
		raise ValueError("bpm must be positive")

	return grooveshift.timing.round_half_away(grooveshift.constants.MICROSECONDS_PER_MINUTE / bpm)


def set_tempo (song: grooveshift.events.Song, bpm: float) -> grooveshift.events.Song:

	"""
	Set the song tempo.

	Overwrites the first tempo event of the meta track, or inserts one at
	tick 0 when the song has none, so the whole song plays at the new tempo.
	Modifies the song in place and returns it.
	"""

	tempo = bpm_to_tempo(bpm)
	event = _find_tempo(song)

	if event is None:
		song.meta_track.events.insert(0, grooveshift.events.SetTempo(tempo=tempo, time=0))
	else:
		event.tempo = tempo

	logger.info(f"Tempo set to {bpm:.2f} BPM ({tempo} us per quarter note)")

	return song

import logging
import math
import typing

import mido

import grooveshift.events


logger = logging.getLogger(__name__)


def _decode_message (message: typing.Union[mido.Message, mido.MetaMessage]) -> grooveshift.events.Event:

	if message.type == 'note_on':
		return grooveshift.events.NoteOn(message.channel, message.note, message.velocity, time=message.time)

	if message.type == 'note_off':
		return grooveshift.events.NoteOff(message.channel, message.note, message.velocity, time=message.time)

	if message.type == 'set_tempo':
		return grooveshift.events.SetTempo(message.tempo, time=message.time)

	if message.type == 'time_signature':
		return grooveshift.events.TimeSignature(
			numerator = message.numerator,
			denominator_exponent = int(math.log2(message.denominator)),
			clocks_per_click = message.clocks_per_click,
			subdivisions_per_quarter = message.notated_32nd_notes_per_beat,
			time = message.time,
		)

	return grooveshift.events.Other(message.copy(time=0), time=message.time)


def _encode_event (event: grooveshift.events.Event) -> typing.Union[mido.Message, mido.MetaMessage]:

	if isinstance(event, grooveshift.events.NoteOn):
		return mido.Message('note_on', channel=event.channel, note=event.note, velocity=event.velocity, time=event.time)

	if isinstance(event, grooveshift.events.NoteOff):
		return mido.Message('note_off', channel=event.channel, note=event.note, velocity=event.velocity, time=event.time)

	if isinstance(event, grooveshift.events.SetTempo):
		return mido.MetaMessage('set_tempo', tempo=event.tempo, time=event.time)

	if isinstance(event, grooveshift.events.TimeSignature):
		return mido.MetaMessage(
			'time_signature',
			numerator = event.numerator,
			denominator = event.denominator,
			clocks_per_click = event.clocks_per_click,
			notated_32nd_notes_per_beat = event.subdivisions_per_quarter,
			time = event.time,
		)

	if isinstance(event, grooveshift.events.Other):
		return event.payload.copy(time=event.time)

	raise TypeError(f"Unknown event type: {type(event).__name__}")


def from_midi_file (midi: mido.MidiFile) -> grooveshift.events.Song:

	"""
	Convert a parsed MIDI file into a song.

	End-of-track markers are dropped; mido writes a fresh one at the end of
	every track when the file is saved.
	"""

	song = grooveshift.events.Song(resolution=midi.ticks_per_beat, format_kind=midi.type)

	for midi_track in midi.tracks:
		track = grooveshift.events.Track()
		for message in midi_track:
			if message.type == 'end_of_track':
				continue
			track.events.append(_decode_message(message))
		song.tracks.append(track)

	return song


def to_midi_file (song: grooveshift.events.Song) -> mido.MidiFile:

	"""
	Convert a song back into a MIDI file. Every track must be in delta time.
	"""

	midi = mido.MidiFile(type=song.format_kind, ticks_per_beat=song.resolution)

	for index, track in enumerate(song.tracks):

		if track.absolute:
			raise ValueError(f"Track {index} is in absolute time and cannot be encoded")

		midi.tracks.append(mido.MidiTrack(_encode_event(event) for event in track.events))

	return midi


def read_song (source: typing.Union[str, typing.BinaryIO]) -> grooveshift.events.Song:

	"""
	Read a Standard MIDI File from a path or an open binary stream.
	"""

	if isinstance(source, str):
		midi = mido.MidiFile(filename=source)
	else:
		midi = mido.MidiFile(file=source)

	song = from_midi_file(midi)

	logger.info(f"Read {len(song.tracks)} tracks at {song.resolution} ticks per quarter note (format {song.format_kind})")

	return song


def write_song (song: grooveshift.events.Song, target: typing.Union[str, typing.BinaryIO]) -> None:

	"""
	Write a song as a Standard MIDI File to a path or an open binary stream.
	"""

	midi = to_midi_file(song)

	if isinstance(target, str):
		midi.save(filename=target)
	else:
		midi.save(file=target)

	logger.info(f"Wrote {len(midi.tracks)} tracks")

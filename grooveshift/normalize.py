import logging

import grooveshift.events


logger = logging.getLogger(__name__)


def normalize (song: grooveshift.events.Song) -> grooveshift.events.Song:

	"""
	Collapse a song of any shape into one meta track and one performance track.

	A song with exactly two tracks is returned unchanged. Otherwise every event
	of every track is classified, in the order it is met: note events go to the
	performance track and everything else (tempo, time signature, unclassified)
	goes to the meta track. Events keep their own delta times and are not
	re-sorted.
	"""

	if len(song.tracks) == 2:
		return song

	meta = grooveshift.events.Track()
	performance = grooveshift.events.Track()

	for track in song.tracks:
		for event in track.events:

			if isinstance(event, grooveshift.events.NOTE_EVENTS):
				performance.events.append(event)

			elif isinstance(event, grooveshift.events.META_EVENTS):
				meta.events.append(event)

			else:
				raise TypeError(f"Unknown event type: {type(event).__name__}")

	logger.info(f"Normalized {len(song.tracks)} tracks into meta ({len(meta)} events) and performance ({len(performance)} events)")

	song.tracks = [meta, performance]
	song.format_kind = 1

	return song

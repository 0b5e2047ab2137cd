"""
Push the off-beat sixteenths of a drum loop behind the beat.

Usage:

	python examples/laid_back_drums.py drums.mid drums_laid_back.mid

The pattern below is named: only slots 2, 4, 6 ... (the "e" and "a" of each
beat, counting from 1) carry weight, so downbeats stay put. With a magnitude
of 20 ms the off-beats land up to 20 ms late. A tolerance of 15 ms lets a
loosely played input still find its grid slots.
"""

import logging
import sys

import grooveshift


logging.basicConfig(level=logging.INFO)


def main () -> None:

	if len(sys.argv) != 3:
		print(__doc__)
		sys.exit(1)

	song = grooveshift.read_song(sys.argv[1])

	settings = grooveshift.Settings(
		resolution = 16,
		magnitude = 20,
		tolerance = 15,
		pattern = {2: 1.0, 4: 0.6, 6: 1.0, 8: 0.6, 10: 1.0, 12: 0.6, 14: 1.0, 16: 0.6},
	)

	grooveshift.transform(song, settings)
	grooveshift.write_song(song, sys.argv[2])


if __name__ == "__main__":
	main()

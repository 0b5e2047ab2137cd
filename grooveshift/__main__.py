import argparse
import logging
import sys
import typing

import grooveshift.deviation
import grooveshift.humanize
import grooveshift.midi_file
import grooveshift.pattern
import grooveshift.remap
import grooveshift.settings


logger = logging.getLogger("grooveshift")


def build_parser () -> argparse.ArgumentParser:

	"""
	Command line options. Every option left unset falls back to the config file, then to the defaults.
	"""

	parser = argparse.ArgumentParser(
		prog = "grooveshift",
		description = "Apply pattern-weighted microtiming to the notes of a MIDI file."
	)

	parser.add_argument("input", nargs="?", default="-", help="Input MIDI file (default: stdin)")
	parser.add_argument("-o", "--output", default="-", help="Output MIDI file (default: stdout)")
	parser.add_argument("-c", "--config", help="YAML file with default settings")
	parser.add_argument("-r", "--resolution", type=int, help="Grid slots per measure (default: fastest level of the time signature)")
	parser.add_argument("-m", "--magnitude", type=float, help="Deviation at weight 1.0, in ms (default: 0)")
	parser.add_argument("-t", "--tolerance", type=float, help="Distance from a grid slot that still matches it, in ms (default: 0)")
	parser.add_argument("-l", "--loop", type=int, help="Number of times to repeat the performance (default: 1)")
	parser.add_argument("--bpm", type=float, help="Tempo override (default: the file's tempo)")
	parser.add_argument("--transpose", action="append", metavar="FROM:TO", help="Replace a note number, may be repeated")
	parser.add_argument("--bank", action="append", metavar="FROM:TO", help="Replace a channel, may be repeated")
	parser.add_argument("-p", "--pattern", help="Weights, positional ('1 0 -1 0') or named ('1:1 3:-1')")
	parser.add_argument("-f", "--pattern-file", help="Pattern pool file, one pattern per line, rotated per bar")
	parser.add_argument("--clip", type=int, nargs="?", const=0, metavar="BARS", help="Clip looped copies at their boundary (default bar value: 0)")
	parser.add_argument("--seed", type=int, help="Seed for the pattern pool shuffle")
	parser.add_argument("--dump", action="store_true", help="Print the transformed performance track instead of writing MIDI")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log every shifted event")

	return parser


def settings_from_args (args: argparse.Namespace) -> grooveshift.settings.Settings:

	"""
	Merge the config file (if any) with the command line, the command line winning.
	"""

	config: typing.Dict[str, typing.Any] = {}

	if args.config:
		config.update(grooveshift.settings.load_config(args.config))

	for key in ("resolution", "magnitude", "tolerance", "loop", "bpm", "pattern_file", "clip", "seed"):
		value = getattr(args, key)
		if value is not None:
			config[key] = value

	if args.pattern is not None:
		config["pattern"] = grooveshift.pattern.parse_pattern(args.pattern)
		if args.pattern_file is None:
			config.pop("pattern_file", None)

	elif args.pattern_file is not None:
		config.pop("pattern", None)

	if args.transpose:
		config["transpose"] = grooveshift.remap.parse_mapping(args.transpose)

	if args.bank:
		config["bank"] = grooveshift.remap.parse_mapping(args.bank)

	return grooveshift.settings.Settings.from_mapping(config)


def main (argv: typing.Optional[typing.List[str]] = None) -> None:

	"""
	Read a MIDI file, transform it and write the result.
	"""

	parser = build_parser()
	args = parser.parse_args(argv)

	# Logs go to stderr so that stdout can carry the MIDI output.
	logging.basicConfig(
		level = logging.DEBUG if args.verbose else logging.INFO,
		stream = sys.stderr,
		format = "%(levelname)s %(name)s: %(message)s"
	)

	try:
		settings = settings_from_args(args)

		source = sys.stdin.buffer if args.input == "-" else args.input
		song = grooveshift.midi_file.read_song(source)

		grooveshift.humanize.transform(song, settings)

		if args.dump:
			print(grooveshift.humanize.format_dump(grooveshift.humanize.dump(song)))
			return

		target = sys.stdout.buffer if args.output == "-" else args.output
		grooveshift.midi_file.write_song(song, target)

	except grooveshift.deviation.GridMatchError as e:
		logger.error(f"{e}")
		sys.exit(1)

	except grooveshift.pattern.PatternPoolError as e:
		logger.error(f"{e}")
		sys.exit(1)

	except (OSError, EOFError, ValueError) as e:
		logger.error(f"Failed: {e}")
		sys.exit(1)


if __name__ == "__main__":
	main()

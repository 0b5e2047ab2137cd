import collections
import collections.abc
import logging
import random
import re
import typing


logger = logging.getLogger(__name__)


Weights = typing.List[float]
PatternSource = typing.Union[typing.Sequence[float], typing.Mapping[int, float], str]


class PatternPoolError(Exception):
	pass


def normalize_weights (weights: typing.Sequence[float]) -> Weights:

	"""
	Scale weights into the range -1..1 by dividing by the largest magnitude.

	An all-zero sequence is returned unchanged.
	"""

	weights = [float(w) for w in weights]

	if not weights:
		return weights

	peak = max(abs(w) for w in weights)

	if peak == 0:
		return weights

	return [w / peak for w in weights]


def named_to_positional (named: typing.Mapping[int, float]) -> Weights:

	"""
	Convert a sparse mapping of 1-based slot numbers to a positional list.

	Slots missing below the highest named slot are filled with 0, so
	``{3: 0.5, 1: 1.0}`` becomes ``[1.0, 0.0, 0.5]``.
	"""

	if not named:
		return []

	for slot in named:
		if slot < 1:
			raise ValueError(f"Named slots are numbered from 1, got {slot}")

	return [float(named.get(slot, 0.0)) for slot in range(1, max(named) + 1)]


def parse_pattern (text: str) -> typing.Union[Weights, typing.Dict[int, float]]:

	"""
	Parse a pattern written on the command line or in a config file.

	Weights are separated by whitespace or commas. Plain numbers give a
	positional pattern (``"1 0 -0.5 0"``); ``slot:weight`` pairs give a named
	pattern (``"1:1.0 3:0.5"``). The two forms cannot be mixed.
	"""

	tokens = [token for token in re.split(r"[\s,]+", text.strip()) if token]

	if not tokens:
		raise ValueError("Pattern must not be empty")

	named = [":" in token for token in tokens]

	if all(named):
		pairs: typing.Dict[int, float] = {}
		for token in tokens:
			slot, weight = token.split(":", 1)
			pairs[int(slot)] = float(weight)
		return pairs

	if any(named):
		raise ValueError(f"Pattern mixes positional and named weights: {text!r}")

	return [float(token) for token in tokens]


def load_pattern_pool (path: str, rng: typing.Optional[random.Random] = None) -> "PatternPool":

	"""
	Read a pattern pool file: one whitespace-separated pattern per line.

	Blank lines are skipped. Every pattern is normalized independently and
	the pool is shuffled once.
	"""

	try:
		with open(path, "r", encoding="utf-8") as f:
			lines = f.readlines()
	except (OSError, UnicodeDecodeError) as e:
		raise PatternPoolError(f"Cannot read pattern file {path}: {e}") from e

	patterns: typing.List[Weights] = []

	for line_number, line in enumerate(lines, 1):

		if not line.strip():
			continue

		try:
			weights = [float(token) for token in line.split()]
		except ValueError as e:
			raise PatternPoolError(f"{path}:{line_number}: {e}") from e

		patterns.append(normalize_weights(weights))

	if not patterns:
		raise PatternPoolError(f"Pattern file {path} contains no patterns")

	logger.info(f"Loaded {len(patterns)} patterns from {path}")

	return PatternPool(patterns, rng=rng)


class PatternPool:

	"""
	A shuffled set of patterns that hands out one pattern per bar.

	Asking again for the bar that was asked for last returns the same pattern.
	Asking for any other bar moves the pattern at the front of the pool to
	the back and returns it, so the pool is cycled through one bar at a time.
	"""

	def __init__ (self, patterns: typing.Sequence[Weights], rng: typing.Optional[random.Random] = None) -> None:

		"""
		Shuffle the patterns once and start with no bar seen.
		"""

		if not patterns:
			raise ValueError("Pattern pool must not be empty")

		self.rng = rng or random.Random()

		shuffled = [list(p) for p in patterns]
		self.rng.shuffle(shuffled)

		self.patterns: typing.Deque[Weights] = collections.deque(shuffled)
		self.bar: typing.Optional[int] = None


	def pattern_for_bar (self, bar: int) -> Weights:

		"""
		Return the pattern for a bar, rotating the pool when the bar changes.
		"""

		if bar != self.bar:
			self.patterns.rotate(-1)
			self.bar = bar
			logger.debug(f"Bar {bar}: pattern {self.patterns[-1]}")

		return self.patterns[-1]


class PatternResolver:

	"""
	Produces the weights to use for each bar from any pattern source.

	Parameters:
		source: A positional list of weights, a mapping of 1-based slot
			numbers to weights, or the path of a pattern pool file.
		rng: Random generator used to shuffle a pattern pool.

	Example::

		resolver = PatternResolver([1, 0, -1, 0])
		resolver.weights(bar=3)   # [1.0, 0.0, -1.0, 0.0]

		resolver = PatternResolver({1: 0.5, 3: -1})
		resolver.weights(bar=0)   # [0.5, 0.0, -1.0]
	"""

	def __init__ (self, source: PatternSource, rng: typing.Optional[random.Random] = None) -> None:

		self.pool: typing.Optional[PatternPool] = None
		self.fixed: typing.Optional[Weights] = None

		if isinstance(source, str):
			self.pool = load_pattern_pool(source, rng=rng)

		elif isinstance(source, collections.abc.Mapping):
			self.fixed = normalize_weights(named_to_positional(source))

		else:
			self.fixed = normalize_weights(source)

		if self.fixed is not None and not self.fixed:
			raise ValueError("Pattern must not be empty")


	def weights (self, bar: int) -> Weights:

		"""
		Return the normalized weights that apply to a bar.
		"""

		if self.pool is not None:
			return self.pool.pattern_for_bar(bar)

		assert self.fixed is not None
		return self.fixed


def weight_for_slot (weights: Weights, slot: int) -> float:

	"""
	Weight for a grid slot. Patterns shorter than the grid repeat cyclically.
	"""

	return weights[slot % len(weights)]

import dataclasses
import logging
import math
import os
import typing

import yaml

import grooveshift.pattern


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Settings:

	"""
	Everything a run needs besides the song itself.

	Parameters:
		resolution: Grid slots per measure. None uses the fastest metrical
			level of the song's time signature.
		magnitude: Largest deviation, in milliseconds, applied at weight 1.0.
		tolerance: How far, in milliseconds, an event may sit from a grid
			slot and still match it.
		loop: Number of times the transformed performance is repeated.
		bpm: Tempo override. None keeps the song's tempo.
		transpose: Note number substitutions.
		bank: Channel substitutions.
		pattern: Weights, either positional (list) or named (1-based slot
			number to weight).
		pattern_file: Path of a pattern pool file, one pattern per line.
			Cannot be combined with ``pattern``.
		clip: Bar value for clipping looped copies, or None for no clipping.
		seed: Seed for the pattern pool shuffle, for repeatable runs.

	Example::

		settings = Settings(resolution=16, magnitude=20, tolerance=10, pattern=[0, 1, 0, -1])
	"""

	resolution: typing.Optional[int] = None
	magnitude: float = 0.0
	tolerance: float = 0.0
	loop: int = 1
	bpm: typing.Optional[float] = None
	transpose: typing.Dict[int, int] = dataclasses.field(default_factory=dict)
	bank: typing.Dict[int, int] = dataclasses.field(default_factory=dict)
	pattern: typing.Optional[typing.Union[typing.List[float], typing.Dict[int, float]]] = None
	pattern_file: typing.Optional[str] = None
	clip: typing.Optional[int] = None
	seed: typing.Optional[int] = None

	def __post_init__ (self) -> None:
		if self.resolution is not None and self.resolution <= 0:
			raise ValueError("resolution must be positive")
		if not math.isfinite(self.magnitude):
			raise ValueError("magnitude must be a finite number of milliseconds")
		if not math.isfinite(self.tolerance) or self.tolerance < 0:
			raise ValueError("tolerance must not be negative")
		if self.loop < 1:
			raise ValueError("loop must be at least 1")
		if self.bpm is not None and self.bpm <= 0:
			raise ValueError("bpm must be positive")
		if self.clip is not None and self.clip < 0:
			raise ValueError("clip must not be negative")
		if self.pattern is not None and not self.pattern:
			raise ValueError("pattern must not be empty (use None for no pattern)")
		if self.pattern is not None and self.pattern_file is not None:
			raise ValueError("pattern and pattern_file cannot both be set")

	@property
	def pattern_source (self) -> typing.Optional[grooveshift.pattern.PatternSource]:

		"""The configured pattern source, if any."""

		if self.pattern_file is not None:
			return self.pattern_file

		return self.pattern

	@staticmethod
	def from_mapping (config: typing.Mapping[str, typing.Any]) -> "Settings":

		"""
		Build settings from a configuration mapping, as loaded from YAML.

		Unknown keys are rejected. A ``pattern`` given as a string is parsed
		with :func:`grooveshift.pattern.parse_pattern`.
		"""

		known = {field.name for field in dataclasses.fields(Settings)}
		unknown = set(config) - known

		if unknown:
			raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

		values = dict(config)

		if isinstance(values.get("pattern"), str):
			values["pattern"] = grooveshift.pattern.parse_pattern(values["pattern"])

		for key in ("transpose", "bank"):
			if values.get(key) is not None:
				values[key] = {int(k): int(v) for k, v in values[key].items()}
			else:
				values.pop(key, None)

		return Settings(**values)


def load_config (config_path: str) -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		config = yaml.safe_load(f)

	if config is None:
		return {}

	if not isinstance(config, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping")

	return config

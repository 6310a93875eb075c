import logging
import os
import typing

import yaml

import barline.constants.durations
import barline.measure
import barline.ticks


logger = logging.getLogger(__name__)


def load_config (config_path: str = 'config.yaml') -> typing.Dict[str, typing.Any]:

	"""
	Load configuration from a YAML file.

	A missing or empty file gives an empty configuration, so every setting
	falls back to its default. Recognised keys::

		ticks:
		  ticks_per_whole: 64
		  denominations: [1, 2, 4, 8, 16, 32, 64]
		measure:
		  beats_per_measure: 3
		  beat_unit: 4
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		config = yaml.safe_load(f)

	if config is None:
		return {}

	if not isinstance(config, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping, got {type(config).__name__}")

	return config


def _section (config: typing.Dict[str, typing.Any], name: str) -> typing.Dict[str, typing.Any]:

	section = config.get(name) or {}

	if not isinstance(section, dict):
		raise ValueError(f"Config section '{name}' must be a mapping, got {type(section).__name__}")

	return section


def tick_table_from_config (config: typing.Dict[str, typing.Any]) -> barline.ticks.TickTable:

	"""
	Build the tick table described by the ``ticks`` section.
	"""

	section = _section(config, 'ticks')

	if not section:
		return barline.ticks.DEFAULT_TICK_TABLE

	return barline.ticks.TickTable(
		ticks_per_whole = int(section.get('ticks_per_whole', barline.ticks.DEFAULT_TICK_TABLE.ticks_per_whole)),
		denominations = tuple(int(d) for d in section.get('denominations', barline.ticks.DEFAULT_TICK_TABLE.denominations))
	)


def measure_from_config (config: typing.Dict[str, typing.Any]) -> barline.measure.Measure:

	"""
	Build an empty measure from the ``measure`` and ``ticks`` sections.
	"""

	section = _section(config, 'measure')

	return barline.measure.Measure(
		beats_per_measure = int(section.get('beats_per_measure', 4)),
		beat_unit = int(section.get('beat_unit', barline.constants.durations.QUARTER)),
		tick_table = tick_table_from_config(config)
	)

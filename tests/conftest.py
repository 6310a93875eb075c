import pytest

import barline.measure
import barline.ticks


@pytest.fixture
def common_time () -> barline.measure.Measure:

	"""An empty 4/4 measure on the default 16-ticks-per-whole table."""

	return barline.measure.Measure(4, 4)


@pytest.fixture
def fine_table () -> barline.ticks.TickTable:

	"""A 64-ticks-per-whole table down to sixty-fourth notes."""

	return barline.ticks.TickTable.with_resolution(64)

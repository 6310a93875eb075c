import dataclasses
import typing

import barline.constants.durations


@dataclasses.dataclass(frozen=True)
class TickTable:

	"""
	Converts symbolic note-length denominators to tick counts.

	A tick is the smallest indivisible unit of duration. The table fixes how
	many ticks a whole note spans and which denominations are available.
	Each ``Measure`` receives its own table, so measures with different grid
	resolutions can coexist.

	The denominations are kept in ascending numeric order (whole, half,
	quarter, ...). Rest filling and beat-level analysis walk them in this
	order, which makes tie-breaking reproducible.

	Parameters:
		ticks_per_whole: Number of ticks in a whole note.
		denominations: Available denominators, strictly ascending. Every
			denominator must divide ``ticks_per_whole`` evenly.

	Example:
		```python
		table = TickTable()
		table.ticks_of(4)   # → 4 (quarter note)

		fine = TickTable.with_resolution(64)
		fine.ticks_of(4)    # → 16
		```
	"""

	ticks_per_whole: int = 16
	denominations: typing.Tuple[int, ...] = barline.constants.durations.DEFAULT_DENOMINATIONS

	def __post_init__ (self) -> None:

		if self.ticks_per_whole <= 0:
			raise ValueError("ticks_per_whole must be positive")

		# Accept any sequence from callers and config files.
		object.__setattr__(self, "denominations", tuple(self.denominations))

		if not self.denominations:
			raise ValueError("denominations must not be empty")

		for denomination in self.denominations:
			if denomination <= 0:
				raise ValueError(f"Denomination must be positive, got {denomination}")
			if self.ticks_per_whole % denomination != 0:
				raise ValueError(
					f"Denomination {denomination} does not divide {self.ticks_per_whole} ticks per whole note"
				)

		if list(self.denominations) != sorted(set(self.denominations)):
			raise ValueError("denominations must be strictly ascending")


	@classmethod
	def with_resolution (cls, smallest: int) -> "TickTable":

		"""
		Build a power-of-two table from the whole note down to ``smallest``.

		The smallest denomination spans exactly one tick.
		"""

		if smallest <= 0 or smallest & (smallest - 1):
			raise ValueError("smallest must be a positive power of two")

		denominations = []
		denomination = 1

		while denomination <= smallest:
			denominations.append(denomination)
			denomination *= 2

		return cls(ticks_per_whole=smallest, denominations=tuple(denominations))


	def __contains__ (self, denomination: object) -> bool:

		return denomination in self.denominations


	def __iter__ (self) -> typing.Iterator[int]:

		return iter(self.denominations)


	def ticks_of (self, denomination: int) -> int:

		"""
		Return the tick count of a denomination.
		"""

		if denomination not in self.denominations:
			raise ValueError(f"Unsupported note length: {denomination!r}. Available: {list(self.denominations)}")

		return self.ticks_per_whole // denomination


	@property
	def longest (self) -> int:

		"""Denomination with the most ticks."""

		return self.denominations[0]


	@property
	def smallest (self) -> int:

		"""Denomination with the fewest ticks."""

		return self.denominations[-1]


	@property
	def smallest_ticks (self) -> int:

		return self.ticks_of(self.smallest)


DEFAULT_TICK_TABLE = TickTable()

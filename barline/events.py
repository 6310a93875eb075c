import dataclasses
import typing

import barline.pitch


@dataclasses.dataclass(frozen=True)
class Rest:

	"""
	A silent event spanning one symbolic note length.
	"""

	length: int

	def is_note (self) -> bool:
		return False

	def is_rest (self) -> bool:
		return True

	def __str__ (self) -> str:
		return f"rest/{self.length}"


@dataclasses.dataclass(frozen=True)
class Note:

	"""
	One or more pitches sounding together for one symbolic note length.

	Notes are values: pitch edits return a new ``Note`` rather than changing
	this one. A note whose last pitch is removed is empty and should be
	swapped for ``to_rest()`` by its owner.
	"""

	length: int
	pitches: typing.FrozenSet[barline.pitch.Pitch]

	def __post_init__ (self) -> None:
		object.__setattr__(self, "pitches", frozenset(self.pitches))

	@classmethod
	def of (cls, length: int, *pitches: typing.Union[int, barline.pitch.Pitch]) -> "Note":

		"""
		Build a note from MIDI note numbers or ``Pitch`` values.
		"""

		if not pitches:
			raise ValueError("A note needs at least one pitch")

		return cls(length=length, pitches=frozenset(barline.pitch.midi_to_pitch(p) for p in pitches))

	def is_note (self) -> bool:
		return True

	def is_rest (self) -> bool:
		return False

	def is_empty (self) -> bool:
		return not self.pitches

	def has_pitch (self, pitch: barline.pitch.Pitch) -> bool:
		return pitch in self.pitches

	def add_pitch (self, pitch: barline.pitch.Pitch) -> "Note":
		return dataclasses.replace(self, pitches=self.pitches | {pitch})

	def remove_pitch (self, pitch: barline.pitch.Pitch) -> "Note":
		return dataclasses.replace(self, pitches=self.pitches - {pitch})

	def sorted_pitches (self) -> typing.List[barline.pitch.Pitch]:
		return sorted(self.pitches)

	def to_rest (self) -> Rest:
		return Rest(length=self.length)

	def __str__ (self) -> str:
		names = "+".join(pitch.name for pitch in self.sorted_pitches())
		return f"{names or 'empty'}/{self.length}"


Event = typing.Union[Rest, Note]

"""Pitch values and MIDI note number translation.

Convention: **C4 = 60** (Middle C), matching the MIDI Manufacturers
Association standard. Sharps are spelled ``C#``; flats are accepted on input
and resolve to their enharmonic sharp (``Db4 == C#4 == 61``).
"""

import dataclasses
import re
import typing


NOTE_NAME_TO_PC: typing.Dict[str, int] = {
	"C": 0,
	"C#": 1,
	"Db": 1,
	"D": 2,
	"D#": 3,
	"Eb": 3,
	"E": 4,
	"F": 5,
	"F#": 6,
	"Gb": 6,
	"G": 7,
	"G#": 8,
	"Ab": 8,
	"A": 9,
	"A#": 10,
	"Bb": 10,
	"B": 11,
}

PC_TO_NOTE_NAME: typing.List[str] = [
	"C",
	"C#",
	"D",
	"D#",
	"E",
	"F",
	"F#",
	"G",
	"G#",
	"A",
	"A#",
	"B",
]

MIDI_MIN = 0
MIDI_MAX = 127

_NAME_PATTERN = re.compile(r"^([A-G][#b]?)(-?\d+)$")


@dataclasses.dataclass(frozen=True, order=True)
class Pitch:

	"""
	A sounding pitch, stored as its MIDI note number.
	"""

	midi: int

	def __post_init__ (self) -> None:
		if not MIDI_MIN <= self.midi <= MIDI_MAX:
			raise ValueError(f"MIDI note number must be between {MIDI_MIN} and {MIDI_MAX}, got {self.midi}")

	@classmethod
	def from_name (cls, name: str) -> "Pitch":

		"""
		Parse a note name such as ``"C4"``, ``"F#3"`` or ``"Bb2"``.
		"""

		match = _NAME_PATTERN.match(name.strip())

		if match is None or match.group(1) not in NOTE_NAME_TO_PC:
			raise ValueError(f"Unknown note name: {name!r}. Expected e.g. 'C4', 'F#3', 'Bb2'.")

		pitch_class = NOTE_NAME_TO_PC[match.group(1)]
		octave = int(match.group(2))

		return cls((octave + 1) * 12 + pitch_class)

	@property
	def pitch_class (self) -> int:
		return self.midi % 12

	@property
	def octave (self) -> int:
		return self.midi // 12 - 1

	@property
	def name (self) -> str:
		return f"{PC_TO_NOTE_NAME[self.pitch_class]}{self.octave}"

	def __str__ (self) -> str:
		return self.name


def midi_to_pitch (number: typing.Union[int, Pitch]) -> Pitch:

	"""
	Translate a raw MIDI note number into the ``Pitch`` stored on a ``Note``.
	"""

	if isinstance(number, Pitch):
		return number

	if isinstance(number, bool) or not isinstance(number, int):
		raise ValueError(f"MIDI note number must be an integer, got {number!r}")

	return Pitch(number)

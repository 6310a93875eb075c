"""The measure engine.

A ``Measure`` holds an ordered, gapless run of notes and rests whose tick
lengths always add up to the length of the bar. Notes are placed by
quantizing a fractional horizontal position (0.0 = barline, 1.0 = next
barline) onto a rhythmic grid, then cutting the rest underneath into the
note plus freshly derived rests on either side.

Rests are never chosen arbitrarily. ``fill_rests()`` walks an empty span
left to right and, at each tick, asks ``beat_level()`` for the longest value
allowed to start there. A quarter rest can start on a beat but not on the
second sixteenth of one, so a gap of three sixteenths starting on the beat
becomes an eighth rest followed by a sixteenth rest.

Example:
	```python
	import barline

	measure = barline.Measure(4, 4)

	measure.add_note(barline.NoteRequest(pitch=60, length=4, quantization=4, position=0.5))

	[str(event) for event in measure]   # → ['rest/2', 'C4/4', 'rest/4']
	```
"""

import dataclasses
import logging
import typing

import barline.events
import barline.pitch
import barline.ticks


logger = logging.getLogger(__name__)


class MeasureError (Exception):

	"""
	Base class for measure errors.
	"""


class PlacementError (MeasureError, ValueError):

	"""
	A request could not be applied to the measure. The measure is unchanged.
	"""


class RestFillError (MeasureError, RuntimeError):

	"""
	A span could not be expressed as rests, or the event lengths no longer add
	up to the measure length. Indicates a broken tick table, not a bad request.
	"""


@dataclasses.dataclass(frozen=True)
class NoteRequest:

	"""
	A note to place in (or take out of) a measure.

	Parameters:
		pitch: MIDI note number (C4 = 60).
		length: Note-length denominator of the note (4 = quarter).
		quantization: Grid denominator the position snaps to.
		position: Horizontal position within the measure, 0.0 <= position < 1.0.
	"""

	pitch: int
	length: int
	quantization: int
	position: float


class Measure:

	"""
	One bar of music as a gapless sequence of notes and rests.
	"""

	def __init__ (self, beats_per_measure: int, beat_unit: int, tick_table: barline.ticks.TickTable = barline.ticks.DEFAULT_TICK_TABLE) -> None:

		"""
		Create an empty measure for the time signature ``beats_per_measure/beat_unit``.
		"""

		if beats_per_measure <= 0:
			raise ValueError("Beats per measure must be positive")

		if beat_unit not in tick_table:
			raise ValueError(f"Beat unit {beat_unit!r} is not a supported note length")

		self.beats_per_measure = beats_per_measure
		self.beat_unit = beat_unit
		self.tick_table = tick_table
		self.tick_length = beats_per_measure * tick_table.ticks_of(beat_unit)

		self._events: typing.List[barline.events.Event] = []
		self.clear()


	def __repr__ (self) -> str:

		labels = ", ".join(str(event) for event in self._events)
		return f"Measure({self.beats_per_measure}/{self.beat_unit}, [{labels}])"


	def __iter__ (self) -> typing.Iterator[barline.events.Event]:

		return iter(tuple(self._events))


	def __len__ (self) -> int:

		return len(self._events)


	@property
	def events (self) -> typing.Tuple[barline.events.Event, ...]:

		"""Current events, left to right."""

		return tuple(self._events)


	@property
	def time_signature (self) -> typing.Tuple[int, int]:

		return self.beats_per_measure, self.beat_unit


	def clear (self) -> None:

		"""
		Reset the measure to rests only.
		"""

		self._events = self.fill_rests(0, self.tick_length)


	def ticks_of (self, event: barline.events.Event) -> int:

		return self.tick_table.ticks_of(event.length)


	def total_ticks (self) -> int:

		"""
		Return the summed tick length of all events.
		"""

		return sum(self.ticks_of(event) for event in self._events)


	def positioned_events (self) -> typing.Iterator[typing.Tuple[int, barline.events.Event]]:

		"""
		Yield ``(start_tick, event)`` pairs, left to right.
		"""

		current_tick = 0

		for event in tuple(self._events):
			yield current_tick, event
			current_tick += self.ticks_of(event)


	def event_at (self, tick: int) -> typing.Tuple[int, barline.events.Event]:

		"""
		Return ``(start_tick, event)`` for the event sounding at ``tick``.
		"""

		index, start_tick = self._locate(tick)
		return start_tick, self._events[index]


	# ── Beat level and rest filling ──────────────────────────────────────

	def beat_level (self, tick: int) -> int:

		"""
		Return the longest note length allowed to start at ``tick``.

		A length qualifies when ``tick`` falls on one of its grid lines and it
		is no longer than the measure. Of the qualifying lengths the longest
		wins, so tick 0 of a 4/4 bar gives a whole note, tick 8 a half note
		and tick 12 a quarter note (with a whole note of 16 ticks).
		"""

		if tick < 0:
			raise ValueError("Tick cannot be negative")

		candidates = [
			denomination
			for denomination in self.tick_table
			if tick % self.tick_table.ticks_of(denomination) == 0
			and self.tick_table.ticks_of(denomination) <= self.tick_length
		]

		if not candidates:
			logger.error(f"No note length starts on tick {tick} of a {self.tick_length}-tick measure")
			raise RestFillError(f"Tick {tick} is not aligned to the smallest note length")

		return max(candidates, key=self.tick_table.ticks_of)


	def fill_rests (self, start_tick: int, end_tick: int) -> typing.List[barline.events.Rest]:

		"""
		Return rests that exactly cover ``[start_tick, end_tick)``.

		Greedy, left to right: at each position the longest rest allowed by
		``beat_level()`` that still fits the remaining span is chosen. When
		two lengths fit equally well the one earlier in the tick table wins.

		Raises:
			ValueError: If the span is reversed or lies outside the measure.
			RestFillError: If the span cannot be expressed with the available
				note lengths.
		"""

		if not 0 <= start_tick <= end_tick <= self.tick_length:
			raise ValueError(f"Invalid rest span [{start_tick}, {end_tick}) for a {self.tick_length}-tick measure")

		rests: typing.List[barline.events.Rest] = []
		current_tick = start_tick
		remaining = end_tick - start_tick

		while remaining > 0:

			ceiling = self.beat_level(current_tick)
			length = self._best_rest_length(ceiling, remaining)

			if length is None:
				logger.error(f"Cannot fill {remaining} ticks from tick {current_tick} (ceiling 1/{ceiling})")
				raise RestFillError(f"No rest length fits {remaining} ticks at tick {current_tick}")

			rests.append(barline.events.Rest(length=length))

			ticks = self.tick_table.ticks_of(length)
			current_tick += ticks
			remaining -= ticks

		return rests


	def _best_rest_length (self, ceiling: int, remaining: int) -> typing.Optional[int]:

		"""
		Pick the rest length closest to ``remaining`` from below, no longer than ``ceiling``.
		"""

		ceiling_ticks = self.tick_table.ticks_of(ceiling)
		best: typing.Optional[int] = None
		best_difference = remaining

		for denomination in self.tick_table:

			ticks = self.tick_table.ticks_of(denomination)

			if ticks > ceiling_ticks or ticks > remaining:
				continue

			difference = remaining - ticks

			# Strict comparison keeps the first match on ties.
			if best is None or difference < best_difference:
				best = denomination
				best_difference = difference

		return best


	# ── Quantization ─────────────────────────────────────────────────────

	def quantize (self, resolution: int, fraction: float) -> int:

		"""
		Snap a fractional position to the nearest grid line of ``resolution``.

		Grid lines sit at ``0, step, 2 * step, ...`` inside the measure, where
		``step`` is the tick length of ``resolution``. Ties go to the earlier
		grid line.

		When ``step`` does not divide the measure evenly (a half-note grid in
		3/4, say) the closing barline at ``tick_length`` is also a candidate
		and is tried first, so it wins ties against the grid lines. A position
		nearer the barline than the last grid line returns ``tick_length``,
		which ``add_note()`` and ``remove_note()`` refuse with
		``PlacementError``.

		Raises:
			PlacementError: If ``fraction`` is outside ``[0, 1)`` or the
				resolution is not a supported note length.
		"""

		if not 0 <= fraction < 1:
			raise PlacementError(f"Position must be in [0, 1), got {fraction!r}")

		step = self._request_ticks(resolution, "Quantization")
		position_ticks = fraction * self.tick_length

		if self.tick_length % step:
			best_tick = self.tick_length
			best_distance = abs(self.tick_length - position_ticks)
		else:
			best_tick = 0
			best_distance = float(self.tick_length)

		for candidate in range(0, self.tick_length, step):

			distance = abs(candidate - position_ticks)

			if distance < best_distance:
				best_tick = candidate
				best_distance = distance

		return best_tick


	def _request_ticks (self, denomination: int, what: str) -> int:

		try:
			return self.tick_table.ticks_of(denomination)
		except ValueError as e:
			raise PlacementError(f"{what} length: {e}") from e


	# ── Insertion and removal ────────────────────────────────────────────

	def add_note (self, request: NoteRequest) -> barline.events.Note:

		"""
		Place a pitch at the quantized position of ``request``.

		- A note already starting there gains the pitch (its length is kept).
		- A rest starting there is replaced by the note; any part of the rest
		  the note does not cover is re-filled with rests.
		- A rest spanning the position is split: rests before the note, the
		  note, rests after the note.

		Returns the note now starting at that position.

		Raises:
			PlacementError: If the position falls inside an existing note,
				the note would run past the end of the rest it replaces, or
				the position quantizes onto the closing barline.
		"""

		tick = self.quantize(request.quantization, request.position)
		note_ticks = self._request_ticks(request.length, "Note")
		pitch = self._request_pitch(request.pitch)

		index, start_tick = self._locate(tick)
		event = self._events[index]

		if isinstance(event, barline.events.Note):

			if start_tick != tick:
				raise PlacementError(f"Tick {tick} falls inside the note {event} starting at tick {start_tick}")

			if event.length != request.length:
				logger.debug(f"Chord at tick {tick} keeps length 1/{event.length}, request asked for 1/{request.length}")

			merged = event.add_pitch(pitch)
			self._replace(index, index + 1, [merged])

			logger.debug(f"Merged {pitch} into chord at tick {tick}: {merged}")
			return merged

		rest_end = start_tick + self.ticks_of(event)
		note_end = tick + note_ticks

		if note_end > rest_end:
			raise PlacementError(
				f"A 1/{request.length} note at tick {tick} ends at tick {note_end}, past the rest ending at tick {rest_end}"
			)

		note = barline.events.Note(length=request.length, pitches=frozenset([pitch]))

		# The leading fill is empty when the rest starts exactly on the tick.
		replacement: typing.List[barline.events.Event] = []
		replacement.extend(self.fill_rests(start_tick, tick))
		replacement.append(note)
		replacement.extend(self.fill_rests(note_end, rest_end))

		self._replace(index, index + 1, replacement)

		action = "Replaced" if start_tick == tick else "Split"
		logger.debug(f"{action} {event} at tick {start_tick} for {note} at tick {tick}")

		return note


	def remove_note (self, request: NoteRequest) -> barline.events.Event:

		"""
		Remove a pitch from the note starting at the quantized position of ``request``.

		A note that loses its last pitch becomes a rest of the same length.
		The requested length is not compared with the note's length.

		Returns the event now in the note's place.

		Raises:
			PlacementError: If no note starts at that position, or the note
				does not contain the pitch.
		"""

		tick = self.quantize(request.quantization, request.position)
		pitch = self._request_pitch(request.pitch)

		index, start_tick = self._locate(tick)
		event = self._events[index]

		if start_tick != tick or not isinstance(event, barline.events.Note):
			raise PlacementError(f"No note starts at tick {tick}")

		if not event.has_pitch(pitch):
			raise PlacementError(f"The note at tick {tick} does not contain {pitch}")

		remaining = event.remove_pitch(pitch)
		replacement: barline.events.Event = remaining.to_rest() if remaining.is_empty() else remaining

		self._replace(index, index + 1, [replacement])

		logger.debug(f"Removed {pitch} from {event} at tick {tick}, leaving {replacement}")
		return replacement


	def _request_pitch (self, number: int) -> barline.pitch.Pitch:

		try:
			return barline.pitch.midi_to_pitch(number)
		except ValueError as e:
			raise PlacementError(str(e)) from e


	def _locate (self, tick: int) -> typing.Tuple[int, int]:

		"""
		Return ``(index, start_tick)`` of the event whose span contains ``tick``.
		"""

		if not 0 <= tick < self.tick_length:
			raise PlacementError(f"Tick {tick} is outside the {self.tick_length}-tick measure")

		current_tick = 0

		for index, event in enumerate(self._events):

			end_tick = current_tick + self.ticks_of(event)

			if current_tick <= tick < end_tick:
				return index, current_tick

			current_tick = end_tick

		# Unreachable while the events cover the whole measure.
		raise RestFillError(f"Events end at tick {current_tick}, before tick {tick}")


	def _replace (self, start: int, stop: int, replacement: typing.Sequence[barline.events.Event]) -> None:

		"""
		Swap ``events[start:stop]`` for ``replacement`` as a single step.
		"""

		events = self._events[:start] + list(replacement) + self._events[stop:]
		total = sum(self.ticks_of(event) for event in events)

		if total != self.tick_length:
			logger.error(f"Event lengths sum to {total} ticks, expected {self.tick_length}")
			raise RestFillError(f"Event lengths sum to {total} ticks, expected {self.tick_length}")

		self._events = events

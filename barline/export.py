import logging

import mido

import barline.events
import barline.measure


logger = logging.getLogger(__name__)


def _midi_ticks_per_tick (measure: barline.measure.Measure, ticks_per_beat: int) -> int:

	"""
	Return how many MIDI ticks one measure tick spans.
	"""

	if ticks_per_beat <= 0:
		raise ValueError("ticks_per_beat must be positive")

	beat_unit = measure.beat_unit

	# The MIDI time_signature meta message stores the denominator as a power of two.
	if beat_unit & (beat_unit - 1):
		raise ValueError(f"MIDI time signatures need a power-of-two beat unit, got {beat_unit}")

	# MIDI ticks_per_beat counts quarter notes; a whole note is four of them.
	midi_ticks_per_whole = 4 * ticks_per_beat
	ticks_per_whole = measure.tick_table.ticks_per_whole

	if midi_ticks_per_whole % ticks_per_whole != 0:
		raise ValueError(
			f"ticks_per_beat={ticks_per_beat} cannot express {ticks_per_whole} ticks per whole note exactly"
		)

	return midi_ticks_per_whole // ticks_per_whole


def measure_to_track (measure: barline.measure.Measure, ticks_per_beat: int = 480, velocity: int = 100, channel: int = 0) -> mido.MidiTrack:

	"""
	Render a measure as a MIDI track.

	Rests become delta time before the next message. Every pitch of a chord
	starts and stops together. Time left over after the last note is carried
	by the closing ``end_of_track`` message, so the track always spans the
	full measure.

	Parameters:
		measure: The measure to render. It is only read.
		ticks_per_beat: MIDI resolution in ticks per quarter note.
		velocity: Note-on velocity for every note.
		channel: MIDI channel (0-15).
	"""

	scale = _midi_ticks_per_tick(measure, ticks_per_beat)

	track = mido.MidiTrack()
	track.append(mido.MetaMessage(
		'time_signature',
		numerator = measure.beats_per_measure,
		denominator = measure.beat_unit,
		time = 0
	))

	pending = 0

	for _, event in measure.positioned_events():

		duration = measure.ticks_of(event) * scale

		if isinstance(event, barline.events.Rest):
			pending += duration
			continue

		pitches = event.sorted_pitches()

		for i, pitch in enumerate(pitches):
			track.append(mido.Message('note_on', channel=channel, note=pitch.midi, velocity=velocity, time=pending if i == 0 else 0))

		for i, pitch in enumerate(pitches):
			track.append(mido.Message('note_off', channel=channel, note=pitch.midi, velocity=0, time=duration if i == 0 else 0))

		pending = 0

	track.append(mido.MetaMessage('end_of_track', time=pending))

	return track


def measure_to_midi_file (measure: barline.measure.Measure, ticks_per_beat: int = 480, velocity: int = 100, channel: int = 0) -> mido.MidiFile:

	"""
	Wrap ``measure_to_track()`` in a single-track (type 0) MIDI file.

	The file is only built in memory; call ``save()`` on it to write it out.
	"""

	mid = mido.MidiFile(type=0, ticks_per_beat=ticks_per_beat)
	mid.tracks.append(measure_to_track(measure, ticks_per_beat=ticks_per_beat, velocity=velocity, channel=channel))

	logger.debug(f"Rendered {len(measure)} events to {len(mid.tracks[0])} MIDI messages")

	return mid

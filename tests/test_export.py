import mido
import pytest

import barline.export
import barline.measure
import barline.ticks


def _request (pitch: int, length: int, position: float) -> barline.measure.NoteRequest:

	return barline.measure.NoteRequest(pitch=pitch, length=length, quantization=16, position=position)


def test_empty_measure_is_one_long_delta (common_time: barline.measure.Measure) -> None:

	"""A bar of rests renders as a time signature and a delayed end of track."""

	track = barline.export.measure_to_track(common_time, ticks_per_beat=480)

	assert [msg.type for msg in track] == ['time_signature', 'end_of_track']
	assert track[0].numerator == 4
	assert track[0].denominator == 4
	assert track[-1].time == 4 * 480


def test_note_timing (common_time: barline.measure.Measure) -> None:

	"""Rests before a note become its delta time; rests after it land on end_of_track."""

	common_time.add_note(_request(pitch=60, length=4, position=0.5))

	track = barline.export.measure_to_track(common_time, ticks_per_beat=480, velocity=90, channel=2)
	messages = [msg for msg in track if not msg.is_meta]

	assert messages[0].type == 'note_on'
	assert messages[0].note == 60
	assert messages[0].velocity == 90
	assert messages[0].channel == 2
	assert messages[0].time == 2 * 480

	assert messages[1].type == 'note_off'
	assert messages[1].time == 480

	assert track[-1].type == 'end_of_track'
	assert track[-1].time == 480


def test_chord_starts_and_stops_together (common_time: barline.measure.Measure) -> None:

	"""Every pitch of a chord shares one onset and one release."""

	common_time.add_note(_request(pitch=67, length=2, position=0.0))
	common_time.add_note(_request(pitch=60, length=2, position=0.0))

	track = barline.export.measure_to_track(common_time, ticks_per_beat=96)
	messages = [msg for msg in track if not msg.is_meta]

	assert [(msg.type, msg.note, msg.time) for msg in messages] == [
		('note_on', 60, 0),
		('note_on', 67, 0),
		('note_off', 60, 192),
		('note_off', 67, 0),
	]


def test_total_length_matches_measure (common_time: barline.measure.Measure) -> None:

	"""The summed delta times always span the whole measure."""

	common_time.add_note(_request(pitch=62, length=16, position=5 / 16))
	common_time.add_note(_request(pitch=64, length=8, position=0.75))

	track = barline.export.measure_to_track(common_time, ticks_per_beat=24)

	assert sum(msg.time for msg in track) == 4 * 24


def test_resolution_must_be_exact () -> None:

	"""A MIDI resolution too coarse for the tick table raises ValueError."""

	measure = barline.measure.Measure(4, 4, tick_table=barline.ticks.TickTable.with_resolution(64))

	with pytest.raises(ValueError):
		barline.export.measure_to_track(measure, ticks_per_beat=6)

	with pytest.raises(ValueError):
		barline.export.measure_to_track(measure, ticks_per_beat=0)


def test_midi_file (common_time: barline.measure.Measure) -> None:

	"""The MIDI file wrapper is a single-track type 0 file at the requested resolution."""

	common_time.add_note(_request(pitch=60, length=4, position=0.0))

	mid = barline.export.measure_to_midi_file(common_time, ticks_per_beat=240)

	assert isinstance(mid, mido.MidiFile)
	assert mid.type == 0
	assert mid.ticks_per_beat == 240
	assert len(mid.tracks) == 1
	assert mid.tracks[0][-1].type == 'end_of_track'


def test_beat_unit_must_be_power_of_two () -> None:

	"""A time signature MIDI cannot notate raises ValueError before any message is built."""

	table = barline.ticks.TickTable(ticks_per_whole=48, denominations=(1, 3))
	measure = barline.measure.Measure(3, 3, tick_table=table)

	with pytest.raises(ValueError, match="power-of-two"):
		barline.export.measure_to_track(measure)

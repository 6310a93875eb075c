import logging

import barline.config
import barline.constants.durations as dur
import barline.export
import barline.measure


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main () -> None:

	"""
	Build a demo measure and log its events.
	"""

	logger.info("barline starting...")

	config = barline.config.load_config()
	measure = barline.config.measure_from_config(config)

	logger.info(f"Empty measure: {measure}")

	# A C major arpeggio on the beats, with the chord stacked on the downbeat.
	requests = [
		barline.measure.NoteRequest(pitch=60, length=dur.QUARTER, quantization=dur.QUARTER, position=0.0),
		barline.measure.NoteRequest(pitch=64, length=dur.QUARTER, quantization=dur.QUARTER, position=0.0),
		barline.measure.NoteRequest(pitch=67, length=dur.EIGHTH, quantization=dur.EIGHTH, position=0.55),
		barline.measure.NoteRequest(pitch=72, length=dur.SIXTEENTH, quantization=dur.SIXTEENTH, position=0.81),
	]

	for request in requests:
		try:
			measure.add_note(request)
		except barline.measure.PlacementError as e:
			logger.warning(f"Skipped {request}: {e}")

	for start_tick, event in measure.positioned_events():
		logger.info(f"  tick {start_tick:>3}: {event}")

	mid = barline.export.measure_to_midi_file(measure)
	logger.info(f"MIDI track holds {len(mid.tracks[0])} messages")


if __name__ == "__main__":
	main()

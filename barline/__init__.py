"""
barline - the rhythmic content of a single musical measure.

A measure is kept as an ordered, gapless run of notes and rests that always
adds up to exactly one bar of its time signature. Placing a note snaps a
horizontal position onto a rhythmic grid and cuts the rest underneath it;
the space left on either side is refilled with rests grouped the way a
copyist would write them, never starting a long rest off the beat.

What it does:

- **Tick-based time.** A ``TickTable`` maps note-length denominators
  (1 = whole, 4 = quarter, 16 = sixteenth) to integer ticks. Each measure
  gets its own table, so finer grids are a constructor argument away.
- **Quantization.** ``Measure.quantize()`` snaps a 0.0-1.0 position to the
  nearest grid line of any supported note length.
- **Valid rest groupings.** ``Measure.fill_rests()`` covers any empty span
  with the longest rests each beat position allows.
- **Chords.** Adding a pitch where a note already starts stacks it onto
  that note; removing the last pitch turns the note back into a rest.
- **MIDI export.** ``barline.export`` renders a measure with mido.

Minimal example:

    ```python
    import barline

    measure = barline.Measure(4, 4)
    measure.add_note(barline.NoteRequest(pitch=60, length=4, quantization=4, position=0.5))

    print(measure)   # Measure(4/4, [rest/2, C4/4, rest/4])
    ```

Package-level exports: ``Measure``, ``NoteRequest``, ``Note``, ``Rest``,
``Pitch``, ``TickTable``, ``PlacementError``, ``RestFillError``.
"""

import barline.events
import barline.measure
import barline.pitch
import barline.ticks


Measure = barline.measure.Measure
NoteRequest = barline.measure.NoteRequest
MeasureError = barline.measure.MeasureError
PlacementError = barline.measure.PlacementError
RestFillError = barline.measure.RestFillError
Note = barline.events.Note
Rest = barline.events.Rest
Pitch = barline.pitch.Pitch
midi_to_pitch = barline.pitch.midi_to_pitch
TickTable = barline.ticks.TickTable

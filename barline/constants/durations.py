"""Symbolic note-length denominators.

A denomination is the conventional fraction denominator of a note value:
``1`` is a whole note, ``4`` a quarter note, ``16`` a sixteenth note. Smaller
numbers are longer durations. Time signatures use the same encoding for their
beat unit, so 3/4 is ``Measure(3, durations.QUARTER)``::

	import barline.constants.durations as dur

	measure = barline.Measure(6, dur.EIGHTH)

Tick counts for each denomination come from a ``barline.ticks.TickTable``.
"""

WHOLE = 1
HALF = 2
QUARTER = 4
EIGHTH = 8
SIXTEENTH = 16
THIRTYSECOND = 32
SIXTYFOURTH = 64

# Ascending numeric order, i.e. longest duration first.
DEFAULT_DENOMINATIONS = (WHOLE, HALF, QUARTER, EIGHTH, SIXTEENTH)


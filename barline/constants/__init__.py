"""Constants for barline.

- ``barline.constants.durations`` - symbolic note-length denominators

Duration constants are re-exported here so ``barline.constants.QUARTER``
works as a shorthand.
"""

from barline.constants.durations import (
	DEFAULT_DENOMINATIONS,
	EIGHTH,
	HALF,
	QUARTER,
	SIXTEENTH,
	SIXTYFOURTH,
	THIRTYSECOND,
	WHOLE,
)

"""Timing and meter constants.

Standard MIDI Files count time in **ticks**, with the number of ticks per
quarter note given by the file header. Tempo is stored as microseconds per
quarter note:

- `DEFAULT_TEMPO = 500000` - 120 BPM, assumed when a file carries no tempo
- `MICROSECONDS_PER_MINUTE = 60000000` - converts tempo to BPM and back

When a file has no time signature the grid falls back to common time
(`DEFAULT_BEATS_PER_MEASURE = 4`) and a sixteenth-note resolution
(`DEFAULT_METRICAL_LEVEL = 16`).
"""

MICROSECONDS_PER_MINUTE = 60000000
MICROSECONDS_PER_MILLISECOND = 1000

DEFAULT_TEMPO = 500000
DEFAULT_BEATS_PER_MEASURE = 4
DEFAULT_METRICAL_LEVEL = 16

META_TRACK = 0
PERFORMANCE_TRACK = 1

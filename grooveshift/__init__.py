"""
Grooveshift - pattern-weighted microtiming for MIDI performances.

Grooveshift reads a complete performance, lays a metrical grid over it and
moves every note by an amount taken from a weight pattern: a fixed list of
weights, a sparse set of named slots, or a pool of patterns read from a file
and rotated bar by bar. The result can be looped and clipped before it is
written back out.

Pipeline:

- **Normalize** any file into one meta track and one performance track.
- **Remap** note numbers (transpose) and channels (bank).
- **Match** every event to the nearest grid slot within a tolerance.
- **Shift** it by ``magnitude_ms * weight``, converted to ticks at the song's tempo.
- **Loop** the result, optionally clipping each copy at its boundary.

Minimal example:

    ```python
    import grooveshift

    song = grooveshift.read_song("drums.mid")
    settings = grooveshift.Settings(resolution=16, magnitude=15, tolerance=20, pattern=[0, 1, 0, -0.5])
    grooveshift.transform(song, settings)
    grooveshift.write_song(song, "drums_shifted.mid")
    ```

Or from the shell::

    python -m grooveshift drums.mid -o drums_shifted.mid -r 16 -m 15 -t 20 -p "0 1 0 -0.5"

Package-level exports: ``Settings``, ``transform``, ``read_song``, ``write_song``, ``GridMatchError``.
"""

import grooveshift.deviation
import grooveshift.humanize
import grooveshift.midi_file
import grooveshift.settings


Settings = grooveshift.settings.Settings
transform = grooveshift.humanize.transform
read_song = grooveshift.midi_file.read_song
write_song = grooveshift.midi_file.write_song
GridMatchError = grooveshift.deviation.GridMatchError

"""Enharmonic pitch spelling stored in the low bits of note-on velocities.

A MIDI key number alone cannot tell C from B-sharp or D-double-flat.  The
two least significant bits of a note-on's attack velocity can carry a
spelling code so that the intended name can be recovered later:

* 1 -- the spelling that lies above the natural name (a flat spelling),
* 2 -- the plain spelling (0 is read the same way),
* 3 -- the spelling that lies below (a sharp spelling).

Diatonic pitches are given in base-7: ``octave * 7 + pc``, where ``pc``
counts C=0 through B=6 and the octave is the MIDI octave (key // 12).
Accidentals are semitone alterations: 0 natural, +1 sharp, -1 flat, and so on.
"""

from __future__ import annotations

import math

from .message import MidiMessage

# Spelling code for each (diatonic pitch class, accidental) pair.
_SPELLING_CODES: dict[int, dict[int, int]] = {
    0: {-2: 1, -1: 1, 0: 2, 1: 2, 2: 3},  # C
    1: {-2: 1, -1: 1, 0: 2, 1: 3, 2: 3},  # D
    2: {-2: 1, -1: 2, 0: 2, 1: 3, 2: 3},  # E
    3: {-2: 1, -1: 1, 0: 2, 1: 2, 2: 3, 3: 3},  # F
    4: {-2: 1, -1: 1, 0: 2, 1: 2, 2: 3},  # G
    5: {-2: 1, -1: 1, 0: 2, 1: 3, 2: 3},  # A
    6: {-2: 1, -1: 2, 0: 2, 1: 3, 2: 3},  # B
}

# For each chromatic pitch class: spelling code -> (diatonic pc, accidental,
# octave adjustment).  Codes 0 and 2 share the plain spelling.
_PITCH_NAMES: dict[int, dict[int, tuple[int, int, int]]] = {
    0: {1: (1, -2, 0), 2: (0, 0, 0), 3: (6, 1, -1)},  # Dbb, C, B#
    1: {1: (1, -1, 0), 2: (0, 1, 0), 3: (6, 2, -1)},  # Db, C#, B##
    2: {1: (2, -2, 0), 2: (1, 0, 0), 3: (0, 2, 0)},  # Ebb, D, C##
    3: {1: (3, -2, 0), 2: (2, -1, 0), 3: (1, 1, 0)},  # Fbb, Eb, D#
    4: {1: (3, -1, 0), 2: (2, 0, 0), 3: (1, 2, 0)},  # Fb, E, D##
    5: {1: (4, -2, 0), 2: (3, 0, 0), 3: (2, 1, 0)},  # Gbb, F, E#
    6: {1: (4, -1, 0), 2: (3, 1, 0), 3: (2, 2, 0)},  # Gb, F#, E##
    7: {1: (5, -2, 0), 2: (4, 0, 0), 3: (3, 2, 0)},  # Abb, G, F##
    8: {1: (5, -1, 0), 2: (4, 1, 0), 3: (3, 3, 0)},  # Ab, G#, F###
    9: {1: (6, -2, 0), 2: (5, 0, 0), 3: (4, 2, 0)},  # Bbb, A, G##
    10: {1: (0, -2, 1), 2: (6, -1, 0), 3: (5, 1, 0)},  # Cbb, Bb, A#
    11: {1: (0, -1, 1), 2: (6, 0, 0), 3: (5, 2, 0)},  # Cb, B, A##
}


def set_spelling(message: MidiMessage, base7: int, accidental: int) -> None:
    """Encode a spelling into a note-on's velocity; other messages are ignored.

    The velocity is raised to at least 4 first so that the note-on cannot
    turn into a note-off.  An unknown pitch/accidental pair stores code 0.
    """
    if not message.is_note_on():
        return
    if message.velocity() < 4:
        message.set_velocity(4)
    dpc = int(math.fmod(base7, 7))
    code = _SPELLING_CODES.get(dpc, {}).get(accidental, 0)
    message.set_velocity((message.velocity() & 0xFC) | code)


def get_spelling(message: MidiMessage) -> tuple[int, int] | None:
    """Return ``(base7, accidental)`` for a note-on, or None for other messages."""
    if not message.is_note_on():
        return None
    key = message.key_number()
    octave, pitch_class = divmod(key, 12)
    code = message.velocity() & 0x03
    if code == 0:
        code = 2
    dpc, accidental, shift = _PITCH_NAMES[pitch_class][code]
    return dpc + 7 * (octave + shift), accidental
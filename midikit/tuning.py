"""MIDI Tuning Standard system-exclusive messages and temperaments.

Key-based tuning changes use MTS real-time message 2 (single note tuning
change).  Octave temperaments use MTS message 9 (scale/octave tuning, 2-byte
form), which gives each of the twelve pitch classes a deviation of up to a
semitone in either direction from equal temperament.
"""

from __future__ import annotations

import math
import random
from collections.abc import Iterable, Sequence

from .message import MidiMessage, int_to_vlv

ALL_CHANNELS = 0xFFFF

_SYSEX_START = 0xF0
_SYSEX_END = 0xF7
_REALTIME_ALL_DEVICES = (0x7F, 0x7F)
_MIDI_TUNING = 0x08
_NOTE_CHANGE = 0x02
_OCTAVE_TUNING_2BYTE = 0x09

_FIFTH_CENTS = 1200.0 * math.log2(3.0 / 2.0)


def make_sysex(data: Iterable[int]) -> MidiMessage:
    """Wrap ``data`` in a system-exclusive message.

    A leading 0xF0 or trailing 0xF7 in ``data`` is dropped; the message gets
    its own, with the length (counting the closing 0xF7) as a VLV.
    """
    raw = bytes(value & 0xFF for value in data)
    start = 1 if raw and raw[0] == _SYSEX_START else 0
    end = len(raw) - 1 if raw and raw[-1] == _SYSEX_END else len(raw)
    body = raw[start:end] if end > start else b""
    return MidiMessage(
        bytes([_SYSEX_START]) + int_to_vlv(len(body) + 1) + body + bytes([_SYSEX_END])
    )


def frequency_to_semitones(frequency: float, a4frequency: float = 440.0) -> float:
    """Convert a frequency in Hz to a fractional MIDI key number.

    Results are limited to 0.0 .. 127.0; frequencies below 1 Hz and a
    non-positive reference give 0.0.
    """
    if frequency < 1 or a4frequency <= 0:
        return 0.0
    semitones = 69.0 + 12.0 * math.log2(frequency / a4frequency)
    if semitones >= 128.0:
        return 127.0
    if semitones < 0.0:
        return 0.0
    return semitones


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def key_tunings_by_semitone(
    mapping: Iterable[tuple[int, float]], program: int = 0
) -> MidiMessage:
    """MTS note-change message mapping keys to fractional key numbers."""
    pairs = list(mapping)
    data = bytearray(_REALTIME_ALL_DEVICES)
    data += bytes([_MIDI_TUNING, _NOTE_CHANGE, _clamp(program, 0, 127)])
    data += int_to_vlv(len(pairs))
    for key, semitones in pairs:
        whole = _clamp(int(semitones), 0, 127)
        value = int((semitones - whole) * (1 << 14))
        data += bytes(
            [_clamp(key, 0, 127), whole, (value >> 7) & 0x7F, value & 0x7F]
        )
    return make_sysex(data)


def key_tunings_by_frequency(
    mapping: Iterable[tuple[int, float]], program: int = 0
) -> MidiMessage:
    """MTS note-change message mapping keys to frequencies in Hz."""
    return key_tunings_by_semitone(
        ((key, frequency_to_semitones(freq)) for key, freq in mapping), program
    )


def temperament_by_cents(
    mapping: Sequence[float],
    reference_pitch_class: int = 0,
    channel_mask: int = ALL_CHANNELS,
) -> MidiMessage:
    """MTS octave tuning from twelve cent deviations from equal temperament.

    ``mapping[0]`` applies to ``reference_pitch_class``; deviations are
    limited to +/-100 cents.
    """
    if len(mapping) != 12:
        raise ValueError("temperament mapping must have twelve entries")
    if reference_pitch_class < 0:
        raise ValueError("reference pitch class must not be negative")
    data = bytearray(_REALTIME_ALL_DEVICES)
    data += bytes([_MIDI_TUNING, _OCTAVE_TUNING_2BYTE])
    data += bytes(
        [(channel_mask >> 14) & 0x3, (channel_mask >> 7) & 0x7F, channel_mask & 0x7F]
    )
    for pitch_class in range(12):
        deviation = mapping[(pitch_class - reference_pitch_class + 48) % 12] / 100.0
        deviation = max(-1.0, min(1.0, deviation))
        value = int(((1 << 13) - 0.5) * (deviation + 1.0) + 0.5)
        data += bytes([(value >> 7) & 0x7F, value & 0x7F])
    return make_sysex(data)


def temperament_equal(
    reference_pitch_class: int = 0, channel_mask: int = ALL_CHANNELS
) -> MidiMessage:
    """Equal temperament (no deviation on any pitch class)."""
    return temperament_by_cents([0.0] * 12, reference_pitch_class, channel_mask)


def temperament_bad(
    max_deviation_cents: float,
    reference_pitch_class: int = 0,
    channel_mask: int = ALL_CHANNELS,
    rng: random.Random | None = None,
) -> MidiMessage:
    """Detune each pitch class by a random amount up to the given deviation."""
    limit = min(abs(max_deviation_cents), 100.0)
    source = rng if rng is not None else random.Random()
    deviations = [source.uniform(-1.0, 1.0) * limit for _ in range(12)]
    return temperament_by_cents(deviations, reference_pitch_class, channel_mask)


def _fifths_temperament(fifth_cents: float) -> list[float]:
    """Deviations for a chain of fifths of the given size around pitch class 0."""
    mapping = [0.0] * 12
    for steps in range(-5, 7):
        mapping[(steps * 7) % 12] = fifth_cents * steps - 700.0 * steps
    return mapping


def temperament_pythagorean(
    reference_pitch_class: int = 2, channel_mask: int = ALL_CHANNELS
) -> MidiMessage:
    """Pythagorean tuning: pure fifths, by default centred on D."""
    return temperament_by_cents(
        _fifths_temperament(_FIFTH_CENTS), reference_pitch_class, channel_mask
    )


def temperament_meantone(
    fraction: float = 0.25,
    reference_pitch_class: int = 2,
    channel_mask: int = ALL_CHANNELS,
) -> MidiMessage:
    """Meantone tuning with fifths narrowed by ``fraction`` of a syntonic comma."""
    fifth = 1200.0 * math.log2((3.0 / 2.0) * (81.0 / 80.0) ** -fraction)
    return temperament_by_cents(
        _fifths_temperament(fifth), reference_pitch_class, channel_mask
    )


def temperament_meantone_quarter(
    reference_pitch_class: int = 2, channel_mask: int = ALL_CHANNELS
) -> MidiMessage:
    """Quarter-comma meantone."""
    return temperament_meantone(1.0 / 4.0, reference_pitch_class, channel_mask)


def temperament_meantone_third(
    reference_pitch_class: int = 2, channel_mask: int = ALL_CHANNELS
) -> MidiMessage:
    """Third-comma meantone."""
    return temperament_meantone(1.0 / 3.0, reference_pitch_class, channel_mask)


def temperament_meantone_half(
    reference_pitch_class: int = 2, channel_mask: int = ALL_CHANNELS
) -> MidiMessage:
    """Half-comma meantone."""
    return temperament_meantone(1.0 / 2.0, reference_pitch_class, channel_mask)
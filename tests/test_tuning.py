import random

import pytest

from midikit.message import int_to_vlv
from midikit.tuning import (
    frequency_to_semitones,
    key_tunings_by_frequency,
    key_tunings_by_semitone,
    make_sysex,
    temperament_bad,
    temperament_by_cents,
    temperament_equal,
    temperament_meantone,
    temperament_meantone_half,
    temperament_meantone_quarter,
    temperament_meantone_third,
    temperament_pythagorean,
)


def _decode_cents(message):
    """Read the twelve pitch-class deviations (in cents) from an MTS 9 message."""
    pairs = message[9:33]
    result = []
    for msb, lsb in zip(pairs[0::2], pairs[1::2]):
        value = (msb << 7) | lsb
        result.append((value / 8191.5 - 1.0) * 100.0)
    return result


def test_sysex_framing():
    data = [1, 2, 3]
    msg = make_sysex(data)
    assert msg[0] == 0xF0
    assert msg[-1] == 0xF7
    assert msg[1] == len(data) + 1
    assert list(msg[2:-1]) == data


def test_sysex_strips_existing_markers():
    assert make_sysex([0xF0, 1, 2, 0xF7]) == make_sysex([1, 2])


def test_sysex_empty_and_marker_only():
    assert make_sysex([]) == make_sysex([0xF0])
    assert make_sysex([0xF7]) == make_sysex([])
    assert list(make_sysex([])) == [0xF0, 1, 0xF7]


def test_sysex_long_data_uses_vlv_length():
    data = [5] * 200
    msg = make_sysex(data)
    vlv = int_to_vlv(len(data) + 1)
    assert bytes(msg[1 : 1 + len(vlv)]) == vlv
    assert len(msg) == 1 + len(vlv) + len(data) + 1


def test_frequency_to_semitones_reference():
    assert frequency_to_semitones(440.0) == 69.0
    assert frequency_to_semitones(880.0) - frequency_to_semitones(440.0) == pytest.approx(12.0)
    assert frequency_to_semitones(415.0, 415.0) == 69.0


def test_frequency_to_semitones_limits():
    assert frequency_to_semitones(0.5) == 0.0
    assert frequency_to_semitones(440.0, 0.0) == 0.0
    assert frequency_to_semitones(1.0e9) == 127.0
    assert frequency_to_semitones(2.0) == 0.0


def test_key_tunings_by_semitone_layout():
    msg = key_tunings_by_semitone([(60, 60.5)], 3)
    assert list(msg[1:7]) == [len(msg) - 2, 0x7F, 0x7F, 0x08, 0x02, 3]
    assert msg[7] == 1
    key, whole, msb, lsb = msg[8:12]
    assert key == 60
    assert whole == 60
    assert ((msb << 7) | lsb) / 16384 == pytest.approx(0.5)
    assert msg[-1] == 0xF7


def test_key_tunings_program_clamped():
    assert key_tunings_by_semitone([(60, 60.0)], 200)[6] == 127
    assert key_tunings_by_semitone([(60, 60.0)], -5)[6] == 0


def test_key_tunings_key_clamped():
    msg = key_tunings_by_semitone([(300, 60.0), (-4, 61.0)])
    assert msg[8] == 127
    assert msg[12] == 0


def test_key_tunings_fraction_round_trip():
    target = 64.3
    msg = key_tunings_by_semitone([(64, target)])
    _key, whole, msb, lsb = msg[8:12]
    assert whole + ((msb << 7) | lsb) / 16384 == pytest.approx(target, abs=1e-4)


def test_key_tunings_by_frequency_matches_semitones():
    assert key_tunings_by_frequency([(69, 440.0)]) == key_tunings_by_semitone([(69, 69.0)])


def test_temperament_requires_twelve_entries():
    with pytest.raises(ValueError):
        temperament_by_cents([0.0] * 11)


def test_temperament_rejects_negative_reference():
    with pytest.raises(ValueError):
        temperament_by_cents([0.0] * 12, -1)


def test_temperament_header_and_mask():
    msg = temperament_equal(0, 0xFFFF)
    assert list(msg[2:6]) == [0x7F, 0x7F, 0x08, 0x09]
    assert list(msg[6:9]) == [3, 0x7F, 0x7F]
    assert msg[-1] == 0xF7
    assert len(msg) == 34


def test_temperament_equal_is_centred():
    msg = temperament_equal()
    assert list(msg[9:11]) == [0x40, 0x00]
    assert all(cents == pytest.approx(0.0, abs=0.02) for cents in _decode_cents(msg))


def test_temperament_reference_rotation():
    mapping = [0.0] * 12
    mapping[0] = 50.0
    cents = _decode_cents(temperament_by_cents(mapping, 2))
    assert max(range(12), key=lambda pc: cents[pc]) == 2
    assert cents[2] == pytest.approx(50.0, abs=0.02)


def test_temperament_deviation_clamped():
    mapping = [500.0] + [-500.0] * 11
    cents = _decode_cents(temperament_by_cents(mapping))
    assert cents[0] == pytest.approx(100.0, abs=0.02)
    assert cents[1] == pytest.approx(-100.0, abs=0.02)


def test_pythagorean_values():
    cents = _decode_cents(temperament_pythagorean(0))
    assert cents[0] == pytest.approx(0.0, abs=0.02)
    assert cents[7] == pytest.approx(1.955, abs=0.02)
    assert cents[1] == pytest.approx(-9.775, abs=0.02)


def test_pythagorean_default_reference_is_d():
    assert temperament_pythagorean() == temperament_pythagorean(2)
    cents = _decode_cents(temperament_pythagorean())
    assert cents[2] == pytest.approx(0.0, abs=0.02)


def test_meantone_quarter_values():
    cents = _decode_cents(temperament_meantone(0.25, 0))
    assert cents[1] == pytest.approx(17.107, abs=0.02)
    assert cents[6] == pytest.approx(-20.529, abs=0.02)


def test_meantone_named_fractions():
    assert temperament_meantone_quarter() == temperament_meantone(0.25)
    assert temperament_meantone_third() == temperament_meantone(1.0 / 3.0)
    assert temperament_meantone_half() == temperament_meantone(0.5)


def test_meantone_zero_fraction_is_pythagorean():
    assert temperament_meantone(0.0, 5) == temperament_pythagorean(5)


def test_temperament_bad_deterministic_with_seed():
    first = temperament_bad(30.0, rng=random.Random(7))
    second = temperament_bad(30.0, rng=random.Random(7))
    assert first == second


def test_temperament_bad_within_limit():
    cents = _decode_cents(temperament_bad(-30.0, rng=random.Random(1)))
    assert all(abs(value) <= 30.0 + 0.02 for value in cents)


def test_temperament_bad_limit_capped_at_semitone():
    cents = _decode_cents(temperament_bad(1000.0, rng=random.Random(3)))
    assert all(abs(value) <= 100.0 + 0.02 for value in cents)
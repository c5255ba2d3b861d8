# midikit

Tools for working with MIDI data in plain Python:

- **`midikit.message`**: `MidiMessage`, a `bytearray` holding one MIDI
  message or meta event that you can build, inspect and edit. It covers
  notes, aftertouch, controllers (sustain and soft pedals), patch changes,
  channel pressure, pitch bend, tempo, time signatures and text meta events.
  `int_to_vlv` encodes MIDI variable-length values.
- **`midikit.spelling`**: `set_spelling` and `get_spelling` store and recover
  an enharmonic pitch spelling in the two low bits of a note-on velocity.
- **`midikit.tuning`**: MIDI Tuning Standard system-exclusive messages.
  `key_tunings_by_semitone` and `key_tunings_by_frequency` retune single keys.
  `temperament_by_cents`, `temperament_equal`, `temperament_pythagorean`,
  `temperament_meantone` (with quarter, third and half comma variants) and
  `temperament_bad` build octave temperaments. `make_sysex` wraps any data
  in a sysex message, and `frequency_to_semitones` converts Hz to fractional
  key numbers.
- **`midikit.optregister`** / **`midikit.options`**: a small command-line
  option parser. Options are defined with strings such as `"s|seconds=b"`
  or `"w|width=i:25"`. The form is `names=type:default`, and the types are
  `s`, `i`, `f`, `d`, `b` and `c`.

The package has no runtime dependencies.

## Messages

```python
from midikit.message import MidiMessage, int_to_vlv

note = MidiMessage()
note.make_note_on(0, 60, 100)       # channel 1, middle C
assert note.is_note_on()
assert note.key_number() == 60
assert note.velocity() == 100

tempo = MidiMessage()
tempo.set_meta_tempo(120.0)
assert tempo.is_tempo()
assert tempo.tempo_microseconds() == 500000

name = MidiMessage()
name.make_track_name("Melody")
assert name.is_track_name()
assert name.meta_content() == b"Melody"

assert int_to_vlv(200) == bytes([0x81, 0x48])
```

Queries that do not apply to a message return `None`. For example,
`velocity()` returns `None` for anything other than a note, and
`tempo_bpm()` returns `None` for anything other than a tempo event.

## Pitch spelling

```python
from midikit.message import MidiMessage
from midikit.spelling import set_spelling, get_spelling

msg = MidiMessage()
msg.make_note_on(0, 61, 80)
set_spelling(msg, 5 * 7 + 1, -1)    # D-flat rather than C-sharp
assert get_spelling(msg) == (36, -1)
```

Diatonic pitches are given as `octave * 7 + pc`. Here `pc` counts C=0
through B=6, and the octave is `key // 12`.

## Tuning messages

```python
from midikit.tuning import frequency_to_semitones, temperament_pythagorean

assert frequency_to_semitones(440.0, 440.0) == 69.0
sysex = temperament_pythagorean(2, 0xFFFF)   # Pythagorean tuning on D
assert sysex[0] == 0xF0 and sysex[-1] == 0xF7
```

## Command-line options

```python
from midikit.options import Options

opts = Options(["prog", "-s", "--width=40", "song.mid"])
opts.define("s|seconds=b", "display times in seconds")
opts.define("w|width=i:25", "hex bytes per line")
opts.process()

assert opts.get_boolean("seconds")
assert opts.get_int("width") == 40
assert opts.arg(1) == "song.mid"
```

Malformed definitions, duplicate names, unknown options and a missing
parameter raise `OptionError`. Unknown options raise only when
`error_check` is on, which is the default. An undefined `--options` prints
the option list and exits, unless `process(..., suppress=True)` is used. In
that case it sets `options_requested` instead.

## What the package does not do

midikit works with single messages. It does not read or write Standard
MIDI Files, and it does not manage tracks or event timing. It provides no
command-line programs. The option parser is a library for building your own.

## Running the tests

Install the package with its `test` extra, then run `pytest` from the
project directory.
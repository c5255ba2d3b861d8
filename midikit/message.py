"""MIDI messages as mutable byte sequences, with Standard MIDI File meta events."""

from __future__ import annotations

from collections.abc import Iterable

SUSTAIN_CONTROLLER = 64
SOFT_CONTROLLER = 67

_PARAM_COUNTS = {
    0x80: 2,  # note off
    0x90: 2,  # note on
    0xA0: 2,  # aftertouch
    0xB0: 2,  # continuous controller
    0xC0: 1,  # patch change
    0xD0: 1,  # channel pressure
    0xE0: 2,  # pitch bend
}


def int_to_vlv(value: int) -> bytes:
    """Encode an integer as a MIDI variable-length value (at most five bytes)."""
    if value < 128:
        return bytes([value & 0xFF])
    groups = [(value >> shift) & 0x7F for shift in (28, 21, 14, 7)]
    while groups and groups[0] == 0:
        groups.pop(0)
    return bytes([group | 0x80 for group in groups] + [value & 0x7F])


class MidiMessage(bytearray):
    """The bytes of one MIDI message or meta event.

    ``MidiMessage()`` is empty, ``MidiMessage(cmd, p1, p2)`` takes up to three
    byte values, and ``MidiMessage(iterable)`` copies a sequence of bytes.
    Values are truncated to their low eight bits.
    """

    def __init__(self, *args):
        super().__init__()
        if len(args) == 1 and not isinstance(args[0], int):
            self.set_message(args[0])
        elif len(args) <= 3 and all(isinstance(arg, int) for arg in args):
            self.extend(arg & 0xFF for arg in args)
        else:
            raise TypeError(
                "MidiMessage takes up to three byte values or one byte sequence"
            )

    def __repr__(self) -> str:
        return f"MidiMessage({self.hex(' ')!r})"

    def _resize(self, size: int) -> None:
        if len(self) > size:
            del self[size:]
        else:
            self.extend(bytes(size - len(self)))

    # ------------------------------------------------------------------
    # sizing

    def set_size_to_command(self) -> int:
        """Trim a channel message to the length its command implies.

        Messages in the 0xF0 range, or without a command byte, are left
        alone.  Returns the resulting size.
        """
        if not self:
            return 0
        count = _PARAM_COUNTS.get(self[0] & 0xF0)
        if count is None:
            return len(self)
        if count + 1 < len(self):
            self._resize(count + 1)
        return len(self)

    # ------------------------------------------------------------------
    # tempo

    def tempo_microseconds(self) -> int | None:
        """Microseconds per quarter note, or None if not a tempo message."""
        if not self.is_tempo():
            return None
        return (self[3] << 16) + (self[4] << 8) + self[5]

    def tempo_seconds(self) -> float | None:
        """Seconds per quarter note, or None if not a tempo message."""
        micro = self.tempo_microseconds()
        return None if micro is None else micro / 1_000_000.0

    def tempo_bpm(self) -> float | None:
        """Quarter notes per minute, or None if not a tempo message."""
        micro = self.tempo_microseconds()
        return None if micro is None else 60_000_000.0 / micro

    def tempo_tps(self, tpq: int) -> float | None:
        """Ticks per second for the given ticks per quarter note."""
        micro = self.tempo_microseconds()
        return None if micro is None else tpq * 1_000_000.0 / micro

    def tempo_spt(self, tpq: int) -> float | None:
        """Seconds per tick for the given ticks per quarter note."""
        micro = self.tempo_microseconds()
        return None if micro is None else micro / 1_000_000.0 / tpq

    # ------------------------------------------------------------------
    # classification

    def _nibble_is(self, nibble: int, size: int) -> bool:
        return len(self) == size and (self[0] & 0xF0) == nibble

    def is_meta(self) -> bool:
        """True for a well-formed meta message (0xFF, type, length...)."""
        return len(self) >= 3 and self[0] == 0xFF

    def is_note_off(self) -> bool:
        """True for 0x80 messages and 0x90 messages with zero velocity."""
        if len(self) != 3:
            return False
        nibble = self[0] & 0xF0
        return nibble == 0x80 or (nibble == 0x90 and self[2] == 0)

    def is_note_on(self) -> bool:
        """True for 0x90 messages with non-zero velocity."""
        return self._nibble_is(0x90, 3) and self[2] != 0

    def is_note(self) -> bool:
        return self.is_note_on() or self.is_note_off()

    def is_aftertouch(self) -> bool:
        return self._nibble_is(0xA0, 3)

    def is_controller(self) -> bool:
        return self._nibble_is(0xB0, 3)

    def is_sustain(self) -> bool:
        return self.is_controller() and self[1] == SUSTAIN_CONTROLLER

    def is_sustain_on(self) -> bool:
        return self.is_sustain() and self[2] >= 64

    def is_sustain_off(self) -> bool:
        return self.is_sustain() and self[2] < 64

    def is_soft(self) -> bool:
        return self.is_controller() and self[1] == SOFT_CONTROLLER

    def is_soft_on(self) -> bool:
        return self.is_soft() and self[2] >= 64

    def is_soft_off(self) -> bool:
        return self.is_soft() and self[2] < 64

    def is_patch_change(self) -> bool:
        return self._nibble_is(0xC0, 2)

    def is_pressure(self) -> bool:
        return self._nibble_is(0xD0, 2)

    def is_pitchbend(self) -> bool:
        return self._nibble_is(0xE0, 3)

    def is_empty(self) -> bool:
        return len(self) == 0

    def meta_type(self) -> int | None:
        """The meta message type, or None if this is not a meta message."""
        return self[1] if self.is_meta() else None

    def is_text(self) -> bool:
        return self.meta_type() == 0x01

    def is_copyright(self) -> bool:
        return self.meta_type() == 0x02

    def is_track_name(self) -> bool:
        return self.meta_type() == 0x03

    def is_instrument_name(self) -> bool:
        return self.meta_type() == 0x04

    def is_lyric_text(self) -> bool:
        return self.meta_type() == 0x05

    def is_marker_text(self) -> bool:
        return self.meta_type() == 0x06

    def is_tempo(self) -> bool:
        return self.meta_type() == 0x51 and len(self) == 6

    def is_time_signature(self) -> bool:
        return self.meta_type() == 0x58 and len(self) == 7

    def is_key_signature(self) -> bool:
        return self.meta_type() == 0x59 and len(self) == 5

    def is_end_of_track(self) -> bool:
        return self.meta_type() == 0x2F

    # ------------------------------------------------------------------
    # parameters

    def get_param(self, index: int) -> int | None:
        """The byte at ``index``, or None if the message is shorter."""
        return self[index] if 0 <= index < len(self) else None

    def set_param(self, index: int, value: int) -> None:
        """Set the byte at ``index``, zero-filling the message as needed."""
        if index < 0:
            raise IndexError("parameter index must not be negative")
        if len(self) <= index:
            self._resize(index + 1)
        self[index] = value & 0xFF

    def key_number(self) -> int | None:
        """Key of a note or aftertouch message, otherwise None."""
        if self.is_note() or self.is_aftertouch():
            return self[1]
        return None

    def velocity(self) -> int | None:
        """Velocity of a note message, otherwise None."""
        return self[2] if self.is_note() else None

    def controller_number(self) -> int | None:
        return self[1] & 0x7F if self.is_controller() else None

    def controller_value(self) -> int | None:
        return self[2] & 0x7F if self.is_controller() else None

    def set_key_number(self, value: int) -> None:
        """Set the key of a note or aftertouch message; ignored otherwise."""
        if self.is_note() or self.is_aftertouch():
            self.set_param(1, value)

    def set_velocity(self, value: int) -> None:
        """Set the velocity of a note message; ignored otherwise."""
        if self.is_note():
            self.set_param(2, value)

    # ------------------------------------------------------------------
    # command byte

    def command_nibble(self) -> int | None:
        return self[0] & 0xF0 if self else None

    def command_byte(self) -> int | None:
        return self[0] if self else None

    def channel(self) -> int | None:
        return self[0] & 0x0F if self else None

    def set_command_byte(self, value: int) -> None:
        self.set_param(0, value)

    def set_command(self, value: int, *args: int) -> None:
        """Set the command byte, and with parameters also resize the message."""
        if not args:
            self.set_command_byte(value)
            return
        if len(args) > 2:
            raise TypeError("set_command takes at most two parameter bytes")
        self._resize(len(args) + 1)
        self[0] = value & 0xFF
        for index, param in enumerate(args, start=1):
            self[index] = param & 0xFF

    def set_command_nibble(self, value: int) -> None:
        """Set the top nibble; values up to 0x0F are shifted into place."""
        if not self:
            self._resize(1)
        nibble = (value << 4) & 0xF0 if value <= 0x0F else value & 0xF0
        self[0] = (self[0] & 0x0F) | nibble

    def set_channel(self, value: int) -> None:
        if not self:
            self._resize(1)
        self[0] = (self[0] & 0xF0) | (value & 0x0F)

    def set_parameters(self, p1: int, p2: int | None = None) -> None:
        """Set the data bytes, keeping the command byte (0 if absent)."""
        params = [p1] if p2 is None else [p1, p2]
        self._resize(len(params) + 1)
        for index, param in enumerate(params, start=1):
            self[index] = param & 0xFF

    def set_message(self, data: Iterable[int]) -> None:
        """Replace the contents with ``data``."""
        self[:] = bytes(value & 0xFF for value in data)

    # ------------------------------------------------------------------
    # meta messages

    def meta_content(self) -> bytes:
        """The data bytes of a meta message after its length field."""
        if not self.is_meta():
            return b""
        start = 3
        for index in range(2, min(6, len(self))):
            if self[index] <= 0x7F:
                break
            start += 1
        return bytes(self[start:])

    def set_meta_content(self, content: str | bytes) -> None:
        """Replace the data of a meta message; ignored for other messages."""
        if len(self) < 2 or self[0] != 0xFF:
            return
        data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        self._resize(2)
        self.extend(int_to_vlv(len(data)))
        self.extend(data)

    def set_meta_tempo(self, tempo: float) -> None:
        """Make a tempo meta message for ``tempo`` quarter notes per minute."""
        self.set_tempo_microseconds(int(60.0 / tempo * 1_000_000.0 + 0.5))

    def set_tempo_microseconds(self, microseconds: int) -> None:
        """Make a tempo meta message in microseconds per quarter note."""
        self[:] = bytes(
            [
                0xFF,
                0x51,
                3,
                (microseconds >> 16) & 0xFF,
                (microseconds >> 8) & 0xFF,
                microseconds & 0xFF,
            ]
        )

    def make_time_signature(
        self,
        top: int,
        bottom: int,
        clocks_per_click: int = 24,
        num32nds_per_quarter: int = 8,
    ) -> None:
        """Make a time signature meta message; ``bottom`` is stored as log2."""
        base2 = bottom.bit_length() - 1 if bottom > 0 else 0
        self[:] = bytes(
            [
                0xFF,
                0x58,
                4,
                top & 0xFF,
                base2 & 0xFF,
                clocks_per_click & 0xFF,
                num32nds_per_quarter & 0xFF,
            ]
        )

    # ------------------------------------------------------------------
    # channel message constructors

    def make_note_on(self, channel: int, key: int, velocity: int) -> None:
        self[:] = bytes([0x90 | (channel & 0x0F), key & 0x7F, velocity & 0x7F])

    def make_note_off(
        self,
        channel: int | None = None,
        key: int | None = None,
        velocity: int | None = None,
    ) -> None:
        """Make a note off.

        With three arguments a 0x80 message is made; with channel and key a
        0x90 message with zero velocity; with none, a current note-on gets
        zero velocity, and anything else becomes ``90 00 00``.
        """
        if channel is None:
            if self.is_note_on():
                self[2] = 0
            else:
                self[:] = bytes([0x90, 0, 0])
            return
        if key is None:
            raise TypeError("make_note_off needs a key when a channel is given")
        if velocity is None:
            self[:] = bytes([0x90 | (channel & 0x0F), key & 0x7F, 0])
        else:
            self[:] = bytes([0x80 | (channel & 0x0F), key & 0x7F, velocity & 0x7F])

    def make_patch_change(self, channel: int, patchnum: int) -> None:
        self[:] = bytes([0xC0 | (channel & 0x0F), patchnum & 0x7F])

    def make_controller(self, channel: int, num: int, value: int) -> None:
        self[:] = bytes([0xB0 | (channel & 0x0F), num & 0x7F, value & 0x7F])

    def make_sustain(self, channel: int, value: int) -> None:
        """Sustain pedal: values 0-63 are off, 64-127 are on."""
        self.make_controller(channel, SUSTAIN_CONTROLLER, value)

    def make_sustain_on(self, channel: int) -> None:
        self.make_controller(channel, SUSTAIN_CONTROLLER, 127)

    def make_sustain_off(self, channel: int) -> None:
        self.make_controller(channel, SUSTAIN_CONTROLLER, 0)

    # ------------------------------------------------------------------
    # meta constructors

    def make_meta_message(self, mnum: int, data: str | bytes) -> None:
        self[:] = bytes([0xFF, mnum & 0x7F])
        self.set_meta_content(data)

    def make_text(self, text: str | bytes) -> None:
        self.make_meta_message(0x01, text)

    def make_copyright(self, text: str | bytes) -> None:
        self.make_meta_message(0x02, text)

    def make_track_name(self, name: str | bytes) -> None:
        self.make_meta_message(0x03, name)

    def make_instrument_name(self, name: str | bytes) -> None:
        self.make_meta_message(0x04, name)

    def make_lyric(self, text: str | bytes) -> None:
        self.make_meta_message(0x05, text)

    def make_marker(self, text: str | bytes) -> None:
        self.make_meta_message(0x06, text)

    def make_cue(self, text: str | bytes) -> None:
        self.make_meta_message(0x07, text)
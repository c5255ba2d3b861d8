"""MIDI messages, pitch spelling, tuning sysex and command-line option parsing."""

__version__ = "0.1.0"
__all__ = ["message", "spelling", "tuning", "optregister", "options"]
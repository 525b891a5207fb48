"""Camelot wheel notation for Spotify keys.

Spotify reports a key as a pitch class (0-11, C through B) and a mode
(0 minor, 1 major), both -1 when unknown. DJs mix harmonically using the
Camelot wheel, where each key/mode pair is a number 1-12 and a letter
(A minor, B major), e.g. "8A" for A minor.
"""

from typing import Dict, Optional, Tuple

UNKNOWN_KEY = "N/A"

MINOR = 0
MAJOR = 1

MINOR_OFFSET = 4
MAJOR_OFFSET = 7

PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


def transpose(pitch_class: Optional[int], mode: Optional[int]) -> str:
    """Map a Spotify key and mode to Camelot notation.

    Returns ``"N/A"`` when either value is missing or negative.
    """
    if pitch_class is None or pitch_class < 0 or mode is None or mode < 0:
        return UNKNOWN_KEY

    offset = MINOR_OFFSET if mode == MINOR else MAJOR_OFFSET
    number = ((7 * pitch_class + offset) % 12) + 1
    letter = "A" if mode == MINOR else "B"
    return f"{number}{letter}"


def key_name(pitch_class: int, mode: int) -> str:
    """Conventional key name, e.g. ``"A minor"``."""
    if pitch_class < 0 or pitch_class > 11 or mode < 0:
        return UNKNOWN_KEY
    return f"{PITCH_NAMES[pitch_class]} {'minor' if mode == MINOR else 'major'}"


def camelot_wheel() -> Dict[Tuple[int, int], str]:
    """All 24 key/mode pairs and their Camelot codes."""
    return {
        (pitch_class, mode): transpose(pitch_class, mode)
        for mode in (MINOR, MAJOR)
        for pitch_class in range(12)
    }

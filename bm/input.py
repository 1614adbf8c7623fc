"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into typed input events.
Handles ESC/CSI disambiguation, shift-modified arrows, and malformed sequences.
"""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass

from .logging_config import KEY_LOGGER

logger = logging.getLogger(__name__)

ESC = 0x1B
CSI_OPENER = ord("[")
CTRL_Q = 17
SHIFT_MODIFIER = "2"
MAX_CSI_PARAMETER_BYTES = 16

ByteReader = Callable[[], int]


class Direction(enum.Enum):
    UP = "A"
    DOWN = "B"
    RIGHT = "C"
    LEFT = "D"


class InputKind(enum.Enum):
    CONTROL = "control"
    ALT = "alt"
    ARROW = "arrow"
    SHIFT_ARROW = "shift_arrow"
    NORMAL = "normal"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class InputEvent:
    """One decoded key press.

    ``code`` carries the effective byte for control/alt/normal events and
    ``direction`` is set for arrow events only.
    """

    kind: InputKind
    code: int | None = None
    direction: Direction | None = None

    @property
    def char(self) -> str:
        if self.code is None:
            return ""
        return chr(self.code)

    @classmethod
    def control(cls, code: int) -> InputEvent:
        return cls(InputKind.CONTROL, code=code)

    @classmethod
    def alt(cls, code: int) -> InputEvent:
        return cls(InputKind.ALT, code=code)

    @classmethod
    def arrow(cls, direction: Direction) -> InputEvent:
        return cls(InputKind.ARROW, direction=direction)

    @classmethod
    def shift_arrow(cls, direction: Direction) -> InputEvent:
        return cls(InputKind.SHIFT_ARROW, direction=direction)

    @classmethod
    def normal(cls, code: int) -> InputEvent:
        return cls(InputKind.NORMAL, code=code)

    @classmethod
    def unknown(cls) -> InputEvent:
        return cls(InputKind.UNKNOWN)


_ARROW_FINALS: dict[int, Direction] = {ord(d.value): d for d in Direction}


def _is_digit(byte: int) -> bool:
    return ord("0") <= byte <= ord("9")


def _is_csi_parameter(byte: int) -> bool:
    return 0x30 <= byte <= 0x3F


def fd_byte_reader(fd: int) -> ByteReader:
    """Return a blocking one-byte reader bound to ``fd``.

    Raises ``EOFError`` once the descriptor reports end of stream.
    """

    def read_byte() -> int:
        ch = os.read(fd, 1)
        if not ch:
            raise EOFError("terminal input closed")
        return ch[0]

    return read_byte


def _decode_modified_csi(first_digit: int, read_byte: ByteReader) -> InputEvent:
    """Decode ``ESC [ <digit>...`` up to and including its final byte.

    Parameter bytes are consumed until the first non-parameter byte so a
    malformed sequence never leaves a tail behind for the next call. Only a
    single leading digit followed by ``;2`` and an arrow letter is a shift
    arrow. At most ``MAX_CSI_PARAMETER_BYTES`` are kept; longer runs are
    still drained but decode as unknown.
    """
    params = bytearray([first_digit])
    oversized = False
    while True:
        byte = read_byte()
        if not _is_csi_parameter(byte):
            final = byte
            break
        if len(params) < MAX_CSI_PARAMETER_BYTES:
            params.append(byte)
        else:
            oversized = True

    if oversized:
        logger.debug("discarded oversized CSI parameter run starting %r", bytes(params))
        return InputEvent.unknown()
    leading, sep, modifier = bytes(params).decode("ascii").partition(";")
    if not sep or len(leading) != 1 or modifier != SHIFT_MODIFIER:
        return InputEvent.unknown()
    direction = _ARROW_FINALS.get(final)
    if direction is None:
        return InputEvent.unknown()
    return InputEvent.shift_arrow(direction)


def decode_input(read_byte: ByteReader) -> InputEvent:
    """Read exactly one logical key press from ``read_byte``.

    ``read_byte`` must block until a byte is available. Escape sequences are
    resolved completely within this call; anything that starts like a CSI
    sequence but does not parse comes back as ``InputKind.UNKNOWN``.
    """
    b0 = read_byte()
    if b0 != ESC:
        if b0 == CTRL_Q:
            return InputEvent.control(b0)
        return InputEvent.normal(b0)

    b1 = read_byte()
    if b1 != CSI_OPENER:
        return InputEvent.alt(b1)

    b2 = read_byte()
    if _is_digit(b2):
        return _decode_modified_csi(b2, read_byte)
    direction = _ARROW_FINALS.get(b2)
    if direction is None:
        return InputEvent.unknown()
    return InputEvent.arrow(direction)


def read_event(fd: int) -> InputEvent:
    """Block on ``fd`` until one full input event is decoded."""
    event = decode_input(fd_byte_reader(fd))
    KEY_LOGGER.debug("decoded %s", event)
    return event

"""Numbered message channels, each holding sixteen flag slots."""

from __future__ import annotations

SLOT_COUNT = 16


class Channel:
    """A sixteen-bit set of flag slots."""

    __slots__ = ("data",)

    def __init__(self) -> None:
        self.data = 0

    def set_slot(self, slot: int) -> None:
        """Raise a slot's flag; slots outside 0-15 are ignored."""
        if 0 <= slot < SLOT_COUNT:
            self.data |= 1 << slot

    def clear_slot(self, slot: int) -> None:
        """Lower a slot's flag; slots outside 0-15 are ignored."""
        if 0 <= slot < SLOT_COUNT:
            self.data &= ~(1 << slot) & 0xFFFF

    def get_slot(self, slot: int) -> bool:
        if not 0 <= slot < SLOT_COUNT:
            return False
        return bool(self.data & (1 << slot))

    def __repr__(self) -> str:
        return f"Channel(data=0x{self.data:04x})"


class MessageBoard:
    """A fixed number of channels addressed by index."""

    def __init__(self, channel_count: int) -> None:
        if channel_count < 0:
            raise ValueError("channel count must not be negative")
        self._channels = [Channel() for _ in range(channel_count)]

    def __len__(self) -> int:
        return len(self._channels)

    def get_channel(self, channel: int) -> Channel:
        """Return the channel at an index, or raise IndexError."""
        if not 0 <= channel < len(self._channels):
            raise IndexError(f"no channel {channel}")
        return self._channels[channel]
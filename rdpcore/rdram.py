"""RDRAM memory model with the hidden (ninth) bits used for coverage."""

from __future__ import annotations

RDRAM_MASK = 0x00FFFFFF


class Rdram:
    """Big-endian RDRAM addressed by byte, halfword or word index.

    Accesses outside the configured size read as zero and writes there are
    dropped. Each halfword has a two-bit hidden value, initialised to 3.
    """

    def __init__(self, size: int) -> None:
        if size <= 0 or size % 4:
            raise ValueError(f"RDRAM size must be a positive multiple of 4, got {size}")
        self.size = size
        self.data = bytearray(size)
        self.hidden = bytearray(b"\x03" * (size // 2))
        self._lim8 = size - 1
        self._lim16 = (self._lim8 >> 1) & 0xFFFFFF
        self._lim32 = (self._lim8 >> 2) & 0xFFFFFF

    def _idx8(self, index: int) -> int | None:
        index &= RDRAM_MASK
        return index if index <= self._lim8 else None

    def _idx16(self, index: int) -> int | None:
        index &= RDRAM_MASK >> 1
        return index if index <= self._lim16 else None

    def _idx32(self, index: int) -> int | None:
        index &= RDRAM_MASK >> 2
        return index if index <= self._lim32 else None

    def read8(self, index: int) -> int:
        """Read the byte at a byte index."""
        idx = self._idx8(index)
        return 0 if idx is None else self.data[idx]

    def read16(self, index: int) -> int:
        """Read the halfword at a halfword index."""
        idx = self._idx16(index)
        if idx is None:
            return 0
        return int.from_bytes(self.data[idx * 2 : idx * 2 + 2], "big")

    def read32(self, index: int) -> int:
        """Read the word at a word index."""
        idx = self._idx32(index)
        if idx is None:
            return 0
        return int.from_bytes(self.data[idx * 4 : idx * 4 + 4], "big")

    def write8(self, index: int, value: int) -> None:
        """Write a byte at a byte index."""
        idx = self._idx8(index)
        if idx is not None:
            self.data[idx] = value & 0xFF

    def write16(self, index: int, value: int) -> None:
        """Write a halfword at a halfword index."""
        idx = self._idx16(index)
        if idx is not None:
            self.data[idx * 2 : idx * 2 + 2] = (value & 0xFFFF).to_bytes(2, "big")

    def write32(self, index: int, value: int) -> None:
        """Write a word at a word index."""
        idx = self._idx32(index)
        if idx is not None:
            self.data[idx * 4 : idx * 4 + 4] = (value & 0xFFFFFFFF).to_bytes(4, "big")

    def read_pair16(self, index: int) -> tuple[int, int]:
        """Return the halfword and its hidden bits at a halfword index."""
        idx = self._idx16(index)
        if idx is None:
            return 0, 0
        return self.read16(idx), self.hidden[idx]

    def write_pair8(self, index: int, value: int, hidden: int) -> None:
        """Write a byte; odd bytes also set the hidden bits of their halfword."""
        idx = self._idx8(index)
        if idx is None:
            return
        self.data[idx] = value & 0xFF
        if idx & 1:
            self.hidden[idx >> 1] = hidden & 0xFF

    def write_pair16(self, index: int, value: int, hidden: int) -> None:
        """Write a halfword together with its hidden bits."""
        idx = self._idx16(index)
        if idx is None:
            return
        self.write16(idx, value)
        self.hidden[idx] = hidden & 0xFF

    def write_pair32(self, index: int, value: int, hidden0: int, hidden1: int) -> None:
        """Write a word together with the hidden bits of both halfwords."""
        idx = self._idx32(index)
        if idx is None:
            return
        self.write32(idx, value)
        self.hidden[idx << 1] = hidden0 & 0xFF
        self.hidden[(idx << 1) + 1] = hidden1 & 0xFF
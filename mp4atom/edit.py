"""Edit list atoms."""

from __future__ import annotations

from dataclasses import dataclass, field

from mp4atom.atom import (
    Atom,
    FourCC,
    FullAtom,
    Reader,
    Writer,
    _decode_children,
    _encode_children,
)


@dataclass
class ElstEntry:
    """One segment of an edit list."""

    segment_duration: int = 0
    media_time: int = 0
    media_rate: int = 0
    media_rate_fraction: int = 0


@dataclass
class Elst(FullAtom):
    """Edit list."""

    KIND = FourCC("elst")
    VERSIONS = (0, 1)

    entries: list[ElstEntry] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Elst:
        wide = 8 if version == 1 else 4
        count = reader.read_uint(4)
        entries = [
            ElstEntry(
                segment_duration=reader.read_uint(wide),
                media_time=reader.read_uint(wide),
                media_rate=reader.read_uint(2),
                media_rate_fraction=reader.read_uint(2),
            )
            for _ in range(count)
        ]
        return cls(entries)

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        writer.write_uint(len(self.entries), 4)
        for entry in self.entries:
            writer.write_uint(entry.segment_duration, 8)
            writer.write_uint(entry.media_time, 8)
            writer.write_uint(entry.media_rate, 2)
            writer.write_uint(entry.media_rate_fraction, 2)
        return 1, 0


@dataclass
class Edts(Atom):
    """Edit container."""

    KIND = FourCC("edts")

    elst: Elst | None = None

    @classmethod
    def decode_body(cls, reader: Reader) -> Edts:
        return cls(**_decode_children(reader, optional=(Elst,)))

    def encode_body(self, writer: Writer) -> None:
        _encode_children(writer, self.elst)
"""Chunk offset, composition offset and sample-to-chunk tables."""

from __future__ import annotations

from dataclasses import dataclass, field

from mp4atom.atom import FourCC, FullAtom, Reader, Writer


@dataclass
class Co64(FullAtom):
    """64-bit chunk offsets."""

    KIND = FourCC("co64")

    entries: list[int] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Co64:
        count = reader.read_uint(4)
        return cls([reader.read_uint(8) for _ in range(count)])

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        writer.write_uint(len(self.entries), 4)
        for offset in self.entries:
            writer.write_uint(offset, 8)
        return 0, 0


@dataclass
class CttsEntry:
    """A run of samples sharing one composition offset."""

    sample_count: int = 0
    sample_offset: int = 0


@dataclass
class Ctts(FullAtom):
    """Composition time to sample."""

    KIND = FourCC("ctts")

    entries: list[CttsEntry] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Ctts:
        count = reader.read_uint(4)
        return cls(
            [
                CttsEntry(sample_count=reader.read_uint(4), sample_offset=reader.read_int(4))
                for _ in range(count)
            ]
        )

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        writer.write_uint(len(self.entries), 4)
        for entry in self.entries:
            writer.write_uint(entry.sample_count, 4)
            writer.write_int(entry.sample_offset, 4)
        return 0, 0


@dataclass
class Stco(FullAtom):
    """32-bit chunk offsets."""

    KIND = FourCC("stco")

    entries: list[int] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Stco:
        count = reader.read_uint(4)
        return cls([reader.read_uint(4) for _ in range(count)])

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        writer.write_uint(len(self.entries), 4)
        for offset in self.entries:
            writer.write_uint(offset, 4)
        return 0, 0


@dataclass
class StscEntry:
    """Samples-per-chunk run starting at ``first_chunk``."""

    first_chunk: int = 0
    samples_per_chunk: int = 0
    sample_description_index: int = 0


@dataclass
class Stsc(FullAtom):
    """Sample to chunk."""

    KIND = FourCC("stsc")

    entries: list[StscEntry] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Stsc:
        count = reader.read_uint(4)
        return cls(
            [
                StscEntry(
                    first_chunk=reader.read_uint(4),
                    samples_per_chunk=reader.read_uint(4),
                    sample_description_index=reader.read_uint(4),
                )
                for _ in range(count)
            ]
        )

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        writer.write_uint(len(self.entries), 4)
        for entry in self.entries:
            writer.write_uint(entry.first_chunk, 4)
            writer.write_uint(entry.samples_per_chunk, 4)
            writer.write_uint(entry.sample_description_index, 4)
        return 0, 0
"""Movie header and movie extends atoms."""

from __future__ import annotations

from dataclasses import astuple, dataclass, field

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
class Matrix:
    """A 3x3 transformation matrix stored as nine 32-bit fixed-point values."""

    a: int = 0x00010000
    b: int = 0
    u: int = 0
    c: int = 0
    d: int = 0x00010000
    v: int = 0
    x: int = 0
    y: int = 0
    w: int = 0x40000000

    @classmethod
    def decode_from(cls, reader: Reader) -> Matrix:
        return cls(*(reader.read_int(4) for _ in range(9)))

    def encode_into(self, writer: Writer) -> None:
        for value in astuple(self):
            writer.write_int(value, 4)


@dataclass
class Mvhd(FullAtom):
    """Movie header."""

    KIND = FourCC("mvhd")
    VERSIONS = (0, 1)

    creation_time: int = 0
    modification_time: int = 0
    timescale: int = 1000
    duration: int = 0
    rate: float = 0.0
    volume: float = 0.0
    matrix: Matrix = field(default_factory=Matrix)
    next_track_id: int = 1

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Mvhd:
        wide = 8 if version == 1 else 4
        creation_time = reader.read_uint(wide)
        modification_time = reader.read_uint(wide)
        timescale = reader.read_uint(4)
        duration = reader.read_uint(wide)
        rate = reader.read_fixed(2, False)
        volume = reader.read_fixed(1, False)
        reader.read(2)  # reserved
        reader.read(8)  # reserved
        matrix = Matrix.decode_from(reader)
        reader.read(24)  # pre_defined
        next_track_id = reader.read_uint(4)
        return cls(
            creation_time=creation_time,
            modification_time=modification_time,
            timescale=timescale,
            duration=duration,
            rate=rate,
            volume=volume,
            matrix=matrix,
            next_track_id=next_track_id,
        )

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        writer.write_uint(self.creation_time, 8)
        writer.write_uint(self.modification_time, 8)
        writer.write_uint(self.timescale, 4)
        writer.write_uint(self.duration, 8)
        writer.write_fixed(self.rate, 2, False)
        writer.write_fixed(self.volume, 1, False)
        writer.write(bytes(10))  # reserved
        self.matrix.encode_into(writer)
        writer.write(bytes(24))  # pre_defined
        writer.write_uint(self.next_track_id, 4)
        return 1, 0


@dataclass
class Mehd(FullAtom):
    """Movie extends header."""

    KIND = FourCC("mehd")
    VERSIONS = (0, 1)

    fragment_duration: int = 0

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Mehd:
        return cls(reader.read_uint(8 if version == 1 else 4))

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        writer.write_uint(self.fragment_duration, 8)
        return 1, 0


@dataclass
class Trex(FullAtom):
    """Track extends defaults."""

    KIND = FourCC("trex")

    track_id: int = 0
    default_sample_description_index: int = 0
    default_sample_duration: int = 0
    default_sample_size: int = 0
    default_sample_flags: int = 0

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Trex:
        return cls(*(reader.read_uint(4) for _ in range(5)))

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        for value in (
            self.track_id,
            self.default_sample_description_index,
            self.default_sample_duration,
            self.default_sample_size,
            self.default_sample_flags,
        ):
            writer.write_uint(value, 4)
        return 0, 0


@dataclass
class Mvex(Atom):
    """Movie extends container."""

    KIND = FourCC("mvex")

    mehd: Mehd | None = None
    trex: list[Trex] = field(default_factory=list)

    @classmethod
    def decode_body(cls, reader: Reader) -> Mvex:
        return cls(**_decode_children(reader, optional=(Mehd,), multiple=(Trex,)))

    def encode_body(self, writer: Writer) -> None:
        _encode_children(writer, self.mehd, self.trex)
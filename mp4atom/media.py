"""Media header, handler, sound header and data reference atoms."""

from __future__ import annotations

import struct
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

_SELF_CONTAINED = 1 << 1


def language_string(code: int) -> str:
    """Expand a packed ISO-639-2/T language code into three letters."""
    return "".join(chr(((code >> shift) & 0x1F) + 0x60) for shift in (10, 5, 0))


def language_code(language: str) -> int:
    """Pack up to three letters of a language name into a 15-bit code."""
    raw = language.encode("utf-16-be")
    units = list(struct.unpack(f">{len(raw) // 2}H", raw))[:3]
    units += [0] * (3 - len(units))
    first, second, third = units
    return ((first & 0x1F) << 10) + ((second & 0x1F) << 5) + (third & 0x1F)


@dataclass
class Hdlr(FullAtom):
    """Handler reference."""

    KIND = FourCC("hdlr")

    handler: FourCC = field(default_factory=lambda: FourCC("none"))
    name: str = ""

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Hdlr:
        reader.read(4)  # pre-defined
        handler = reader.read_fourcc()
        reader.read(12)  # reserved
        name = reader.read_cstring()
        return cls(handler=handler, name=name)

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        writer.write_uint(0, 4)  # pre-defined
        writer.write_fourcc(self.handler)
        writer.write(bytes(12))  # reserved
        writer.write_cstring(self.name)
        return 0, 0


@dataclass
class Mdhd(FullAtom):
    """Media header."""

    KIND = FourCC("mdhd")
    VERSIONS = (0, 1)

    creation_time: int = 0
    modification_time: int = 0
    timescale: int = 0
    duration: int = 0
    language: str = ""

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Mdhd:
        wide = 8 if version == 1 else 4
        creation_time = reader.read_uint(wide)
        modification_time = reader.read_uint(wide)
        timescale = reader.read_uint(4)
        duration = reader.read_uint(wide)
        language = language_string(reader.read_uint(2))
        reader.read(2)  # pre-defined
        return cls(
            creation_time=creation_time,
            modification_time=modification_time,
            timescale=timescale,
            duration=duration,
            language=language,
        )

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        writer.write_uint(self.creation_time, 8)
        writer.write_uint(self.modification_time, 8)
        writer.write_uint(self.timescale, 4)
        writer.write_uint(self.duration, 8)
        writer.write_uint(language_code(self.language), 2)
        writer.write_uint(0, 2)  # pre-defined
        return 1, 0


@dataclass
class Smhd(FullAtom):
    """Sound media header."""

    KIND = FourCC("smhd")

    balance: float = 0.0

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Smhd:
        balance = reader.read_fixed(1, True)
        reader.read(2)  # reserved
        return cls(balance=balance)

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        writer.write_fixed(self.balance, 1, True)
        writer.write_uint(0, 2)  # reserved
        return 0, 0


@dataclass
class Url(FullAtom):
    """Data entry URL."""

    KIND = FourCC("url ")

    location: str = ""

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Url:
        location = reader.read_cstring() if reader.remaining() else ""
        return cls(location=location)

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        if self.location:
            writer.write_cstring(self.location)
        return 0, _SELF_CONTAINED


@dataclass
class Dref(FullAtom):
    """Data reference table."""

    KIND = FourCC("dref")

    urls: list[Url] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Dref:
        count = reader.read_uint(4)
        return cls(urls=[Url.decode_from(reader) for _ in range(count)])

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        writer.write_uint(len(self.urls), 4)
        for url in self.urls:
            url.encode_into(writer)
        return 0, 0


@dataclass
class Dinf(Atom):
    """Data information container."""

    KIND = FourCC("dinf")

    dref: Dref = field(default_factory=Dref)

    @classmethod
    def decode_body(cls, reader: Reader) -> Dinf:
        return cls(**_decode_children(reader, required=(Dref,)))

    def encode_body(self, writer: Writer) -> None:
        _encode_children(writer, self.dref)
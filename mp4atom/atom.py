"""Core primitives: four-character codes, byte cursors and the atom base classes."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Iterator

_log = logging.getLogger(__name__)

_MAX_U32 = 0xFFFFFFFF


class Mp4Error(Exception):
    """Raised when an atom cannot be decoded or encoded."""


class FourCC:
    """A four-byte atom or brand identifier."""

    __slots__ = ("_value",)

    def __init__(self, value: FourCC | bytes | bytearray | str) -> None:
        if isinstance(value, FourCC):
            raw = value._value
        elif isinstance(value, str):
            raw = value.encode("latin-1")
        else:
            raw = bytes(value)
        if len(raw) != 4:
            raise Mp4Error(f"a FourCC needs exactly 4 bytes, got {raw!r}")
        self._value = raw

    def __bytes__(self) -> bytes:
        return self._value

    def __str__(self) -> str:
        return self._value.decode("latin-1")

    def __repr__(self) -> str:
        return f"FourCC({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FourCC):
            return self._value == other._value
        if isinstance(other, (bytes, bytearray)):
            return self._value == bytes(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)


class Reader:
    """Big-endian cursor over a byte buffer."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._view = memoryview(data)
        self._pos = 0

    def remaining(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._view) - self._pos

    def _check(self, size: int) -> None:
        left = self.remaining()
        if size < 0 or size > left:
            raise Mp4Error(f"out of bounds: need {size} bytes, {left} remain")

    def _take(self, size: int) -> Reader:
        self._check(size)
        sub = Reader(self._view[self._pos:self._pos + size])
        self._pos += size
        return sub

    def read(self, size: int) -> bytes:
        """Consume exactly ``size`` bytes."""
        self._check(size)
        chunk = bytes(self._view[self._pos:self._pos + size])
        self._pos += size
        return chunk

    def read_uint(self, size: int) -> int:
        return int.from_bytes(self.read(size), "big", signed=False)

    def read_int(self, size: int) -> int:
        return int.from_bytes(self.read(size), "big", signed=True)

    def read_fixed(self, int_bytes: int, signed: bool) -> float:
        """Read a fixed-point number with ``int_bytes`` integer and fraction bytes."""
        width = 2 * int_bytes
        raw = self.read_int(width) if signed else self.read_uint(width)
        return raw / (1 << (8 * int_bytes))

    def read_fourcc(self) -> FourCC:
        return FourCC(self.read(4))

    def read_cstring(self) -> str:
        """Read a NUL-terminated UTF-8 string, or the rest if no NUL is present."""
        end = bytes(self._view[self._pos:]).find(b"\0")
        if end < 0:
            raw = self.read_rest()
        else:
            raw = self.read(end)
            self.read(1)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise Mp4Error(f"invalid UTF-8 string: {raw!r}") from exc

    def read_rest(self) -> bytes:
        return self.read(self.remaining())


class Writer:
    """Big-endian byte sink."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def write(self, data: bytes | bytearray | memoryview) -> None:
        self._buf += data

    def write_uint(self, value: int, size: int) -> None:
        try:
            self._buf += int(value).to_bytes(size, "big", signed=False)
        except OverflowError as exc:
            raise Mp4Error(f"{value} does not fit in {size} unsigned bytes") from exc

    def write_int(self, value: int, size: int) -> None:
        try:
            self._buf += int(value).to_bytes(size, "big", signed=True)
        except OverflowError as exc:
            raise Mp4Error(f"{value} does not fit in {size} signed bytes") from exc

    def write_fixed(self, value: float, int_bytes: int, signed: bool) -> None:
        raw = round(value * (1 << (8 * int_bytes)))
        if signed:
            self.write_int(raw, 2 * int_bytes)
        else:
            self.write_uint(raw, 2 * int_bytes)

    def write_fourcc(self, value: FourCC | bytes | str) -> None:
        self._buf += bytes(FourCC(value))

    def write_cstring(self, text: str) -> None:
        self._buf += text.encode("utf-8") + b"\0"

    def getvalue(self) -> bytes:
        return bytes(self._buf)


def _read_header(reader: Reader) -> tuple[FourCC, Reader]:
    size = reader.read_uint(4)
    kind = reader.read_fourcc()
    if size == 0:
        return kind, reader._take(reader.remaining())
    header = 8
    if size == 1:
        size = reader.read_uint(8)
        header = 16
    if size < header:
        raise Mp4Error(f"atom {kind} declares size {size}, smaller than its header")
    return kind, reader._take(size - header)


def iter_atoms(reader: Reader) -> Iterator[tuple[FourCC, Reader]]:
    """Yield the kind and body of each atom until the reader is exhausted."""
    while reader.remaining():
        yield _read_header(reader)


class Atom(ABC):
    """A box with a size and kind header followed by a body."""

    KIND: ClassVar[FourCC]
    _registry: ClassVar[dict[bytes, type[Atom]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        kind = cls.__dict__.get("KIND")
        if kind is not None:
            Atom._registry[bytes(kind)] = cls

    @classmethod
    def decode(cls, data: bytes | bytearray | memoryview) -> Atom:
        """Decode one atom from the start of ``data``."""
        return cls.decode_from(Reader(data))

    @classmethod
    def decode_from(cls, reader: Reader) -> Atom:
        """Decode one atom from the reader, advancing past it."""
        kind, body = _read_header(reader)
        if kind != cls.KIND:
            raise Mp4Error(f"unexpected box {kind}, expected {cls.KIND}")
        return cls._decode_exact(body)

    @classmethod
    def _decode_exact(cls, body: Reader) -> Atom:
        atom = cls.decode_body(body)
        if body.remaining():
            raise Mp4Error(f"{body.remaining()} unread bytes left in {cls.KIND}")
        return atom

    @classmethod
    @abstractmethod
    def decode_body(cls, reader: Reader) -> Atom:
        """Decode the body that follows the header."""

    def encode(self) -> bytes:
        writer = Writer()
        self.encode_into(writer)
        return writer.getvalue()

    def encode_into(self, writer: Writer) -> None:
        body = Writer()
        self.encode_body(body)
        payload = body.getvalue()
        size = 8 + len(payload)
        if size <= _MAX_U32:
            writer.write_uint(size, 4)
            writer.write_fourcc(self.KIND)
        else:
            writer.write_uint(1, 4)
            writer.write_fourcc(self.KIND)
            writer.write_uint(size + 8, 8)
        writer.write(payload)

    @abstractmethod
    def encode_body(self, writer: Writer) -> None:
        """Write the body that follows the header."""


class FullAtom(Atom):
    """An atom whose body starts with a version byte and 24 bits of flags."""

    VERSIONS: ClassVar[tuple[int, ...]] = (0,)

    @classmethod
    def decode_body(cls, reader: Reader) -> Atom:
        version = reader.read_uint(1)
        flags = reader.read_uint(3)
        if version not in cls.VERSIONS:
            raise Mp4Error(f"unknown version {version} for {cls.KIND}")
        return cls.decode_body_ext(reader, version, flags)

    def encode_body(self, writer: Writer) -> None:
        body = Writer()
        version, flags = self.encode_body_ext(body)
        writer.write_uint(version, 1)
        writer.write_uint(flags, 3)
        writer.write(body.getvalue())

    @classmethod
    @abstractmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Atom:
        """Decode the body after the version and flags."""

    @abstractmethod
    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        """Write the body and return the (version, flags) to put before it."""


def _field_name(cls: type[Atom]) -> str:
    return cls.__name__.lower()


def _decode_children(
    reader: Reader,
    *,
    required: tuple[type[Atom], ...] = (),
    optional: tuple[type[Atom], ...] = (),
    multiple: tuple[type[Atom], ...] = (),
) -> dict[str, Any]:
    """Decode child atoms into a mapping of field name to atom, atom list or None."""
    lookup = {bytes(child.KIND): child for child in (*required, *optional, *multiple)}
    found: dict[str, Any] = {_field_name(child): [] for child in multiple}
    for kind, body in iter_atoms(reader):
        child = lookup.get(bytes(kind))
        if child is None:
            _log.warning("skipping unknown atom %s", kind)
            continue
        atom = child._decode_exact(body)
        name = _field_name(child)
        if child in multiple:
            found[name].append(atom)
        elif name in found:
            raise Mp4Error(f"duplicate box {kind}")
        else:
            found[name] = atom
    for child in required:
        if _field_name(child) not in found:
            raise Mp4Error(f"missing box {child.KIND}")
    for child in optional:
        found.setdefault(_field_name(child), None)
    return found


def _encode_children(writer: Writer, *children: Atom | list[Atom] | None) -> None:
    """Encode each child atom, skipping None and flattening lists."""
    for child in children:
        if child is None:
            continue
        if isinstance(child, list):
            for atom in child:
                atom.encode_into(writer)
        else:
            child.encode_into(writer)
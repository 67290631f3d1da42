from __future__ import annotations

from dataclasses import dataclass

import pytest

from mp4atom.atom import Atom, FourCC, FullAtom, Mp4Error, Reader, Writer, iter_atoms


@dataclass
class Probe(Atom):
    KIND = FourCC("tst1")
    value: int = 0

    @classmethod
    def decode_body(cls, reader):
        return cls(reader.read_uint(4))

    def encode_body(self, writer):
        writer.write_uint(self.value, 4)


@dataclass
class ProbeFull(FullAtom):
    KIND = FourCC("tst2")
    VERSIONS = (0, 1)
    value: int = 0

    @classmethod
    def decode_body_ext(cls, reader, version, flags):
        return cls(reader.read_uint(8 if version == 1 else 4))

    def encode_body_ext(self, writer):
        writer.write_uint(self.value, 8)
        return 1, 0


def _full_atom_bytes(version, value):
    writer = Writer()
    writer.write_uint(16, 4)
    writer.write_fourcc("tst2")
    writer.write_uint(version, 1)
    writer.write_uint(0, 3)
    writer.write_uint(value, 4)
    return writer.getvalue()


def test_fourcc_equality_and_text():
    kind = FourCC(b"moov")
    assert kind == FourCC("moov")
    assert kind == b"moov"
    assert str(kind) == "moov"
    assert bytes(kind) == b"moov"


def test_fourcc_wrong_length():
    with pytest.raises(Mp4Error):
        FourCC(b"moo")


def test_reader_uint_from_source_bytes():
    assert Reader(bytes.fromhex("00015F90")).read_uint(4) == 90000


def test_reader_fixed_point():
    assert Reader(bytes.fromhex("00010000")).read_fixed(2, False) == 1.0


def test_reader_signed_int():
    assert Reader(b"\xff\xff\xff\xff").read_int(4) == -1


def test_reader_out_of_bounds():
    reader = Reader(b"\x00\x01")
    with pytest.raises(Mp4Error):
        reader.read(3)
    assert reader.remaining() == 2


def test_cstring_round_trip():
    writer = Writer()
    writer.write_cstring("VideoHandler")
    writer.write_uint(7, 1)
    data = writer.getvalue()
    reader = Reader(data)
    assert reader.read_cstring() == "VideoHandler"
    assert reader.read_uint(1) == 7
    assert reader.remaining() == 0


def test_cstring_without_terminator_takes_rest():
    reader = Reader(b"abc")
    assert reader.read_cstring() == "abc"
    assert reader.remaining() == 0


def test_signed_fixed_round_trip():
    writer = Writer()
    writer.write_fixed(-1.0, 1, True)
    assert Reader(writer.getvalue()).read_fixed(1, True) == -1.0


def test_writer_rejects_overflow():
    writer = Writer()
    with pytest.raises(Mp4Error):
        writer.write_uint(256, 1)
    with pytest.raises(Mp4Error):
        writer.write_uint(-1, 4)
    assert writer.getvalue() == b""


def test_fourcc_round_trip_through_writer():
    writer = Writer()
    writer.write_fourcc("mvex")
    assert Reader(writer.getvalue()).read_fourcc() == FourCC(b"mvex")


def test_probe_round_trip():
    encoded = Probe(7).encode()
    assert FourCC(encoded[4:8]) == FourCC("tst1")
    assert Reader(encoded[:4]).read_uint(4) == len(encoded)
    assert Probe.decode(encoded) == Probe(7)


def test_size_zero_extends_to_end():
    data = b"\x00\x00\x00\x00" + bytes(FourCC("tst1")) + (5).to_bytes(4, "big")
    assert Probe.decode(data) == Probe(5)


def test_large_size_header():
    data = (
        b"\x00\x00\x00\x01"
        + bytes(FourCC("tst1"))
        + (20).to_bytes(8, "big")
        + (9).to_bytes(4, "big")
    )
    assert Probe.decode(data) == Probe(9)


def test_size_smaller_than_header():
    data = b"\x00\x00\x00\x04" + bytes(FourCC("tst1"))
    with pytest.raises(Mp4Error):
        Probe.decode(data)


def test_truncated_atom():
    writer = Writer()
    Probe(3).encode_into(writer)
    with pytest.raises(Mp4Error):
        Probe.decode(writer.getvalue()[:-1])


def test_wrong_kind():
    writer = Writer()
    Probe(1).encode_into(writer)
    with pytest.raises(Mp4Error):
        ProbeFull.decode(writer.getvalue())


def test_unread_bytes_rejected():
    data = (
        (16).to_bytes(4, "big")
        + bytes(FourCC("tst1"))
        + (1).to_bytes(4, "big")
        + b"\x00" * 4
    )
    with pytest.raises(Mp4Error):
        Probe.decode(data)


def test_sequential_decode():
    data = Probe(1).encode() + ProbeFull(2).encode()
    reader = Reader(data)
    assert Probe.decode_from(reader) == Probe(1)
    assert ProbeFull.decode_from(reader) == ProbeFull(2)
    assert reader.remaining() == 0


def test_iter_atoms_kinds():
    data = Probe(1).encode() + ProbeFull(2).encode()
    kinds = [kind for kind, _ in iter_atoms(Reader(data))]
    assert kinds == [FourCC("tst1"), FourCC("tst2")]


def test_full_atom_version_written():
    writer = Writer()
    ProbeFull(42).encode_into(writer)
    encoded = writer.getvalue()
    assert Reader(encoded[8:9]).read_uint(1) == 1
    assert ProbeFull.decode(encoded) == ProbeFull(42)


def test_full_atom_version_zero_decode():
    data = _full_atom_bytes(0, 3)
    assert ProbeFull.decode_from(Reader(data)) == ProbeFull(3)


def test_full_atom_unknown_version():
    data = _full_atom_bytes(2, 3)
    with pytest.raises(Mp4Error):
        ProbeFull.decode_from(Reader(data))
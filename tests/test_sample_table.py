import pytest

from mp4atom.atom import Mp4Error
from mp4atom.sample_table import Co64, Ctts, CttsEntry, Stco, Stsc, StscEntry

OFFSETS = [267, 1970, 2535, 2803, 11843, 22223, 33584]


def test_co64_round_trip():
    expected = Co64(entries=list(OFFSETS))
    assert Co64.decode(expected.encode()) == expected


def test_co64_size():
    assert len(Co64(entries=list(OFFSETS)).encode()) == 16 + 8 * len(OFFSETS)


def test_co64_large_offset():
    expected = Co64(entries=[2**40])
    assert Co64.decode(expected.encode()).entries == [2**40]


def test_ctts_round_trip():
    expected = Ctts(
        entries=[
            CttsEntry(sample_count=1, sample_offset=200),
            CttsEntry(sample_count=2, sample_offset=-100),
        ]
    )
    assert Ctts.decode(expected.encode()) == expected


def test_ctts_negative_offset_bytes():
    encoded = Ctts(entries=[CttsEntry(sample_count=2, sample_offset=-100)]).encode()
    assert encoded[-4:] == b"\xff\xff\xff\x9c"


def test_stco_round_trip():
    expected = Stco(entries=list(OFFSETS))
    assert Stco.decode(expected.encode()) == expected


def test_stco_empty_decode():
    assert Stco.decode(b"\0\0\0\x10stco" + bytes(8)) == Stco(entries=[])


def test_stco_overflow():
    with pytest.raises(Mp4Error):
        Stco(entries=[2**32]).encode()


def test_stco_truncated():
    with pytest.raises(Mp4Error):
        Stco.decode(b"\0\0\0\x10stco" + bytes(4) + b"\0\0\0\x05")


def test_stsc_round_trip():
    expected = Stsc(
        entries=[
            StscEntry(first_chunk=1, samples_per_chunk=1, sample_description_index=1),
            StscEntry(first_chunk=19026, samples_per_chunk=14, sample_description_index=1),
        ]
    )
    assert Stsc.decode(expected.encode()) == expected


def test_stsc_empty_decode():
    assert Stsc.decode(b"\0\0\0\x10stsc" + bytes(8)) == Stsc()


def test_stsc_wrong_kind():
    with pytest.raises(Mp4Error):
        Stsc.decode(b"\0\0\0\x10stco" + bytes(8))
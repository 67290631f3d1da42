from __future__ import annotations

import pytest

from mp4atom.atom import Mp4Error
from mp4atom.edit import Edts, Elst, ElstEntry

EDTS = bytes.fromhex(
    "00000024" + "65647473"
    + "0000001C" + "656C7374" + "00000000" + "00000001"
    + "00000000" + "00001770" + "0001" + "0000"
)


def _sample():
    return Elst(
        entries=[
            ElstEntry(
                segment_duration=634634,
                media_time=0,
                media_rate=1,
                media_rate_fraction=0,
            )
        ]
    )


def test_elst32():
    expected = _sample()
    assert Elst.decode(expected.encode()) == expected


def test_elst64():
    expected = _sample()
    decoded = Elst.decode(expected.encode())
    assert decoded == expected


def test_elst_encodes_version_one():
    assert _sample().encode()[8] == 1


def test_edts_decode_source_bytes():
    assert Edts.decode(EDTS) == Edts(
        elst=Elst(entries=[ElstEntry(media_time=6000, media_rate=1)])
    )


def test_edts_round_trip():
    expected = Edts(elst=_sample())
    assert Edts.decode(expected.encode()) == expected


def test_edts_empty():
    assert Edts.decode(Edts().encode()) == Edts(elst=None)


def test_elst_truncated_entries():
    with pytest.raises(Mp4Error):
        Elst.decode(EDTS[8:-2])


def test_elst_unknown_version():
    data = bytearray(EDTS[8:])
    data[8] = 3
    with pytest.raises(Mp4Error):
        Elst.decode(bytes(data))
# mp4atom

A pure-Python decoder and encoder for MP4 / ISO base media file format
(ISOBMFF) atoms, also called boxes. Each atom is a dataclass that can be
decoded from bytes and encoded back.

## Installation

    pip install mp4atom

## Supported atoms

- Movie level: `Mvhd`, `Mvex`, `Mehd`, `Trex`
- Edits: `Edts`, `Elst` (with `ElstEntry`)
- Media: `Hdlr`, `Mdhd`, `Smhd`, `Dinf`, `Dref`, `Url`
- Sample tables: `Stco`, `Co64`, `Ctts`, `Stsc`, `Saiz`, `Saio`
- Sample entries: `Audio`, `Av1c`, `Btrt`, `Ccst`, and `Colr`, which can be
  `ColrNclx`, `ColrRicc` or `ColrProf`

## Usage

```python
from mp4atom.movie import Mvhd, Trex
from mp4atom.sample_table import Stco

mvhd = Mvhd(creation_time=100, modification_time=200, duration=634634)
data = mvhd.encode()
assert Mvhd.decode(data) == mvhd

stco = Stco(entries=[267, 1970, 2535])
assert Stco.decode(stco.encode()) == stco
```

Use `mp4atom.atom.Reader` to walk a longer buffer. `Atom.decode_from(reader)`
reads one atom and moves past it. `iter_atoms(reader)` yields every atom that
is left.

```python
from mp4atom.atom import Reader
from mp4atom.sample_entry import Colr

colr = Colr.decode(bytes.fromhex("00000013636f6c726e636c78000100010001" "00"))
```

Malformed or truncated input raises `mp4atom.atom.Mp4Error`.

## Testing

    pip install mp4atom[test]
    pytest
"""Sample entry building blocks: audio fields, AV1 config, bitrate, constraints and colour."""

from __future__ import annotations

from dataclasses import dataclass

from mp4atom.atom import Atom, FourCC, FullAtom, Mp4Error, Reader, Writer

_AV1C_MARKER_VERSION = 0b1000_0001


@dataclass
class Audio:
    """The common fields that open every audio sample entry."""

    data_reference_index: int = 0
    channel_count: int = 0
    sample_size: int = 0
    sample_rate: float = 0.0

    @classmethod
    def decode_from(cls, reader: Reader) -> Audio:
        reader.read(4)  # reserved
        reader.read(2)  # reserved
        data_reference_index = reader.read_uint(2)
        version = reader.read_uint(2)
        reader.read(2)  # reserved
        reader.read(4)  # reserved
        channel_count = reader.read_uint(2)
        sample_size = reader.read_uint(2)
        reader.read(4)  # pre-defined, reserved
        sample_rate = reader.read_fixed(2, False)

        if version == 1:
            # QuickTime sound sample description version 1.
            reader.read(16)
        elif version == 2:
            # QuickTime sound sample description version 2.
            reader.read(4)
            reader.read(8)  # sample rate
            reader.read(4)  # channel count
            reader.read(20)
        elif version != 0:
            raise Mp4Error(f"unknown QuickTime version {version}")

        return cls(
            data_reference_index=data_reference_index,
            channel_count=channel_count,
            sample_size=sample_size,
            sample_rate=sample_rate,
        )

    def encode_into(self, writer: Writer) -> None:
        writer.write_uint(0, 4)  # reserved
        writer.write_uint(0, 2)  # reserved
        writer.write_uint(self.data_reference_index, 2)
        writer.write_uint(0, 2)  # version
        writer.write_uint(0, 2)  # reserved
        writer.write_uint(0, 4)  # reserved
        writer.write_uint(self.channel_count, 2)
        writer.write_uint(self.sample_size, 2)
        writer.write_uint(0, 4)  # reserved
        writer.write_fixed(self.sample_rate, 2, False)


@dataclass
class Av1c(Atom):
    """AV1 codec configuration."""

    KIND = FourCC("av1C")

    seq_profile: int = 0
    seq_level_idx_0: int = 0
    seq_tier_0: bool = False
    high_bitdepth: bool = False
    twelve_bit: bool = False
    monochrome: bool = False
    chroma_subsampling_x: bool = False
    chroma_subsampling_y: bool = False
    chroma_sample_position: int = 0
    initial_presentation_delay: int | None = None
    config_obus: bytes = b""

    @classmethod
    def decode_body(cls, reader: Reader) -> Av1c:
        version = reader.read_uint(1)
        if version != _AV1C_MARKER_VERSION:
            raise Mp4Error(f"unknown version {version}")

        v = reader.read_uint(1)
        seq_profile = v >> 5
        seq_level_idx_0 = v & 0b11111

        v = reader.read_uint(1)
        seq_tier_0 = bool((v >> 7) & 1)
        high_bitdepth = bool((v >> 6) & 1)
        twelve_bit = bool((v >> 5) & 1)
        monochrome = bool((v >> 4) & 1)
        chroma_subsampling_x = bool((v >> 3) & 1)
        chroma_subsampling_y = bool((v >> 2) & 1)
        chroma_sample_position = v & 0b11

        v = reader.read_uint(1)
        if v >> 5:
            raise Mp4Error("reserved bits set in av1C")
        delay_present = (v >> 4) & 1
        delay_minus_one = v & 0b1111
        if delay_present:
            initial_presentation_delay: int | None = delay_minus_one + 1
        else:
            if delay_minus_one:
                raise Mp4Error("reserved bits set in av1C")
            initial_presentation_delay = None

        return cls(
            seq_profile=seq_profile,
            seq_level_idx_0=seq_level_idx_0,
            seq_tier_0=seq_tier_0,
            high_bitdepth=high_bitdepth,
            twelve_bit=twelve_bit,
            monochrome=monochrome,
            chroma_subsampling_x=chroma_subsampling_x,
            chroma_subsampling_y=chroma_subsampling_y,
            chroma_sample_position=chroma_sample_position,
            initial_presentation_delay=initial_presentation_delay,
            config_obus=reader.read_rest(),
        )

    def encode_body(self, writer: Writer) -> None:
        writer.write_uint(_AV1C_MARKER_VERSION, 1)
        writer.write_uint((self.seq_profile << 5) | self.seq_level_idx_0, 1)
        writer.write_uint(
            (int(self.seq_tier_0) << 7)
            | (int(self.high_bitdepth) << 6)
            | (int(self.twelve_bit) << 5)
            | (int(self.monochrome) << 4)
            | (int(self.chroma_subsampling_x) << 3)
            | (int(self.chroma_subsampling_y) << 2)
            | self.chroma_sample_position,
            1,
        )
        if self.initial_presentation_delay is None:
            writer.write_uint(0, 1)
        else:
            writer.write_uint((self.initial_presentation_delay - 1) | 0b0001_0000, 1)
        writer.write(self.config_obus)


@dataclass
class Btrt(Atom):
    """Bit rate information."""

    KIND = FourCC("btrt")

    buffer_size_db: int = 0
    max_bitrate: int = 0
    avg_bitrate: int = 0

    @classmethod
    def decode_body(cls, reader: Reader) -> Btrt:
        return cls(
            buffer_size_db=reader.read_uint(4),
            max_bitrate=reader.read_uint(4),
            avg_bitrate=reader.read_uint(4),
        )

    def encode_body(self, writer: Writer) -> None:
        writer.write_uint(self.buffer_size_db, 4)
        writer.write_uint(self.max_bitrate, 4)
        writer.write_uint(self.avg_bitrate, 4)


@dataclass
class Ccst(FullAtom):
    """Coding constraints."""

    KIND = FourCC("ccst")

    all_ref_pics_intra: bool = False
    intra_pred_used: bool = False
    max_ref_per_pic: int = 0

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Ccst:
        bits = reader.read_uint(4)
        return cls(
            all_ref_pics_intra=bool(bits & 0x80000000),
            intra_pred_used=bool(bits & 0x40000000),
            max_ref_per_pic=(bits & 0x3C000000) >> 26,
        )

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        bits = 0
        if self.all_ref_pics_intra:
            bits |= 0x80000000
        if self.intra_pred_used:
            bits |= 0x40000000
        bits |= (self.max_ref_per_pic << 26) & 0x3C000000
        writer.write_uint(bits, 4)
        return 0, 0


class Colr(Atom):
    """Colour information; decodes to one of its concrete forms."""

    KIND = FourCC("colr")

    @classmethod
    def decode_body(cls, reader: Reader) -> Colr:
        colour_type = reader.read_fourcc()
        if colour_type == b"nclx":
            colour_primaries = reader.read_uint(2)
            transfer_characteristics = reader.read_uint(2)
            matrix_coefficients = reader.read_uint(2)
            full_range_flag = reader.read_uint(1) == 0x80
            return ColrNclx(
                colour_primaries=colour_primaries,
                transfer_characteristics=transfer_characteristics,
                matrix_coefficients=matrix_coefficients,
                full_range_flag=full_range_flag,
            )
        if colour_type == b"prof":
            return ColrProf(profile=reader.read_rest())
        if colour_type == b"rICC":
            return ColrRicc(profile=reader.read_rest())
        raise Mp4Error(f"unexpected box {colour_type}")


@dataclass
class ColrNclx(Colr):
    """On-screen colour parameters; defaults follow MIAF."""

    colour_primaries: int = 1
    transfer_characteristics: int = 13
    matrix_coefficients: int = 5
    full_range_flag: bool = True

    def encode_body(self, writer: Writer) -> None:
        writer.write_fourcc("nclx")
        writer.write_uint(self.colour_primaries, 2)
        writer.write_uint(self.transfer_characteristics, 2)
        writer.write_uint(self.matrix_coefficients, 2)
        writer.write_uint(0x80 if self.full_range_flag else 0x00, 1)


@dataclass
class ColrRicc(Colr):
    """Restricted ICC profile."""

    profile: bytes = b""

    def encode_body(self, writer: Writer) -> None:
        writer.write_fourcc("rICC")
        writer.write(self.profile)


@dataclass
class ColrProf(Colr):
    """Unrestricted ICC profile."""

    profile: bytes = b""

    def encode_body(self, writer: Writer) -> None:
        writer.write_fourcc("prof")
        writer.write(self.profile)
"""Sample auxiliary information size and offset atoms."""

from __future__ import annotations

from dataclasses import dataclass, field

from mp4atom.atom import FourCC, FullAtom, Reader, Writer

_AUX_INFO_TYPE_PRESENT = 1 << 0
_MAX_U32 = 0xFFFFFFFF


@dataclass
class AuxInfo:
    """The auxiliary information type and its parameter."""

    aux_info_type: FourCC
    aux_info_type_parameter: int


def _read_aux_info(reader: Reader, flags: int) -> AuxInfo | None:
    if not flags & _AUX_INFO_TYPE_PRESENT:
        return None
    aux_info_type = reader.read_fourcc()
    aux_info_type_parameter = reader.read_uint(4)
    return AuxInfo(aux_info_type, aux_info_type_parameter)


def _write_aux_info(writer: Writer, aux_info: AuxInfo | None) -> int:
    """Write the aux info if present and return the flags that announce it."""
    if aux_info is None:
        return 0
    writer.write_fourcc(aux_info.aux_info_type)
    writer.write_uint(aux_info.aux_info_type_parameter, 4)
    return _AUX_INFO_TYPE_PRESENT


@dataclass
class Saiz(FullAtom):
    """Sample auxiliary information sizes (ISO/IEC 14496-12 8.7.8)."""

    KIND = FourCC("saiz")
    VERSIONS = (0,)

    aux_info: AuxInfo | None = None
    default_sample_info_size: int = 0
    sample_count: int = 0
    sample_info_size: list[int] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Saiz:
        aux_info = _read_aux_info(reader, flags)
        default_sample_info_size = reader.read_uint(1)
        sample_count = reader.read_uint(4)
        sample_info_size = (
            list(reader.read(sample_count)) if default_sample_info_size == 0 else []
        )
        return cls(
            aux_info=aux_info,
            default_sample_info_size=default_sample_info_size,
            sample_count=sample_count,
            sample_info_size=sample_info_size,
        )

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        flags = _write_aux_info(writer, self.aux_info)
        writer.write_uint(self.default_sample_info_size, 1)
        writer.write_uint(self.sample_count, 4)
        if self.default_sample_info_size == 0:
            for size in self.sample_info_size:
                writer.write_uint(size, 1)
        return 0, flags


@dataclass
class Saio(FullAtom):
    """Sample auxiliary information offsets (ISO/IEC 14496-12 8.7.9)."""

    KIND = FourCC("saio")
    VERSIONS = (0, 1)

    aux_info: AuxInfo | None = None
    offsets: list[int] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, version: int, flags: int) -> Saio:
        aux_info = _read_aux_info(reader, flags)
        count = reader.read_uint(4)
        width = 8 if version == 1 else 4
        offsets = [reader.read_uint(width) for _ in range(count)]
        return cls(aux_info=aux_info, offsets=offsets)

    def encode_body_ext(self, writer: Writer) -> tuple[int, int]:
        version = 1 if any(offset > _MAX_U32 for offset in self.offsets) else 0
        flags = _write_aux_info(writer, self.aux_info)
        writer.write_uint(len(self.offsets), 4)
        width = 8 if version == 1 else 4
        for offset in self.offsets:
            writer.write_uint(offset, width)
        return version, flags
"""Tape data header: format, compression, encryption and MIME type codes."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

from tapedrive.consts import HEADER_SIZE

HEADER_MAGIC = b"TAPE"
HEADER_VERSION = 1

_LAYOUT = struct.Struct("<4sBBBBQ12sB35s")


class TapeHeaderError(ValueError):
    """Raised when header bytes are malformed."""


class TapeFlags(IntEnum):
    """Flags for the tape data."""

    NONE = 0
    # Each segment carries a big-endian u64 prefix with its segment number,
    # so out-of-order or duplicate writes can be reassembled.
    PREFIXED = 1 << 0


class CompressionAlgo(IntEnum):
    """Compression applied to the payload."""

    NONE = 0
    GZIP = 1


class EncryptionAlgo(IntEnum):
    """Encryption applied to the payload."""

    NONE = 0


class MimeType(IntEnum):
    """Predefined one-byte MIME type codes."""

    UNKNOWN = 0

    IMAGE_PNG = 1
    IMAGE_JPEG = 2
    IMAGE_GIF = 3
    IMAGE_WEBP = 4
    IMAGE_BMP = 5
    IMAGE_TIFF = 6

    APPLICATION_PDF = 10
    APPLICATION_MSWORD = 11
    APPLICATION_DOCX = 12
    APPLICATION_ODT = 13

    TEXT_PLAIN = 20
    TEXT_HTML = 21
    TEXT_CSS = 22
    TEXT_JAVASCRIPT = 23
    TEXT_CSV = 24
    TEXT_MARKDOWN = 25

    AUDIO_MPEG = 30
    AUDIO_WAV = 31
    AUDIO_OGG = 32
    AUDIO_FLAC = 33

    VIDEO_MP4 = 40
    VIDEO_WEBM = 41
    VIDEO_MPEG = 42
    VIDEO_AVI = 43

    APPLICATION_JSON = 50
    APPLICATION_XML = 51
    APPLICATION_ZIP = 52
    APPLICATION_GZIP = 53
    APPLICATION_TAR = 54

    FONT_WOFF = 60
    FONT_WOFF2 = 61
    FONT_TTF = 62
    FONT_OTF = 63

    APPLICATION_RTF = 70
    APPLICATION_SQL = 71
    APPLICATION_YAML = 72


@dataclass
class TapeHeader:
    """Opaque 64-byte header stored on a tape; the program never checks it."""

    magic: bytes = HEADER_MAGIC
    version: int = HEADER_VERSION
    flags: int = TapeFlags.NONE
    mime_type: int = MimeType.UNKNOWN
    compression: int = CompressionAlgo.NONE
    data_len: int = 0
    iv: bytes = bytes(12)
    encryption_algo: int = EncryptionAlgo.NONE
    reserved: bytes = field(default=bytes(35))

    @classmethod
    def new(
        cls,
        mime_type: MimeType,
        compression: CompressionAlgo,
        encryption_algo: EncryptionAlgo,
        flags: TapeFlags,
    ) -> "TapeHeader":
        """A fresh header with no data length and a zero IV."""
        return cls(
            flags=int(flags),
            mime_type=int(mime_type),
            compression=int(compression),
            encryption_algo=int(encryption_algo),
        )

    def to_bytes(self) -> bytes:
        """Serialize to exactly HEADER_SIZE bytes."""
        try:
            return _LAYOUT.pack(
                bytes(self.magic),
                self.version,
                self.flags,
                self.mime_type,
                self.compression,
                self.data_len,
                bytes(self.iv),
                self.encryption_algo,
                bytes(self.reserved),
            )
        except struct.error as exc:
            raise TapeHeaderError(f"cannot serialize header: {exc}") from exc

    @classmethod
    def try_from_bytes(cls, data: bytes) -> "TapeHeader":
        """Parse a header, checking its size, magic and version."""
        data = bytes(data)
        if len(data) < HEADER_SIZE:
            raise TapeHeaderError(
                f"Data too short for TapeHeader ({len(data)} < {HEADER_SIZE})"
            )
        if data[0:4] != HEADER_MAGIC:
            raise TapeHeaderError("Invalid magic number in TapeHeader")
        if data[4] != HEADER_VERSION:
            raise TapeHeaderError(
                f"Unsupported TapeHeader version: found {data[4]}, "
                f"expected {HEADER_VERSION}"
            )
        if len(data) != HEADER_SIZE:
            raise TapeHeaderError(
                f"Failed to cast bytes to TapeHeader: size mismatch "
                f"({len(data)} != {HEADER_SIZE})"
            )
        (magic, version, flags, mime_type, compression, data_len, iv,
         encryption_algo, reserved) = _LAYOUT.unpack(data)
        return cls(
            magic=magic,
            version=version,
            flags=flags,
            mime_type=mime_type,
            compression=compression,
            data_len=data_len,
            iv=iv,
            encryption_algo=encryption_algo,
            reserved=reserved,
        )

    def __repr__(self) -> str:
        return (
            f"TapeHeader(version={self.version}, flags={self.flags}, "
            f"mime_type={self.mime_type}, compression={self.compression}, "
            f"encryption_algo={self.encryption_algo}, iv={list(self.iv)})"
        )
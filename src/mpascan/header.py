import struct
from dataclasses import dataclass
from typing import Optional

from .enums import MpegVersion, ChannelMode, Emphasis
from .tables import (
    SYNC_MASK,
    VERSION_BITS,
    LAYER_BITS,
    BITRATE_BAD,
    SAMPLE_RATE_RESERVED,
    CHANNEL_MODE_BITS,
    BAND_LOWER,
    BAND_UPPER,
    EMPHASIS_BITS,
    lookup_bitrate,
    lookup_sample_rate,
    samples_per_frame as _samples_per_frame,
)

HEADER_LEN = 4


@dataclass(frozen=True)
class MpegAudioHeader:
    """A decoded MPEG audio frame header.

    Defaults describe the invalid header; check ``valid`` before reading
    anything else. ``band_lower``/``band_upper`` only mean something for
    layer 1/2 joint stereo, ``intensity_stereo``/``ms_stereo`` only for
    layer 3 joint stereo.
    """
    valid: bool = False
    offset: int = 0
    frame_size: int = 0
    mpeg_version: Optional[MpegVersion] = None
    layer: int = 0
    crc_enabled: bool = False
    bitrate_kbps: int = 0
    sample_rate_hz: int = 0
    frame_padded: bool = False
    channel_mode: Optional[ChannelMode] = None
    band_lower: int = 0
    band_upper: int = 0
    intensity_stereo: bool = False
    ms_stereo: bool = False
    copyright: bool = False
    original: bool = False
    emphasis: Optional[Emphasis] = None

    @property
    def free_format(self) -> bool:
        return False

    @property
    def end_offset(self) -> int:
        return self.offset + self.frame_size

    @property
    def channels(self) -> int:
        if not self.valid:
            return 0
        return 1 if self.channel_mode is ChannelMode.MONO else 2

    @property
    def version_label(self) -> str:
        return self.mpeg_version.value if self.mpeg_version else ""

    @property
    def samples_per_frame(self) -> int:
        if not self.valid:
            return 0
        return _samples_per_frame(self.mpeg_version, self.layer)

    @property
    def duration_seconds(self) -> float:
        if not self.valid:
            return 0.0
        return self.samples_per_frame / float(self.sample_rate_hz)


class FreeFormatFrame(MpegAudioHeader):
    """Valid header whose bitrate index is 'free'.

    The frame size cannot be derived from the header alone, so
    ``frame_size`` is always 0 and a frame walk has to stop here.
    """

    @property
    def free_format(self) -> bool:
        return True


INVALID_HEADER = MpegAudioHeader()


def frame_size_bytes(bitrate_kbps: int, sample_rate_hz: int, padded: bool) -> int:
    """Frame length in bytes, header included.

    144 * bitrate / sample rate, plus one byte when padded. The same
    multiplier is used for every layer and version; whether that holds
    outside MPEG1 Layer 3 is unverified.
    """
    size = 144 * (bitrate_kbps * 1000) // sample_rate_hz
    if padded:
        size += 1
    return size


def decode_header(buffer, offset: int = 0, *, reject_reserved_emphasis: bool = False) -> MpegAudioHeader:
    """Decode the 4 bytes at ``offset`` as an MPEG audio header.

    Never reads past the end of ``buffer``; returns ``INVALID_HEADER`` for
    short reads, a missing syncword or any reserved field value.
    """
    if offset < 0 or offset + HEADER_LEN > len(buffer):
        return INVALID_HEADER
    word = struct.unpack_from(">I", buffer, offset)[0]

    if word & SYNC_MASK != SYNC_MASK:
        return INVALID_HEADER

    version = VERSION_BITS.get((word >> 19) & 0b11)
    if version is None:
        return INVALID_HEADER
    layer = LAYER_BITS.get((word >> 17) & 0b11)
    if layer is None:
        return INVALID_HEADER
    crc_enabled = bool((word >> 16) & 0b1)

    bitrate_bits = (word >> 12) & 0b1111
    if bitrate_bits == BITRATE_BAD:
        return INVALID_HEADER
    bitrate = lookup_bitrate(bitrate_bits, version, layer)

    samplerate_bits = (word >> 10) & 0b11
    if samplerate_bits == SAMPLE_RATE_RESERVED:
        return INVALID_HEADER
    sample_rate = lookup_sample_rate(samplerate_bits, version)

    padded = bool((word >> 9) & 0b1)
    channel_mode = CHANNEL_MODE_BITS[(word >> 6) & 0b11]

    # Layer 3 uses the extension bits as two on/off switches,
    # layers 1 and 2 as the first band intensity stereo applies to.
    ext_bits = (word >> 4) & 0b11
    band_lower = band_upper = 0
    intensity_stereo = ms_stereo = False
    if layer == 3:
        intensity_stereo = ext_bits in (0b01, 0b10)
        ms_stereo = ext_bits in (0b10, 0b11)
    else:
        band_lower = BAND_LOWER[ext_bits]
        band_upper = BAND_UPPER

    copyright_flag = bool((word >> 3) & 0b1)
    original_flag = bool((word >> 2) & 0b1)

    emphasis = EMPHASIS_BITS[word & 0b11]
    if emphasis is Emphasis.RESERVED and reject_reserved_emphasis:
        return INVALID_HEADER

    if bitrate == 0:
        cls = FreeFormatFrame
        frame_size = 0
    else:
        cls = MpegAudioHeader
        frame_size = frame_size_bytes(bitrate, sample_rate, padded)

    return cls(
        valid=True,
        offset=offset,
        frame_size=frame_size,
        mpeg_version=version,
        layer=layer,
        crc_enabled=crc_enabled,
        bitrate_kbps=bitrate,
        sample_rate_hz=sample_rate,
        frame_padded=padded,
        channel_mode=channel_mode,
        band_lower=band_lower,
        band_upper=band_upper,
        intensity_stereo=intensity_stereo,
        ms_stereo=ms_stereo,
        copyright=copyright_flag,
        original=original_flag,
        emphasis=emphasis,
    )

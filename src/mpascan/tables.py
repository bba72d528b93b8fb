"""Lookup tables for the MPEG audio frame header.

Header layout (32 bits, big endian):

    AAAAAAAA AAABBCCD EEEEFFGH IIJJKLMM

    A  11-bit syncword, all set
    B  version        (00 MPEG2.5, 01 reserved, 10 MPEG2, 11 MPEG1)
    C  layer          (00 reserved, 01 Layer3, 10 Layer2, 11 Layer1)
    D  CRC flag
    E  bitrate index
    F  sample rate index
    G  padding flag
    H  private bit (ignored)
    I  channel mode
    J  channel mode extension (joint stereo)
    K  copyright flag
    L  original flag
    M  emphasis
"""
import numpy as np

from .enums import MpegVersion, ChannelMode, Emphasis

SYNC_MASK = 0xFFE00000
SYNC_BYTE = b"\xff"

VERSION_BITS = {
    0b00: MpegVersion.V2_5,
    0b10: MpegVersion.V2,
    0b11: MpegVersion.V1,
}
LAYER_BITS = {0b01: 3, 0b10: 2, 0b11: 1}

BITRATE_FREE = 0b0000
BITRATE_BAD = 0b1111
SAMPLE_RATE_RESERVED = 0b11

#     bits     V1,L1   V1,L2   V1,L3   V2,L1   V2,L2&L3
#     0000     free    free    free    free    free
#     1111     bad     bad     bad     bad     bad
# (V2 covers both MPEG2 and MPEG2.5)
BITRATE_TABLE = np.array([
    [32,  32,  32,  32,  8],    # 0001
    [64,  48,  40,  48,  16],   # 0010
    [96,  56,  48,  56,  24],   # 0011
    [128, 64,  56,  64,  32],   # 0100
    [160, 80,  64,  80,  40],   # 0101
    [192, 96,  80,  96,  48],   # 0110
    [224, 112, 96,  112, 56],   # 0111
    [256, 128, 112, 128, 64],   # 1000
    [288, 160, 128, 144, 80],   # 1001
    [320, 192, 160, 160, 96],   # 1010
    [352, 224, 192, 176, 112],  # 1011
    [384, 256, 224, 192, 128],  # 1100
    [416, 320, 256, 224, 144],  # 1101
    [448, 384, 320, 256, 160],  # 1110
], dtype=np.uint16)
BITRATE_TABLE.setflags(write=False)

#     bits     MPEG1       MPEG2       MPEG2.5
#     00       44100 Hz    22050 Hz    11025 Hz
#     01       48000 Hz    24000 Hz    12000 Hz
#     10       32000 Hz    16000 Hz    8000 Hz
#     11       reserved    reserved    reserved
SAMPLE_RATE_TABLE = np.array([
    [44100, 22050, 11025],
    [48000, 24000, 12000],
    [32000, 16000, 8000],
], dtype=np.uint32)
SAMPLE_RATE_TABLE.setflags(write=False)

_VERSION_COLUMN = {MpegVersion.V1: 0, MpegVersion.V2: 1, MpegVersion.V2_5: 2}

CHANNEL_MODE_BITS = {
    0b00: ChannelMode.STEREO,
    0b01: ChannelMode.JOINT_STEREO,
    0b10: ChannelMode.DUAL,
    0b11: ChannelMode.MONO,
}

# layers 1 and 2: intensity stereo applies to bands lower..31
BAND_LOWER = (4, 8, 12, 16)
BAND_UPPER = 31

EMPHASIS_BITS = {
    0b00: Emphasis.NONE,
    0b01: Emphasis.MS_50_15,
    0b10: Emphasis.CCITT_J17,
    0b11: Emphasis.RESERVED,
}

_SAMPLES_PER_FRAME = {
    (MpegVersion.V1, 1): 384,
    (MpegVersion.V1, 2): 1152,
    (MpegVersion.V1, 3): 1152,
    (MpegVersion.V2, 1): 384,
    (MpegVersion.V2, 2): 1152,
    (MpegVersion.V2, 3): 576,
    (MpegVersion.V2_5, 1): 384,
    (MpegVersion.V2_5, 2): 1152,
    (MpegVersion.V2_5, 3): 576,
}


def _bitrate_column(version: MpegVersion, layer: int) -> int:
    if version is MpegVersion.V1:
        return layer - 1
    return 3 if layer == 1 else 4


def lookup_bitrate(index: int, version: MpegVersion, layer: int) -> int:
    """Bitrate in kbps for a 4-bit index; 0 means free format."""
    if index == BITRATE_FREE:
        return 0
    if not BITRATE_FREE < index < BITRATE_BAD:
        raise ValueError(f"bitrate index {index:#06b} is not tabulated")
    if layer not in (1, 2, 3):
        raise ValueError(f"invalid layer {layer}")
    return int(BITRATE_TABLE[index - 1, _bitrate_column(version, layer)])


def lookup_sample_rate(index: int, version: MpegVersion) -> int:
    if not 0 <= index < SAMPLE_RATE_RESERVED:
        raise ValueError(f"sample rate index {index:#04b} is reserved")
    return int(SAMPLE_RATE_TABLE[index, _VERSION_COLUMN[version]])


def samples_per_frame(version: MpegVersion, layer: int) -> int:
    return _SAMPLES_PER_FRAME[(version, layer)]

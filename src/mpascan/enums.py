from enum import Enum


class MpegVersion(Enum):
    V1 = "1"
    V2 = "2"
    V2_5 = "2.5"


class ChannelMode(Enum):
    STEREO = "stereo"
    JOINT_STEREO = "joint_stereo"
    DUAL = "dual"
    MONO = "mono"


class Emphasis(Enum):
    NONE = "none"
    MS_50_15 = "50/15 ms"
    CCITT_J17 = "CCITT J.17"
    # bit pattern 11 is reserved; callers decide whether to reject it
    RESERVED = "reserved"

import logging

logger = logging.getLogger(__name__)

ID3_MAGIC = b"ID3"
ID3_HEADER_LEN = 10
ID3_FOOTER_LEN = 10
FLAG_FOOTER = 1 << 4


def synchsafe_int(data) -> int:
    """Decode a synchsafe integer (7 significant bits per byte).

    Bytes are not masked: a high bit set in a malformed field overlaps the
    low bit of the byte before it.
    """
    value = 0
    for b in data:
        value = (value << 7) | b
    return value


def id3v2_tag_size(buffer) -> int:
    """Total bytes taken by a leading ID3v2 tag, or 0 when there is none.

    The size field excludes the 10-byte header and the optional 10-byte
    footer, so both are added back here.
    """
    if len(buffer) < ID3_HEADER_LEN or bytes(buffer[:3]) != ID3_MAGIC:
        return 0
    size = synchsafe_int(buffer[6:10])
    if buffer[5] & FLAG_FOOTER:
        size += ID3_HEADER_LEN + ID3_FOOTER_LEN
    else:
        size += ID3_HEADER_LEN
    logger.info("ID3v2 tag found with length %d", size)
    return size

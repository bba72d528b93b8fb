import logging
from typing import Iterator, Optional

from .header import INVALID_HEADER, HEADER_LEN, MpegAudioHeader, decode_header
from .id3 import id3v2_tag_size
from .tables import SYNC_BYTE

logger = logging.getLogger(__name__)


def searchable(buffer):
    """Return ``buffer`` as an object with ``find``; views are copied to bytes."""
    if hasattr(buffer, "find"):
        return buffer
    return bytes(buffer)


def first_header(buffer, start_offset: int = 0, end_offset: Optional[int] = None,
                 *, reject_reserved_emphasis: bool = False) -> MpegAudioHeader:
    """Find the first valid header starting in ``[start_offset, end_offset]``.

    The search moves one byte at a time; ``end_offset`` is inclusive and
    defaults to the last byte of the buffer. ``buffer`` may be bytes,
    bytearray, mmap or a memoryview.
    """
    buffer = searchable(buffer)
    if end_offset is None:
        end_offset = len(buffer) - 1
    if start_offset < 0 or start_offset > end_offset:
        return INVALID_HEADER

    # a header cannot start in the last three bytes
    last = min(end_offset, len(buffer) - HEADER_LEN)
    pos = start_offset
    while pos <= last:
        # only offsets holding 0xFF can start a syncword
        pos = buffer.find(SYNC_BYTE, pos, last + 1)
        if pos < 0:
            break
        header = decode_header(buffer, pos, reject_reserved_emphasis=reject_reserved_emphasis)
        if header.valid:
            return header
        pos += 1
    return INVALID_HEADER


def next_header(buffer, previous: MpegAudioHeader, end_offset: Optional[int] = None,
                *, reject_reserved_emphasis: bool = False) -> MpegAudioHeader:
    """Skip ``previous``'s frame and resync on the header after it."""
    if not previous.valid:
        return INVALID_HEADER
    if previous.frame_size <= 0:
        logger.warning("frame at %#010x has no computable size (free format), stopping", previous.offset)
        return INVALID_HEADER
    return first_header(buffer, previous.offset + previous.frame_size, end_offset,
                        reject_reserved_emphasis=reject_reserved_emphasis)


def iter_headers(buffer, start_offset: Optional[int] = None, end_offset: Optional[int] = None,
                 limit: Optional[int] = None, *, reject_reserved_emphasis: bool = False) -> Iterator[MpegAudioHeader]:
    """Yield consecutive valid headers; starts after any ID3v2 tag by default."""
    buffer = searchable(buffer)
    if start_offset is None:
        start_offset = id3v2_tag_size(buffer)
    count = 0
    header = first_header(buffer, start_offset, end_offset, reject_reserved_emphasis=reject_reserved_emphasis)
    while header.valid and (limit is None or count < limit):
        yield header
        count += 1
        header = next_header(buffer, header, end_offset, reject_reserved_emphasis=reject_reserved_emphasis)

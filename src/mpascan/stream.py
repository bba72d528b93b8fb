import logging
from typing import List, Optional

import numpy as np

from .config import ScanConfig
from .exceptions import FormatError
from .header import INVALID_HEADER, MpegAudioHeader
from .id3 import id3v2_tag_size
from .loader import read_mpeg_file
from .scanner import first_header, next_header, searchable

logger = logging.getLogger(__name__)


class MPAStream:
    """Frame walk over an in-memory MPEG audio file."""

    def __init__(self, data: bytes, config: Optional[ScanConfig] = None):
        self.data = searchable(data)
        self.config = config or ScanConfig()
        self.tag_size = id3v2_tag_size(data) if self.config.skip_id3 else 0
        if self.config.start_offset is not None:
            self.start_offset = self.config.start_offset
        else:
            self.start_offset = self.tag_size
        self.first: MpegAudioHeader = INVALID_HEADER
        self.frames: List[MpegAudioHeader] = []
        self.stopped_on_free_format = False
        self._scan()

    def _matches_first(self, hdr: MpegAudioHeader) -> bool:
        return hdr.mpeg_version is self.first.mpeg_version and hdr.layer == self.first.layer

    def _scan(self):
        reject = self.config.reject_reserved_emphasis
        limit = self.config.max_headers
        hdr = first_header(self.data, self.start_offset, reject_reserved_emphasis=reject)
        self.first = hdr
        skipped = 0
        while hdr.valid and (limit is None or len(self.frames) < limit):
            if not self.config.same_format_only or self._matches_first(hdr):
                self.frames.append(hdr)
            else:
                skipped += 1
            if hdr.free_format:
                self.stopped_on_free_format = True
                break
            hdr = next_header(self.data, hdr, reject_reserved_emphasis=reject)
        if skipped:
            logger.info("skipped %d frames with a different version or layer", skipped)

    def stats(self):
        frames = self.frames
        total = len(frames)
        if total == 0:
            return {"valid": False, "total_frames": 0, "tag_size": self.tag_size,
                    "start_offset": self.start_offset}

        bitrates = np.fromiter((f.bitrate_kbps for f in frames), dtype=np.int64, count=total)
        rates = np.fromiter((f.sample_rate_hz for f in frames), dtype=np.int64, count=total)
        samples = np.fromiter((f.samples_per_frame for f in frames), dtype=np.int64, count=total)
        sized = bitrates[bitrates > 0]
        last = frames[-1]
        return {
            "valid": True,
            "total_frames": total,
            "tag_size": self.tag_size,
            "start_offset": self.start_offset,
            "first_offset": self.first.offset,
            "versions": sorted({f.version_label for f in frames}),
            "layers": sorted({f.layer for f in frames}),
            "sample_rates": [int(r) for r in np.unique(rates)],
            "bitrate_min": int(sized.min()) if sized.size else 0,
            "bitrate_max": int(sized.max()) if sized.size else 0,
            "bitrate_mean": float(sized.mean()) if sized.size else 0.0,
            "vbr": bool(np.unique(sized).size > 1),
            "padded_frames": sum(1 for f in frames if f.frame_padded),
            "crc_frames": sum(1 for f in frames if f.crc_enabled),
            "stereo": any(f.channels == 2 for f in frames),
            "duration_sec": float(np.sum(samples / rates)),
            "truncated_tail": last.end_offset > len(self.data),
            "free_format_stop": self.stopped_on_free_format,
        }


def analyze_file(path, config: Optional[ScanConfig] = None):
    data = read_mpeg_file(path)
    st = MPAStream(data, config)
    if not st.first.valid:
        raise FormatError(f"No valid MPEG audio headers found in {path}.")
    return st.stats()

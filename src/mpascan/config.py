from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_HEADERS = 50


@dataclass
class ScanConfig:
    max_headers: Optional[int] = DEFAULT_MAX_HEADERS  # None walks the whole buffer
    same_format_only: bool = False  # keep only frames matching the first header's version and layer
    skip_id3: bool = True
    start_offset: Optional[int] = None  # overrides the ID3v2 skip when set
    reject_reserved_emphasis: bool = False

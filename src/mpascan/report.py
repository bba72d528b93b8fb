"""Plain-text rendering of decoded headers and stream summaries."""
from typing import Iterable, Tuple

from .header import MpegAudioHeader

TABLE_COLUMNS = ("Location", "MPEG", "L", "Kbps", "Hz", "E", "C", "O", "Frame")
TABLE_HEAD = (
    " Location | MPEG | L | Kbps | Hz    | E | C | O | Frame \n"
    "----------|------|---|------|-------|---|---|---|-------"
)


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def _mark(flag: bool) -> str:
    return "Y" if flag else " "


def format_header_details(header: MpegAudioHeader) -> str:
    if not header.valid:
        return "No valid MPEG audio headers found."
    lines = [
        f"First valid header at {header.offset:08x}:",
        f"  MPEG{header.version_label} Layer {header.layer}",
        f"  Bit rate:    {header.bitrate_kbps} kbps" + (" (free format)" if header.free_format else ""),
        f"  Sample rate: {header.sample_rate_hz} Hz",
        f"  Channels:    {header.channel_mode.value}",
        f"  Emphasis:    {header.emphasis.value}",
        f"  Copyright: {_yes_no(header.copyright)}",
        f"  Original:  {_yes_no(header.original)}",
    ]
    return "\n".join(lines)


def header_row(header: MpegAudioHeader) -> Tuple[str, ...]:
    """One table row: location, version, layer, kbps, Hz, CRC, copyright, original, frame size."""
    return (
        f"{header.offset:08x}",
        f"V{header.version_label}",
        str(header.layer),
        str(header.bitrate_kbps),
        str(header.sample_rate_hz),
        _mark(header.crc_enabled),
        _mark(header.copyright),
        _mark(header.original),
        str(header.frame_size),
    )


def format_header_table(headers: Iterable[MpegAudioHeader]) -> str:
    lines = [TABLE_HEAD]
    for h in headers:
        loc, ver, layer, kbps, hz, crc, cpy, orig, size = header_row(h)
        lines.append(f" {loc} | {ver:<4} | {layer} | {kbps:>4} | {hz:>5} | {crc} | {cpy} | {orig} | {size:>5} ")
    return "\n".join(lines)


def format_stats(stats: dict) -> str:
    if not stats.get("valid"):
        return "No frames found."
    rates = ", ".join(str(r) for r in stats["sample_rates"])
    lines = [
        f"Frames:      {stats['total_frames']}",
        f"ID3v2 tag:   {stats['tag_size']} bytes",
        f"MPEG:        {'/'.join(stats['versions'])}  Layer {'/'.join(str(l) for l in stats['layers'])}",
        f"Sample rate: {rates} Hz",
        f"Bit rate:    {stats['bitrate_min']}-{stats['bitrate_max']} kbps (mean {stats['bitrate_mean']:.1f})"
        + (" VBR" if stats["vbr"] else ""),
        f"Padded:      {stats['padded_frames']}",
        f"CRC:         {stats['crc_frames']}",
        f"Duration:    {stats['duration_sec']:.3f} s",
    ]
    if stats["truncated_tail"]:
        lines.append("Warning: last frame runs past the end of the file")
    if stats["free_format_stop"]:
        lines.append("Warning: stopped at a free-format frame (size unknown)")
    return "\n".join(lines)

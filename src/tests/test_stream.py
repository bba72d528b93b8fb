import os
import sys
import struct
import tempfile
import unittest
from pathlib import Path

# Add src directory to path for imports
BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from mpascan.config import ScanConfig
from mpascan.exceptions import FormatError, LoadError
from mpascan.loader import read_mpeg_file
from mpascan.stream import MPAStream, analyze_file

ID3_TAG = b"ID3\x04\x00\x00\x00\x00\x02\x01" + b"\x00" * 257


def _header_bytes(version=0b11, layer=0b01, bitrate=0b1001, padding=0, mode=0b00, emphasis=0b00) -> bytes:
    word = ((0x7FF << 21) | (version << 19) | (layer << 17) | (1 << 16) | (bitrate << 12)
            | (padding << 9) | (mode << 6) | emphasis)
    return struct.pack(">I", word)


def _frame(size=417, **fields) -> bytes:
    return _header_bytes(**fields) + b"\x00" * (size - 4)


class TestLoader(unittest.TestCase):
    """Whole-file loading."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_reads_whole_file(self):
        path = os.path.join(self.tmpdir.name, 'a.mp3')
        Path(path).write_bytes(_frame() * 3)
        self.assertEqual(read_mpeg_file(path), _frame() * 3)

    def test_missing_file(self):
        path = os.path.join(self.tmpdir.name, 'missing.mp3')
        with self.assertRaises(LoadError) as context:
            read_mpeg_file(path)
        self.assertIsInstance(context.exception, IOError)
        self.assertIn("missing.mp3", str(context.exception))

    def test_directory(self):
        with self.assertRaises(LoadError):
            read_mpeg_file(self.tmpdir.name)


class TestMPAStream(unittest.TestCase):
    """Frame walk and statistics."""

    def test_cbr_stats(self):
        st = MPAStream(ID3_TAG + _frame() * 4)
        self.assertEqual(st.tag_size, 267)
        self.assertEqual(st.start_offset, 267)
        self.assertEqual([f.offset for f in st.frames], [267, 684, 1101, 1518])
        stats = st.stats()
        self.assertTrue(stats["valid"])
        self.assertEqual(stats["total_frames"], 4)
        self.assertEqual(stats["first_offset"], 267)
        self.assertEqual(stats["versions"], ["1"])
        self.assertEqual(stats["layers"], [3])
        self.assertEqual(stats["sample_rates"], [44100])
        self.assertEqual(stats["bitrate_min"], 128)
        self.assertEqual(stats["bitrate_max"], 128)
        self.assertFalse(stats["vbr"])
        self.assertEqual(stats["crc_frames"], 4)
        self.assertEqual(stats["padded_frames"], 0)
        self.assertTrue(stats["stereo"])
        self.assertAlmostEqual(stats["duration_sec"], 4 * 1152 / 44100)
        self.assertFalse(stats["truncated_tail"])
        self.assertFalse(stats["free_format_stop"])

    def test_vbr_stats(self):
        # 64 kbps at 44.1 kHz: 144 * 64000 // 44100 = 208 bytes
        data = _frame() * 3 + _frame(208, bitrate=0b0101) * 2
        stats = MPAStream(data).stats()
        self.assertEqual(stats["total_frames"], 5)
        self.assertEqual(stats["bitrate_min"], 64)
        self.assertEqual(stats["bitrate_max"], 128)
        self.assertAlmostEqual(stats["bitrate_mean"], (3 * 128 + 2 * 64) / 5)
        self.assertTrue(stats["vbr"])

    def test_max_headers(self):
        st = MPAStream(_frame() * 10, ScanConfig(max_headers=3))
        self.assertEqual(len(st.frames), 3)
        st = MPAStream(_frame() * 10, ScanConfig(max_headers=None))
        self.assertEqual(len(st.frames), 10)

    def test_memoryview_data(self):
        st = MPAStream(memoryview(ID3_TAG + _frame() * 4))
        self.assertEqual(st.tag_size, 267)
        self.assertEqual([f.offset for f in st.frames], [267, 684, 1101, 1518])
        self.assertFalse(st.stats()["truncated_tail"])

    def test_same_format_only(self):
        # MPEG2 L3 80 kbps at 22.05 kHz: 144 * 80000 // 22050 = 522 bytes
        data = _frame() + _frame(522, version=0b10) + _frame()
        self.assertEqual(len(MPAStream(data).frames), 3)
        st = MPAStream(data, ScanConfig(same_format_only=True))
        self.assertEqual([f.offset for f in st.frames], [0, 939])

    def test_skip_id3_disabled(self):
        st = MPAStream(ID3_TAG + _frame(), ScanConfig(skip_id3=False))
        self.assertEqual(st.tag_size, 0)
        self.assertEqual(st.start_offset, 0)
        self.assertEqual(st.first.offset, 267)

    def test_start_offset_override(self):
        st = MPAStream(_frame() * 3, ScanConfig(start_offset=1))
        self.assertEqual(st.start_offset, 1)
        self.assertEqual(st.first.offset, 417)

    def test_mono(self):
        stats = MPAStream(_frame(mode=0b11) * 2).stats()
        self.assertFalse(stats["stereo"])

    def test_truncated_tail(self):
        st = MPAStream(_frame() + _header_bytes() + b"\x00" * 50)
        self.assertEqual(len(st.frames), 2)
        self.assertTrue(st.stats()["truncated_tail"])

    def test_free_format_stop(self):
        data = _frame() + _header_bytes(bitrate=0b0000) + _frame()
        st = MPAStream(data)
        self.assertEqual(len(st.frames), 2)
        stats = st.stats()
        self.assertTrue(stats["free_format_stop"])
        self.assertEqual(stats["bitrate_min"], 128)

    def test_reserved_emphasis_rejected(self):
        data = _frame(emphasis=0b11) + _frame()
        self.assertEqual(MPAStream(data).first.offset, 0)
        st = MPAStream(data, ScanConfig(reject_reserved_emphasis=True))
        self.assertEqual(st.first.offset, 417)

    def test_no_frames(self):
        st = MPAStream(b"\x00" * 100)
        self.assertFalse(st.first.valid)
        self.assertEqual(st.frames, [])
        stats = st.stats()
        self.assertFalse(stats["valid"])
        self.assertEqual(stats["total_frames"], 0)


class TestAnalyzeFile(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_analyze(self):
        path = os.path.join(self.tmpdir.name, 'song.mp3')
        Path(path).write_bytes(ID3_TAG + _frame() * 2)
        stats = analyze_file(path)
        self.assertEqual(stats["total_frames"], 2)
        self.assertEqual(stats["tag_size"], 267)

    def test_no_headers(self):
        path = os.path.join(self.tmpdir.name, 'noise.bin')
        Path(path).write_bytes(b"\x00" * 64)
        with self.assertRaises(FormatError):
            analyze_file(path)

    def test_missing(self):
        with self.assertRaises(LoadError):
            analyze_file(os.path.join(self.tmpdir.name, 'nope.mp3'))


if __name__ == '__main__':
    unittest.main(verbosity=2)

"""
Pytest coverage for waveform peak detection.
"""

# Standard Library
import os
import sys

# PIP3 modules
import numpy
import PIL.Image
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from beatframelib import peaks
from beatframelib.core import errors

#============================================

def _make_waveform(red_columns: dict, width: int, height: int = 10,
	base_red: int = 0) -> PIL.Image.Image:
	"""
	Build an RGB picture with every pixel of column x set to red_columns[x].
	"""
	pixels = numpy.zeros((height, width, 3), dtype=numpy.uint8)
	pixels[:, :, 0] = base_red
	for column, red in red_columns.items():
		pixels[:, column, 0] = red
	return PIL.Image.fromarray(pixels)

#============================================

def test_two_loud_columns_map_to_seconds() -> None:
	image = _make_waveform({2: 255, 7: 255}, width=10, base_red=50)
	beats = peaks.detect_beats(image, 10.0, threshold=1000)
	assert beats == pytest.approx([2.0, 7.0])

#============================================

def test_blank_waveform_has_no_beats() -> None:
	image = _make_waveform({}, width=64)
	assert peaks.detect_beats(image, 30.0) == []

#============================================

def test_saturated_waveform_yields_every_column() -> None:
	width = 48
	image = _make_waveform({}, width=width, base_red=255)
	beats = peaks.detect_beats(image, 12.0, threshold=1000)
	assert len(beats) == width
	assert beats[0] == 0.0
	assert beats[-1] < 12.0

#============================================

def test_threshold_is_strict() -> None:
	# 10 rows of red 100 is exactly 1000
	image = _make_waveform({3: 100, 4: 101}, width=8)
	beats = peaks.detect_beats(image, 8.0, threshold=1000)
	assert beats == pytest.approx([4.0])

#============================================

def test_only_red_channel_counts() -> None:
	pixels = numpy.zeros((10, 5, 3), dtype=numpy.uint8)
	pixels[:, 1, 1] = 255
	pixels[:, 2, 2] = 255
	image = PIL.Image.fromarray(pixels)
	assert peaks.detect_beats(image, 5.0) == []

#============================================

def test_threshold_is_configurable() -> None:
	image = _make_waveform({1: 60, 3: 120}, width=4)
	assert peaks.PeakDetector(threshold=500).detect(image, 4.0) == pytest.approx([1.0, 3.0])
	assert peaks.PeakDetector(threshold=1000).detect(image, 4.0) == pytest.approx([3.0])

#============================================

def test_adjacent_columns_are_not_merged() -> None:
	image = _make_waveform({5: 255, 6: 255, 7: 255}, width=20)
	beats = peaks.detect_beats(image, 2.0)
	assert beats == pytest.approx([0.5, 0.6, 0.7])

#============================================

def test_random_waveform_matches_column_count() -> None:
	rng = numpy.random.default_rng(1234)
	width = 200
	duration = 37.5
	pixels = rng.integers(0, 256, size=(12, width, 3), dtype=numpy.uint8)
	# leave roughly half the columns quiet
	pixels[:, ::2, 0] = pixels[:, ::2, 0] // 8
	image = PIL.Image.fromarray(pixels)
	sums = pixels[:, :, 0].astype(numpy.int64).sum(axis=0)
	expected = int((sums > 1000).sum())
	beats = peaks.detect_beats(image, duration, threshold=1000)
	assert len(beats) == expected
	assert all(later > earlier for earlier, later in zip(beats, beats[1:]))
	assert all(0.0 <= beat < duration for beat in beats)

#============================================

def test_detect_reads_image_file(tmp_path) -> None:
	pngfile = str(tmp_path / "waveform.png")
	_make_waveform({0: 255, 9: 255}, width=10).save(pngfile)
	beats = peaks.PeakDetector().detect(pngfile, 100.0)
	assert beats == pytest.approx([0.0, 90.0])

#============================================

def test_undecodable_image_raises(tmp_path) -> None:
	pngfile = tmp_path / "waveform.png"
	pngfile.write_bytes(b"this is not a png")
	with pytest.raises(errors.ImageDecodeError):
		peaks.detect_beats(str(pngfile), 10.0)

#============================================

def test_missing_image_raises(tmp_path) -> None:
	with pytest.raises(errors.ImageDecodeError):
		peaks.detect_beats(str(tmp_path / "missing.png"), 10.0)

#============================================

def test_non_positive_duration_rejected() -> None:
	image = _make_waveform({}, width=4)
	with pytest.raises(ValueError):
		peaks.detect_beats(image, 0.0)

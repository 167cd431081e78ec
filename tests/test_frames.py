"""
Pytest coverage for beat frame extraction.
"""

# Standard Library
import os
import sys
import threading

# PIP3 modules
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from beatframelib import frames
from beatframelib.core import errors
from beatframelib.core import utils
from beatframelib.core.models import VideoSource
from beatframelib.media import ffmpeg

#============================================

@pytest.fixture
def quiet():
	utils.set_quiet_mode(True)
	yield
	utils.set_quiet_mode(False)

#============================================

def _install_fake_extract(monkeypatch, failing_times=()) -> list:
	calls = []
	lock = threading.Lock()

	def fake_extract(movfile, jpgfile, seconds, quality=2, timeout=60.0):
		with lock:
			calls.append((os.path.basename(jpgfile), seconds))
		if seconds in failing_times:
			raise errors.ExtractionError(f"seek failed at {seconds}")
		with open(jpgfile, "wb") as handle:
			handle.write(b"jpg")
		return jpgfile

	monkeypatch.setattr(ffmpeg, "extractFrame", fake_extract)
	return calls

#============================================

def test_frame_filename_is_zero_padded() -> None:
	assert frames.frame_filename(1) == "frame_00001.jpg"
	assert frames.frame_filename(12345) == "frame_12345.jpg"

#============================================

@pytest.mark.parametrize("workers", [1, 4])
def test_numbering_survives_failures(monkeypatch, tmp_path, quiet, workers: int) -> None:
	calls = _install_fake_extract(monkeypatch, failing_times=(2.5,))
	video = VideoSource(str(tmp_path / "movie.mp4"), 10.0)
	output_dir = str(tmp_path / "nested" / "frames")
	timestamps = [1.0, 2.5, 2.5, 4.0, 9.75]
	extractor = frames.FrameExtractor(workers=workers)
	results = extractor.extract(video, timestamps, output_dir)
	assert [item['seq'] for item in results] == [1, 2, 3, 4, 5]
	assert [item['timestamp'] for item in results] == timestamps
	assert results[1]['path'] is None and results[1]['error'] is not None
	assert results[2]['path'] is None and results[2]['error'] is not None
	assert os.path.basename(results[3]['path']) == "frame_00004.jpg"
	assert sorted(os.listdir(output_dir)) == [
		"frame_00001.jpg", "frame_00004.jpg", "frame_00005.jpg",
	]
	# every timestamp was attempted, each paired with its own sequence number
	assert sorted(calls) == sorted([
		("frame_00001.jpg", 1.0),
		("frame_00002.jpg", 2.5),
		("frame_00003.jpg", 2.5),
		("frame_00004.jpg", 4.0),
		("frame_00005.jpg", 9.75),
	])

#============================================

def test_empty_timestamps_still_create_directory(monkeypatch, tmp_path, quiet) -> None:
	calls = _install_fake_extract(monkeypatch)
	video = VideoSource(str(tmp_path / "movie.mp4"), 10.0)
	output_dir = str(tmp_path / "frames")
	assert frames.FrameExtractor().extract(video, [], output_dir) == []
	assert os.path.isdir(output_dir)
	assert calls == []

#============================================

def test_existing_directory_is_reused(monkeypatch, tmp_path, quiet) -> None:
	_install_fake_extract(monkeypatch)
	output_dir = tmp_path / "frames"
	output_dir.mkdir()
	video = VideoSource(str(tmp_path / "movie.mp4"), 10.0)
	results = frames.FrameExtractor(workers=2).extract(video, [0.0, 5.0], str(output_dir))
	assert all(item['error'] is None for item in results)

#============================================

def test_failure_is_reported_on_stderr(monkeypatch, tmp_path, quiet, capsys) -> None:
	_install_fake_extract(monkeypatch, failing_times=(3.0,))
	video = VideoSource(str(tmp_path / "movie.mp4"), 10.0)
	frames.FrameExtractor(workers=1).extract(video, [3.0], str(tmp_path / "frames"))
	captured = capsys.readouterr()
	assert "frame 00001" in captured.err
	assert "seek failed" in captured.err

#============================================

def test_workers_must_be_positive() -> None:
	with pytest.raises(ValueError):
		frames.FrameExtractor(workers=0)

#============================================

def test_os_error_does_not_stop_other_frames(monkeypatch, tmp_path, quiet) -> None:
	attempted = []
	lock = threading.Lock()

	def flaky_extract(movfile, jpgfile, seconds, quality=2, timeout=60.0):
		with lock:
			attempted.append(seconds)
		if seconds == 1.0:
			raise PermissionError("ffmpeg is not executable")
		with open(jpgfile, "wb") as handle:
			handle.write(b"jpg")
		return jpgfile

	monkeypatch.setattr(ffmpeg, "extractFrame", flaky_extract)
	video = VideoSource(str(tmp_path / "movie.mp4"), 10.0)
	results = frames.FrameExtractor(workers=1).extract(video, [1.0, 2.0, 3.0], str(tmp_path / "frames"))
	assert sorted(attempted) == [1.0, 2.0, 3.0]
	assert results[0]['path'] is None
	assert "not executable" in results[0]['error']
	assert [item['error'] for item in results[1:]] == [None, None]

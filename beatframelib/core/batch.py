#!/usr/bin/env python3

"""
Batch orchestration: resolve the command line source into videos and run
either the beat frame pipeline or the clip splitter on each one.
"""

# Standard Library
import os
import sys
import time

# local repo modules
from beatframelib import clips
from beatframelib import frames
from beatframelib import peaks
from beatframelib import report
from beatframelib.core import config
from beatframelib.core import errors
from beatframelib.core import utils
from beatframelib.media import fetch
from beatframelib.media import ffmpeg

#============================================

SOURCE_MODES = {
	'l': 'local',
	'local': 'local',
	'yt': 'remote',
	'youtube': 'remote',
	'env': 'env',
}

#============================================

def parse_source_mode(value: str) -> str:
	mode = SOURCE_MODES.get(str(value).strip().lower())
	if mode is None:
		choices = ', '.join(SOURCE_MODES)
		raise errors.InputError(f"invalid source selector '{value}', expected one of: {choices}")
	return mode

#============================================

def url_from_environment(environ=None) -> str:
	if environ is None:
		environ = os.environ
	url = environ.get(config.VIDEO_URL_ENV, "").strip()
	if url == "":
		raise errors.InputError(f"environment variable {config.VIDEO_URL_ENV} is not set")
	return url

#============================================

def list_videos(dirpath: str, extensions=None) -> list:
	"""
	List video files directly inside dirpath, sorted by name.

	Extension matching ignores case. Sub-directories are not searched.
	"""
	if extensions is None:
		extensions = config.DEFAULT_VIDEO_EXTENSIONS
	wanted = set(ext.lower() for ext in extensions)
	videos = []
	for name in sorted(os.listdir(dirpath)):
		fullpath = os.path.join(dirpath, name)
		if not os.path.isfile(fullpath):
			continue
		if os.path.splitext(name)[1].lower() in wanted:
			videos.append(os.path.abspath(fullpath))
	if len(videos) == 0:
		raise errors.NoVideosFoundError(
			f"no {'/'.join(sorted(wanted))} files found in {dirpath}")
	return videos

#============================================

class BatchResult():
	def __init__(self):
		self.processed = []
		self.failed = []

	#============================
	@property
	def ok(self) -> bool:
		return len(self.failed) == 0

	#============================
	def summary(self) -> str:
		total = len(self.processed) + len(self.failed)
		return f"{len(self.processed)} of {total} videos processed, {len(self.failed)} failed"

#============================================

class BatchOrchestrator():
	def __init__(self, settings: dict = None, clip_duration: float = None):
		if settings is None:
			settings = config.build_settings()
		if clip_duration is not None and clip_duration <= 0:
			raise errors.InputError(f"clip duration must be positive: {clip_duration}")
		if clip_duration is not None and not float(clip_duration).is_integer():
			raise errors.InputError(f"clip duration must be whole seconds: {clip_duration}")
		self.settings = settings
		self.clip_duration = clip_duration
		self.detector = peaks.PeakDetector(settings['threshold'])
		self.frame_extractor = frames.FrameExtractor(
			workers=settings['frame_workers'],
			quality=settings['frame_quality'],
			timeout=settings['timeouts']['frame'],
		)
		self.clip_splitter = clips.ClipSplitter(
			codec=settings['clip_codec'],
			timeout=settings['timeouts']['clip'],
		)

	#============================
	def resolve_local(self, path: str) -> list:
		if os.path.isdir(path):
			return list_videos(path, self.settings['video_extensions'])
		if os.path.isfile(path):
			return [os.path.abspath(path)]
		raise errors.InputError(f"file or directory not found: {path}")

	#============================
	def run(self, mode: str, path_or_url: str = None) -> BatchResult:
		"""
		Process every video the source resolves to, one after another.

		InputError raised while resolving the source propagates. Errors
		from an individual video are reported and the batch continues.
		"""
		if mode == 'env':
			path_or_url = url_from_environment()
			mode = 'remote'
		if not path_or_url:
			raise errors.InputError("a path or URL is required")
		result = BatchResult()
		if mode == 'local':
			for movfile in self.resolve_local(path_or_url):
				self._run_one(result, movfile, self.process_video, movfile)
		elif mode == 'remote':
			self._run_one(result, path_or_url, self.process_remote, path_or_url)
		else:
			raise errors.InputError(f"unknown source mode: {mode}")
		utils.echo(result.summary())
		return result

	#============================
	def _run_one(self, result: BatchResult, label: str, func, *args) -> None:
		try:
			func(*args)
		except errors.InputError:
			raise
		except (errors.BeatframeError, OSError) as exc:
			print(f"ERROR: {label}: {exc}", file=sys.stderr)
			result.failed.append((label, str(exc)))
			return
		result.processed.append(label)
		return

	#============================
	def process_remote(self, path_or_url: str):
		movfile = fetch.fetchVideo(path_or_url, self.settings['staging_dir'],
			fetch_command=self.settings['fetch_command'],
			timeout=self.settings['timeouts']['fetch'])
		return self.process_video(movfile)

	#============================
	def process_video(self, movfile: str):
		t0 = time.time()
		video = ffmpeg.probeVideo(movfile, timeout=self.settings['timeouts']['probe'])
		utils.echo(f"Video: {video.path} ({utils.format_seconds(video.duration)})")
		if self.clip_duration is not None:
			outcome = self.clip_splitter.split(video, self.settings['output_dir'],
				self.clip_duration)
			utils.echo(f"Wrote {len(outcome)} clips in {int(time.time() - t0)} seconds")
		else:
			outcome = self.process_beats(video)
		return outcome

	#============================
	def output_key(self, video) -> str:
		# a.mp4 and a.MOV can share a directory, so the extension is part of the key
		extension = video.extension.lstrip('.')
		if extension == "":
			return video.stem
		return f"{video.stem}_{extension}"

	#============================
	def waveform_path(self, video) -> str:
		return os.path.join(os.path.abspath(self.settings['staging_dir']),
			f"{self.output_key(video)}-waveform.png")

	#============================
	def frames_dir(self, video) -> str:
		return os.path.join(self.settings['output_dir'], self.output_key(video))

	#============================
	def process_beats(self, video) -> list:
		t0 = time.time()
		pngfile = self.waveform_path(video)
		try:
			ffmpeg.renderWaveform(video, pngfile,
				width=self.settings['waveform_width'],
				height=self.settings['waveform_height'],
				color=self.settings['waveform_color'],
				timeout=self.settings['timeouts']['render'])
			timestamps = self.detector.detect(pngfile, video.duration)
		finally:
			if not self.settings['keep_temp'] and os.path.exists(pngfile):
				os.remove(pngfile)
		utils.echo(f"Detected {len(timestamps)} beats above threshold {self.settings['threshold']:g}")
		output_dir = self.frames_dir(video)
		frame_results = self.frame_extractor.extract(video, timestamps, output_dir)
		if self.settings['write_report']:
			beat_report = report.build_beat_report(video, timestamps, frame_results,
				self.settings['threshold'],
				(self.settings['waveform_width'], self.settings['waveform_height']))
			report.write_beat_report(utils.ensure_dir(output_dir), beat_report)
		failures = sum(1 for item in frame_results if item['error'] is not None)
		utils.echo(f"Wrote {len(frame_results) - failures} frames to {output_dir}"
			f" ({failures} failed) in {int(time.time() - t0)} seconds")
		return frame_results

#!/usr/bin/env python3

import math
import os
from beatframelib.core import errors
from beatframelib.core import utils
from beatframelib.core.models import ClipWindow
from beatframelib.media import ffmpeg

#============================================

def make_clip_windows(duration: float, clip_duration: float) -> list:
	"""
	Tile [0, duration) with back to back windows of clip_duration seconds.

	The last window is shorter when clip_duration does not divide duration.
	"""
	if duration <= 0:
		raise ValueError(f"duration must be positive: {duration}")
	if clip_duration <= 0:
		raise ValueError(f"clip duration must be positive: {clip_duration}")
	count = int(math.ceil(duration / clip_duration))
	windows = []
	for index in range(count):
		# each end is the next start, so neighbours share a boundary exactly
		start = index * clip_duration
		if start >= duration:
			break
		end = min((index + 1) * clip_duration, duration)
		windows.append(ClipWindow(index, start, end))
	return windows

#============================================

def clip_filename(video, window: ClipWindow) -> str:
	return f"clip_{video.stem}_{int(window.start):04d}{video.extension}"

#============================================

class ClipSplitter():
	def __init__(self, codec: str = 'copy', timeout: float = 600.0):
		self.codec = codec
		self.timeout = timeout

	#============================
	def split(self, video, output_dir: str, clip_duration: float) -> list:
		"""
		Cut video into sequential clips, one ffmpeg call at a time.

		The first failing window raises ExtractionError and no later
		window is attempted.

		Returns:
			list: Paths of the written clips in window order.
		"""
		if clip_duration <= 0:
			raise errors.InputError(f"clip duration must be positive: {clip_duration}")
		# clip names carry whole seconds only
		if not float(clip_duration).is_integer():
			raise errors.InputError(f"clip duration must be whole seconds: {clip_duration}")
		windows = make_clip_windows(video.duration, clip_duration)
		utils.ensure_dir(output_dir)
		outfiles = []
		for window in windows:
			outfile = os.path.join(output_dir, clip_filename(video, window))
			utils.echo(f"Clip {window.index + 1}/{len(windows)}: "
				f"{utils.format_seconds(window.start)} - {utils.format_seconds(window.end)}")
			try:
				ffmpeg.extractClip(video.path, outfile, window.start,
					window.duration, codec=self.codec, timeout=self.timeout)
			except errors.ExtractionError as exc:
				raise errors.ExtractionError(
					f"clip {window.index + 1} of {len(windows)} failed "
					f"at {window.start:.3f}s: {exc}") from exc
			outfiles.append(outfile)
		return outfiles

#!/usr/bin/env python3

import concurrent.futures
import os
import sys
from tqdm import tqdm
from beatframelib.core import errors
from beatframelib.core import utils
from beatframelib.media import ffmpeg

#============================================

def frame_filename(seq: int) -> str:
	return f"frame_{seq:05d}.jpg"

#============================================

class FrameExtractor():
	"""
	Grab one still per beat timestamp.

	Frames are numbered 1, 2, 3, ... in timestamp order before any work
	starts, so a failed grab leaves a gap in the files on disk but never
	shifts later numbers. Grabs run on a bounded thread pool; each one is
	independent and a failure is reported and skipped.
	"""
	def __init__(self, workers: int = 4, quality: int = 2, timeout: float = 60.0):
		if workers <= 0:
			raise ValueError("workers must be positive")
		self.workers = workers
		self.quality = quality
		self.timeout = timeout

	#============================
	def _grab(self, video, seq: int, seconds: float, output_dir: str) -> dict:
		jpgfile = os.path.join(output_dir, frame_filename(seq))
		result = {'seq': seq, 'timestamp': seconds, 'path': jpgfile, 'error': None}
		try:
			ffmpeg.extractFrame(video.path, jpgfile, seconds,
				quality=self.quality, timeout=self.timeout)
		except (errors.ExtractionError, OSError) as exc:
			result['path'] = None
			result['error'] = str(exc)
		return result

	#============================
	def extract(self, video, timestamps: list, output_dir: str) -> list:
		"""
		Extract frames for timestamps into output_dir.

		Returns:
			list: One result dict per timestamp, in sequence order, with
				keys seq, timestamp, path (None on failure) and error.
		"""
		utils.ensure_dir(output_dir)
		jobs = list(enumerate(timestamps, start=1))
		results = {}
		progress = tqdm(total=len(jobs), unit='frame', disable=utils.is_quiet_mode())
		try:
			with concurrent.futures.ThreadPoolExecutor(max_workers=self.workers) as pool:
				futures = {}
				for seq, seconds in jobs:
					future = pool.submit(self._grab, video, seq, seconds, output_dir)
					futures[future] = seq
				for future in concurrent.futures.as_completed(futures):
					result = future.result()
					results[result['seq']] = result
					if result['error'] is not None:
						progress.write(f"ERROR: frame {result['seq']:05d} at "
							f"{result['timestamp']:.3f}s: {result['error']}", file=sys.stderr)
					progress.update(1)
		finally:
			progress.close()
		return [results[seq] for seq, _ in jobs]

#!/usr/bin/env python3

import os
from beatframelib.core import errors
from beatframelib.core import utils

#============================================

def renderWaveform(video, pngfile: str, width: int = 1920, height: int = 480,
	color: str = 'red', timeout: float = 600.0) -> str:
	"""
	Draw the whole audio track of video as a single waveform picture.

	Column x of the picture covers time x / width * video.duration.
	"""
	if os.path.exists(pngfile):
		os.remove(pngfile)
	utils.ensure_dir(os.path.dirname(os.path.abspath(pngfile)))
	cmd = [
		"ffmpeg", "-y", "-hide_banner", "-loglevel", "error",
		"-i", video.path,
		"-filter_complex", f"[0:a:0]showwavespic=s={width}x{height}:colors={color}",
		"-frames:v", "1",
		pngfile,
	]
	utils.run_process(cmd, timeout=timeout, error_class=errors.RenderError)
	utils.ensure_output_file(pngfile, errors.RenderError)
	return pngfile

#!/usr/bin/env python3

import os
from beatframelib.core import errors
from beatframelib.core import utils

#============================================

def extractFrame(movfile: str, jpgfile: str, seconds: float,
	quality: int = 2, timeout: float = 60.0) -> str:
	cmd = [
		"ffmpeg", "-y", "-hide_banner", "-loglevel", "error",
		"-ss", f"{seconds:.3f}",
		"-i", movfile,
		"-frames:v", "1",
		"-q:v", str(quality),
		jpgfile,
	]
	utils.run_process(cmd, timeout=timeout, error_class=errors.ExtractionError)
	utils.ensure_output_file(jpgfile, errors.ExtractionError)
	return jpgfile

#============================================

def extractClip(movfile: str, outfile: str, startseconds: float,
	cutseconds: float, codec: str = 'copy', timeout: float = 600.0) -> str:
	if cutseconds <= 0:
		raise errors.ExtractionError(f"clip length must be positive: {cutseconds}")
	if os.path.exists(outfile):
		os.remove(outfile)
	cmd = [
		"ffmpeg", "-y", "-hide_banner", "-loglevel", "error",
		"-ss", f"{startseconds:.3f}", "-t", f"{cutseconds:.3f}",
		"-i", movfile,
		"-map", "0", "-sn",
	]
	if codec == 'copy':
		cmd += ["-c", "copy"]
	else:
		cmd += ["-codec:v", codec, "-codec:a", "aac"]
	cmd.append(outfile)
	utils.run_process(cmd, timeout=timeout, error_class=errors.ExtractionError)
	utils.ensure_output_file(outfile, errors.ExtractionError)
	return outfile

#!/usr/bin/env python3

import json
from beatframelib.core import errors
from beatframelib.core import utils
from beatframelib.core.models import VideoSource

#============================================

def probeDuration(movfile: str, timeout: float = 60.0) -> float:
	"""
	Ask ffprobe for the container duration in seconds.
	"""
	cmd = [
		"ffprobe", "-v", "error",
		"-show_entries", "format=duration",
		"-of", "json",
		movfile,
	]
	proc = utils.run_process(cmd, timeout=timeout, error_class=errors.ProbeError)
	try:
		data = json.loads(proc.stdout)
		duration = float(data['format']['duration'])
	except (ValueError, KeyError, TypeError) as exc:
		raise errors.ProbeError(f"no duration reported for {movfile}") from exc
	if duration <= 0:
		raise errors.ProbeError(f"invalid duration {duration} for {movfile}")
	return duration

#============================================

def probeVideo(movfile: str, timeout: float = 60.0) -> VideoSource:
	utils.ensure_file_exists(movfile, errors.ProbeError)
	duration = probeDuration(movfile, timeout=timeout)
	return VideoSource(movfile, duration)

#!/usr/bin/env python3

"""
Fetcher: turn a remote URL or a local path into a local video file.

Remote URLs are handed to an external downloader (yt-dlp by default),
local paths are copied into the staging area.
"""

import os
import shutil
from beatframelib.core import errors
from beatframelib.core import utils

#============================================

STAGED_VIDEO_STEM = "source_video"

#============================================

def stagedVideoPath(staging_dir: str, extension: str = ".mp4") -> str:
	return os.path.join(os.path.abspath(staging_dir), STAGED_VIDEO_STEM + extension)

#============================================

def downloadVideo(url: str, outfile: str, fetch_command: str = 'yt-dlp',
	timeout: float = 1800.0) -> str:
	if os.path.exists(outfile):
		os.remove(outfile)
	cmd = [
		fetch_command,
		"--no-playlist",
		"-f", "mp4/bestvideo[ext=mp4]+bestaudio[ext=m4a]/best",
		"--merge-output-format", "mp4",
		"-o", outfile,
		url,
	]
	utils.run_process(cmd, timeout=timeout, error_class=errors.FetchError)
	utils.ensure_output_file(outfile, errors.FetchError)
	return outfile

#============================================

def copyVideo(movfile: str, outfile: str) -> str:
	if not os.path.isfile(movfile):
		raise errors.FetchError(f"file not found: {movfile}")
	if os.path.abspath(movfile) == os.path.abspath(outfile):
		return outfile
	try:
		shutil.copyfile(movfile, outfile)
	except OSError as exc:
		raise errors.FetchError(f"copy failed: {movfile} -> {outfile}: {exc}") from exc
	return outfile

#============================================

def fetchVideo(path_or_url: str, staging_dir: str, fetch_command: str = 'yt-dlp',
	timeout: float = 1800.0) -> str:
	"""
	Materialize path_or_url at the fixed staging path.

	Returns:
		str: Absolute path of the staged video.
	"""
	utils.ensure_dir(os.path.abspath(staging_dir))
	if utils.is_remote_url(path_or_url):
		outfile = stagedVideoPath(staging_dir)
		utils.echo(f"Downloading {path_or_url}")
		return downloadVideo(path_or_url, outfile, fetch_command=fetch_command,
			timeout=timeout)
	extension = os.path.splitext(path_or_url)[1].lower() or ".mp4"
	outfile = stagedVideoPath(staging_dir, extension)
	utils.echo(f"Copying {path_or_url} to staging")
	return copyVideo(path_or_url, outfile)

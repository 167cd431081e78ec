#!/usr/bin/env python3

import os
import shlex
import shutil
import subprocess

_QUIET_MODE = False

#============================================

def set_quiet_mode(value: bool) -> None:
	global _QUIET_MODE
	_QUIET_MODE = bool(value)
	return

#============================================

def is_quiet_mode() -> bool:
	return _QUIET_MODE

#============================================

def echo(message: str) -> None:
	if not _QUIET_MODE:
		print(message)
	return

#============================================

def run_process(cmd: list, timeout: float = None,
	error_class=RuntimeError) -> subprocess.CompletedProcess:
	"""
	Run an external command and raise error_class when it fails.

	Args:
		cmd: Command list to execute.
		timeout: Seconds to wait before giving up, None waits forever.
		error_class: Exception type raised on failure.

	Returns:
		subprocess.CompletedProcess: The completed process.
	"""
	showcmd = shlex.join([str(part) for part in cmd])
	echo(f"CMD: '{showcmd}'")
	try:
		proc = subprocess.run(cmd, capture_output=True, text=True,
			timeout=timeout)
	except subprocess.TimeoutExpired as exc:
		raise error_class(f"command timed out after {timeout}s: {showcmd}") from exc
	except FileNotFoundError as exc:
		raise error_class(f"command not found: {cmd[0]}") from exc
	if proc.returncode != 0:
		stderr_text = (proc.stderr or "").strip()
		raise error_class(f"command failed: {showcmd}\n{stderr_text}")
	return proc

#============================================

def check_dependency(cmd_name: str, error_class=RuntimeError) -> None:
	if shutil.which(cmd_name) is None:
		raise error_class(f"missing dependency: {cmd_name}")
	return

#============================================

def ensure_file_exists(filepath: str, error_class=RuntimeError) -> None:
	if not os.path.isfile(filepath):
		raise error_class(f"file not found: {filepath}")
	return

#============================================

def ensure_output_file(filepath: str, error_class=RuntimeError) -> None:
	# a zero byte file is what ffmpeg leaves behind on some filter errors
	if not os.path.isfile(filepath) or os.path.getsize(filepath) == 0:
		raise error_class(f"expected output missing or empty: {filepath}")
	return

#============================================

def ensure_dir(dirpath: str) -> str:
	os.makedirs(dirpath, exist_ok=True)
	return dirpath

#============================================

def is_remote_url(value: str) -> bool:
	lowered = value.strip().lower()
	return lowered.startswith("http://") or lowered.startswith("https://")

#============================================

def format_seconds(seconds: float) -> str:
	minutes, secs = divmod(float(seconds), 60.0)
	hours, minutes = divmod(int(minutes), 60)
	if hours > 0:
		return f"{hours:d}:{minutes:02d}:{secs:06.3f}"
	return f"{minutes:02d}:{secs:06.3f}"

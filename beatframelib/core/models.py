#!/usr/bin/env python3

import os

#============================================

class VideoSource():
	"""
	A local video file and its probed duration in seconds.

	Instances are read-only once created.
	"""
	__slots__ = ('_path', '_duration')

	def __init__(self, path: str, duration: float):
		duration = float(duration)
		if duration <= 0:
			raise ValueError(f"video duration must be positive: {duration}")
		object.__setattr__(self, '_path', os.path.abspath(path))
		object.__setattr__(self, '_duration', duration)

	#============================
	def __setattr__(self, name, value):
		raise AttributeError("VideoSource is read-only")

	#============================
	@property
	def path(self) -> str:
		return self._path

	#============================
	@property
	def duration(self) -> float:
		return self._duration

	#============================
	@property
	def basename(self) -> str:
		return os.path.basename(self._path)

	#============================
	@property
	def stem(self) -> str:
		return os.path.splitext(self.basename)[0]

	#============================
	@property
	def extension(self) -> str:
		return os.path.splitext(self.basename)[1]

	#============================
	def __eq__(self, other):
		if not isinstance(other, VideoSource):
			return NotImplemented
		return (self._path, self._duration) == (other._path, other._duration)

	#============================
	def __hash__(self):
		return hash((self._path, self._duration))

	#============================
	def __repr__(self):
		return f"VideoSource({self._path!r}, {self._duration!r})"

#============================================

class ClipWindow():
	"""
	Half-open time interval [start, end) inside a video.
	"""
	__slots__ = ('index', 'start', 'end')

	def __init__(self, index: int, start: float, end: float):
		if end <= start:
			raise ValueError(f"clip window must have positive length: {start}-{end}")
		self.index = index
		self.start = start
		self.end = end

	#============================
	@property
	def duration(self) -> float:
		return self.end - self.start

	#============================
	def __eq__(self, other):
		if not isinstance(other, ClipWindow):
			return NotImplemented
		return (self.index, self.start, self.end) == (other.index, other.start, other.end)

	#============================
	def __repr__(self):
		return f"ClipWindow({self.index}, {self.start!r}, {self.end!r})"

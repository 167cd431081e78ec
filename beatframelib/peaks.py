#!/usr/bin/env python3

"""
Beat timestamps from a rendered waveform picture.

Each pixel column of the waveform covers an equal slice of the video.
A column whose red channel sums past the threshold is treated as a beat
and mapped back to time with x / width * duration. Adjacent columns are
reported independently, so thick peaks give runs of close timestamps.
"""

# PIP3 modules
import numpy
import PIL.Image

# local repo modules
from beatframelib.core import errors
from beatframelib.core.config import DEFAULT_THRESHOLD

#============================================

def load_waveform(image) -> numpy.ndarray:
	"""
	Decode a waveform picture into an RGB array of shape (height, width, 3).

	Args:
		image: File path or an already opened PIL image.

	Returns:
		numpy.ndarray: uint8 pixel array.
	"""
	try:
		if isinstance(image, PIL.Image.Image):
			rgb = image.convert('RGB')
		else:
			with PIL.Image.open(image) as handle:
				rgb = handle.convert('RGB')
	except (OSError, ValueError, PIL.UnidentifiedImageError) as exc:
		raise errors.ImageDecodeError(f"cannot decode waveform image {image}: {exc}") from exc
	pixels = numpy.asarray(rgb, dtype=numpy.uint8)
	if pixels.ndim != 3 or pixels.shape[1] == 0:
		raise errors.ImageDecodeError(f"waveform image has no columns: {image}")
	return pixels

#============================================

def column_red_sums(pixels: numpy.ndarray) -> numpy.ndarray:
	# int64 so tall images cannot overflow the uint8 channel
	return pixels[:, :, 0].sum(axis=0, dtype=numpy.int64)

#============================================

class PeakDetector():
	def __init__(self, threshold: float = DEFAULT_THRESHOLD):
		if threshold < 0:
			raise ValueError("threshold must be 0 or greater")
		self.threshold = threshold

	#============================
	def beat_columns(self, pixels: numpy.ndarray) -> list:
		sums = column_red_sums(pixels)
		return [int(x) for x in numpy.flatnonzero(sums > self.threshold)]

	#============================
	def detect(self, image, duration: float) -> list:
		"""
		Return the ascending list of beat timestamps in seconds.
		"""
		if duration <= 0:
			raise ValueError(f"duration must be positive: {duration}")
		pixels = load_waveform(image)
		width = pixels.shape[1]
		return [x / width * duration for x in self.beat_columns(pixels)]

#============================================

def detect_beats(image, duration: float, threshold: float = DEFAULT_THRESHOLD) -> list:
	return PeakDetector(threshold).detect(image, duration)

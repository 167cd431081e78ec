#!/usr/bin/env python3

#============================================

class BeatframeError(RuntimeError):
	pass

#============================================

class InputError(BeatframeError):
	"""
	Bad command line input, missing file or tool, or unusable config.
	"""
	pass

#============================================

class NoVideosFoundError(InputError):
	pass

#============================================

class ConfigError(InputError):
	pass

#============================================

class FetchError(BeatframeError):
	pass

#============================================

class ProbeError(BeatframeError):
	pass

#============================================

class RenderError(BeatframeError):
	pass

#============================================

class ImageDecodeError(BeatframeError):
	pass

#============================================

class ExtractionError(BeatframeError):
	pass

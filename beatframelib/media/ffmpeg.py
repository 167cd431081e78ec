#!/usr/bin/env python3

from beatframelib.media.ffmpeg_probe import probeDuration
from beatframelib.media.ffmpeg_probe import probeVideo
from beatframelib.media.ffmpeg_waveform import renderWaveform
from beatframelib.media.ffmpeg_extract import extractFrame
from beatframelib.media.ffmpeg_extract import extractClip

__all__ = [
	'probeDuration',
	'probeVideo',
	'renderWaveform',
	'extractFrame',
	'extractClip',
]

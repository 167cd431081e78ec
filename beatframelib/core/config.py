#!/usr/bin/env python3

"""
Beatframe configuration.

Config files are YAML mappings with a version key and a settings tree:

	beatframe: 1
	settings:
	  waveform: {width: 1920, height: 480, color: red}
	  detection: {threshold: 1000}
	  ...

build_settings() flattens the tree into a plain dict the rest of the
library reads from.
"""

# Standard Library
import copy
import os

# PIP3 modules
import yaml

# local repo modules
from beatframelib.core import errors

#============================================

CONFIG_VERSION = 1
DEFAULT_THRESHOLD = 1000
DEFAULT_VIDEO_EXTENSIONS = ['.mp4', '.mov']
VIDEO_URL_ENV = "BEATFRAME_VIDEO_URL"

#============================================

def default_config() -> dict:
	"""
	Build the default config dictionary.

	Returns:
		dict: Default configuration values.
	"""
	return {
		'beatframe': CONFIG_VERSION,
		'settings': {
			'waveform': {
				'width': 1920,
				'height': 480,
				'color': 'red',
			},
			'detection': {
				'threshold': DEFAULT_THRESHOLD,
			},
			'frames': {
				'workers': 4,
				'quality': 2,
			},
			'clips': {
				'codec': 'copy',
			},
			'paths': {
				'output_dir': 'output',
				'staging_dir': 'staging',
			},
			'video_extensions': list(DEFAULT_VIDEO_EXTENSIONS),
			'keep_temp': False,
			'write_report': True,
			'fetch_command': 'yt-dlp',
			'timeouts': {
				'probe': 60.0,
				'render': 600.0,
				'frame': 60.0,
				'clip': 600.0,
				'fetch': 1800.0,
			},
		},
	}

#============================================

def coerce_bool(value, config_path: str, key_path: str) -> bool:
	if isinstance(value, bool):
		return value
	if isinstance(value, str):
		lowered = value.strip().lower()
		if lowered in ('true', 'yes', 'on', '1'):
			return True
		if lowered in ('false', 'no', 'off', '0'):
			return False
	raise errors.ConfigError(f"{config_path}: {key_path} must be a boolean")

#============================================

def coerce_float(value, config_path: str, key_path: str) -> float:
	if isinstance(value, bool):
		raise errors.ConfigError(f"{config_path}: {key_path} must be a number")
	try:
		return float(value)
	except (TypeError, ValueError) as exc:
		raise errors.ConfigError(f"{config_path}: {key_path} must be a number") from exc

#============================================

def coerce_int(value, config_path: str, key_path: str) -> int:
	if isinstance(value, bool):
		raise errors.ConfigError(f"{config_path}: {key_path} must be an integer")
	if isinstance(value, float) and not value.is_integer():
		raise errors.ConfigError(f"{config_path}: {key_path} must be an integer")
	try:
		return int(value)
	except (TypeError, ValueError) as exc:
		raise errors.ConfigError(f"{config_path}: {key_path} must be an integer") from exc

#============================================

def coerce_extensions(value, config_path: str, key_path: str) -> list:
	if not isinstance(value, (list, tuple)) or len(value) == 0:
		raise errors.ConfigError(f"{config_path}: {key_path} must be a non-empty list")
	extensions = []
	for item in value:
		if not isinstance(item, str) or item.strip() == "":
			raise errors.ConfigError(f"{config_path}: {key_path} entries must be strings")
		ext = item.strip().lower()
		if not ext.startswith('.'):
			ext = '.' + ext
		extensions.append(ext)
	return extensions

#============================================

def write_config_file(config_path: str, config: dict) -> None:
	text = yaml.safe_dump(config, sort_keys=False)
	os.makedirs(os.path.dirname(config_path) or '.', exist_ok=True)
	with open(config_path, 'w', encoding='utf-8') as handle:
		handle.write(text)
	return

#============================================

def load_config(config_path: str) -> dict:
	"""
	Load a config file from disk.

	Args:
		config_path: Config file path.

	Returns:
		dict: Parsed config dictionary.
	"""
	if not os.path.isfile(config_path):
		raise errors.ConfigError(f"config file not found: {config_path}")
	try:
		with open(config_path, 'r', encoding='utf-8') as handle:
			data = yaml.safe_load(handle)
	except yaml.YAMLError as exc:
		raise errors.ConfigError(f"{config_path}: invalid yaml: {exc}") from exc
	if not isinstance(data, dict):
		raise errors.ConfigError(f"{config_path}: config file must be a mapping")
	if data.get('beatframe') != CONFIG_VERSION:
		raise errors.ConfigError(
			f"{config_path}: config file must set beatframe: {CONFIG_VERSION}")
	return data

#============================================

def _section(overrides: dict, name: str, config_path: str) -> dict:
	value = overrides.get(name, {})
	if value is None:
		return {}
	if not isinstance(value, dict):
		raise errors.ConfigError(f"{config_path}: settings.{name} must be a mapping")
	return value

#============================================

def build_settings(config: dict = None, config_path: str = "<defaults>") -> dict:
	"""
	Merge config overrides onto defaults and flatten them.

	Args:
		config: Raw config dictionary, or None for defaults only.
		config_path: Config file path used in error messages.

	Returns:
		dict: Normalized settings.
	"""
	defaults = default_config()['settings']
	overrides = {}
	if isinstance(config, dict):
		overrides = config.get('settings') or {}
	if not isinstance(overrides, dict):
		raise errors.ConfigError(f"{config_path}: settings must be a mapping")
	waveform = _section(overrides, 'waveform', config_path)
	detection = _section(overrides, 'detection', config_path)
	frames = _section(overrides, 'frames', config_path)
	clips = _section(overrides, 'clips', config_path)
	paths = _section(overrides, 'paths', config_path)
	timeouts = _section(overrides, 'timeouts', config_path)

	settings = {}
	settings['waveform_width'] = coerce_int(waveform.get('width',
		defaults['waveform']['width']), config_path, "settings.waveform.width")
	settings['waveform_height'] = coerce_int(waveform.get('height',
		defaults['waveform']['height']), config_path, "settings.waveform.height")
	settings['waveform_color'] = str(waveform.get('color',
		defaults['waveform']['color']))
	settings['threshold'] = coerce_float(detection.get('threshold',
		defaults['detection']['threshold']), config_path,
		"settings.detection.threshold")
	settings['frame_workers'] = coerce_int(frames.get('workers',
		defaults['frames']['workers']), config_path, "settings.frames.workers")
	settings['frame_quality'] = coerce_int(frames.get('quality',
		defaults['frames']['quality']), config_path, "settings.frames.quality")
	settings['clip_codec'] = str(clips.get('codec', defaults['clips']['codec']))
	settings['output_dir'] = str(paths.get('output_dir',
		defaults['paths']['output_dir']))
	settings['staging_dir'] = str(paths.get('staging_dir',
		defaults['paths']['staging_dir']))
	settings['video_extensions'] = coerce_extensions(overrides.get('video_extensions',
		defaults['video_extensions']), config_path, "settings.video_extensions")
	settings['keep_temp'] = coerce_bool(overrides.get('keep_temp',
		defaults['keep_temp']), config_path, "settings.keep_temp")
	settings['write_report'] = coerce_bool(overrides.get('write_report',
		defaults['write_report']), config_path, "settings.write_report")
	settings['fetch_command'] = str(overrides.get('fetch_command',
		defaults['fetch_command']))
	settings['timeouts'] = copy.deepcopy(defaults['timeouts'])
	for key in settings['timeouts']:
		if key in timeouts:
			settings['timeouts'][key] = coerce_float(timeouts[key], config_path,
				f"settings.timeouts.{key}")
	validate_settings(settings)
	return settings

#============================================

def validate_settings(settings: dict) -> None:
	if settings['waveform_width'] <= 0 or settings['waveform_height'] <= 0:
		raise errors.ConfigError("waveform size must be positive")
	if settings['threshold'] < 0:
		raise errors.ConfigError("threshold must be 0 or greater")
	if settings['frame_workers'] <= 0:
		raise errors.ConfigError("frame workers must be positive")
	if settings['frame_quality'] < 1 or settings['frame_quality'] > 31:
		raise errors.ConfigError("frame quality must be between 1 and 31")
	for key, value in settings['timeouts'].items():
		if value <= 0:
			raise errors.ConfigError(f"timeouts.{key} must be positive")
	return

#!/usr/bin/env python3

import argparse
import sys
from beatframelib.core import batch
from beatframelib.core import config
from beatframelib.core import errors
from beatframelib.core import utils

#============================================

def positive_int(value: str) -> int:
	try:
		number = int(value)
	except ValueError:
		raise argparse.ArgumentTypeError(f"clip duration must be a positive integer: {value}")
	if number <= 0:
		raise argparse.ArgumentTypeError(f"clip duration must be a positive integer: {value}")
	return number

#============================================

def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		description="Grab video frames on waveform beats, or split a video into clips")
	parser.add_argument('source',
		help="l/local for a file or directory, yt/youtube for a URL, "
			f"env to read the URL from {config.VIDEO_URL_ENV}")
	parser.add_argument('path_or_url', nargs='?',
		help='video file, directory of videos, or remote video URL')
	parser.add_argument('clip_duration', nargs='?', type=positive_int,
		help='split into clips of this many seconds instead of grabbing frames')
	parser.add_argument('-c', '--config', dest='config_file',
		help='beatframe yaml config file')
	parser.add_argument('-W', '--write-config', dest='write_config', action='store_true',
		help='write the default config to --config (or beatframe.yaml) and exit')
	parser.add_argument('-o', '--output-dir', dest='output_dir',
		help='directory for frames or clips')
	parser.add_argument('-s', '--staging-dir', dest='staging_dir',
		help='directory for downloads and waveform images')
	parser.add_argument('-t', '--threshold', dest='threshold', type=float,
		help='column red intensity sum that counts as a beat')
	parser.add_argument('-j', '--workers', dest='workers', type=int,
		help='parallel frame grabs')
	parser.add_argument('-k', '--keep-temp', dest='keep_temp', action='store_true',
		help='keep the rendered waveform image')
	parser.add_argument('-K', '--no-keep-temp', dest='keep_temp', action='store_false',
		help='remove the rendered waveform image')
	parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
		help='only print errors')
	parser.set_defaults(keep_temp=None)
	return parser

#============================================

def build_run_settings(args: argparse.Namespace) -> dict:
	raw_config = None
	config_path = "<defaults>"
	if args.config_file is not None:
		config_path = args.config_file
		raw_config = config.load_config(config_path)
	settings = config.build_settings(raw_config, config_path)
	if args.output_dir is not None:
		settings['output_dir'] = args.output_dir
	if args.staging_dir is not None:
		settings['staging_dir'] = args.staging_dir
	if args.threshold is not None:
		settings['threshold'] = args.threshold
	if args.workers is not None:
		settings['frame_workers'] = args.workers
	if args.keep_temp is not None:
		settings['keep_temp'] = args.keep_temp
	config.validate_settings(settings)
	return settings

#============================================

def check_tools(mode: str, path_or_url: str, settings: dict) -> None:
	utils.check_dependency("ffmpeg", errors.InputError)
	utils.check_dependency("ffprobe", errors.InputError)
	if mode == 'env' or (mode == 'remote' and utils.is_remote_url(path_or_url)):
		utils.check_dependency(settings['fetch_command'], errors.InputError)
	return

#============================================

def main(argv=None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	utils.set_quiet_mode(args.quiet)
	if args.write_config:
		config_path = args.config_file or "beatframe.yaml"
		config.write_config_file(config_path, config.default_config())
		print(f"Wrote default config: {config_path}")
		return 0
	try:
		mode = batch.parse_source_mode(args.source)
		if mode == 'env' and args.path_or_url is not None:
			# env takes its URL from the environment, so a lone number is the clip length
			if args.clip_duration is not None:
				raise errors.InputError("env source does not take a path or URL")
			try:
				args.clip_duration = positive_int(args.path_or_url)
			except argparse.ArgumentTypeError as exc:
				raise errors.InputError(str(exc)) from exc
			args.path_or_url = None
		if mode != 'env' and args.path_or_url is None:
			raise errors.InputError("path_or_url is required for this source")
		settings = build_run_settings(args)
		check_tools(mode, args.path_or_url, settings)
		orchestrator = batch.BatchOrchestrator(settings, clip_duration=args.clip_duration)
		orchestrator.run(mode, args.path_or_url)
	except errors.InputError as exc:
		parser.print_usage(sys.stderr)
		print(f"{parser.prog}: error: {exc}", file=sys.stderr)
		return 2
	except (errors.BeatframeError, OSError) as exc:
		# processing failures do not change the exit status
		print(f"ERROR: {exc}", file=sys.stderr)
	return 0

#============================================

if __name__ == '__main__':
	sys.exit(main())

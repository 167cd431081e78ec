#!/usr/bin/env python3

import os
import yaml

#============================================

REPORT_NAME = "beats.yaml"

#============================================

def build_beat_report(video, timestamps: list, frame_results: list,
	threshold: float, waveform_size: tuple) -> dict:
	frames = []
	for result in frame_results:
		entry = {
			'seq': result['seq'],
			'time': round(float(result['timestamp']), 6),
		}
		if result['error'] is None:
			entry['file'] = os.path.basename(result['path'])
		else:
			entry['error'] = result['error']
		frames.append(entry)
	return {
		'source': video.path,
		'duration': float(video.duration),
		'waveform': {'width': int(waveform_size[0]), 'height': int(waveform_size[1])},
		'threshold': float(threshold),
		'beat_count': len(timestamps),
		'beats': [round(float(t), 6) for t in timestamps],
		'frames': frames,
	}

#============================================

def write_beat_report(output_dir: str, report: dict) -> str:
	report_file = os.path.join(output_dir, REPORT_NAME)
	with open(report_file, 'w', encoding='utf-8') as handle:
		handle.write(yaml.safe_dump(report, sort_keys=False))
	return report_file

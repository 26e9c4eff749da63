#!/usr/bin/env python3
"""
Command-line utility for submitting Zencoder encoding jobs.
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add the parent directory to Python path to import zencoder_client
sys.path.insert(0, str(Path(__file__).parent.parent))

from zencoder_client import ClientConfig, EncodingJobClient, JobSpec, ZencoderError

logger = logging.getLogger(__name__)


EXAMPLE_JOB = {
    "input": "s3://example-bucket/source/movie.mov",
    "test": True,
    "notifications": ["https://example.com/zencoder/notify"],
    "outputs": [
        {
            "label": "mp4-720p",
            "format": "mp4",
            "height": 720,
            "video_bitrate": 2500,
            "url": "s3://example-bucket/encoded/movie-720p.mp4",
            "headers": {
                "Cache-Control": "max-age=86400",
                "Access-Control-Allow-Origin": "*"
            }
        },
        {
            "label": "hls-low",
            "type": "segmented",
            "streaming_delivery_format": "hls",
            "video_bitrate": 800,
            "url": "s3://example-bucket/encoded/hls/low/index.m3u8"
        },
        {
            "type": "playlist",
            "streaming_delivery_format": "hls",
            "url": "s3://example-bucket/encoded/hls/playlist.m3u8",
            "streams": [
                {"source": "hls-low", "path": "low/index.m3u8"}
            ]
        }
    ]
}


def build_client(args) -> EncodingJobClient:
    """Create an EncodingJobClient from the environment and command-line overrides."""
    config = ClientConfig.from_env(args.env_file)

    overrides = {}
    if args.api_key:
        overrides['api_key'] = args.api_key
    if args.endpoint:
        overrides['api_endpoint'] = args.endpoint
    if args.response_type:
        overrides['response_type'] = args.response_type
    if args.timeout:
        overrides['timeout'] = args.timeout

    if overrides:
        config = replace(config, **overrides)

    return EncodingJobClient(config)


def submit(args):
    """Submit the job described in a JSON file."""
    with open(args.job_file, 'r', encoding='utf-8') as f:
        job = JobSpec.from_dict(json.load(f))

    client = build_client(args)
    logger.info(f"Submitting job for {job.input} with {len(job.outputs)} outputs to {client.api_endpoint}")

    result = client.submit(job)

    print(json.dumps(result, indent=2, ensure_ascii=False))


def create_job(args):
    """Create a job file with example content."""
    output_path = args.output or "job.json"

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(EXAMPLE_JOB, f, indent=2, ensure_ascii=False)

    print(f"✅ Created job file: {output_path}")
    print("📝 Edit this file with your input and output locations and submit with:")
    print(f"   python -m scripts.submit_job submit {output_path}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Submit encoding jobs to the Zencoder API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create an example job file
  python -m scripts.submit_job create-job --output my-job.json

  # Submit it, reading ZENCODER_API_KEY from .env
  python -m scripts.submit_job submit my-job.json

  # Submit with XML and show the outgoing payload
  python -m scripts.submit_job --response-type application/xml --verbose submit my-job.json
        """
    )

    # Configuration
    parser.add_argument('--env-file', help='Environment file to load (default: search for .env)')
    parser.add_argument('--api-key', help='Zencoder API key (default: ZENCODER_API_KEY)')
    parser.add_argument('--endpoint', help='API endpoint URL (default: ZENCODER_API_ENDPOINT or the public API)')
    parser.add_argument('--response-type', choices=['application/json', 'application/xml'],
                        help='Request and response content type (default: application/json)')
    parser.add_argument('--timeout', type=int, help='Connect timeout in seconds (default: 30)')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging, including request payloads')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Submit command
    submit_parser = subparsers.add_parser('submit', help='Submit a job from a JSON file')
    submit_parser.add_argument('job_file', help='Path to job JSON file')

    # Create job command
    job_parser = subparsers.add_parser('create-job', help='Create a job file with example content')
    job_parser.add_argument('--output', help='Output file path (default: job.json)')

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        if args.command == 'submit':
            submit(args)
        elif args.command == 'create-job':
            create_job(args)

    except (ZencoderError, ValueError, OSError) as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()

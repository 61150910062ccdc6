#!/usr/bin/env python3
"""Relay - Entry Point."""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from relay.core.assistant import LiveAssistant
from relay.core.config import load_config, load_personality
from relay.core.errors import RelayError
from relay.core.inspector import VideoInspector

console = Console()


DEFAULT_CONFIG = "config/default.yaml"


def _common_options() -> argparse.ArgumentParser:
    """Options accepted both before and after the command name."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=str,
        default=argparse.SUPPRESS,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG})",
    )
    common.add_argument(
        "--api-key",
        type=str,
        default=argparse.SUPPRESS,
        help="Gemini API key (overrides the environment)",
    )
    common.add_argument(
        "--model",
        type=str,
        default=argparse.SUPPRESS,
        help="Override the model for the chosen command",
    )
    return common


def build_parser() -> argparse.ArgumentParser:
    common = _common_options()
    parser = argparse.ArgumentParser(
        description="Relay - Gemini live voice and video origin finder",
        parents=[common],
    )
    commands = parser.add_subparsers(dest="command", required=True)

    live = commands.add_parser("live", parents=[common], help="Talk to a live model through the microphone")
    live.add_argument(
        "--voice",
        type=str,
        help="Override the prebuilt voice (e.g. Orus, Puck, Kore)",
    )
    live.add_argument(
        "--personality",
        type=str,
        help="Personality file name under config/personalities/",
    )
    live.add_argument(
        "--save-audio",
        type=str,
        metavar="PATH",
        help="Save the model's speech to a WAV file",
    )
    live.add_argument(
        "--transcript",
        type=str,
        metavar="PATH",
        help="Save the conversation transcript to a text file",
    )

    origin = commands.add_parser("origin", parents=[common], help="Find the source of a video")
    origin.add_argument("video", type=str, help="Path to the video file")
    origin.add_argument(
        "--at",
        type=float,
        metavar="SECONDS",
        help="Analyze the frame at this position instead of the middle",
    )
    origin.add_argument(
        "--save-frame",
        type=str,
        metavar="PATH",
        help="Save the extracted frame as JPEG",
    )
    return parser


def main() -> int:
    """Main entry point for Relay."""
    args = build_parser().parse_args()
    # Options given neither before nor after the command are left unset
    config_path = getattr(args, "config", DEFAULT_CONFIG)
    api_key = getattr(args, "api_key", None)
    model = getattr(args, "model", None)

    # Load configuration
    config = load_config(config_path)

    # Apply CLI overrides
    if api_key:
        config = replace(config, gemini=replace(config.gemini, api_key=api_key))

    if args.command == "live":
        live = config.live
        if model:
            live = replace(live, model=model)
        if args.voice:
            live = replace(live, voice=args.voice)
        if args.save_audio:
            live = replace(live, save_audio=args.save_audio)
        if args.transcript:
            live = replace(live, transcript_path=args.transcript)
        config = replace(config, live=live)
        if args.personality:
            config = replace(
                config,
                personality_name=args.personality,
                personality=load_personality(Path(config_path).parent, args.personality),
            )

        try:
            assistant = LiveAssistant(config)
        except RelayError as e:
            console.print(f"[red]{escape(str(e))}")
            return 1
        return assistant.run()

    if model:
        config = replace(config, video=replace(config.video, model=model))
    inspector = VideoInspector(config)
    result = inspector.inspect(args.video, at=args.at, save_frame=args.save_frame)
    return 0 if result is not None else 1


if __name__ == "__main__":
    sys.exit(main())

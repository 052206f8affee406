"""Command-line entry point for creating mindfulness meditations."""

import argparse
import asyncio
import dataclasses
import logging
import sys
from pathlib import Path

import yaml

from .archive import ScriptArchive
from .config import Config, load_config, load_env
from .errors import MindfulError
from .meditation import (
    MeditationRequest,
    MeditationScript,
    ScriptGenerator,
    Technique,
    decode_technique,
)
from .meditation.technique import TECHNIQUE_VALUES
from .tts import create_tts

logger = logging.getLogger(__name__)

# Errors reported to the user rather than shown as a traceback
EXPECTED_ERRORS = (MindfulError, ValueError, OSError, yaml.YAMLError)


def fail(error: BaseException, context: str = "") -> None:
    """Print an error to stderr and exit with status 1."""
    if context:
        print(f"Error: {context} - {error}", file=sys.stderr)
    else:
        print(f"Error: {error}", file=sys.stderr)
    sys.exit(1)


def default_request() -> MeditationRequest:
    """The request used when none is given on the command line."""
    return MeditationRequest(
        technique=Technique.FOCUSED_ATTENTION,
        session_length=10,
        guidance_level="brief",
        focus_object="breath",
        voice_preference="calm",
        goal="relaxation",
    )


def load_request(path: str | Path) -> MeditationRequest:
    """Load a request payload from a JSON or YAML file."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of request fields")
    return MeditationRequest.from_dict(data)


async def generate(config: Config, request: MeditationRequest) -> MeditationScript:
    """Generate one script with the configured provider."""
    generator = ScriptGenerator.from_config(config)
    try:
        return await generator.generate_script(request)
    finally:
        await generator.close()


async def synthesize(config: Config, text: str, output: str | Path) -> Path:
    """Render text to an audio file with the configured TTS engine."""
    tts = create_tts(config.tts)
    try:
        return await tts.synthesize_to_file(text, output)
    finally:
        await tts.close()


async def fetch_voices(config: Config) -> list[dict]:
    tts = create_tts(config.tts)
    try:
        return await tts.list_voices()
    finally:
        await tts.close()


def cmd_script(args: argparse.Namespace, config: Config) -> None:
    """Create a meditation script and print it."""
    try:
        request = load_request(args.request) if args.request else default_request()
        if args.technique:
            request = dataclasses.replace(request, technique=decode_technique(args.technique))
        if args.minutes is not None:
            request = dataclasses.replace(request, session_length=args.minutes)
    except EXPECTED_ERRORS as e:
        fail(e, "building request")

    try:
        script = asyncio.run(generate(config, request))
    except EXPECTED_ERRORS as e:
        fail(e, "generating script")

    print(script.render())

    if args.save or config.archive.auto_save:
        archive = ScriptArchive(config.archive.save_directory)
        try:
            json_path = archive.save_script(script, request)
            archive.save_script_text(script, json_path.stem)
        except OSError as e:
            fail(e, "saving script")
        print(f"\nScript saved to: {json_path}")

    if args.speak:
        output = args.speak if isinstance(args.speak, str) else config.tts.output_file
        try:
            audio_path = asyncio.run(synthesize(config, script.content, output))
        except EXPECTED_ERRORS as e:
            fail(e, "converting script to speech")
        print(f"Audio saved to: {audio_path}")


def cmd_speak(args: argparse.Namespace, config: Config) -> None:
    """Convert a text file to speech."""
    output = args.output or config.tts.output_file
    try:
        text = Path(args.text_file).read_text()
        audio_path = asyncio.run(synthesize(config, text, output))
    except EXPECTED_ERRORS as e:
        fail(e, "converting text to speech")
    print(f"Audio saved to: {audio_path}")


def cmd_voices(args: argparse.Namespace, config: Config) -> None:
    """List the voices available to the ElevenLabs account."""
    try:
        voices = asyncio.run(fetch_voices(config))
    except EXPECTED_ERRORS as e:
        fail(e, "listing voices")

    if not voices:
        print("No voices found.")
        return

    for voice in voices:
        print(f"  {voice.get('voice_id', '?')}  {voice.get('name', '')}")


def cmd_list(args: argparse.Namespace, config: Config) -> None:
    """List all saved scripts."""
    archive = ScriptArchive(config.archive.save_directory)
    scripts = archive.list_scripts()

    if not scripts:
        print("No saved scripts found.")
        return

    print("\nSaved Scripts:")
    print("-" * 60)

    for entry in scripts:
        technique = entry.get("technique") or "unknown"
        length = entry.get("session_length")
        length_str = f"{length} min" if length else "unknown length"

        print(f"  {entry['script_id']}")
        print(f"    {technique}, {length_str}")
        print()


def cmd_view(args: argparse.Namespace, config: Config) -> None:
    """View a saved script."""
    archive = ScriptArchive(config.archive.save_directory)
    try:
        script = archive.load_script(args.script_id)
    except (OSError, ValueError, KeyError) as e:
        fail(e, f"loading script {args.script_id}")

    if script is None:
        fail(FileNotFoundError(f"no saved script with id {args.script_id}"), "loading script")

    print(script.render())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mindful",
        description="Tool to create mindfulness meditations with",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    script = subparsers.add_parser(
        "script",
        help="Create a meditation script",
        description="Create a meditation script",
    )
    script.add_argument(
        "--request", "-r",
        type=str,
        metavar="FILE",
        help="JSON or YAML file describing the meditation",
    )
    script.add_argument(
        "--technique", "-t",
        choices=sorted(TECHNIQUE_VALUES),
        help="Meditation technique (overrides the request file)",
    )
    script.add_argument(
        "--minutes", "-m",
        type=int,
        help="Session length in minutes (overrides the request file)",
    )
    script.add_argument(
        "--save",
        action="store_true",
        help="Save the script to the archive",
    )
    script.add_argument(
        "--speak",
        nargs="?",
        const=True,
        metavar="AUDIO_FILE",
        help="Also convert the script to speech (default file: tts.output_file)",
    )
    script.set_defaults(func=cmd_script)

    speak = subparsers.add_parser("speak", help="Convert a text file to speech")
    speak.add_argument("text_file", help="Text file to synthesize")
    speak.add_argument("--output", "-o", help="Audio file to write")
    speak.set_defaults(func=cmd_speak)

    voices = subparsers.add_parser("voices", help="List available ElevenLabs voices")
    voices.set_defaults(func=cmd_voices)

    list_cmd = subparsers.add_parser("list", help="List saved scripts")
    list_cmd.set_defaults(func=cmd_list)

    view = subparsers.add_parser("view", help="View a saved script")
    view.add_argument("script_id", metavar="SCRIPT_ID")
    view.set_defaults(func=cmd_view)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    load_env()
    try:
        config = load_config(args.config)
    except EXPECTED_ERRORS as e:
        fail(e, "loading config")

    try:
        args.func(args, config)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

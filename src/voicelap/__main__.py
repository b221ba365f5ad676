"""VoiceLap entry point.

Usage:
    python -m voicelap [OPTIONS]

Options:
    --config PATH    Path to YAML config file
    --profile NAME   Profile name (dev, prod, test)
    --settings PATH  Path to the persisted settings JSON file
    --interval SECS  Announcement interval (0, 10, 20, 30 or 60), saved to settings
    --typed          Read commands from stdin instead of the microphone
    --mock           Use mock speech engines
    --dry-run        Load config and exit
    --version        Show version
"""

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path

from dotenv import load_dotenv

from . import __version__
from .commands.interpreter import VoiceCommandResult
from .commands.vocabulary import CommandFamily
from .config.loader import get_settings_path, load_config
from .config.profiles import PROFILE_ENV_VAR, detect_profile
from .config.settings import INTERVAL_CHOICES, load_settings, save_settings
from .session import StopwatchSession
from .stopwatch.formatting import format_display


def setup_logging(level: str) -> None:
    """Configure logging based on config."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="voicelap",
        description="VoiceLap - voice-controlled stopwatch",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  python -m voicelap                  # Run with auto-detected profile
  python -m voicelap --profile prod   # Run with production profile
  python -m voicelap --typed          # Type commands: start, lap, stop, reset

Environment:
  {PROFILE_ENV_VAR}    Set profile (dev, prod, test)
""",
    )

    parser.add_argument("--config", type=Path, help="Path to YAML config file", metavar="PATH")
    parser.add_argument(
        "--profile",
        choices=["dev", "prod", "test"],
        help="Configuration profile to use",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        help="Path to the persisted settings JSON file",
        metavar="PATH",
    )
    parser.add_argument(
        "--interval",
        type=int,
        choices=(0, *INTERVAL_CHOICES),
        help="Seconds between elapsed-time announcements (0 turns them off)",
        metavar="SECS",
    )
    parser.add_argument(
        "--typed",
        action="store_true",
        help="Read transcripts from stdin instead of the microphone",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use mock speech engines (for testing without hardware)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Load config and exit (for testing)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"VoiceLap v{__version__}",
    )

    return parser.parse_args(argv)


def print_result(session: StopwatchSession, result: VoiceCommandResult) -> None:
    """Print the clock face after a recognized command."""
    if not result.is_command or result.family is None:
        return
    status = "applied" if result.applied else "ignored"
    print(f"[{session.display()}] {result.text!r} -> {result.family.value} ({status})")
    if result.applied and result.family == CommandFamily.LAP and session.laps:
        lap = session.laps[0]
        print(
            f"  Lap {lap.lap_number}: {format_display(lap.lap_time)}"
            f"  (total {format_display(lap.overall_time)})"
        )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for VoiceLap.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    load_dotenv()
    args = parse_args(argv)

    profile_name = args.profile or detect_profile().value
    try:
        if args.config:
            config = load_config(path=args.config)
        else:
            config = load_config(profile=profile_name)
    except FileNotFoundError as e:
        print(f"Error: Config file not found: {e}", file=sys.stderr)
        return 1
    except (OSError, TypeError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.level)
    logger = logging.getLogger("voicelap")

    settings_path = args.settings or get_settings_path(config)
    settings = load_settings(settings_path)
    if args.interval is not None and args.interval != settings.interval_seconds:
        settings.interval_seconds = args.interval
        if not args.dry_run:
            save_settings(settings, settings_path)

    logger.info(f"VoiceLap v{__version__}")
    logger.info(f"Profile: {profile_name}")
    logger.info(
        f"Settings: volume={settings.volume:.1f} interval={settings.interval_seconds}s "
        f"voice={'on' if settings.voice_control_enabled else 'off'}"
    )

    if args.dry_run:
        logger.info("Dry run mode - exiting after config load")
        logger.info(f"Speech engine: {config.voice.engine} ({config.voice.model})")
        logger.info(f"TTS engine: {config.tts.engine}")
        return 0

    session: StopwatchSession | None = None

    def on_result(result: VoiceCommandResult) -> None:
        if session is not None:
            print_result(session, result)

    session = StopwatchSession.from_config(
        config,
        settings=settings,
        settings_path=settings_path,
        use_mocks=args.mock,
        transcript_stream=sys.stdin if args.typed else None,
        on_result=on_result,
    )

    print("\n" + "=" * 50)
    print("  VoiceLap")
    print("=" * 50)
    print(f"  Version: {__version__}")
    print(f"  Profile: {profile_name}")
    print(f"  Input: {'keyboard' if args.typed else config.voice.engine}")
    print(f"  Interval: {settings.interval_seconds}s")
    print("=" * 50 + "\n")

    logger.info("Initializing speech recognition...")
    if not session.start_voice():
        print(f"Voice control unavailable: {session.voice_status_message}")
        print("Manual controls are unaffected.")

    stop_event = threading.Event()
    _install_signal_handlers(stop_event)

    print("Say 'start', 'lap', 'stop' or 'reset'. Press Ctrl+C to quit.\n")

    session.run()
    try:
        while not stop_event.wait(0.5):
            pass
    finally:
        session.shutdown()
        print(f"\nFinal time: {session.display()}")
        for lap in reversed(session.laps):
            print(f"  Lap {lap.lap_number}: {format_display(lap.lap_time)}")
        logger.info("VoiceLap stopped")

    return 0


def _install_signal_handlers(stop_event: threading.Event) -> None:
    """First SIGINT/SIGTERM requests shutdown; a second one exits at once."""
    logger = logging.getLogger("voicelap")

    def handle(signum: int, _frame: object) -> None:
        if stop_event.is_set():
            logger.warning("Second interrupt, exiting immediately")
            sys.exit(1)
        logger.info(f"Received {signal.Signals(signum).name}, shutting down")
        stop_event.set()

    for signum in (signal.SIGINT, signal.SIGTERM):
        signal.signal(signum, handle)


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""Simulate a restaurant phone call from the terminal.

Usage:
    python scripts/call_console.py                       # default profile
    python scripts/call_console.py --profile bistro.json # custom profile
    python scripts/call_console.py --transcript          # print transcript on exit

Commands: /start, /reset, /status, /quit. Any other line is what the caller says.
"""

import argparse
import sys
from typing import Iterable, TextIO

from dotenv import load_dotenv

from callsim.config import configure_logging, load_settings
from callsim.controller import CallController
from callsim.dialogue import ScriptedAgent
from callsim.profile import DEFAULT_PROFILE, ProfileStore, load_profile
from callsim.session import TranscriptEntry
from callsim.transcript import to_plain_text


def format_entry(entry: TranscriptEntry) -> str:
    return f"{entry.speaker_label}: {entry.text}"


def _print_entries(entries: Iterable[TranscriptEntry], out: TextIO) -> None:
    for entry in entries:
        print(format_entry(entry), file=out)


def run_console(lines: Iterable[str], controller: CallController, out: TextIO | None = None) -> None:
    """Feed console lines to the controller, echoing new transcript entries."""
    if out is None:
        out = sys.stdout
    for raw in lines:
        line = raw.rstrip("\n")
        command = line.strip().lower()

        if command == "/quit":
            break
        if command == "/start":
            controller.start()
            _print_entries(controller.transcript, out)
        elif command == "/reset":
            controller.reset()
            print(f"[{controller.phase.label}]", file=out)
        elif command == "/status":
            print(f"[{controller.phase.label}] {len(controller.transcript)} entries", file=out)
        else:
            if not controller.is_input_enabled:
                hint = "The call has ended." if controller.transcript else "Start the call with /start."
                print(f"[{controller.phase.label}] {hint}", file=out)
                continue
            appended = controller.submit(line)
            # The caller's own line is already on screen.
            _print_entries(appended[1:], out)
            if not controller.is_input_enabled:
                print(f"[{controller.phase.label}]", file=out)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Restaurant phone call simulator")
    parser.add_argument("--profile", help="JSON business profile (default: built-in bistro)")
    parser.add_argument("--transcript", action="store_true", help="Print the full transcript on exit")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging("WARNING")

    profile_path = args.profile or settings.profile_path
    try:
        profile = load_profile(profile_path) if profile_path else DEFAULT_PROFILE
    except (OSError, ValueError) as e:
        print(f"Could not load profile: {e}", file=sys.stderr)
        return 1

    controller = CallController(
        agent=ScriptedAgent(max_turns=settings.max_turns),
        profile_store=ProfileStore(profile),
    )
    print(f"{profile.name} call console. Type /start to begin, /quit to exit.")
    try:
        run_console(sys.stdin, controller)
    except KeyboardInterrupt:
        print()

    if args.transcript and controller.transcript:
        print("\n--- Transcript ---")
        print(to_plain_text(controller.transcript))
    return 0


if __name__ == "__main__":
    sys.exit(main())

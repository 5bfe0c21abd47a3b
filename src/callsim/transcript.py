from typing import Iterable

from callsim.session import TranscriptEntry


def to_plain_text(entries: Iterable[TranscriptEntry]) -> str:
    """Convert a transcript to plain text.

    Agent lines prefixed with "Assistant:", caller lines with "Caller:".
    Multi-line agent replies keep their line breaks.
    """
    return "\n".join(f"{entry.speaker_label}: {entry.text}" for entry in entries)


def to_json_array(entries: Iterable[TranscriptEntry]) -> list[dict]:
    """Convert a transcript to a list of {id, author, text} dicts."""
    return [{"id": e.id, "author": e.author, "text": e.text} for e in entries]


def to_timestamped_dump(
    entries: Iterable[TranscriptEntry],
    start_time: float,
    call_id: str,
    final_phase: str,
) -> dict:
    """Build a timestamped transcript dump dict for structured logging.

    Timestamps are converted to relative seconds from call start.
    If start_time is 0, uses the first entry's timestamp as base.
    """
    entries = list(entries)
    base_time = start_time
    if base_time <= 0 and entries:
        base_time = entries[0].timestamp

    return {
        "call_id": call_id,
        "final_phase": final_phase,
        "entries": [
            {
                "t": round(e.timestamp - base_time, 1),
                "id": e.id,
                "author": e.author,
                "text": e.text,
            }
            for e in entries
        ],
    }

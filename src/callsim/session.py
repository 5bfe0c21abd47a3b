from dataclasses import dataclass, field
from typing import Any

from callsim.profile import BusinessProfile
from callsim.states import Phase

AGENT = "agent"
CALLER = "caller"
AUTHORS = (AGENT, CALLER)


@dataclass(frozen=True)
class TranscriptEntry:
    id: str
    author: str
    text: str
    timestamp: float = 0.0

    def __post_init__(self):
        if self.author not in AUTHORS:
            raise ValueError(f"Unknown transcript author: {self.author!r}")

    @property
    def speaker_label(self) -> str:
        return "Assistant" if self.author == AGENT else "Caller"


@dataclass
class CallSession:
    call_id: str = ""
    phase: Phase = Phase.NOT_STARTED
    transcript: list[TranscriptEntry] = field(default_factory=list)

    # Opaque to the controller apart from its ``mode`` attribute.
    agent_state: Any = None

    # Profile as it was when the call started.
    profile: BusinessProfile | None = None

    # Metadata
    start_time: float = 0.0
    turn_count: int = 0
    draft: str = ""


@dataclass(frozen=True)
class CallSnapshot:
    """Read-only view of a call for rendering."""

    call_id: str
    phase: Phase
    transcript: tuple[TranscriptEntry, ...]
    turn_count: int = 0
    draft: str = ""

    @property
    def status(self) -> str:
        return self.phase.label

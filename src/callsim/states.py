from enum import Enum

TERMINAL_MODES = {"ended"}


class Phase(Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    ENDED = "ended"

    @property
    def accepts_input(self) -> bool:
        return self is Phase.ACTIVE

    @property
    def label(self) -> str:
        """Call status text shown to the operator."""
        return PHASE_LABELS[self]


PHASE_LABELS = {
    Phase.NOT_STARTED: "Waiting to start",
    Phase.ACTIVE: "Active",
    Phase.ENDED: "Ended",
}


class AgentMode(str, Enum):
    """Conversation modes of the scripted agent.

    Subclasses str so a mode compares equal to its raw value; the controller
    only ever checks ``mode == "ended"``.
    """

    ACTIVE = "active"
    WRAP_UP = "wrap_up"
    ENDED = "ended"

    @property
    def is_terminal(self) -> bool:
        return self.value in TERMINAL_MODES

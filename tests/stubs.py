"""Test doubles shared by the controller and HTTP tests."""

from dataclasses import dataclass

from callsim.dialogue import AgentReply


@dataclass(frozen=True)
class StubState:
    mode: str = "active"


class StubAgent:
    """Collaborator that plays back queued (replies, mode) responses."""

    def __init__(self, opening="Hello, Harbor Lights Bistro."):
        self.opening = opening
        self.queue = []
        self.calls = []
        self.opening_calls = 0
        self.initial_state_calls = 0

    def queue_reply(self, replies, mode="active"):
        self.queue.append((tuple(replies), mode))

    def opening_line(self, profile):
        self.opening_calls += 1
        return self.opening

    def create_initial_state(self):
        self.initial_state_calls += 1
        return StubState()

    def reply(self, utterance, state, profile):
        self.calls.append((utterance, state, profile))
        replies, mode = self.queue.pop(0) if self.queue else ((), state.mode)
        return AgentReply(replies=replies, state=StubState(mode=mode))


def id_sequence(message_id: str) -> int:
    """Numeric part of a ``msg-N`` identifier."""
    return int(message_id.rsplit("-", 1)[1])

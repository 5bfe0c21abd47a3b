"""Dialogue collaborator: turns a caller utterance into agent replies.

The controller talks to any object satisfying ``DialogueAgent`` and reads a
single field of the state it gets back: ``mode``. ``ScriptedAgent`` is the
built-in implementation, a keyword-driven restaurant receptionist.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Protocol, runtime_checkable

from callsim import prompts
from callsim.profile import BusinessProfile
from callsim.states import AgentMode
from callsim.validation import (
    classify_topics,
    detect_close,
    detect_dietary_tags,
    detect_goodbye,
    detect_no,
    match_menu_items,
)

logger = logging.getLogger(__name__)

MAX_TURNS_PER_CALL = 30
MAX_FALLBACKS = 3


@runtime_checkable
class ModeCarrier(Protocol):
    """All the controller may know about agent state."""

    mode: Any


@dataclass(frozen=True)
class AgentReply:
    replies: tuple[str, ...] = ()
    state: Any = None


class DialogueAgent(Protocol):
    def opening_line(self, profile: BusinessProfile) -> str: ...

    def create_initial_state(self) -> ModeCarrier: ...

    def reply(self, utterance: str, state: Any, profile: BusinessProfile) -> AgentReply: ...


@dataclass(frozen=True)
class AgentState:
    mode: AgentMode = AgentMode.ACTIVE
    turn_count: int = 0
    fallback_count: int = 0


class ScriptedAgent:
    def __init__(self, max_turns: int = MAX_TURNS_PER_CALL, max_fallbacks: int = MAX_FALLBACKS):
        self.max_turns = max_turns
        self.max_fallbacks = max_fallbacks

    def opening_line(self, profile: BusinessProfile) -> str:
        return prompts.opening_line(profile)

    def create_initial_state(self) -> AgentState:
        return AgentState()

    def reply(self, utterance: str, state: AgentState, profile: BusinessProfile) -> AgentReply:
        if state.mode.is_terminal:
            return AgentReply(replies=(), state=state)

        state = replace(state, turn_count=state.turn_count + 1)
        if state.turn_count > self.max_turns:
            logger.warning("Per-call turn limit exceeded, handing off to staff")
            return self._end(state, prompts.handoff_reply(profile))

        handler = getattr(self, f"_handle_{state.mode.value}")
        return handler(utterance, state, profile)

    # ── Mode handlers ──

    def _handle_active(self, text: str, state: AgentState, profile: BusinessProfile) -> AgentReply:
        if detect_goodbye(text):
            return self._end(state, prompts.farewell_reply(profile))

        replies = self._answer(text, profile)
        if replies:
            return AgentReply(
                replies=tuple(replies),
                state=replace(state, mode=AgentMode.ACTIVE, fallback_count=0),
            )

        if detect_close(text):
            return AgentReply(
                replies=(prompts.ANYTHING_ELSE_REPLY,),
                state=replace(state, mode=AgentMode.WRAP_UP, fallback_count=0),
            )

        fallbacks = state.fallback_count + 1
        if fallbacks >= self.max_fallbacks:
            logger.info("%d consecutive unrecognised utterances, handing off to staff", fallbacks)
            return self._end(replace(state, fallback_count=fallbacks), prompts.handoff_reply(profile))
        return AgentReply(
            replies=(prompts.FALLBACK_REPLY,),
            state=replace(state, mode=AgentMode.ACTIVE, fallback_count=fallbacks),
        )

    def _handle_wrap_up(self, text: str, state: AgentState, profile: BusinessProfile) -> AgentReply:
        if detect_goodbye(text):
            return self._end(state, prompts.farewell_reply(profile))
        replies = self._answer(text, profile)
        if replies:
            return AgentReply(
                replies=tuple(replies),
                state=replace(state, mode=AgentMode.ACTIVE, fallback_count=0),
            )
        if detect_no(text) or detect_close(text):
            return self._end(state, prompts.farewell_reply(profile))
        return self._handle_active(text, replace(state, mode=AgentMode.ACTIVE), profile)

    # ── Helpers ──

    def _end(self, state: AgentState, reply: str) -> AgentReply:
        return AgentReply(replies=(reply,), state=replace(state, mode=AgentMode.ENDED))

    def _answer(self, text: str, profile: BusinessProfile) -> list[str]:
        topics = classify_topics(text)
        items = match_menu_items(text, profile)
        replies: list[str] = []

        # A bare greeting only gets a greeting back when nothing else was asked.
        if topics == ["greeting"] and not items:
            return [prompts.GREETING_REPLY]

        for topic in topics:
            if topic == "greeting":
                continue
            if items and topic in ("menu", "price", "allergens"):
                continue
            if topic == "dietary":
                replies.extend(prompts.dietary_reply(profile, tag) for tag in detect_dietary_tags(text))
                continue
            render = TOPIC_REPLIES[topic]
            replies.append(render(profile))

        for item in items:
            if "price" in topics and "allergens" not in topics:
                replies.append(prompts.dish_price_reply(item))
            elif "allergens" in topics:
                replies.append(prompts.dish_allergen_reply(item))
            else:
                replies.append(prompts.dish_reply(item))

        return replies


TOPIC_REPLIES = {
    "hours": prompts.hours_reply,
    "location": prompts.location_reply,
    "contact": prompts.contact_reply,
    "cuisine": prompts.cuisine_reply,
    "menu": prompts.menu_reply,
    "allergens": prompts.allergens_reply,
    "price": prompts.prices_reply,
    "takeaway": prompts.takeaway_reply,
    "reservation": prompts.reservation_reply,
    "human": prompts.human_reply,
}

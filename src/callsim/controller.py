import json
import logging
import threading
import time
import uuid
from typing import Callable

from callsim.dialogue import DialogueAgent
from callsim.ids import MessageIdGenerator, process_id_generator
from callsim.profile import BusinessProfile, ProfileStore
from callsim.session import AGENT, CALLER, CallSession, CallSnapshot, TranscriptEntry
from callsim.states import Phase
from callsim.transcript import to_timestamped_dump
from callsim.validation import normalize_utterance

logger = logging.getLogger(__name__)

ENDED_MODE = "ended"


class CallController:
    """Owns the single simulated call: its phase, transcript and agent state.

    The presentation layer drives it through ``start()``, ``submit(text)`` and
    ``reset()`` and reads ``phase``/``transcript`` to render. Invalid calls
    (submitting outside an active call, or blank text) are silent no-ops;
    the controller never raises for caller input.

    Mutating operations hold a lock, so calls arriving from several threads
    run one after another. A ``submit`` issued by the agent from inside its
    own ``reply`` is ignored.
    """

    def __init__(
        self,
        agent: DialogueAgent,
        profile_store: ProfileStore,
        id_generator: MessageIdGenerator | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.agent = agent
        self.profile_store = profile_store
        self.next_id = id_generator or process_id_generator()
        self.clock = clock
        self._lock = threading.RLock()
        self._in_reply = False
        self._session = CallSession()

    # ── Read access ──

    @property
    def phase(self) -> Phase:
        return self._session.phase

    @property
    def transcript(self) -> tuple[TranscriptEntry, ...]:
        return tuple(self._session.transcript)

    @property
    def call_id(self) -> str:
        return self._session.call_id

    @property
    def agent_state(self):
        return self._session.agent_state

    @property
    def profile(self) -> BusinessProfile | None:
        return self._session.profile

    @property
    def draft(self) -> str:
        return self._session.draft

    @property
    def is_input_enabled(self) -> bool:
        return self._session.phase.accepts_input

    def snapshot(self) -> CallSnapshot:
        with self._lock:
            s = self._session
            return CallSnapshot(
                call_id=s.call_id,
                phase=s.phase,
                transcript=tuple(s.transcript),
                turn_count=s.turn_count,
                draft=s.draft,
            )

    # ── Operations ──

    def start(self) -> TranscriptEntry:
        """Begin a new call, discarding any call already in progress."""
        with self._lock:
            self._discard_session("restart")
            # Not started until the greeting is in, even if the agent raises.
            self._session = CallSession()
            profile = self.profile_store.profile
            session = CallSession(
                call_id=uuid.uuid4().hex,
                profile=profile,
                start_time=self.clock(),
            )
            session.agent_state = self.agent.create_initial_state()
            greeting = self._append(session, AGENT, self.agent.opening_line(profile))
            session.phase = Phase.ACTIVE
            self._session = session
            logger.info(f"Call started: {session.call_id} ({profile.name})")
            logger.info(f"[{session.phase.value}] Agent: {greeting.text}")
            return greeting

    def submit(self, text) -> tuple[TranscriptEntry, ...]:
        """Record a caller utterance and the agent's replies to it.

        The caller entry and its replies are committed together once the
        agent has answered. Nothing is recorded when the agent raises, returns
        a malformed response, or returns no replies without ending the call,
        so a caller entry is always followed by an agent entry unless it is
        the last entry of an ended call.

        Returns the entries appended by this call; empty when the submission
        was ignored.
        """
        with self._lock:
            session = self._session
            if self._in_reply:
                logger.warning("submit() re-entered while the agent is replying; ignored")
                return ()
            if not session.phase.accepts_input:
                logger.debug("submit() ignored in phase %s", session.phase.value)
                return ()
            utterance = normalize_utterance(text)
            if not utterance:
                logger.debug("submit() ignored: empty utterance")
                return ()

            received_at = self.clock()
            logger.info(f"[{session.phase.value}] Caller: {utterance}")

            self._in_reply = True
            try:
                result = self.agent.reply(utterance, session.agent_state, session.profile)
                if isinstance(result.replies, str):
                    raise TypeError("replies must be a sequence of strings, not a str")
                replies = [str(reply) for reply in result.replies]
                new_state = result.state
            except Exception:
                logger.exception("Agent failed to reply on call %s; turn not recorded", session.call_id)
                return ()
            finally:
                self._in_reply = False

            if self._session is not session:
                # The agent restarted or reset the call from inside reply().
                return ()

            ended = getattr(new_state, "mode", None) == ENDED_MODE
            if not replies and not ended:
                logger.warning("Agent gave no reply on call %s; turn not recorded", session.call_id)
                return ()

            caller_entry = TranscriptEntry(id=self.next_id(), author=CALLER, text=utterance, timestamp=received_at)
            session.transcript.append(caller_entry)
            appended = [caller_entry]
            for reply in replies:
                entry = self._append(session, AGENT, reply)
                appended.append(entry)
                logger.info(f"[{session.phase.value}] Agent: {entry.text}")
            session.agent_state = new_state
            session.turn_count += 1
            session.draft = ""

            if ended:
                session.phase = Phase.ENDED
                logger.info(f"Call ended by agent: {session.call_id} after {session.turn_count} turns")
                self._log_transcript(session)
            return tuple(appended)

    def reset(self) -> None:
        """Drop the current call and return to the not-started state."""
        with self._lock:
            self._discard_session("reset")
            self._session = CallSession()

    def set_draft(self, text: str) -> None:
        """Remember unsent caller input. Only kept while a call is active."""
        with self._lock:
            if self._session.phase.accepts_input:
                self._session.draft = text if isinstance(text, str) else ""

    # ── Internals ──

    def _append(self, session: CallSession, author: str, text: str) -> TranscriptEntry:
        entry = TranscriptEntry(id=self.next_id(), author=author, text=text, timestamp=self.clock())
        session.transcript.append(entry)
        return entry

    def _discard_session(self, reason: str) -> None:
        old = self._session
        if old.phase is Phase.NOT_STARTED:
            return
        logger.info(f"Call {old.call_id} discarded ({reason}) in phase {old.phase.value}")
        if old.phase is Phase.ACTIVE:
            self._log_transcript(old)

    def _log_transcript(self, session: CallSession) -> None:
        dump = to_timestamped_dump(
            session.transcript,
            start_time=session.start_time,
            call_id=session.call_id,
            final_phase=session.phase.value,
        )
        logger.info("TRANSCRIPT_DUMP|%s", json.dumps(dump))

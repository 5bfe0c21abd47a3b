import logging

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field

from callsim.config import Settings, configure_logging, load_settings, validate_config
from callsim.controller import CallController
from callsim.dialogue import ScriptedAgent
from callsim.profile import DEFAULT_PROFILE, BusinessProfile, ProfileStore, load_profile, summary_lines
from callsim.session import CallSnapshot, TranscriptEntry
from callsim.transcript import to_json_array, to_plain_text

load_dotenv()

logger = logging.getLogger(__name__)


# ── Request / response bodies ──

class MenuItemBody(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    id: str = Field(..., min_length=1)
    name: str
    description: str = ""
    price: str = ""
    allergens: str = ""
    tags: list[str] = Field(default_factory=list)


class ProfileUpdate(BaseModel):
    """Partial profile edit. Only the fields sent are changed."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    cuisine_type: str | None = None
    address: str | None = None
    phone_number: str | None = None
    opening_hours: str | None = None
    closed_days: str | None = None
    takeaway_available: bool | None = None
    takeaway_methods: str | None = None
    popular_dishes: list[MenuItemBody] | None = None


class ProfileView(BaseModel):
    name: str
    cuisine_type: str
    address: str
    phone_number: str
    opening_hours: str
    closed_days: str
    takeaway_available: bool
    takeaway_methods: str
    popular_dishes: list[MenuItemBody]
    summary: list[str]

    @classmethod
    def from_profile(cls, profile: BusinessProfile) -> "ProfileView":
        return cls(**profile.to_dict(), summary=summary_lines(profile))


class SubmitRequest(BaseModel):
    text: str = ""


class DraftRequest(BaseModel):
    text: str = ""


class EntryView(BaseModel):
    id: str
    author: str
    text: str

    @classmethod
    def from_entry(cls, entry: TranscriptEntry) -> "EntryView":
        return cls(id=entry.id, author=entry.author, text=entry.text)


class CallView(BaseModel):
    call_id: str
    phase: str
    status: str
    input_enabled: bool
    turn_count: int
    draft: str
    transcript: list[EntryView]

    @classmethod
    def from_snapshot(cls, snap: CallSnapshot) -> "CallView":
        return cls(
            call_id=snap.call_id,
            phase=snap.phase.value,
            status=snap.status,
            input_enabled=snap.phase.accepts_input,
            turn_count=snap.turn_count,
            draft=snap.draft,
            transcript=[EntryView.from_entry(e) for e in snap.transcript],
        )


class SubmitResponse(CallView):
    appended: list[EntryView] = Field(default_factory=list)


# ── App ──

def create_app(settings: Settings | None = None, controller: CallController | None = None) -> FastAPI:
    settings = settings or Settings()
    if controller is None:
        profile = load_profile(settings.profile_path) if settings.profile_path else DEFAULT_PROFILE
        controller = CallController(
            agent=ScriptedAgent(max_turns=settings.max_turns),
            profile_store=ProfileStore(profile),
        )

    app = FastAPI(title="Restaurant Call Simulator")
    app.state.controller = controller

    def _controller(request: Request) -> CallController:
        return request.app.state.controller

    @app.get("/health")
    async def health():
        return PlainTextResponse("ok")

    @app.get("/profile", response_model=ProfileView)
    async def get_profile(request: Request):
        return ProfileView.from_profile(_controller(request).profile_store.profile)

    @app.patch("/profile", response_model=ProfileView)
    async def update_profile(body: ProfileUpdate, request: Request):
        store = _controller(request).profile_store
        try:
            profile = store.update(**body.model_dump(exclude_unset=True))
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return ProfileView.from_profile(profile)

    @app.get("/call", response_model=CallView)
    async def get_call(request: Request):
        return CallView.from_snapshot(_controller(request).snapshot())

    @app.post("/call/start", response_model=CallView)
    async def start_call(request: Request):
        controller = _controller(request)
        controller.start()
        return CallView.from_snapshot(controller.snapshot())

    @app.post("/call/submit", response_model=SubmitResponse)
    async def submit_utterance(body: SubmitRequest, request: Request):
        controller = _controller(request)
        appended = controller.submit(body.text)
        view = CallView.from_snapshot(controller.snapshot())
        return SubmitResponse(
            **view.model_dump(),
            appended=[EntryView.from_entry(e) for e in appended],
        )

    @app.post("/call/reset", response_model=CallView)
    async def reset_call(request: Request):
        controller = _controller(request)
        controller.reset()
        return CallView.from_snapshot(controller.snapshot())

    @app.put("/call/draft", response_model=CallView)
    async def set_draft(body: DraftRequest, request: Request):
        controller = _controller(request)
        controller.set_draft(body.text)
        return CallView.from_snapshot(controller.snapshot())

    @app.get("/call/transcript.txt")
    async def transcript_text(request: Request):
        return PlainTextResponse(to_plain_text(_controller(request).transcript))

    @app.get("/call/transcript.json")
    async def transcript_json(request: Request):
        return to_json_array(_controller(request).transcript)

    return app


validate_config()
settings = load_settings()
configure_logging(settings.log_level)
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run("callsim.bot:app", host="0.0.0.0", port=settings.port, reload=True)

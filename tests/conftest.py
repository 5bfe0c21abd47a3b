import pytest
from callsim.controller import CallController
from callsim.dialogue import ScriptedAgent
from callsim.ids import MessageIdGenerator
from callsim.profile import DEFAULT_PROFILE, ProfileStore

from stubs import StubAgent


@pytest.fixture
def store():
    return ProfileStore(DEFAULT_PROFILE)


@pytest.fixture
def ids():
    return MessageIdGenerator()


@pytest.fixture
def stub():
    return StubAgent()


@pytest.fixture
def controller(stub, store, ids):
    return CallController(agent=stub, profile_store=store, id_generator=ids, clock=lambda: 1000.0)


@pytest.fixture
def agent():
    return ScriptedAgent()


@pytest.fixture
def scripted_controller(agent, store, ids):
    return CallController(agent=agent, profile_store=store, id_generator=ids)

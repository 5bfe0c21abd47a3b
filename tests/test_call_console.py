import io
import os
import sys

import pytest
from callsim.controller import CallController
from callsim.dialogue import ScriptedAgent
from callsim.ids import MessageIdGenerator
from callsim.profile import ProfileStore
from callsim.states import Phase

# Add scripts to path so we can import the module
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "scripts"))
from call_console import main, run_console


@pytest.fixture
def console_controller():
    return CallController(
        agent=ScriptedAgent(), profile_store=ProfileStore(), id_generator=MessageIdGenerator()
    )


def _run(lines, controller):
    out = io.StringIO()
    run_console(lines, controller, out)
    return out.getvalue().splitlines()


class TestRunConsole:
    def test_text_before_start_is_rejected(self, console_controller):
        output = _run(["hello"], console_controller)
        assert output == ["[Waiting to start] Start the call with /start."]
        assert console_controller.transcript == ()

    def test_start_prints_greeting(self, console_controller):
        output = _run(["/start"], console_controller)
        assert output[0].startswith("Assistant: Thank you for calling Harbor Lights Bistro")

    def test_conversation_until_goodbye(self, console_controller):
        output = _run(["/start", "Where are you?", "bye", "hello?"], console_controller)
        assert "Assistant: You'll find us at 128 Seaside Avenue, Monterey, CA." in output
        assert "Assistant: Thanks for calling Harbor Lights Bistro, goodbye!" in output
        assert output[-2] == "[Ended]"
        assert output[-1] == "[Ended] The call has ended."
        assert console_controller.phase == Phase.ENDED
        assert len(console_controller.transcript) == 5

    def test_quit_stops_reading(self, console_controller):
        _run(["/start", "/quit", "Where are you?"], console_controller)
        assert len(console_controller.transcript) == 1

    def test_reset(self, console_controller):
        output = _run(["/start", "/reset", "/status"], console_controller)
        assert output[-2:] == ["[Waiting to start]", "[Waiting to start] 0 entries"]

    def test_blank_line_ignored(self, console_controller):
        output = _run(["/start", "   "], console_controller)
        assert len(output) == 1
        assert len(console_controller.transcript) == 1


class TestMain:
    def test_missing_profile_file(self, tmp_path, capsys):
        assert main(["--profile", str(tmp_path / "missing.json")]) == 1
        assert "Could not load profile" in capsys.readouterr().err

    def test_runs_against_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.StringIO("/start\nWhat time do you open?\n/quit\n"))
        assert main(["--transcript"]) == 0
        out = capsys.readouterr().out
        assert "--- Transcript ---" in out
        assert "Caller: What time do you open?" in out

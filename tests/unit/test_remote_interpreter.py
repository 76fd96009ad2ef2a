"""Tests for the remote interpreter and the fallback selector."""

import asyncio
import json

import httpx
import pytest
import respx

from screenforge.clients.assistant import AssistantClient
from screenforge.core.errors import InterpretationUnavailable
from screenforge.editor.kinds import ComponentKind
from screenforge.editor.models import Screen
from screenforge.editor.mutations import build_node
from screenforge.editor.operations import AddOp, DeleteByIdOp
from screenforge.interpreter import (
    FallbackInterpreter,
    Interpretation,
    InterpretationContext,
    LocalRuleInterpreter,
    RemoteInterpreter,
)
from screenforge.interpreter.selector import UNAVAILABLE_NOTE

ASSISTANT_URL = "http://assistant.test"
COMMAND_URL = f"{ASSISTANT_URL}/api/ai/editor-command"


@pytest.fixture
def remote():
    return RemoteInterpreter(AssistantClient(ASSISTANT_URL, timeout=1.0), context_node_cap=2)


@pytest.fixture
def context():
    screen = Screen(
        id="scr_home",
        name="Home",
        components=[build_node(ComponentKind.TEXT) for _ in range(4)],
    )
    return InterpretationContext(screen=screen, selected=screen.components[0], app_name="Shop", industry="retail")


class StubInterpreter:
    """Interpreter returning a fixed reply or raising."""

    def __init__(self, name, reply=None, error=None):
        self.name = name
        self.reply = reply
        self.error = error
        self.calls = 0

    async def interpret(self, prompt, context):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.mark.unit
class TestContextWire:
    """Test the request context shape."""

    def test_truncates_components(self, context):
        wire = context.to_wire(node_cap=2)
        assert wire["appName"] == "Shop"
        assert wire["industry"] == "retail"
        assert wire["screen"]["id"] == "scr_home"
        assert len(wire["screen"]["components"]) == 2
        assert wire["selected"]["type"] == "text"

    def test_empty_context(self):
        wire = InterpretationContext().to_wire(node_cap=5)
        assert wire["screen"] is None
        assert wire["selected"] is None


@pytest.mark.unit
class TestRemoteInterpreter:
    """Test remote interpretation over HTTP."""

    @respx.mock
    def test_parses_operations(self, remote, context):
        route = respx.post(COMMAND_URL).mock(
            return_value=httpx.Response(
                200,
                json={
                    "operations": [
                        {"type": "addComponent", "component": "button", "props": {"text": "Buy"}},
                        {"type": "levitate"},
                        {"op": "deleteById", "id": "cmp_1"},
                    ],
                    "message": "Added a button.",
                },
            )
        )

        result = asyncio.run(remote.interpret("add a buy button", context))

        assert route.called
        sent = route.calls.last.request
        body = json.loads(sent.content)
        assert body["prompt"] == "add a buy button"
        assert len(body["context"]["screen"]["components"]) == 2
        assert result.operations == [
            AddOp(kind=ComponentKind.BUTTON, props={"text": "Buy"}),
            DeleteByIdOp(node_id="cmp_1"),
        ]
        assert result.message == "Added a button."
        assert result.source == "remote"

    @respx.mock
    def test_reply_wrapped_in_prose(self, remote, context):
        respx.post(COMMAND_URL).mock(
            return_value=httpx.Response(200, text='Sure! ```json\n{"operations": [], "message": "Nothing to do"}\n```')
        )
        result = asyncio.run(remote.interpret("hm", context))
        assert result.operations == []
        assert result.message == "Nothing to do"

    @respx.mock
    def test_http_error_is_unavailable(self, remote, context):
        respx.post(COMMAND_URL).mock(return_value=httpx.Response(503))
        with pytest.raises(InterpretationUnavailable):
            asyncio.run(remote.interpret("add a button", context))

    @respx.mock
    def test_missing_operations_is_unavailable(self, remote, context):
        respx.post(COMMAND_URL).mock(return_value=httpx.Response(200, json={"message": "hi"}))
        with pytest.raises(InterpretationUnavailable):
            asyncio.run(remote.interpret("add a button", context))

    @respx.mock
    def test_non_json_is_unavailable(self, remote, context):
        respx.post(COMMAND_URL).mock(return_value=httpx.Response(200, text="internal error"))
        with pytest.raises(InterpretationUnavailable):
            asyncio.run(remote.interpret("add a button", context))

    def test_unconfigured(self, context):
        with pytest.raises(InterpretationUnavailable):
            asyncio.run(RemoteInterpreter(None).interpret("add a button", context))


@pytest.mark.unit
class TestFallbackInterpreter:
    """Test remote-first selection."""

    def test_remote_result_used(self, context):
        reply = Interpretation(operations=[AddOp(kind="text")], message="ok", source="remote")
        local = StubInterpreter("local", Interpretation(message="local"))
        selector = FallbackInterpreter(local=local, remote=StubInterpreter("remote", reply))

        result = asyncio.run(selector.interpret("add text", context))

        assert result is reply
        assert local.calls == 0

    def test_unavailable_falls_back_with_note(self, context):
        selector = FallbackInterpreter(
            local=LocalRuleInterpreter(),
            remote=StubInterpreter("remote", error=InterpretationUnavailable("down")),
        )
        result = asyncio.run(selector.interpret("add a button", context))

        assert [op.kind for op in result.operations] == [ComponentKind.BUTTON]
        assert result.message.startswith(UNAVAILABLE_NOTE)
        assert result.degraded
        assert result.source == "local"

    def test_empty_remote_falls_back(self, context):
        remote = StubInterpreter("remote", Interpretation(message="Not sure", source="remote"))
        selector = FallbackInterpreter(local=LocalRuleInterpreter(), remote=remote)

        result = asyncio.run(selector.interpret("add a divider", context))

        assert [op.kind for op in result.operations] == [ComponentKind.DIVIDER]
        assert not result.degraded

    def test_both_empty_keeps_remote_message(self, context):
        remote = StubInterpreter("remote", Interpretation(message="Try naming a component", source="remote"))
        selector = FallbackInterpreter(local=LocalRuleInterpreter(), remote=remote)

        result = asyncio.run(selector.interpret("do something nice", context))

        assert result.operations == []
        assert result.message == "Try naming a component"

    def test_local_only(self, context):
        selector = FallbackInterpreter(local=LocalRuleInterpreter())
        result = asyncio.run(selector.interpret("add a spacer", context))
        assert result.source == "local"
        assert len(result.operations) == 1

    @respx.mock
    def test_http_failure_end_to_end(self, remote, context):
        respx.post(COMMAND_URL).mock(side_effect=httpx.ConnectError("refused"))
        selector = FallbackInterpreter(local=LocalRuleInterpreter(), remote=remote)

        result = asyncio.run(selector.interpret("add a heading", context))

        assert [op.kind for op in result.operations] == [ComponentKind.HEADING]
        assert result.degraded

#!/usr/bin/env python3
"""
Unit tests for the dispatcher and the outcome reporter.
"""

"""
Copyright (c) 2025 Firefly Software Solutions Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at:

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import asyncio
from unittest.mock import Mock

import pytest

from trollsmile.core.context import BotContext, Identity, Message
from trollsmile.core.descriptor import CommandDescriptor
from trollsmile.core.dispatcher import Dispatcher, render_result
from trollsmile.core.outcome import Failed, Handled, NotFound
from trollsmile.core.registry import CommandRegistry
from trollsmile.core.reporter import ErrorReport, OutcomeReporter


class RecordingChannel:
    """Channel collecting everything sent to it."""

    def __init__(self):
        self.sent = []

    def send(self, payload):
        self.sent.append(payload)


def echo(context, message, args):
    return args[0] if args else None


def make_dispatcher(*descriptors, identity=None, prefix=""):
    registry = CommandRegistry()
    registry.register_all(descriptors)
    context = BotContext(
        registry=registry,
        identity=identity or Identity(username="trollsmile cli", avatar_url="icon.png"),
        prefix=prefix,
    )
    return Dispatcher(context)


class TestDispatch:
    """Test Dispatcher.dispatch."""

    @pytest.mark.asyncio
    async def test_handler_receives_context_message_and_args(self):
        """The handler is called with (context, message, args)."""
        handler = Mock(return_value="ok")
        dispatcher = make_dispatcher(CommandDescriptor("cmd", handler))
        message = Message("cmd a b", RecordingChannel())

        outcome = await dispatcher.dispatch("cmd", message, ["a", "b"])

        handler.assert_called_once_with(dispatcher.context, message, ["a", "b"])
        assert outcome == Handled(command="cmd", result="ok")

    @pytest.mark.asyncio
    async def test_alias_resolves_to_canonical_command(self):
        """Dispatching an alias runs the canonical command."""
        dispatcher = make_dispatcher(CommandDescriptor("echo", echo, aliases=["e"]))

        outcome = await dispatcher.dispatch("e", Message("e hi", RecordingChannel()), ["hi"])

        assert outcome == Handled(command="echo", result="hi")

    @pytest.mark.asyncio
    async def test_unknown_name(self):
        """Unknown names give NotFound."""
        dispatcher = make_dispatcher()

        outcome = await dispatcher.dispatch("nope", Message("nope", RecordingChannel()), [])

        assert isinstance(outcome, NotFound)
        assert outcome.is_success

    @pytest.mark.asyncio
    async def test_async_handler_is_awaited(self):
        """Coroutine handlers are awaited."""

        async def slow(context, message, args):
            await asyncio.sleep(0)
            return "done"

        dispatcher = make_dispatcher(CommandDescriptor("slow", slow))

        outcome = await dispatcher.dispatch("slow", Message("slow", RecordingChannel()), [])

        assert outcome == Handled(command="slow", result="done")

    @pytest.mark.asyncio
    async def test_empty_result(self):
        """Falsy results are reported as no result."""
        dispatcher = make_dispatcher(CommandDescriptor("quiet", lambda c, m, a: ""))

        outcome = await dispatcher.dispatch("quiet", Message("quiet", RecordingChannel()), [])

        assert outcome == Handled(command="quiet", result=None)

    @pytest.mark.asyncio
    async def test_non_string_result_is_rendered(self):
        """Results are converted to text before the outcome is built."""
        dispatcher = make_dispatcher(CommandDescriptor("count", lambda c, m, a: 42))

        outcome = await dispatcher.dispatch("count", Message("count", RecordingChannel()), [])

        assert outcome == Handled(command="count", result="42")

    @pytest.mark.asyncio
    async def test_unrenderable_result_is_a_failure(self):
        """A result whose __str__ raises fails the command instead of the loop."""

        class Unprintable:
            def __str__(self):
                raise RuntimeError("cannot render")

        dispatcher = make_dispatcher(
            CommandDescriptor("bad", lambda c, m, a: Unprintable()),
            CommandDescriptor("echo", echo),
        )
        channel = RecordingChannel()

        outcome = await dispatcher.handle(Message("bad", channel))
        await dispatcher.handle(Message("echo next", channel))

        assert isinstance(outcome, Failed)
        assert outcome.description == "cannot render"
        assert len(channel.sent) == 2
        assert isinstance(channel.sent[0], ErrorReport)
        assert channel.sent[0].title == "cannot render"
        assert channel.sent[1] == "next"

    @pytest.mark.asyncio
    async def test_handler_fault(self):
        """Exceptions become Failed outcomes carrying the identity."""
        error = RuntimeError("boom")

        def explode(context, message, args):
            raise error

        identity = Identity(username="bot", avatar_url="bot.png")
        dispatcher = make_dispatcher(CommandDescriptor("explode", explode), identity=identity)

        outcome = await dispatcher.dispatch("explode", Message("explode", RecordingChannel()), [])

        assert isinstance(outcome, Failed)
        assert outcome.error is error
        assert outcome.identity == identity
        assert outcome.description == "boom"
        assert not outcome.is_success

    @pytest.mark.asyncio
    async def test_async_handler_fault(self):
        """Exceptions raised after suspending are contained too."""

        async def explode(context, message, args):
            await asyncio.sleep(0)
            raise ValueError("late boom")

        dispatcher = make_dispatcher(CommandDescriptor("explode", explode))

        outcome = await dispatcher.dispatch("explode", Message("explode", RecordingChannel()), [])

        assert isinstance(outcome, Failed)
        assert outcome.description == "late boom"

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        """Cancellation is not converted into a Failed outcome."""

        async def cancelled(context, message, args):
            raise asyncio.CancelledError()

        dispatcher = make_dispatcher(CommandDescriptor("cancel", cancelled))

        with pytest.raises(asyncio.CancelledError):
            await dispatcher.dispatch("cancel", Message("cancel", RecordingChannel()), [])


class TestHandle:
    """Test the full per-line pipeline."""

    @pytest.mark.asyncio
    async def test_end_to_end_echo(self):
        """echo with alias e, and an unknown line."""
        dispatcher = make_dispatcher(CommandDescriptor("echo", echo, aliases=["e"]))
        channel = RecordingChannel()

        await dispatcher.handle(Message("echo hello", channel))
        await dispatcher.handle(Message("e hi", channel))
        outcome = await dispatcher.handle(Message("unknown", channel))

        assert channel.sent == ["hello", "hi"]
        assert isinstance(outcome, NotFound)

    @pytest.mark.asyncio
    async def test_result_sent_exactly_once(self):
        """A non-empty result causes exactly one send."""
        dispatcher = make_dispatcher(CommandDescriptor("hi", lambda c, m, a: "hello"))
        channel = Mock()

        await dispatcher.handle(Message("hi", channel))

        channel.send.assert_called_once_with("hello")

    @pytest.mark.asyncio
    async def test_no_result_sends_nothing(self):
        """A handler returning nothing causes no send."""
        dispatcher = make_dispatcher(CommandDescriptor("quiet", lambda c, m, a: None))
        channel = Mock()

        await dispatcher.handle(Message("quiet", channel))

        channel.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_unmatched_line_sends_nothing(self):
        """Unmatched lines are silently ignored."""
        dispatcher = make_dispatcher(CommandDescriptor("echo", echo))
        channel = Mock()

        await dispatcher.handle(Message("echoes hi", channel))
        await dispatcher.handle(Message("", channel))

        channel.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_fault_sends_error_report_and_loop_continues(self):
        """A failing handler sends one error report; later lines still work."""

        def explode(context, message, args):
            raise RuntimeError("it broke")

        dispatcher = make_dispatcher(
            CommandDescriptor("explode", explode),
            CommandDescriptor("echo", echo),
            identity=Identity(username="trollsmile cli", avatar_url="icon.png"),
        )
        channel = RecordingChannel()

        await dispatcher.handle(Message("explode", channel))
        await dispatcher.handle(Message("echo after", channel))

        assert len(channel.sent) == 2
        report = channel.sent[0]
        assert isinstance(report, ErrorReport)
        assert report.title == "it broke"
        assert report.author_name == "trollsmile cli ran into an error while running your command!"
        assert report.author_icon == "icon.png"
        assert report.color == "RED"
        assert channel.sent[1] == "after"

    @pytest.mark.asyncio
    async def test_prefix(self):
        """The context prefix is required and stripped before tokenizing."""
        dispatcher = make_dispatcher(CommandDescriptor("echo", echo), prefix="!")
        channel = RecordingChannel()

        await dispatcher.handle(Message("echo plain", channel))
        await dispatcher.handle(Message("!echo bang", channel))

        assert channel.sent == ["bang"]

    @pytest.mark.asyncio
    async def test_longest_name_dispatched(self):
        """Overlapping names dispatch to the longest match."""
        dispatcher = make_dispatcher(
            CommandDescriptor("echo", lambda c, m, a: "short"),
            CommandDescriptor("echo2", lambda c, m, a: "long"),
        )
        channel = RecordingChannel()

        await dispatcher.handle(Message("echo2 x", channel))
        await dispatcher.handle(Message("echo x", channel))

        assert channel.sent == ["long", "short"]

    @pytest.mark.asyncio
    async def test_handler_sees_empty_tokens(self):
        """Consecutive spaces reach the handler as empty tokens."""
        seen = []
        dispatcher = make_dispatcher(
            CommandDescriptor("args", lambda c, m, a: seen.append(a))
        )

        await dispatcher.handle(Message("args a  b", RecordingChannel()))
        await dispatcher.handle(Message("args", RecordingChannel()))

        assert seen == [["a", "", "b"], []]


class TestOutcomeReporter:
    """Test OutcomeReporter."""

    def test_payloads(self):
        """Each outcome maps to the expected payload."""
        identity = Identity(username="bot", avatar_url="")

        assert OutcomeReporter.payload_for(Handled("cmd", "text")) == "text"
        assert OutcomeReporter.payload_for(Handled("cmd", None)) is None
        assert OutcomeReporter.payload_for(Handled("cmd", "")) is None
        assert OutcomeReporter.payload_for(NotFound("cmd")) is None

        report = OutcomeReporter.payload_for(Failed("cmd", KeyError("k"), identity))
        assert isinstance(report, ErrorReport)
        assert report.title == str(KeyError("k"))

    def test_empty_error_message_uses_class_name(self):
        """Errors without a message are titled with their class name."""
        outcome = Failed("cmd", RuntimeError(), Identity())

        report = OutcomeReporter.payload_for(outcome)

        assert report.title == "RuntimeError"

    def test_error_report_serializes(self):
        """Error reports serialize for transports that need plain data."""
        report = ErrorReport.from_failure("boom", Identity(username="bot", avatar_url="a.png"))

        assert report.to_dict() == {
            "author_name": "bot ran into an error while running your command!",
            "author_icon": "a.png",
            "title": "boom",
            "color": "RED",
        }

    @pytest.mark.asyncio
    async def test_async_channel(self):
        """Awaitable send() results are awaited."""
        sent = []

        class AsyncChannel:
            async def send(self, payload):
                sent.append(payload)

        payload = await OutcomeReporter().report(
            Handled("cmd", "hi"), Message("cmd", AsyncChannel())
        )

        assert payload == "hi"
        assert sent == ["hi"]


class TestOrdering:
    """Lines are processed strictly one at a time."""

    @pytest.mark.asyncio
    async def test_second_line_waits_for_suspended_handler(self):
        """While the first handler is suspended, the second line is not dispatched."""
        release = asyncio.Event()
        calls = []

        async def block(context, message, args):
            calls.append("block:start")
            await release.wait()
            calls.append("block:end")
            return "unblocked"

        def fast(context, message, args):
            calls.append("fast")
            return "fast"

        dispatcher = make_dispatcher(
            CommandDescriptor("block", block), CommandDescriptor("fast", fast)
        )
        channel = RecordingChannel()
        lines = asyncio.Queue()

        async def loop():
            while True:
                line = await lines.get()
                if line is None:
                    return
                await dispatcher.handle(Message(line, channel))

        task = asyncio.create_task(loop())
        await lines.put("block")
        await lines.put("fast")
        for _ in range(10):
            await asyncio.sleep(0)

        assert calls == ["block:start"]
        assert channel.sent == []

        release.set()
        await lines.put(None)
        await asyncio.wait_for(task, timeout=1)

        assert calls == ["block:start", "block:end", "fast"]
        assert channel.sent == ["unblocked", "fast"]


class TestRenderResult:
    """Test render_result."""

    def test_strings_pass_through(self):
        assert render_result("text") == "text"
        assert render_result("") is None

    def test_other_values(self):
        assert render_result(None) is None
        assert render_result(0) is None
        assert render_result([]) is None
        assert render_result(42) == "42"
        assert render_result(["a"]) == "['a']"

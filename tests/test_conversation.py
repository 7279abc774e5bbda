"""Unit and property-based tests for the conversation store and session."""
import asyncio
import json

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from taskchat.assistant import (
    PARSE_FAILURE_REPLY,
    REMOTE_FAILURE_REPLY,
    AssistantGateway,
    Interpretation,
    TurnInProgressError,
)
from taskchat.conversation import (
    ChatSession,
    ConversationState,
    TurnStatus,
    abort_turn,
    append_assistant_message,
    append_task,
    append_user_message,
    begin_turn,
    complete_turn,
)
from taskchat.models import Task
from taskchat.prompts import TASK_ASSISTANT_PROMPT, clear_cache


class TestTransitions:
    """Tests for the pure state transitions."""

    def test_initial_state(self):
        state = ConversationState()
        assert state.messages == ()
        assert state.tasks == ()
        assert state.status is TurnStatus.IDLE

    def test_appends_return_new_state(self):
        """Transitions never mutate the input state."""
        state = ConversationState()
        after = append_user_message(state, "hi")

        assert state.messages == ()
        assert [m.text for m in after.messages] == ["hi"]
        assert after.messages[0].is_user

    def test_append_assistant_message(self):
        state = append_assistant_message(ConversationState(), "hello")
        assert not state.messages[0].is_user

    def test_append_task(self):
        task = Task(task_name="Call mom")
        state = append_task(ConversationState(), task)
        assert state.tasks == (task,)

    def test_begin_turn_enters_sending(self):
        state = begin_turn(ConversationState(), "hi")
        assert state.status is TurnStatus.SENDING
        assert state.is_sending
        assert state.messages[-1].text == "hi"

    def test_begin_turn_while_sending_raises(self):
        state = begin_turn(ConversationState(), "hi")
        with pytest.raises(TurnInProgressError):
            begin_turn(state, "again")

    def test_complete_turn_with_task(self):
        state = begin_turn(ConversationState(), "call mom")
        task = Task(task_name="Call mom")

        state = complete_turn(state, Interpretation(reply="Got it.", task=task))

        assert state.status is TurnStatus.IDLE
        assert [m.text for m in state.messages] == ["call mom", "Got it."]
        assert state.tasks == (task,)

    def test_complete_turn_without_task(self):
        state = complete_turn(begin_turn(ConversationState(), "hey"), Interpretation(reply="Hi!"))
        assert state.tasks == ()
        assert len(state.messages) == 2

    def test_abort_turn_returns_to_idle(self):
        state = abort_turn(begin_turn(ConversationState(), "hey"))
        assert state.status is TurnStatus.IDLE
        assert len(state.messages) == 1


class TestChatSession:
    """Tests for ChatSession turn handling."""

    @pytest.mark.asyncio
    async def test_task_scenario(self, make_session, call_mom_reply):
        session = make_session(responses=[call_mom_reply])

        outcome = await session.submit("remind me to call mom tomorrow at 5pm")

        assert outcome.reply == "Got it, I'll remind you."
        assert [(m.text, m.is_user) for m in session.messages] == [
            ("remind me to call mom tomorrow at 5pm", True),
            ("Got it, I'll remind you.", False),
        ]
        assert len(session.tasks) == 1
        assert session.tasks[0].task_name == "Call mom"
        assert not session.is_sending

    @pytest.mark.asyncio
    async def test_chat_scenario(self, make_session, small_talk_reply):
        session = make_session(responses=[small_talk_reply])

        await session.submit("hey, how's it going")

        assert session.messages[-1].text == "Doing well, thanks! How can I help?"
        assert session.tasks == ()

    @pytest.mark.asyncio
    async def test_incomplete_task_adds_no_task(self, make_session):
        reply = json.dumps({
            "intent": "incomplete_task",
            "response": "What should I call the task?",
            "task": {"taskName": "Something", "dueDate": None, "priority": "low", "category": "work"},
        })
        session = make_session(responses=[reply])

        await session.submit("remind me tomorrow")

        assert session.messages[-1].text == "What should I call the task?"
        assert session.tasks == ()

    @pytest.mark.asyncio
    async def test_remote_failure_reply(self, make_session):
        session = make_session(error=ConnectionError("offline"))

        outcome = await session.submit("hello")

        assert outcome.reply == REMOTE_FAILURE_REPLY
        assert session.messages[-1].text == "Sorry, I encountered an error. Please try again."
        assert session.tasks == ()
        assert not session.is_sending

    @pytest.mark.asyncio
    async def test_unparseable_reply(self, make_session):
        session = make_session(responses=["Sure! I'll remind you."])

        outcome = await session.submit("remind me")

        assert not outcome.parsed
        assert session.messages[-1].text == PARSE_FAILURE_REPLY == "Sorry, I couldn't process that."
        assert session.tasks == ()
        assert not session.is_sending

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    async def test_blank_input_is_ignored(self, make_session, text):
        session = make_session()

        assert await session.submit(text) is None
        assert session.messages == ()
        assert session.gateway.llm.prompts == []

    @pytest.mark.asyncio
    async def test_history_excludes_new_message(self, make_session, small_talk_reply):
        """The prompt carries the transcript as it was before this turn."""
        session = make_session(responses=[small_talk_reply, small_talk_reply])

        await session.submit("first message")
        await session.submit("second message")

        prompts = session.gateway.llm.prompts
        assert "User: first message" not in prompts[0]
        assert "User: first message\nAI: Doing well, thanks! How can I help?" in prompts[1]
        assert "User: second message" not in prompts[1]

    @pytest.mark.asyncio
    async def test_second_submit_while_sending_raises(self, fake_llm_class, fixed_clock):
        release = asyncio.Event()

        class SlowLLM(fake_llm_class):
            async def generate(self, prompt, model=None, **kwargs):
                await release.wait()
                return await super().generate(prompt, model, **kwargs)

        session = ChatSession(AssistantGateway(SlowLLM(), clock=fixed_clock))
        first = asyncio.create_task(session.submit("one"))
        await asyncio.sleep(0)

        assert session.is_sending
        with pytest.raises(TurnInProgressError):
            await session.submit("two")

        release.set()
        await first
        assert len(session.messages) == 2
        assert not session.is_sending

    @pytest.mark.asyncio
    async def test_cancelled_turn_returns_to_idle(self, fake_llm_class, fixed_clock):
        class HangingLLM(fake_llm_class):
            async def generate(self, prompt, model=None, **kwargs):
                await asyncio.Event().wait()

        session = ChatSession(AssistantGateway(HangingLLM(), clock=fixed_clock))
        turn = asyncio.create_task(session.submit("hello"))
        await asyncio.sleep(0)
        turn.cancel()

        with pytest.raises(asyncio.CancelledError):
            await turn
        assert not session.is_sending
        assert len(session.messages) == 1

    @pytest.mark.asyncio
    async def test_broken_prompt_override_keeps_session_usable(self, make_session, small_talk_reply, tmp_path, monkeypatch):
        """A template with an unescaped brace yields the error reply, not a stuck turn."""
        prompts_dir = tmp_path / "prompts"
        prompts_dir.mkdir()
        (prompts_dir / f"{TASK_ASSISTANT_PROMPT}.txt").write_text(
            'Reply as {"intent": ...} to {message}', encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)
        clear_cache()
        session = make_session(responses=[small_talk_reply])

        try:
            outcome = await session.submit("hello")

            assert outcome.reply == REMOTE_FAILURE_REPLY
            assert not session.is_sending
            assert session.gateway.llm.prompts == []

            (prompts_dir / f"{TASK_ASSISTANT_PROMPT}.txt").write_text("Reply to {message}", encoding="utf-8")
            clear_cache()
            await session.submit("again")
            assert len(session.messages) == 4
            assert session.messages[-1].text == "Doing well, thanks! How can I help?"
        finally:
            clear_cache()

    @pytest.mark.asyncio
    async def test_gateway_error_returns_to_idle(self, fake_llm_class, fixed_clock, small_talk_reply):
        class FlakyGateway(AssistantGateway):
            def __init__(self, *args, **kwargs):
                super().__init__(*args, **kwargs)
                self.failures = 1

            async def ask(self, message, history):
                if self.failures:
                    self.failures -= 1
                    raise RuntimeError("gateway bug")
                return await super().ask(message, history)

        session = ChatSession(FlakyGateway(fake_llm_class(responses=[small_talk_reply]), clock=fixed_clock))

        with pytest.raises(RuntimeError, match="gateway bug"):
            await session.submit("first")
        assert not session.is_sending
        assert len(session.messages) == 1

        outcome = await session.submit("second")
        assert outcome.reply == "Doing well, thanks! How can I help?"
        assert len(session.messages) == 3

    @pytest.mark.asyncio
    async def test_state_callback_sees_each_transition(self, make_session, small_talk_reply):
        session = make_session(responses=[small_talk_reply])
        seen = []
        session.set_state_callback(lambda state: seen.append((state.status, len(state.messages))))

        await session.submit("hey")

        assert seen == [(TurnStatus.SENDING, 1), (TurnStatus.IDLE, 2)]

    @pytest.mark.asyncio
    async def test_debug_callback_reaches_gateway(self, make_session):
        session = make_session(error=RuntimeError("boom"))
        events = []
        session.set_debug_callback(lambda level, component, message: events.append((level, component)))

        await session.submit("hello")

        assert ("info", "Session") in events
        assert ("error", "LLM") in events

    @settings(max_examples=25, deadline=None)
    @given(st.lists(
        st.tuples(
            st.text(alphabet="abcdefgh ", min_size=1, max_size=12).filter(lambda s: s.strip()),
            st.sampled_from(["task", "incomplete_task", "chat"]),
        ),
        max_size=8,
    ))
    def test_two_messages_per_turn(self, fake_llm_class, turns):
        """Property test: N turns give 2N ordered messages; only "task" adds tasks."""
        replies = [
            json.dumps({
                "intent": intent,
                "response": f"reply {i}",
                "task": {"taskName": f"task {i}"},
            })
            for i, (_, intent) in enumerate(turns)
        ]
        session = ChatSession(AssistantGateway(fake_llm_class(responses=replies), clock=lambda: "now"))

        async def _run():
            for text, _ in turns:
                await session.submit(text)

        asyncio.run(_run())

        assert len(session.messages) == 2 * len(turns)
        for i, (text, _) in enumerate(turns):
            assert session.messages[2 * i].text == text
            assert session.messages[2 * i].is_user
            assert session.messages[2 * i + 1].text == f"reply {i}"
            assert not session.messages[2 * i + 1].is_user
        expected_tasks = [f"task {i}" for i, (_, intent) in enumerate(turns) if intent == "task"]
        assert [t.task_name for t in session.tasks] == expected_tasks

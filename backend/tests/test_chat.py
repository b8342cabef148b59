"""
Tests for chat threads and the assistant round trip.
The Anthropic client is replaced by FakeAssistant from conftest.
"""
import asyncio
import threading

import pytest

from conftest import FakeAssistant
from tasklist.assistant import AnthropicAssistant
from tasklist.config import Settings
from tasklist.endpoints import chat
from tasklist.errors import AssistantUnavailable, InvalidInput, NotAuthorized, NotFound


@pytest.fixture
def send(make_ctx):
    """Run send_message for a user, with each phase in its own transaction."""
    def _send(assistant, thread_id, content, user_id="user-a"):
        return asyncio.run(chat.send_message(lambda: make_ctx(user_id), assistant, thread_id, content))
    return _send


@pytest.fixture
def thread_id(make_ctx):
    with make_ctx() as ctx:
        return chat.create_thread(ctx)


class TestThreads:
    """Tests for thread management."""

    def test_create_untitled_and_titled(self, make_ctx):
        with make_ctx() as ctx:
            untitled = chat.create_thread(ctx)
            titled = chat.create_thread(ctx, "Planning")
            assert chat.get_thread(ctx, untitled).title is None
            assert chat.get_thread(ctx, titled).title == "Planning"

    def test_title_too_long(self, make_ctx):
        with make_ctx() as ctx:
            with pytest.raises(InvalidInput):
                chat.create_thread(ctx, "t" * 101)

    def test_rename_archive_and_filter(self, make_ctx, thread_id):
        with make_ctx() as ctx:
            other = chat.create_thread(ctx, "Keep active")
            chat.rename_thread(ctx, thread_id, "Renamed")
            chat.archive_thread(ctx, thread_id)

            archived = chat.list_threads(ctx, "archived")
            active = chat.list_threads(ctx, "active")
        assert [t.id for t in archived] == [thread_id]
        assert archived[0].title == "Renamed"
        assert [t.id for t in active] == [other]

    def test_other_user_cannot_read(self, make_ctx, thread_id):
        with make_ctx("user-b") as ctx:
            with pytest.raises(NotAuthorized):
                chat.list_messages(ctx, thread_id)
            with pytest.raises(NotAuthorized):
                chat.delete_thread(ctx, thread_id)

    def test_delete_removes_messages(self, make_ctx, thread_id, send):
        send(FakeAssistant(), thread_id, "Hello")

        with make_ctx() as ctx:
            chat.delete_thread(ctx, thread_id)
        with make_ctx() as ctx:
            with pytest.raises(NotFound):
                chat.get_thread(ctx, thread_id)
            assert ctx.repos.messages.count_by_thread(thread_id) == 0


class TestSendMessage:
    """Tests for send_message."""

    def test_round_trip(self, make_ctx, thread_id, send):
        assistant = FakeAssistant(reply="Added it to your list.")

        message = send(assistant, thread_id, "Remind me to call Sam")

        assert message.role == "assistant"
        assert message.content == "Added it to your list."
        assert assistant.calls == [[{"role": "user", "content": "Remind me to call Sam"}]]
        with make_ctx() as ctx:
            stored = chat.list_messages(ctx, thread_id)
        assert [m.role for m in stored] == ["user", "assistant"]

    def test_transactions_run_off_the_event_loop(self, make_ctx, thread_id):
        """Both database phases run on worker threads, not the loop thread."""
        opened_on = []

        def open_ctx():
            opened_on.append(threading.get_ident())
            return make_ctx("user-a")

        asyncio.run(chat.send_message(open_ctx, FakeAssistant(), thread_id, "Hello"))

        assert len(opened_on) == 2
        assert threading.get_ident() not in opened_on

    def test_first_message_titles_thread(self, make_ctx, thread_id, send):
        send(FakeAssistant(), thread_id, "x" * 80)

        with make_ctx() as ctx:
            assert chat.get_thread(ctx, thread_id).title == "x" * 50

    def test_existing_title_is_kept(self, make_ctx, send):
        with make_ctx() as ctx:
            titled = chat.create_thread(ctx, "Groceries")
        send(FakeAssistant(), titled, "Milk and eggs")

        with make_ctx() as ctx:
            assert chat.get_thread(ctx, titled).title == "Groceries"

    def test_history_is_sent(self, thread_id, send):
        assistant = FakeAssistant(reply="Ok")
        send(assistant, thread_id, "One")
        send(assistant, thread_id, "Two")

        assert assistant.calls[1] == [
            {"role": "user", "content": "One"},
            {"role": "assistant", "content": "Ok"},
            {"role": "user", "content": "Two"},
        ]

    def test_assistant_failure_keeps_user_message(self, make_ctx, thread_id, send):
        failing = FakeAssistant(error=AssistantUnavailable("API error: overloaded"))

        with pytest.raises(AssistantUnavailable):
            send(failing, thread_id, "Are you there?")

        with make_ctx() as ctx:
            stored = chat.list_messages(ctx, thread_id)
        assert [(m.role, m.content) for m in stored] == [("user", "Are you there?")]

    def test_archived_thread_rejects_messages(self, make_ctx, thread_id, send):
        with make_ctx() as ctx:
            chat.archive_thread(ctx, thread_id)

        assistant = FakeAssistant()
        with pytest.raises(InvalidInput):
            send(assistant, thread_id, "Hello?")
        assert assistant.calls == []

    def test_empty_message_rejected(self, thread_id, send):
        with pytest.raises(InvalidInput):
            send(FakeAssistant(), thread_id, "   ")

    def test_other_users_thread(self, thread_id, send):
        with pytest.raises(NotAuthorized):
            send(FakeAssistant(), thread_id, "Hi", user_id="user-b")


class TestAnthropicAssistant:
    """Tests for the Anthropic client wrapper that need no network."""

    def test_unconfigured_key_is_unavailable(self):
        assistant = AnthropicAssistant(Settings(anthropic_api_key=""))
        assert not assistant.configured
        with pytest.raises(AssistantUnavailable):
            asyncio.run(assistant.reply([{"role": "user", "content": "Hi"}]))

    def test_placeholder_key_is_unconfigured(self):
        assert not AnthropicAssistant(Settings(anthropic_api_key="your-api-key-here")).configured

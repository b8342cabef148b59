"""
Tests for comment and preference handlers.
"""
import pytest

from tasklist.endpoints import comments, preferences, tasks
from tasklist.errors import InvalidInput, NotAuthorized, NotFound
from tasklist.models import PreferencesUpdate


class TestComments:
    """Tests for task comments."""

    def test_create_and_list(self, make_ctx, add_task, clock):
        task_id = add_task()

        with make_ctx() as ctx:
            first = comments.create_comment(ctx, task_id, "First")
        clock.advance(1000)
        with make_ctx() as ctx:
            second = comments.create_comment(ctx, task_id, "  Second  ")
            listed = comments.list_by_task(ctx, task_id)

        assert [c.id for c in listed] == [second, first]
        assert listed[0].content == "Second"

    def test_comment_logs_activity(self, make_ctx, add_task):
        task_id = add_task()

        with make_ctx() as ctx:
            comment_id = comments.create_comment(ctx, task_id, "Noted")
            latest = tasks.list_activity(ctx, task_id)[0]
        assert latest.action == "commented"
        assert latest.metadata.comment_id == comment_id

    def test_cannot_comment_on_other_users_task(self, make_ctx, add_task):
        task_id = add_task("user-b")
        with make_ctx("user-a") as ctx:
            with pytest.raises(NotAuthorized):
                comments.create_comment(ctx, task_id, "Hello")

    def test_comment_on_missing_task(self, make_ctx):
        with make_ctx() as ctx:
            with pytest.raises(NotFound):
                comments.create_comment(ctx, "missing", "Hello")

    def test_content_limits(self, make_ctx, add_task):
        task_id = add_task()
        with make_ctx() as ctx:
            with pytest.raises(InvalidInput):
                comments.create_comment(ctx, task_id, "   ")
            with pytest.raises(InvalidInput):
                comments.create_comment(ctx, task_id, "c" * 2001)

    def test_only_author_edits_and_deletes(self, make_ctx, add_task):
        task_id = add_task()
        with make_ctx() as ctx:
            comment_id = comments.create_comment(ctx, task_id, "Original")

        with make_ctx("user-b") as ctx:
            with pytest.raises(NotAuthorized):
                comments.update_comment(ctx, comment_id, "Edited")
            with pytest.raises(NotAuthorized):
                comments.delete_comment(ctx, comment_id)

        with make_ctx() as ctx:
            comments.update_comment(ctx, comment_id, "Edited")
            assert comments.list_by_task(ctx, task_id)[0].content == "Edited"
            comments.delete_comment(ctx, comment_id)
            assert comments.list_by_task(ctx, task_id) == []


class TestPreferences:
    """Tests for user preferences."""

    def test_defaults_before_first_save(self, make_ctx):
        with make_ctx() as ctx:
            prefs = preferences.get_preferences(ctx)
        assert prefs.id is None
        assert prefs.default_view == "list"
        assert prefs.theme == "system"
        assert prefs.reminder_hours_before == 24
        assert prefs.email_notifications is True

    def test_upsert_keeps_one_row(self, make_ctx):
        with make_ctx() as ctx:
            preferences.update_preferences(ctx, PreferencesUpdate(theme="dark"))
        with make_ctx() as ctx:
            preferences.update_preferences(ctx, PreferencesUpdate(compact_mode=True, default_filter="open"))
            prefs = preferences.get_preferences(ctx)
            assert ctx.repos.preferences.count_by_user("user-a") == 1

        assert prefs.theme == "dark"
        assert prefs.compact_mode is True
        assert prefs.default_filter == "open"
        assert prefs.default_view == "list"

    def test_clear_saved_filter(self, make_ctx):
        with make_ctx() as ctx:
            preferences.update_preferences(ctx, PreferencesUpdate(default_filter="open"))
            preferences.update_preferences(ctx, PreferencesUpdate(default_filter=None))
            assert preferences.get_preferences(ctx).default_filter is None

    def test_reminder_hours_out_of_range(self, make_ctx):
        with make_ctx() as ctx:
            with pytest.raises(InvalidInput):
                preferences.update_preferences(ctx, PreferencesUpdate(reminder_hours_before=169))

    def test_preferences_are_per_user(self, make_ctx):
        with make_ctx("user-a") as ctx:
            preferences.update_preferences(ctx, PreferencesUpdate(theme="dark"))
        with make_ctx("user-b") as ctx:
            assert preferences.get_preferences(ctx).theme == "system"

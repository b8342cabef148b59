from ..context import Context
from ..errors import InvalidInput
from ..helpers import validation
from ..models import PreferencesUpdate, UserPreferences


def get_preferences(ctx: Context) -> UserPreferences:
    """Stored preferences, or the defaults if the user never saved any."""
    user_id = ctx.require_user()
    stored = ctx.repos.preferences.get_by_user(user_id)
    return stored if stored else UserPreferences(user_id=user_id)


def update_preferences(ctx: Context, args: PreferencesUpdate) -> None:
    user_id = ctx.require_user()

    fields = args.model_dump(exclude_unset=True)
    # Enumerations and flags cannot be cleared; saved filter/sort can
    fields = {
        k: v for k, v in fields.items()
        if v is not None or k in ("default_filter", "default_sort")
    }

    if "default_view" in fields and not validation.is_valid_view_type(fields["default_view"]):
        raise InvalidInput("Invalid default view")
    if "theme" in fields and not validation.is_valid_theme(fields["theme"]):
        raise InvalidInput("Invalid theme")
    if "reminder_hours_before" in fields and not validation.is_valid_reminder_hours(fields["reminder_hours_before"]):
        raise InvalidInput("Reminder hours must be between 0 and 168 (1 week)")
    for key in ("default_filter", "default_sort"):
        if fields.get(key) is not None:
            fields[key] = validation.sanitize_input(fields[key]) or None

    ctx.repos.preferences.upsert(user_id, fields, ctx.now())

"""
Business handlers.

Every handler takes a ``Context`` and follows the same steps: authenticate,
rate-limit (selected mutations), authorize by ownership, validate trimmed
input, then execute through the stores and record activity.
"""

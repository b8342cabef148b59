"""Todo list backend: tasks, categories, comments, activity history and an AI assistant."""

__version__ = "0.1.0"

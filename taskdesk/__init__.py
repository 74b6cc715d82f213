"""TaskDesk: reminders and link previews for a personal task/note manager."""

__version__ = "1.0.0"

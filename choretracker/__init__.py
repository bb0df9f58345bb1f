"""Track recurring chores with cron-style schedules, stored in a JSON file."""

__version__ = "0.1.3"
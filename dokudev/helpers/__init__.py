"""Helper utilities: notifications, settings, git, prompts and file parsing."""

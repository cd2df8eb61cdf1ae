"""Constants for the Taskdeck CLI."""

MIN_PASSWORD_LENGTH = 10
TASK_NAME_MAX_LENGTH = 18
DUE_DATE_FORMAT = "%Y-%m-%d"

# Pause between deleting a task and reloading the list, so the backend has applied the delete
DELETE_RELOAD_DELAY_SECONDS = 2.0

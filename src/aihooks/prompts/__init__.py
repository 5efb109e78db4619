"""Task prompt construction."""

from .tasks import (
    TASK_ALIASES,
    TASK_TEMPLATES,
    VALID_TASKS,
    TaskType,
    build_prompt,
    normalize_task,
    validate_task,
)

__all__ = [
    "TASK_ALIASES",
    "TASK_TEMPLATES",
    "TaskType",
    "VALID_TASKS",
    "build_prompt",
    "normalize_task",
    "validate_task",
]

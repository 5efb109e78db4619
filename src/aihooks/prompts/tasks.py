"""Task prompt templates.

Each task wraps the caller's text in a one-line instruction. Templates are
plain ``str.format`` strings keyed by task name.
"""

from typing import Literal, get_args

from ..providers.errors import AIHookError, ErrorKind

TaskType = Literal[
    "summarize",
    "translate",
    "explain",
    "rewrite",
    "sentiment",
    "code_review",
]

VALID_TASKS: tuple[str, ...] = get_args(TaskType)

DEFAULT_TARGET_LANGUAGE = "English"

# Alternate spellings accepted for a task name
TASK_ALIASES: dict[str, str] = {"codeReview": "code_review"}

TASK_TEMPLATES: dict[str, str] = {
    "summarize": "Summarize the following text:\n{text}",
    "translate": "Translate this text into {language}:\n{text}",
    "explain": "Explain this clearly:\n{text}",
    "rewrite": "Rewrite this text with better clarity:\n{text}",
    "sentiment": "Analyze the sentiment of this text:\n{text}",
    "code_review": "Review this code and suggest improvements:\n{text}",
}


def normalize_task(task: str | None) -> str | None:
    """Map an alternate task spelling to its canonical name."""
    if task is None:
        return None
    return TASK_ALIASES.get(task, task)


def validate_task(task: str | None) -> None:
    """Check a task name against the supported tasks and their aliases.

    Raises:
        AIHookError: INVALID_TASK for unknown task names
    """
    if task is not None and normalize_task(task) not in TASK_TEMPLATES:
        raise AIHookError(
            ErrorKind.INVALID_TASK,
            f"Invalid task type: {task}. Valid tasks are: {', '.join(VALID_TASKS)}",
            None,
            "Please use one of the supported task types.",
        )


def build_prompt(task: str | None, text: str, target_language: str | None = None) -> str:
    """Build the prompt for a task.

    Args:
        task: Task name, or None to send the text unchanged
        text: Caller's input text
        target_language: Target language for translate (default English)

    Returns:
        Prompt string
    """
    if task is None:
        return text

    validate_task(task)
    return TASK_TEMPLATES[TASK_ALIASES.get(task, task)].format(
        text=text,
        language=target_language or DEFAULT_TARGET_LANGUAGE,
    )

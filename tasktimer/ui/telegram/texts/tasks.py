from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional, Sequence

from aiogram.utils.text_decorations import html_decoration as hd

from tasktimer.domain.tasks.analytics import (
    format_compact_duration,
    format_duration,
    productivity_tier,
)
from tasktimer.domain.tasks.models import Principal, Task, TaskStatistics

MESSAGE_LIMIT = 4096
# 2 buttons per task keeps the inline keyboard under Telegram's 100-button cap
HOME_LIMIT = 30
# escaping grows text at most 5x, so a rendered task line stays far below MESSAGE_LIMIT
TEXT_DISPLAY_LIMIT = 300

SIGN_IN_PROMPT = "Please log in first: send /start."
SUMMARY_SIGN_IN_PROMPT = "Please log in to view summary. Send /start."
SIGNED_OUT = "Logged out."
ASK_TASK_TEXT = "Write the task description (one message)."
CANCELLED = "Cancelled."
EMPTY_HOME = "No tasks yet. Add one!"
EMPTY_SUMMARY = "No tasks found for your account. Start adding tasks with /add!"
ADD_FAILED = "Task was not added."
ACTION_FAILED = "That did not work, the list is unchanged."

TIME_FORMAT = "%d.%m.%Y %H:%M:%S"


def format_instant(dt: Optional[datetime], tz: tzinfo) -> Optional[str]:
    if dt is None:
        return None
    return dt.astimezone(tz).strftime(TIME_FORMAT)


def render_greeting(principal: Principal) -> str:
    return f"Hello, {hd.quote(principal.greeting_name)}"


def short_label(text: str, limit: int = 24) -> str:
    return text if len(text) <= limit else text[: limit - 1] + "…"


def render_home(tasks: Sequence[Task], tz: tzinfo, limit: int = HOME_LIMIT) -> str:
    """The ``limit`` most recent tasks; the rest are only listed by /summary."""
    if not tasks:
        return EMPTY_HOME

    lines = [hd.bold("Tasks")]
    for i, task in enumerate(tasks[:limit], start=1):
        text = hd.quote(short_label(task.text, TEXT_DISPLAY_LIMIT))
        if task.completed:
            text = hd.strikethrough(text)
        lines.append(f"{i}. {text}")
        lines.append(f"   Start: {format_instant(task.start_time, tz)}")
        lines.append(f"   End: {format_instant(task.end_time, tz) or '-'}")
    hidden = len(tasks) - limit
    if hidden > 0:
        lines.append("")
        lines.append(f"…and {hidden} more. See /summary for all tasks.")
    return "\n".join(lines)


def render_statistics(stats: TaskStatistics) -> str:
    tier = productivity_tier(stats.completion_rate)
    return "\n".join(
        [
            hd.bold("Statistics"),
            f"Total: {stats.total} · Completed: {stats.completed} · Ongoing: {stats.ongoing}",
            f"Completion rate: {stats.completion_rate:.1f}% ({tier.value})",
            f"Total time: {format_compact_duration(stats.total_duration)}",
            f"Average time: {format_compact_duration(stats.average_duration)}",
        ]
    )


def render_summary(tasks: Sequence[Task], stats: TaskStatistics, tz: tzinfo) -> str:
    if not tasks:
        return EMPTY_SUMMARY

    lines = [hd.bold("📋 To-Do Summary"), ""]
    for i, task in enumerate(tasks, start=1):
        status = "Completed" if task.completed else "Ongoing"
        end = format_instant(task.end_time, tz) or hd.italic("Not ended yet")
        lines.append(f"{i}. {hd.quote(short_label(task.text, TEXT_DISPLAY_LIMIT))}")
        lines.append(f"   Start: {format_instant(task.start_time, tz)}")
        lines.append(f"   End: {end}")
        lines.append(f"   Duration: {format_duration(task.start_time, task.end_time)} · {status}")
    lines.append("")
    lines.append(render_statistics(stats))
    return "\n".join(lines)


def split_message(text: str, limit: int = MESSAGE_LIMIT) -> list[str]:
    """Split on line boundaries so each chunk fits in one Telegram message."""
    chunks: list[str] = []
    current: Optional[str] = None
    for line in text.split("\n"):
        while len(line) > limit:
            if current:
                chunks.append(current)
            current = None
            cut = _cut_point(line, limit)
            chunks.append(line[:cut])
            line = line[cut:]
        if current is None:
            current = line
        elif len(current) + 1 + len(line) > limit:
            chunks.append(current)
            current = line
        else:
            current = f"{current}\n{line}"
    if current is not None:
        chunks.append(current)
    return chunks


def _cut_point(line: str, limit: int) -> int:
    """Largest cut <= limit that does not fall inside an HTML tag or entity."""
    cut = limit
    lt = line.rfind("<", 0, cut)
    if lt > line.rfind(">", 0, cut):
        cut = lt
    amp = line.rfind("&", 0, cut)
    if amp != -1 and line.find(";", amp, cut) == -1:
        cut = amp
    return cut if cut > 0 else limit

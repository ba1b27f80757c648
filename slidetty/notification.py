"""Ephemeral status notification with a one-second tick countdown."""

from __future__ import annotations

from dataclasses import dataclass, replace

NOTIFICATION_TICKS = 3
TICK_SECONDS = 1.0


@dataclass(frozen=True)
class Notification:
    message: str
    remaining_ticks: int = NOTIFICATION_TICKS
    # Ticks scheduled for an older notification carry a stale generation.
    generation: int = 1


def open_notification(message: str, previous: Notification | None = None) -> Notification:
    """Replace *previous* (if any) with a fresh countdown."""
    generation = previous.generation + 1 if previous else 1
    return Notification(message=message, remaining_ticks=NOTIFICATION_TICKS, generation=generation)


def tick(notification: Notification | None, generation: int) -> tuple[Notification | None, bool]:
    """Apply one elapsed second.

    Returns ``(notification, reschedule)``.  The notification becomes ``None``
    once the countdown reaches zero; ticks from other generations are ignored.
    """
    if notification is None or notification.generation != generation:
        return notification, False
    remaining = notification.remaining_ticks - 1
    if remaining <= 0:
        return None, False
    return replace(notification, remaining_ticks=remaining), True


def truncate_message(text: str, width: int, margin: int = 4) -> str:
    """Fit *text* into ``width - margin`` columns, ending in ``...`` on overflow."""
    limit = width - margin
    if limit <= 0 or len(text) <= limit:
        return text
    if limit <= 3:
        return text[:limit]
    return text[: limit - 3] + "..."

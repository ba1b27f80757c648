"""Progressive reveal — ``:reveal:`` directive analysis and content filtering.

A slide may contain a standalone ``:reveal:`` line followed by a markdown
list.  Each list item (plus its indented continuation lines) becomes one
*reveal unit*; the viewer shows units one at a time and replaces the hidden
remainder with a single ellipsis line such as ``- ...`` or ``3. ...``.
"""

from __future__ import annotations

import logging

from .models import BULLET_RE, ORDINAL_RE, REVEAL_MARKER, RevealConfig

logger = logging.getLogger(__name__)


def _split_lines(content: str) -> tuple[list[str], str]:
    """Split *content* into lines, keeping a trailing newline aside.

    A final ``\\n`` terminates the last line rather than opening an empty one,
    so ``"- a\\n- b\\n"`` has two lines.
    """
    if content.endswith("\n"):
        return content[:-1].split("\n"), "\n"
    return content.split("\n"), ""


def is_list_item(line: str) -> bool:
    return bool(BULLET_RE.match(line) or ORDINAL_RE.match(line))


def _is_indented(line: str) -> bool:
    return line.startswith((" ", "\t"))


def analyze_reveal(content: str) -> RevealConfig:
    """Find reveal markers in *content* and group the list below each one.

    Units from every marker in the slide are flattened into a single ordered
    progression.  A marker not followed by a list item still counts as a
    directive line (and is hidden) but contributes no units.
    """
    lines, _ = _split_lines(content)
    config = RevealConfig()

    i = 0
    while i < len(lines):
        if lines[i].strip() != REVEAL_MARKER:
            i += 1
            continue
        config.directive_lines.append(i)
        i += 1

        while i < len(lines):
            if not lines[i].strip():
                i += 1
                continue
            if not is_list_item(lines[i]):
                break

            unit = [i]
            i += 1
            while i < len(lines):
                line = lines[i]
                if not line.strip():
                    # A blank line closes the unit and belongs to it.
                    unit.append(i)
                    i += 1
                    break
                if is_list_item(line) or not _is_indented(line):
                    break
                unit.append(i)
                i += 1
            config.items.append(unit)

    if config.directive_lines:
        logger.debug(
            "Reveal analysis: markers=%s, units=%s",
            config.directive_lines, config.items,
        )
    return config


def clamp_reveal(cursor: int, total: int) -> int:
    """Clamp *cursor* to ``[1, total]``, or 0 when there is nothing to reveal."""
    if total <= 0:
        return 0
    return max(1, min(cursor, total))


def step_reveal(cursor: int, total: int, delta: int) -> tuple[int, bool]:
    """Move *cursor* by *delta* within ``[min_visible, total]``.

    Returns ``(new_cursor, changed)``.  Requests past either bound clamp
    silently and report no change.
    """
    if total <= 0:
        return 0, False
    current = clamp_reveal(cursor, total)
    target = clamp_reveal(current + delta, total)
    return target, target != current


def ellipsis_line(line: str) -> str:
    """Build the placeholder shown in place of the next hidden unit."""
    m = BULLET_RE.match(line) or ORDINAL_RE.match(line)
    if m:
        return m.group(1) + m.group(2) + "..."
    indent = line[: len(line) - len(line.lstrip(" \t"))]
    return indent + "..."


def apply_reveal(content: str, config: RevealConfig, cursor: int) -> str:
    """Return the visible part of *content* with *cursor* units revealed.

    Directive lines are always removed.  When units remain hidden an ellipsis
    line derived from the first line of the next hidden unit is appended.
    """
    total = config.total_items
    if total == 0 and not config.directive_lines:
        return content

    lines, trailing = _split_lines(content)
    hidden = set(config.directive_lines)

    visible = max(cursor, 0)
    if total > 0 and visible == 0:
        visible = 1
    visible = min(visible, total)

    for unit in config.items[visible:]:
        hidden.update(unit)

    filtered = [line for i, line in enumerate(lines) if i not in hidden]

    if visible < total:
        next_unit = config.items[visible]
        if next_unit and next_unit[0] < len(lines):
            filtered.append(ellipsis_line(lines[next_unit[0]]))
        else:
            filtered.append("...")

    return "\n".join(filtered) + trailing

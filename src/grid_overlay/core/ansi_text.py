"""ANSI text utilities - measuring, fitting and splicing strings with escape codes."""

from __future__ import annotations

import re

from grid_overlay.core.constants import CSI, RESET

# Pattern to match ANSI escape sequences (including ~ terminator for F-keys, etc.)
_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;<?]*[A-Za-z~]')


def visible_len(s: str) -> int:
    """Get visible length of string (excluding ANSI escape codes)."""
    return len(_ANSI_ESCAPE.sub('', s))


def styled(text: str, *params: str) -> str:
    """Wrap text in an SGR sequence built from params, followed by a reset."""
    if not params:
        return text
    return f"{CSI}{';'.join(params)}m{text}{RESET}"


def _split_visible(s: str, width: int) -> tuple[str, str]:
    """Split s after `width` visible characters, keeping escapes on the left."""
    head: list[str] = []
    vis = 0
    i = 0
    while i < len(s) and vis < width:
        match = _ANSI_ESCAPE.match(s, i)
        if match:
            head.append(match.group())
            i = match.end()
            continue
        head.append(s[i])
        vis += 1
        i += 1
    return ''.join(head), s[i:]


def truncate(s: str, max_width: int, reset: bool = True) -> str:
    """
    Truncate an ANSI-escaped string to max visible width.

    Args:
        s: String to truncate
        max_width: Maximum visible width
        reset: If True, append reset sequence to prevent color bleed
    """
    if max_width <= 0:
        return ""
    head, rest = _split_visible(s, max_width)
    if reset and rest:
        head += RESET
    return head


def truncate_and_pad(s: str, width: int) -> str:
    """Truncate if too long, pad if too short. Always returns exactly width visible chars."""
    vlen = visible_len(s)
    if vlen > width:
        return truncate(s, width)
    if vlen < width:
        return s + ' ' * (width - vlen)
    return s


def splice(base: str, overlay: str, column: int) -> str:
    """
    Paint overlay on top of base starting at a visible column.

    Base content under the overlay is dropped; escapes that precede the
    splice point are kept so colors to the left render unchanged.
    """
    if column < 0:
        _, overlay = _split_visible(overlay, -column)
        column = 0
    padded = truncate_and_pad(base, max(column, visible_len(base)))
    left, rest = _split_visible(padded, column)
    _, right = _split_visible(rest, visible_len(overlay))
    return f"{left}{RESET}{overlay}{RESET}{right}"

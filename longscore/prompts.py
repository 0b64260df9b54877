from __future__ import annotations

INTRO_HINT = "introduction, opening"
OUTRO_HINT = "conclusion, ending, outro"
BRIDGE_HINT = "bridge, development, variation"
BUILD_HINT = "building, developing"


def segment_hint(index: int, total: int) -> str | None:
    """Positional hint for one segment; the first matching rule wins."""

    if index == 0:
        return INTRO_HINT
    if index == total - 1:
        return OUTRO_HINT
    if index == total // 2:
        return BRIDGE_HINT
    if index < total // 3:
        return BUILD_HINT
    return None


def segment_prompt(base_prompt: str, index: int, total: int) -> str:
    hint = segment_hint(index, total)
    if hint is None:
        return base_prompt
    return f"{base_prompt} ({hint})"

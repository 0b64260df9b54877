from __future__ import annotations

import pytest

from longscore.prompts import (
    BRIDGE_HINT,
    BUILD_HINT,
    INTRO_HINT,
    OUTRO_HINT,
    segment_hint,
    segment_prompt,
)


def test_single_segment_is_an_introduction() -> None:
    # index 0 is also the last index; the opening rule comes first.
    assert segment_hint(0, 1) == INTRO_HINT


def test_two_segments_open_and_close() -> None:
    assert [segment_hint(i, 2) for i in range(2)] == [INTRO_HINT, OUTRO_HINT]


def test_three_segments_use_bridge_in_the_middle() -> None:
    assert [segment_hint(i, 3) for i in range(3)] == [INTRO_HINT, BRIDGE_HINT, OUTRO_HINT]


def test_four_segments_leave_one_plain() -> None:
    assert [segment_hint(i, 4) for i in range(4)] == [INTRO_HINT, None, BRIDGE_HINT, OUTRO_HINT]


def test_ten_segments_layout() -> None:
    hints = [segment_hint(i, 10) for i in range(10)]
    assert hints == [
        INTRO_HINT,
        BUILD_HINT,
        BUILD_HINT,
        None,
        None,
        BRIDGE_HINT,
        None,
        None,
        None,
        OUTRO_HINT,
    ]


def test_segment_prompt_appends_hint_in_parentheses() -> None:
    assert segment_prompt("lofi beat", 0, 3) == "lofi beat (introduction, opening)"
    assert segment_prompt("lofi beat", 2, 3) == "lofi beat (conclusion, ending, outro)"


@pytest.mark.parametrize("index", [3, 4, 6])
def test_segment_prompt_without_hint_is_unchanged(index: int) -> None:
    assert segment_prompt("lofi beat", index, 10) == "lofi beat"

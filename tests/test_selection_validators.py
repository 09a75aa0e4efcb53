from __future__ import annotations

import pytest

from reversi.cancellation import Canceller
from reversi.models import Disk, PlayerMode
from reversi.turn_processing.validators import (
    DEFAULT_SELECTION_PIPELINE,
    ManualSideValidator,
    SelectionContext,
    SelectionPipeline,
    SelectionRejected,
)


def test_default_pipeline_accepts_manual_side_in_progress(make_executor) -> None:
    executor = make_executor()

    DEFAULT_SELECTION_PIPELINE.validate(ctx=SelectionContext(x=3, y=2), executor=executor)


def test_rejects_when_game_is_over(make_executor) -> None:
    executor = make_executor(turn=None)

    with pytest.raises(SelectionRejected) as e:
        DEFAULT_SELECTION_PIPELINE.validate(ctx=SelectionContext(x=0, y=0), executor=executor)

    assert str(e.value) == "Game is over"


def test_rejects_while_animating(make_executor) -> None:
    executor = make_executor()
    executor.animation_canceller = Canceller()

    with pytest.raises(SelectionRejected) as e:
        DEFAULT_SELECTION_PIPELINE.validate(ctx=SelectionContext(x=3, y=2), executor=executor)

    assert "animating" in str(e.value)


def test_rejects_automated_side(make_executor) -> None:
    executor = make_executor()
    executor.players.set(Disk.dark, PlayerMode.automated)

    with pytest.raises(SelectionRejected):
        ManualSideValidator().validate(ctx=SelectionContext(x=3, y=2), executor=executor)


def test_empty_pipeline_accepts_everything(make_executor) -> None:
    executor = make_executor(turn=None)

    SelectionPipeline(validators=()).validate(ctx=SelectionContext(x=0, y=0), executor=executor)

import pytest

from hexsort.components.unit_stack import Unit, UnitStack
from hexsort.systems.merge import MergeResult, apply_merge, evaluate_merge


def units(*colors):
    return [Unit(c) for c in colors]


def test_below_threshold_pops_nothing():
    result = evaluate_merge(units(*['red'] * 9))
    assert result.run_length == 9
    assert not result.pops
    assert result.points == 0


def test_pop_takes_the_whole_run_not_just_threshold():
    stack = units('blue', *['red'] * 12)
    result = evaluate_merge(stack)
    assert result.run_length == 12
    assert len(result.popped) == 12
    assert result.points == 120


def test_run_is_contiguous_from_the_top():
    # Ten reds in total, but interrupted by a blue
    result = evaluate_merge(units(*['red'] * 5, 'blue', *['red'] * 5))
    assert result.run_length == 5
    assert not result.pops


def test_buried_run_is_not_popped():
    result = evaluate_merge(units(*['red'] * 10, 'blue'))
    assert result.run_length == 1
    assert not result.pops


def test_custom_threshold_and_points():
    result = evaluate_merge(units('red', 'red', 'red'), threshold=3, points_per_unit=5)
    assert result.points == 15


def test_apply_merge_removes_exactly_the_run():
    stack = UnitStack(units('blue', 'green', *['red'] * 10))
    bottom = list(stack.units[:2])
    result = evaluate_merge(stack.units)
    popped = apply_merge(stack, result)
    assert len(popped) == 10
    assert stack.units == bottom


def test_apply_merge_refuses_changed_stack():
    stack = UnitStack(units(*['red'] * 10))
    result = evaluate_merge(stack.units)
    stack.units = units(*['red'] * 10)
    with pytest.raises(RuntimeError):
        apply_merge(stack, result)


def test_apply_merge_without_pop_is_noop():
    stack = UnitStack(units('red'))
    assert apply_merge(stack, MergeResult(run_length=1)) == []
    assert len(stack.units) == 1

import sys

import numpy as np
import pytest

from swarmtune.foundation.core.solution import Result, Solution
from swarmtune.foundation.core.tools import bound, denormalize, format_number, round_away, sample_bounded
from swarmtune.foundation.random import Random


@pytest.mark.parametrize("value,expected", [(2.5, 3), (-2.5, -3), (2.4, 2), (0.5, 1), (0.0, 0)])
def test_round_away(value, expected):
    assert round_away(value) == expected


def test_bound_clamps_in_place():
    x = np.array([-5.0, 0.5, 5.0])
    out = bound(x, np.zeros(3), np.ones(3))
    assert out is x
    np.testing.assert_array_equal(x, [0.0, 0.5, 1.0])


def test_denormalize_zeroes_subnormals():
    tiny = sys.float_info.min / 4
    v = np.array([tiny, -tiny, 1e-300, 1.0])
    denormalize(v)
    np.testing.assert_array_equal(v, [0.0, 0.0, 1e-300, 1.0])


def test_sample_bounded_stays_inside():
    rng = Random(0)
    x = np.array([0.9, 0.1])
    d = np.array([1.0, 1.0])
    for _ in range(100):
        y = sample_bounded(x, d, np.zeros(2), np.ones(2), rng)
        assert np.all(y >= 0.0) and np.all(y <= 1.0)


def test_format_number():
    assert format_number(0) == "0"
    assert format_number(112.5) == "112.5"
    assert format_number(3.0) == "3"
    assert format_number(1e-5) == "1.00e-05"
    assert format_number(12345.6) == "12346"


def test_result_owns_a_read_only_copy():
    buf = np.array([1.0, 2.0])
    result = Result(buf, 3.0, 10)
    buf[0] = 99.0
    assert result.parameters[0] == 1.0
    assert not result.parameters.flags.writeable
    assert result.same_as(Result([1.0, 2.0], 3.0, 10))
    assert not result.same_as(Result([1.0, 2.0], 3.0, 11))


def test_solution_copies_parameters():
    buf = np.array([0.5])
    sol = Solution(buf, 1)
    buf[0] = 0.0
    assert sol.parameters[0] == 0.5
    assert isinstance(sol.fitness, float)

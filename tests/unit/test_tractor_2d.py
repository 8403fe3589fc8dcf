import math

import pytest

from sim.ab_line import ABLine
from sim.tractor_2d import TractorParams, Tractor2D
from shared.types import Point2D


def test_straight_run_north():
    tr = Tractor2D()
    tr.reset(0.0, 0.0, 0.0, speed=36.0)  # 10 m/s
    for _ in range(10):
        s = tr.step(0.1, 0.0)
    assert s.northing == pytest.approx(10.0)
    assert s.easting == pytest.approx(0.0)
    assert s.speed == 36.0


def test_positive_steer_turns_right_with_rate_limit():
    tr = Tractor2D(TractorParams(steer_rate=1.0, max_steer=0.5))
    tr.reset(speed=10.0)
    tr.step(0.1, 2.0)
    assert tr.steer == pytest.approx(0.1)
    for _ in range(20):
        tr.step(0.1, 2.0)
    assert tr.steer == pytest.approx(0.5)
    assert 0.0 < tr.heading < math.pi
    assert tr.easting > 0.0


def test_heading_noise_is_seeded():
    a = Tractor2D(TractorParams(heading_noise=0.05), seed=3)
    b = Tractor2D(TractorParams(heading_noise=0.05), seed=3)
    assert [a.sample().heading for _ in range(5)] == [b.sample().heading for _ in range(5)]


def test_ab_line_errors_both_directions():
    line = ABLine(Point2D(0.0, 0.0), Point2D(0.0, 100.0))
    assert line.heading == pytest.approx(0.0)
    xte, he = line.errors(-2.0, 10.0, 0.0)
    assert (xte, he) == pytest.approx((2.0, 0.0))
    xte, _ = line.errors(2.0, 10.0, 0.0)
    assert xte == pytest.approx(-2.0)
    # driving back down the line: west is now on the right
    xte, he = line.errors(-2.0, 10.0, math.pi)
    assert xte == pytest.approx(-2.0)
    assert he == pytest.approx(0.0, abs=1e-12)
    # pointing 0.2 rad left of the line asks for right steer
    _, he = line.errors(0.0, 0.0, 2 * math.pi - 0.2)
    assert he == pytest.approx(0.2)

"""Tests for collision detection and scoring."""

from flappy_sim.collision import horizontal_overlap, check_collision, first_collision
from flappy_sim.entities import Agent, Obstacle
from flappy_sim.scoring import evaluate


def centred(x, id=0, passed=False):
    # Gap spans y in [145, 295]
    return Obstacle(position_x=x, gap_top_height=145.0, gap_bottom_height=145.0, id=id, passed=passed)


class TestHorizontalOverlap:
    def test_touching_left_edge_is_not_overlap(self, config):
        # agent spans [100, 124]
        assert not horizontal_overlap(Agent(100.0, 200.0), centred(124.0), config)

    def test_entering_from_right(self, config):
        assert horizontal_overlap(Agent(100.0, 200.0), centred(123.9), config)

    def test_touching_right_edge_is_not_overlap(self, config):
        # obstacle spans [40, 100]
        assert not horizontal_overlap(Agent(100.0, 200.0), centred(40.0), config)

    def test_leaving_to_the_left(self, config):
        assert horizontal_overlap(Agent(100.0, 200.0), centred(40.1), config)


class TestCheckCollision:
    def test_inside_gap(self, config):
        assert not check_collision(Agent(100.0, 200.0), centred(90.0), config)

    def test_top_edge_flush_is_safe(self, config):
        assert not check_collision(Agent(100.0, 145.0), centred(90.0), config)

    def test_hits_top_region(self, config):
        assert check_collision(Agent(100.0, 144.9), centred(90.0), config)

    def test_bottom_edge_flush_is_safe(self, config):
        # bottom = 271 + 24 = 295 = 440 - 145
        assert not check_collision(Agent(100.0, 271.0), centred(90.0), config)

    def test_hits_bottom_region(self, config):
        assert check_collision(Agent(100.0, 271.1), centred(90.0), config)

    def test_no_collision_without_overlap(self, config):
        assert not check_collision(Agent(100.0, 0.0), centred(300.0), config)
        assert not check_collision(Agent(100.0, 400.0), centred(0.0), config)

    def test_first_collision_in_field_order(self, config):
        obstacles = (centred(-30.0, id=1), centred(90.0, id=2), centred(110.0, id=3))
        hit = first_collision(Agent(100.0, 10.0), obstacles, config)
        assert hit.id == 2

    def test_first_collision_none(self, config):
        assert first_collision(Agent(100.0, 200.0), (centred(90.0),), config) is None


class TestScoring:
    def test_not_scored_while_overlapping(self, config):
        obstacle, delta = evaluate(Agent(100.0, 200.0), centred(41.0), config)
        assert delta == 0
        assert not obstacle.passed

    def test_not_scored_when_edges_align(self, config):
        # right edge 100 == agent left 100
        _, delta = evaluate(Agent(100.0, 200.0), centred(40.0), config)
        assert delta == 0

    def test_scored_once_cleared(self, config):
        obstacle, delta = evaluate(Agent(100.0, 200.0), centred(38.0), config)
        assert delta == 1
        assert obstacle.passed
        assert obstacle.position_x == 38.0

    def test_never_scores_twice(self, config):
        obstacle, _ = evaluate(Agent(100.0, 200.0), centred(38.0), config)
        again, delta = evaluate(Agent(100.0, 200.0), obstacle, config)
        assert delta == 0
        assert again is obstacle

    def test_vertical_position_irrelevant(self, config):
        _, delta = evaluate(Agent(100.0, 0.0), centred(10.0), config)
        assert delta == 1

"""Tests for ball integration, collisions and the engine state object."""

import logging
import math

import numpy as np
import pytest

import plinko as P
from plinko.engine import Ball, PlinkoEngine, WorldConfig, drop_balls
from plinko.layout import Layout


class TestBallIntegration:

    def test_free_fall_from_rest(self):
        empty = Layout(width=400, height=400, pegs=[], sinks=[])
        ball = Ball(x=20.0, y=30.0)
        ball.update(empty, WorldConfig())
        assert (ball.x, ball.y) == pytest.approx((20.0, 30.0 + P.GRAVITY))
        assert (ball.vx, ball.vy) == pytest.approx((0.0, P.GRAVITY))

    def test_free_fall_keeps_horizontal_velocity(self):
        empty = Layout(width=400, height=400, pegs=[], sinks=[])
        ball = Ball(x=20.0, y=30.0, vx=1.5)
        ball.update(empty, WorldConfig())
        assert ball.x == pytest.approx(21.5)
        assert ball.vx == 1.5

    def test_peg_collision_reflects_along_contact_angle(self, single_peg):
        # After gravity and the move: centre (105, 97), velocity (2, 0)
        ball = Ball(x=103.0, y=97.0, vx=2.0, vy=-P.GRAVITY)
        ball.update(single_peg, WorldConfig())

        angle = math.atan2(97.0 - 100.0, 105.0 - 100.0)
        speed = 2.0
        assert ball.vx == pytest.approx(math.cos(angle) * speed * P.HORIZONTAL_FRICTION)
        assert ball.vy == pytest.approx(math.sin(angle) * speed * P.VERTICAL_FRICTION)

    def test_peg_collision_pushes_ball_out(self, single_peg):
        ball = Ball(x=103.0, y=97.0, vx=2.0, vy=-P.GRAVITY)
        ball.update(single_peg, WorldConfig())

        dist = math.hypot(ball.x - 100.0, ball.y - 100.0)
        assert dist == pytest.approx(P.BALL_RADIUS + P.PEG_RADIUS)

    def test_axis_friction_is_independent(self, single_peg):
        config = WorldConfig(horizontal_friction=1.0, vertical_friction=0.0)
        ball = Ball(x=103.0, y=97.0, vx=2.0, vy=-P.GRAVITY)
        ball.update(single_peg, config)
        assert ball.vy == 0.0
        assert ball.vx == pytest.approx(math.cos(math.atan2(-3.0, 5.0)) * 2.0)

    def test_no_collision_when_just_touching(self, single_peg):
        ball = Ball(x=100.0 + P.BALL_RADIUS + P.PEG_RADIUS, y=100.0)
        ball.update(single_peg, WorldConfig(gravity=0.0))
        assert (ball.vx, ball.vy) == (0.0, 0.0)
        assert ball.x == 100.0 + P.BALL_RADIUS + P.PEG_RADIUS

    def test_concentric_ball_is_pushed_along_x(self, single_peg):
        ball = Ball(x=100.0, y=100.0)
        ball.update(single_peg, WorldConfig(gravity=0.0))
        assert ball.x == pytest.approx(100.0 + P.BALL_RADIUS + P.PEG_RADIUS)
        assert ball.y == pytest.approx(100.0)
        assert not math.isnan(ball.vx) and not math.isnan(ball.vy)


class TestSinkCapture:

    def test_capture_zeroes_velocity(self, single_sink):
        ball = Ball(x=105.0, y=190.0, vx=1.0, vy=5.0)
        ball.update(single_sink, WorldConfig())
        assert (ball.vx, ball.vy) == (0.0, 0.0)
        assert ball.resting
        assert ball.sink_index == 0

    def test_captured_ball_stays_put(self, single_sink):
        ball = Ball(x=105.0, y=190.0, vy=5.0)
        ball.update(single_sink, WorldConfig())
        resting_at = (ball.x, ball.y)
        for _ in range(20):
            ball.update(single_sink, WorldConfig())
        assert (ball.x, ball.y) == resting_at
        assert (ball.vx, ball.vy) == (0.0, 0.0)

    def test_ball_beside_sink_keeps_falling(self, single_sink):
        ball = Ball(x=85.0, y=190.0, vy=5.0)
        ball.update(single_sink, WorldConfig())
        assert not ball.resting
        assert ball.vy == pytest.approx(5.0 + P.GRAVITY)

    def test_ball_above_sink_keeps_falling(self, single_sink):
        ball = Ball(x=105.0, y=100.0)
        ball.update(single_sink, WorldConfig())
        assert not ball.resting
        assert ball.sink_index is None


class TestEngine:

    def test_starts_with_default_layout(self, engine):
        assert len(engine.pegs) == 133
        assert len(engine.sinks) == P.NUM_SINKS
        assert engine.balls == []

    def test_add_ball_spawns_near_top_centre(self, engine):
        for _ in range(50):
            ball = engine.add_ball()
            assert abs(ball.x - engine.width / 2) <= P.BALL_SPAWN_JITTER
            assert ball.y == P.BALL_SPAWN_Y
            assert (ball.vx, ball.vy) == (0.0, 0.0)
        assert len(engine.balls) == 50

    def test_seeded_spawns_repeat(self):
        a = PlinkoEngine(500, 500, WorldConfig(seed=3))
        b = PlinkoEngine(500, 500, WorldConfig(seed=3))
        xs_a = [a.add_ball().x for _ in range(5)]
        xs_b = [b.add_ball().x for _ in range(5)]
        assert xs_a == xs_b

    def test_resize_replaces_layout(self, engine):
        old_pegs, old_sinks = engine.pegs, engine.sinks
        engine.resize(500, 500)
        assert engine.pegs is not old_pegs
        assert engine.sinks is not old_sinks
        assert len(engine.pegs) == len(old_pegs)
        assert len(engine.sinks) == len(old_sinks)
        assert (engine.width, engine.height) == (500, 500)

    def test_resize_twice_does_not_accumulate(self, engine):
        engine.resize(500, 500)
        engine.resize(760, 760)
        assert len(engine.pegs) == 133
        assert len(engine.sinks) == P.NUM_SINKS

    def test_resize_keeps_balls(self, engine):
        engine.add_ball()
        engine.resize(600, 600)
        assert len(engine.balls) == 1

    def test_hook_sees_ball_before_update(self, engine):
        ball = engine.add_ball()
        seen = []
        engine.step(before_update=lambda b: seen.append((b.x, b.y)))
        assert seen == [(ball.x, P.BALL_SPAWN_Y)]
        assert ball.y == pytest.approx(P.BALL_SPAWN_Y + P.GRAVITY)
        assert engine.frame == 1

    def test_get_state_shape(self, engine):
        assert engine.get_state().shape == (0, 4)
        engine.add_ball()
        engine.add_ball()
        assert engine.get_state().shape == (2, 4)

    def test_single_ball_settles(self, engine):
        engine.add_ball()
        steps = engine.run_until_settled()
        assert engine.all_settled()
        assert steps < P.MAX_STEPS

    def test_step_cap_warns_when_balls_still_move(self, engine, caplog):
        engine.add_ball()
        with caplog.at_level(logging.WARNING, logger='plinko.engine'):
            steps = engine.run_until_settled(max_steps=3)
        assert steps == 3
        assert engine.frame == 3
        assert not engine.all_settled()
        assert 'Stopped after 3 steps with 1 balls still moving' in caplog.text


class TestDropBalls:

    def test_every_ball_is_accounted_for(self):
        run = drop_balls(n_balls=10, seed=7)
        assert len(run['sink_indices']) == 10
        assert run['final_states'].shape == (10, 4)
        landed = [i for i in run['sink_indices'] if i is not None]
        assert all(0 <= i < run['n_sinks'] for i in landed)

    def test_settled_balls_are_still(self):
        run = drop_balls(n_balls=5, seed=11)
        for ball, idx in zip(run['engine'].balls, run['sink_indices']):
            if idx is not None:
                assert (ball.vx, ball.vy) == (0.0, 0.0)

    def test_rejects_negative_count(self):
        with pytest.raises(ValueError):
            drop_balls(n_balls=-1)

    def test_zero_balls(self):
        run = drop_balls(n_balls=0)
        assert run['sink_indices'] == []
        assert np.asarray(run['steps']).size == 0

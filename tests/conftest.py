"""Pytest configuration and shared fixtures."""

import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import plinko as P
from plinko.engine import PlinkoEngine, WorldConfig
from plinko.layout import Layout, Peg, Sink


@pytest.fixture
def engine():
    """Default-sized board with a fixed spawn seed."""
    return PlinkoEngine(P.DEFAULT_CANVAS_SIZE, P.DEFAULT_CANVAS_SIZE, WorldConfig(seed=P.SEED))


@pytest.fixture
def single_peg():
    """One peg at (100, 100), no sinks."""
    return Layout(width=400, height=400, pegs=[Peg(100.0, 100.0, P.PEG_RADIUS)], sinks=[])


@pytest.fixture
def single_sink():
    """One 30x30 sink with its top-left corner at (90, 200), no pegs."""
    return Layout(width=400, height=400, pegs=[],
                  sinks=[Sink(90.0, 200.0, 30.0, 30.0, (200, 100, 50))])


@pytest.fixture(scope="session")
def pygame_session():
    import pygame
    pygame.init()
    yield pygame
    pygame.quit()

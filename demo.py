"""
Interactive board. Drop balls and watch them land.
Run: python demo.py
Click "Add ball" or press SPACE. Press Q or close window to exit.
"""
import logging

from plinko.engine import PlinkoEngine, WorldConfig
from plinko.renderer import Renderer, AppearanceConfig
import plinko as P

logging.basicConfig(level=logging.INFO, format=P.LOG_FORMAT)

engine = PlinkoEngine(P.DEFAULT_CANVAS_SIZE, P.DEFAULT_CANVAS_SIZE, WorldConfig())
engine.add_ball()

print(f"Pegs: {len(engine.pegs)}, sinks: {len(engine.sinks)}")

renderer = Renderer(AppearanceConfig(fps=P.FPS))
renderer.play(engine)

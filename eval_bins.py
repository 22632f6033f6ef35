"""
Batch drop: where do the balls land?

Drops N_BALLS balls one at a time on a headless board and reports:
  1. Balls per sink (the bin histogram)
  2. Frames each ball needed to come to rest
"""

import logging
import os
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

import plinko as P
from plinko.colors import rgb_to_css
from plinko.engine import drop_balls
from plinko.metrics import bin_histogram, kinetic_energy
from plinko.renderer import Renderer

logger = logging.getLogger('eval_bins')


def evaluate(n_balls=P.N_BALLS, seed=P.SEED, out_dir='results/plots'):
    logger.info("Dropping %d balls (seed=%d)", n_balls, seed)
    run = drop_balls(n_balls=n_balls, seed=seed)
    counts = bin_histogram(run['sink_indices'], run['n_sinks'])
    lost = sum(1 for i in run['sink_indices'] if i is None)

    for i, c in enumerate(counts):
        logger.info("  sink %2d: %4d  %s", i, c, '#' * int(c))
    if lost:
        logger.warning("%d balls missed every sink", lost)
    logger.info("Mean frames to settle: %.1f", run['steps'].mean())

    landed = np.array([i is not None for i in run['sink_indices']], dtype=bool)
    residual = kinetic_energy(run['final_states'][landed])
    logger.info("Residual kinetic energy of landed balls: %.6f", residual)
    if residual > 0:
        logger.warning("Landed balls are still moving")

    # ═══════════════════════════════════════════════════════════════
    # Plot: bin histogram + settle time + final board
    # ═══════════════════════════════════════════════════════════════
    os.makedirs(out_dir, exist_ok=True)
    fig, axes = plt.subplots(1, 3, figsize=(20, 6))
    fig.suptitle(f'Plinko: {n_balls} balls (seed={seed})', fontsize=14, fontweight='bold')

    sinks = run['engine'].sinks
    colors = [tuple(c / 255 for c in s.color) for s in sinks]

    ax = axes[0]
    ax.bar(np.arange(len(counts)), counts, color=colors, edgecolor='black', linewidth=0.5)
    ax.set_xlabel('Sink')
    ax.set_ylabel('Balls')
    ax.set_title('Landing Distribution')
    ax.set_xticks(np.arange(len(counts)))
    ax.grid(True, axis='y', alpha=0.3)

    ax = axes[1]
    ax.hist(run['steps'], bins=30, color='gold', edgecolor='black', linewidth=0.5)
    ax.set_xlabel('Frames')
    ax.set_ylabel('Balls')
    ax.set_title('Frames to Settle')
    ax.grid(True, alpha=0.3)

    ax = axes[2]
    ax.imshow(Renderer().render(run['engine'], advance=False))
    ax.set_title('Final Board')
    ax.axis('off')

    plt.tight_layout()
    path = os.path.join(out_dir, 'bin_histogram.png')
    plt.savefig(path, dpi=150)
    plt.close()

    logger.info("Sink colors: %s", ', '.join(rgb_to_css(s.color) for s in sinks))
    logger.info("Plot saved: %s", path)
    return counts


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format=P.LOG_FORMAT)
    evaluate()

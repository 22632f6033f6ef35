import numpy as np


def bin_histogram(sink_indices, n_sinks):
    """Counts per sink. Balls that never landed (None) are dropped."""
    landed = np.array([i for i in sink_indices if i is not None], dtype=int)
    return np.bincount(landed, minlength=n_sinks)


def kinetic_energy(states):
    """states: (n_balls, 4) [x, y, vx, vy], unit mass."""
    states = np.asarray(states, dtype=float).reshape(-1, 4)
    vel = states[:, 2:]
    return float((0.5 * vel ** 2).sum())

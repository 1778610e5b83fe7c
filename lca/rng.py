"""
Random stream used by the LCA engine.

A RandomSource wraps a numpy Generator and is acquired once when a batch
starts and released once when it ends. Its state advances across trials and
is never reseeded between them. Anything that offers the same three methods
(acquire, release, standard_normal) can be passed to the engine instead,
e.g. a scripted source in tests.
"""
import logging

import numpy as np

logger = logging.getLogger(__name__)


class RandomSource:
    def __init__(self, seed=None, generator=None):
        """
        Args:
            seed (int or None): Seed for a fresh numpy Generator.
            generator (np.random.Generator): Use an existing generator instead.
        """
        if generator is not None and seed is not None:
            raise ValueError("Pass either a seed or a generator, not both.")
        self.generator = generator if generator is not None else np.random.default_rng(seed)
        self.seed = seed
        self.n_draws = 0
        self._active = False

    @property
    def active(self):
        return self._active

    def acquire(self):
        """Mark the stream as owned by a running batch."""
        if self._active:
            raise RuntimeError("RandomSource is already acquired by another batch.")
        self._active = True
        logger.debug(f"Random stream acquired after {self.n_draws} draws")
        return self

    def release(self):
        self._active = False
        logger.debug(f"Random stream released after {self.n_draws} draws")

    def standard_normal(self, size):
        """Draw `size` independent N(0, 1) values."""
        self.n_draws += size
        return self.generator.standard_normal(size)

    def get_state(self):
        """Snapshot of the underlying bit generator (restore with set_state)."""
        return {'bit_generator': self.generator.bit_generator.state, 'n_draws': self.n_draws}

    def set_state(self, state):
        if self._active:
            raise RuntimeError("Cannot rewind a RandomSource while a batch holds it.")
        self.generator.bit_generator.state = state['bit_generator']
        self.n_draws = state['n_draws']

    def __enter__(self):
        return self.acquire()

    def __exit__(self, exc_type, exc_value, tb):
        self.release()
        return False

    def __repr__(self):
        return f"RandomSource(seed={self.seed}, n_draws={self.n_draws}, active={self._active})"


# Session-wide stream, the equivalent of the host environment's global RNG
_session_source = RandomSource()


def get_session_source():
    """Return the session-wide RandomSource."""
    return _session_source


def seed_session(seed):
    """
    Replace the session stream with a freshly seeded one.

    Args:
        seed (int or None): Seed for the new stream.

    Returns:
        RandomSource: The new session source.
    """
    global _session_source
    if _session_source.active:
        raise RuntimeError("Cannot reseed the session stream while a batch is running.")
    _session_source = RandomSource(seed)
    return _session_source

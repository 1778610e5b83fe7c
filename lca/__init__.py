"""Leaky, Competing Accumulator (LCA) race simulator (Usher & McClelland, 2001)."""
from .config import SimulationConfig, max_iter_for
from .rng import RandomSource, get_session_source, seed_session
from .accumulator import NO_RESPONSE, lca_step, run_lca_trial, simulate_lca, simulate
from .wrapper import run_lca, check_lca_simulation
from .summary import summarize_lca

__all__ = [
    'SimulationConfig', 'max_iter_for',
    'RandomSource', 'get_session_source', 'seed_session',
    'NO_RESPONSE', 'lca_step', 'run_lca_trial', 'simulate_lca', 'simulate',
    'run_lca', 'check_lca_simulation',
    'summarize_lca',
]

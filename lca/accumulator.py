# Filename: lca/accumulator.py
# Purpose: Race of leaky, mutually inhibiting accumulators (Usher & McClelland, 2001).

import logging

import numpy as np

from lca.config import SimulationConfig
from lca.rng import get_session_source

logger = logging.getLogger(__name__)

# Response code for trials in which no accumulator reached threshold
NO_RESPONSE = -1


def lca_step(x, inputs, kappa, beta, dt, noise_factor, noise):
    """
    Advance all accumulators by one time step, in place.

    Inhibition is computed from the state at the start of the step for every
    accumulator before any of them is updated. Each accumulator loses the
    summed inhibition of the whole system and gets its own share back, so
    that it is inhibited by all other accumulators but not by itself.

    Args:
        x (np.ndarray): Current activations (modified in place).
        inputs (np.ndarray): Input I to every accumulator.
        kappa (float): Leak.
        beta (float): Lateral inhibition.
        dt (float): Step size.
        noise_factor (float): sqrt(dt) * s.
        noise (np.ndarray): One N(0, 1) draw per accumulator.

    Returns:
        np.ndarray: x, updated.
    """
    contribution = x * dt * beta
    total_inhibition = contribution.sum()
    x[:] = x + dt * inputs - kappa * x * dt - total_inhibition + contribution + noise_factor * noise
    return x


def run_lca_trial(config, rng, record_trace=False):
    """
    Simulate one trial until an accumulator reaches threshold or time runs out.

    Args:
        config (SimulationConfig): Batch parameters (not validated here).
        rng: Acquired random source with a standard_normal(size) method.
        record_trace (bool): Also return the activations after every step.

    Returns:
        dict: {'response': 1-based winning accumulator or NO_RESPONSE,
               'rt': iter * dt - dt / 2 (seconds),
               'n_iter': number of steps taken,
               'trace': (n_iter, n_acc) array, only if record_trace}
    """
    n_acc = config.n_acc
    inputs = config.I
    kappa = config.kappa
    beta = config.beta
    Z = config.Z
    dt = config.dt
    max_iter = config.max_iter
    non_linear = config.non_linear
    noise_factor = config.noise_factor

    x = np.array(config.x0, dtype=float)
    response = NO_RESPONSE
    winner = False
    n_iter = 0
    trace = [] if record_trace else None

    # At least one step is always taken, even if x0 already sits at threshold
    while True:
        lca_step(x, inputs, kappa, beta, dt, noise_factor, rng.standard_normal(n_acc))
        n_iter += 1

        # Highest index wins when several accumulators cross in the same step
        crossed = np.flatnonzero(x >= Z)
        if crossed.size:
            response = int(crossed[-1]) + 1
            winner = True

        if non_linear:
            x[x < 0] = 0.0

        if record_trace:
            trace.append(x.copy())

        if winner or n_iter >= max_iter:
            break

    result = {
        'response': response,
        'rt': n_iter * dt - dt / 2.0,
        'n_iter': n_iter,
    }
    if record_trace:
        result['trace'] = np.array(trace).reshape(n_iter, n_acc)
    return result


def simulate_lca(config, n_trials, resp, rt, rng=None):
    """
    Fill caller-owned result buffers with n_trials independent trials.

    The random source is acquired once before the first trial and released
    once after the last; every trial keeps drawing from the same stream.

    Args:
        config (SimulationConfig): Validated batch parameters.
        n_trials (int): Number of trials to simulate.
        resp (np.ndarray): Integer buffer of length >= n_trials for responses.
        rt (np.ndarray): Float buffer of length >= n_trials for reaction times.
        rng: Random source; defaults to the session source.

    Returns:
        tuple: (resp, rt), the same buffers.
    """
    if rng is None:
        rng = get_session_source()

    logger.debug(f"Simulating {n_trials} LCA trials with {config!r}")
    rng.acquire()
    try:
        # NaN/overflow is allowed to run into the no-response outcome
        with np.errstate(over='ignore', invalid='ignore'):
            for i in range(n_trials):
                trial = run_lca_trial(config, rng)
                resp[i] = trial['response']
                rt[i] = trial['rt']
    finally:
        rng.release()

    if n_trials > 0:
        n_missing = int(np.count_nonzero(resp[:n_trials] == NO_RESPONSE))
        if n_missing:
            logger.debug(f"{n_missing} of {n_trials} trials ended without a response")
    return resp, rt


def simulate(n_acc, I, kappa, beta, Z, s, dt, max_iter, n_trials, non_linear, x0, rng=None):
    """
    Simulate a batch of LCA trials from plain scalar/array parameters.

    Parameters are assumed to be valid already; n_acc is only used to size
    the state and must equal len(I) == len(x0).

    Returns:
        tuple: (response, reaction_time) arrays of length n_trials.
    """
    config = SimulationConfig(I=np.asarray(I, dtype=float)[:n_acc], kappa=kappa, beta=beta, Z=Z,
                              s=s, dt=dt, max_iter=max_iter, non_linear=non_linear,
                              x0=np.asarray(x0, dtype=float)[:n_acc], validate=False)
    response = np.empty(n_trials, dtype=int)
    reaction_time = np.empty(n_trials, dtype=float)
    return simulate_lca(config, n_trials, response, reaction_time, rng=rng)

# Filename: lca/wrapper.py
# Purpose: Validate wrapper-level parameters, run the LCA engine and tidy its output into a DataFrame.

import logging

import numpy as np
import pandas as pd

from lca.accumulator import simulate_lca
from lca.agent_config import (DT, MAX_TIME, N_TRIALS, NDT_MS_CUTOFF, NOISE_SD,
                              NON_LINEAR, RT_DECIMALS)
from lca.config import SimulationConfig, max_iter_for
from lca.summary import summarize_lca

logger = logging.getLogger(__name__)


def run_lca(I, kappa, beta, Z, NDT, n_trials=N_TRIALS, s=NOISE_SD, dt=DT, max_time=MAX_TIME,
            non_linear=NON_LINEAR, x0=None, rng=None):
    """
    Simulate the Leaky, Competing Accumulator model and return one row per trial.

    Args:
        I (sequence of float): Input for every accumulator, e.g. [1.2, 1, 1]
                               simulates three accumulators.
        kappa (float): Leak.
        beta (float): Lateral inhibition.
        Z (float): Threshold of accumulation.
        NDT (float): Non-decision time added to every RT. Values above 1 are
                     assumed to be in milliseconds.
        n_trials (int): Number of trials to simulate.
        s (float): Standard deviation of the Gaussian noise.
        dt (float): Temporal resolution of the simulation in seconds.
        max_time (float): Maximum decision time in seconds.
        non_linear (bool): Floor activations at zero after every step.
        x0 (sequence of float): Start points; None sets all of them to 0.
        rng: Random source; defaults to the session source.

    Returns:
        pd.DataFrame: Columns 'rt' (s, rounded to ms), 'response' (1-based
                      accumulator or -1) and 'corr' (response == 1).
    """
    if n_trials < 0:
        raise ValueError("n_trials cannot be negative.")

    if NDT > NDT_MS_CUTOFF:
        logger.warning(f"The non-decision time provided is larger than {NDT_MS_CUTOFF}. "
                       f"I'll assume you meant {NDT} milliseconds")
        NDT = NDT / 1000.0

    I = np.atleast_1d(np.asarray(I, dtype=float))
    if x0 is None:
        x0 = np.zeros(I.size)
    elif np.atleast_1d(x0).size != I.size:
        raise ValueError('The number of accumulators in I is not the same as the number of accumulators in x0')

    config = SimulationConfig(I=I, kappa=kappa, beta=beta, Z=Z, s=s, dt=dt,
                              max_iter=max_iter_for(max_time, dt),
                              non_linear=non_linear, x0=x0)

    resps = np.zeros(n_trials, dtype=int)
    rts = np.zeros(n_trials, dtype=float)
    simulate_lca(config, n_trials, resps, rts, rng=rng)

    dat = pd.DataFrame({'rt': rts, 'response': resps})
    dat['corr'] = dat['response'] == 1
    dat['rt'] = (dat['rt'] + NDT).round(RT_DECIMALS)
    return dat


def check_lca_simulation(n_trials=N_TRIALS, rng=None):
    """
    Smoke check: simulate the reference three-accumulator datasets with and
    without the non-linearity.

    Returns:
        dict: {'non_linear': (df, summary), 'linear': (df, summary)}
    """
    reference = dict(n_trials=n_trials, I=[1.2, 1, 1], kappa=3, beta=3, Z=.2, NDT=.450,
                     s=.1, dt=.001, max_time=5, x0=[.01, .02, .03])

    dat1 = run_lca(non_linear=True, rng=rng, **reference)
    dat2 = run_lca(non_linear=False, rng=rng, **reference)

    logger.info("Successfully simulated two sets of data. Example data:\n%s", dat1.head())
    return {
        'non_linear': (dat1, summarize_lca(dat1, n_acc=3)),
        'linear': (dat2, summarize_lca(dat2, n_acc=3)),
    }

import argparse
import json
import logging
import os

import pandas as pd

from lca.agent_config import DEFAULT_SEED, N_TRIALS
from lca.rng import seed_session
from lca.summary import summarize_lca
from lca.wrapper import run_lca

logger = logging.getLogger(__name__)

WRAPPER_KEYS = ('I', 'kappa', 'beta', 'Z', 'NDT', 's', 'dt', 'max_time', 'non_linear', 'x0')


def load_params(params_file):
    with open(params_file, 'r') as f:
        return json.load(f)


def run_task(params, n_trials, seed=DEFAULT_SEED):
    """
    Simulate an LCA dataset from a parameter dictionary.

    Args:
        params (dict): parameters loaded from JSON (see params/lca_default.json)
        n_trials (int): number of trials to simulate
        seed (int): seed for the session random stream

    Returns:
        tuple: (raw trial data as pd.DataFrame, summary dict)
    """
    unknown = sorted(set(params) - set(WRAPPER_KEYS))
    if unknown:
        raise ValueError(f"Unknown LCA parameters: {', '.join(unknown)}")
    if 'NDT' not in params:
        params = {**params, 'NDT': 0.0}

    rng = seed_session(seed)
    df = run_lca(n_trials=n_trials, rng=rng, **params)
    return df, summarize_lca(df, n_acc=len(params['I']))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="LCA simulation runner"
    )
    parser.add_argument(
        "--params", "-p", required=True,
        help="Path to JSON file with LCA parameters"
    )
    parser.add_argument(
        "--n-trials", "-n", type=int, default=N_TRIALS,
        help=f"Number of trials to run (default: {N_TRIALS})"
    )
    parser.add_argument(
        "--seed", "-s", type=int, default=DEFAULT_SEED,
        help="Seed for the random stream (default: fresh entropy)"
    )
    parser.add_argument(
        "--out", "-o", default=None,
        help="Directory to write raw.csv and summary.csv to"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Print progress messages"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(name)s - %(module)s - %(message)s')

    try:
        params = load_params(args.params)
    except (OSError, json.JSONDecodeError) as e:
        parser.error(f"Could not read parameter file {args.params}: {e}")

    logger.info(f"Running LCA for {args.n_trials} trials using {args.params}")
    try:
        df, summary = run_task(params, args.n_trials, seed=args.seed)
    except ValueError as e:
        parser.error(str(e))

    summary_df = pd.Series(summary, name='value').to_frame()
    print(summary_df.to_string())

    if args.out:
        os.makedirs(args.out, exist_ok=True)
        raw_fp = os.path.join(args.out, "raw.csv")
        summary_fp = os.path.join(args.out, "summary.csv")
        df.to_csv(raw_fp, index=False)
        summary_df.to_csv(summary_fp, index_label='statistic')
        logger.info(f"Saved raw to {raw_fp}, summary to {summary_fp}")

    return 0


if __name__ == "__main__":
    main()

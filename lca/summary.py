"""
Descriptive statistics for simulated LCA datasets.
"""
import numpy as np
from scipy import stats as sp_stats

from lca.accumulator import NO_RESPONSE

QUANTILES = (10, 30, 50, 70, 90)


def _rt_stats(rts, prefix=''):
    """Mean, median, variance, skew and quantiles of an RT array (NaN if empty)."""
    rts = np.asarray(rts, dtype=float)
    if rts.size == 0:
        stats = {f"{prefix}rt_{name}": np.nan for name in ('mean', 'median', 'var', 'skew')}
        stats.update({f"{prefix}rt_q{q}": np.nan for q in QUANTILES})
        return stats

    stats = {
        f"{prefix}rt_mean": np.mean(rts),
        f"{prefix}rt_median": np.median(rts),
        f"{prefix}rt_var": np.var(rts),
        f"{prefix}rt_skew": np.nan if rts.size < 3 or np.std(rts) == 0 else sp_stats.skew(rts),
    }
    stats.update({f"{prefix}rt_q{q}": np.percentile(rts, q) for q in QUANTILES})
    return stats


def summarize_lca(df, n_acc=None):
    """
    Summarise a dataset produced by run_lca.

    RT statistics are computed over trials that produced a response, overall
    and per accumulator. No-response trials only count towards
    p_no_response.

    Args:
        df (pd.DataFrame): Columns 'rt', 'response' and optionally 'corr'.
        n_acc (int): Number of accumulators; inferred from the largest
                     response code if omitted.

    Returns:
        dict: Summary statistics.
    """
    responses = df['response'].to_numpy()
    rts = df['rt'].to_numpy(dtype=float)
    n_trials = len(df)

    if n_acc is None:
        n_acc = int(responses.max()) if n_trials and responses.max() > 0 else 0

    answered = responses != NO_RESPONSE
    summary = {
        'n_trials': n_trials,
        'p_no_response': np.mean(~answered) if n_trials else np.nan,
        'p_correct': np.mean(responses == 1) if n_trials else np.nan,
    }
    summary.update(_rt_stats(rts[answered]))

    for k in range(1, n_acc + 1):
        chosen = responses == k
        summary[f"p_resp_{k}"] = np.mean(chosen) if n_trials else np.nan
        k_rts = rts[chosen]
        summary[f"resp_{k}_rt_mean"] = np.mean(k_rts) if k_rts.size else np.nan
        summary[f"resp_{k}_rt_median"] = np.median(k_rts) if k_rts.size else np.nan

    return summary

import logging

import numpy as np
import pytest

from lca.accumulator import NO_RESPONSE
from lca.rng import RandomSource
from lca.wrapper import check_lca_simulation, run_lca

REFERENCE = dict(I=[1.2, 1, 1], kappa=3, beta=3, Z=.2, s=.1, dt=.001, max_time=5,
                 x0=[.01, .02, .03])


def test_columns_and_types():
    df = run_lca(NDT=0.45, n_trials=25, rng=RandomSource(1), **REFERENCE)
    assert list(df.columns) == ['rt', 'response', 'corr']
    assert len(df) == 25
    assert df['response'].isin([1, 2, 3, NO_RESPONSE]).all()
    assert (df['corr'] == (df['response'] == 1)).all()
    # Non-decision time is added and RTs are rounded to ms
    assert (df['rt'] >= 0.45).all()
    np.testing.assert_allclose(df['rt'], df['rt'].round(3))


def test_seeded_runs_are_identical():
    df1 = run_lca(NDT=0.3, n_trials=20, rng=RandomSource(8), **REFERENCE)
    df2 = run_lca(NDT=0.3, n_trials=20, rng=RandomSource(8), **REFERENCE)
    assert df1.equals(df2)


def test_ndt_in_milliseconds_is_converted(caplog):
    with caplog.at_level(logging.WARNING, logger='lca.wrapper'):
        df_ms = run_lca(NDT=450, n_trials=10, rng=RandomSource(4), **REFERENCE)
    df_s = run_lca(NDT=0.45, n_trials=10, rng=RandomSource(4), **REFERENCE)
    assert df_ms.equals(df_s)
    assert "milliseconds" in caplog.text


def test_default_start_points():
    params = {**REFERENCE, 'x0': None}
    df = run_lca(NDT=0.0, n_trials=5, rng=RandomSource(0), **params)
    assert len(df) == 5


def test_start_point_length_mismatch():
    params = {**REFERENCE, 'x0': [0.0, 0.0]}
    with pytest.raises(ValueError, match="number of accumulators"):
        run_lca(NDT=0.0, n_trials=5, **params)


def test_no_response_keeps_timeout_rt():
    df = run_lca(I=[0.0, 0.0], kappa=0, beta=0, Z=50, NDT=0.2, n_trials=3, s=0.0,
                 dt=0.01, max_time=0.5, rng=RandomSource(0))
    assert (df['response'] == NO_RESPONSE).all()
    assert not df['corr'].any()
    # 51 steps of 10 ms, midpoint-corrected, plus NDT
    np.testing.assert_allclose(df['rt'], round(51 * 0.01 - 0.005 + 0.2, 3))


def test_negative_trial_count_rejected():
    with pytest.raises(ValueError):
        run_lca(NDT=0.0, n_trials=-1, **REFERENCE)


def test_invalid_parameters_rejected_before_simulating():
    with pytest.raises(ValueError, match="dt"):
        run_lca(I=[1.0], kappa=1, beta=1, Z=1, NDT=0, n_trials=1, dt=-0.001)


def test_check_lca_simulation():
    results = check_lca_simulation(n_trials=200, rng=RandomSource(2017))
    assert set(results) == {'non_linear', 'linear'}
    for df, summary in results.values():
        assert len(df) == 200
        assert summary['n_trials'] == 200
        # Accumulator 1 gets the strongest input
        assert summary['p_resp_1'] > summary['p_resp_2']
        assert summary['p_resp_1'] > summary['p_resp_3']

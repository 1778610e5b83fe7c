import json

import pandas as pd
import pytest

import run_simulation

PARAMS = {
    "I": [1.2, 1.0, 1.0], "kappa": 3.0, "beta": 3.0, "Z": 0.2, "NDT": 0.45,
    "s": 0.1, "dt": 0.001, "max_time": 2.0, "non_linear": True, "x0": [0.01, 0.02, 0.03],
}


@pytest.fixture
def params_file(tmp_path):
    path = tmp_path / "params.json"
    path.write_text(json.dumps(PARAMS))
    return path


def test_run_task_is_seeded():
    df1, summary1 = run_simulation.run_task(PARAMS, 15, seed=3)
    df2, summary2 = run_simulation.run_task(PARAMS, 15, seed=3)
    assert df1.equals(df2)
    assert summary1['n_trials'] == 15
    assert 'p_resp_3' in summary1


def test_run_task_defaults_ndt():
    params = {k: v for k, v in PARAMS.items() if k != 'NDT'}
    df, _ = run_simulation.run_task(params, 5, seed=1)
    assert (df['rt'] <= 2.0).all()


def test_run_task_rejects_unknown_keys():
    with pytest.raises(ValueError, match="Unknown"):
        run_simulation.run_task({**PARAMS, 'gamma': 1.0}, 5)


def test_main_writes_outputs(params_file, tmp_path, capsys):
    out = tmp_path / "out"
    code = run_simulation.main(["--params", str(params_file), "-n", "12", "--seed", "5", "--out", str(out)])
    assert code == 0

    raw = pd.read_csv(out / "raw.csv")
    assert list(raw.columns) == ['rt', 'response', 'corr']
    assert len(raw) == 12
    summary = pd.read_csv(out / "summary.csv", index_col='statistic')
    assert summary.loc['n_trials', 'value'] == 12
    assert "p_no_response" in capsys.readouterr().out


def test_main_reports_missing_file(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        run_simulation.main(["--params", str(tmp_path / "missing.json")])
    assert excinfo.value.code == 2


def test_main_reports_bad_parameters(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({**PARAMS, "dt": 0}))
    with pytest.raises(SystemExit):
        run_simulation.main(["--params", str(path), "-n", "1"])

import matplotlib

matplotlib.use("Agg")

from bb84sim import run_simulation
from bb84sim.demo import main
from bb84sim.reporting import format_key, render_qber_curve, summarize, sweep_qber


def test_format_key_truncates_and_marks_missing():
    assert format_key(None) == "N/A"
    assert format_key("0101") == "0101"
    assert format_key("1" * 80) == "1" * 50 + "..."


def test_summary_reports_abort():
    result = run_simulation(1000, 20, 32, 128, eve_enabled=True, secure_mode=True, seed=3)
    text = summarize(result)

    assert "ABORTED" in text
    assert "HMAC verified : no" in text


def test_summary_reports_matching_keys():
    text = summarize(run_simulation(800, 20, 32, 128, seed=2))

    assert "Keys match    : yes" in text
    assert "HMAC" not in text


def test_sweep_collects_one_row_per_trial():
    data = sweep_qber(4, 400, eve_enabled=True, seed=10)

    assert [row["trial"] for row in data] == [0, 1, 2, 3]
    assert all(row["qber"] is not None for row in data)


def test_render_qber_curve():
    assert render_qber_curve([]) is None
    fig = render_qber_curve(sweep_qber(3, 300, eve_enabled=False, seed=1))
    assert fig is not None
    assert fig.axes[0].get_ylabel() == "QBER"


def test_demo_prints_summary(capsys):
    main(["--n", "300", "--seed", "6"])
    assert "BB84 RESULT" in capsys.readouterr().out

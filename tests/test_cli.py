import json

import pytest

from mm1sim.core.errors import EXIT_CONFIGURATION, EXIT_QUEUE_OVERFLOW
from mm1sim.scripts.run_simulation import main, run_replications
from mm1sim.system import SimulationConfig


def test_prints_report(params_file, capsys):
    main([str(params_file)])
    out = capsys.readouterr().out
    assert "Average delay in queue:" in out
    assert "ID , Inter-arrival time , Delay in queue" in out


def test_no_customers_flag(params_file, capsys):
    main([str(params_file), '--no-customers'])
    assert "Customer data" not in capsys.readouterr().out


def test_writes_report_and_json(params_file, tmp_path):
    report = tmp_path / "report.txt"
    results = tmp_path / "results.json"
    main([str(params_file), '-q', '-o', str(report), '-j', str(results)])
    assert "Erlang B:" in report.read_text()
    assert json.loads(results.read_text())['num_customers_delayed'] == 200


def test_same_seed_same_report_file(params_file, tmp_path):
    first, second = tmp_path / "a.txt", tmp_path / "b.txt"
    main([str(params_file), '-q', '-s', '11', '-o', str(first)])
    main([str(params_file), '-q', '-s', '11', '-o', str(second)])
    assert first.read_text() == second.read_text()


def test_missing_params_file_exit_code(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "nope.txt")])
    assert excinfo.value.code == EXIT_CONFIGURATION
    assert "Error:" in capsys.readouterr().err


def test_missing_output_directory_exit_code(params_file, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(params_file), '-o', str(tmp_path / "no" / "report.txt")])
    assert excinfo.value.code == EXIT_CONFIGURATION


def test_overflow_exit_code(tmp_path, capsys):
    params = tmp_path / "params.txt"
    params.write_text("0.5 5.0 100000")
    with pytest.raises(SystemExit) as excinfo:
        main([str(params), '-c', '20'])
    assert excinfo.value.code == EXIT_QUEUE_OVERFLOW
    assert "Overflow" in capsys.readouterr().err


def test_replications(params_file, tmp_path, capsys):
    results = tmp_path / "summary.json"
    main([str(params_file), '-r', '3', '-s', '5', '-j', str(results)])
    assert "Replication Results" in capsys.readouterr().out
    summary = json.loads(results.read_text())
    assert summary['replications'] == 3
    assert summary['base_seed'] == 5
    assert set(summary['metrics']) == {
        'average_delay', 'average_number_in_queue', 'server_utilization', 'end_time'}


def test_run_replications_statistics():
    config = SimulationConfig(1.0, 0.5, 500)
    summary = run_replications(config, 5, base_seed=100)
    util = summary['metrics']['server_utilization']
    assert util['min'] <= util['mean'] <= util['max']
    assert util['half_width'] > 0
    assert summary['theoretical']['average_delay'] == pytest.approx(0.5)


@pytest.mark.parametrize("text", ["inf 0.5 10", "1.0 inf 10"])
def test_infinite_mean_is_configuration_error(tmp_path, text, capsys):
    params = tmp_path / "params.txt"
    params.write_text(text)
    with pytest.raises(SystemExit) as excinfo:
        main([str(params)])
    assert excinfo.value.code == EXIT_CONFIGURATION
    assert "finite" in capsys.readouterr().err


def test_negative_seed_exit_code(params_file, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(params_file), '-s', '-1'])
    assert excinfo.value.code == EXIT_CONFIGURATION
    assert "Seed must be non-negative" in capsys.readouterr().err


def test_replication_summary_written_to_output(params_file, tmp_path, capsys):
    output = tmp_path / "summary.txt"
    main([str(params_file), '-r', '3', '-s', '5', '-o', str(output)])
    text = output.read_text()
    assert text.startswith("=== Replication Results ===")
    assert "Replications: 3" in text
    assert "Replication Results" not in capsys.readouterr().out

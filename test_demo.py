from microdiff.demo import main, run_expressions, train
from microdiff.nn.config import NetworkConfig


def test_expressions(capsys):
    run_expressions(show_graph=True)
    out = capsys.readouterr().out
    assert "a + b" in out
    assert "tanh(c)" in out
    assert "[leaf/input]" in out


def test_train_history():
    config = NetworkConfig(n_inputs=3, layer_sizes=[4, 1], seed=1)
    model, history = train(config, epochs=5, lr=0.05)
    assert len(history) == 5
    assert model.num_parameters() == 4 * 4 + 5


def test_main_runs(capsys):
    assert main(["--epochs", "3", "--layers", "3,1"]) == 0
    out = capsys.readouterr().out
    assert "TRAINING" in out
    assert "after 3 epochs" in out


def test_main_reports_dimension_mismatch(capsys):
    assert main(["--inputs", "2", "--epochs", "1"]) == 2
    assert "dimension mismatch" in capsys.readouterr().err


def test_main_rejects_bad_layers(capsys):
    assert main(["--layers", "4,0"]) == 2
    assert "error:" in capsys.readouterr().err

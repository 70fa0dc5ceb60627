from pathlib import Path

from typer.testing import CliRunner

from rotolog.cli import app

runner = CliRunner()


def test_demo_writes_and_rotates_files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    log_dir = tmp_path / "logs"
    result = runner.invoke(app, ["demo", "--log-dir", str(log_dir), "--iterations", "10"])

    assert result.exit_code == 0, result.output
    assert "DEBUG: Debug" in result.output
    assert "Timer #2 STOPPED" in result.output
    assert "Timer #1 STOPPED" in result.output

    assert (log_dir / "logfileDEB.log").read_text(encoding="utf-8").count("DEBUG: Log file Debug") == 10
    assert (log_dir / "logfile.log").exists()
    assert (log_dir / "logfile.log.1").exists()
    assert not (log_dir / "logfile.log.4").exists()


def test_tail_prints_file_and_archives(tmp_path):
    path = tmp_path / "app.log"
    path.write_text("\nlive line", encoding="utf-8")
    Path(f"{path}.1").write_text("old", encoding="utf-8")

    result = runner.invoke(app, ["tail", str(path), "--archives"])

    assert result.exit_code == 0, result.output
    assert "live line" in result.output
    assert "app.log.1\t3 bytes" in result.output


def test_tail_missing_file(tmp_path):
    result = runner.invoke(app, ["tail", str(tmp_path / "nope.log")])
    assert result.exit_code == 1

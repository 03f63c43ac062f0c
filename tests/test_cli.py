import json

import pytest

import cli


def test_cli_copies_positional_paths(make_file, tmp_path):
    src = make_file("in.bin", b"\x00\x01binary\xff")
    dst = tmp_path / "out.bin"

    assert cli.main([str(src), str(dst)]) == 0
    assert dst.read_bytes() == b"\x00\x01binary\xff"


def test_cli_missing_source_exits_nonzero(tmp_path, capsys):
    assert cli.main([str(tmp_path / "missing"), str(tmp_path / "out")]) == 1
    assert "Validation failed" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_cli_uses_demo_paths_by_default(make_file, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    make_file("src/source.txt", b"demo")

    assert cli.main([]) == 0
    assert (tmp_path / "src" / "dest.txt").read_bytes() == b"demo"


def test_cli_char_mode_demo_paths(make_file, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    make_file("src/characterSource.txt", "ça va?\n".encode("utf-8"))

    assert cli.main(["--mode", "char"]) == 0
    assert (tmp_path / "src" / "characterDest.txt").read_text(encoding="utf-8") == "ça va?\n"


def test_cli_log_file(make_file, tmp_path):
    src = make_file("a.txt", b"abc")
    log_path = tmp_path / "logs" / "run.log"

    assert cli.main([str(src), str(tmp_path / "b.txt"), "--log-file", str(log_path)]) == 0
    text = log_path.read_text(encoding="utf-8")
    assert "INFO" in text
    assert "Transfer completed successfully." in text


def test_cli_yaml_config(make_file, tmp_path):
    src = make_file("a.txt", b"x" * 30)
    dst = make_file("b.txt", b"old")
    cfg = tmp_path / "copy.yaml"
    cfg.write_text(f"source: {src}\ndest: {dst}\nbackup: false\nprogress_interval: 10\n")

    assert cli.main(["--config", str(cfg)]) == 0
    assert dst.read_bytes() == b"x" * 30
    assert not (tmp_path / "b.txt.backup").exists()


def test_cli_args_override_config(make_file, tmp_path):
    src = make_file("a.txt", b"from args")
    cfg = tmp_path / "copy.json"
    cfg.write_text(json.dumps({"source": str(tmp_path / "missing"), "dest": str(tmp_path / "c.txt")}))

    assert cli.main([str(src), "--config", str(cfg)]) == 0
    assert (tmp_path / "c.txt").read_bytes() == b"from args"


def test_cli_missing_config_is_usage_error(tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--config", str(tmp_path / "nope.yaml")])
    assert exc.value.code == 2


def test_cli_bad_progress_interval_is_usage_error(make_file, tmp_path):
    src = make_file("a.txt", b"abc")
    with pytest.raises(SystemExit) as exc:
        cli.main([str(src), str(tmp_path / "b"), "--progress-interval", "0"])
    assert exc.value.code == 2


def test_merge_config_ignores_none():
    assert cli.merge_config({"a": 1, "b": 2}, {"a": None, "b": 3}) == {"a": 1, "b": 3}


def test_build_copy_config_rejects_unknown_mode():
    with pytest.raises(ValueError):
        cli.build_copy_config({"mode": "word"})


def test_stop_flag():
    flag = cli.StopFlag()
    assert not flag()
    flag.set()
    assert flag()

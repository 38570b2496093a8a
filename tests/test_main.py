import main
from ExprEval import error as E


def test_required_files_exist_in_checkout():
    assert main.check_files_exist() == []


def test_main_prints_result(capsys):
    assert main.main(["(5 + 3) * 2", "--scale", "1"]) == 0
    assert capsys.readouterr().out.strip() == "= 16.0"


def test_main_reads_expression_from_prompt(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda: "1 / 3")
    assert main.main(["--scale", "2"]) == 0
    assert capsys.readouterr().out.strip().endswith("≈ 0.33")


def test_main_reports_error_code(capsys):
    assert main.main(["3 4", "--scale", "2"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error 3011: Invalid block in expression - ")
    assert "[3 4]" in err


def test_describe_falls_back_to_category():
    error = E.ConfigError("bad", code="5999")
    assert E.describe(error) == "Error 5999: Configuration Error - bad"


def test_installed_copy_skips_file_check(tmp_path, monkeypatch):
    monkeypatch.setattr(main, "PROJECT_ROOT", tmp_path)
    assert main.is_source_checkout() is False
    assert main.check_files_exist() == []


def test_source_checkout_reports_missing_files(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
    monkeypatch.setattr(main, "PROJECT_ROOT", tmp_path)
    assert main.check_files_exist() == [
        "ExprEngine.py", "Grammar.py", "error.py", "config_manager.py", "config.json",
    ]

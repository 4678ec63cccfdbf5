import json
from pathlib import Path

from typer.testing import CliRunner

from patent_analysis.cli import app

runner = CliRunner()


def _write_export(tmp_path: Path, text: str, name: str = "export.csv") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_analyze_prints_json_aggregates(tmp_path: Path) -> None:
    path = _write_export(
        tmp_path,
        "出願日,出願人,FI\n2020/01/01,A Corp; B Inc,G06F16/30\n20200615,B Inc,H04L9/32\n",
    )

    result = runner.invoke(app, ["analyze", str(path), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["yearCounts"] == {"2020": 2}
    assert payload["allCompanies"] == {"A Corp": 1, "B Inc": 2}
    assert payload["leadingFIs"] == {"G06F16": 1, "H04L9": 1}


def test_analyze_renders_tables(tmp_path: Path) -> None:
    path = _write_export(tmp_path, "出願日,出願人\n2020/01/01,A Corp\n2021/01/01,A Corp\n")

    result = runner.invoke(app, ["analyze", str(path), "--top", "3"])

    assert result.exit_code == 0, result.output
    assert "Total records: 2" in result.output
    assert "2020 - 2021" in result.output
    assert "A Corp" in result.output


def test_analyze_reports_missing_date_column(tmp_path: Path) -> None:
    path = _write_export(tmp_path, "出願人,FI\nA Corp,G06F16\n")

    result = runner.invoke(app, ["analyze", str(path)])

    assert result.exit_code == 1
    assert "Application date column not found" in result.output


def test_analyze_rejects_non_csv(tmp_path: Path) -> None:
    path = _write_export(tmp_path, "出願日\n2020/01/01\n", name="export.txt")

    result = runner.invoke(app, ["analyze", str(path)])

    assert result.exit_code == 1
    assert "Only CSV files" in result.output


def test_columns_lists_resolved_headers(tmp_path: Path) -> None:
    path = _write_export(tmp_path, "文献番号,出願日,出願人/権利者\nJP1,2020/01/01,A Corp\n")

    result = runner.invoke(app, ["columns", str(path)])

    assert result.exit_code == 0, result.output
    assert "date: 出願日" in result.output
    assert "applicant: 出願人/権利者" in result.output
    assert "classification: -" in result.output

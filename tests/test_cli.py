import json
from pathlib import Path

import pyarrow.parquet as pq
from click.testing import CliRunner

from specmatch.cli import cli, logger

XDR = Path(__file__).parent / "xdr"


def test_match_prints_projection() -> None:
    result = CliRunner().invoke(
        cli,
        ["match", "--event", str(XDR / "transfer_event.json"), "--spec", str(XDR / "transfer_spec.json")],
    )

    assert result.exit_code == 0, result.output
    assert "found" in result.output
    assert "Transfer" in result.output
    assert "1000" in result.output


def test_no_match_exits_non_zero() -> None:
    result = CliRunner().invoke(
        cli,
        ["match", "--event", str(XDR / "swap_event.json"), "--spec", str(XDR / "transfer_spec.json"), "--explain"],
    )

    assert result.exit_code == 1
    assert "no matching spec" in result.output
    assert "expected 'transfer'" in result.output


def test_strict_flag() -> None:
    args = ["match", "--event", str(XDR / "swap_event.json"), "--spec", str(XDR / "specs_mixed.json")]
    runner = CliRunner()

    assert runner.invoke(cli, args).exit_code == 0
    assert runner.invoke(cli, [*args, "--strict"]).exit_code == 1


def test_out_writes_parquet(tmp_path: Path) -> None:
    out = tmp_path / "row.parquet"
    result = CliRunner().invoke(
        cli,
        [
            "match",
            "--event",
            str(XDR / "swap_event.json"),
            "--spec",
            str(XDR / "specs_mixed.json"),
            "--out",
            str(out),
        ],
    )

    assert result.exit_code == 0, result.output
    table = pq.read_table(out)
    assert table.column("event").to_pylist() == ["Swap"]
    assert table.column("fee").to_pylist() == ["30"]
    assert table.column("amounts").to_pylist() == ["[5, -7]"]


def test_bad_json_is_a_usage_error(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"contract_id": "C", "topics": [{"u32": "nope"}]}))

    result = CliRunner().invoke(cli, ["match", "--event", str(bad), "--spec", str(XDR / "transfer_spec.json")])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_null_integer_part_is_a_usage_error(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    event = {"contract_id": "C", "topics": [{"symbol": "transfer"}], "data": {"i128": {"hi": None, "lo": 0}}}
    bad.write_text(json.dumps(event))

    result = CliRunner().invoke(cli, ["match", "--event", str(bad), "--spec", str(XDR / "transfer_spec.json")])

    assert result.exit_code == 1
    assert not isinstance(result.exception, TypeError)
    assert "part 'hi' must be an integer" in result.output


def test_out_into_missing_directory_is_a_usage_error(tmp_path: Path) -> None:
    out = tmp_path / "missing_dir" / "row.parquet"
    result = CliRunner().invoke(
        cli,
        [
            "match",
            "--event",
            str(XDR / "transfer_event.json"),
            "--spec",
            str(XDR / "transfer_spec.json"),
            "--out",
            str(out),
        ],
    )

    assert result.exit_code == 1
    assert not isinstance(result.exception, OSError)
    assert "cannot write" in result.output
    assert not out.exists()


def test_cli_logger_is_module_scoped() -> None:
    assert logger.name == "specmatch.cli"

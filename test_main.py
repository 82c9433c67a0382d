import json
import os

import pytest

from main import main

HERE = os.path.dirname(os.path.abspath(__file__))
SAMPLE_INPUT = os.path.join(HERE, "testcases.json")


def test_sample_input_text_report(capsys):
    assert main([SAMPLE_INPUT]) == 0
    out, err = capsys.readouterr()
    assert "Decoded sample: x = 6, y = 39" in out
    assert "Constant term (case 1): 3" in out
    assert "Constant term (case 2): 5" in out
    assert "case 2: skipping sample x='4'" in err
    assert "case 3 failed [selecting]: InsufficientSamplesError" in err
    assert "Constant term (case 3)" not in out


def test_strict_exit_code(capsys):
    assert main([SAMPLE_INPUT, "--strict"]) == 1


def test_json_report(capsys):
    assert main([SAMPLE_INPUT, "--json", "--workers", "3"]) == 0
    records = json.loads(capsys.readouterr().out)
    assert [r["case"] for r in records] == [1, 2, 3]
    assert [r["constant_term"] for r in records] == [3, 5, None]
    assert records[2]["error"].startswith("InsufficientSamplesError")


def test_cross_check_warns_on_divergence(tmp_path, capsys):
    big = 10 ** 20
    doc = {"keys": {"n": 2, "k": 2},
           "1": {"base": "10", "value": str(big + 1)},
           "2": {"base": "10", "value": str(2 * big + 1)}}
    path = tmp_path / "big.json"
    path.write_text(json.dumps(doc))

    assert main([str(path), "--cross-check"]) == 0
    out, err = capsys.readouterr()
    assert "Constant term (case 1): 1" in out
    assert "float64 gives 0, exact gives 1" in err

    assert main([str(path), "--method", "float"]) == 0
    assert "Constant term (case 1): 0" in capsys.readouterr().out


def test_missing_argument_prints_usage(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code != 0
    assert "usage" in capsys.readouterr().err


def test_unusable_input_exits_nonzero(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{ not json")
    assert main([str(path)]) == 1
    assert "[error]" in capsys.readouterr().err
    assert main([str(tmp_path / "missing.json")]) == 1


def write_doc(tmp_path, name, doc):
    path = tmp_path / name
    path.write_text(json.dumps(doc))
    return str(path)


def test_values_past_the_str_digit_limit_are_reported(tmp_path, capsys):
    doc = [{"keys": {"n": 1, "k": 1}, "1": {"base": "36", "value": "z" * 3000}},
           {"keys": {"n": 2, "k": 2}, "1": {"base": "10", "value": "7"}, "2": {"base": "3", "value": "100"}}]
    path = write_doc(tmp_path, "huge.json", doc)

    assert main([path]) == 0
    out = capsys.readouterr().out
    assert "Constant term (case 2): 5" in out
    line = [l for l in out.splitlines() if l.startswith("Constant term (case 1): ")][0]
    digits = line.split(": ")[1]
    assert len(digits) > 4300
    assert int(digits) == 36 ** 3000 - 1

    assert main([path, "--json"]) == 0
    records = json.loads(capsys.readouterr().out)
    assert records[0]["constant_term"] == 36 ** 3000 - 1
    assert records[1]["constant_term"] == 5


def test_oversized_k_literal_fails_only_its_case(tmp_path, capsys):
    path = tmp_path / "bigk.json"
    path.write_text('[{"keys": {"k": ' + "9" * 5000 + '}, "1": {"base": "10", "value": "4"}},'
                    ' {"keys": {"k": 1}, "3": {"base": "10", "value": "8"}}]')
    assert main([str(path)]) == 0
    out, err = capsys.readouterr()
    assert "case 1 failed [selecting]: InsufficientSamplesError" in err
    assert "Constant term (case 2): 8" in out


def test_non_utf8_input_exits_nonzero(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_bytes(b"\xff\xfe[]")
    assert main([str(path)]) == 1
    assert "[error]" in capsys.readouterr().err


def test_scalar_document_exits_nonzero(tmp_path, capsys):
    assert main([write_doc(tmp_path, "null.json", None)]) == 1
    assert "top level must be an array or object" in capsys.readouterr().err

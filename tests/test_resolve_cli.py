import json

from scripts.resolve_trick import main


def test_resolve_prints_winner(capsys):
    assert main(["--rule-set", "spades-trump", "N=7C", "E=3S", "S=KS", "W=9C"]) == 0
    assert capsys.readouterr().out.strip() == "S wins with the King of Spades under Spades Trump."


def test_list_rule_sets(capsys):
    assert main(["--list"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("[0] highest-card")
    assert len(lines) == 3


def test_errors_are_reported(capsys):
    assert main(["--rule-set", "bridge", "N=7C"]) == 2
    assert main(["N=7C", "N=8C"]) == 2
    assert main(["N7C"]) == 2
    assert "error:" in capsys.readouterr().err


def test_custom_rules_file(tmp_path, capsys):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps([{"id": "hearts", "name": "Hearts Trump", "trump_suit": "hearts"}]), encoding="utf-8")
    assert main(["--rules-file", str(path), "--rule-set", "hearts", "N=AC", "E=2H"]) == 0
    assert capsys.readouterr().out.startswith("E wins")

import json

from honorboard.jobs.stats_cli import main


def test_cli_prints_demo_board(capsys):
    code = main(["honor", "u1", "--username", "erin", "--demo"])
    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["display_name"] == "ERIN"
    assert out["stats"]["posts_count"] == 1000
    assert out["avatar_url"] == "/lovable-avatar.jpg"


def test_cli_reports_missing_store(capsys, monkeypatch):
    monkeypatch.setattr("honorboard.jobs.stats_cli.SupabaseDAL.from_env", classmethod(lambda cls: None))
    code = main(["honor", "u1"])
    assert code == 1
    err = json.loads(capsys.readouterr().err)
    assert err["type"] == "RuntimeError"

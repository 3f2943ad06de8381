from __future__ import annotations

import json

from typer.testing import CliRunner

from newsscope.cli import main as cli
from newsscope.core.models import ArticleRecord

runner = CliRunner()


def test_classify_command():
    res = runner.invoke(cli.app, ["classify", "https://site.com/2024/05/01/story"])
    assert res.exit_code == 0
    assert res.output.strip() == "article"
    bad = runner.invoke(cli.app, ["classify", "nope"])
    assert bad.exit_code == 2


def test_news_command_prints_json(monkeypatch):
    captured = {}

    class FakeAggregator:
        def __init__(self, config):
            captured["config"] = config

        def run(self, url, keyword, sort_by):
            captured["args"] = (url, keyword, sort_by)
            return [ArticleRecord(title="T", link="https://x.org/1")]

    monkeypatch.setattr(cli, "NewsAggregator", FakeAggregator)
    res = runner.invoke(cli.app, ["news", "--keyword", "ai", "--sort-by", "date", "--dedup-key", "url"])
    assert res.exit_code == 0, res.output
    data = json.loads(res.output)
    assert data == [
        {"title": "T", "link": "https://x.org/1", "author": "Unknown", "publicationDate": "Unknown", "source": "Unknown"}
    ]
    assert captured["args"] == ("", "ai", "date")
    assert captured["config"].dedup_key == "url"


def test_news_command_rejects_bad_config():
    res = runner.invoke(cli.app, ["news", "--dedup-key", "title"])
    assert res.exit_code == 2

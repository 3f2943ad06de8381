from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from newsscope.core.config import EngineConfig, load_config_file, load_env, merge_config
from newsscope.core.errors import InvalidUrl
from newsscope.infra.logging import init_logging
from newsscope.scrape.classifier import classify
from newsscope.scrape.runner import NewsAggregator

app = typer.Typer(help="NewsScope CLI: extract article records from news sites")


def _echo(s: str) -> None:
    typer.echo(s)


@app.callback()
def main() -> None:
    init_logging()


@app.command()
def news(
    url: str = typer.Option("", "--url", help="Target page; omit to use the built-in sites"),
    keyword: str = typer.Option("", "--keyword", "-k", help="Case-insensitive filter on title, author, source"),
    sort_by: str = typer.Option("default", "--sort-by", help="default | date | relevance"),
    listing_timeout: Optional[float] = typer.Option(None, "--listing-timeout", min=0.1),
    article_timeout: Optional[float] = typer.Option(None, "--article-timeout", min=0.1),
    dedup_key: Optional[str] = typer.Option(None, "--dedup-key", help="pair | url"),
    config: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, readable=True),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON here instead of stdout"),
) -> None:
    """Scrape articles and print them as a JSON array."""
    conf = merge_config(
        load_config_file(config),
        load_env(),
        {
            "listing_timeout": listing_timeout,
            "article_timeout": article_timeout,
            "dedup_key": dedup_key,
        },
    )
    try:
        engine_cfg = EngineConfig.from_mapping(conf)
    except ValueError as e:
        typer.secho(f"Invalid configuration: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    try:
        articles = NewsAggregator(engine_cfg).run(url, keyword, sort_by)
    except Exception as e:
        typer.secho(f"Failed to scrape news: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    payload = json.dumps([a.to_dict() for a in articles], ensure_ascii=False, indent=2)
    if output:
        output.write_text(payload, encoding="utf-8")
        _echo(f"Saved {len(articles)} articles: {output}")
    else:
        _echo(payload)


@app.command(name="classify")
def classify_cmd(url: str = typer.Argument(..., help="URL to classify")) -> None:
    """Print whether URL looks like a single article or a listing page."""
    try:
        _echo(classify(url).value)
    except InvalidUrl as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=2)


if __name__ == "__main__":
    app()

"""RTW CLI — inspect moderation verdicts and reputation scores from a shell."""

import logging

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from rtw import __version__

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def main(verbose: bool):
    """RTW — review moderation and reputation scoring.

    Run the moderation pipeline over a piece of review text, or compute the
    helpfulness, rating and trust signals used to rank reviews and companies.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _pipeline(lexicon_path: str | None):
    from rtw.moderation.lexicon import load_lexicon
    from rtw.moderation.pipeline import ContentModerationPipeline, default_pipeline

    if lexicon_path:
        return ContentModerationPipeline(load_lexicon(lexicon_path))
    return default_pipeline()


# ── Moderate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("text")
@click.option("--lexicon", "lexicon_path", default=None, help="Lexicon YAML to use instead of the default")
def moderate(text: str, lexicon_path: str | None):
    """Moderate TEXT and show the verdict.

    Exits with status 1 when the text would be rejected.
    """
    from rtw.moderation.lexicon import LexiconError

    try:
        pipeline = _pipeline(lexicon_path)
    except LexiconError as e:
        console.print(f"[red]Lexicon error:[/] {e}")
        raise SystemExit(2)

    verdict = pipeline.moderate(text)

    table = Table(show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")
    status = "[green]approved[/]" if verdict.is_approved else "[red]rejected[/]"
    table.add_row("Status", status)
    table.add_row("Categories", ", ".join(sorted(c.value for c in verdict.categories)) or "-")
    table.add_row("Flagged words", ", ".join(verdict.flagged_words) or "-")
    table.add_row("Confidence", f"{verdict.confidence:.2f}")
    table.add_row("Length", str(verdict.content_length))
    table.add_row("Processing time", f"{verdict.processing_time.total_seconds() * 1000:.3f} ms")
    if verdict.failed_detectors:
        table.add_row("Failed detectors", ", ".join(verdict.failed_detectors))

    console.print(table)
    if verdict.reason:
        console.print(Panel(verdict.reason, title="Reason"))

    if not verdict.is_approved:
        raise SystemExit(1)


@main.command()
@click.argument("text")
@click.option("--lexicon", "lexicon_path", default=None, help="Lexicon YAML to use instead of the default")
def sanitize(text: str, lexicon_path: str | None):
    """Print TEXT with markup stripped and profanity masked."""
    console.print(_pipeline(lexicon_path).sanitize(text), markup=False, highlight=False)


@main.command(name="lexicon")
@click.option("--lexicon", "lexicon_path", default=None, help="Lexicon YAML to inspect")
def show_lexicon(lexicon_path: str | None):
    """Summarize the lexicon the pipeline would use."""
    from rtw.moderation.lexicon import LexiconError

    try:
        lexicon = _pipeline(lexicon_path).lexicon
    except LexiconError as e:
        console.print(f"[red]Lexicon error:[/] {e}")
        raise SystemExit(2)

    console.print(f"\n[bold blue]RTW[/] — Lexicon: {lexicon.source}\n")
    console.print(f"  {lexicon.summary()}")
    console.print(f"  Suffixes: {', '.join(lexicon.suffixes) or '-'}")
    console.print(f"  Substitutions: {len(lexicon.substitutions)}")
    console.print(f"  Shouting: caps ratio > {lexicon.caps_ratio}, min {lexicon.min_letters} letters")


# ── Scoring ──────────────────────────────────────────────────────────


@main.command(name="score-review")
@click.argument("upvotes", type=click.IntRange(min=0))
@click.argument("downvotes", type=click.IntRange(min=0))
def score_review(upvotes: int, downvotes: int):
    """Helpfulness score of a review with UPVOTES and DOWNVOTES."""
    from rtw.scoring.engine import popularity_score

    console.print(f"{popularity_score(upvotes, downvotes):.2f}")


@main.command(name="score-company")
@click.argument("contributions_path")
@click.option("--now", default=None, help="Reference time (ISO 8601), default: current time")
def score_company(contributions_path: str, now: str | None):
    """Weighted rating and statistics for a company.

    CONTRIBUTIONS_PATH is a YAML list of reviews, each with ``rating`` and
    ``submitted_at`` and optionally ``is_active``, ``is_published``,
    ``is_verified`` and ``comment_type``.
    """
    import yaml

    from rtw.scoring.engine import company_statistics, trust_tier, weighted_average_rating
    from rtw.scoring.models import RatedContribution, to_datetime

    try:
        with open(contributions_path) as f:
            records = yaml.safe_load(f) or []
        contributions = [RatedContribution.from_dict(r) for r in records]
        reference = to_datetime(now) if now else None
    except Exception as e:
        console.print(f"  [red]Failed to read contributions:[/] {e}")
        raise SystemExit(2)

    rating = weighted_average_rating(contributions, reference)
    stats = company_statistics(contributions)
    tier = trust_tier(rating, stats.verified_percentage)

    table = Table(title=f"Company score ({stats.total_reviews} counted reviews)")
    table.add_column("Signal", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Weighted rating", f"{rating:.2f}")
    table.add_row("Plain average", f"{stats.average_rating:.2f}")
    table.add_row("Verified", f"{stats.verified_percentage:.1f}%")
    table.add_row("Trust tier", tier.value)
    console.print(table)


@main.command(name="trust-tier")
@click.argument("average_rating", type=click.FloatRange(0, 5))
@click.argument("verified_percentage", type=click.FloatRange(0, 100))
def show_trust_tier(average_rating: float, verified_percentage: float):
    """Trust tier for AVERAGE_RATING (0-5) and VERIFIED_PERCENTAGE (0-100)."""
    from rtw.scoring.engine import trust_score, trust_tier

    score = trust_score(average_rating, verified_percentage)
    tier = trust_tier(average_rating, verified_percentage)
    console.print(f"{tier.value} (trust score {score})")


@main.command(name="hiring-rate")
@click.argument("hires", type=click.IntRange(min=0))
@click.argument("postings", type=click.IntRange(min=0))
def show_hiring_rate(hires: int, postings: int):
    """Share of POSTINGS that ended in one of HIRES."""
    from rtw.scoring.engine import hiring_rate

    console.print(str(hiring_rate(hires, postings)))


if __name__ == "__main__":
    main()

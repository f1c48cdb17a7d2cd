"""Main entry point for the Fantasy Football Lineup Engine."""

import click

from lineup_engine import LineupOptimizer, ProjectionAggregator, ProjectionScope, Settings
from lineup_engine.data.sleeper_snapshot import SleeperSnapshot
from lineup_engine.errors import LineupEngineError
from lineup_engine.models.lineup import round_points
from lineup_engine.utils.logging_config import setup_logging
from lineup_engine.utils.season import current_season, current_week


@click.group()
@click.option('--log-level', default='INFO',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Set logging level')
@click.option('--log-file', type=click.Path(), help='Log file path')
def cli(log_level, log_file):
    """Fantasy Football Lineup Engine CLI."""
    setup_logging(level=log_level, log_file=log_file)


@cli.command()
@click.option('--snapshot-dir', '-d', required=True,
              type=click.Path(exists=True, file_okay=False),
              help='Directory with saved Sleeper payloads')
@click.option('--league', '-l', help='League name (defaults to DEFAULT_LEAGUE)')
@click.option('--scoring', '-s',
              type=click.Choice(['standard', 'ppr', 'half_ppr']),
              help='Fantasy scoring system (defaults to LINEUP_SCORING)')
@click.option('--week', '-w', type=int, help='Target week (defaults to current)')
@click.option('--season', '-y', type=int, help='Target season (defaults to current)')
@click.option('--no-injury-filter', is_flag=True, help='Ignore injury designations')
def optimize(snapshot_dir, league, scoring, week, season, no_injury_filter):
    """Suggest the optimal starting lineup for your roster."""
    settings = Settings.from_env()
    optimizer = LineupOptimizer(
        settings=settings,
        scoring=scoring,
        injury_filter=False if no_injury_filter else None,
    )

    try:
        report = optimizer.optimize(
            SleeperSnapshot(snapshot_dir), league=league, week=week, season=season
        )
    except (LineupEngineError, FileNotFoundError) as e:
        raise click.ClickException(f"Failed to optimize lineup: {e}")

    click.echo(f"\nOptimal Lineup ({report.league}, Week {report.week}, {report.season}):")
    click.echo("=" * 60)
    for entry in report.optimal.lineup.entries:
        player = entry.player
        if player is None:
            click.echo(f"{entry.slot.code:10} {'(empty)':28}")
            continue
        click.echo(f"{entry.slot.code:10} {player.name or player.player_id:28} "
                   f"{player.position.value:3} {player.team or '':4} "
                   f"{round_points(player.projected_points):6.2f} pts")

    click.echo(f"\nCurrent projected: {round_points(report.current_total, 1):.1f}")
    click.echo(f"Optimal projected: {round_points(report.optimal_total, 1):.1f}")

    if report.is_optimal:
        click.echo("Your lineup is already optimal.")
        return

    click.echo(f"Projected improvement: {round_points(report.projected_improvement, 1):+.1f}")
    click.echo("\nSuggested changes:")
    for change in report.changes:
        current = change.current.name if change.current else (change.current_player_id or '(empty)')
        click.echo(f"  [{change.index}] {change.slot.code:10} {current} -> "
                   f"{change.suggested.name or change.suggested.player_id} "
                   f"({round_points(change.point_gain, 1):+.1f})")


@cli.command()
@click.option('--snapshot-dir', '-d', required=True,
              type=click.Path(exists=True, file_okay=False),
              help='Directory with saved Sleeper payloads')
@click.option('--scoring', '-s', default='ppr',
              type=click.Choice(['standard', 'ppr', 'half_ppr']),
              help='Fantasy scoring system')
@click.option('--week', '-w', type=int, help='Target week (defaults to current)')
@click.option('--season', '-y', type=int, help='Target season (defaults to current)')
@click.option('--output', '-o', type=click.Path(),
              help='Output file path (CSV format)')
def projections(snapshot_dir, scoring, week, season, output):
    """Show aggregated projections for a week."""
    week = week or current_week()
    season = season or current_season()
    scope = ProjectionScope(season=season, week=week, scoring=scoring)

    aggregator = ProjectionAggregator()
    aggregator.ingest(SleeperSnapshot(snapshot_dir).load_projections(week),
                      season=season, week=week, source=snapshot_dir)

    frame = aggregator.to_frame(scope, rounded=True)
    if frame.empty:
        click.echo("No projections found.", err=True)
        return

    click.echo(f"\nTop 20 Projections (Week {week}, {scoring}):")
    click.echo("=" * 60)
    for _, row in frame.head(20).iterrows():
        click.echo(f"{row['player_id']:10} std {row['pts_std']:6.2f}  "
                   f"half {row['pts_half_ppr']:6.2f}  ppr {row['pts_ppr']:6.2f}")

    if output:
        frame.to_csv(output, index=False)
        click.echo(f"\nProjections saved to {output}")

    click.echo(f"\nAggregated {len(frame)} projections.")


if __name__ == '__main__':
    cli()

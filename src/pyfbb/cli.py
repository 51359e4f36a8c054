"""Command-line interface for ranking players from projection files."""

from __future__ import annotations

import argparse
import csv
import logging
from pathlib import Path
from typing import Optional

from pyfbb.config import get_preset, preset_names
from pyfbb.config_loader import ScoringProfile
from pyfbb.estimate import EstimateSelection
from pyfbb.ingest import ID_SOURCES, IdConfig, ParseResult, build_projection_group, load_projection_file
from pyfbb.models import PITCHING_OUTCOME_STATS
from pyfbb.scoring import VIEWS, detect_baseball_ip, rank_players


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank fantasy baseball players from projection exports")
    parser.add_argument(
        "projections",
        type=Path,
        nargs="+",
        help="Batter and/or pitcher projection CSV/TSV files (type is detected from headers)",
    )
    parser.add_argument(
        "--preset",
        default=None,
        help=f"Scoring preset ({', '.join(preset_names())}); defaults to the profile or DEFAULT",
    )
    parser.add_argument("--load-profile", type=Path, help="Load scoring profile JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save scoring profile JSON", default=None)
    parser.add_argument(
        "--id-source",
        choices=ID_SOURCES,
        default=None,
        help="Column used as the player key (auto-detected when omitted)",
    )
    parser.add_argument(
        "--id-column",
        default=None,
        help="Column name to read ids from; implies --id-source custom",
    )
    parser.add_argument(
        "--estimate",
        nargs="*",
        choices=PITCHING_OUTCOME_STATS,
        default=[],
        help="Pitching outcomes to estimate when the source lacks them",
    )
    parser.add_argument("--view", choices=VIEWS, default="all", help="Leaderboard view")
    parser.add_argument(
        "--ip-mode",
        choices=("auto", "baseball", "decimal"),
        default="auto",
        help="How to read IP values: outs notation (10.1 = 10 1/3), raw decimals, or detect",
    )
    parser.add_argument(
        "--merge-two-way",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Rank two-way players as one entry (default) or as separate batter/pitcher rows",
    )
    parser.add_argument("--top", type=int, default=None, help="Only write the top N players")
    parser.add_argument("--output", type=Path, default=Path("leaderboard.csv"), help="Output CSV path")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g., INFO, DEBUG)")
    args = parser.parse_args(argv)
    if len(args.projections) > 2:
        parser.error("pass at most one batter file and one pitcher file")
    if args.id_source == "custom" and not args.id_column:
        parser.error("--id-source custom requires --id-column")
    return args


def _resolve_id_config(args: argparse.Namespace, profile: Optional[ScoringProfile]) -> Optional[IdConfig]:
    if args.id_column:
        return IdConfig(source="custom", custom_column=args.id_column)
    if args.id_source:
        return IdConfig(source=args.id_source)
    return profile.id_config if profile else None


def _summarize(path: Path, result: ParseResult) -> None:
    print(f"Parsed {result.row_count} {result.player_type}s from {path} (ids: {result.id_source})")
    if result.errors:
        preview = "; ".join(result.errors[:3])
        more = len(result.errors) - 3
        suffix = f"; +{more} more" if more > 0 else ""
        print(f"Rows skipped: {preview}{suffix}")
    if result.missing_pitching_outcomes:
        for stat, summary in result.missing_pitching_outcomes.items():
            if summary.missing_player_ids:
                print(
                    f"{stat} missing for {len(summary.missing_player_ids)}/{summary.total_players} pitchers"
                )


def main(argv: Optional[list[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    profile = ScoringProfile.load(args.load_profile) if args.load_profile else None
    if args.preset:
        weights = get_preset(args.preset)
    elif profile:
        weights = profile.weights
    else:
        weights = get_preset("DEFAULT")
    id_config = _resolve_id_config(args, profile)

    results: dict[str, ParseResult] = {}
    for path in args.projections:
        result = load_projection_file(path, id_config=id_config)
        if result.needs_id_selection:
            raise SystemExit(
                f"{path} has no MLBAMID or PlayerId column; choose one of "
                f"{', '.join(result.available_columns)} with --id-column or pass --id-source generated"
            )
        if result.player_type in results:
            raise SystemExit(f"Both files look like {result.player_type} projections")
        results[result.player_type] = result
        _summarize(path, result)

    batter_result = results.get("batter")
    pitcher_result = results.get("pitcher")
    if args.ip_mode == "auto":
        use_baseball_ip = detect_baseball_ip(pitcher_result.players) if pitcher_result else False
    else:
        use_baseball_ip = args.ip_mode == "baseball"

    group = build_projection_group(
        args.projections[0].stem,
        batter_result,
        pitcher_result,
        estimate_selection=EstimateSelection.from_stats(args.estimate),
        use_baseball_ip=use_baseball_ip,
    )
    if group.two_way_players:
        names = ", ".join(player.name for player in group.two_way_players[:5])
        print(f"Merged {len(group.two_way_players)} two-way players: {names}")

    if args.save_profile:
        ScoringProfile(
            weights=weights,
            id_config=id_config or IdConfig(source=(batter_result or pitcher_result).id_source),
        ).save(args.save_profile)
        print(f"Saved scoring profile to {args.save_profile}")

    ranked = rank_players(
        group.all_players(),
        weights,
        args.view,
        use_baseball_ip=use_baseball_ip,
        merge_two_way=args.merge_two_way,
    )
    if args.top is not None:
        ranked = ranked[: max(0, args.top)]

    with args.output.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["rank", "player_id", "name", "team", "kind", "mlbam_id", "projected_points"])
        for item in ranked:
            player = item.player
            writer.writerow([
                item.rank,
                player.player_id,
                player.name,
                player.team,
                player.kind,
                player.mlbam_id,
                f"{item.projected_points:.1f}",
            ])

    print(
        f"Wrote {len(ranked)} players to {args.output} "
        f"({weights.name} scoring, {args.view} view, {'baseball' if use_baseball_ip else 'decimal'} IP)"
    )


if __name__ == "__main__":
    main()

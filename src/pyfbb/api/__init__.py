"""REST API exposing projection parsing, estimation and scoring."""

from __future__ import annotations

import logging
import os
from dataclasses import asdict
from typing import Callable, Dict, List

import uvicorn
from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from pyfbb import __version__
from pyfbb.api.schemas import (
    EligibilityRequest,
    EligibilityResponse,
    EstimateRequest,
    EstimateResponse,
    MissingOutcomeResponse,
    ParseResponse,
    PresetResponse,
    RankedPlayerResponse,
    ScoreRequest,
    ScoreResponse,
)
from pyfbb.config import ScoringWeights, default_weights, get_preset, iter_presets
from pyfbb.eligibility import apply_eligibility, import_season_eligibility
from pyfbb.estimate import EstimateSelection, apply_pitching_outcome_estimates
from pyfbb.ingest import IdConfig, ParseResult, parse_projection_text
from pyfbb.models import MissingOutcome, PitchingOutcomeStat
from pyfbb.scoring import detect_baseball_ip, rank_players
from pyfbb.stats_api import StatsApiClient, StatsApiError


logger = logging.getLogger(__name__)

PLAYER_TYPES = ("batter", "pitcher")
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def _bad_request(exc: Exception) -> HTTPException:
    detail = exc.args[0] if isinstance(exc, KeyError) and exc.args else str(exc)
    return HTTPException(status_code=400, detail=str(detail))


def _parse_response(result: ParseResult) -> ParseResponse:
    missing = None
    if result.missing_pitching_outcomes is not None:
        missing = {
            stat: MissingOutcomeResponse(**asdict(summary))
            for stat, summary in result.missing_pitching_outcomes.items()
        }
    return ParseResponse(
        player_type=result.player_type,
        row_count=result.row_count,
        id_source=result.id_source,
        needs_id_selection=result.needs_id_selection,
        available_columns=result.available_columns,
        errors=result.errors,
        players=result.players,
        missing_pitching_outcomes=missing,
    )


def _resolve_weights(weights: ScoringWeights | None, preset: str | None) -> ScoringWeights:
    if weights is not None:
        return weights
    if preset:
        return get_preset(preset)
    return default_weights()


def _missing_summary(
    missing: Dict[PitchingOutcomeStat, MissingOutcomeResponse]
) -> Dict[PitchingOutcomeStat, MissingOutcome]:
    return {
        stat: MissingOutcome(
            total_players=entry.total_players,
            missing_player_ids=list(entry.missing_player_ids),
        )
        for stat, entry in missing.items()
    }


def create_app(*, stats_client_factory: Callable[[], StatsApiClient] | None = None) -> FastAPI:
    app = FastAPI(title="pyfbb projections", version=__version__)
    app.state.stats_client_factory = stats_client_factory or StatsApiClient

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/presets", response_model=List[PresetResponse])
    async def presets() -> List[PresetResponse]:
        return [PresetResponse(key=key, weights=weights) for key, weights in iter_presets()]

    @app.post("/parse", response_model=ParseResponse)
    async def parse(
        file: UploadFile = File(...),
        player_type: str | None = Form(None),
        id_source: str | None = Form(None),
        custom_column: str | None = Form(None),
    ) -> ParseResponse:
        contents = await file.read()
        if not contents.strip():
            raise HTTPException(status_code=400, detail="projection file is empty")
        if player_type and player_type not in PLAYER_TYPES:
            raise HTTPException(
                status_code=400,
                detail=f"player_type must be one of {', '.join(PLAYER_TYPES)}",
            )

        try:
            id_config = None
            if id_source:
                id_config = IdConfig(source=id_source, custom_column=custom_column or None)  # type: ignore[arg-type]
                if id_config.source == "custom" and not id_config.custom_column:
                    raise ValueError("custom_column is required when id_source is custom")
            text = contents.decode("utf-8-sig")
            result = parse_projection_text(
                text,
                force_type=player_type or None,  # type: ignore[arg-type]
                id_config=id_config,
            )
        except ValueError as exc:
            raise _bad_request(exc) from exc

        logger.info(
            "Parsed upload %s: %d %s players", file.filename, result.row_count, result.player_type
        )
        return _parse_response(result)

    @app.post("/score", response_model=ScoreResponse)
    async def score(request: ScoreRequest) -> ScoreResponse:
        try:
            weights = _resolve_weights(request.weights, request.preset)
            use_baseball_ip = (
                request.use_baseball_ip
                if request.use_baseball_ip is not None
                else detect_baseball_ip(request.players)
            )
            ranked = rank_players(
                request.players,
                weights,
                request.view,
                use_baseball_ip=use_baseball_ip,
                merge_two_way=request.merge_two_way,
            )
        except (KeyError, ValueError, ValidationError) as exc:
            raise _bad_request(exc) from exc

        if request.top is not None:
            ranked = ranked[: request.top]
        return ScoreResponse(
            weights_name=weights.name,
            view=request.view,
            use_baseball_ip=use_baseball_ip,
            players=[
                RankedPlayerResponse(
                    rank=item.rank,
                    projected_points=item.projected_points,
                    player=item.player,
                )
                for item in ranked
            ],
        )

    @app.post("/estimate", response_model=EstimateResponse)
    async def estimate(request: EstimateRequest) -> EstimateResponse:
        try:
            selection = EstimateSelection.from_stats(request.selection)
        except ValueError as exc:
            raise _bad_request(exc) from exc

        use_baseball_ip = (
            request.use_baseball_ip
            if request.use_baseball_ip is not None
            else detect_baseball_ip(request.pitchers)
        )
        pitchers = request.pitchers
        updated = apply_pitching_outcome_estimates(
            pitchers,
            _missing_summary(request.missing),
            selection,
            use_baseball_ip=use_baseball_ip,
        )
        return EstimateResponse(
            changed=updated is not pitchers,
            use_baseball_ip=use_baseball_ip,
            pitchers=list(updated),
        )

    @app.post("/eligibility", response_model=EligibilityResponse)
    async def eligibility(request: EligibilityRequest) -> EligibilityResponse:
        client = app.state.stats_client_factory()
        try:
            async with client:
                eligibility_by_id = await import_season_eligibility(
                    request.players, request.season, client=client
                )
        except StatsApiError as exc:
            logger.warning("Eligibility import failed for %d: %s", request.season, exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc

        return EligibilityResponse(
            season=request.season,
            players=apply_eligibility(request.players, eligibility_by_id),
        )

    return app


def serve() -> None:
    """Run the API with uvicorn; host and port come from ``PYFBB_API_HOST``/``PYFBB_API_PORT``."""

    host = os.getenv("PYFBB_API_HOST", DEFAULT_HOST)
    raw_port = os.getenv("PYFBB_API_PORT")
    port = DEFAULT_PORT
    if raw_port:
        try:
            port = int(raw_port)
        except ValueError:
            logger.warning("Invalid int for PYFBB_API_PORT: %s; using default %d", raw_port, DEFAULT_PORT)
    uvicorn.run(create_app(), host=host, port=port)

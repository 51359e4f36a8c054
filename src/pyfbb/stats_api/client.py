"""Client for season fielding and pitching stats from the MLB Stats API."""

from __future__ import annotations

import logging
import math
import os
import random
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional

import anyio
import httpx

from pyfbb.models import POSITION_ORDER, Position, normalize_position_games


logger = logging.getLogger(__name__)

_BASE_URL_ENV = "PYFBB_STATS_BASE_URL"
_RETRIES_ENV = "PYFBB_STATS_RETRIES"
_BASE_DELAY_ENV = "PYFBB_STATS_BASE_DELAY_MS"
_TIMEOUT_ENV = "PYFBB_STATS_TIMEOUT"

DEFAULT_BASE_URL = "https://statsapi.mlb.com/api/v1"
DEFAULT_RETRIES = 3
DEFAULT_BASE_DELAY_MS = 500.0
DEFAULT_TIMEOUT = 30.0
BATCH_SIZE = 50
MAX_JITTER_MS = 250
SPORT_ID = 1


class StatsApiError(RuntimeError):
    """Raised when stats cannot be fetched after exhausting retries."""


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


@dataclass(frozen=True)
class RetryEvent:
    attempt: int
    delay_ms: float
    status: Optional[int] = None


def _default_jitter() -> float:
    return float(random.randrange(MAX_JITTER_MS))


async def _sleep_ms(delay_ms: float) -> None:
    await anyio.sleep(delay_ms / 1000)


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff for 429/5xx responses and transport failures."""

    retries: int = DEFAULT_RETRIES
    base_delay_ms: float = DEFAULT_BASE_DELAY_MS
    on_retry: Optional[Callable[[RetryEvent], None]] = None
    jitter: Callable[[], float] = _default_jitter
    sleep: Callable[[float], Awaitable[None]] = _sleep_ms

    @classmethod
    def from_env(cls, **overrides: Any) -> "RetryPolicy":
        values: Dict[str, Any] = {
            "retries": _env_int(_RETRIES_ENV, DEFAULT_RETRIES, min_value=0),
            "base_delay_ms": _env_float(_BASE_DELAY_ENV, DEFAULT_BASE_DELAY_MS, clamp_min=0.0),
        }
        values.update(overrides)
        return cls(**values)

    def delay_for(self, attempt: int) -> float:
        return self.base_delay_ms * 2**attempt + self.jitter()


def should_retry_status(status_code: int) -> bool:
    return status_code == 429 or 500 <= status_code < 600


async def request_with_retry(
    send: Callable[[], Awaitable[httpx.Response]],
    policy: RetryPolicy | None = None,
) -> httpx.Response:
    """Run ``send`` until it succeeds or the policy gives up.

    A non-ok response left after the final attempt is returned as-is; a
    transport failure on the final attempt raises :class:`StatsApiError`.
    """

    policy = policy or RetryPolicy()
    for attempt in range(policy.retries + 1):
        try:
            response = await send()
        except httpx.TransportError as exc:
            if attempt == policy.retries:
                raise StatsApiError("Network error fetching MLB Stats API") from exc
            delay_ms = policy.delay_for(attempt)
            logger.warning(
                "Stats API transport error (%s); retry %d in %.0fms", exc, attempt + 1, delay_ms
            )
            if policy.on_retry is not None:
                policy.on_retry(RetryEvent(attempt=attempt + 1, delay_ms=delay_ms))
            await policy.sleep(delay_ms)
            continue

        if response.is_success:
            return response
        if not should_retry_status(response.status_code) or attempt == policy.retries:
            return response

        delay_ms = policy.delay_for(attempt)
        logger.warning(
            "Stats API returned %s; retry %d in %.0fms", response.status_code, attempt + 1, delay_ms
        )
        if policy.on_retry is not None:
            policy.on_retry(
                RetryEvent(attempt=attempt + 1, delay_ms=delay_ms, status=response.status_code)
            )
        await policy.sleep(delay_ms)

    raise StatsApiError("Failed to fetch MLB Stats API")


@dataclass(frozen=True)
class PitchingGames:
    games: float
    games_started: float

    def outranks(self, other: "PitchingGames") -> bool:
        return self.games > other.games or (
            self.games == other.games and self.games_started > other.games_started
        )


@dataclass
class SeasonStats:
    fielding_by_id: Dict[str, Dict[Position, float]] = field(default_factory=dict)
    pitching_by_id: Dict[str, PitchingGames] = field(default_factory=dict)
    primary_position_by_id: Dict[str, str] = field(default_factory=dict)

    def update(self, other: "SeasonStats") -> None:
        self.fielding_by_id.update(other.fielding_by_id)
        self.pitching_by_id.update(other.pitching_by_id)
        self.primary_position_by_id.update(other.primary_position_by_id)


def _as_number(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _pitching_games(stat: Mapping[str, Any]) -> PitchingGames:
    games = stat.get("games")
    if games is None:
        games = stat.get("gamesPlayed")
    return PitchingGames(games=_as_number(games), games_started=_as_number(stat.get("gamesStarted")))


def _keep_best(target: Dict[str, PitchingGames], key: str, candidate: PitchingGames) -> None:
    current = target.get(key)
    if current is None or candidate.outranks(current):
        target[key] = candidate


def _add_position_games(
    target: Dict[str, Dict[Position, float]], key: str, split: Mapping[str, Any]
) -> None:
    position = (split.get("position") or {}).get("abbreviation")
    if position not in POSITION_ORDER:
        return
    games = _as_number((split.get("stat") or {}).get("games"))
    existing = target.setdefault(key, {})
    existing[position] = existing.get(position, 0.0) + games


def _first_splits(data: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    stats = data.get("stats") or []
    if not stats:
        return []
    return stats[0].get("splits") or []


def parse_fielding_stats(data: Mapping[str, Any]) -> Dict[str, Dict[Position, float]]:
    """Sum games per position for each player in a ``/stats`` fielding payload."""

    result: Dict[str, Dict[Position, float]] = {}
    for split in _first_splits(data):
        player_id = (split.get("player") or {}).get("id")
        if not player_id:
            continue
        _add_position_games(result, str(player_id), split)
    return {key: normalize_position_games(value) for key, value in result.items()}


def parse_pitching_stats(data: Mapping[str, Any]) -> Dict[str, PitchingGames]:
    result: Dict[str, PitchingGames] = {}
    for split in _first_splits(data):
        player_id = (split.get("player") or {}).get("id")
        if not player_id:
            continue
        _keep_best(result, str(player_id), _pitching_games(split.get("stat") or {}))
    return result


def parse_people_stats(data: Mapping[str, Any]) -> SeasonStats:
    """Parse a hydrated ``/people`` payload into fielding, pitching and profile maps."""

    parsed = SeasonStats()
    fielding: Dict[str, Dict[Position, float]] = {}
    for person in data.get("people") or []:
        player_id = person.get("id")
        if not player_id:
            continue
        key = str(player_id)
        primary = (person.get("primaryPosition") or {}).get("abbreviation")
        if primary:
            parsed.primary_position_by_id[key] = primary

        for block in person.get("stats") or []:
            group = (block.get("group") or {}).get("displayName")
            splits = block.get("splits") or []
            if group == "fielding":
                for split in splits:
                    _add_position_games(fielding, key, split)
            elif group == "pitching":
                for split in splits:
                    _keep_best(parsed.pitching_by_id, key, _pitching_games(split.get("stat") or {}))

    parsed.fielding_by_id = {key: normalize_position_games(value) for key, value in fielding.items()}
    return parsed


def _batched(items: List[str], size: int) -> Iterable[List[str]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]


class StatsApiClient:
    """Fetches season stats with batching and retry.

    Pass ``http_client`` to reuse a session or inject a mock transport; a
    client created here is closed by :meth:`aclose`.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        retry_policy: RetryPolicy | None = None,
        batch_size: int = BATCH_SIZE,
    ) -> None:
        self.base_url = (base_url or os.getenv(_BASE_URL_ENV) or DEFAULT_BASE_URL).rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=_env_float(_TIMEOUT_ENV, DEFAULT_TIMEOUT, clamp_min=1.0)
        )
        self.retry_policy = retry_policy or RetryPolicy.from_env()
        self.batch_size = max(1, batch_size)

    async def __aenter__(self) -> "StatsApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _get_json(self, path: str, params: Mapping[str, Any], label: str) -> Mapping[str, Any]:
        url = f"{self.base_url}{path}"
        response = await request_with_retry(
            lambda: self._http.get(url, params=params), self.retry_policy
        )
        if not response.is_success:
            raise StatsApiError(f"Failed to fetch {label} ({response.status_code})")
        try:
            return response.json()
        except ValueError as exc:
            raise StatsApiError(f"Invalid JSON in {label} response") from exc

    async def fetch_season_fielding_stats(self, season: int) -> Dict[str, Dict[Position, float]]:
        params = {"stats": "season", "group": "fielding", "season": season, "sportId": SPORT_ID}
        data = await self._get_json("/stats", params, "fielding stats")
        return parse_fielding_stats(data)

    async def fetch_season_pitching_stats(self, season: int) -> Dict[str, PitchingGames]:
        params = {"stats": "season", "group": "pitching", "season": season, "sportId": SPORT_ID}
        data = await self._get_json("/stats", params, "pitching stats")
        return parse_pitching_stats(data)

    async def fetch_season_stats_for_players(
        self, person_ids: Iterable[str], season: int
    ) -> SeasonStats:
        """Fetch fielding/pitching splits for players in batches of ``batch_size``."""

        unique_ids = list(dict.fromkeys(pid.strip() for pid in person_ids if pid and pid.strip()))
        result = SeasonStats()
        if not unique_ids:
            return result

        batches = list(_batched(unique_ids, self.batch_size))
        for index, batch in enumerate(batches, start=1):
            params = {
                "personIds": ",".join(batch),
                "hydrate": f"stats(group=[fielding,pitching],type=[season],season={season})",
            }
            data = await self._get_json("/people", params, "player stats")
            result.update(parse_people_stats(data))
            logger.info("Fetched stats batch %d/%d (%d players)", index, len(batches), len(batch))
        return result

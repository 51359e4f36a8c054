import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from pyfbb.api import create_app
from pyfbb.stats_api import RetryPolicy, StatsApiClient


BATTERS = """Name,Team,PA,AB,H,1B,2B,3B,HR,R,RBI,SB,CS,BB,SO,MLBAMID
Aaron Judge,NYY,680,560,160,85,28,1,46,115,120,8,2,110,170,592450
Shohei Ohtani,LAD,650,580,170,90,30,5,45,120,110,20,4,80,150,660271
"""

PITCHERS = "\n".join(
    [
        "Name\tTeam\tW\tL\tGS\tG\tIP\tERA\tWHIP\tSO\tMLBAMID",
        "Gerrit Cole\tNYY\t14\t7\t30\t30\t190.1\t3.20\t1.08\t222\t543037",
    ]
)


def _stats_client_factory(handler):
    async def no_sleep(delay_ms: float) -> None:
        return None

    def factory() -> StatsApiClient:
        return StatsApiClient(
            base_url="http://stats.test/api/v1",
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
            retry_policy=RetryPolicy(retries=1, base_delay_ms=0, jitter=lambda: 0.0, sleep=no_sleep),
        )

    return factory


@pytest.fixture
async def client():
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_presets(client: AsyncClient):
    response = await client.get("/presets")
    assert response.status_code == 200
    data = response.json()
    assert [item["key"] for item in data][0] == "DEFAULT"
    assert data[0]["weights"]["batting"]["HR"] == 4


@pytest.mark.anyio
async def test_parse_batters(client: AsyncClient):
    response = await client.post(
        "/parse",
        files={"file": ("batters.csv", BATTERS, "text/csv")},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["player_type"] == "batter"
    assert data["row_count"] == 2
    assert data["id_source"] == "MLBAMID"
    assert data["players"][0]["player_id"] == "592450"
    assert data["players"][0]["kind"] == "batter"
    assert data["missing_pitching_outcomes"] is None


@pytest.mark.anyio
async def test_parse_pitchers_reports_missing_outcomes(client: AsyncClient):
    response = await client.post(
        "/parse",
        files={"file": ("pitchers.tsv", PITCHERS, "text/tab-separated-values")},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["player_type"] == "pitcher"
    assert data["missing_pitching_outcomes"]["QS"] == {
        "total_players": 1,
        "missing_player_ids": ["543037"],
    }


@pytest.mark.anyio
async def test_parse_needs_id_selection_then_custom_column(client: AsyncClient):
    content = "Name,PA,AB,fgid\nSomeone,600,550,sa1\n"
    response = await client.post("/parse", files={"file": ("x.csv", content, "text/csv")})
    assert response.status_code == 200
    assert response.json()["needs_id_selection"] is True
    assert response.json()["available_columns"] == ["Name", "PA", "AB", "fgid"]

    response = await client.post(
        "/parse",
        files={"file": ("x.csv", content, "text/csv")},
        data={"id_source": "custom", "custom_column": "fgid"},
    )
    assert response.status_code == 200
    assert response.json()["players"][0]["player_id"] == "sa1"


@pytest.mark.anyio
@pytest.mark.parametrize(
    ("content", "form"),
    [
        ("", {}),
        (BATTERS, {"player_type": "catcher"}),
        (BATTERS, {"id_source": "espn"}),
        (BATTERS, {"id_source": "custom"}),
    ],
)
async def test_parse_rejects_bad_input(client: AsyncClient, content, form):
    response = await client.post(
        "/parse", files={"file": ("x.csv", content, "text/csv")}, data=form
    )
    assert response.status_code == 400


@pytest.mark.anyio
async def test_score_ranks_players(client: AsyncClient):
    players = [
        {"player_id": "b1", "kind": "batter", "R": 10},
        {"player_id": "p1", "kind": "pitcher", "IP": 10.1},
    ]
    response = await client.post(
        "/score",
        json={
            "players": players,
            "weights": {"name": "Mine", "batting": {"R": 1}, "pitching": {"IP": 3}},
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["weights_name"] == "Mine"
    assert data["use_baseball_ip"] is True
    assert [item["player"]["player_id"] for item in data["players"]] == ["p1", "b1"]
    assert data["players"][0]["projected_points"] == pytest.approx(31.0)

    response = await client.post(
        "/score",
        json={
            "players": players,
            "weights": {"batting": {"R": 1}, "pitching": {"IP": 3}},
            "use_baseball_ip": False,
            "view": "pitchers",
        },
    )
    data = response.json()
    assert [item["player"]["player_id"] for item in data["players"]] == ["p1"]
    assert data["players"][0]["projected_points"] == pytest.approx(30.3)


@pytest.mark.anyio
async def test_score_with_preset_and_top(client: AsyncClient):
    players = [{"player_id": str(n), "kind": "batter", "HR": n} for n in range(5)]
    response = await client.post(
        "/score", json={"players": players, "preset": "generic hits", "top": 2}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["weights_name"] == "Generic Hits"
    assert [item["rank"] for item in data["players"]] == [1, 2]
    assert data["players"][0]["player"]["player_id"] == "4"


@pytest.mark.anyio
async def test_score_unknown_preset(client: AsyncClient):
    response = await client.post("/score", json={"players": [], "preset": "nope"})
    assert response.status_code == 400


@pytest.mark.anyio
async def test_estimate_reports_changes(client: AsyncClient):
    pitchers = [{"player_id": "1", "GS": 30, "G": 30, "IP": 190, "ERA": 3.5, "W": 12}]
    missing = {"QS": {"total_players": 1, "missing_player_ids": ["1"]}}

    response = await client.post(
        "/estimate", json={"pitchers": pitchers, "missing": missing, "selection": ["QS"]}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["changed"] is True
    assert data["pitchers"][0]["QS"] > 0

    response = await client.post(
        "/estimate", json={"pitchers": pitchers, "missing": missing, "selection": []}
    )
    assert response.json()["changed"] is False
    assert response.json()["pitchers"][0]["QS"] == 0


@pytest.mark.anyio
async def test_estimate_rejects_unknown_selection(client: AsyncClient):
    response = await client.post("/estimate", json={"pitchers": [], "selection": ["K"]})
    assert response.status_code == 422


@pytest.mark.anyio
async def test_eligibility_import():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "people": [
                    {
                        "id": 592450,
                        "stats": [
                            {
                                "group": {"displayName": "fielding"},
                                "splits": [{"position": {"abbreviation": "RF"}, "stat": {"games": 120}}],
                            }
                        ],
                    }
                ]
            },
        )

    app = create_app(stats_client_factory=_stats_client_factory(handler))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        response = await client.post(
            "/eligibility",
            json={"season": 2025, "players": [{"player_id": "592450", "MLBAMID": "592450", "kind": "batter"}]},
        )

    assert response.status_code == 200
    eligibility = response.json()["players"][0]["eligibility"]
    assert eligibility["eligible_positions"] == ["RF"]
    assert eligibility["source_season"] == 2025


@pytest.mark.anyio
async def test_eligibility_import_maps_fetch_failure_to_502():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    app = create_app(stats_client_factory=_stats_client_factory(handler))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        response = await client.post(
            "/eligibility",
            json={"season": 2025, "players": [{"player_id": "1", "MLBAMID": "1", "kind": "batter"}]},
        )

    assert response.status_code == 502
    assert "Failed to fetch player stats (500)" in response.json()["detail"]


def test_serve_reads_host_and_port(monkeypatch):
    import pyfbb.api as api_module

    calls = []
    monkeypatch.setattr(api_module.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
    monkeypatch.setenv("PYFBB_API_HOST", "0.0.0.0")
    monkeypatch.setenv("PYFBB_API_PORT", "not-a-port")

    api_module.serve()

    assert calls == [{"host": "0.0.0.0", "port": 8000}]

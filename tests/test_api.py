"""End-to-end tests of the HTTP routes with FastAPI's TestClient."""

from torneo_backend.core.roles import Role


def test_register_login_and_me(client):
    response = client.post("/auth/register", json={"email": "ana@torneo.com", "password": "secret123", "name": "Ana"})
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["role"] == "player"

    headers = {"X-Session-Token": body["token"]}
    me = client.get("/auth/me", headers=headers).json()
    assert me["user"]["email"] == "ana@torneo.com"
    assert me["view"]["view"] == "matches"

    assert client.post("/auth/register", json={"email": "ana@torneo.com", "password": "secret123", "name": "X"}).status_code == 401
    assert client.post("/auth/login", json={"email": "ana@torneo.com", "password": "nope-nope"}).status_code == 401


def test_requests_without_session_are_rejected(client):
    response = client.post("/teams/", json={"name": "X", "category": "MASCULINO"})
    assert response.status_code == 401


def test_team_lifecycle(client, login):
    staff = login("mesa", Role.MANAGER)
    player = login("jugador")

    assert client.post("/teams/", json={"name": "X", "category": "MASCULINO"}, headers=player).status_code == 403

    created = client.post("/teams/", json={"name": "Los Rayos", "category": "MASCULINO"}, headers=staff)
    assert created.status_code == 200
    team_id = created.json()["team"]["id"]

    assert [t["name"] for t in client.get("/teams/", params={"category": "MASCULINO"}).json()] == ["Los Rayos"]
    assert client.get("/teams/", params={"category": "FEMENINO_A"}).json() == []

    notes = client.get("/notifications/", headers=player).json()
    assert notes["unread"] == 1
    assert notes["notifications"][0]["title"] == "Nuevo Equipo"

    assert client.delete(f"/teams/{team_id}", headers=staff).status_code == 200
    assert client.get(f"/teams/{team_id}").status_code == 404


def test_result_entry_updates_standings_and_rankings(seeded_client, login):
    client = seeded_client
    staff = login("mesa", Role.MANAGER)

    match = client.post("/matches/", headers=staff, json={
        "round_id": "r1", "category": "MASCULINO", "date": "2023-11-10T18:00:00",
        "home_team_id": "t1", "away_team_id": "t2",
    })
    assert match.status_code == 200
    match_id = match.json()["match"]["id"]

    result = client.put(f"/matches/{match_id}/result", headers=staff, json={
        "home_score": 2, "away_score": 1, "is_played": True, "mvp_player_id": "p1",
        "scorers": [{"player_id": "p1", "count": 2}, {"player_id": "p2", "count": 1}],
        "summary": "discarded",
    })
    assert result.status_code == 200
    assert "summary" not in result.json()["match"]["stats"]

    table = client.get("/standings/MASCULINO").json()
    assert [(row["team"]["id"], row["points"], row["diff"]) for row in table] == [("t1", 3, 1), ("t2", 0, -1)]

    scorers = client.get("/standings/MASCULINO/scorers").json()
    assert [(row["player"]["id"], row["count"]) for row in scorers] == [("p1", 2), ("p2", 1)]
    assert client.get("/standings/MASCULINO/mvp").json()[0]["player"]["name"] == "Juan Perez"

    career = client.get("/teams/t1/career").json()
    assert career["total_goals"] == 2
    assert career["player_goals"][0]["goals"] == 2

    fixtures = client.get("/matches/", params={"category": "MASCULINO"}).json()
    assert fixtures["rounds"][0]["round"]["id"] == "r1"
    assert fixtures["rounds"][0]["matches"][0]["home_team_name"] == "Los Rayos"


def test_invalid_result_rejected(seeded_client, login):
    staff = login("mesa", Role.MANAGER)
    match_id = seeded_client.post("/matches/", headers=staff, json={
        "round_id": "r1", "category": "MASCULINO", "date": "2023-11-10T18:00:00",
        "home_team_id": "t1", "away_team_id": "t2",
    }).json()["match"]["id"]

    response = seeded_client.put(f"/matches/{match_id}/result", headers=staff, json={"home_score": -1})
    assert response.status_code == 422


def test_category_mismatch_is_bad_request(seeded_client, login):
    staff = login("mesa", Role.MANAGER)
    response = seeded_client.post("/matches/", headers=staff, json={
        "round_id": "r1", "category": "MASCULINO", "date": "2023-11-10T18:00:00",
        "home_team_id": "t1", "away_team_id": "t3",
    })
    assert response.status_code == 400


def test_round_deletion_cascades(seeded_client, login):
    client = seeded_client
    staff = login("mesa", Role.MANAGER)
    for hour in (16, 18, 20):
        client.post("/matches/", headers=staff, json={
            "round_id": "r1", "category": "MASCULINO", "date": f"2023-11-10T{hour}:00:00",
            "home_team_id": "t1", "away_team_id": "t2",
        })
    assert len(client.get("/rounds/r1/matches").json()) == 3

    response = client.delete("/rounds/r1", headers=staff)
    assert response.json()["deleted_matches"] == 3
    assert client.get("/rounds/r1/matches").json() == []
    assert client.get("/rounds/").json() == []


def test_captain_manages_own_roster(seeded_client, login):
    client = seeded_client
    captain = login("capitan", Role.CAPTAIN, team_id="t1")

    ok = client.post("/players/", headers=captain, json={"name": "Nuevo", "number": 4, "team_id": "t1"})
    assert ok.status_code == 200
    denied = client.post("/players/", headers=captain, json={"name": "Nuevo", "number": 4, "team_id": "t2"})
    assert denied.status_code == 403

    roster = client.get("/teams/t1/roster").json()
    assert [p["number"] for p in roster] == [4, 10]


def test_owner_updates_roles(seeded_client, login, app):
    client = seeded_client
    owner = login("dueno", Role.OWNER)
    manager = login("mesa", Role.MANAGER)
    target = login("jugador")

    assert client.get("/users/", headers=manager).status_code == 403
    assert len(client.get("/users/", headers=owner).json()) == 3

    response = client.patch("/users/jugador", headers=owner, json={"kind": "assign_team", "role": "captain", "team_id": "t2"})
    assert response.status_code == 200
    assert response.json()["user"]["team_id"] == "t2"

    response = client.patch("/users/jugador", headers=owner, json={"kind": "change_role", "role": "manager"})
    assert response.json()["user"] == {
        "id": "jugador", "email": "jugador@torneo.com", "name": "jugador", "role": "manager", "team_id": "t2",
    }

    notes = client.get("/notifications/", headers=target).json()["notifications"]
    assert [n["title"] for n in notes] == ["Rol Actualizado", "Rol Actualizado"]

    note_id = notes[0]["id"]
    assert client.post(f"/notifications/{note_id}/read", headers=manager).status_code == 403
    assert client.post(f"/notifications/{note_id}/read", headers=target).json()["read"] is True


def test_popup_permission_and_staff_announcements(client, login, app):
    staff = login("mesa", Role.MANAGER)
    player = login("jugador")

    assert client.post("/notifications/permission", headers=staff).json() == {"granted": True}
    sent = client.post("/notifications/", headers=staff, json={"title": "Aviso", "message": "Lluvia"})
    assert sent.status_code == 200
    assert app.state.tournament.popups.delivered[-1][1].title == "Aviso"

    assert client.post("/notifications/", headers=player, json={"title": "x", "message": "y"}).status_code == 403
    assert client.post("/notifications/", headers=staff, json={"user_id": "ghost", "title": "x", "message": "y"}).status_code == 404


def test_view_navigation(client, login):
    headers = login("jugador")

    assert client.get("/views/", headers=headers).json()["view"] == "matches"
    assert client.post("/views/navigate", headers=headers, json={"view": "standings"}).json()["view"] == "standings"

    selected = client.post("/views/select-team", headers=headers, json={"team_id": "t1"}).json()
    assert selected == {"view": "team_detail", "selected_team_id": "t1", "selected_category": "MASCULINO"}

    assert client.post("/views/category", headers=headers, json={"category": "FEMENINO_B"}).json()["selected_category"] == "FEMENINO_B"
    assert client.post("/views/navigate", headers=headers, json={"view": "nowhere"}).status_code == 422

    client.post("/auth/logout", headers=headers)
    assert client.get("/views/", headers=headers).status_code == 401


def test_live_score_entry_and_scorer_split(seeded_client, login):
    client = seeded_client
    staff = login("mesa", Role.MANAGER)
    match_id = client.post("/matches/", headers=staff, json={
        "round_id": "r1", "category": "MASCULINO", "date": "2023-11-10T18:00:00",
        "home_team_id": "t1", "away_team_id": "t2",
    }).json()["match"]["id"]

    for player_id in ("p1", "p1", "p2"):
        response = client.post(f"/matches/{match_id}/goals", headers=staff, json={"player_id": player_id})
        assert response.status_code == 200
    step = client.post(f"/matches/{match_id}/goals", headers=staff, json={"player_id": "p2", "delta": -1}).json()
    assert (step["match"]["stats"]["home_score"], step["match"]["stats"]["away_score"]) == (2, 0)
    assert step["match"]["away_scorers"] == []

    finished = client.post(f"/matches/{match_id}/finish", headers=staff).json()["match"]
    assert finished["stats"]["is_played"] is True
    assert finished["home_scorers"] == [{"player_id": "p1", "name": "Juan Perez", "count": 2}]

    client.put(f"/matches/{match_id}/result", headers=staff, json={
        "home_score": 2, "away_score": 1, "is_played": True,
        "scorers": [{"player_id": "p1", "count": 2}, {"player_id": "p2", "count": 1}, {"player_id": "ghost", "count": 1}],
    })
    card = client.get(f"/matches/{match_id}").json()
    assert [s["player_id"] for s in card["home_scorers"]] == ["p1"]
    assert [s["player_id"] for s in card["away_scorers"]] == ["p2"]

    player = login("jugador")
    assert client.post(f"/matches/{match_id}/goals", headers=player, json={"player_id": "p1"}).status_code == 403
    assert client.post(f"/matches/{match_id}/goals", headers=staff, json={"player_id": "p1", "delta": 0}).status_code == 400


def test_importing_main_builds_no_app(app):
    from torneo_backend import main

    assert "app" not in vars(main)

def _signup(http, email="ada@mail.com", name="Ada", password="hunter22"):
    return http.post("/auth/sign-up", json={"email": email, "password": password, "name": name})


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


def test_health(http):
    r = http.get("/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_sign_up_creates_session_and_profile(http):
    r = _signup(http)
    assert r.status_code == 201
    body = r.json()
    token = body["access_token"]
    user_id = body["user"]["id"]

    me = http.get("/auth/user", headers=_auth(token))
    assert me.status_code == 200
    assert me.json()["email"] == "ada@mail.com"

    profiles = http.get("/profiles", params={"id": [user_id]}, headers=_auth(token)).json()
    assert profiles == [{"id": user_id, "name": "Ada", "email": "ada@mail.com"}]


def test_duplicate_sign_up_is_rejected(http):
    assert _signup(http).status_code == 201
    r = _signup(http, email="ADA@mail.com")
    assert r.status_code == 409


def test_sign_in_and_out(http):
    _signup(http)
    bad = http.post("/auth/sign-in", json={"email": "ada@mail.com", "password": "nope"})
    assert bad.status_code == 401

    r = http.post("/auth/sign-in", json={"email": "ada@mail.com", "password": "hunter22"})
    assert r.status_code == 200
    token = r.json()["access_token"]
    assert http.get("/auth/session", headers=_auth(token)).status_code == 200

    assert http.post("/auth/sign-out", headers=_auth(token)).status_code == 204
    assert http.get("/auth/session", headers=_auth(token)).status_code == 401


def test_routes_require_a_session(http):
    assert http.get("/missions").status_code == 401
    assert http.get("/missions", headers=_auth("not-a-token")).status_code == 401


def test_profile_lookup_by_email(http):
    token = _signup(http).json()["access_token"]
    _signup(http, email="bob@mail.com", name="Bob")

    r = http.get("/profiles/by-email", params={"email": " BOB@mail.com "}, headers=_auth(token))
    assert r.status_code == 200
    assert r.json()["name"] == "Bob"
    missing = http.get("/profiles/by-email", params={"email": "nobody@mail.com"}, headers=_auth(token))
    assert missing.status_code == 404


def test_update_own_profile(http):
    token = _signup(http).json()["access_token"]
    r = http.put("/profiles/me", json={"name": "Ada L."}, headers=_auth(token))
    assert r.status_code == 200
    assert r.json()["name"] == "Ada L."

import uuid

from sqlalchemy import select

from app.models.membership import Membership

def register(client, email: str, first_name: str = "Test", password: str = "password123", **extra) -> dict:
    body = {"firstName": first_name, "lastName": "User", "email": email, "password": password, **extra}
    r = client.post("/auth/register", json=body)
    assert r.status_code == 201, r.text
    return r.json()["data"]

def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def create_org(client, jwt: str, name: str, description: str | None = None) -> dict:
    body = {"name": name}
    if description is not None:
        body["description"] = description
    r = client.post("/api/organisations", json=body, headers=auth(jwt))
    assert r.status_code == 201, r.text
    return r.json()["data"]

def org_names(client, jwt: str) -> set[str]:
    r = client.get("/api/organisations", headers=auth(jwt))
    assert r.status_code == 200, r.text
    return {o["name"] for o in r.json()["data"]["organisations"]}

def test_create_org_makes_creator_a_member(client, account):
    org = create_org(client, account["accessToken"], "Acme", "rockets")
    assert org["name"] == "Acme"
    assert org["description"] == "rockets"
    uuid.UUID(org["orgId"])

    assert org_names(client, account["accessToken"]) == {"Owner's Organisation", "Acme"}

def test_create_org_requires_name(client, account):
    r = client.post("/api/organisations", json={"description": "no name"}, headers=auth(account["accessToken"]))
    assert r.status_code == 422
    assert r.json() == {"errors": [{"field": "name", "message": "Name is required"}]}

    r = client.post("/api/organisations", json={"name": ""}, headers=auth(account["accessToken"]))
    assert r.status_code == 422

def test_create_org_for_missing_account_is_404(client):
    from app.auth.tokens import get_token_codec

    token = get_token_codec().issue(uuid.uuid4())
    r = client.post("/api/organisations", json={"name": "orphan"}, headers=auth(token))
    assert r.status_code == 404

def test_list_is_scoped_to_membership(client, account):
    other = register(client, "stranger@example.com", first_name="Stranger")
    create_org(client, other["accessToken"], "stranger-only")

    assert org_names(client, account["accessToken"]) == {"Owner's Organisation"}
    assert org_names(client, other["accessToken"]) == {"Stranger's Organisation", "stranger-only"}

def test_get_org(client, account):
    org = create_org(client, account["accessToken"], "Visible")

    r = client.get(f"/api/organisations/{org['orgId']}", headers=auth(account["accessToken"]))
    assert r.status_code == 200
    assert r.json()["message"] == "Organisation record fetched successfully"
    assert r.json()["data"] == org

def test_get_unknown_org_is_404(client, account):
    r = client.get(f"/api/organisations/{uuid.uuid4()}", headers=auth(account["accessToken"]))
    assert r.status_code == 404

    r = client.get("/api/organisations/not-a-uuid", headers=auth(account["accessToken"]))
    assert r.status_code == 404

def test_add_user_to_org(client, account):
    org = create_org(client, account["accessToken"], "Team")
    other = register(client, "teammate@example.com", first_name="Mate")

    r = client.post(
        f"/api/organisations/{org['orgId']}/users",
        json={"userId": other["user"]["userId"]},
        headers=auth(account["accessToken"]),
    )
    assert r.status_code == 200, r.text
    assert r.json() == {"status": "success", "message": "User added to organisation successfully"}

    assert "Team" in org_names(client, other["accessToken"])

def test_add_user_twice_keeps_one_membership(client, db_session, account):
    org = create_org(client, account["accessToken"], "Once")
    other = register(client, "twice@example.com")

    for _ in range(2):
        r = client.post(
            f"/api/organisations/{org['orgId']}/users",
            json={"userId": other["user"]["userId"]},
            headers=auth(account["accessToken"]),
        )
        assert r.status_code == 200, r.text

    rows = db_session.scalars(
        select(Membership).where(
            Membership.org_id == uuid.UUID(org["orgId"]),
            Membership.user_id == uuid.UUID(other["user"]["userId"]),
        )
    ).all()
    assert len(rows) == 1

def test_add_user_to_unknown_org_is_404(client, account):
    r = client.post(
        f"/api/organisations/{uuid.uuid4()}/users",
        json={"userId": "x"},
        headers=auth(account["accessToken"]),
    )
    assert r.status_code == 404
    assert r.json()["message"] == "Organisation not found"

def test_add_unknown_user_is_404(client, account):
    org = create_org(client, account["accessToken"], "Nobody")
    r = client.post(
        f"/api/organisations/{org['orgId']}/users",
        json={"userId": str(uuid.uuid4())},
        headers=auth(account["accessToken"]),
    )
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"

def test_add_user_requires_user_id(client, account):
    org = create_org(client, account["accessToken"], "Empty")
    r = client.post(f"/api/organisations/{org['orgId']}/users", json={}, headers=auth(account["accessToken"]))
    assert r.status_code == 422
    assert r.json()["errors"] == [{"field": "userId", "message": "User id is required"}]

def test_org_routes_require_credential(client):
    assert client.post("/api/organisations", json={"name": "x"}).status_code == 403
    assert client.get(f"/api/organisations/{uuid.uuid4()}").status_code == 403
    assert client.post(f"/api/organisations/{uuid.uuid4()}/users", json={"userId": "x"}).status_code == 403

def test_create_org_overlong_name_is_field_error(client, account):
    r = client.post("/api/organisations", json={"name": "n" * 201}, headers=auth(account["accessToken"]))
    assert r.status_code == 422
    assert [e["field"] for e in r.json()["errors"]] == ["name"]

    create_org(client, account["accessToken"], "n" * 200)

from __future__ import annotations

import os
import uuid

import requests
from rich import print

BASE = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")

def post(path: str, *, jwt: str | None = None, json: dict | None = None) -> requests.Response:
    headers = {"content-type": "application/json"}
    if jwt:
        headers["authorization"] = f"Bearer {jwt}"
    return requests.post(f"{BASE}{path}", headers=headers, json=json, timeout=10)

def get(path: str, *, jwt: str | None = None) -> requests.Response:
    headers = {}
    if jwt:
        headers["authorization"] = f"Bearer {jwt}"
    return requests.get(f"{BASE}{path}", headers=headers, timeout=10)

def register(first_name: str, email: str, password: str) -> dict:
    r = post(
        "/auth/register",
        json={"firstName": first_name, "lastName": "Demo", "email": email, "password": password},
    )
    r.raise_for_status()
    return r.json()["data"]

def login(email: str, password: str) -> str:
    r = post("/auth/login", json={"email": email, "password": password})
    r.raise_for_status()
    return r.json()["data"]["accessToken"]

def main() -> None:
    run = uuid.uuid4().hex[:6]
    password = "password123"

    print("[bold]1) register two users[/bold]")
    alice = register("Alice", f"alice+{run}@example.com", password)
    bob = register("Bob", f"bob+{run}@example.com", password)
    print({"alice": alice["user"]["userId"], "bob": bob["user"]["userId"]})

    print("[bold]2) login as alice[/bold]")
    jwt = login(alice["user"]["email"], password)

    print("[bold]3) duplicate registration is rejected[/bold]")
    r = post(
        "/auth/register",
        json={"firstName": "Alice", "lastName": "Again", "email": alice["user"]["email"], "password": password},
    )
    print({"status": r.status_code, "body": r.json()})

    print("[bold]4) create an organisation[/bold]")
    r = post("/api/organisations", jwt=jwt, json={"name": f"demo-org-{run}", "description": "demo"})
    r.raise_for_status()
    org_id = r.json()["data"]["orgId"]
    print(r.json()["data"])

    print("[bold]5) add bob to it[/bold]")
    r = post(f"/api/organisations/{org_id}/users", jwt=jwt, json={"userId": bob["user"]["userId"]})
    r.raise_for_status()
    print(r.json())

    print("[bold]6) bob's organisations[/bold]")
    r = get("/api/organisations", jwt=bob["accessToken"])
    r.raise_for_status()
    print(r.json()["data"]["organisations"])

    print("[bold]7) no token -> 403[/bold]")
    print({"status": get("/api/organisations").status_code})

if __name__ == "__main__":
    main()

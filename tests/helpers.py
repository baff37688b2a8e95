"""
HTTP helpers shared by the API tests.
"""


async def signup_and_login(client, name="Alice", email="alice@x.com", password="secret1") -> str:
    """Register a user over HTTP and return a bearer token for it."""
    resp = await client.post("/auth/signup", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 201, resp.text
    resp = await client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}

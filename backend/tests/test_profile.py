async def test_read_profile(client, register):
    user, headers = await register("alice", displayName="Alice")

    response = await client.get("/api/profile", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == user["id"]
    assert body["email"] == "alice@example.com"
    assert body["displayName"] == "Alice"
    assert "password" not in body
    assert "hashedPassword" not in body


async def test_update_profile_writes_only_sent_fields(client, register):
    _, headers = await register("alice", displayName="Alice")

    response = await client.patch(
        "/api/profile",
        json={"bio": "Writing things down.", "avatarUrl": "https://example.com/a.png"},
        headers=headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["bio"] == "Writing things down."
    assert body["avatarUrl"] == "https://example.com/a.png"
    assert body["displayName"] == "Alice"


async def test_profile_changes_show_up_on_authored_thoughts(client, register):
    _, headers = await register("alice")
    await client.post("/api/thoughts", json={"title": "T", "slug": "t", "content": "c"}, headers=headers)
    await client.patch("/api/profile", json={"displayName": "Alice A."}, headers=headers)

    thought = (await client.get("/api/thoughts/t")).json()
    assert thought["author"]["displayName"] == "Alice A."


async def test_update_profile_rejects_bad_avatar_url(client, register):
    _, headers = await register("alice")

    no_scheme = await client.patch("/api/profile", json={"avatarUrl": "ftp://example.com/a.png"}, headers=headers)
    assert no_scheme.status_code == 400
    assert no_scheme.json()["detail"] == "Avatar URL must start with http:// or https://"

    no_host = await client.patch("/api/profile", json={"avatarUrl": "https://"}, headers=headers)
    assert no_host.status_code == 400
    assert no_host.json()["detail"] == "Invalid Avatar URL format"


async def test_update_profile_rejects_unknown_fields(client, register):
    _, headers = await register("alice")
    response = await client.patch("/api/profile", json={"isAdmin": True}, headers=headers)
    assert response.status_code == 400


async def test_profile_requires_authentication(client):
    assert (await client.get("/api/profile")).status_code == 401
    assert (await client.patch("/api/profile", json={"bio": "x"})).status_code == 401

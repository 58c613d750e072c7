import pytest


@pytest.fixture()
def post_thought(client):
    async def _post(headers, slug, published=True, words=0, tags=()):
        response = await client.post(
            "/api/thoughts",
            json={
                "title": slug.title(),
                "slug": slug,
                "content": "body",
                "isPublished": published,
                "wordCount": words,
                "tagNames": list(tags),
            },
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _post


async def test_stats_on_empty_database(client):
    response = await client.get("/api/stats")
    assert response.status_code == 200
    assert response.json() == {"totalThoughts": 0, "totalTags": 0, "totalWords": 0, "totalViews": 0}


async def test_global_stats_cover_published_thoughts_only(client, register, post_thought):
    _, alice = await register("alice")
    _, bob = await register("bob")
    await post_thought(alice, "one", words=100, tags=["life", "philosophy"])
    await post_thought(bob, "two", words=50, tags=["life"])
    await post_thought(alice, "draft", published=False, words=1000, tags=["secret"])

    await client.get("/api/thoughts/one")
    await client.get("/api/thoughts/one")
    await client.get("/api/thoughts/two")

    stats = (await client.get("/api/stats")).json()
    assert stats == {"totalThoughts": 2, "totalTags": 2, "totalWords": 150, "totalViews": 3}


async def test_my_stats_are_scoped_to_the_caller_except_tags(client, register, post_thought):
    _, alice = await register("alice")
    _, bob = await register("bob")
    await post_thought(alice, "one", words=100, tags=["life"])
    await post_thought(bob, "two", words=50, tags=["food", "art"])
    await post_thought(bob, "hidden", published=False, tags=["secret"])

    await client.get("/api/thoughts/two")

    # totalTags counts every tag on a published thought, not just the caller's
    mine = (await client.get("/api/stats/my", headers=alice)).json()
    assert mine == {"totalThoughts": 1, "totalTags": 3, "totalWords": 100, "totalViews": 0}

    theirs = (await client.get("/api/stats/my", headers=bob)).json()
    assert theirs == {"totalThoughts": 1, "totalTags": 3, "totalWords": 50, "totalViews": 1}


async def test_my_stats_for_new_user_count_no_thoughts(client, register, post_thought):
    _, alice = await register("alice")
    _, bob = await register("bob")
    await post_thought(alice, "one", words=10, tags=["life"])

    stats = (await client.get("/api/stats/my", headers=bob)).json()
    assert stats == {"totalThoughts": 0, "totalTags": 1, "totalWords": 0, "totalViews": 0}


async def test_my_stats_on_empty_database_are_zero(client, register):
    _, headers = await register("alice")
    stats = (await client.get("/api/stats/my", headers=headers)).json()
    assert stats == {"totalThoughts": 0, "totalTags": 0, "totalWords": 0, "totalViews": 0}


async def test_my_stats_require_authentication(client):
    assert (await client.get("/api/stats/my")).status_code == 401

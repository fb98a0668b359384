"""
API тесты: теги.
"""

import pytest


async def create_article(client, headers, **fields):
    payload = {"title": "Hello", "content": "World"}
    payload.update(fields)
    response = await client.post("/api/v1/articles", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["article"]


@pytest.mark.asyncio
async def test_create_tag(client):
    response = await client.post("/api/v1/tags", json={"name": "  python  "})

    assert response.status_code == 201
    assert response.json()["tag"]["name"] == "python"


@pytest.mark.asyncio
async def test_create_tag_is_idempotent(client):
    first = (await client.post("/api/v1/tags", json={"name": "python"})).json()["tag"]
    second = (await client.post("/api/v1/tags", json={"name": "python"})).json()["tag"]

    assert first["id"] == second["id"]
    assert (await client.get("/api/v1/tags")).json()["total"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", "t" * 101, "c++", "<script>"])
async def test_create_tag_validation(client, name):
    response = await client.post("/api/v1/tags", json={"name": name})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_tags_with_count(client, register):
    headers, _ = await register()
    await create_article(client, headers, published=True, tags=["python", "web"])
    await create_article(client, headers, tags=["python"])

    response = await client.get("/api/v1/tags", params={"includeCount": "true"})
    tags = {t["name"]: t["article_count"] for t in response.json()["tags"]}

    assert tags == {"python": 1, "web": 1}


@pytest.mark.asyncio
async def test_search_tags(client):
    for name in ("python", "pytest", "rust"):
        await client.post("/api/v1/tags", json={"name": name})

    response = await client.get("/api/v1/tags", params={"search": "py", "limit": 1})

    assert [t["name"] for t in response.json()["tags"]] == ["pytest"]


@pytest.mark.asyncio
async def test_delete_tag(client, register):
    headers, _ = await register()
    article = await create_article(client, headers, tags=["busy"])
    busy = (await client.get("/api/v1/tags")).json()["tags"][0]
    idle = (await client.post("/api/v1/tags", json={"name": "idle"})).json()["tag"]

    assert (await client.delete(f"/api/v1/tags/{idle['id']}")).status_code == 401

    conflict = await client.delete(f"/api/v1/tags/{busy['id']}", headers=headers)
    assert conflict.status_code == 409

    assert (await client.delete(f"/api/v1/tags/{idle['id']}", headers=headers)).status_code == 200
    assert (await client.delete(f"/api/v1/tags/{idle['id']}", headers=headers)).status_code == 404

    await client.post(f"/api/v1/articles/{article['id']}/tags", json={"tags": []}, headers=headers)
    assert (await client.delete(f"/api/v1/tags/{busy['id']}", headers=headers)).status_code == 200


@pytest.mark.asyncio
async def test_tag_articles(client, register):
    headers, _ = await register()
    await create_article(client, headers, title="Live", published=True, tags=["python"])
    await create_article(client, headers, title="Draft", tags=["python"])
    tag = (await client.get("/api/v1/tags")).json()["tags"][0]

    response = await client.get(f"/api/v1/tags/{tag['id']}/articles")

    assert [a["title"] for a in response.json()["articles"]] == ["Live"]
    assert (await client.get("/api/v1/tags/00000000-0000-0000-0000-000000000000/articles")).status_code == 404


@pytest.mark.asyncio
async def test_tag_articles_pagination_counts_all_pages(client, register):
    headers, _ = await register()
    await create_article(client, headers, title="First", published=True, tags=["python", "web"])
    await create_article(client, headers, title="Second", published=True, tags=["python"])
    await create_article(client, headers, title="Draft", tags=["python"])
    tag = next(t for t in (await client.get("/api/v1/tags")).json()["tags"] if t["name"] == "python")

    body = (await client.get(f"/api/v1/tags/{tag['id']}/articles", params={"limit": 1})).json()

    assert len(body["articles"]) == 1
    assert body["pagination"] == {"page": 1, "limit": 1, "total": 2}
    assert "python" in [t["name"] for t in body["articles"][0]["tags"]]

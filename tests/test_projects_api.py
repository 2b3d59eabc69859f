"""
Projects API: public portfolio, admin CRUD and image upload.
"""

from pathlib import Path

import pytest
from httpx import AsyncClient

from portfolio_api.config import get_settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


async def create_project(client: AsyncClient, headers: dict, **fields) -> dict:
    body = {
        "title": "Portfolio Site",
        "description": "Personal website",
        "content": "Built with FastAPI.",
        **fields,
    }
    response = await client.post("/api/projects/admin", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_project_sanitizes_and_slugs(client: AsyncClient, admin_headers):
    data = await create_project(
        client,
        admin_headers,
        title=" <b>Portfolio</b> Site ",
        technologies=["Python", " <FastAPI> ", "  "],
        project_url="https://example.com",
        github_url="",
    )
    assert data["title"] == "bPortfolio/b Site"
    assert data["slug"] == "bportfolio-b-site"
    assert data["technologies"] == ["Python", "FastAPI"]
    assert data["project_url"] == "https://example.com"
    assert data["github_url"] is None
    assert data["published"] is False
    assert data["published_at"] is None


@pytest.mark.asyncio
async def test_duplicate_project_titles_get_numbered_slugs(client: AsyncClient, admin_headers):
    first = await create_project(client, admin_headers)
    second = await create_project(client, admin_headers)
    assert first["slug"] == "portfolio-site"
    assert second["slug"] == "portfolio-site-1"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"title": ""}, "title"),
        ({"description": "x" * 501}, "description"),
        ({"project_url": "not a url"}, "project_url"),
        ({"github_url": "javascript:alert(1)"}, "github_url"),
    ],
)
async def test_create_project_validation(client: AsyncClient, admin_headers, overrides, field):
    body = {"title": "T", "description": "D", "content": "C", **overrides}
    response = await client.post("/api/projects/admin", json=body, headers=admin_headers)
    assert response.status_code == 400
    assert field in {e["field"] for e in response.json()["errors"]}


@pytest.mark.asyncio
async def test_public_list_only_published(client: AsyncClient, admin_headers):
    await create_project(client, admin_headers, title="Hidden")
    await create_project(client, admin_headers, title="Shown", published=True)
    response = await client.get("/api/projects", params={"published": "false"})
    assert response.status_code == 200
    data = response.json()
    assert [p["title"] for p in data["projects"]] == ["Shown"]
    assert data["pagination"]["total"] == 1


@pytest.mark.asyncio
async def test_public_list_search(client: AsyncClient, admin_headers):
    await create_project(client, admin_headers, title="Chess engine", description="Bitboards", published=True)
    await create_project(client, admin_headers, title="Blog", description="Static site", published=True)
    response = await client.get("/api/projects", params={"search": "bitboard"})
    assert [p["title"] for p in response.json()["projects"]] == ["Chess engine"]


@pytest.mark.asyncio
async def test_public_detail_by_slug(client: AsyncClient, admin_headers):
    await create_project(client, admin_headers, title="Shown", published=True)
    await create_project(client, admin_headers, title="Hidden")
    assert (await client.get("/api/projects/shown")).status_code == 200
    response = await client.get("/api/projects/hidden")
    assert response.status_code == 404
    assert response.json()["detail"] == "Project not found"


@pytest.mark.asyncio
async def test_admin_list_and_filter(client: AsyncClient, admin_headers):
    await create_project(client, admin_headers, title="Hidden")
    await create_project(client, admin_headers, title="Shown", published=True)

    response = await client.get("/api/projects/admin", headers=admin_headers)
    assert response.json()["pagination"]["total"] == 2

    response = await client.get("/api/projects/admin", params={"published": "false"}, headers=admin_headers)
    assert [p["title"] for p in response.json()["projects"]] == ["Hidden"]


@pytest.mark.asyncio
async def test_admin_routes_forbidden_for_non_admin(client: AsyncClient, editor_headers):
    assert (await client.get("/api/projects/admin", headers=editor_headers)).status_code == 403
    assert (await client.get("/api/projects/admin")).status_code == 401


@pytest.mark.asyncio
async def test_admin_get_by_id(client: AsyncClient, admin_headers):
    project = await create_project(client, admin_headers)
    response = await client.get(f"/api/projects/admin/{project['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["title"] == "Portfolio Site"
    assert (await client.get("/api/projects/admin/9999", headers=admin_headers)).status_code == 404


@pytest.mark.asyncio
async def test_update_project(client: AsyncClient, admin_headers):
    project = await create_project(client, admin_headers)
    response = await client.put(
        f"/api/projects/admin/{project['id']}",
        json={"title": "Renamed", "technologies": ["Go"], "published": True},
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["slug"] == "renamed"
    assert data["technologies"] == ["Go"]
    assert data["published_at"] is not None
    assert data["description"] == "Personal website"


@pytest.mark.asyncio
async def test_update_can_clear_links(client: AsyncClient, admin_headers):
    project = await create_project(client, admin_headers, github_url="https://github.com/me/site")
    response = await client.put(
        f"/api/projects/admin/{project['id']}", json={"github_url": None}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["github_url"] is None


@pytest.mark.asyncio
async def test_unpublish_clears_published_at(client: AsyncClient, admin_headers):
    project = await create_project(client, admin_headers, published=True)
    response = await client.put(
        f"/api/projects/admin/{project['id']}", json={"published": False}, headers=admin_headers
    )
    assert response.json()["published_at"] is None


@pytest.mark.asyncio
async def test_empty_update_is_400_even_for_missing_project(client: AsyncClient, admin_headers):
    response = await client.put("/api/projects/admin/9999", json={}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "At least one field must be provided for update"


@pytest.mark.asyncio
async def test_update_missing_project_is_404(client: AsyncClient, admin_headers):
    response = await client.put("/api/projects/admin/9999", json={"title": "x"}, headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_project(client: AsyncClient, admin_headers):
    project = await create_project(client, admin_headers)
    url = f"/api/projects/admin/{project['id']}"
    assert (await client.delete(url, headers=admin_headers)).status_code == 204
    assert (await client.delete(url, headers=admin_headers)).status_code == 404


@pytest.mark.asyncio
async def test_upload_image(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/projects/admin/upload",
        files={"image": ("shot.png", PNG_BYTES, "image/png")},
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["url"] == f"/uploads/{data['filename']}"
    assert data["filename"].startswith("image-")
    assert data["filename"].endswith(".png")
    assert (Path(get_settings().upload_dir) / data["filename"]).read_bytes() == PNG_BYTES

    served = await client.get(data["url"])
    assert served.status_code == 200
    assert served.content == PNG_BYTES


@pytest.mark.asyncio
async def test_uploaded_path_accepted_as_featured_image(client: AsyncClient, admin_headers):
    project = await create_project(client, admin_headers, featured_image="/uploads/image-1-abcd.png")
    assert project["featured_image"] == "/uploads/image-1-abcd.png"


@pytest.mark.asyncio
async def test_upload_rejects_non_image(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/projects/admin/upload",
        files={"image": ("notes.txt", b"hello", "text/plain")},
        headers=admin_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_without_file(client: AsyncClient, admin_headers):
    response = await client.post("/api/projects/admin/upload", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "No file uploaded"


@pytest.mark.asyncio
async def test_upload_too_large(client: AsyncClient, admin_headers, monkeypatch):
    monkeypatch.setattr(get_settings(), "max_upload_bytes", 16)
    response = await client.post(
        "/api/projects/admin/upload",
        files={"image": ("big.png", PNG_BYTES, "image/png")},
        headers=admin_headers,
    )
    assert response.status_code == 413
    assert response.json()["detail"] == "File too large (max 16 bytes)"


@pytest.mark.asyncio
async def test_upload_requires_admin(client: AsyncClient, editor_headers):
    response = await client.post(
        "/api/projects/admin/upload",
        files={"image": ("shot.png", PNG_BYTES, "image/png")},
        headers=editor_headers,
    )
    assert response.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body,field",
    [({"title": "  "}, "title"), ({"description": "   "}, "description"), ({"content": "  "}, "content")],
)
async def test_update_rejects_blank_text(client: AsyncClient, admin_headers, body, field):
    project = await create_project(client, admin_headers)
    response = await client.put(f"/api/projects/admin/{project['id']}", json=body, headers=admin_headers)
    assert response.status_code == 400
    assert field in {e["field"] for e in response.json()["errors"]}


@pytest.mark.asyncio
async def test_markup_only_text_is_rejected(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/projects/admin",
        json={"title": "Real title", "description": "<>", "content": "Body"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Description must not be empty"

    project = await create_project(client, admin_headers)
    url = f"/api/projects/admin/{project['id']}"
    response = await client.put(url, json={"content": "<<>>", "title": "Renamed"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Content must not be empty"

    stored = (await client.get(url, headers=admin_headers)).json()
    assert stored["title"] == "Portfolio Site"
    assert stored["content"] == "Built with FastAPI."

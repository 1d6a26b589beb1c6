"""Integration tests for localized content API endpoints."""

import pytest
from httpx import AsyncClient


class TestGetContent:
    """Test GET /api/content/{type}/{id} endpoint."""

    @pytest.mark.asyncio
    async def test_new_blog_serves_original(self, client: AsyncClient, bromo_blog):
        """Test that a blog without translations falls back to the original."""
        response = await client.get(
            f"/api/content/blog/{bromo_blog.id}", params={"language": "en"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "original-data"
        assert data["language"] == "en"
        assert data["data"]["title"] == "Panduan Bromo"
        assert data["data"]["excerpt"] == "Ringkasan perjalanan ke Bromo"

    @pytest.mark.asyncio
    async def test_partial_translation(self, client: AsyncClient, bromo_blog):
        """Test translated title with original excerpt."""
        await client.put(
            f"/api/translations/blog/{bromo_blog.id}/en",
            json={"fields": {"title": "Bromo Guide"}},
        )

        response = await client.get(
            f"/api/content/blog/{bromo_blog.id}", params={"language": "en"}
        )

        data = response.json()
        assert data["source"] == "database-translation"
        assert data["data"]["title"] == "Bromo Guide"
        assert data["data"]["excerpt"] == "Ringkasan perjalanan ke Bromo"

    @pytest.mark.asyncio
    async def test_after_trigger(self, client: AsyncClient, ijen_package):
        """Test that triggered translations are served."""
        await client.post(
            "/api/translations/trigger",
            json={"contentType": "package", "contentId": ijen_package.id},
        )

        response = await client.get(
            f"/api/content/package/{ijen_package.id}", params={"language": "zh"}
        )

        data = response.json()["data"]
        assert data["title"] == "[zh] Kawah Ijen"
        assert data["includes"] == ["[zh] Transportasi", "[zh] Pemandu"]
        assert data["price"] == 1500000

    @pytest.mark.asyncio
    async def test_default_language_is_source(self, client: AsyncClient, bromo_blog):
        """Test that omitting the language serves the original."""
        response = await client.get(f"/api/content/blog/{bromo_blog.id}")

        assert response.status_code == 200
        assert response.json()["language"] == "id"

    @pytest.mark.asyncio
    async def test_unsupported_language(self, client: AsyncClient, bromo_blog):
        """Test that unsupported languages return 400."""
        response = await client.get(
            f"/api/content/blog/{bromo_blog.id}", params={"language": "fr"}
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Unsupported language: fr"}

    @pytest.mark.asyncio
    async def test_not_found(self, client: AsyncClient):
        """Test that unknown items return 404."""
        response = await client.get("/api/content/gallery/missing", params={"language": "en"})

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Gallery item missing not found"}

    @pytest.mark.asyncio
    async def test_section_by_section_id(self, client: AsyncClient, hero_section):
        """Test that sections are addressed by their section id."""
        response = await client.get("/api/content/section/hero", params={"language": "de"})

        assert response.status_code == 200
        assert response.json()["data"]["title"] == "Jelajahi Indonesia"


class TestListContent:
    """Test GET /api/content/{type} endpoint."""

    @pytest.mark.asyncio
    async def test_list_published(self, client: AsyncClient, bromo_blog):
        """Test listing published blogs."""
        response = await client.get("/api/content/blog", params={"language": "nl"})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["language"] == "nl"
        assert data["data"][0]["id"] == bromo_blog.id

    @pytest.mark.asyncio
    async def test_unknown_content_type(self, client: AsyncClient):
        """Test that unknown content types are rejected."""
        response = await client.get("/api/content/brochure")

        assert response.status_code == 400

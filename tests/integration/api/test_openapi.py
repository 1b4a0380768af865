"""Tests for the generated OpenAPI document."""

import pytest
from httpx import AsyncClient


class TestOpenAPI:
    @pytest.mark.asyncio
    async def test_documents_error_envelope_and_auth_header(self, client: AsyncClient) -> None:
        response = await client.get("/openapi.json")

        assert response.status_code == 200
        schema = response.json()
        assert "ErrorResponse" in schema["components"]["schemas"]
        assert schema["components"]["securitySchemes"]["APIKeyHeader"]["name"] == "x-auth-token"
        like = schema["paths"]["/api/v1/post/like/{post_id}"]["put"]
        assert "401" in like["responses"]

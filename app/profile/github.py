# app/profile/github.py
"""
Proxy a la API de repos de GitHub con el token del servidor.
Cualquier fallo (red, status != 2xx, JSON roto) se reporta como
GithubLookupError; el router lo convierte en 404 sin detalle.
"""
import logging
from typing import Any
from urllib.parse import quote

import httpx
from fastapi import Depends

from app.core.config import Settings, get_settings

log = logging.getLogger("uvicorn")


class GithubLookupError(Exception):
    pass


class GithubClient:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = settings.GITHUB_API_URL.rstrip("/")
        self.token = settings.GITHUB_TOKEN
        self.timeout = settings.GITHUB_TIMEOUT
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"user-agent": "devconnector-api", "accept": "application/vnd.github+json"}
        if self.token:
            headers["authorization"] = f"token {self.token}"
        return headers

    async def list_repos(self, username: str) -> Any:
        url = f"{self.base_url}/users/{quote(username, safe='')}/repos"
        params = {"per_page": 5, "sort": "created:asc"}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url, params=params, headers=self._headers())
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, ValueError) as e:
            log.warning("⚠️ GitHub repos de %r fallaron: %r", username, e)
            raise GithubLookupError(username) from e


def get_github_client(settings: Settings = Depends(get_settings)) -> GithubClient:
    return GithubClient(settings)

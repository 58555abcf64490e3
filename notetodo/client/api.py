"""
Client HTTP asynchrone (httpx) de l'API NoteTodo.

Chaque méthode renvoie l'enveloppe du serveur telle quelle:
{success, data?, count?, error?}. Les erreurs réseau sont converties en
enveloppe d'échec au lieu de lever une exception.
"""
import logging

import httpx

from notetodo.client.session import Session

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000/api/v1"


class NoteTodoClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, session: Session | None = None,
                 transport: httpx.AsyncBaseTransport | None = None, timeout: float = 10.0):
        self.session = session if session is not None else Session()
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Content-Type": "application/json"},
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self):
        await self._http.aclose()

    async def _request(self, method: str, path: str, json: dict | None = None) -> dict:
        try:
            resp = await self._http.request(method, path, json=json, headers=self.session.headers)
        except httpx.HTTPError as e:
            logger.error("request_failed", extra={"method": method, "path": path, "error": str(e)})
            return {"success": False, "error": "Unable to reach the server."}

        if resp.status_code == 401:
            # token invalide / expiré / compte supprimé: on oublie la session
            self.session.clear()

        try:
            return resp.json()
        except ValueError:
            return {"success": False, "error": f"Unexpected response ({resp.status_code})."}

    # --- auth ---
    async def register(self, username: str, password: str, avatar: str | None = None) -> dict:
        payload = {"username": username, "password": password}
        if avatar:
            payload["avatar"] = avatar
        envelope = await self._request("POST", "/auth/register", payload)
        self.session.remember(envelope)
        return envelope

    async def login(self, username: str, password: str) -> dict:
        envelope = await self._request("POST", "/auth/login", {"username": username, "password": password})
        self.session.remember(envelope)
        return envelope

    def logout(self) -> None:
        self.session.clear()

    async def me(self) -> dict:
        envelope = await self._request("GET", "/auth/me")
        if envelope.get("success"):
            self.session.update_identity(envelope.get("data") or {})
        return envelope

    async def update_avatar(self, avatar: str) -> dict:
        envelope = await self._request("PUT", "/auth/avatar", {"avatar": avatar})
        if envelope.get("success"):
            self.session.update_identity(envelope.get("data") or {})
        return envelope

    # --- notes ---
    async def list_notes(self) -> dict:
        return await self._request("GET", "/notes")

    async def get_note(self, note_id: str) -> dict:
        return await self._request("GET", f"/notes/{note_id}")

    async def create_note(self, **fields) -> dict:
        return await self._request("POST", "/notes", fields)

    async def update_note(self, note_id: str, **fields) -> dict:
        return await self._request("PUT", f"/notes/{note_id}", fields)

    async def delete_note(self, note_id: str) -> dict:
        return await self._request("DELETE", f"/notes/{note_id}")

    # --- notebooks ---
    async def list_notebooks(self) -> dict:
        return await self._request("GET", "/notebooks")

    async def get_notebook(self, notebook_id: str) -> dict:
        return await self._request("GET", f"/notebooks/{notebook_id}")

    async def create_notebook(self, **fields) -> dict:
        return await self._request("POST", "/notebooks", fields)

    async def update_notebook(self, notebook_id: str, **fields) -> dict:
        return await self._request("PUT", f"/notebooks/{notebook_id}", fields)

    async def delete_notebook(self, notebook_id: str) -> dict:
        return await self._request("DELETE", f"/notebooks/{notebook_id}")

    async def add_note_to_notebook(self, notebook_id: str, note_id: str) -> dict:
        return await self._request("PUT", f"/notebooks/{notebook_id}/notes/{note_id}")

    async def remove_note_from_notebook(self, notebook_id: str, note_id: str) -> dict:
        return await self._request("DELETE", f"/notebooks/{notebook_id}/notes/{note_id}")

    # --- users ---
    async def list_users(self) -> dict:
        return await self._request("GET", "/users")

    async def get_user(self, user_id: str) -> dict:
        return await self._request("GET", f"/users/{user_id}")

    async def update_user(self, user_id: str, **fields) -> dict:
        return await self._request("PUT", f"/users/{user_id}", fields)

    async def delete_user(self, user_id: str) -> dict:
        return await self._request("DELETE", f"/users/{user_id}")

    # --- weights ---
    async def get_weight_data(self) -> dict:
        return await self._request("GET", "/weights")

    async def save_weight_data(self, profile: dict, records: list | None = None) -> dict:
        payload = {"profile": profile}
        if records is not None:
            payload["records"] = records
        return await self._request("POST", "/weights", payload)

    async def add_weight_record(self, date: str, weight: float, note: str | None = None) -> dict:
        payload = {"date": date, "weight": weight}
        if note:
            payload["note"] = note
        return await self._request("POST", "/weights/record", payload)

    async def delete_weight_record(self, record_id: str) -> dict:
        return await self._request("DELETE", f"/weights/record/{record_id}")

    async def reset_weight_data(self) -> dict:
        return await self._request("DELETE", "/weights")

"""Async wrapper around the AlgoDeck HTTP API."""
import logging
import os
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

API_URL = os.getenv("ALGODECK_API_URL", "http://localhost:5000/api")


class ApiError(Exception):
    """The server answered with an error envelope."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ApiUnavailableError(ApiError):
    """The server could not be reached at all."""

    def __init__(self, message: str):
        super().__init__(0, message)


class ApiClient:
    def __init__(
        self,
        base_url: str = API_URL,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.token = token
        self._http = httpx.AsyncClient(base_url=base_url.rstrip("/"), transport=transport, timeout=timeout)

    async def aclose(self):
        await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = await self._http.request(method, path, json=json, params=params, headers=headers)
        except httpx.TransportError as exc:
            logger.warning("%s %s unreachable: %s", method, path, exc)
            raise ApiUnavailableError(str(exc) or "Server unreachable") from exc

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise ApiError(response.status_code, message or "Request failed")
        return data

    # auth

    async def demo_login(self, email: Optional[str] = None, name: Optional[str] = None):
        return await self.request("POST", "/auth/demo-login", json={"email": email, "name": name})

    async def get_me(self):
        return await self.request("GET", "/auth/me")

    async def update_preferences(self, **preferences):
        return await self.request("PATCH", "/auth/preferences", json=preferences)

    async def logout(self):
        return await self.request("POST", "/auth/logout")

    # note folders

    async def list_note_folders(self):
        return await self.request("GET", "/note-folders")

    async def create_note_folder(self, name: str):
        return await self.request("POST", "/note-folders", json={"name": name})

    async def update_note_folder(self, folder_id: int, name: str):
        return await self.request("PATCH", f"/note-folders/{folder_id}", json={"name": name})

    async def delete_note_folder(self, folder_id: int):
        return await self.request("DELETE", f"/note-folders/{folder_id}")

    # notes

    async def list_notes(self, folder_id: Optional[int] = None, search: Optional[str] = None):
        return await self.request("GET", "/notes", params={"folderId": folder_id, "search": search})

    async def get_note(self, note_id: int):
        return await self.request("GET", f"/notes/{note_id}")

    async def create_note(self, note: Dict[str, Any]):
        return await self.request("POST", "/notes", json=note)

    async def update_note(self, note_id: int, updates: Dict[str, Any]):
        return await self.request("PATCH", f"/notes/{note_id}", json=updates)

    async def toggle_note_pin(self, note_id: int):
        return await self.request("PATCH", f"/notes/{note_id}/pin")

    async def delete_note(self, note_id: int):
        return await self.request("DELETE", f"/notes/{note_id}")

    # question folders

    async def list_question_folders(self):
        return await self.request("GET", "/question-folders")

    async def create_question_folder(self, name: str):
        return await self.request("POST", "/question-folders", json={"name": name})

    async def add_subfolder(self, folder_id: int, name: str):
        return await self.request("POST", f"/question-folders/{folder_id}/subfolders", json={"name": name})

    async def update_question_folder(self, folder_id: int, name: str):
        return await self.request("PATCH", f"/question-folders/{folder_id}", json={"name": name})

    async def delete_question_folder(self, folder_id: int):
        return await self.request("DELETE", f"/question-folders/{folder_id}")

    # questions

    async def list_questions(
        self,
        folder_id: Optional[int] = None,
        difficulty: Optional[str] = None,
        completed: Optional[bool] = None,
        search: Optional[str] = None,
    ):
        params = {
            "folderId": folder_id,
            "difficulty": difficulty,
            "completed": None if completed is None else str(completed).lower(),
            "search": search,
        }
        return await self.request("GET", "/questions", params=params)

    async def get_question_stats(self):
        return await self.request("GET", "/questions/stats")

    async def get_question(self, question_id: int):
        return await self.request("GET", f"/questions/{question_id}")

    async def create_question(self, question: Dict[str, Any]):
        return await self.request("POST", "/questions", json=question)

    async def update_question(self, question_id: int, updates: Dict[str, Any]):
        return await self.request("PATCH", f"/questions/{question_id}", json=updates)

    async def toggle_question_complete(self, question_id: int):
        return await self.request("PATCH", f"/questions/{question_id}/complete")

    async def delete_question(self, question_id: int):
        return await self.request("DELETE", f"/questions/{question_id}")

"""
Session-local mirror of a user's four entity collections.

Every mutation sends its request first and folds only the entity the server
returned: insert, replace by id, or remove by id. A failed request leaves the
collections untouched and the error propagates to the caller; nothing is
retried. ``refresh_data`` re-fetches everything to heal drift.

Folds are plain synchronous code run on the event loop between awaits, so two
folds never interleave.
"""
import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from client.api import ApiClient
from client.auth import AuthSession

logger = logging.getLogger(__name__)

Entity = Dict[str, Any]


class DegradedSessionError(Exception):
    """Raised when a sync is attempted without a store-backed session."""


def _replace(items: List[Entity], entity: Entity) -> List[Entity]:
    return [entity if item["id"] == entity["id"] else item for item in items]


def _remove(items: List[Entity], entity_id) -> List[Entity]:
    return [item for item in items if item["id"] != entity_id]


def _bump_note_count(folders: List[Entity], folder_id, delta: int) -> List[Entity]:
    bumped = []
    for f in folders:
        if f["id"] == folder_id:
            f = {**f, "noteCount": max(0, (f.get("noteCount") or 0) + delta)}
        bumped.append(f)
    return bumped


def _parse_ts(value: Optional[str]) -> datetime:
    if not value:
        return datetime.min
    return datetime.fromisoformat(value.replace("Z", "+00:00")).replace(tzinfo=None)


class DataCache:
    def __init__(self, api: ApiClient, auth: AuthSession):
        self.api = api
        self.auth = auth
        self.note_folders: List[Entity] = []
        self.notes: List[Entity] = []
        self.question_folders: List[Entity] = []
        self.questions: List[Entity] = []
        self.loading = False
        self.error: Optional[str] = None

    def _require_backed(self):
        if not self.auth.is_backed:
            raise DegradedSessionError(
                f"Session is {self.auth.status.value}; nothing can be synced with the server"
            )

    # lifecycle

    def clear(self):
        self.note_folders = []
        self.notes = []
        self.question_folders = []
        self.questions = []
        self.error = None
        self.loading = False

    async def sync_with_session(self):
        """Fetch everything for a store-backed session, otherwise start empty."""
        if self.auth.is_backed:
            await self.fetch_all()
        else:
            self.clear()

    async def fetch_all(self):
        self._require_backed()
        self.loading = True
        self.error = None
        try:
            # wait for all four so no request is left running after a failure
            results = await asyncio.gather(
                self.api.list_note_folders(),
                self.api.list_notes(),
                self.api.list_question_folders(),
                self.api.list_questions(),
                return_exceptions=True,
            )
        finally:
            self.loading = False

        failure = next((r for r in results if isinstance(r, BaseException)), None)
        if failure is not None:
            logger.error("Fetching data failed: %s", failure)
            self.error = str(failure)
            raise failure

        note_folders, notes, question_folders, questions = results
        self.note_folders = note_folders.get("folders", [])
        self.notes = notes.get("notes", [])
        self.question_folders = question_folders.get("folders", [])
        self.questions = questions.get("questions", [])

    async def refresh_data(self):
        await self.fetch_all()

    # note folders

    async def add_note_folder(self, name: str) -> Entity:
        self._require_backed()
        folder = (await self.api.create_note_folder(name))["folder"]
        self.note_folders = self.note_folders + [folder]
        return folder

    async def update_note_folder(self, folder_id, name: str) -> Entity:
        self._require_backed()
        folder = (await self.api.update_note_folder(folder_id, name))["folder"]
        self.note_folders = _replace(self.note_folders, folder)
        return folder

    async def delete_note_folder(self, folder_id):
        self._require_backed()
        await self.api.delete_note_folder(folder_id)
        self.note_folders = _remove(self.note_folders, folder_id)
        self.notes = [n for n in self.notes if n["folderId"] != folder_id]

    # notes

    async def add_note(self, note: Entity) -> Entity:
        self._require_backed()
        created = (await self.api.create_note(note))["note"]
        self.notes = self.notes + [created]
        self.note_folders = _bump_note_count(self.note_folders, created["folderId"], +1)
        return created

    async def update_note(self, note_id, updates: Entity) -> Entity:
        self._require_backed()
        previous = next((n for n in self.notes if n["id"] == note_id), None)
        updated = (await self.api.update_note(note_id, updates))["note"]
        self.notes = _replace(self.notes, updated)
        if previous is not None and previous["folderId"] != updated["folderId"]:
            self.note_folders = _bump_note_count(self.note_folders, previous["folderId"], -1)
            self.note_folders = _bump_note_count(self.note_folders, updated["folderId"], +1)
        return updated

    async def delete_note(self, note_id):
        self._require_backed()
        note = next((n for n in self.notes if n["id"] == note_id), None)
        await self.api.delete_note(note_id)
        self.notes = _remove(self.notes, note_id)
        if note is not None:
            self.note_folders = _bump_note_count(self.note_folders, note["folderId"], -1)

    async def toggle_note_pin(self, note_id) -> Entity:
        self._require_backed()
        updated = (await self.api.toggle_note_pin(note_id))["note"]
        self.notes = _replace(self.notes, updated)
        return updated

    # question folders

    async def add_question_folder(self, name: str) -> Entity:
        self._require_backed()
        folder = (await self.api.create_question_folder(name))["folder"]
        self.question_folders = self.question_folders + [folder]
        return folder

    async def add_subfolder(self, parent_id, name: str) -> Entity:
        self._require_backed()
        folder = (await self.api.add_subfolder(parent_id, name))["folder"]
        self.question_folders = _replace(self.question_folders, folder)
        return folder

    async def update_question_folder(self, folder_id, name: str) -> Entity:
        self._require_backed()
        folder = (await self.api.update_question_folder(folder_id, name))["folder"]
        self.question_folders = _replace(self.question_folders, folder)
        return folder

    async def delete_question_folder(self, folder_id):
        self._require_backed()
        await self.api.delete_question_folder(folder_id)
        folder = next((f for f in self.question_folders if f["id"] == folder_id), None)
        doomed = {folder_id}
        if folder is not None:
            doomed.update(sf["id"] for sf in folder.get("subfolders", []))

        self.question_folders = _remove(self.question_folders, folder_id)
        self.questions = [q for q in self.questions if q["folderId"] not in doomed]

    # questions

    async def add_question(self, question: Entity) -> Entity:
        self._require_backed()
        created = (await self.api.create_question(question))["question"]
        self.questions = self.questions + [created]
        return created

    async def update_question(self, question_id, updates: Entity) -> Entity:
        self._require_backed()
        updated = (await self.api.update_question(question_id, updates))["question"]
        self.questions = _replace(self.questions, updated)
        return updated

    async def delete_question(self, question_id):
        self._require_backed()
        await self.api.delete_question(question_id)
        self.questions = _remove(self.questions, question_id)

    async def toggle_question_complete(self, question_id) -> Entity:
        self._require_backed()
        updated = (await self.api.toggle_question_complete(question_id))["question"]
        self.questions = _replace(self.questions, updated)
        return updated

    # derived views

    def get_stats(self) -> Dict[str, int]:
        total_questions = len(self.questions)
        completed = sum(1 for q in self.questions if q.get("isCompleted"))
        return {
            "totalNotes": len(self.notes),
            "totalQuestions": total_questions,
            "completedQuestions": completed,
            "completionRate": int(completed * 100 / total_questions + 0.5) if total_questions else 0,
        }

    def get_recent_activity(self, limit: int = 5) -> List[Entity]:
        activity = [
            {
                "type": "note",
                "id": n["id"],
                "title": n["title"],
                "updatedAt": n.get("updatedAt"),
                "folderId": n["folderId"],
            }
            for n in self.notes
        ]
        activity += [
            {
                "type": "question",
                "id": q["id"],
                "title": q["title"],
                "difficulty": q.get("difficulty"),
                "updatedAt": q.get("completedAt") or q.get("updatedAt"),
                "folderId": q["folderId"],
            }
            for q in self.questions
            if q.get("isCompleted")
        ]
        activity.sort(key=lambda a: _parse_ts(a["updatedAt"]), reverse=True)
        return activity[:limit]

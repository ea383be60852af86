from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

from ankiconnect.envelope import unwrap_response

from .base import ActionMixin


class MiscActions(ActionMixin):

    def sync(self) -> None:
        """Synchronize the local Anki collection with AnkiWeb."""
        self.invoke("sync")

    def request_permission(self) -> Dict[str, Any]:
        return dict(self.invoke("requestPermission") or {})

    def get_profiles(self) -> List[str]:
        return list(self.invoke("getProfiles") or [])

    def load_profile(self, name: str) -> bool:
        return bool(self.invoke("loadProfile", {"name": name}))

    def reload_collection(self) -> None:
        self.invoke("reloadCollection")

    def multi(self, actions: Sequence[Mapping[str, Any]]) -> List[Any]:
        """Run several actions in one request.

        Args:
            actions: Mappings with ``action`` and optional ``params``

        Returns:
            The result of each action, in order

        Raises:
            AnkiConnectError: For the first action AnkiConnect reports an error on
        """
        if not actions:
            return []
        batch = []
        for item in actions:
            # Without a version AnkiConnect answers inner actions with bare results
            entry: Dict[str, Any] = {"action": item["action"], "version": self.min_version}
            if item.get("params"):
                entry["params"] = dict(item["params"])
            batch.append(entry)
        results = self.invoke("multi", {"actions": batch}) or []
        return [unwrap_response(envelope, entry["action"]) for envelope, entry in zip(results, batch)]

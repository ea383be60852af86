from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from ankiconnect.errors import AnkiConnectError
from ankiconnect.schemas import ModelInput

from .base import ActionMixin

logger = logging.getLogger(__name__)


class ModelActions(ActionMixin):

    def model_names(self) -> List[str]:
        """Get list of all note type names."""
        return list(self.invoke("modelNames") or [])

    def model_names_and_ids(self) -> Dict[str, int]:
        return dict(self.invoke("modelNamesAndIds") or {})

    def model_field_names(self, model_name: str) -> List[str]:
        return list(self.invoke("modelFieldNames", {"modelName": model_name}) or [])

    def create_model(self, model: ModelInput | Mapping[str, Any]) -> Dict[str, Any]:
        """Create a new note type (model) in Anki.

        Args:
            model: ModelInput, or a mapping with modelName, inOrderFields, css and cardTemplates

        Returns:
            The created model object as reported by AnkiConnect
        """
        if not isinstance(model, ModelInput):
            model = ModelInput.model_validate(model)
        return self.invoke("createModel", model.to_params())

    def ensure_model(self, model: ModelInput | Mapping[str, Any]) -> bool:
        """Create the note type unless one with the same name already exists.

        Returns:
            True if the model was created, False if it was already there
        """
        if not isinstance(model, ModelInput):
            model = ModelInput.model_validate(model)
        if model.model_name in self.model_names():
            return False
        try:
            self.create_model(model)
        except AnkiConnectError as e:
            # Created by someone else between the two calls
            if "already exists" not in str(e).lower():
                raise
            logger.debug("Model already exists", extra={"model": model.model_name})
            return False
        logger.info("Created model", extra={"model": model.model_name})
        return True

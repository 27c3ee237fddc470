# classbook/core/errors.py
"""Domain errors raised below the routers and turned into HTTP errors there."""
from typing import Any, Dict, Optional


class ClassbookError(Exception):
    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(ClassbookError):
    status_code = 404

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} not found", {"entity": entity, "id": entity_id})


class AccessDeniedError(ClassbookError):
    status_code = 403

    def __init__(self, class_id: Any):
        super().__init__("No assignment for this class", {"class_id": class_id})

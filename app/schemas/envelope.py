"""
Response envelope shared by every API endpoint.

    {"success": true, "data": ..., "count": 3}
    {"success": false, "error": "Validation error", "details": [...]}

Members that are not set are left out of the JSON body.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class Envelope(BaseModel):
    success: bool
    data: Optional[Any] = None
    count: Optional[int] = None
    message: Optional[str] = None
    error: Optional[str] = None
    details: Optional[List[str]] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def success_payload(
    data: Any = None,
    count: Optional[int] = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    return Envelope(success=True, data=data, count=count, message=message).to_payload()


def error_payload(error: str, details: Optional[List[str]] = None) -> Dict[str, Any]:
    return Envelope(success=False, error=error, details=details).to_payload()

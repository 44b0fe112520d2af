from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class ErrorItem(BaseModel):
    msg: str
    field: Optional[str] = None
    code: Optional[str] = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: List[ErrorItem] = []

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with JSON-serializable values."""
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def fail(cls, message: str, errors: Optional[List[Dict[str, Any]]] = None, code: Optional[str] = None) -> "ErrorResponse":
        items = [ErrorItem(**e) for e in errors] if errors else [ErrorItem(msg=message, code=code)]
        return cls(message=message, errors=items)


class MessageResponse(BaseModel):
    success: bool = True
    message: str

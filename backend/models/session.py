from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class ChatSession(BaseModel):
    session_id: str
    api_key: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    sending: bool = False   # true while a resolution is in flight

    def set_key(self, key: str) -> None:
        self.api_key = key

    def clear_key(self) -> None:
        self.api_key = None

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict

NotificationType = Literal["achievement", "streak", "milestone", "topic", "summary", "system"]


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    title: str
    message: str
    type: NotificationType
    is_read: bool = False
    created_at: datetime
    link: Optional[str] = None

    def to_api(self) -> dict:
        """Wire shape used by the notifications endpoints and the bell client."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "message": self.message,
            "type": self.type,
            "isRead": self.is_read,
            "createdAt": self.created_at.isoformat(),
            "link": self.link,
        }

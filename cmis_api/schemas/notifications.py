### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Notification Schemas -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Notification Schemas
"""

from datetime import datetime

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    """In-app notification"""
    id: str
    user_id: str
    title: str
    message: str
    type: str
    link: str | None = None
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class EventRequest(BaseModel):
    """
    Body of the publish endpoints.

    Fields are optional here on purpose: presence and blankness are checked
    by the event constructor, which reports the offending field.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    event_type: Optional[str] = Field(default=None, alias="eventType")
    metadata: Optional[Dict[str, Any]] = None

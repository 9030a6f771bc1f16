from pydantic import BaseModel
from typing import List, Optional


class SubscriptionKeys(BaseModel):
    p256dh: Optional[str] = None
    auth: Optional[str] = None


class SubscriptionPayload(BaseModel):
    endpoint: Optional[str] = None
    keys: Optional[SubscriptionKeys] = None


class SubscribeRequest(BaseModel):
    subscription: Optional[SubscriptionPayload] = None
    topics: Optional[List[str]] = None


class UnsubscribeRequest(BaseModel):
    endpoint: Optional[str] = None


class BroadcastRequest(BaseModel):
    title: str
    body: str
    topic: str = "news"
    url: Optional[str] = None

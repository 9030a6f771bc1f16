from sqlalchemy import Column, DateTime, Integer, JSON, String
from amesp.database import Base
from datetime import datetime


class PushSubscription(Base):
    __tablename__ = "push_subscriptions"

    id = Column(Integer, primary_key=True, index=True)
    endpoint = Column(String(1000), unique=True, nullable=False)
    p256dh = Column(String(255), nullable=False)
    auth = Column(String(255), nullable=False)
    topics = Column(JSON, nullable=False, default=list)  # 'news', 'events', 'payments'
    created_at = Column(DateTime, default=datetime.utcnow)

"""
System log model - diagnostic events surfaced to platform operators
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, func
from waveorder.database import Base


class SystemLog(Base):
    __tablename__ = "system_logs"

    id = Column(Integer, primary_key=True, index=True)
    log_type = Column(String, nullable=False, index=True)  # storefront_404, storefront_error, ...
    severity = Column(String, nullable=False, default="info")  # info, warning, error
    slug = Column(String, nullable=True, index=True)
    business_id = Column(String, nullable=True, index=True)

    # Request context
    endpoint = Column(String, nullable=True)
    method = Column(String, nullable=True)
    status_code = Column(Integer, nullable=True)
    ip_address = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)
    referrer = Column(String, nullable=True)

    error_message = Column(Text, nullable=True)
    context = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

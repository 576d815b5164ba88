from sqlalchemy import Column, DateTime, Integer, String, func

from app.core.database import Base


class InvoiceSequence(Base):
    """Last allocated invoice sequence number per year+month bucket."""

    __tablename__ = "invoice_sequences"

    period = Column(String(7), primary_key=True)  # YYYY-MM
    last_value = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

from sqlalchemy import Boolean, Column, Integer, String

from .database import Base


class StoreHours(Base):
    __tablename__ = "store_hours"

    id = Column(String, primary_key=True, index=True)
    day_of_week = Column(Integer, index=True, nullable=False)  # 0=Sunday, 6=Saturday
    start_time = Column(String(5), nullable=False)  # "HH:MM", store zone
    end_time = Column(String(5), nullable=False)
    is_open = Column(Boolean, nullable=False, default=True)


class StoreOverride(Base):
    __tablename__ = "store_overrides"

    id = Column(String, primary_key=True, index=True)
    month = Column(Integer, index=True, nullable=False)
    day = Column(Integer, index=True, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    is_open = Column(Boolean, nullable=False, default=False)

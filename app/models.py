from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    session_id = Column(String, unique=True, index=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    votes = relationship("Vote", back_populates="user", order_by="Vote.id")


class SummerHouse(Base):
    __tablename__ = "summer_houses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    image_url = Column(String, nullable=False)
    booking_url = Column(String, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    votes = relationship("Vote", back_populates="summer_house")


class Vote(Base):
    __tablename__ = "votes"
    # Один голос пользователя за один дом
    __table_args__ = (
        UniqueConstraint("user_id", "summer_house_id", name="uq_votes_user_house"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    summer_house_id = Column(
        Integer, ForeignKey("summer_houses.id"), nullable=False, index=True
    )
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="votes")
    summer_house = relationship("SummerHouse", back_populates="votes")

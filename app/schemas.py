from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, StrictInt, constr
from pydantic.alias_generators import to_camel

NonEmptyStr = constr(strip_whitespace=True, min_length=1)

# Идентификатор должен помещаться в INTEGER базы (знаковые 64 бита)
RowId = Annotated[StrictInt, Field(ge=-(2**63), le=2**63 - 1)]


class ApiModel(BaseModel):
    # Наружу поля уходят в camelCase (sessionId, summerHouseId, ...)
    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


# --- Запросы ---


class UserCreate(ApiModel):
    name: NonEmptyStr
    email: NonEmptyStr


class EmailRequest(ApiModel):
    email: NonEmptyStr


class VoteRequest(ApiModel):
    summer_house_id: RowId


# --- Сущности ---


class SummerHouse(ApiModel):
    id: int
    name: str
    image_url: str
    booking_url: str
    created_at: Optional[datetime] = None


class SummerHouseWithVoteCount(SummerHouse):
    vote_count: int


class Vote(ApiModel):
    id: int
    user_id: int
    summer_house_id: int
    created_at: Optional[datetime] = None


class VoteStamp(ApiModel):
    summer_house_id: int
    created_at: Optional[datetime] = None


class User(ApiModel):
    id: int
    name: str
    email: str
    session_id: str
    created_at: Optional[datetime] = None


class UserWithVotes(User):
    votes: List[VoteStamp] = []


# --- Ответы ---


class UserResponse(ApiModel):
    user: UserWithVotes


class CheckUserResponse(ApiModel):
    exists: bool


class SuccessResponse(ApiModel):
    success: bool


class SummerHousesResponse(ApiModel):
    summer_houses: List[SummerHouse]


class VoteResponse(ApiModel):
    vote: Vote
    user: UserWithVotes


class DeleteVoteResponse(ApiModel):
    success: bool
    user: UserWithVotes


class ResultsResponse(ApiModel):
    results: List[SummerHouseWithVoteCount]

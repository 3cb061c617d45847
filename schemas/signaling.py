from pydantic import BaseModel, Field
from typing import Any


class Peer(BaseModel):
    connection_id: str
    display_name: str
    room_id: str


class JoinRoomMessage(BaseModel):
    room_id: str = Field(alias="roomId")
    username: str


class OfferMessage(BaseModel):
    offer: Any
    to: str


class AnswerMessage(BaseModel):
    answer: Any
    to: str


class IceCandidateMessage(BaseModel):
    candidate: Any
    to: str


class ScreenShareMessage(BaseModel):
    room_id: str = Field(alias="roomId")

"""Conversation data models."""
from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Author of a conversation turn."""
    USER = "user"
    MODEL = "model"


@dataclass(frozen=True)
class Turn:
    """Represents a single role-tagged message in a conversation."""
    role: Role
    text: str

    @classmethod
    def user(cls, text: str) -> "Turn":
        return cls(role=Role.USER, text=text)

    @classmethod
    def model(cls, text: str) -> "Turn":
        return cls(role=Role.MODEL, text=text)

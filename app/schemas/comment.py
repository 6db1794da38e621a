from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    text: str = Field(..., max_length=2000)


class CommentResponse(BaseModel):
    id: int
    text: str
    author_name: str
    created: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_comment(cls, comment) -> "CommentResponse":
        return cls(
            id=comment.id,
            text=comment.text,
            author_name=comment.author.name,
            created=comment.created,
        )

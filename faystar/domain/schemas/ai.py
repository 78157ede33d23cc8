from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Request(BaseModel):
    """Inbound requests accept camelCase keys; semantic checks live in the normalizers."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatTurn(_Request):
    role: str
    content: str


class ChatRequest(_Request):
    message: Optional[str] = None
    conversation_history: List[ChatTurn] = Field(default_factory=list)
    model: Optional[str] = None


class VoiceRequest(_Request):
    text: Optional[str] = None
    voice: Optional[str] = None
    speed: Optional[float] = None


class ImageRequest(_Request):
    prompt: Optional[str] = None
    size: Optional[str] = None
    quality: Optional[str] = None
    style: Optional[str] = None


class AnalyzeRequest(_Request):
    text: Optional[str] = None
    type: Optional[str] = Field(default=None, description="sentiment, keywords, summary or language")

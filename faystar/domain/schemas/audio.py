from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TTSRequest(BaseModel):
    """Text-to-speech request; stability and similarity accept 0-1 or 0-100."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: Optional[str] = None
    voice_id: Optional[str] = None
    stability: Optional[float] = None
    similarity: Optional[float] = None

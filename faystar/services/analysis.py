import random
import re
from typing import Any, Dict, Optional

from faystar.core.exceptions import ValidationException

ANALYSIS_TYPES = ("sentiment", "keywords", "summary", "language")
SENTIMENTS = ("positive", "neutral", "negative")
LANGUAGES = ("en", "es", "fr", "de", "it", "pt", "ru", "ja", "ko", "zh")
MAX_TEXT_LENGTH = 10000


class StubTextAnalyzer:
    """
    Placeholder text analysis.

    Keyword extraction and summarisation are deterministic heuristics.
    Sentiment and language are NOT inferred: they are picked from ``rng``
    and exist only so clients can integrate against the response shape.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def analyze(self, text: Optional[str], analysis_type: Optional[str]) -> Dict[str, Any]:
        text = (text or "").strip()
        if not text:
            raise ValidationException("text is required", field="text")
        if len(text) > MAX_TEXT_LENGTH:
            raise ValidationException(
                f"text must be {MAX_TEXT_LENGTH} characters or less", field="text"
            )
        if analysis_type not in ANALYSIS_TYPES:
            raise ValidationException(
                f"Invalid type. Must be one of: {', '.join(ANALYSIS_TYPES)}", field="type"
            )

        analysis = getattr(self, f"_{analysis_type}")(text)
        return {
            "type": analysis_type,
            "text": text[:100] + ("..." if len(text) > 100 else ""),
            "analysis": analysis,
        }

    def _sentiment(self, text: str) -> Dict[str, Any]:
        sentiment = self.rng.choice(SENTIMENTS)
        confidence = 0.6 + self.rng.random() * 0.4
        score = {"positive": confidence, "negative": -confidence}.get(sentiment, 0)
        return {"sentiment": sentiment, "confidence": confidence, "score": score, "isStub": True}

    def _language(self, text: str) -> Dict[str, Any]:
        return {
            "language": self.rng.choice(LANGUAGES),
            "confidence": 0.8 + self.rng.random() * 0.2,
            "isStub": True,
        }

    @staticmethod
    def _keywords(text: str) -> Dict[str, Any]:
        keywords = []
        for word in text.lower().split():
            if len(word) > 3 and word not in keywords:
                keywords.append(word)
            if len(keywords) == 10:
                break
        return {"keywords": keywords, "count": len(keywords)}

    @staticmethod
    def _summary(text: str) -> Dict[str, Any]:
        sentences = [s.strip() for s in re.split(r"[.!?]+", text) if s.strip()]
        summary = ". ".join(sentences[:3]) + "."
        return {
            "summary": summary,
            "originalLength": len(text),
            "summaryLength": len(summary),
            "compressionRatio": round(len(summary) / len(text), 2),
        }

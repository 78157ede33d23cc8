import random

import pytest

from faystar.adapters.interfaces.normalizer import normalize_unit_interval
from faystar.adapters.normalizers.openai import (
    SYSTEM_PROMPT,
    ChatRequestNormalizer,
    ImageRequestNormalizer,
    VoiceRequestNormalizer,
)
from faystar.adapters.normalizers.speech import DEFAULT_VOICE_ID, SpeechRequestNormalizer
from faystar.adapters.normalizers.video import VideoRequestNormalizer, VideoStatusNormalizer
from faystar.core.exceptions import ValidationException
from faystar.domain.schemas.ai import ChatRequest, ChatTurn, ImageRequest, VoiceRequest
from faystar.domain.schemas.audio import TTSRequest
from faystar.domain.schemas.video import VideoRequest


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 0.5),
        (0.3, 0.3),
        (1, 1.0),
        (75, 0.75),
        (150, 1.0),
        (-0.2, 0.0),
    ],
)
def test_unit_interval_reads_values_above_one_as_percentages(value, expected):
    assert normalize_unit_interval(value, 0.5) == pytest.approx(expected)


def test_speech_defaults():
    request = SpeechRequestNormalizer().normalize(TTSRequest(text="  Hello world  "))

    assert request.endpoint == f"/text-to-speech/{DEFAULT_VOICE_ID}"
    assert request.accept == "audio/mpeg"
    assert request.payload == {
        "text": "Hello world",
        "model_id": "eleven_multilingual_v2",
        "voice_settings": {
            "stability": 0.5,
            "similarity_boost": 0.8,
            "style": 0.0,
            "use_speaker_boost": True,
        },
    }


def test_speech_percentage_settings_and_custom_voice():
    request = SpeechRequestNormalizer().normalize(
        TTSRequest(text="Hi", voiceId="EXAVITGu4L4Kuyx24Lxk", stability=40, similarity=0.9)
    )

    assert request.endpoint == "/text-to-speech/EXAVITGu4L4Kuyx24Lxk"
    assert request.payload["voice_settings"]["stability"] == pytest.approx(0.4)
    assert request.payload["voice_settings"]["similarity_boost"] == pytest.approx(0.9)


@pytest.mark.parametrize(
    "request_kwargs, field",
    [
        ({"text": "   "}, "text"),
        ({"text": "x" * 5001}, "text"),
        ({"text": "Hi", "voiceId": "short"}, "voiceId"),
    ],
)
def test_speech_rejections(request_kwargs, field):
    with pytest.raises(ValidationException) as exc_info:
        SpeechRequestNormalizer().normalize(TTSRequest(**request_kwargs))
    assert exc_info.value.field == field


def test_speech_accepts_text_at_maximum_length():
    request = SpeechRequestNormalizer().normalize(TTSRequest(text="x" * 5000))
    assert len(request.payload["text"]) == 5000


def test_video_payload():
    normalizer = VideoRequestNormalizer(random.Random(1))
    request = normalizer.normalize(VideoRequest(prompt="A cat surfing", duration=3, aspectRatio="9:16"))

    assert request.endpoint == "/fal-ai/pika-1.0"
    assert request.payload["num_frames"] == 72
    assert request.payload["aspect_ratio"] == "9:16"
    assert request.payload["guidance_scale"] == 7.5
    assert request.payload["num_inference_steps"] == 50
    assert request.payload["negative_prompt"]
    assert 0 <= request.payload["seed"] < 1_000_000


def test_video_seed_follows_random_source():
    first = VideoRequestNormalizer(random.Random(42)).normalize(VideoRequest(prompt="waves"))
    second = VideoRequestNormalizer(random.Random(42)).normalize(VideoRequest(prompt="waves"))

    assert first.payload["seed"] == second.payload["seed"]
    assert first.payload["num_frames"] == 5 * 24
    assert first.payload["aspect_ratio"] == "16:9"


@pytest.mark.parametrize(
    "request_kwargs",
    [
        {"prompt": ""},
        {"prompt": "x" * 1001},
        {"prompt": "ok", "duration": 0},
        {"prompt": "ok", "duration": 21},
        {"prompt": "ok", "aspectRatio": "3:2"},
    ],
)
def test_video_rejections(request_kwargs):
    with pytest.raises(ValidationException):
        VideoRequestNormalizer().normalize(VideoRequest(**request_kwargs))


def test_video_status_requires_id():
    assert VideoStatusNormalizer().normalize("abc").endpoint == "/fal-ai/pika-1.0/status/abc"
    with pytest.raises(ValidationException):
        VideoStatusNormalizer().normalize("  ")


def test_chat_builds_message_list():
    request = ChatRequestNormalizer().normalize(ChatRequest(
        message="What's new?",
        conversationHistory=[
            ChatTurn(role="user", content="Hi"),
            ChatTurn(role="assistant", content="Hello!"),
        ],
    ))

    assert request.endpoint == "/chat/completions"
    assert request.payload["model"] == "gpt-3.5-turbo"
    assert request.payload["max_tokens"] == 1000
    assert request.payload["temperature"] == 0.7
    assert request.payload["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "Hi"},
        {"role": "assistant", "content": "Hello!"},
        {"role": "user", "content": "What's new?"},
    ]


@pytest.mark.parametrize(
    "request_kwargs",
    [
        {"message": "hi", "model": "gpt-5"},
        {"message": "x" * 4001},
        {"message": "hi", "conversationHistory": [{"role": "tool", "content": "x"}]},
    ],
)
def test_chat_rejections(request_kwargs):
    with pytest.raises(ValidationException):
        ChatRequestNormalizer().normalize(ChatRequest(**request_kwargs))


def test_voice_defaults_and_speed_bounds():
    request = VoiceRequestNormalizer().normalize(VoiceRequest(text="Read me"))
    assert request.payload == {"model": "tts-1", "input": "Read me", "voice": "alloy", "speed": 1.0}

    with pytest.raises(ValidationException):
        VoiceRequestNormalizer().normalize(VoiceRequest(text="Read me", speed=4.5))
    with pytest.raises(ValidationException):
        VoiceRequestNormalizer().normalize(VoiceRequest(text="Read me", voice="robot"))


def test_image_defaults():
    request = ImageRequestNormalizer().normalize(ImageRequest(prompt="A lighthouse"))
    assert request.payload == {
        "model": "dall-e-3",
        "prompt": "A lighthouse",
        "size": "512x512",
        "quality": "standard",
        "style": "vivid",
        "n": 1,
    }
    with pytest.raises(ValidationException):
        ImageRequestNormalizer().normalize(ImageRequest(prompt="A lighthouse", size="2048x2048"))


@pytest.mark.parametrize("voice_id", ["abcdefghij/../../user", "abcdefghij%2F..", "abcdefghij?x=1"])
def test_speech_rejects_voice_ids_outside_path_segment(voice_id):
    with pytest.raises(ValidationException) as exc_info:
        SpeechRequestNormalizer().normalize(TTSRequest(text="Hi", voiceId=voice_id))
    assert exc_info.value.field == "voiceId"


def test_video_status_rejects_path_characters():
    with pytest.raises(ValidationException) as exc_info:
        VideoStatusNormalizer().normalize("../../other")
    assert exc_info.value.field == "requestId"

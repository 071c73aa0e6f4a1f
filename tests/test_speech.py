import pytest

from pronunciation.speech import (
    SpeechRequest,
    choose_voice,
    play_target,
    target_playback_request,
)

VOICES = [
    {"name": "Thomas", "lang": "fr-FR"},
    {"name": "Daniel", "lang": "en-GB"},
    {"name": "Samantha", "lang": "en-US"},
]


class RecordingOutput:
    def __init__(self):
        self.requests = []

    def speak(self, request):
        self.requests.append(request)


def test_request_defaults():
    request = SpeechRequest("hello")
    assert request.to_dict() == {"text": "hello", "rate": 1.0, "pitch": 1.0, "voice": None}


def test_rate_and_pitch_are_clamped():
    request = SpeechRequest("hello", rate=25, pitch=-1)
    assert request.rate == 10.0
    assert request.pitch == 0.0


def test_text_must_be_string():
    with pytest.raises(TypeError):
        SpeechRequest(None)


@pytest.mark.parametrize("voices,expected", [
    (VOICES, "Samantha"),
    (VOICES[:2], "Daniel"),
    (VOICES[:1], "Thomas"),
    ([], None),
])
def test_choose_voice_prefers_us_english(voices, expected):
    assert choose_voice(voices) == expected


def test_target_playback_is_slowed_down():
    request = target_playback_request("Hello world", VOICES)
    assert request.rate == 0.8
    assert request.voice == "Samantha"


def test_play_target_is_fire_and_forget():
    output = RecordingOutput()
    request = play_target(output, "How are you today?")
    assert output.requests == [request]
    assert request.text == "How are you today?"

from types import SimpleNamespace
from unittest import mock

import pytest

from ai_services import quality_scorer


@pytest.mark.parametrize("reply, expected", [
    ('{"score": 8}', 8.0),
    ('Sure! ```json\n{"score": 6.5}\n```', 6.5),
    ('{"score": 15}', 10.0),
    ('{"score": -3}', 1.0),
    ('{"score": 0}', None),
    ('{"score": "high"}', None),
    ('{"grade": 7}', None),
    ('no json here', None),
    ('', None),
])
def test_parse_score(reply, expected):
    assert quality_scorer.parse_score(reply) == expected


def test_default_score_without_api_key(app):
    with mock.patch.object(quality_scorer, "_build_llm") as build:
        assert quality_scorer.score_description("anything") == 5.0
    build.assert_not_called()


def test_score_from_model_reply(app):
    app.config["GEMINI_API_KEY"] = "test-key"
    llm = mock.Mock()
    llm.invoke.return_value = SimpleNamespace(content='{"score": 9}')
    with mock.patch.object(quality_scorer, "_build_llm", return_value=llm):
        assert quality_scorer.score_description("Refactored the sync module") == 9.0
    prompt = llm.invoke.call_args.args[0]
    assert 'scale of 1-10: "Refactored the sync module"' in prompt


def test_score_from_multipart_reply(app):
    app.config["GEMINI_API_KEY"] = "test-key"
    llm = mock.Mock()
    llm.invoke.return_value = SimpleNamespace(content=[{"type": "text", "text": '{"score": 4}'}])
    with mock.patch.object(quality_scorer, "_build_llm", return_value=llm):
        assert quality_scorer.score_description("text") == 4.0


def test_model_failure_falls_back_to_default(app):
    app.config["GEMINI_API_KEY"] = "test-key"
    llm = mock.Mock()
    llm.invoke.side_effect = RuntimeError("quota exceeded")
    with mock.patch.object(quality_scorer, "_build_llm", return_value=llm):
        assert quality_scorer.score_description("text") == 5.0


def test_unusable_reply_falls_back_to_default(app):
    app.config["GEMINI_API_KEY"] = "test-key"
    llm = mock.Mock()
    llm.invoke.return_value = SimpleNamespace(content="I cannot rate this.")
    with mock.patch.object(quality_scorer, "_build_llm", return_value=llm):
        assert quality_scorer.score_description("text") == 5.0

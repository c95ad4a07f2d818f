import pytest

from conftest import FakeBackend
from llm_gateway import BackendUnavailable
from services.assist import HINT_SYSTEM, REVIEW_SYSTEM, CodingAssistant
from services.errors import ValidationError


def test_review_prompt_includes_code_and_title():
    backend = FakeBackend("Looks good.")
    assistant = CodingAssistant(backend)
    assert assistant.review_code("x = 1", "python", "Two Sum") == "Looks good."
    prompt, system_prompt = backend.calls[0]
    assert system_prompt == REVIEW_SYSTEM
    assert 'for the "Two Sum" problem' in prompt
    assert "```python\nx = 1\n```" in prompt


def test_hint_requires_problem_title():
    assistant = CodingAssistant(FakeBackend("hint"))
    with pytest.raises(ValidationError):
        assistant.code_hint("x = 1", "python", None)
    assert assistant.code_hint("x = 1", "python", "Two Sum", "desc") == "hint"


def test_hint_uses_tutor_rules():
    backend = FakeBackend("Think about complements.")
    CodingAssistant(backend).code_hint("x = 1", "python", "Two Sum")
    assert backend.calls[0][1] == HINT_SYSTEM


@pytest.mark.parametrize("code,language", [("", "python"), ("x", ""), (None, None)])
def test_explain_validation(code, language):
    with pytest.raises(ValidationError):
        CodingAssistant(FakeBackend()).explain_code(code, language)


def test_backend_failures_propagate():
    with pytest.raises(BackendUnavailable):
        CodingAssistant(FakeBackend(fail=True)).explain_code("x = 1", "python")

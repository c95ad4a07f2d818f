from interview_session.models import ChatTurn, ProblemInfo
from interview_session.prompts import (
    NO_CODE_SUBMITTED,
    NO_CODE_YET,
    build_evaluation_prompt,
    build_intro_prompt,
    build_turn_prompt,
    fallback_intro,
    fallback_reply,
    render_transcript,
)

PROBLEM = ProblemInfo(title="Two Sum", difficulty="easy", description="Find two numbers adding up to target.")

HISTORY = [
    ChatTurn(role="ai", content="Welcome! Let's do Two Sum."),
    ChatTurn(role="user", content="I'll use a hash map"),
]


def test_intro_has_no_system_prompt_and_names_problem():
    pair = build_intro_prompt(PROBLEM)
    assert pair.system_prompt is None
    assert '"Two Sum"' in pair.prompt
    assert "Difficulty: easy" in pair.prompt
    assert "Find two numbers adding up to target." in pair.prompt
    assert "3-4 sentences" in pair.prompt


def test_intro_uses_title_when_description_missing():
    pair = build_intro_prompt(ProblemInfo(title="Valid Parentheses", difficulty="medium"))
    assert "Description: Valid Parentheses" in pair.prompt


def test_turn_prompt_is_latest_message_and_instruction_carries_context():
    pair = build_turn_prompt(HISTORY, "def two_sum(): pass", PROBLEM, "I'll use a hash map")
    assert pair.prompt == "I'll use a hash map"
    assert "AI: Welcome! Let's do Two Sum.\nUSER: I'll use a hash map" in pair.system_prompt
    assert "def two_sum(): pass" in pair.system_prompt
    assert "Never give direct solutions" in pair.system_prompt
    assert "2-3 sentences" in pair.system_prompt
    assert 'USER JUST SAID: "I\'ll use a hash map"' in pair.system_prompt


def test_turn_prompt_uses_placeholder_without_code():
    pair = build_turn_prompt(HISTORY, "", PROBLEM, "hello")
    assert NO_CODE_YET in pair.system_prompt


def test_turn_prompt_keeps_multiline_history_verbatim():
    history = [ChatTurn(role="user", content="line one\nline two")]
    pair = build_turn_prompt(history, "", PROBLEM, "ok")
    assert "USER: line one\nline two" in pair.system_prompt


def test_evaluation_prompt_requests_exact_json_keys():
    pair = build_evaluation_prompt(HISTORY, "", PROBLEM)
    assert pair.system_prompt is None
    for key in ("overallScore", "technicalScore", "communicationScore", "problemSolvingScore", "summary", "improvements", "strengths"):
        assert f'"{key}"' in pair.prompt
    assert NO_CODE_SUBMITTED in pair.prompt
    assert "no markdown" in pair.prompt


def test_composition_is_deterministic():
    first = build_turn_prompt(HISTORY, "x = 1", PROBLEM, "why?")
    second = build_turn_prompt(HISTORY, "x = 1", PROBLEM, "why?")
    assert first == second


def test_render_transcript_preserves_order():
    assert render_transcript(HISTORY).splitlines()[0].startswith("AI:")
    assert render_transcript([]) == ""


def test_fallbacks_reference_inputs():
    assert '"Two Sum"' in fallback_intro("Two Sum")
    assert '"I think BFS works"' in fallback_reply("I think BFS works")

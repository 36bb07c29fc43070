import asyncio

from context.preference_questions import PREFERENCE_QUESTIONS, question_for
from context.preferences_context import format_preferences_context
from context.quick_options import QuickOption, parse_quick_options
from context.stream_reader import collect_stream_text, iter_stream_deltas, iter_stream_lines
from models.preferences import PreferenceRecord
from orchestrator.preference_extractor import PREFERENCE_KEYWORDS

ANSWER = """Wah, looking for chicken rice near Tampines? A few good spots!

---QUICK_OPTIONS---
Hawker style|Classic kopitiam vibes, budget-friendly
Restaurant|Air-con comfort, can sit longer
Near MRT
---END_OPTIONS---"""


def test_quick_options_are_extracted_and_stripped():
    display, options = parse_quick_options(ANSWER)

    assert display == "Wah, looking for chicken rice near Tampines? A few good spots!"
    assert options == [
        QuickOption("Hawker style", "Classic kopitiam vibes, budget-friendly"),
        QuickOption("Restaurant", "Air-con comfort, can sit longer"),
        QuickOption("Near MRT", ""),
    ]


def test_content_without_block_is_unchanged():
    text = "Just an answer.\n"
    assert parse_quick_options(text) == (text, [])


def test_partial_block_is_hidden_while_streaming():
    display, options = parse_quick_options("Answer so far\n---QUICK_OPTIONS---\nHawker st")
    assert display == "Answer so far"
    assert options == []


def test_stream_deltas_skip_noise_and_stop_at_done():
    lines = [
        ": keep-alive",
        "",
        "event: message",
        'data: {"choices":[{"delta":{"role":"assistant"}}]}',
        'data: {"choices":[{"delta":{"content":"Can "}}]}\r',
        "data: not-json",
        'data: {"choices":[{"delta":{"content":"lah!"}}]}',
        "data: [DONE]",
        'data: {"choices":[{"delta":{"content":"ignored"}}]}',
    ]

    assert list(iter_stream_deltas(lines)) == ["Can ", "lah!"]
    assert collect_stream_text(lines) == "Can lah!"


def test_stream_lines_survive_arbitrary_chunking():
    body = 'data: {"choices":[{"delta":{"content":"Shiok"}}]}\n\ndata: [DONE]\n\n'.encode()

    async def chunks():
        for i in range(0, len(body), 7):
            yield body[i : i + 7]

    async def read():
        return [line async for line in iter_stream_lines(chunks())]

    assert collect_stream_text(asyncio.run(read())) == "Shiok"


def test_preferences_context_format():
    text = format_preferences_context(
        [
            PreferenceRecord("housing_status", "renting", "explicit"),
            PreferenceRecord("home_area", "bedok", "inferred"),
            PreferenceRecord("budget_preference", {"max": 2000}),
        ]
    )

    assert text == (
        "\n\nUSER PREFERENCES (from previous interactions):\n"
        '- housing_status: "renting" (User stated)\n'
        '- home_area: "bedok" (Inferred from conversation)\n'
        '- budget_preference: {"max": 2000} (Assumed)\n'
    )


def test_empty_preferences_context():
    assert format_preferences_context([]) == ""


def test_every_detectable_category_has_a_question():
    assert set(PREFERENCE_QUESTIONS) == set(PREFERENCE_KEYWORDS)
    assert question_for("housing_status").options[0].value == "own_hdb"
    assert question_for(None) is None
    assert question_for("unknown") is None

from pdfassist.reasoning import split_reasoning


def test_split_reasoning_without_block_returns_trimmed_text():
    assert split_reasoning("plain text") == (None, "plain text")
    assert split_reasoning("  padded answer \n") == (None, "padded answer")


def test_split_reasoning_extracts_think_block():
    assert split_reasoning("<think>abc</think>final") == ("abc", "final")


def test_split_reasoning_spans_line_breaks():
    raw = "<thinking>\nstep one\nstep two\n</thinking>\n\nThe answer is 4."

    reasoning, output = split_reasoning(raw)

    assert reasoning == "step one\nstep two"
    assert output == "The answer is 4."


def test_split_reasoning_accepts_mismatched_tag_names():
    assert split_reasoning("<think>draft</reasoning>result") == ("draft", "result")


def test_split_reasoning_only_considers_first_block():
    reasoning, output = split_reasoning("<think>a</think>middle <reasoning>b</reasoning> end")

    assert reasoning == "a"
    assert output == "middle <reasoning>b</reasoning> end"


def test_split_reasoning_keeps_text_before_block():
    assert split_reasoning("Intro <reasoning> why </reasoning> outro") == (
        "why",
        "Intro  outro",
    )

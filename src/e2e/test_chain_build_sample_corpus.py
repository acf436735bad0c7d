import io

import pytest

from headlines.chain import Chain

SAMPLE = (
    b"the quick brown fox, jumps over the lazy dog.\n"
    b"foo bar brown fox, hello.\n"
    b"foo bar zoo."
)

EXPECTED_TOKENS = [
    "bar", "brown", "dog.",
    "foo", "fox,", "hello.",
    "jumps", "lazy", "over",
    "quick", "the", "zoo.",
]


@pytest.fixture
def chain() -> Chain:
    c = Chain(2)
    c.build(io.BytesIO(SAMPLE))
    return c


def test_token_index_holds_every_distinct_token(chain):
    assert list(chain.tokens) == EXPECTED_TOKENS


def test_starting_prefixes_and_their_frequencies(chain):
    assert list(chain.starting_prefixes) == ["foo bar", "the quick"]
    # one entry per line: "the quick" once, "foo bar" twice
    assert list(chain.starting_frequencies) == [1, 0, 0]


def test_transitions_encode_frequency_by_repetition(chain):
    got = {k: list(v) for k, v in chain.transitions.items()}
    assert got == {
        "the quick": [1], "quick brown": [4],
        "brown fox,": [6, 5], "fox, jumps": [8],
        "jumps over": [10], "over the": [7],
        "the lazy": [2], "foo bar": [1, 11],
        "bar brown": [4],
    }
    assert [chain.tokens.get(p) for p in chain.transitions["brown fox,"]] == ["jumps", "hello."]


def test_stats_summarise_the_build(chain):
    stats = chain.stats()
    assert stats.prefix_length == 2
    assert stats.tokens == 12
    assert stats.starting_prefixes == 2
    assert stats.states == 9
    assert stats.transitions == 11
    assert stats.lines == 3


def test_trailing_newline_adds_empty_token_only():
    c = Chain(2)
    c.build(io.BytesIO(SAMPLE + b"\n"))
    assert list(c.tokens) == [""] + EXPECTED_TOKENS
    assert list(c.starting_prefixes) == ["foo bar", "the quick"]
    assert list(c.starting_frequencies) == [1, 0, 0]


def test_repeated_lines_repeat_positions():
    c = Chain(2)
    c.build(io.BytesIO(b"a b c\na b c\na b c\nx y z"))
    assert list(c.starting_prefixes) == ["a b", "x y"]
    assert list(c.starting_frequencies) == [0, 0, 0, 1]
    c_pos = c.tokens.find("c")
    assert list(c.transitions["a b"]) == [c_pos] * 3
    assert list(c.transitions["x y"]) == [c.tokens.find("z")]


def test_short_lines_contribute_no_transitions():
    c = Chain(3)
    c.build(io.BytesIO(b"one two\nsolo\nred green blue\nred green blue yellow\n"))
    # "red green blue" registers as a starting prefix but only the 4-token line moves
    assert list(c.starting_prefixes) == ["red green blue"]
    assert list(c.starting_frequencies) == [0]
    assert {k: list(v) for k, v in c.transitions.items()} == {
        "red green blue": [c.tokens.find("yellow")],
    }


def test_structure_is_identical_across_builds():
    a, b = Chain(2), Chain(2)
    a.build(io.BytesIO(SAMPLE))
    b.build(io.BytesIO(SAMPLE))
    assert list(a.tokens) == list(b.tokens)
    assert list(a.starting_prefixes) == list(b.starting_prefixes)
    assert list(a.starting_frequencies) == list(b.starting_frequencies)
    assert {k: list(v) for k, v in a.transitions.items()} == {k: list(v) for k, v in b.transitions.items()}


def test_indexes_are_frozen_after_build(chain):
    assert chain.tokens.frozen and chain.starting_prefixes.frozen
    with pytest.raises(RuntimeError):
        chain.build(io.BytesIO(SAMPLE))


def test_prefix_length_is_read_only(chain):
    with pytest.raises(AttributeError):
        chain.prefix_length = 3


def test_non_utf8_bytes_stay_distinct_tokens():
    c = Chain(2)
    c.build(io.BytesIO(b"a \xff b c"))
    stray = b"\xff".decode("utf-8", "surrogateescape")
    assert list(c.tokens) == ["a", "b", "c", stray]
    assert {k: list(v) for k, v in c.transitions.items()} == {
        f"a {stray}": [c.tokens.find("b")],
        f"{stray} b": [c.tokens.find("c")],
    }
    phrase = c.generate(4)
    assert phrase.encode("utf-8", "surrogateescape") == b"a \xff b c"


def test_latin1_token_does_not_merge_with_its_ascii_prefix():
    c = Chain(1)
    c.build(io.BytesIO(b"caf\xe9 x\ncaf y"))
    assert len(c.starting_prefixes) == 2
    assert "caf" in c.starting_prefixes

from prosecheck.services.segment import split_paragraphs, tokenize, is_punctuation, word_set


def test_split_paragraphs():
    txt = "Line one.\n\nLine two."
    assert split_paragraphs(txt) == ["Line one.", "Line two."]


def test_split_paragraphs_trims_and_drops_empty():
    txt = "  First block \n \n\n\t\n Second block  \n\n\n"
    assert split_paragraphs(txt) == ["First block", "Second block"]


def test_single_newline_keeps_paragraph():
    assert split_paragraphs("one line\nnext line") == ["one line\nnext line"]


def test_split_paragraphs_empty():
    assert split_paragraphs("") == []
    assert split_paragraphs("   \n\n  ") == []


def test_tokenize_keeps_punctuation_tokens():
    assert tokenize("I has a apple.") == ["I", "has", "a", "apple", "."]


def test_tokenize_quotes_and_brackets():
    assert tokenize('He said, "no" (twice).') == [
        "He", "said", ",", '"', "no", '"', "(", "twice", ")", ".",
    ]


def test_is_punctuation():
    assert is_punctuation(";")
    assert not is_punctuation("word")
    assert not is_punctuation("...")


def test_word_set_is_lowercase_and_unique():
    assert word_set("The the, cat!") == {"the", "cat"}
    assert word_set("") == set()

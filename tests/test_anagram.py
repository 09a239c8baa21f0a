import pytest

from labnet.anagram import DEFAULT_WORDS, find_anagrams, is_anagram, main


@pytest.mark.parametrize("a, b", [("amor", "ramo"), ("roma", "moar"), ("copi", "ipoc")])
def test_real_anagrams_both_ways(a, b):
    assert is_anagram(a, b) is True
    assert is_anagram(b, a) is True


def test_identical_words_are_not_anagrams():
    assert is_anagram("ipoc", "ipoc") is False


def test_different_lengths():
    assert is_anagram("amor", "amore") is False


def test_digits_rejected():
    assert is_anagram("21", "12") is False
    assert is_anagram("copi", "o8ci") is False


def test_missing_letter():
    assert is_anagram("casa", "ipoc") is False


def test_only_presence_of_letters_is_checked():
    assert is_anagram("aab", "abb") is True


def test_default_words():
    assert find_anagrams(DEFAULT_WORDS) == [
        "amor", "moar", "ramo", "roma", "copi", "ipoc", "pico",
    ]


def test_results_are_unique():
    result = find_anagrams(["ab", "ba", "xx", "ba", "ba"])
    assert len(result) == len(set(result))
    assert set(result) == {"ab", "ba"}


def test_middle_word_not_paired():
    # With three words the middle one is never used as a partner.
    assert find_anagrams(["ab", "ba", "cd"]) == []


def test_main_output(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Analizo 16 palabras"
    assert out[1] == "Existen 7 Anagramas: amor moar ramo roma copi ipoc pico"
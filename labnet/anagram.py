"""Find pairs of anagrams in a list of words."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

DEFAULT_WORDS = (
    "amor", "21", "ramo", "casa", "roma", "copi", "pico", "12",
    "ipoc", "ipoc", "ipoc", "ipoc", "o8ci", "ipoc", "moar", "ipoc",
)


def _valid(char: str) -> bool:
    return 64 <= ord(char) <= 122


def is_anagram(word_a: str, word_b: str) -> bool:
    """Tell whether two distinct, equally long words use the same letters.

    Each letter of the first word must appear in the second. Words holding
    characters outside the range '@'..'z' (digits, for instance) are rejected.
    """
    if len(word_a) != len(word_b) or word_a == word_b:
        return False
    for char in word_a:
        for other in word_b:
            if not _valid(char) or not _valid(other):
                return False
            if char == other:
                break
        else:
            return False
    return True


def find_anagrams(words: Sequence[str]) -> list[str]:
    """Pair words of the first half with words of the second and collect anagrams.

    The result keeps the order in which words were first found, without repeats.
    """
    half = len(words) // 2
    found: dict[str, None] = {}
    for first in words[:half]:
        for second in reversed(words[half + 1:]):
            if is_anagram(first, second):
                found.setdefault(first)
                found.setdefault(second)
    return list(found)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Count anagrams in a list of words.")
    parser.add_argument("words", nargs="*", help="words to analyse")
    args = parser.parse_args(argv)
    words = args.words or list(DEFAULT_WORDS)

    print(f"Analizo {len(words)} palabras")
    anagrams = find_anagrams(words)
    listing = "".join(f" {word}" for word in anagrams)
    print(f"Existen {len(anagrams)} Anagramas:{listing}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
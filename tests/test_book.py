#!/usr/bin/env python3
"""
Tests for the book cipher (word positions, letter-by-letter spelling)
"""

import sys
import os
import random
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import pytest

from cipherkit import PLACEHOLDER, MalformedCiphertext, book_encode, book_decode

def test_known_words():
    """Book words become 1-based positions; repeated words pick any of theirs"""
    print("Testing book cipher word positions...")

    tokens = book_encode("the lazy dog", seed=1).split()
    assert tokens[0] in ("1", "7"), f"'the' sits at 1 and 7, got {tokens[0]}"
    assert tokens[1:] == ["8", "9"], f"Unexpected positions: {tokens}"
    assert book_decode(" ".join(tokens)) == "the lazy dog"
    assert book_encode("Dog!") == "9", "Case and punctuation should be ignored"
    assert book_encode("the quick", seed=5) == book_encode("the quick", seed=5), "Same seed should repeat"
    assert book_encode("the", rng=random.Random(0)) in ("1", "7"), "Injected RNG should be used"

    print("✅ Word position tests passed")

def test_spelled_words():
    """Unknown words are spelled from the first letters of book words"""
    print("Testing book cipher spelling...")

    assert book_encode("bad") == "3-10-9", f"Unexpected: {book_encode('bad')}"
    assert book_decode("3-10-9") == "bad"
    assert book_encode("A") == "10-", "One-letter spellings keep a trailing dash"
    assert book_decode("10-") == "a", "Trailing dash marks a spelled letter, not word 10"
    assert book_decode("10") == "and"
    assert book_encode("cab") == "?-10-3", "Letters no book word starts with become placeholders"
    assert book_decode("?-10-3") == "?ab"

    print("✅ Spelling tests passed")

def test_custom_book():
    print("Testing custom book text...")

    book = "hello big world"
    assert book_encode("Hello, World", book) == "1 3"
    assert book_decode("1 3", book) == "hello world"
    assert book_encode("fox", "123 !!!") == "4", "A book without words falls back to the default text"

    print("✅ Custom book tests passed")

def test_bad_references():
    print("Testing book cipher bad references...")

    assert book_decode("99") == PLACEHOLDER, "Positions past the book become placeholders"
    assert book_decode("0") == PLACEHOLDER
    assert book_decode("?") == PLACEHOLDER
    assert book_decode("9" * 5000) == PLACEHOLDER, "Overlong positions become placeholders"

    with pytest.raises(MalformedCiphertext):
        book_decode("dog")
    with pytest.raises(MalformedCiphertext):
        book_decode("3-x")

    print("✅ Bad reference tests passed")

def run_all_tests():
    """Run all book cipher tests"""
    print("🧪 Running book cipher tests...")
    print("=" * 50)

    try:
        test_known_words()
        test_spelled_words()
        test_custom_book()
        test_bad_references()

        print("=" * 50)
        print("🎉 All book cipher tests passed!")
        return True

    except AssertionError as e:
        print(f"❌ Test failed: {e}")
        return False

if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)

#!/usr/bin/env python3
"""
Tests for the shift/monoalphabetic and polyalphabetic families
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import pytest

from cipherkit import (
    caesar_encode, caesar_decode, rot13, rot5_encode, rot5_decode, rot18, rot47,
    atbash, affine_encode, affine_decode, keyword_encode, keyword_decode,
    vigenere_encode, vigenere_decode, beaufort, autokey_encode, autokey_decode,
    gronsfeld_encode, gronsfeld_decode, trithemius_encode, trithemius_decode,
    porta, running_key_encode, running_key_decode, multi_caesar_encode, multi_caesar_decode
)

def test_caesar():
    """Caesar keeps case and skips non-letters"""
    print("Testing Caesar...")

    assert caesar_encode("ABC", 3) == "DEF", "Expected ABC -> DEF with shift 3"
    assert caesar_decode("DEF", 3) == "ABC", "Expected DEF -> ABC with shift 3"
    assert caesar_encode("Hello, World!") == "Uryyb, Jbeyq!", "Default shift should be 13"
    assert caesar_encode("abc", 29) == caesar_encode("abc", 3), "Shift should reduce mod 26"
    assert caesar_encode("ABC", -3) == "XYZ", "Negative shifts should wrap"
    for shift in (0, 1, 13, 25, 26, 100):
        assert caesar_decode(caesar_encode("Mixed Case 42!", shift), shift) == "Mixed Case 42!", \
            f"Round trip failed for shift {shift}"

    print("✅ Caesar tests passed")

def test_rot_variants():
    print("Testing ROT13/ROT5/ROT18/ROT47...")

    assert rot13(rot13("Attack at dawn")) == "Attack at dawn", "ROT13 should be self-inverse"
    assert rot5_encode("2024") == "7579", f"Unexpected ROT5: {rot5_encode('2024')}"
    assert rot5_decode(rot5_encode("x9y0", 3), 3) == "x9y0", "ROT5 round trip failed"
    assert rot18("Hello 2024") == "Uryyb 7579", f"Unexpected ROT18: {rot18('Hello 2024')}"
    assert rot18(rot18("Hello 2024")) == "Hello 2024", "ROT18 should be self-inverse"
    assert rot47("Hello") == "w6==@", f"Unexpected ROT47: {rot47('Hello')}"
    assert rot47(rot47("p@ss w0rd!~")) == "p@ss w0rd!~", "ROT47 should be self-inverse"
    assert rot47("a b") == "2 3", "ROT47 leaves spaces alone"

    print("✅ ROT variant tests passed")

def test_atbash():
    print("Testing Atbash...")
    assert atbash("Hello") == "Svool", f"Unexpected Atbash: {atbash('Hello')}"
    assert atbash(atbash("Hello, World!")) == "Hello, World!", "Atbash should be self-inverse"
    print("✅ Atbash tests passed")

def test_affine():
    """Affine needs a multiplier coprime with 26"""
    print("Testing Affine...")

    assert affine_encode("AFFINECIPHER") == "IHHWVCSWFRCP", "Known vector failed"
    assert affine_decode("IHHWVCSWFRCP") == "AFFINECIPHER", "Known vector decode failed"
    assert affine_decode(affine_encode("Some Text.", 7, 3), 7, 3) == "Some Text."

    for a in (2, 13, 26):
        with pytest.raises(ValueError):
            affine_encode("x", a=a)
        with pytest.raises(ValueError):
            affine_decode("x", a=a)

    print("✅ Affine tests passed")

def test_keyword_substitution():
    print("Testing keyword substitution...")
    assert keyword_encode("HELLO") == "AOGGJ", f"Unexpected: {keyword_encode('HELLO')}"
    assert keyword_encode("hello") == "aoggj", "Case should be kept"
    assert keyword_decode(keyword_encode("Secret Msg!", "zebra"), "zebra") == "Secret Msg!"
    print("✅ Keyword substitution tests passed")

def test_vigenere():
    print("Testing Vigenère...")

    assert vigenere_encode("HELLO", "KEY") == "RIJVS", "Known vector failed"
    assert vigenere_encode("Hello, World!", "KEY") == "Rijvs, Uyvjn!", "Non-letters must not consume key"
    assert vigenere_encode("ATTACKATDAWN", "LEMON") == "LXFOPVEFRNHR", "Known vector failed"
    assert vigenere_decode("LXFOPVEFRNHR", "lemon") == "ATTACKATDAWN", "Key case should not matter"
    assert vigenere_encode("abc", "1!") == vigenere_encode("abc", "KEY"), "Empty key should fall back to KEY"

    print("✅ Vigenère tests passed")

def test_beaufort():
    print("Testing Beaufort...")
    assert beaufort("HELLO", "KEY") == "DANZQ", f"Unexpected: {beaufort('HELLO', 'KEY')}"
    assert beaufort(beaufort("Reciprocal!", "FORTIFY"), "FORTIFY") == "Reciprocal!", "Beaufort should be reciprocal"
    print("✅ Beaufort tests passed")

def test_autokey():
    """Decode rebuilds the key stream from the plaintext it recovers"""
    print("Testing Autokey...")

    assert autokey_encode("ATTACKATDAWN", "QUEENLY") == "QNXEPVYTWTWP", "Known vector failed"
    assert autokey_decode("QNXEPVYTWTWP", "QUEENLY") == "ATTACKATDAWN", "Known vector decode failed"
    assert autokey_decode(autokey_encode("Meet me, at noon", "K"), "K") == "Meet me, at noon"

    print("✅ Autokey tests passed")

def test_gronsfeld():
    print("Testing Gronsfeld...")
    assert gronsfeld_encode("HELLO") == "KFPMT", f"Unexpected: {gronsfeld_encode('HELLO')}"
    assert gronsfeld_decode("KFPMT") == "HELLO"
    assert gronsfeld_encode("abc", "xyz") == gronsfeld_encode("abc", "31415"), "Non-digit key falls back"
    print("✅ Gronsfeld tests passed")

def test_trithemius():
    print("Testing Trithemius...")
    assert trithemius_encode("HELLO") == "HFNOS", f"Unexpected: {trithemius_encode('HELLO')}"
    assert trithemius_encode("A A A A") == "A B C D", "Counter should skip non-letters"
    assert trithemius_decode(trithemius_encode("Long text here", 5), 5) == "Long text here"
    print("✅ Trithemius tests passed")

def test_porta():
    print("Testing Porta...")
    assert porta("HELLO", "KEY") == "ZTXQM", f"Unexpected: {porta('HELLO', 'KEY')}"
    for key in ("SECRET", "A", "ZZ", "PORTA"):
        assert porta(porta("The Quick Brown Fox", key), key) == "The Quick Brown Fox", \
            f"Porta should be self-inverse for key {key}"
    print("✅ Porta tests passed")

def test_running_key():
    print("Testing running key...")
    assert running_key_encode("HELLO") == "ALPBI", f"Unexpected: {running_key_encode('HELLO')}"
    long_text = "A" * 40
    assert running_key_encode(long_text)[35:] == running_key_encode(long_text)[:5], "Key text should wrap"
    assert running_key_decode(running_key_encode("Hi there", "some book text"), "some book text") == "Hi there"
    print("✅ Running key tests passed")

def test_multi_caesar():
    """Shifts cycle per letter, skipping non-letters"""
    print("Testing multi-shift Caesar...")

    assert multi_caesar_encode("HELLO") == "KLYOV", f"Unexpected: {multi_caesar_encode('HELLO')}"
    assert multi_caesar_decode("KLYOV") == "HELLO"
    assert multi_caesar_encode("Hello, World!", "1, 2") == "Igmnp, Yptmf!", "Spaces in the shift list are allowed"
    assert multi_caesar_encode("abc", [3, 7, 13]) == multi_caesar_encode("abc"), "Int sequences are accepted"
    assert multi_caesar_encode("abc", "") == multi_caesar_encode("abc"), "Empty shifts fall back to 3,7,13"
    assert multi_caesar_decode(multi_caesar_encode("Round Trip", "-5,40"), "-5,40") == "Round Trip"

    with pytest.raises(ValueError):
        multi_caesar_encode("abc", "3,x")

    print("✅ Multi-shift Caesar tests passed")

def test_empty_input():
    print("Testing empty input...")
    for fn in (caesar_encode, rot13, rot47, atbash, affine_encode, vigenere_encode,
               autokey_decode, porta, trithemius_encode, running_key_encode):
        assert fn("") == "", f"{fn.__name__} should return empty string for empty input"
    print("✅ Empty input tests passed")

def run_all_tests():
    """Run all substitution tests"""
    print("🧪 Running substitution tests...")
    print("=" * 50)

    try:
        test_caesar()
        test_rot_variants()
        test_atbash()
        test_affine()
        test_keyword_substitution()
        test_vigenere()
        test_beaufort()
        test_autokey()
        test_gronsfeld()
        test_trithemius()
        test_porta()
        test_running_key()
        test_multi_caesar()
        test_empty_input()

        print("=" * 50)
        print("🎉 All substitution tests passed!")
        return True

    except AssertionError as e:
        print(f"❌ Test failed: {e}")
        return False

if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)

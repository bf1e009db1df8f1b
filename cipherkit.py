#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
cipherkit.py — classical cipher toolkit with a uniform encode/decode registry
Author: Shoaib Bin Rashid (R3D_XplOiT)

Families:
  - shift / monoalphabetic : caesar, rot13, rot5, rot18, rot47, atbash, affine, keyword
  - polyalphabetic         : vigenere, beaufort, autokey, gronsfeld, porta, trithemius,
                             multi-caesar, running-key
  - square / fractionation : playfair, four-square, bifid, polybius, nihilist,
                             straddling-checkerboard, tap-code, hill, homophonic
  - transposition          : rail-fence, columnar, double-transposition, scytale, adfgvx, adfgx
  - code                   : book-cipher
"""

import argparse
import math
import os
import random
import re
import string
import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from colorama import init as _init_colorama, Fore, Style

# ---------- Colors ----------
BOLD = Style.BRIGHT; RESET = Style.RESET_ALL
CYAN, GREEN, YELLOW, BLUE = Fore.CYAN, Fore.GREEN, Fore.YELLOW, Fore.BLUE

def cCYN(s): return f"{BOLD}{CYAN}{s}{RESET}"
def cGRN(s): return f"{BOLD}{GREEN}{s}{RESET}"
def cYEL(s): return f"{BOLD}{YELLOW}{s}{RESET}"
def cBLU(s): return f"{BLUE}{s}{RESET}"

def eprint(*a, **k): print(*a, file=sys.stderr, **k)

# ---------- Constants ----------
ALPHABET = string.ascii_uppercase
SQUARE25 = "ABCDEFGHIKLMNOPQRSTUVWXYZ"          # I/J merged
SQUARE36 = ALPHABET + string.digits
TAP_SQUARE = "ABCDEFGHIJLMNOPQRSTUVWXYZ"        # C/K merged
_LETTERS = frozenset(string.ascii_letters)

DEFAULT_KEY = "KEY"
DECODE_FAILED = "[Decode failed]"
PLACEHOLDER = "?"
WORD_SEP = " / "

class MalformedCiphertext(ValueError):
    """Ciphertext does not have the structure the decoder expects."""

class UnknownCipher(KeyError):
    """No cipher is registered under the requested id."""

# ---------- Key normalization ----------
def dedupe(seq: str) -> str:
    """Keep the first occurrence of each symbol, in order."""
    return "".join(dict.fromkeys(seq))

def normalize_key(raw, kind: str = "alpha", default: str = DEFAULT_KEY) -> str:
    """
    Reduce raw key material to the charset a cipher uses:
      - alpha: uppercase A-Z
      - digit: 0-9
      - alnum: uppercase A-Z and 0-9 (6x6 squares)
    An empty result is replaced by `default`; the returned key is never empty.
    """
    text = "" if raw is None else str(raw)
    if kind == "alpha":
        key = "".join(ch for ch in text.upper() if ch in ALPHABET)
    elif kind == "digit":
        key = "".join(ch for ch in text if ch in string.digits)
    elif kind == "alnum":
        key = "".join(ch for ch in text.upper() if ch in SQUARE36)
    else:
        raise ValueError(f"unknown key kind '{kind}'")
    return key or default

def _normalize_alpha(text: str) -> str:
    return "".join(ch.upper() for ch in text if ch in _LETTERS)

def _is_digits(s: str) -> bool:
    return all(ch in string.digits for ch in s)

_MAX_CODE_DIGITS = 9

def _code_value(tok: str, what: str) -> int:
    """Parse a numeric ciphertext token; values too long to be any code come back as -1."""
    if not tok or not _is_digits(tok):
        raise MalformedCiphertext(f"bad {what} token '{tok}'")
    digits = tok.lstrip("0") or "0"
    return int(digits) if len(digits) <= _MAX_CODE_DIGITS else -1

# ---------- Keyed alphabets & squares ----------
def build_keyed_alphabet(key: str) -> str:
    """Deduplicated key letters followed by the unused letters in natural order."""
    return dedupe(_normalize_alpha(key) + ALPHABET)

@dataclass(frozen=True)
class Square:
    symbols: str                                   # row-major, size*size symbols
    size: int
    folds: Tuple[Tuple[str, str], ...] = ()

    def fold(self, ch: str) -> str:
        ch = ch.upper()
        for src, dst in self.folds:
            if ch == src:
                return dst
        return ch

    def __contains__(self, ch: str) -> bool:
        return len(ch) == 1 and self.fold(ch) in self.symbols

    def coords(self, ch: str) -> Tuple[int, int]:
        idx = self.symbols.find(self.fold(ch))
        if idx < 0:
            raise KeyError(ch)
        return divmod(idx, self.size)

    def at(self, row: int, col: int) -> str:
        return self.symbols[(row % self.size) * self.size + (col % self.size)]

    @property
    def rows(self) -> List[str]:
        return [self.symbols[i:i+self.size] for i in range(0, len(self.symbols), self.size)]

def build_square(key: str = "", size: int = 25, base: Optional[str] = None,
                 folds: Optional[Tuple[Tuple[str, str], ...]] = None) -> Square:
    """
    Build a Polybius-style square: key symbols first, then the rest of the base
    alphabet, first occurrence wins. size=25 merges J into I, size=36 adds digits.
    """
    if size == 25:
        base = base or SQUARE25
        folds = (("J", "I"),) if folds is None else folds
    elif size == 36:
        base = base or SQUARE36
        folds = () if folds is None else folds
    else:
        raise ValueError(f"square size must be 25 or 36, got {size}")
    plain = Square(base, math.isqrt(size), folds)
    keyed = "".join(plain.fold(ch) for ch in (key or "") if ch in plain)
    symbols = dedupe(keyed + base)
    return Square(symbols, plain.size, folds)

# ---------- Letter helpers ----------
def _with_case(src: str, ch: str) -> str:
    return ch if src.isupper() else ch.lower()

def _map_letters(text: str, fn: Callable[[int, int], int]) -> str:
    """
    Apply fn(j, value) to every ASCII letter, where j counts letters only and
    value is 0-25. Case is kept; everything else passes through untouched.
    """
    out = []; j = 0
    for ch in text:
        if ch in _LETTERS:
            v = fn(j, ord(ch.upper()) - 65) % 26
            out.append(_with_case(ch, chr(v + 65))); j += 1
        else:
            out.append(ch)
    return "".join(out)

def _letter_values(key: str) -> List[int]:
    return [ord(ch) - 65 for ch in key]

# ---------- Shift / monoalphabetic ----------
def caesar_encode(text: str, shift: int = 13) -> str:
    s = int(shift) % 26
    return _map_letters(text, lambda j, v: v + s)

def caesar_decode(text: str, shift: int = 13) -> str:
    return caesar_encode(text, 26 - int(shift) % 26)

def rot13(text: str) -> str:
    return caesar_encode(text, 13)

def rot5_encode(text: str, shift: int = 5) -> str:
    s = int(shift) % 10
    return "".join(chr((ord(ch) - 48 + s) % 10 + 48) if ch in string.digits else ch for ch in text)

def rot5_decode(text: str, shift: int = 5) -> str:
    return rot5_encode(text, 10 - int(shift) % 10)

def rot18(text: str) -> str:
    return rot5_encode(rot13(text), 5)

def rot47(text: str) -> str:
    return "".join(chr(33 + (ord(ch) - 33 + 47) % 94) if 33 <= ord(ch) <= 126 else ch for ch in text)

def atbash(text: str) -> str:
    return _map_letters(text, lambda j, v: 25 - v)

def _inv_mod(a: int, m: int = 26) -> Optional[int]:
    a %= m
    for x in range(1, m):
        if (a * x) % m == 1:
            return x
    return None

def _affine_inverse(a: int) -> int:
    inv = _inv_mod(a)
    if inv is None:
        raise ValueError(f"affine multiplier a={a} is not coprime with 26; valid: 1,3,5,7,9,11,15,17,19,21,23,25")
    return inv

def affine_encode(text: str, a: int = 5, b: int = 8) -> str:
    _affine_inverse(a)
    return _map_letters(text, lambda j, v: a * v + b)

def affine_decode(text: str, a: int = 5, b: int = 8) -> str:
    inv = _affine_inverse(a)
    return _map_letters(text, lambda j, v: inv * (v - b))

def keyword_encode(text: str, keyword: str = "KEYWORD") -> str:
    alpha = build_keyed_alphabet(normalize_key(keyword, default="KEYWORD"))
    return _map_letters(text, lambda j, v: ord(alpha[v]) - 65)

def keyword_decode(text: str, keyword: str = "KEYWORD") -> str:
    alpha = build_keyed_alphabet(normalize_key(keyword, default="KEYWORD"))
    return _map_letters(text, lambda j, v: alpha.index(chr(v + 65)))

# ---------- Polyalphabetic ----------
def vigenere_encode(text: str, key: str = DEFAULT_KEY) -> str:
    ks = _letter_values(normalize_key(key))
    return _map_letters(text, lambda j, v: v + ks[j % len(ks)])

def vigenere_decode(text: str, key: str = DEFAULT_KEY) -> str:
    ks = _letter_values(normalize_key(key))
    return _map_letters(text, lambda j, v: v - ks[j % len(ks)])

def beaufort(text: str, key: str = DEFAULT_KEY) -> str:
    """Reciprocal: c = k - p, so the same call encodes and decodes."""
    ks = _letter_values(normalize_key(key))
    return _map_letters(text, lambda j, v: ks[j % len(ks)] - v)

def autokey_encode(text: str, key: str = DEFAULT_KEY) -> str:
    stream = _letter_values(normalize_key(key)) + _letter_values(_normalize_alpha(text))
    return _map_letters(text, lambda j, v: v + stream[j])

def autokey_decode(text: str, key: str = DEFAULT_KEY) -> str:
    # later stream entries are the plaintext recovered so far
    stream = _letter_values(normalize_key(key))
    def step(j: int, v: int) -> int:
        p = (v - stream[j]) % 26
        stream.append(p)
        return p
    return _map_letters(text, step)

def gronsfeld_encode(text: str, key: str = "31415") -> str:
    digs = [int(d) for d in normalize_key(key, "digit", "31415")]
    return _map_letters(text, lambda j, v: v + digs[j % len(digs)])

def gronsfeld_decode(text: str, key: str = "31415") -> str:
    digs = [int(d) for d in normalize_key(key, "digit", "31415")]
    return _map_letters(text, lambda j, v: v - digs[j % len(digs)])

def trithemius_encode(text: str, start: int = 0) -> str:
    return _map_letters(text, lambda j, v: v + start + j)

def trithemius_decode(text: str, start: int = 0) -> str:
    return _map_letters(text, lambda j, v: v - start - j)

MULTI_CAESAR_SHIFTS = "3,7,13"

def _parse_shifts(shifts) -> List[int]:
    """'3,7,13' (or a sequence of ints) -> [3, 7, 13]; empty falls back to the default."""
    if isinstance(shifts, str):
        parts = [p.strip() for p in shifts.split(",") if p.strip()]
    else:
        parts = list(shifts or [])
    if not parts:
        return _parse_shifts(MULTI_CAESAR_SHIFTS)
    try:
        return [int(p) for p in parts]
    except (TypeError, ValueError):
        raise ValueError(f"shifts must be comma-separated integers, got {shifts!r}") from None

def multi_caesar_encode(text: str, shifts: str = MULTI_CAESAR_SHIFTS) -> str:
    s = _parse_shifts(shifts)
    return _map_letters(text, lambda j, v: v + s[j % len(s)])

def multi_caesar_decode(text: str, shifts: str = MULTI_CAESAR_SHIFTS) -> str:
    s = _parse_shifts(shifts)
    return _map_letters(text, lambda j, v: v - s[j % len(s)])

def _porta_sub(v: int, row: int) -> int:
    if v < 13:
        return 13 + (v + row) % 13
    return (v - 13 - row) % 13

def porta(text: str, key: str = "SECRET") -> str:
    """13-row reciprocal tableau; key letters pair up (AB, CD, ...) to pick a row."""
    rows = [v // 2 for v in _letter_values(normalize_key(key, default="SECRET"))]
    return _map_letters(text, lambda j, v: _porta_sub(v, rows[j % len(rows)]))

RUNNING_KEY_TEXT = "THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG"

def running_key_encode(text: str, key: str = RUNNING_KEY_TEXT) -> str:
    # the key text is consumed once; it only wraps when shorter than the message
    ks = _letter_values(normalize_key(key, default=RUNNING_KEY_TEXT))
    return _map_letters(text, lambda j, v: v + ks[j % len(ks)])

def running_key_decode(text: str, key: str = RUNNING_KEY_TEXT) -> str:
    ks = _letter_values(normalize_key(key, default=RUNNING_KEY_TEXT))
    return _map_letters(text, lambda j, v: v - ks[j % len(ks)])

# ---------- Playfair ----------
def _filler_for(ch: str, filler: str) -> str:
    if ch != filler:
        return filler
    return "Q" if filler != "Q" else "X"

def _playfair_filler(filler: str) -> str:
    f = normalize_key(filler, default="X")[0]
    return "I" if f == "J" else f

def _playfair_digraphs(text: str, filler: str) -> List[Tuple[str, str]]:
    """J->I, split doubled letters with the filler and pad an odd tail."""
    letters = ["I" if ch == "J" else ch for ch in _normalize_alpha(text)]
    pairs: List[Tuple[str, str]] = []
    i = 0
    while i < len(letters):
        a = letters[i]
        b = letters[i+1] if i + 1 < len(letters) else None
        if b is None or a == b:
            pairs.append((a, _filler_for(a, filler))); i += 1
        else:
            pairs.append((a, b)); i += 2
    return pairs

def _playfair_pair(sq: Square, a: str, b: str, step: int) -> str:
    r1, c1 = sq.coords(a)
    r2, c2 = sq.coords(b)
    if r1 == r2:
        return sq.at(r1, c1 + step) + sq.at(r2, c2 + step)
    if c1 == c2:
        return sq.at(r1 + step, c1) + sq.at(r2 + step, c2)
    return sq.at(r1, c2) + sq.at(r2, c1)

def playfair_encode(text: str, keyword: str = "MONARCHY", filler: str = "X") -> str:
    sq = build_square(normalize_key(keyword, default="MONARCHY"))
    f = _playfair_filler(filler)
    return "".join(_playfair_pair(sq, a, b, 1) for a, b in _playfair_digraphs(text, f))

def _strip_playfair_filler(plain: str, filler: str) -> str:
    out = []
    for i in range(0, len(plain), 2):
        a, b = plain[i], plain[i+1]
        nxt = plain[i+2] if i + 2 < len(plain) else None
        out.append(a)
        if b == _filler_for(a, filler) and (nxt is None or nxt == a):
            continue
        out.append(b)
    return "".join(out)

def playfair_decode(text: str, keyword: str = "MONARCHY", filler: str = "X") -> str:
    sq = build_square(normalize_key(keyword, default="MONARCHY"))
    f = _playfair_filler(filler)
    s = "".join(sq.fold(ch) for ch in _normalize_alpha(text))
    if len(s) % 2:
        raise MalformedCiphertext("playfair ciphertext has odd length")
    plain = "".join(_playfair_pair(sq, s[i], s[i+1], -1) for i in range(0, len(s), 2))
    return _strip_playfair_filler(plain, f)

# ---------- Four-square ----------
def _four_squares(key1: str, key2: str) -> Tuple[Square, Square, Square]:
    return (build_square(),
            build_square(normalize_key(key1, default="EXAMPLE")),
            build_square(normalize_key(key2, default="KEYWORD")))

def four_square_encode(text: str, key1: str = "EXAMPLE", key2: str = "KEYWORD") -> str:
    plain, sq1, sq2 = _four_squares(key1, key2)
    s = "".join(plain.fold(ch) for ch in _normalize_alpha(text))
    if len(s) % 2:
        s += "X"
    out = []
    for i in range(0, len(s), 2):
        r1, c1 = plain.coords(s[i])
        r2, c2 = plain.coords(s[i+1])
        out.append(sq1.at(r1, c2)); out.append(sq2.at(r2, c1))
    return "".join(out)

def four_square_decode(text: str, key1: str = "EXAMPLE", key2: str = "KEYWORD") -> str:
    plain, sq1, sq2 = _four_squares(key1, key2)
    s = "".join(plain.fold(ch) for ch in _normalize_alpha(text))
    if len(s) % 2:
        raise MalformedCiphertext("four-square ciphertext has odd length")
    out = []
    for i in range(0, len(s), 2):
        r1, c2 = sq1.coords(s[i])
        r2, c1 = sq2.coords(s[i+1])
        out.append(plain.at(r1, c1)); out.append(plain.at(r2, c2))
    return "".join(out)

# ---------- Bifid ----------
def _blocks(seq: str, period: int) -> Iterable[str]:
    if period <= 0:
        yield seq
        return
    for i in range(0, len(seq), period):
        yield seq[i:i+period]

def bifid_encode(text: str, key: str = DEFAULT_KEY, period: int = 0) -> str:
    """Rows of the whole block, then its columns, re-paired through the square."""
    sq = build_square(normalize_key(key))
    s = "".join(sq.fold(ch) for ch in _normalize_alpha(text))
    out = []
    for block in _blocks(s, period):
        coords = [sq.coords(ch) for ch in block]
        seq = [r for r, _ in coords] + [c for _, c in coords]
        out.extend(sq.at(seq[i], seq[i+1]) for i in range(0, len(seq), 2))
    return "".join(out)

def bifid_decode(text: str, key: str = DEFAULT_KEY, period: int = 0) -> str:
    sq = build_square(normalize_key(key))
    s = "".join(sq.fold(ch) for ch in _normalize_alpha(text))
    out = []
    for block in _blocks(s, period):
        seq = [n for ch in block for n in sq.coords(ch)]
        half = len(block)
        out.extend(sq.at(r, c) for r, c in zip(seq[:half], seq[half:]))
    return "".join(out)

# ---------- Polybius / Nihilist ----------
def _square_for_size(key: str, size: int) -> Square:
    if size not in (5, 6):
        raise ValueError(f"polybius size must be 5 or 6, got {size}")
    if size == 5:
        return build_square(_normalize_alpha(key), 25)
    return build_square("".join(ch for ch in key.upper() if ch in SQUARE36), 36)

def _split_words(text: str) -> List[str]:
    return text.split()

def _coord_tokens(text: str) -> List[List[str]]:
    """Split a coded payload into words (on '/') and whitespace tokens."""
    return [part.split() for part in text.split("/")]

def polybius_encode(text: str, size: int = 5, key: str = "") -> str:
    sq = _square_for_size(key, size)
    words = []
    for word in _split_words(text):
        codes = []
        for ch in word:
            if ch in sq:
                r, c = sq.coords(ch)
                codes.append(f"{r+1}{c+1}")
        if codes:
            words.append(" ".join(codes))
    return WORD_SEP.join(words)

def polybius_decode(text: str, size: int = 5, key: str = "") -> str:
    sq = _square_for_size(key, size)
    words = []
    for tokens in _coord_tokens(text):
        letters = []
        for tok in tokens:
            if not tok or not _is_digits(tok) or len(tok) % 2:
                raise MalformedCiphertext(f"bad polybius token '{tok}'")
            for i in range(0, len(tok), 2):
                r, c = int(tok[i]) - 1, int(tok[i+1]) - 1
                letters.append(sq.at(r, c) if 0 <= r < sq.size and 0 <= c < sq.size else PLACEHOLDER)
        if letters:
            words.append("".join(letters))
    return " ".join(words)

def _nihilist_setup(keyword: str) -> Tuple[Square, List[int]]:
    key = normalize_key(keyword, default="ZEBRA")
    sq = build_square(key)
    nums = []
    for ch in key:
        r, c = sq.coords(ch)
        nums.append((r + 1) * 10 + c + 1)
    return sq, nums

def nihilist_encode(text: str, keyword: str = "ZEBRA") -> str:
    """Plain integer sum of the letter's coordinate and the cycling key coordinate."""
    sq, nums = _nihilist_setup(keyword)
    words = []; j = 0
    for word in _split_words(text):
        codes = []
        for ch in word:
            if ch in _LETTERS:
                r, c = sq.coords(ch)
                codes.append(str((r + 1) * 10 + c + 1 + nums[j % len(nums)])); j += 1
        if codes:
            words.append(" ".join(codes))
    return WORD_SEP.join(words)

def nihilist_decode(text: str, keyword: str = "ZEBRA") -> str:
    sq, nums = _nihilist_setup(keyword)
    words = []; j = 0
    for tokens in _coord_tokens(text):
        letters = []
        for tok in tokens:
            r, c = divmod(_code_value(tok, "nihilist") - nums[j % len(nums)], 10); j += 1
            letters.append(sq.at(r - 1, c - 1) if 1 <= r <= 5 and 1 <= c <= 5 else PLACEHOLDER)
        if letters:
            words.append("".join(letters))
    return " ".join(words)

# ---------- Straddling checkerboard ----------
def _escape_digits(escapes: str) -> Tuple[str, str]:
    digs = dedupe(normalize_key(escapes, "digit", "26"))
    if len(digs) < 2:
        digs = "26"
    return digs[0], digs[1]

def _checkerboard(keyword: str, escapes: str) -> Tuple[Dict[str, str], Tuple[str, str]]:
    """
    Top row: the first 8 letters of the keyed alphabet on the 8 non-escape digits.
    The remaining 18 letters go to the rows prefixed by the two escape digits.
    Single digits never start a two-digit code, so the code is prefix-free.
    """
    alpha = build_keyed_alphabet(normalize_key(keyword, default="ESTONAI"))
    esc = _escape_digits(escapes)
    top = [d for d in string.digits if d not in esc]
    codes = dict(zip(alpha[:8], top))
    for i, ch in enumerate(alpha[8:]):
        codes[ch] = esc[i // 10] + str(i % 10)
    return codes, esc

def straddling_encode(text: str, keyword: str = "ESTONAI", escapes: str = "26") -> str:
    codes, _ = _checkerboard(keyword, escapes)
    return "".join(codes[ch] for ch in _normalize_alpha(text))

def straddling_decode(text: str, keyword: str = "ESTONAI", escapes: str = "26") -> str:
    codes, esc = _checkerboard(keyword, escapes)
    lookup = {code: ch for ch, code in codes.items()}
    digits = "".join(text.split())
    if not _is_digits(digits):
        raise MalformedCiphertext("checkerboard ciphertext must be digits")
    out = []; i = 0
    while i < len(digits):
        width = 2 if digits[i] in esc else 1
        code = digits[i:i+width]
        if len(code) < width:
            raise MalformedCiphertext("dangling escape digit at end of checkerboard ciphertext")
        out.append(lookup.get(code, PLACEHOLDER)); i += width
    return "".join(out)

# ---------- Tap code ----------
def _tap_square() -> Square:
    return build_square("", 25, base=TAP_SQUARE, folds=(("K", "C"),))

def tap_code_encode(text: str) -> str:
    sq = _tap_square()
    words = []
    for word in _split_words(text):
        taps = []
        for ch in word:
            if ch in _LETTERS:
                r, c = sq.coords(ch)
                taps.append("." * (r + 1) + " " + "." * (c + 1))
        if taps:
            words.append("  ".join(taps))
    return WORD_SEP.join(words)

def tap_code_decode(text: str) -> str:
    sq = _tap_square()
    words = []
    for part in text.split("/"):
        letters = []
        for group in re.split(r"\s{2,}", part.strip()):
            if not group:
                continue
            taps = group.split()
            if len(taps) != 2 or any(set(t) != {"."} or len(t) > 5 for t in taps):
                raise MalformedCiphertext(f"bad tap group '{group}'")
            letters.append(sq.at(len(taps[0]) - 1, len(taps[1]) - 1))
        if letters:
            words.append("".join(letters))
    return " ".join(words)

# ---------- Hill (2x2) ----------
HILL_MATRIX = ((3, 3), (2, 5))
HILL_INVERSE = ((15, 17), (20, 9))              # HILL_MATRIX^-1 mod 26

def _hill_apply(s: str, mat: Tuple[Tuple[int, int], Tuple[int, int]]) -> str:
    out = []
    for i in range(0, len(s), 2):
        x, y = ord(s[i]) - 65, ord(s[i+1]) - 65
        out.append(chr((mat[0][0] * x + mat[0][1] * y) % 26 + 65))
        out.append(chr((mat[1][0] * x + mat[1][1] * y) % 26 + 65))
    return "".join(out)

def hill_encode(text: str) -> str:
    s = _normalize_alpha(text)
    if len(s) % 2:
        s += "X"
    return _hill_apply(s, HILL_MATRIX)

def hill_decode(text: str) -> str:
    s = _normalize_alpha(text)
    if len(s) % 2:
        raise MalformedCiphertext("hill ciphertext has odd length")
    return _hill_apply(s, HILL_INVERSE)

# ---------- Homophonic substitution ----------
_HOMOPHONE_WEIGHTS = {
    'E': 4, 'T': 3, 'A': 3, 'O': 3, 'I': 3, 'N': 3, 'S': 2, 'H': 2, 'R': 2,
    'D': 2, 'L': 2,
}

def _homophone_table(complexity: int) -> Dict[str, List[int]]:
    """Frequent letters get up to `complexity` two-digit codes, starting at 10."""
    complexity = max(1, int(complexity))
    table: Dict[str, List[int]] = {}
    code = 10
    for letter in ALPHABET:
        count = min(_HOMOPHONE_WEIGHTS.get(letter, 1), complexity)
        table[letter] = list(range(code, code + count))
        code += count
    return table

def homophonic_encode(text: str, complexity: int = 3, seed: Optional[int] = None,
                      rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random(seed)
    table = _homophone_table(complexity)
    return " ".join(str(rng.choice(table[ch])) for ch in _normalize_alpha(text))

def homophonic_decode(text: str, complexity: int = 3, seed: Optional[int] = None) -> str:
    lookup = {code: letter for letter, codes in _homophone_table(complexity).items() for code in codes}
    out = []
    for tok in text.split():
        out.append(lookup.get(_code_value(tok, "homophone"), PLACEHOLDER))
    return "".join(out)

# ---------- Book cipher ----------
BOOK_TEXT = "The quick brown fox jumps over the lazy dog and runs away quickly"

def _book_words(book: str) -> List[str]:
    words = [re.sub(r"[^a-z]", "", w) for w in (book or "").lower().split()]
    return words if any(words) else _book_words(BOOK_TEXT)

def book_encode(text: str, book: str = BOOK_TEXT, seed: Optional[int] = None,
                rng: Optional[random.Random] = None) -> str:
    """
    Words found in the book become one 1-based word position (a random one when
    the word repeats). Other words are spelled letter by letter as dash-joined
    positions of book words starting with that letter; a one-letter spelling keeps
    a trailing dash so it never reads as a whole word. Letters no book word starts
    with become '?'.
    """
    rng = rng or random.Random(seed)
    words = _book_words(book)
    positions: Dict[str, List[int]] = {}
    first: Dict[str, int] = {}
    for i, w in enumerate(words, 1):
        if w:
            positions.setdefault(w, []).append(i)
            first.setdefault(w[0], i)
    out = []
    for raw in text.split():
        word = re.sub(r"[^a-z]", "", raw.lower())
        if not word:
            continue
        if word in positions:
            out.append(str(rng.choice(positions[word])))
            continue
        codes = [str(first[ch]) if ch in first else PLACEHOLDER for ch in word]
        out.append("-".join(codes) + ("-" if len(codes) == 1 else ""))
    return " ".join(out)

def book_decode(text: str, book: str = BOOK_TEXT, seed: Optional[int] = None) -> str:
    words = _book_words(book)

    def lookup(tok: str) -> str:
        if tok == PLACEHOLDER:
            return PLACEHOLDER
        idx = _code_value(tok, "book") - 1
        return words[idx] if 0 <= idx < len(words) and words[idx] else PLACEHOLDER

    out = []
    for tok in text.split():
        if "-" in tok:
            out.append("".join(lookup(p)[0] for p in tok.split("-") if p))
        else:
            out.append(lookup(tok))
    return " ".join(out)

# ---------- Transposition ----------
def _rail_pattern(n: int, rails: int) -> List[int]:
    pattern = []; rail = 0; step = 1
    for _ in range(n):
        pattern.append(rail)
        if rails > 1:
            if rail == 0:
                step = 1
            elif rail == rails - 1:
                step = -1
            rail += step
    return pattern

def rail_fence_encode(text: str, rails: int = 3) -> str:
    s = "".join(ch for ch in text if ch in _LETTERS)
    if rails <= 1:
        return s
    pattern = _rail_pattern(len(s), rails)
    return "".join(s[i] for r in range(rails) for i in range(len(s)) if pattern[i] == r)

def rail_fence_decode(text: str, rails: int = 3) -> str:
    """Replay the zigzag to learn which positions each rail owns, then refill."""
    s = "".join(ch for ch in text if ch in _LETTERS)
    if rails <= 1:
        return s
    pattern = _rail_pattern(len(s), rails)
    order = sorted(range(len(s)), key=lambda i: (pattern[i], i))
    out = [""] * len(s)
    for ch, pos in zip(s, order):
        out[pos] = ch
    return "".join(out)

def _column_order(key: str) -> List[int]:
    # alphabetical key letters, ties broken by original column index
    return [idx for _, idx in sorted((ch, idx) for idx, ch in enumerate(key))]

def _columns_encrypt(text: str, order: Sequence[int]) -> List[str]:
    cols = len(order)
    return [text[idx::cols] for idx in order]

def _columns_decrypt(text: str, order: Sequence[int]) -> str:
    cols = len(order)
    n = len(text)
    out = [""] * n
    pos = 0
    for idx in order:
        length = len(range(idx, n, cols))
        out[idx::cols] = text[pos:pos+length]
        pos += length
    return "".join(out)

def _col_transpose_encrypt(text: str, key: str) -> str:
    return "".join(_columns_encrypt(text, _column_order(key)))

def _col_transpose_decrypt(text: str, key: str) -> str:
    return _columns_decrypt(text, _column_order(key))

def columnar_encode(text: str, key: str = "ZEBRAS") -> str:
    s = "".join(ch for ch in text if ch in _LETTERS)
    return _col_transpose_encrypt(s, normalize_key(key, default="ZEBRAS"))

def columnar_decode(text: str, key: str = "ZEBRAS") -> str:
    s = "".join(ch for ch in text if ch in _LETTERS)
    return _col_transpose_decrypt(s, normalize_key(key, default="ZEBRAS"))

def double_transposition_encode(text: str, key1: str = "FIRST", key2: str = "SECOND") -> str:
    first = columnar_encode(text, normalize_key(key1, default="FIRST"))
    return columnar_encode(first, normalize_key(key2, default="SECOND"))

def double_transposition_decode(text: str, key1: str = "FIRST", key2: str = "SECOND") -> str:
    first = columnar_decode(text, normalize_key(key2, default="SECOND"))
    return columnar_decode(first, normalize_key(key1, default="FIRST"))

def scytale_encode(text: str, diameter: int = 4) -> str:
    s = "".join(ch for ch in text if ch in _LETTERS)
    if diameter <= 1:
        return s
    return "".join(_columns_encrypt(s, range(diameter)))

def scytale_decode(text: str, diameter: int = 4) -> str:
    s = "".join(ch for ch in text if ch in _LETTERS)
    if diameter <= 1:
        return s
    return _columns_decrypt(s, range(diameter))

# ---------- ADFGVX / ADFGX ----------
def _adfgx_square(square_key: str, labels: str) -> Square:
    if len(labels) == 6:
        return build_square("".join(ch for ch in square_key.upper() if ch in SQUARE36), 36)
    return build_square(_normalize_alpha(square_key), 25)

def _adfgx_encode(text: str, keyword: str, square_key: str, labels: str) -> str:
    """Substitute through the square into label pairs, then columnar-transpose."""
    sq = _adfgx_square(square_key, labels)
    code = []
    for ch in text:
        if ch in sq:
            r, c = sq.coords(ch)
            code.append(labels[r] + labels[c])
    key = normalize_key(keyword, default="GERMAN")
    return " ".join(col for col in _columns_encrypt("".join(code), _column_order(key)) if col)

def _adfgx_decode(text: str, keyword: str, square_key: str, labels: str) -> str:
    sq = _adfgx_square(square_key, labels)
    s = "".join(text.upper().split())
    bad = set(s) - set(labels)
    if bad:
        raise MalformedCiphertext(f"unexpected symbols {''.join(sorted(bad))} in {labels} ciphertext")
    code = _col_transpose_decrypt(s, normalize_key(keyword, default="GERMAN"))
    if len(code) % 2:
        raise MalformedCiphertext(f"{labels} ciphertext has odd length")
    return "".join(sq.at(labels.index(code[i]), labels.index(code[i+1])) for i in range(0, len(code), 2))

def adfgvx_encode(text: str, keyword: str = "GERMAN", square_key: str = "") -> str:
    return _adfgx_encode(text, keyword, square_key, "ADFGVX")

def adfgvx_decode(text: str, keyword: str = "GERMAN", square_key: str = "") -> str:
    return _adfgx_decode(text, keyword, square_key, "ADFGVX")

def adfgx_encode(text: str, keyword: str = "GERMAN", square_key: str = "") -> str:
    return _adfgx_encode(text, keyword, square_key, "ADFGX")

def adfgx_decode(text: str, keyword: str = "GERMAN", square_key: str = "") -> str:
    return _adfgx_decode(text, keyword, square_key, "ADFGX")

# ---------- Registry ----------
ParamSchema = Dict[str, Tuple[type, object]]

@dataclass(frozen=True)
class CipherSpec:
    id: str
    name: str
    family: str
    encode: Callable[..., str]
    decode: Callable[..., str]
    params: ParamSchema = field(default_factory=dict)
    self_inverse: bool = False

    def resolve(self, params: Optional[Dict[str, object]] = None) -> Dict[str, object]:
        """Fill defaults and coerce values (CLI strings included) to the declared types."""
        params = dict(params or {})
        unknown = sorted(set(params) - set(self.params))
        if unknown:
            raise ValueError(f"{self.id}: unknown parameter(s) {', '.join(unknown)}; "
                             f"accepted: {', '.join(self.params) or 'none'}")
        out: Dict[str, object] = {}
        for name, (typ, default) in self.params.items():
            value = params.get(name, default)
            if value is None or isinstance(value, typ) and not isinstance(value, bool):
                out[name] = value
                continue
            try:
                out[name] = typ(value)
            except (TypeError, ValueError):
                raise ValueError(f"{self.id}: parameter '{name}' expects {typ.__name__}, got {value!r}") from None
        return out

    @property
    def defaults(self) -> Dict[str, object]:
        return {name: default for name, (_, default) in self.params.items()}

SHIFT, POLY, SQUARE, TRANSPOSITION, CODE = "shift", "polyalphabetic", "square", "transposition", "code"

CIPHERS: Dict[str, CipherSpec] = {}

def _register(spec: CipherSpec):
    CIPHERS[spec.id] = spec

for _spec in (
    CipherSpec("caesar", "Caesar / ROT-N", SHIFT, caesar_encode, caesar_decode, {"shift": (int, 13)}),
    CipherSpec("rot13", "ROT13", SHIFT, rot13, rot13, self_inverse=True),
    CipherSpec("rot5", "ROT5 (digits)", SHIFT, rot5_encode, rot5_decode, {"shift": (int, 5)}),
    CipherSpec("rot18", "ROT18", SHIFT, rot18, rot18, self_inverse=True),
    CipherSpec("rot47", "ROT47", SHIFT, rot47, rot47, self_inverse=True),
    CipherSpec("atbash", "Atbash", SHIFT, atbash, atbash, self_inverse=True),
    CipherSpec("affine", "Affine", SHIFT, affine_encode, affine_decode, {"a": (int, 5), "b": (int, 8)}),
    CipherSpec("keyword", "Keyword substitution", SHIFT, keyword_encode, keyword_decode,
               {"keyword": (str, "KEYWORD")}),
    CipherSpec("vigenere", "Vigenère", POLY, vigenere_encode, vigenere_decode, {"key": (str, DEFAULT_KEY)}),
    CipherSpec("beaufort", "Beaufort", POLY, beaufort, beaufort, {"key": (str, DEFAULT_KEY)}, self_inverse=True),
    CipherSpec("autokey", "Autokey", POLY, autokey_encode, autokey_decode, {"key": (str, DEFAULT_KEY)}),
    CipherSpec("gronsfeld", "Gronsfeld", POLY, gronsfeld_encode, gronsfeld_decode, {"key": (str, "31415")}),
    CipherSpec("porta", "Porta", POLY, porta, porta, {"key": (str, "SECRET")}, self_inverse=True),
    CipherSpec("trithemius", "Trithemius", POLY, trithemius_encode, trithemius_decode, {"start": (int, 0)}),
    CipherSpec("multi-caesar", "Multi-shift Caesar", POLY, multi_caesar_encode, multi_caesar_decode,
               {"shifts": (str, MULTI_CAESAR_SHIFTS)}),
    CipherSpec("running-key", "Running key", POLY, running_key_encode, running_key_decode,
               {"key": (str, RUNNING_KEY_TEXT)}),
    CipherSpec("playfair", "Playfair", SQUARE, playfair_encode, playfair_decode,
               {"keyword": (str, "MONARCHY"), "filler": (str, "X")}),
    CipherSpec("four-square", "Four-square", SQUARE, four_square_encode, four_square_decode,
               {"key1": (str, "EXAMPLE"), "key2": (str, "KEYWORD")}),
    CipherSpec("bifid", "Bifid", SQUARE, bifid_encode, bifid_decode, {"key": (str, DEFAULT_KEY), "period": (int, 0)}),
    CipherSpec("polybius", "Polybius square", SQUARE, polybius_encode, polybius_decode,
               {"size": (int, 5), "key": (str, "")}),
    CipherSpec("nihilist", "Nihilist", SQUARE, nihilist_encode, nihilist_decode, {"keyword": (str, "ZEBRA")}),
    CipherSpec("straddling-checkerboard", "Straddling checkerboard", SQUARE, straddling_encode, straddling_decode,
               {"keyword": (str, "ESTONAI"), "escapes": (str, "26")}),
    CipherSpec("tap-code", "Tap code", SQUARE, tap_code_encode, tap_code_decode),
    CipherSpec("hill", "Hill (2x2)", SQUARE, hill_encode, hill_decode),
    CipherSpec("homophonic", "Homophonic substitution", SQUARE, homophonic_encode, homophonic_decode,
               {"complexity": (int, 3), "seed": (int, None)}),
    CipherSpec("rail-fence", "Rail fence", TRANSPOSITION, rail_fence_encode, rail_fence_decode, {"rails": (int, 3)}),
    CipherSpec("columnar", "Columnar transposition", TRANSPOSITION, columnar_encode, columnar_decode,
               {"key": (str, "ZEBRAS")}),
    CipherSpec("double-transposition", "Double transposition", TRANSPOSITION,
               double_transposition_encode, double_transposition_decode,
               {"key1": (str, "FIRST"), "key2": (str, "SECOND")}),
    CipherSpec("scytale", "Scytale", TRANSPOSITION, scytale_encode, scytale_decode, {"diameter": (int, 4)}),
    CipherSpec("adfgvx", "ADFGVX", TRANSPOSITION, adfgvx_encode, adfgvx_decode,
               {"keyword": (str, "GERMAN"), "square_key": (str, "")}),
    CipherSpec("adfgx", "ADFGX", TRANSPOSITION, adfgx_encode, adfgx_decode,
               {"keyword": (str, "GERMAN"), "square_key": (str, "")}),
    CipherSpec("book-cipher", "Book cipher", CODE, book_encode, book_decode,
               {"book": (str, BOOK_TEXT), "seed": (int, None)}),
):
    _register(_spec)

ALIASES = {
    "rot-n": "caesar", "rotn": "caesar", "shift": "caesar",
    "vigenère": "vigenere", "railfence": "rail-fence", "runningkey": "running-key",
    "foursquare": "four-square", "checkerboard": "straddling-checkerboard",
    "tap": "tap-code", "tapcode": "tap-code", "double": "double-transposition",
}

def get_cipher(cipher_id: str) -> CipherSpec:
    key = cipher_id.strip().lower().replace("_", "-")
    key = ALIASES.get(key, key)
    try:
        return CIPHERS[key]
    except KeyError:
        raise UnknownCipher(cipher_id) from None

def list_ciphers(family: Optional[str] = None) -> List[CipherSpec]:
    return [spec for spec in CIPHERS.values() if family is None or spec.family == family]

def encode(cipher_id: str, text: str, params: Optional[Dict[str, object]] = None) -> str:
    spec = get_cipher(cipher_id)
    return spec.encode(text, **spec.resolve(params))

def decode(cipher_id: str, text: str, params: Optional[Dict[str, object]] = None) -> str:
    """Structural problems in `text` come back as DECODE_FAILED; bad params still raise."""
    spec = get_cipher(cipher_id)
    kwargs = spec.resolve(params)
    try:
        return spec.decode(text, **kwargs)
    except MalformedCiphertext:
        return DECODE_FAILED

# ---------- Chaining ----------
@dataclass
class ChainStep:
    cipher: str
    result: str
    error: bool = False

@dataclass
class ChainResult:
    final: str
    steps: List[ChainStep] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(step.error for step in self.steps)

ChainItem = Union[str, Tuple[str, Optional[Dict[str, object]]]]

def _chain_items(chain: Sequence[ChainItem]) -> List[Tuple[str, Optional[Dict[str, object]]]]:
    return [(item, None) if isinstance(item, str) else (item[0], item[1]) for item in chain]

def encode_chain(text: str, chain: Sequence[ChainItem]) -> ChainResult:
    res = ChainResult(text)
    for cipher_id, params in _chain_items(chain):
        try:
            current = encode(cipher_id, res.final, params)
        except ValueError as e:
            res.steps.append(ChainStep(cipher_id, f"[Encoding failed: {e}]", True))
            break
        res.steps.append(ChainStep(cipher_id, current))
        res.final = current
    return res

def decode_chain(text: str, chain: Sequence[ChainItem]) -> ChainResult:
    """Undo `chain` by decoding its steps in reverse order."""
    res = ChainResult(text)
    for cipher_id, params in reversed(_chain_items(chain)):
        try:
            current = decode(cipher_id, res.final, params)
        except ValueError as e:
            res.steps.append(ChainStep(cipher_id, f"[Decoding failed: {e}]", True))
            break
        if current == DECODE_FAILED:
            res.steps.append(ChainStep(cipher_id, current, True))
            break
        res.steps.append(ChainStep(cipher_id, current))
        res.final = current
    return res

# ---------- Helpers ----------
def is_file(p: str) -> bool:
    try:
        return os.path.isfile(p)
    except (OSError, ValueError):
        return False

def read_value_or_file(v: Optional[str]) -> Optional[str]:
    if v is None: return None
    if is_file(v):
        with open(v, "r", encoding="utf-8") as f:
            return f.read().rstrip("\r\n")
    return v

def parse_param_args(items: Sequence[str]) -> List[Tuple[Optional[str], str, str]]:
    """
    'NAME=VALUE' applies to every cipher declaring NAME; 'CIPHER.NAME=VALUE'
    only to that cipher. Returns (cipher or None, name, value) triples.
    """
    out = []
    for item in items:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"parameter '{item}' is not NAME=VALUE")
        scope, dot, pname = name.strip().rpartition(".")
        cipher = get_cipher(scope).id if dot else None
        out.append((cipher, pname, read_value_or_file(value)))
    return out

def params_for(spec: CipherSpec, parsed: Sequence[Tuple[Optional[str], str, str]]) -> Dict[str, object]:
    params: Dict[str, object] = {}
    for cipher, name, value in parsed:
        if cipher == spec.id or (cipher is None and name in spec.params):
            params[name] = value
    return params

def print_cipher_list():
    for family in (SHIFT, POLY, SQUARE, TRANSPOSITION, CODE):
        print(cCYN(f"=== {family} ==="))
        for spec in list_ciphers(family):
            defaults = ", ".join(f"{k}={v!r}" for k, v in spec.defaults.items()) or "-"
            mark = " (self-inverse)" if spec.self_inverse else ""
            print(f"  {spec.id:<24} {spec.name}{mark}")
            print(cBLU(f"  {'':<24} {defaults}"))

def run_all(mode: str, text: str, debug_on: bool) -> List[Tuple[str, str]]:
    """Push `text` through every registered cipher with default parameters."""
    rows = []
    for spec in list_ciphers():
        if debug_on:
            eprint(cCYN(f"Trying: [{spec.id}] {spec.defaults}"))
        try:
            out = encode(spec.id, text) if mode == "encode" else decode(spec.id, text)
        except ValueError as e:
            out = f"[{e}]"
        rows.append((spec.id, out))
    return rows

def run_chain(mode: str, ids: Sequence[str], text: str, parsed, debug_on: bool) -> ChainResult:
    chain = [(spec.id, params_for(spec, parsed)) for spec in (get_cipher(i) for i in ids)]
    if debug_on:
        for cipher_id, params in chain:
            eprint(cCYN(f"[{cipher_id}] params={get_cipher(cipher_id).resolve(params)}"))
    res = encode_chain(text, chain) if mode == "encode" else decode_chain(text, chain)
    if debug_on:
        for step in res.steps:
            tag = cYEL(step.cipher) if step.error else cCYN(step.cipher)
            eprint(f"{mode} [{tag}] -> {step.result}")
    return res

def write_output(path: str, content: str):
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content + "\n")
    except OSError as e:
        eprint(cYEL(f"Failed to write {path}: {e}"))

# ---------- Main ----------
def main(argv: Optional[Sequence[str]] = None):
    _init_colorama(autoreset=True)
    ap = argparse.ArgumentParser(
        description="cipherkit: classical cipher encoder/decoder",
        add_help=False
    )
    ap.add_argument("mode", nargs="?", choices=("encode", "decode"), help="encode or decode")
    ap.add_argument("cipher", nargs="?", help="Cipher id, or a comma-separated chain (e.g. vigenere,rail-fence)")
    ap.add_argument("-t","--text", help="Input text (raw string or path to file)")
    ap.add_argument("-p","--param", action="append", default=[], metavar="NAME=VALUE",
                    help="Cipher parameter; CIPHER.NAME=VALUE scopes it to one cipher of a chain")
    ap.add_argument("-o","--output", help="Also write the result to this file")
    ap.add_argument("-a","--all", action="store_true", help="Run the text through every cipher with defaults")
    ap.add_argument("-l","--list", action="store_true", help="List available ciphers and their defaults")
    ap.add_argument("-d","--debug", action="store_true", help="Trace each cipher step on stderr")
    ap.add_argument("-h","--help", action="help", help="Show this help and exit")
    args = ap.parse_args(argv)

    if args.list:
        print_cipher_list()
        sys.exit(0)

    mode = args.mode or input("Mode (encode/decode): ").strip().lower()
    if mode not in ("encode", "decode"):
        print(cYEL(f"Unknown mode '{mode}' (expected encode or decode).")); sys.exit(2)
    if not args.all and not args.cipher:
        print(cYEL("Missing cipher id (see --list).")); sys.exit(2)

    text = read_value_or_file(args.text)
    if text is None:
        text = read_value_or_file(input("Text (raw or path to file): ").strip())

    if args.all:
        rows = run_all(mode, text, args.debug)
        width = max(len(cid) for cid, _ in rows)
        for cid, out in rows:
            colour = cYEL if out.startswith("[") else cGRN
            print(f"{cCYN(cid.ljust(width))}  {colour(out)}")
        if args.output:
            write_output(args.output, "\n".join(f"[{cid}] {out}" for cid, out in rows))
        sys.exit(0)

    try:
        ids = [c for c in args.cipher.split(",") if c.strip()]
        parsed = parse_param_args(args.param)
        res = run_chain(mode, ids, text, parsed, args.debug)
    except UnknownCipher as e:
        print(cYEL(f"Unknown cipher {e} (see --list).")); sys.exit(2)
    except ValueError as e:
        print(cYEL(str(e))); sys.exit(2)

    if not res.ok:
        failed = res.steps[-1]
        print(cYEL(f"{failed.result} at step [{failed.cipher}]"))
        sys.exit(1 if failed.result == DECODE_FAILED else 2)

    print(res.final)
    if args.output:
        write_output(args.output, res.final)
        eprint(cBLU(f"Result written to {args.output}"))
    sys.exit(0)

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted."); sys.exit(130)

"""Lexical relevance between a consultation query and a reference text.

Tokenisation is deliberately naive: lower-cased, split on whitespace. Two
words match when either one is a substring of the other, which lets Arabic
prefixed forms (e.g. "للعامل") match their bare stem ("العامل").
"""

from typing import List

MIN_MATCHING_WORDS = 2

def tokenize(text: str) -> List[str]:
    return text.lower().split()

def words_match(query_word: str, text_word: str) -> bool:
    return query_word in text_word or text_word in query_word

def matching_words(query: str, text: str) -> List[str]:
    """Query words that match at least one word of ``text``."""
    text_words = tokenize(text)
    return [
        word for word in tokenize(query)
        if any(words_match(word, text_word) for text_word in text_words)
    ]

def is_relevant(query: str, text: str) -> bool:
    return len(matching_words(query, text)) >= MIN_MATCHING_WORDS

def relevance_score(query: str, text: str) -> float:
    """Matching (query word, text word) pairs per query word, capped at 1."""
    query_words = tokenize(query)
    if not query_words:
        return 0.0

    text_words = tokenize(text)
    matches = sum(
        1
        for word in query_words
        for text_word in text_words
        if words_match(word, text_word)
    )
    return min(matches / len(query_words), 1.0)

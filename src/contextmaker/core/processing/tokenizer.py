from __future__ import annotations

"""
Token Counting Engine.

Estimates how many tokens the assembled prompt document will consume.
Implements a Strategy Pattern with a character-density heuristic and a
tiktoken BPE encoder, falling back to the heuristic whenever the encoder
cannot be used.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Dict

import tiktoken

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS & CACHE
# -----------------------------------------------------------------------------

CHARS_PER_TOKEN_AVG = 4
METHOD_HEURISTIC = "heuristic"
METHOD_TIKTOKEN = "tiktoken"
DEFAULT_ENCODING = "o200k_base"
FALLBACK_ENCODING = "cl100k_base"

_ENCODING_CACHE: Dict[str, "tiktoken.Encoding"] = {}


# -----------------------------------------------------------------------------
# STRATEGY INTERFACES
# -----------------------------------------------------------------------------

class TokenizerStrategy(ABC):
    """
    Abstract base class for tokenization algorithms.
    """

    @abstractmethod
    def count(self, text: str, encoding_name: str) -> int:
        """
        Calculate the token count for a given text segment.

        Args:
            text: Input string to be tokenized.
            encoding_name: Encoding identifier (ignored by the heuristic).

        Returns:
            int: Total token count.
        """


class HeuristicStrategy(TokenizerStrategy):
    """
    Character density estimation. Works offline and never fails.
    """

    def count(self, text: str, encoding_name: str) -> int:
        return math.ceil(len(text) / CHARS_PER_TOKEN_AVG)


class TiktokenStrategy(TokenizerStrategy):
    """
    BPE encoder backed by the tiktoken library.
    """

    def count(self, text: str, encoding_name: str) -> int:
        """Execute local BPE encoding via tiktoken."""
        encoding = _get_encoding(encoding_name or DEFAULT_ENCODING)
        return len(encoding.encode(text, disallowed_special=()))


def _get_encoding(encoding_name: str) -> "tiktoken.Encoding":
    if encoding_name not in _ENCODING_CACHE:
        try:
            _ENCODING_CACHE[encoding_name] = tiktoken.get_encoding(encoding_name)
        except ValueError:
            logger.warning(f"Unknown encoding '{encoding_name}'. Using {FALLBACK_ENCODING}.")
            _ENCODING_CACHE[encoding_name] = tiktoken.get_encoding(FALLBACK_ENCODING)
    return _ENCODING_CACHE[encoding_name]


# -----------------------------------------------------------------------------
# SERVICE ORCHESTRATION (FACADE)
# -----------------------------------------------------------------------------

class TokenizerService:
    """
    Routes a count request to the selected strategy with a heuristic safety net.
    """

    def __init__(self) -> None:
        self.heuristic = HeuristicStrategy()
        self._strategy_map: Dict[str, TokenizerStrategy] = {
            METHOD_HEURISTIC: self.heuristic,
            METHOD_TIKTOKEN: TiktokenStrategy(),
        }

    def count(self, text: str, method: str = METHOD_HEURISTIC, encoding_name: str = DEFAULT_ENCODING) -> int:
        if not text:
            return 0

        strategy = self._strategy_map.get(method.lower(), self.heuristic)
        try:
            return strategy.count(text, encoding_name)
        except Exception as e:
            # Encoders may need to download their BPE ranks on first use
            logger.warning(f"Strategy {type(strategy).__name__} failed: {e}. Using heuristic fallback.")
            return self.heuristic.count(text, encoding_name)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

_SERVICE_INSTANCE = TokenizerService()


def count_tokens(text: str, method: str = METHOD_HEURISTIC, encoding_name: str = DEFAULT_ENCODING) -> int:
    """
    Estimate the number of tokens in a text.

    Args:
        text: Input string content.
        method: 'heuristic' or 'tiktoken'.
        encoding_name: tiktoken encoding used by the 'tiktoken' method.

    Returns:
        int: Total token count.
    """
    return _SERVICE_INSTANCE.count(text, method, encoding_name)

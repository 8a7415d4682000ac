"""
Environment Format Registry

Holds the import strategies in registration order and decides which one
handles a piece of content: every strategy is scored, the highest
non-zero confidence wins, and ties go to the strategy registered first.
"""

import logging
from typing import List, Optional, Tuple

from .. import config
from ..exceptions import UnrecognizedFormatError, UnsupportedFormatError
from ..models import EnvironmentRecord, FormatDetection, FormatInfo
from .dotenv import DotenvStrategy
from .json_format import JsonStrategy
from .postman import PostmanStrategy
from .strategy import ImportStrategy

logger = logging.getLogger(__name__)

AUTO = "auto"
UNKNOWN = "unknown"


class FormatRegistry:
    """Ordered collection of import strategies"""

    def __init__(self, strategies: Optional[List[ImportStrategy]] = None):
        self._strategies: List[ImportStrategy] = []
        for strategy in strategies or []:
            self.register(strategy)

    def register(self, strategy: ImportStrategy):
        """Add a strategy. One with the same format name is replaced in place."""
        for i, existing in enumerate(self._strategies):
            if existing.format_name == strategy.format_name:
                self._strategies[i] = strategy
                return
        self._strategies.append(strategy)

    def get_strategy(self, format_name: str) -> Optional[ImportStrategy]:
        for strategy in self._strategies:
            if strategy.format_name == format_name:
                return strategy
        return None

    @property
    def strategies(self) -> Tuple[ImportStrategy, ...]:
        return tuple(self._strategies)

    def get_supported_formats(self) -> List[FormatInfo]:
        return [s.get_format_info() for s in self._strategies]

    def scores(self, content: str) -> List[Tuple[ImportStrategy, float]]:
        """Confidence of every strategy, in registration order"""
        return [(s, s.get_confidence(content)) for s in self._strategies]

    def classify(self, content: str) -> Tuple[ImportStrategy, float]:
        """
        Pick the strategy for content.

        Raises:
            UnrecognizedFormatError: every strategy scored 0
        """
        best = None
        best_score = 0.0
        if content and content.strip():
            for strategy, score in self.scores(content):
                # Strict comparison keeps the earliest strategy on ties
                if score > best_score:
                    best, best_score = strategy, score

        if best is None:
            raise UnrecognizedFormatError()

        logger.debug("Detected format %s (confidence %.2f)", best.format_name, best_score)
        return best, best_score

    def detect_format(self, content: str) -> FormatDetection:
        """Like classify(), but reports "unknown" instead of raising"""
        try:
            strategy, confidence = self.classify(content)
        except UnrecognizedFormatError:
            return FormatDetection(format=UNKNOWN, confidence=0.0, is_valid=False)
        return FormatDetection(format=strategy.format_name, confidence=confidence, is_valid=True)

    def resolve(self, content: str, format_name: Optional[str] = None) -> Tuple[ImportStrategy, float]:
        """Strategy for an explicit format name, or detected when "auto"."""
        if format_name is None:
            format_name = config.DEFAULT_IMPORT_FORMAT

        if format_name != AUTO:
            strategy = self.get_strategy(format_name)
            if strategy is None:
                raise UnsupportedFormatError(format_name)
            return strategy, strategy.get_confidence(content)

        return self.classify(content)

    def parse(
        self,
        content: str,
        format_name: Optional[str] = None,
        source_name: Optional[str] = None,
    ) -> List[EnvironmentRecord]:
        strategy, _ = self.resolve(content, format_name)
        return strategy.parse(content, source_name=source_name)


def create_default_registry() -> FormatRegistry:
    return FormatRegistry([JsonStrategy(), DotenvStrategy(), PostmanStrategy()])


# Built once at import and only read afterwards
_registry = create_default_registry()


def get_registry() -> FormatRegistry:
    """Process-wide registry with the built-in formats"""
    return _registry

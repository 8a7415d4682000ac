"""
Environment import pipeline: detect, parse, validate, check for conflicts.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..models import EnvironmentConflict, EnvironmentRecord, ValidationResult
from .registry import FormatRegistry, get_registry

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Everything an import produced, for the caller to present"""
    format: str
    confidence: float
    environments: List[EnvironmentRecord] = field(default_factory=list)
    validation: ValidationResult = field(default_factory=ValidationResult)
    conflicts: List[EnvironmentConflict] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.validation.is_valid

    def to_dict(self) -> Dict:
        return {
            "success": True,
            "format": self.format,
            "confidence": self.confidence,
            "environments": [env.to_dict() for env in self.environments],
            "warnings": list(self.validation.warnings),
            "errors": list(self.validation.errors),
            "conflicts": [c.to_dict() for c in self.conflicts],
        }


def find_conflicts(
    imported: Sequence[EnvironmentRecord],
    existing: Sequence[EnvironmentRecord],
) -> List[EnvironmentConflict]:
    """Imported environments whose name matches an existing one"""
    by_name = {}
    for env in existing:
        by_name.setdefault(env.name, env)

    conflicts = []
    for env in imported:
        match = by_name.get(env.name)
        if match is not None:
            conflicts.append(
                EnvironmentConflict(
                    environment_name=env.name,
                    existing_id=match.id,
                    imported_environment=env,
                )
            )
    return conflicts


def detect_and_parse(
    content: str,
    format_name: Optional[str] = None,
    existing: Optional[Sequence[EnvironmentRecord]] = None,
    source_name: Optional[str] = None,
    registry: Optional[FormatRegistry] = None,
) -> ImportResult:
    """
    Import environments from raw file content.

    Args:
        content: Raw file content
        format_name: "auto" (default) to detect, or a registered format name
        existing: Already stored environments, used to report name conflicts
        source_name: Source file name, used by formats that name
                     environments after their file
        registry: Registry to use instead of the process-wide one

    Returns:
        ImportResult. Validation problems are reported, not raised.

    Raises:
        UnrecognizedFormatError, UnsupportedFormatError, EnvironmentParseError
    """
    registry = registry or get_registry()
    strategy, confidence = registry.resolve(content, format_name)

    environments = strategy.parse(content, source_name=source_name)
    validation = strategy.validate(environments)
    conflicts = find_conflicts(environments, existing or [])

    logger.debug(
        "Imported %d environment(s) as %s: %d error(s), %d warning(s), %d conflict(s)",
        len(environments),
        strategy.format_name,
        len(validation.errors),
        len(validation.warnings),
        len(conflicts),
    )

    return ImportResult(
        format=strategy.format_name,
        confidence=confidence,
        environments=environments,
        validation=validation,
        conflicts=conflicts,
    )

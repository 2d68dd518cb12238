"""ClassifierConfig, MatchStrategy and CriticalMatch for action classification.

ClassifierConfig is a frozen (immutable) dataclass holding the algorithm
parameters.  MatchStrategy selects how residual nodes are paired: first-fit
greedy (order-dependent) or minimum total difference (Hungarian).
CriticalMatch selects how a difference path is tested against critical
field names.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto


class MatchStrategy(StrEnum):
    """How modified nodes are paired with existing nodes.

    - FIRST_FIT:  Reverse scan, first non-critical candidate wins.
    - MIN_DEGREE: Optimal assignment minimising the summed difference degree.
    """

    FIRST_FIT = auto()
    MIN_DEGREE = auto()


class CriticalMatch(StrEnum):
    """How a difference path is tested against a critical field name.

    - SEGMENT: The last path segment (without ``@``) equals the field name.
    - SUFFIX:  The raw path string ends with the field name.
    """

    SEGMENT = auto()
    SUFFIX = auto()


@dataclass(frozen=True, slots=True)
class ClassifierConfig:
    """Immutable configuration for difference scoring and classification.

    Attributes:
        strategy: Pairing strategy used by the classifier.
        critical_match: How difference paths are tested against critical
            field names.
        strip_text: When True, element text is compared after ``str.strip()``.
    """

    strategy: MatchStrategy = MatchStrategy.FIRST_FIT
    critical_match: CriticalMatch = CriticalMatch.SEGMENT
    strip_text: bool = True

    def __post_init__(self) -> None:
        # Accept plain strings ("min_degree") and store the enum member.
        try:
            object.__setattr__(self, "strategy", MatchStrategy(self.strategy))
        except ValueError:
            msg = (
                f"strategy must be one of {[m.value for m in MatchStrategy]}, "
                f"got {self.strategy!r}"
            )
            raise ValueError(msg) from None
        try:
            object.__setattr__(
                self, "critical_match", CriticalMatch(self.critical_match)
            )
        except ValueError:
            msg = (
                f"critical_match must be one of {[m.value for m in CriticalMatch]}, "
                f"got {self.critical_match!r}"
            )
            raise ValueError(msg) from None
        if not isinstance(self.strip_text, bool):
            msg = f"strip_text must be a bool, got {self.strip_text!r}"
            raise ValueError(msg)

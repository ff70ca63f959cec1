"""Sequential transform pipeline over single comment records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence, Union

from docforest.entities.core import Comment
from docforest.utils.logging import get_logger

_LOGGER = get_logger(module=__name__)


@dataclass(frozen=True, slots=True)
class Keep:
    """Continue processing with ``comment``."""

    comment: Comment


@dataclass(frozen=True, slots=True)
class Drop:
    """Stop processing; the record is removed from further stages."""

    reason: str = "dropped"


StageResult = Union[Keep, Drop]
Stage = Callable[[Comment], StageResult]


def stage_name(stage: Stage) -> str:
    return getattr(stage, "name", None) or getattr(stage, "__name__", type(stage).__name__)


@dataclass(slots=True)
class Pipeline:
    """Compose stages left to right into a single function over one record.

    ``None`` entries are ignored so optional stages can be written inline.
    The pipeline holds no state between records.
    """

    stages: Sequence[Optional[Stage]] = ()
    name: str = "docforest-pipeline"
    _active: List[Stage] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._active = [stage for stage in self.stages if stage is not None]

    @property
    def stage_names(self) -> List[str]:
        return [stage_name(stage) for stage in self._active]

    def __call__(self, comment: Comment) -> StageResult:
        result: StageResult = Keep(comment)
        for stage in self._active:
            result = stage(result.comment)
            if isinstance(result, Drop):
                _LOGGER.debug(
                    "Comment dropped by stage",
                    pipeline=self.name,
                    stage=stage_name(stage),
                    reason=result.reason,
                    file=comment.context.file,
                    line=comment.context.line,
                )
                return result
        return result

    def run(self, comments: Iterable[Comment]) -> List[Comment]:
        """Apply the pipeline to each record, keeping survivors in input order."""

        kept: List[Comment] = []
        dropped = 0
        for comment in comments:
            result = self(comment)
            if isinstance(result, Keep):
                kept.append(result.comment)
            else:
                dropped += 1
        _LOGGER.debug(
            "Pipeline run completed",
            pipeline=self.name,
            kept=len(kept),
            dropped=dropped,
        )
        return kept


__all__ = ["Keep", "Drop", "Stage", "StageResult", "Pipeline", "stage_name"]

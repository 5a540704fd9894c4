"""Sequential provisioning pipeline with per-stage failure isolation.

A pipeline runs an ordered list of stages against one shared
:class:`PipelineContext`. Each stage may be disabled by its ``enabled``
predicate, and a failing stage either aborts the run or, when it is
marked skippable, is recorded as failed while the run carries on:

    pipeline = Pipeline(observer=print)
    context = pipeline.run([
        PipelineStage("Copy template", copy_template),
        PipelineStage("Install dependencies", install, skippable=True),
    ])

The pipeline prints nothing itself. Progress goes to the optional observer
as :class:`StageReport` snapshots, one per state transition.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional

from kangapp.core.logger import get_logger

logger = get_logger(__name__)


class StageState(str, Enum):
    """Lifecycle state of a stage within one run."""

    ENABLED = "enabled"
    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class StageSkipped(Exception):
    """Raised by a stage action to skip the rest of its work with a reason."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class PipelineAbortError(Exception):
    """Raised when a non-skippable stage fails.

    Attributes:
        stage: Title of the failing stage
        error: Exception raised by the stage action (also the ``__cause__``)
        context: Context as it was when the run stopped
    """

    def __init__(self, stage: str, error: BaseException, context: "PipelineContext"):
        self.stage = stage
        self.error = error
        self.context = context
        super().__init__(f"{stage}: {error}")


class PipelineContext(Mapping[str, Any]):
    """Shared key/value record threaded through the stages of one run.

    Keys are never removed. Rewriting a key is allowed only with a value of
    the same type, so a stage cannot turn ``context["npm"] = False`` into a
    string or a dict behind another stage's back.
    """

    def __init__(self):
        self._values: Dict[str, Any] = {}

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if key in self._values:
            current = self._values[key]
            if type(current) is not type(value):
                raise TypeError(
                    f"Context key '{key}' holds {type(current).__name__}, "
                    f"refusing to overwrite it with {type(value).__name__}"
                )
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        raise TypeError(f"Context key '{key}' cannot be deleted")

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"PipelineContext({self._values!r})"


def _always(context: PipelineContext) -> bool:
    return True


@dataclass
class PipelineStage:
    """One unit of work in a pipeline.

    Attributes:
        title: Human-readable stage name
        action: Callable receiving the shared context
        enabled: Predicate deciding whether the stage runs at all
        skippable: When True, a failure is recorded and the run continues
    """

    title: str
    action: Callable[[PipelineContext], Any]
    enabled: Callable[[PipelineContext], bool] = _always
    skippable: bool = False


@dataclass
class StageReport:
    """Progress record for a stage."""

    title: str
    state: StageState
    error_detail: Optional[str] = None


Observer = Callable[[StageReport], None]


class Pipeline:
    """Runs stages strictly in order against a fresh context."""

    def __init__(self, observer: Optional[Observer] = None):
        self.observer = observer
        self.reports: List[StageReport] = []

    def _emit(self, report: StageReport) -> None:
        if self.observer is not None:
            self.observer(replace(report))

    def run(self, stages: Iterable[PipelineStage]) -> PipelineContext:
        """Run stages and return the final context.

        Raises:
            PipelineAbortError: If a non-skippable stage's action raises
        """
        context = PipelineContext()
        self.reports = []

        for stage in stages:
            report = StageReport(stage.title, StageState.ENABLED)
            self.reports.append(report)

            if not stage.enabled(context):
                report.state = StageState.SKIPPED
                logger.debug(f"Stage disabled: {stage.title}")
                self._emit(report)
                continue

            logger.debug(f"Stage started: {stage.title}")
            self._emit(report)

            try:
                stage.action(context)
            except StageSkipped as skip:
                report.state = StageState.SKIPPED
                report.error_detail = skip.reason
                logger.debug(f"Stage skipped: {stage.title} ({skip.reason})")
                self._emit(report)
                continue
            except Exception as e:
                report.state = StageState.FAILED
                report.error_detail = str(e)
                self._emit(report)
                if not stage.skippable:
                    logger.debug(f"Stage failed, aborting: {stage.title}", exc_info=True)
                    raise PipelineAbortError(stage.title, e, context) from e
                logger.debug(f"Skippable stage failed: {stage.title}", exc_info=True)
                continue

            report.state = StageState.SUCCEEDED
            logger.debug(f"Stage succeeded: {stage.title}")
            self._emit(report)

        return context

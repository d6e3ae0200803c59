"""UI Handler - the per-request generation pipeline."""

import time
from collections.abc import Iterator
from contextlib import contextmanager

import pydantic
from pydantic import BaseModel, Field

from intentui.core import (
    GenerationError,
    IntentRequest,
    LogContext,
    PipelineError,
    Settings,
    Stage,
    get_logger,
    get_settings,
    trace_operation,
)
from intentui.agents import Explainer, IntentPlanner, Plan, PlanValidator
from intentui.codegen import CodeCompiler, CodeParser, CodePatcher, OutputValidator, TreeDiffer
from intentui.monitoring import metrics_collector


logger = get_logger(__name__)


class GenerationResult(BaseModel):
    """Pipeline output."""

    plan: Plan
    code: str
    explanation: str
    patched: bool = Field(default=False, description="Code came from patching, not a full compile")


class UIPipeline:
    """
    Runs one request: plan, validate, patch or compile, safety check, explain.

    Holds no state between requests; build one per request or share it freely.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.planner = IntentPlanner()
        self.compiler = CodeCompiler(self.settings.component_name, self.settings.component_import_path)
        self.parser = CodeParser()
        self.differ = TreeDiffer(self.settings.patch_strategy)
        self.patcher = CodePatcher(self.compiler)
        self.output_validator = OutputValidator(self.settings.component_import_path)
        self.explainer = Explainer(self.settings.max_explanation_words)

    def run(
        self,
        intent: str,
        previous_plan: Plan | None = None,
        previous_code: str | None = None,
    ) -> GenerationResult:
        """
        Generate or update a UI.

        Args:
            intent: Free-text instruction
            previous_plan: Plan to mutate; None generates from scratch
            previous_code: Text compiled from ``previous_plan``, patched in place when given

        Returns:
            Plan, code, explanation and whether the code was patched

        Raises:
            PipelineError: Naming the stage that failed
        """
        mode = "modify" if previous_plan is not None else "create"
        start_time = time.perf_counter()

        try:
            with LogContext(mode=mode):
                result = self._run(intent, previous_plan, previous_code)
        except PipelineError as e:
            metrics_collector.record_request("error", mode)
            metrics_collector.record_error(e.stage.value)
            logger.error("pipeline_failed", stage=e.stage.value, error=str(e.cause))
            raise

        metrics_collector.record_request("success", mode)
        logger.info(
            "pipeline_complete",
            mode=mode,
            patched=result.patched,
            modifications=len(result.plan.modifications),
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        return result

    def _run(self, intent: str, previous_plan: Plan | None, previous_code: str | None) -> GenerationResult:
        with self._stage(Stage.VALIDATION):
            try:
                message = IntentRequest(message=intent).message
            except pydantic.ValidationError as e:
                raise PipelineError(Stage.VALIDATION, ValueError(e.errors()[0]["msg"])) from e

        with self._stage(Stage.PLANNING):
            plan = self.planner.plan(message, previous_plan)

        with self._stage(Stage.VALIDATION):
            PlanValidator.validate(plan)

        with self._stage(Stage.GENERATION):
            code, patched = self._generate(plan, previous_code)

        with self._stage(Stage.SAFETY):
            self.output_validator.check(code)

        with self._stage(Stage.EXPLANATION):
            explanation = self.explainer.explain(message, plan, plan.modifications)

        return GenerationResult(plan=plan, code=code, explanation=explanation, patched=patched)

    def _generate(self, plan: Plan, previous_code: str | None) -> tuple[str, bool]:
        """Patch the previous code when possible, otherwise compile from the plan."""
        if previous_code and self.settings.enable_patching:
            try:
                return self.patch(previous_code, plan), True
            except Exception as e:
                # Partial patch output is discarded; the compiled text is authoritative
                metrics_collector.record_patch_fallback()
                logger.warning("patch_fallback", error=str(e), error_type=type(e).__name__)

        return self.compiler.compile(plan), False

    def patch(self, code: str, plan: Plan) -> str:
        """
        Patch previously compiled code towards a plan.

        Raises:
            GenerationError: If the code cannot be patched
        """
        forest = self.parser.parse(code)
        operations = self.differ.diff(forest, plan)
        patched = self.patcher.apply_all(code, operations)

        for op in operations:
            metrics_collector.record_patch_operation(op.kind.value)
        if not patched.strip():
            raise GenerationError("Patching produced empty code")
        return patched

    @contextmanager
    def _stage(self, stage: Stage) -> Iterator[None]:
        """Trace one stage and wrap its failures in a stage-qualified error."""
        try:
            with metrics_collector.measure_duration(lambda d: metrics_collector.record_stage(stage.value, d)):
                with trace_operation(stage.value):
                    yield
        except PipelineError:
            raise
        except Exception as e:
            raise PipelineError(stage, e) from e


def generate(intent: str, previous_plan: Plan | None = None, previous_code: str | None = None) -> GenerationResult:
    """Functional entry point."""
    return UIPipeline().run(intent, previous_plan, previous_code)

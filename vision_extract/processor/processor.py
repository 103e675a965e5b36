from pathlib import Path
from typing import TYPE_CHECKING

from vision_extract.audit.logger import AuditLogger
from vision_extract.config.settings import Settings
from vision_extract.environment.validator import EnvironmentValidator
from vision_extract.image.inspector import ImageInspector
from vision_extract.image.normalizer import ImageNormalizer
from vision_extract.inference.factory import InferenceClientFactory
from vision_extract.logging.logger import Log
from vision_extract.processor.pipeline import PipelineContext, PipelineStep
from vision_extract.processor.steps import (
    BuildRequestStep,
    ExtractTextStep,
    InspectImageStep,
    NormalizeImageStep,
    ProbeModelStep,
    WriteAuditStep,
)
from vision_extract.request.builder import RequestBuilder

if TYPE_CHECKING:
    import httpx

CREDENTIAL_ENV_VAR = "OPENAI_API_KEY"


class Processor:
    """Runs the extraction pipeline for one image.

    Pipeline: inspect -> normalize -> build -> probe -> extract -> audit.
    Temporary artifacts live on the context's ExitStack and are released
    when ``process`` returns or raises, including on KeyboardInterrupt.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(self, image_path: Path) -> PipelineContext:
        Log.info(f"Processing image {image_path}")
        context = PipelineContext(image_path=image_path)
        with context.resources:
            try:
                for step in self._steps:
                    context = step.run(context)
            except (Exception, KeyboardInterrupt) as exc:
                context.error = exc
                context.error_message = str(exc) or type(exc).__name__
                self._run_failed_step(context)
                raise
        return context

    def _run_failed_step(self, context: PipelineContext) -> None:
        try:
            self._failed_step.run(context)
        except OSError as exc:
            Log.error(f"Could not write audit record: {exc}")


def build_processor(
    settings: Settings,
    http_client: "httpx.Client | None" = None,
) -> Processor:
    """Validate the environment, then build a Processor with all required adapters.

    Raises:
        EnvironmentValidationError: listing every missing requirement.
    """
    credentials: dict[str, str] = {}
    if InferenceClientFactory.requires_credential(settings):
        credentials[CREDENTIAL_ENV_VAR] = settings.openai_api_key
    validator = EnvironmentValidator(
        credentials=credentials,
        executables=settings.required_executables,
        modules=settings.required_modules,
    )
    # Adapters load Pillow and the OpenAI SDK, so nothing is built before validation.
    validator.validate()
    Log.info("Environment validated")

    client = InferenceClientFactory.create(settings, http_client=http_client)
    builder = RequestBuilder(
        model=settings.openai_model_name,
        temperature=settings.openai_temperature,
        max_tokens=settings.openai_max_tokens,
        prompt_path=settings.extraction_prompt_path,
    )
    audit_step = WriteAuditStep(
        AuditLogger(settings.audit_log_dir, redact_values=[settings.openai_api_key])
    )

    steps: list[PipelineStep] = [
        InspectImageStep(ImageInspector()),
        NormalizeImageStep(
            ImageNormalizer(
                max_dimension=settings.max_image_dimension,
                temp_dir=settings.temp_dir,
            )
        ),
        BuildRequestStep(builder),
    ]
    if settings.verify_model:
        steps.append(ProbeModelStep(client))
    steps.extend([ExtractTextStep(client), audit_step])
    return Processor(steps=steps, failed_step=audit_step)

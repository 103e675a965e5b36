from vision_extract.audit.logger import AuditLogger
from vision_extract.exceptions import (
    InferenceAPIError,
    InferenceResponseError,
)
from vision_extract.image.inspector import ImageInspector
from vision_extract.image.normalizer import ImageNormalizer
from vision_extract.inference.client_base import BaseInferenceClient
from vision_extract.logging.logger import Log
from vision_extract.processor.pipeline import PipelineContext, PipelineStep
from vision_extract.request.builder import RequestBuilder


class InspectImageStep(PipelineStep):
    def __init__(self, inspector: ImageInspector) -> None:
        self._inspector = inspector

    def run(self, context: PipelineContext) -> PipelineContext:
        context.asset = self._inspector.inspect(context.image_path)
        Log.info(
            f"Inspected {context.image_path.name}: {context.asset.format} "
            f"{context.asset.width}x{context.asset.height}"
        )
        return context


class NormalizeImageStep(PipelineStep):
    def __init__(self, normalizer: ImageNormalizer) -> None:
        self._normalizer = normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.asset is None:
            raise ValueError("PipelineContext.asset must be set before normalization")
        context.image = self._normalizer.normalize(context.asset, context.resources)
        return context


class BuildRequestStep(PipelineStep):
    def __init__(self, builder: RequestBuilder) -> None:
        self._builder = builder

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.image is None:
            raise ValueError("PipelineContext.image must be set before building the request")
        context.request = self._builder.build(context.image)
        return context


class ProbeModelStep(PipelineStep):
    """Fails before the extraction call if the model is not served."""

    def __init__(self, client: BaseInferenceClient) -> None:
        self._client = client

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.request is None:
            raise ValueError("PipelineContext.request must be set before the model probe")
        model = context.request.request.model
        context.available_models = self._client.list_models()
        if model not in context.available_models:
            alternatives = ", ".join(sorted(context.available_models)) or "(none)"
            raise InferenceAPIError(
                f"Model '{model}' is not available. Available models: {alternatives}",
                available_models=context.available_models,
            )
        Log.info(f"Model {model} is available")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, client: BaseInferenceClient) -> None:
        self._client = client

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.request is None:
            raise ValueError("PipelineContext.request must be set before extraction")
        context.result = self._client.extract(context.request.body)
        Log.info(f"Extracted {len(context.result.content)} chars of text")
        return context


class WriteAuditStep(PipelineStep):
    """Persists the audit record on success and, as the failure step, on error."""

    def __init__(self, audit_logger: AuditLogger) -> None:
        self._audit_logger = audit_logger

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.request is None or context.audit_record is not None:
            return context
        raw_response = context.result.raw_body if context.result else None
        text = context.result.content if context.result else None
        if raw_response is None and isinstance(
            context.error, (InferenceAPIError, InferenceResponseError)
        ):
            raw_response = context.error.body or None
        context.audit_record = self._audit_logger.record(
            context.request,
            raw_response=raw_response,
            text=text,
            error=context.error,
        )
        context.audit_paths = self._audit_logger.write(
            context.audit_record,
            extra_redact_values=context.request.image_data,
        )
        return context

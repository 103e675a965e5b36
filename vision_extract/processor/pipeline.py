from abc import ABC, abstractmethod
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path

from vision_extract.audit.models import AuditPaths, AuditRecord
from vision_extract.image.models import ImageAsset, NormalizedImage
from vision_extract.inference.models import InferenceResult
from vision_extract.request.models import SerializedRequest


@dataclass(slots=True)
class PipelineContext:
    image_path: Path
    resources: ExitStack = field(default_factory=ExitStack)
    asset: ImageAsset | None = None
    image: NormalizedImage | None = None
    request: SerializedRequest | None = None
    available_models: list[str] = field(default_factory=list)
    result: InferenceResult | None = None
    audit_record: AuditRecord | None = None
    audit_paths: AuditPaths | None = None
    error: BaseException | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

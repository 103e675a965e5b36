from vision_extract.inference.client_base import BaseInferenceClient
from vision_extract.inference.factory import InferenceClientFactory
from vision_extract.inference.models import InferenceResult

__all__ = ["BaseInferenceClient", "InferenceClientFactory", "InferenceResult"]

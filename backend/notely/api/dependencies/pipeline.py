"""
Pipeline dependency for AI routes.
"""
import logging
from functools import partial

from notely.core.constants import AIModels
from notely.services.ai_provider import get_ai_provider
from notely.services.transformation_pipeline import TransformationPipeline


def get_pipeline() -> TransformationPipeline:
    """Build a pipeline bound to the shared AI provider.

    Section rewrites use the transform model and label picking uses the
    classify model. The pipeline is stateless, so a fresh one per request is
    fine; tests override this dependency with a pipeline around a fake
    ``generate``.
    """
    provider = get_ai_provider()
    return TransformationPipeline(
        generate=partial(provider.generate_text, model=AIModels.TRANSFORM_MODEL),
        logger=logging.getLogger("notely.pipeline"),
        classify=partial(provider.generate_text, model=AIModels.CLASSIFY_MODEL)
    )

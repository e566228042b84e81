from parody.services.pipeline import (
    ParodyPipeline,
    get_parody_pipeline,
    get_preview_store,
    get_roast_pipeline,
    reset_pipelines,
)
from parody.services.preview_store import (
    InMemoryPreviewStore,
    PreviewStore,
    SupabasePreviewStore,
)

__all__ = [
    # Parody pipeline
    "ParodyPipeline",
    "get_parody_pipeline",
    "get_roast_pipeline",
    "reset_pipelines",
    # Preview store
    "InMemoryPreviewStore",
    "PreviewStore",
    "SupabasePreviewStore",
    "get_preview_store",
]

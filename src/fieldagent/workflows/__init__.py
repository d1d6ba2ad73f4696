"""End-to-end upload workflows: create upload slots, upload, finalize."""

from fieldagent.workflows._shared import WorkflowResult
from fieldagent.workflows.feature_sets import import_feature_set, upsert_feature_set
from fieldagent.workflows.files import import_file, upsert_file
from fieldagent.workflows.images import upsert_images
from fieldagent.workflows.mosaics import upsert_mosaic

__all__ = [
    "WorkflowResult",
    "import_feature_set",
    "import_file",
    "upsert_feature_set",
    "upsert_file",
    "upsert_images",
    "upsert_mosaic",
]

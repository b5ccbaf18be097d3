"""
Pure projection of a pipeline snapshot into what a UI should show.

render() never touches the controller; the same snapshot always yields the
same view.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .codec import asset_to_data_url
from .types import PipelineSnapshot, PipelineState

EMPTY_PREVIEW_TEXT = "Preview will appear here"


class PipelineView(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: PipelineState
    show_dropzone: bool = Field(..., description="No image loaded; offer the upload area")
    can_remove: bool = Field(..., description="The remove-background action is available")
    is_processing: bool
    can_download: bool
    can_reset: bool
    status_title: Optional[str] = None
    status_detail: Optional[str] = None
    preview_url: Optional[str] = Field(None, description="data: URL of the result, else of the source")
    preview_placeholder: Optional[str] = None
    preview_dimmed: bool = False
    overlay_text: Optional[str] = None
    badge: Optional[str] = None
    error_message: Optional[str] = None


def render(snapshot: PipelineSnapshot) -> PipelineView:
    state = snapshot.state
    has_source = snapshot.source is not None
    processing = state is PipelineState.PROCESSING

    if snapshot.result is not None:
        preview_url = asset_to_data_url(snapshot.result)
    elif has_source:
        preview_url = asset_to_data_url(snapshot.source)
    else:
        preview_url = None

    if processing:
        status_title, status_detail = "Processing with AI...", None
    elif has_source:
        status_title, status_detail = "Image Loaded", "Ready for processing"
    else:
        status_title, status_detail = None, None

    return PipelineView(
        state=state,
        show_dropzone=not has_source,
        can_remove=state in (PipelineState.LOADED, PipelineState.FAILED),
        is_processing=processing,
        can_download=state is PipelineState.SUCCEEDED,
        can_reset=has_source,
        status_title=status_title,
        status_detail=status_detail,
        preview_url=preview_url,
        preview_placeholder=None if preview_url else EMPTY_PREVIEW_TEXT,
        preview_dimmed=processing,
        overlay_text="Analyzing Subject..." if processing else None,
        badge="BACKGROUND REMOVED" if state is PipelineState.SUCCEEDED else None,
        error_message=snapshot.error.message if snapshot.error else None,
    )

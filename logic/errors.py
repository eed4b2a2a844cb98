"""Error taxonomy for wardrobe workflows.

Everything deriving from :class:`WardrobeError` is recoverable and is turned
into a user-facing notification at a workflow boundary.
:class:`DuplicateIdentifier` is a store invariant violation and is never
caught.
"""

from __future__ import annotations


class WardrobeError(Exception):
    """Base class for recoverable wardrobe failures."""

    reason = "wardrobe_error"


class ClassificationFailed(WardrobeError):
    reason = "classification_failed"


class UnreadableImage(ClassificationFailed):
    """The supplied image reference could not be decoded or fetched."""

    reason = "unreadable_image"


class RecommendationFailed(WardrobeError):
    reason = "recommendation_failed"


class MalformedResponse(ClassificationFailed, RecommendationFailed):
    """An upstream payload did not match the expected shape."""

    reason = "malformed_response"


class VisualizationFailed(WardrobeError):
    reason = "visualization_failed"


class NoImageProduced(VisualizationFailed):
    reason = "no_image_produced"


class WorkflowStateError(WardrobeError):
    """The workflow is not in a state that accepts the request."""

    reason = "invalid_state"


class WorkflowBusy(WorkflowStateError):
    """A call for this workflow instance is already in flight."""

    reason = "busy"


class AuthenticationFailed(WardrobeError):
    reason = "authentication_failed"


class UsernameTaken(AuthenticationFailed):
    reason = "username_taken"


class DuplicateIdentifier(RuntimeError):
    """An item id already exists in the store."""


__all__ = [
    "WardrobeError",
    "ClassificationFailed",
    "UnreadableImage",
    "RecommendationFailed",
    "MalformedResponse",
    "VisualizationFailed",
    "NoImageProduced",
    "WorkflowStateError",
    "WorkflowBusy",
    "AuthenticationFailed",
    "UsernameTaken",
    "DuplicateIdentifier",
]

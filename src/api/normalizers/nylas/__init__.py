"""Normalizer Nylas — classificação e resumos de notificações v3."""

from .classifier import (
    TRANSFORMATION_MARKER,
    build_notification,
    canonical_category,
    classify_notification,
)
from .summaries import (
    SummaryGroup,
    summarize_event_created,
    summarize_message_created,
    summarize_message_updated,
)

__all__ = [
    "TRANSFORMATION_MARKER",
    "SummaryGroup",
    "build_notification",
    "canonical_category",
    "classify_notification",
    "summarize_event_created",
    "summarize_message_created",
    "summarize_message_updated",
]

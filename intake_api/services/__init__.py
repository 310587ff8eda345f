# intake_api/services/__init__.py
"""
Lead normalization, scoring and masking, plus the persistence service that
ties them to the HTTP layer.
"""

from intake_api.services.masking import MaskKind, mask, mask_amount, mask_email, mask_phone
from intake_api.services.scoring import Classification, LeadTier, classify, summarize
from intake_api.services.taxonomy import clean_submission, normalize_source

__all__ = [
    # Taxonomy
    "clean_submission",
    "normalize_source",
    # Scoring
    "Classification",
    "LeadTier",
    "classify",
    "summarize",
    # Masking
    "MaskKind",
    "mask",
    "mask_amount",
    "mask_email",
    "mask_phone",
]

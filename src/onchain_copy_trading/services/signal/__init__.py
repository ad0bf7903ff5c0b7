"""Signal detection: leg classification and the detector pass."""

from onchain_copy_trading.services.signal.classifier import (
    LegClassification,
    LegKind,
    classify_legs,
)
from onchain_copy_trading.services.signal.dto import BuySignal, DetectionPassResult
from onchain_copy_trading.services.signal.signal_detector import SignalDetectorService

__all__ = [
    "BuySignal",
    "DetectionPassResult",
    "LegClassification",
    "LegKind",
    "SignalDetectorService",
    "classify_legs",
]

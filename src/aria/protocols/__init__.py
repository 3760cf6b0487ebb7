"""Protocol definitions for extensible components."""

from aria.protocols.extractor import Extractor
from aria.protocols.service import AnalysisService
from aria.protocols.truncator import Truncator

__all__ = ["Extractor", "AnalysisService", "Truncator"]

from .render import LinkRendererProtocol
from .text import LineExtractorProtocol, LineShifterProtocol, ShiftParserProtocol

__all__ = [
    'LinkRendererProtocol',
    'LineExtractorProtocol',
    'LineShifterProtocol',
    'ShiftParserProtocol',
]

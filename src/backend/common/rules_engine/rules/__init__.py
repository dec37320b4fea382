# Declaration order here is the evaluation order of the runner.
from .cognitive_load import COGNITIVE_LOAD
from .fitts_law import FITTS_LAW
from .hicks_law import HICKS_LAW
from .progressive_disclosure import PROGRESSIVE_DISCLOSURE
from .prerequisite_flow import PREREQUISITE_FLOW
from .error_prevention import ERROR_PREVENTION
from .feedback import FEEDBACK
from .navigation_target import NAVIGATION_TARGET

__all__ = [
    "COGNITIVE_LOAD",
    "FITTS_LAW",
    "HICKS_LAW",
    "PROGRESSIVE_DISCLOSURE",
    "PREREQUISITE_FLOW",
    "ERROR_PREVENTION",
    "FEEDBACK",
    "NAVIGATION_TARGET",
]
